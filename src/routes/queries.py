# src/routes/queries.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
from core.config import settings
from core.dependencies import Principal, RoleChecker, get_current_principal
from core.policy import Action
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.query_schemas import QueryCreate, QueryEdit, QueryPublic
from services.query_service import query_service
from utils.rate_limiter import limiter
from utils.responses import api_response

router = APIRouter(prefix="/query", tags=["queries"])


@router.post(
    "/create",
    response_model=ApiEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a query",
    description="Contact inbox entry from a user or doctor; rate limited per client",
)
@limiter.limit(settings.QUERY_CREATE_RATE_LIMIT)
async def create_query(
    request: Request,
    query_in: QueryCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(RoleChecker(Action.CREATE_QUERY)),
) -> Any:
    query = await query_service.create(db, principal, query_in)
    return api_response(
        QueryPublic.model_validate(query),
        "Query submitted successfully",
        status.HTTP_201_CREATED,
    )


@router.get("/all", response_model=ApiEnvelope, summary="List all queries")
async def list_all_queries(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(RoleChecker(Action.LIST_ALL_QUERIES)),
) -> Any:
    queries = await query_service.list_all(db)
    return api_response(
        [QueryPublic.model_validate(q) for q in queries],
        "Queries retrieved successfully",
    )


@router.get(
    "/by-role",
    response_model=ApiEnvelope,
    summary="List queries for my role",
    description="Queries submitted under the caller's role (patients count as users)",
)
async def list_queries_by_role(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    queries = await query_service.list_by_role(db, principal)
    return api_response(
        [QueryPublic.model_validate(q) for q in queries],
        "Queries retrieved successfully",
    )


@router.put("/edit/{query_id}", response_model=ApiEnvelope, summary="Edit query message")
async def edit_query(
    query_id: int,
    query_in: QueryEdit,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    query = await query_service.edit(db, principal, query_id, query_in)
    return api_response(QueryPublic.model_validate(query), "Query updated successfully")
