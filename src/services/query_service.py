# src/services/query_service.py
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from core.dependencies import Principal
from core.policy import DOCTOR, PATIENT, USER, Action
from models.query import Query, QueryRole
from schemas.query_schemas import QueryCreate, QueryEdit
from utils.exceptions import ForbiddenException, NotFoundException
from utils.logger import setup_logger
from .base_service import BaseService

logger = setup_logger("QUERY_SERVICE")

# Token roles that may author queries, and the inbox they land in
QUERY_ROLES = {
    USER: QueryRole.USER,
    PATIENT: QueryRole.USER,
    DOCTOR: QueryRole.DOCTOR,
}


def normalize_role(role: str) -> Optional[QueryRole]:
    return QUERY_ROLES.get(role)


class QueryService(BaseService):
    def __init__(self):
        super().__init__(Query)

    async def create(
        self, db: AsyncSession, principal: Principal, query_in: QueryCreate
    ) -> Query:
        role = normalize_role(principal.role)
        if role is None:
            raise ForbiddenException("Only users and doctors can submit queries")
        query = Query(user_id=principal.user_id, role=role, **query_in.model_dump())
        query = await self.save(db, query)
        logger.info(f"Query {query.id} submitted by user {principal.user_id} ({role.value})")
        return query

    async def list_all(self, db: AsyncSession) -> List[Query]:
        result = await db.execute(
            select(Query).order_by(Query.created_at.desc(), Query.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_role(
        self, db: AsyncSession, principal: Principal
    ) -> List[Query]:
        """Queries submitted under the caller's own role"""
        role = normalize_role(principal.role)
        if role is None:
            raise ForbiddenException("Access denied")
        result = await db.execute(
            select(Query)
            .where(Query.role == role)
            .order_by(Query.created_at.desc(), Query.id.desc())
        )
        return list(result.scalars().all())

    async def edit(
        self, db: AsyncSession, principal: Principal, query_id: int, query_in: QueryEdit
    ) -> Query:
        query = await self.get(db, query_id)
        if query is None or (
            query.user_id != principal.user_id
            and not principal.can(Action.MANAGE_ANY_QUERY)
        ):
            raise NotFoundException("Query not found")
        return await self.apply_update(db, query, {"message": query_in.message})


query_service = QueryService()
