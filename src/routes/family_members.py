# src/routes/family_members.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
from core.dependencies import Principal, get_current_principal
from db.database import get_db
from schemas.base_schemas import ApiEnvelope
from schemas.family_member_schemas import (
    FamilyMemberCreate,
    FamilyMemberPublic,
    FamilyMemberUpdate,
)
from services.family_member_service import family_member_service
from utils.responses import api_response

router = APIRouter(prefix="/patient/family", tags=["family-members"])


@router.post(
    "",
    response_model=ApiEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Add family member",
)
async def add_family_member(
    member_in: FamilyMemberCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    member = await family_member_service.add(db, principal, member_in)
    return api_response(
        FamilyMemberPublic.model_validate(member),
        "Family member added successfully",
        status.HTTP_201_CREATED,
    )


@router.get("", response_model=ApiEnvelope, summary="List family members")
async def list_family_members(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    members = await family_member_service.list_for_caller(db, principal)
    return api_response(
        [FamilyMemberPublic.model_validate(m) for m in members],
        "Family members retrieved successfully",
    )


@router.get("/{member_id}", response_model=ApiEnvelope, summary="Get family member")
async def get_family_member(
    member_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    member = await family_member_service.get(db, principal, member_id)
    return api_response(
        FamilyMemberPublic.model_validate(member), "Family member retrieved successfully"
    )


@router.put(
    "/{member_id}",
    response_model=ApiEnvelope,
    summary="Update family member",
    description="Partial update; omitted fields keep their values",
)
async def update_family_member(
    member_id: int,
    member_in: FamilyMemberUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    member = await family_member_service.update(db, principal, member_id, member_in)
    return api_response(
        FamilyMemberPublic.model_validate(member), "Family member updated successfully"
    )


@router.delete("/{member_id}", response_model=ApiEnvelope, summary="Delete family member")
async def delete_family_member(
    member_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> Any:
    await family_member_service.delete(db, principal, member_id)
    return api_response(None, "Family member deleted successfully")
