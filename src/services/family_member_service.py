# src/services/family_member_service.py
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from core.dependencies import Principal
from models.family_member import FamilyMember
from schemas.base_schemas import partial_update_data
from schemas.family_member_schemas import FamilyMemberCreate, FamilyMemberUpdate
from services.ownership_service import ownership_service
from utils.exceptions import BadRequestException
from utils.logger import setup_logger
from .base_service import BaseService

logger = setup_logger("FAMILY_MEMBER_SERVICE")

REQUIRED_FIELDS = ("name", "date_of_birth", "gender", "relation")


class FamilyMemberService(BaseService):
    def __init__(self):
        super().__init__(FamilyMember)

    async def add(
        self, db: AsyncSession, principal: Principal, member_in: FamilyMemberCreate
    ) -> FamilyMember:
        patient = await ownership_service.get_patient_for(db, principal)
        member = FamilyMember(patient_id=patient.id, **member_in.model_dump())
        member = await self.save(db, member)
        logger.info(f"Added family member {member.id} to patient {patient.id}")
        return member

    async def list_for_caller(
        self, db: AsyncSession, principal: Principal
    ) -> List[FamilyMember]:
        patient = await ownership_service.get_patient_for(db, principal)
        result = await db.execute(
            select(FamilyMember)
            .where(FamilyMember.patient_id == patient.id)
            .order_by(FamilyMember.created_at.desc(), FamilyMember.id.desc())
        )
        return list(result.scalars().all())

    async def get(
        self, db: AsyncSession, principal: Principal, member_id: int
    ) -> FamilyMember:
        return await ownership_service.get_family_member(db, principal, member_id)

    async def update(
        self,
        db: AsyncSession,
        principal: Principal,
        member_id: int,
        member_in: FamilyMemberUpdate,
    ) -> FamilyMember:
        member = await ownership_service.get_family_member(db, principal, member_id)
        data = partial_update_data(member_in)
        for field in REQUIRED_FIELDS:
            if field in data and data[field] is None:
                raise BadRequestException(f"{field} cannot be null")
        return await self.apply_update(db, member, data)

    async def delete(
        self, db: AsyncSession, principal: Principal, member_id: int
    ) -> None:
        member = await ownership_service.get_family_member(db, principal, member_id)
        await self.hard_delete(db, member)


family_member_service = FamilyMemberService()
