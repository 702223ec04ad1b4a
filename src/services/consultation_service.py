# src/services/consultation_service.py
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from core.dependencies import Principal
from models.consultation_report import ConsultationReport
from schemas.base_schemas import partial_update_data
from schemas.consultation_schemas import (
    ConsultationReportCreate,
    ConsultationReportUpdate,
)
from services.ownership_service import ownership_service
from utils.exceptions import BadRequestException
from utils.logger import setup_logger
from .base_service import BaseService

logger = setup_logger("CONSULTATION_SERVICE")

REQUIRED_FIELDS = ("doctor_name", "consultation_date", "diagnosis")


class ConsultationService(BaseService):
    def __init__(self):
        super().__init__(ConsultationReport)

    async def add(
        self,
        db: AsyncSession,
        principal: Principal,
        report_in: ConsultationReportCreate,
    ) -> ConsultationReport:
        patient = await ownership_service.get_patient_for(db, principal)
        report = ConsultationReport(patient_id=patient.id, **report_in.model_dump())
        report = await self.save(db, report)
        logger.info(f"Added consultation report {report.id} for patient {patient.id}")
        return report

    async def list_for_caller(
        self, db: AsyncSession, principal: Principal
    ) -> List[ConsultationReport]:
        """Newest consultation first"""
        patient = await ownership_service.get_patient_for(db, principal)
        result = await db.execute(
            select(ConsultationReport)
            .where(ConsultationReport.patient_id == patient.id)
            .order_by(
                ConsultationReport.consultation_date.desc(),
                ConsultationReport.id.desc(),
            )
        )
        return list(result.scalars().all())

    async def get(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> ConsultationReport:
        return await ownership_service.get_consultation_report(db, principal, report_id)

    async def update(
        self,
        db: AsyncSession,
        principal: Principal,
        report_id: int,
        report_in: ConsultationReportUpdate,
    ) -> ConsultationReport:
        report = await ownership_service.get_consultation_report(
            db, principal, report_id
        )
        data = partial_update_data(report_in)
        for field in REQUIRED_FIELDS:
            if field in data and data[field] is None:
                raise BadRequestException(f"{field} cannot be null")
        return await self.apply_update(db, report, data)

    async def delete(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> None:
        report = await ownership_service.get_consultation_report(
            db, principal, report_id
        )
        await self.hard_delete(db, report)


consultation_service = ConsultationService()
