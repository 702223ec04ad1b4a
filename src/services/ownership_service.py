# src/services/ownership_service.py
"""
Resolves rows through the caller's ownership chain.

User -> Patient -> (FamilyMember | MedicalHistory | ConsultationReport |
MedicalReport | Report), and User -> DentalImage. A row that exists but sits
outside the caller's chain is reported exactly like a missing row.
"""
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from core.dependencies import Principal
from core.policy import Action
from models.consultation_report import ConsultationReport
from models.dental_image import DentalImage
from models.family_member import FamilyMember
from models.medical_report import MedicalReport
from models.patient import Patient
from models.report import Report
from utils.exceptions import NotFoundException
from utils.logger import setup_logger

logger = setup_logger("OWNERSHIP")


class OwnershipService:
    async def find_patient_by_user(
        self, db: AsyncSession, user_id: int
    ) -> Optional[Patient]:
        result = await db.execute(select(Patient).where(Patient.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_patient_for(self, db: AsyncSession, principal: Principal) -> Patient:
        """The caller's own patient profile"""
        patient = await self.find_patient_by_user(db, principal.user_id)
        if patient is None:
            logger.info(f"No patient profile for user {principal.user_id}")
            raise NotFoundException("Patient profile not found")
        return patient

    async def get_owned_patient(
        self, db: AsyncSession, principal: Principal, patient_id: int
    ) -> Patient:
        """Staff may reach any patient; everyone else only their own"""
        patient = await db.get(Patient, patient_id)
        if patient is None:
            raise NotFoundException("Patient not found")
        if principal.can(Action.VIEW_ANY_PATIENT_DATA):
            return patient
        if patient.user_id != principal.user_id:
            logger.warning(
                f"User {principal.user_id} tried to reach patient {patient_id}"
            )
            raise NotFoundException("Patient not found")
        return patient

    async def _get_patient_row(
        self,
        db: AsyncSession,
        principal: Principal,
        model,
        row_id: int,
        label: str,
        active_only: bool = False,
    ):
        patient = await self.get_patient_for(db, principal)
        query = select(model).where(model.id == row_id, model.patient_id == patient.id)
        if active_only:
            query = query.where(model.is_active.is_(True))
        result = await db.execute(query)
        row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundException(f"{label} not found")
        return row

    async def get_family_member(
        self, db: AsyncSession, principal: Principal, member_id: int
    ) -> FamilyMember:
        return await self._get_patient_row(
            db, principal, FamilyMember, member_id, "Family member"
        )

    async def get_consultation_report(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> ConsultationReport:
        return await self._get_patient_row(
            db, principal, ConsultationReport, report_id, "Consultation report"
        )

    async def get_report(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> Report:
        """Active analysis reports only"""
        if principal.can(Action.VIEW_ANY_PATIENT_DATA):
            report = await db.get(Report, report_id)
            if report is None or not report.is_active:
                raise NotFoundException("Report not found")
            return report
        return await self._get_patient_row(
            db, principal, Report, report_id, "Report", active_only=True
        )

    async def get_medical_report(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> MedicalReport:
        """Soft-deleted reports stay reachable so their file can still be fetched"""
        if principal.can(Action.VIEW_ANY_PATIENT_DATA):
            report = await db.get(MedicalReport, report_id)
            if report is None:
                raise NotFoundException("Medical report not found")
            return report
        return await self._get_patient_row(
            db, principal, MedicalReport, report_id, "Medical report"
        )

    async def get_dental_image(
        self, db: AsyncSession, principal: Principal, image_id: int, query=None
    ) -> DentalImage:
        """Active images only; ``query`` lets callers add loader options"""
        query = query if query is not None else select(DentalImage)
        query = query.where(DentalImage.id == image_id, DentalImage.is_active.is_(True))
        if not principal.can(Action.MANAGE_ANY_DENTAL_IMAGE):
            query = query.where(DentalImage.user_id == principal.user_id)
        result = await db.execute(query)
        image = result.scalar_one_or_none()
        if image is None:
            raise NotFoundException("Dental image not found")
        return image


ownership_service = OwnershipService()
