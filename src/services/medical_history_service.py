# src/services/medical_history_service.py
from typing import Optional, Tuple
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from core.dependencies import Principal
from models.medical_history import MedicalHistory
from schemas.base_schemas import partial_update_data
from schemas.medical_history_schemas import MedicalHistorySetup
from services.ownership_service import ownership_service
from utils.exceptions import ConflictException
from utils.logger import setup_logger
from .base_service import BaseService

logger = setup_logger("MEDICAL_HISTORY_SERVICE")

# Flags stored as NOT NULL; an explicit null leaves the stored value alone
FLAG_FIELDS = frozenset(
    {
        "has_diabetes",
        "has_high_blood_pressure",
        "has_thyroid_disorder",
        "has_asthma",
        "smokes_tobacco",
    }
)


class MedicalHistoryService(BaseService):
    def __init__(self):
        super().__init__(MedicalHistory)

    async def find_by_patient_id(
        self, db: AsyncSession, patient_id: int
    ) -> Optional[MedicalHistory]:
        result = await db.execute(
            select(MedicalHistory).where(MedicalHistory.patient_id == patient_id)
        )
        return result.scalar_one_or_none()

    async def setup(
        self, db: AsyncSession, principal: Principal, history_in: MedicalHistorySetup
    ) -> Tuple[MedicalHistory, bool]:
        """Create or update the caller's single medical history row"""
        patient = await ownership_service.get_patient_for(db, principal)
        patient_id = patient.id

        try:
            history = await self.find_by_patient_id(db, patient_id)
            created = history is None
            if created:
                history = MedicalHistory(patient_id=patient_id)
                db.add(history)

            for field, value in partial_update_data(history_in).items():
                if value is None and field in FLAG_FIELDS:
                    continue
                setattr(history, field, value)

            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Concurrent medical history setup for patient {patient_id}: {e}")
            raise ConflictException("Medical history already exists")

        await db.refresh(history)
        action = "Created" if created else "Updated"
        logger.info(f"{action} medical history for patient {patient_id}")
        return history, created

    async def get_for_caller(
        self, db: AsyncSession, principal: Principal
    ) -> Optional[MedicalHistory]:
        """None when the patient has not filled in a history yet"""
        patient = await ownership_service.get_patient_for(db, principal)
        return await self.find_by_patient_id(db, patient.id)


medical_history_service = MedicalHistoryService()
