# src/services/patient_service.py
from typing import Optional, Tuple
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from core.dependencies import Principal
from models.patient import Patient
from models.user import User
from schemas.patient_schemas import PatientProfileSetup
from services.ownership_service import ownership_service
from services.storage_service import AppwriteStorageGateway, ensure_image, log_orphans
from utils.exceptions import ConflictException, NotFoundException
from utils.logger import setup_logger
from .base_service import BaseService

logger = setup_logger("PATIENT_SERVICE")


class PatientService(BaseService):
    def __init__(self):
        super().__init__(Patient)

    async def find_by_user_id(
        self, db: AsyncSession, user_id: int
    ) -> Optional[Patient]:
        return await ownership_service.find_patient_by_user(db, user_id)

    async def _load_profile(self, db: AsyncSession, user_id: int) -> Optional[Patient]:
        result = await db.execute(
            select(Patient)
            .options(selectinload(Patient.user))
            .where(Patient.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_profile(self, db: AsyncSession, principal: Principal) -> Patient:
        """The caller's patient row with the owning user's identity loaded"""
        patient = await self._load_profile(db, principal.user_id)
        if patient is None:
            raise NotFoundException("Patient profile not found")
        return patient

    async def setup_profile(
        self, db: AsyncSession, principal: Principal, profile_in: PatientProfileSetup
    ) -> Tuple[Patient, bool]:
        """
        Create or update the caller's patient profile in one transaction

        Returns:
            (patient, created) where ``created`` is True on first setup

        Raises:
            NotFoundException: the caller's user row does not exist
            ConflictException: a concurrent first-time setup won the race
        """
        user = await db.get(User, principal.user_id)
        if user is None:
            raise NotFoundException("User not found")

        try:
            patient = await self.find_by_user_id(db, principal.user_id)
            created = patient is None
            if created:
                patient = Patient(user_id=principal.user_id)
                db.add(patient)

            for field, value in profile_in.patient_fields().items():
                if value is None and field == "language_preference":
                    continue
                setattr(patient, field, value)
            for field, value in profile_in.user_fields().items():
                if value is None and field == "name":
                    continue
                setattr(user, field, value)

            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Concurrent profile setup for user {principal.user_id}: {e}")
            raise ConflictException("Patient profile already exists")

        action = "Created" if created else "Updated"
        logger.info(f"{action} patient profile for user {principal.user_id}")
        return await self._load_profile(db, principal.user_id), created

    async def upload_profile_image(
        self,
        db: AsyncSession,
        principal: Principal,
        image: UploadFile,
        storage: AppwriteStorageGateway,
    ) -> Patient:
        patient = await ownership_service.get_patient_for(db, principal)
        ensure_image(image)
        stored = await storage.upload_file(image)
        patient.profile_image = stored.file_url
        try:
            patient = await self.save(db, patient)
        except Exception:
            log_orphans([stored])
            raise
        logger.info(f"Updated profile image for patient {patient.id}")
        return patient

    async def get_profile_image(
        self, db: AsyncSession, principal: Principal
    ) -> Optional[str]:
        patient = await ownership_service.get_patient_for(db, principal)
        return patient.profile_image


patient_service = PatientService()
