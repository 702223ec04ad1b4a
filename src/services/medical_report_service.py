# src/services/medical_report_service.py
from typing import List, Optional, Tuple
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from core.dependencies import Principal
from models.medical_report import MedicalReport, MedicalReportType
from schemas.base_schemas import partial_update_data
from schemas.medical_report_schemas import MedicalReportDownload, MedicalReportUpdate
from services.ownership_service import ownership_service
from services.storage_service import (
    AppwriteStorageGateway,
    ensure_document,
    log_orphans,
)
from utils.exceptions import BadRequestException
from utils.logger import setup_logger
from utils.pagination import PageParams
from .base_service import BaseService

logger = setup_logger("MEDICAL_REPORT_SERVICE")


def parse_report_type(value: Optional[str]) -> MedicalReportType:
    """Upload-time report type; missing means Other, unknown is rejected"""
    if value is None or not value.strip():
        return MedicalReportType.OTHER
    report_type = MedicalReportType.parse(value)
    if report_type is None:
        raise BadRequestException(f"Invalid report type: {value}")
    return report_type


class MedicalReportService(BaseService):
    def __init__(self):
        super().__init__(MedicalReport)

    def _filtered(
        self, patient_id: Optional[int], report_type: Optional[str]
    ) -> Optional[Select]:
        """Active-row query, or None when the type filter can never match"""
        query = select(MedicalReport).where(MedicalReport.is_active.is_(True))
        if patient_id is not None:
            query = query.where(MedicalReport.patient_id == patient_id)
        if report_type:
            parsed = MedicalReportType.parse(report_type)
            if parsed is None:
                return None
            query = query.where(MedicalReport.report_type == parsed)
        return query

    async def _page(
        self, db: AsyncSession, query, params: PageParams
    ) -> Tuple[List[MedicalReport], int]:
        if query is None:
            return [], 0
        return await self.paginate(
            db,
            query,
            params,
            order_by=(MedicalReport.upload_date.desc(), MedicalReport.id.desc()),
        )

    async def upload(
        self,
        db: AsyncSession,
        principal: Principal,
        storage: AppwriteStorageGateway,
        patient_id: int,
        title: str,
        file: Optional[UploadFile],
        description: Optional[str] = None,
        report_type: Optional[str] = None,
    ) -> MedicalReport:
        """
        Store a report file and record it against a patient

        The ownership check and all field validation happen before the file
        is sent to storage.
        """
        if file is None or not file.filename:
            raise BadRequestException("No file uploaded")
        if not title or not title.strip():
            raise BadRequestException("title is required")
        parsed_type = parse_report_type(report_type)
        ensure_document(file)

        patient = await ownership_service.get_owned_patient(db, principal, patient_id)
        stored = await storage.upload_file(file)

        report = MedicalReport(
            patient_id=patient.id,
            uploaded_by=principal.user_id,
            title=title.strip(),
            description=description,
            report_type=parsed_type,
            file_path=stored.file_url,
            file_name=stored.file_name,
            file_size=stored.file_size,
            file_type=stored.file_type,
        )
        try:
            report = await self.save(db, report)
        except Exception:
            log_orphans([stored])
            raise
        logger.info(
            f"User {principal.user_id} uploaded medical report {report.id} "
            f"for patient {patient.id}"
        )
        return report

    async def list_for_patient(
        self,
        db: AsyncSession,
        principal: Principal,
        patient_id: int,
        params: PageParams,
        report_type: Optional[str] = None,
    ) -> Tuple[List[MedicalReport], int]:
        await ownership_service.get_owned_patient(db, principal, patient_id)
        return await self._page(db, self._filtered(patient_id, report_type), params)

    async def list_all(
        self,
        db: AsyncSession,
        params: PageParams,
        patient_id: Optional[int] = None,
        report_type: Optional[str] = None,
    ) -> Tuple[List[MedicalReport], int]:
        return await self._page(db, self._filtered(patient_id, report_type), params)

    async def get(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> MedicalReport:
        return await ownership_service.get_medical_report(db, principal, report_id)

    async def download(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> MedicalReportDownload:
        report = await ownership_service.get_medical_report(db, principal, report_id)
        return MedicalReportDownload(
            download_url=report.file_path,
            file_name=report.file_name,
            file_size=report.file_size,
            file_type=report.file_type,
        )

    async def update(
        self,
        db: AsyncSession,
        principal: Principal,
        report_id: int,
        report_in: MedicalReportUpdate,
    ) -> MedicalReport:
        report = await ownership_service.get_medical_report(db, principal, report_id)
        data = partial_update_data(report_in)
        if "title" in data and not data["title"]:
            raise BadRequestException("title cannot be empty")
        if "report_type" in data and data["report_type"] is None:
            raise BadRequestException("reportType cannot be null")
        return await self.apply_update(db, report, data)

    async def delete(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> MedicalReport:
        report = await ownership_service.get_medical_report(db, principal, report_id)
        return await self.soft_delete(db, report)


medical_report_service = MedicalReportService()
