# src/services/report_service.py
import json
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from core.config import settings
from core.dependencies import Principal
from models.family_member import FamilyMember
from models.patient import Patient
from models.report import AnalysisReportType, Report
from models.user import User
from services.ownership_service import ownership_service
from services.storage_service import AppwriteStorageGateway, ensure_image, log_orphans
from utils.exceptions import BadRequestException, NotFoundException
from utils.logger import setup_logger
from utils.pagination import PageParams
from .base_service import BaseService

logger = setup_logger("REPORT_SERVICE")

PATIENT_SELF_ID = 0
NEWEST_FIRST = (Report.created_at.desc(), Report.id.desc())


@dataclass(frozen=True)
class PatientSelf:
    """The report is about the patient themselves"""

    relative_id: int = PATIENT_SELF_ID


@dataclass(frozen=True)
class FamilyMemberSubject:
    family_member_id: int

    @property
    def relative_id(self) -> int:
        return self.family_member_id


Subject = Union[PatientSelf, FamilyMemberSubject]


def decode_subject(relative_id: Optional[int]) -> Subject:
    """Map the stored ``relative_id`` (0 = patient, >0 = family member)"""
    if relative_id is None or relative_id == PATIENT_SELF_ID:
        return PatientSelf()
    if relative_id < 0:
        raise BadRequestException("relativeId must be 0 or a family member id")
    return FamilyMemberSubject(relative_id)


def parse_bounding_box_data(raw: Any) -> Any:
    """Accept already-structured data or a JSON document"""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise BadRequestException("boundingBoxData is required")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise BadRequestException("Invalid boundingBoxData format")
    if raw is None:
        raise BadRequestException("boundingBoxData is required")
    return raw


def parse_analysis_type(value: Optional[str]) -> AnalysisReportType:
    if value is None or not value.strip():
        return AnalysisReportType.ORAL_DIAGNOSIS
    try:
        return AnalysisReportType(value.strip())
    except ValueError:
        allowed = ", ".join(member.value for member in AnalysisReportType)
        raise BadRequestException(f"reportType must be one of: {allowed}")


class ReportService(BaseService):
    def __init__(self):
        super().__init__(Report)

    async def _resolve_subject(
        self, db: AsyncSession, patient: Patient, subject: Subject
    ) -> Optional[FamilyMember]:
        if isinstance(subject, PatientSelf):
            return None
        result = await db.execute(
            select(FamilyMember).where(
                FamilyMember.id == subject.family_member_id,
                FamilyMember.patient_id == patient.id,
            )
        )
        member = result.scalar_one_or_none()
        if member is None:
            raise NotFoundException("Family member not found")
        return member

    async def create(
        self,
        db: AsyncSession,
        principal: Principal,
        storage: AppwriteStorageGateway,
        bounding_box_data: Any,
        relative_id: Optional[int] = None,
        relative_name: Optional[str] = None,
        report_type: Optional[str] = None,
        summary: Optional[str] = None,
        images: Sequence[UploadFile] = (),
    ) -> Report:
        """
        Record an analysis result for the caller or one of their relatives

        Raises:
            BadRequestException: bad bounding box data, report type, relative id
                or image set
            NotFoundException: no patient profile, or the relative is not the
                caller's family member
        """
        parsed_boxes = parse_bounding_box_data(bounding_box_data)
        parsed_type = parse_analysis_type(report_type)
        subject = decode_subject(relative_id)

        images = [f for f in images if f is not None and f.filename]
        if len(images) > settings.MAX_REPORT_IMAGES:
            raise BadRequestException(
                f"Maximum {settings.MAX_REPORT_IMAGES} images allowed per report"
            )
        for upload in images:
            ensure_image(upload)

        patient = await ownership_service.get_patient_for(db, principal)
        member = await self._resolve_subject(db, patient, subject)

        name = (relative_name or "").strip()
        if not name:
            if member is not None:
                name = member.name
            else:
                user = await db.get(User, principal.user_id)
                name = user.name if user is not None else ""

        stored = await storage.upload_many(images) if images else []
        report = Report(
            patient_id=patient.id,
            relative_id=subject.relative_id,
            relative_name=name,
            report_type=parsed_type,
            bounding_box_data=parsed_boxes,
            images=[item.file_url for item in stored],
            summary=summary,
        )
        try:
            report = await self.save(db, report)
        except Exception:
            log_orphans(stored)
            raise
        logger.info(f"Created analysis report {report.id} for patient {patient.id}")
        return report

    async def _list(
        self,
        db: AsyncSession,
        patient_id: int,
        params: PageParams,
        relative_id: Optional[int],
    ) -> Tuple[List[Report], int]:
        query = select(Report).where(
            Report.patient_id == patient_id, Report.is_active.is_(True)
        )
        if relative_id is not None:
            query = query.where(
                Report.relative_id == decode_subject(relative_id).relative_id
            )
        return await self.paginate(db, query, params, order_by=NEWEST_FIRST)

    async def list_for_caller(
        self,
        db: AsyncSession,
        principal: Principal,
        params: PageParams,
        relative_id: Optional[int] = None,
    ) -> Tuple[List[Report], int]:
        patient = await ownership_service.get_patient_for(db, principal)
        return await self._list(db, patient.id, params, relative_id)

    async def list_for_patient(
        self,
        db: AsyncSession,
        principal: Principal,
        patient_id: int,
        params: PageParams,
        relative_id: Optional[int] = None,
    ) -> Tuple[List[Report], int]:
        patient = await ownership_service.get_owned_patient(db, principal, patient_id)
        return await self._list(db, patient.id, params, relative_id)

    async def get(self, db: AsyncSession, principal: Principal, report_id: int) -> Report:
        return await ownership_service.get_report(db, principal, report_id)

    async def delete(
        self, db: AsyncSession, principal: Principal, report_id: int
    ) -> Report:
        report = await ownership_service.get_report(db, principal, report_id)
        return await self.soft_delete(db, report)


report_service = ReportService()
