# src/schemas/medical_report_schemas.py
from pydantic import field_validator
from typing import Optional
from datetime import datetime
from models.medical_report import MedicalReportType
from .base_schemas import BaseSchema, IDMixin, TimestampMixin


def coerce_report_type(value):
    if value is None or isinstance(value, MedicalReportType):
        return value
    parsed = MedicalReportType.parse(value)
    if parsed is None:
        allowed = ", ".join(member.value for member in MedicalReportType)
        raise ValueError(f"reportType must be one of: {allowed}")
    return parsed


class MedicalReportUpdate(BaseSchema):
    title: Optional[str] = None
    description: Optional[str] = None
    report_type: Optional[MedicalReportType] = None

    @field_validator("report_type", mode="before")
    @classmethod
    def normalize_report_type(cls, v):
        return coerce_report_type(v)


class MedicalReportPublic(IDMixin, TimestampMixin):
    patient_id: int
    uploaded_by: Optional[int] = None
    title: str
    description: Optional[str] = None
    report_type: MedicalReportType
    file_path: str
    file_name: str
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    is_active: bool
    upload_date: Optional[datetime] = None


class MedicalReportDownload(BaseSchema):
    download_url: str
    file_name: str
    file_size: Optional[int] = None
    file_type: Optional[str] = None
