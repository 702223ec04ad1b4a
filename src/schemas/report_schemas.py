# src/schemas/report_schemas.py
from typing import Any, List, Optional
from models.report import AnalysisReportType
from .base_schemas import BaseSchema, IDMixin, TimestampMixin


class ReportPublic(IDMixin, TimestampMixin):
    patient_id: int
    relative_id: int
    relative_name: str
    report_type: AnalysisReportType
    bounding_box_data: Any
    images: Optional[List[str]] = None
    summary: Optional[str] = None
    is_active: bool
