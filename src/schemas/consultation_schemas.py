# src/schemas/consultation_schemas.py
from typing import Optional
from datetime import date
from .base_schemas import BaseSchema, IDMixin, TimestampMixin


class ConsultationReportCreate(BaseSchema):
    doctor_name: str
    consultation_date: date
    diagnosis: str
    prescription: Optional[str] = None
    notes: Optional[str] = None
    follow_up_date: Optional[date] = None


class ConsultationReportUpdate(BaseSchema):
    doctor_name: Optional[str] = None
    consultation_date: Optional[date] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None
    follow_up_date: Optional[date] = None


class ConsultationReportPublic(IDMixin, TimestampMixin):
    patient_id: int
    doctor_name: str
    consultation_date: date
    diagnosis: str
    prescription: Optional[str] = None
    notes: Optional[str] = None
    follow_up_date: Optional[date] = None
