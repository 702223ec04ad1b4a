# src/schemas/medical_history_schemas.py
from pydantic import Field
from typing import Optional
from models.medical_history import TobaccoForm
from .base_schemas import BaseSchema, IDMixin, TimestampMixin


class MedicalHistorySetup(BaseSchema):
    """Upsert body; omitted fields keep their stored values"""

    has_diabetes: Optional[bool] = None
    has_high_blood_pressure: Optional[bool] = None
    has_thyroid_disorder: Optional[bool] = None
    has_asthma: Optional[bool] = None
    other_conditions: Optional[str] = None
    allergies: Optional[str] = None
    past_dental_history: Optional[str] = None
    current_medications: Optional[str] = None
    smokes_tobacco: Optional[bool] = None
    tobacco_form: Optional[TobaccoForm] = None
    tobacco_frequency_per_day: Optional[int] = Field(None, ge=0)
    tobacco_duration_years: Optional[int] = Field(None, ge=0)


class MedicalHistoryPublic(IDMixin, TimestampMixin):
    patient_id: int
    has_diabetes: bool
    has_high_blood_pressure: bool
    has_thyroid_disorder: bool
    has_asthma: bool
    other_conditions: Optional[str] = None
    allergies: Optional[str] = None
    past_dental_history: Optional[str] = None
    current_medications: Optional[str] = None
    smokes_tobacco: bool
    tobacco_form: Optional[TobaccoForm] = None
    tobacco_frequency_per_day: Optional[int] = None
    tobacco_duration_years: Optional[int] = None
