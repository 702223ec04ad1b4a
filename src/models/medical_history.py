# src/models/medical_history.py
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from db.database import Base, db_enum


class TobaccoForm(str, PyEnum):
    CIGARETTE = "Cigarette"
    GUTKHA = "Gutkha"
    PAN_MASALA = "Pan Masala"
    OTHER = "Other"


class MedicalHistory(Base):
    __tablename__ = "medical_histories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # Conditions
    has_diabetes = Column(Boolean, default=False, nullable=False)
    has_high_blood_pressure = Column(Boolean, default=False, nullable=False)
    has_thyroid_disorder = Column(Boolean, default=False, nullable=False)
    has_asthma = Column(Boolean, default=False, nullable=False)
    other_conditions = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    past_dental_history = Column(Text, nullable=True)
    current_medications = Column(Text, nullable=True)

    # Tobacco use
    smokes_tobacco = Column(Boolean, default=False, nullable=False)
    tobacco_form = Column(db_enum(TobaccoForm), nullable=True)
    tobacco_frequency_per_day = Column(Integer, nullable=True)
    tobacco_duration_years = Column(Integer, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    patient = relationship("Patient", back_populates="medical_history")
