# src/models/report.py
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from db.database import Base, db_enum


class AnalysisReportType(str, PyEnum):
    ORAL_DIAGNOSIS = "oral_diagnosis"
    DENTAL_ANALYSIS = "dental_analysis"
    TEETH_DETECTION = "teeth_detection"
    CAVITY_DETECTION = "cavity_detection"
    PLAQUE_DETECTION = "plaque_detection"
    OTHER = "other"


class Report(Base):
    """Externally produced analysis output for a patient or one of their relatives"""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # 0 for the patient themselves, otherwise a family_members.id
    relative_id = Column(Integer, nullable=False, default=0, index=True)
    relative_name = Column(String(100), nullable=False)

    report_type = Column(
        db_enum(AnalysisReportType),
        nullable=False,
        default=AnalysisReportType.ORAL_DIAGNOSIS,
        index=True,
    )
    bounding_box_data = Column(JSON, nullable=False)
    images = Column(JSON, nullable=True)
    summary = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    patient = relationship("Patient", back_populates="reports")
