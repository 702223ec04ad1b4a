# src/models/medical_report.py
import re
from typing import Optional
from sqlalchemy import (
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


class MedicalReportType(str, PyEnum):
    XRAY = "X-Ray"
    BLOOD_TEST = "Blood Test"
    DENTAL_REPORT = "Dental Report"
    MEDICAL_CERTIFICATE = "Medical Certificate"
    PRESCRIPTION = "Prescription"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> Optional["MedicalReportType"]:
        """Match a client label ignoring case and punctuation ("Xray" -> X-Ray)."""
        key = re.sub(r"[^a-z0-9]", "", str(value).lower())
        for member in cls:
            if re.sub(r"[^a-z0-9]", "", member.value.lower()) == key:
                return member
        return None


class MedicalReport(Base):
    __tablename__ = "medical_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    uploaded_by = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Report details
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    report_type = Column(
        db_enum(MedicalReportType),
        nullable=False,
        default=MedicalReportType.OTHER,
        index=True,
    )

    # Stored object in Appwrite
    file_path = Column(String(500), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=True)
    file_type = Column(String(100), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    upload_date = Column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="medical_reports")
    uploader = relationship("User", foreign_keys=[uploaded_by])
