# src/models/patient.py
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from db.database import Base, db_enum


class LanguagePreference(str, PyEnum):
    ENGLISH = "English"
    HINDI = "Hindi"
    GUJARATI = "Gujarati"


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # Contact and profile
    email = Column(String(255), nullable=True, index=True)
    date_of_birth = Column(Date, nullable=True)
    language_preference = Column(
        db_enum(LanguagePreference), default=LanguagePreference.ENGLISH
    )
    profile_image = Column(String(500), nullable=True)  # Appwrite view URL
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="patient")
    family_members = relationship(
        "FamilyMember",
        back_populates="patient",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    medical_history = relationship(
        "MedicalHistory",
        back_populates="patient",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    consultation_reports = relationship(
        "ConsultationReport",
        back_populates="patient",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    medical_reports = relationship(
        "MedicalReport",
        back_populates="patient",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reports = relationship(
        "Report",
        back_populates="patient",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
