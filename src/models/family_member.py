# src/models/family_member.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from db.database import Base, db_enum


class FamilyGender(str, PyEnum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class FamilyMember(Base):
    __tablename__ = "family_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(db_enum(FamilyGender), nullable=False)
    relation = Column(String(50), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="family_members")
    dental_images = relationship(
        "DentalImage",
        back_populates="family_member",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
