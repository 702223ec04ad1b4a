# src/schemas/family_member_schemas.py
from typing import Optional
from datetime import date
from models.family_member import FamilyGender
from .base_schemas import BaseSchema, IDMixin, TimestampMixin


class FamilyMemberCreate(BaseSchema):
    name: str
    date_of_birth: date
    gender: FamilyGender
    relation: str


class FamilyMemberUpdate(BaseSchema):
    name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[FamilyGender] = None
    relation: Optional[str] = None


class FamilyMemberPublic(IDMixin, TimestampMixin):
    patient_id: int
    name: str
    date_of_birth: date
    gender: FamilyGender
    relation: str


class FamilyMemberBrief(IDMixin):
    name: str
    relation: str
