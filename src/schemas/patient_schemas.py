# src/schemas/patient_schemas.py
from pydantic import EmailStr, field_validator
from typing import Optional
from datetime import date
from models.patient import LanguagePreference
from .base_schemas import BaseSchema, IDMixin, TimestampMixin


class UserBlock(BaseSchema):
    """Identity fields stored on the User row"""

    name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None


class PatientProfileSetup(BaseSchema):
    """Upsert body for the caller's patient profile.

    Identity fields may come either nested under ``user`` or at the top level;
    the nested block wins when both are present.
    """

    email: Optional[EmailStr] = None
    date_of_birth: Optional[date] = None
    language_preference: Optional[LanguagePreference] = None

    user: Optional[UserBlock] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def patient_fields(self) -> dict:
        return self.model_dump(
            exclude_unset=True, include={"email", "date_of_birth", "language_preference"}
        )

    def user_fields(self) -> dict:
        data = self.model_dump(exclude_unset=True, include={"name", "phone", "gender"})
        if self.user is not None:
            data.update(self.user.model_dump(exclude_unset=True))
        return data


class PatientPublic(IDMixin, TimestampMixin):
    user_id: int
    email: Optional[str] = None
    date_of_birth: Optional[date] = None
    language_preference: Optional[LanguagePreference] = None
    profile_image: Optional[str] = None
    is_active: bool = True


class PatientProfile(PatientPublic):
    """Patient row together with the owning user's identity fields"""

    user: Optional[UserBlock] = None


class ProfileImage(BaseSchema):
    profile_image: Optional[str] = None
