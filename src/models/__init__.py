# src/models/__init__.py
"""
Models initialization file to handle circular dependencies
"""

# Import all models first
from .user import User, UserRole
from .patient import Patient, LanguagePreference
from .family_member import FamilyMember, FamilyGender
from .medical_history import MedicalHistory, TobaccoForm
from .consultation_report import ConsultationReport
from .medical_report import MedicalReport, MedicalReportType
from .dental_image import DentalImage
from .report import Report, AnalysisReportType
from .query import Query, QueryRole

from sqlalchemy.orm import configure_mappers

# Configure all mappers
configure_mappers()

__all__ = [
    "User",
    "UserRole",
    "Patient",
    "LanguagePreference",
    "FamilyMember",
    "FamilyGender",
    "MedicalHistory",
    "TobaccoForm",
    "ConsultationReport",
    "MedicalReport",
    "MedicalReportType",
    "DentalImage",
    "Report",
    "AnalysisReportType",
    "Query",
    "QueryRole",
]
