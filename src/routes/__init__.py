# src/routes/__init__.py
from .patients import router as patients_router
from .family_members import router as family_members_router
from .medical_history import router as medical_history_router
from .consultations import router as consultations_router
from .medical_reports import router as medical_reports_router
from .dental_images import router as dental_images_router
from .reports import router as reports_router
from .queries import router as queries_router

__all__ = [
    "patients_router",
    "family_members_router",
    "medical_history_router",
    "consultations_router",
    "medical_reports_router",
    "dental_images_router",
    "reports_router",
    "queries_router",
]
