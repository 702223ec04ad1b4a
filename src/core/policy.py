# src/core/policy.py
"""
Role policy for endpoints that are not covered by the ownership chain.

Ownership (a caller reaching their own rows) is resolved by
``services.ownership_service``; this table only decides which roles may use
cross-user views and role-restricted actions.
"""
from enum import Enum
from typing import Dict, FrozenSet


class Action(str, Enum):
    LIST_ALL_MEDICAL_REPORTS = "list_all_medical_reports"
    VIEW_ANY_PATIENT_DATA = "view_any_patient_data"
    LIST_ALL_DENTAL_IMAGES = "list_all_dental_images"
    LIST_ALL_IMAGE_URLS = "list_all_image_urls"
    MANAGE_ANY_DENTAL_IMAGE = "manage_any_dental_image"
    LIST_ALL_QUERIES = "list_all_queries"
    MANAGE_ANY_QUERY = "manage_any_query"
    CREATE_QUERY = "create_query"


ADMIN = "admin"
DOCTOR = "doctor"
PATIENT = "patient"
USER = "user"

ROLE_POLICY: Dict[Action, FrozenSet[str]] = {
    Action.LIST_ALL_MEDICAL_REPORTS: frozenset({ADMIN, DOCTOR}),
    Action.VIEW_ANY_PATIENT_DATA: frozenset({ADMIN, DOCTOR}),
    Action.LIST_ALL_DENTAL_IMAGES: frozenset({ADMIN}),
    Action.LIST_ALL_IMAGE_URLS: frozenset({ADMIN}),
    Action.MANAGE_ANY_DENTAL_IMAGE: frozenset({ADMIN}),
    Action.LIST_ALL_QUERIES: frozenset({ADMIN}),
    Action.MANAGE_ANY_QUERY: frozenset({ADMIN}),
    Action.CREATE_QUERY: frozenset({USER, PATIENT, DOCTOR}),
}


def is_allowed(role: str, action: Action) -> bool:
    return role in ROLE_POLICY.get(action, frozenset())
