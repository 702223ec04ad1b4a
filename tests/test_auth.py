"""
Tests for bearer-token authentication and the role policy.
"""

from datetime import timedelta

import pytest
from jose import jwt

from core.config import settings
from core.policy import Action, is_allowed
from utils.security import create_access_token


class TestBearerAuthentication:

    async def test_missing_header(self, client):
        response = await client.get("/patient/profile")
        assert response.status_code == 401
        assert response.json() == {
            "status": "error",
            "code": 401,
            "message": "Authentication required",
            "data": None,
        }

    async def test_wrong_scheme(self, client):
        response = await client.get("/patient/profile", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    async def test_bad_signature(self, client, patient_user):
        token = jwt.encode({"id": patient_user.id, "role": "patient"}, "other-secret", algorithm="HS256")
        response = await client.get(
            "/patient/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    async def test_expired_token(self, client, patient_user):
        token = create_access_token(patient_user.id, "patient", expires_delta=timedelta(seconds=-5))
        response = await client.get(
            "/patient/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    @pytest.mark.parametrize(
        "claims",
        [
            {"role": "patient"},
            {"id": "abc", "role": "patient"},
            {"id": 1},
        ],
    )
    async def test_incomplete_claims(self, client, claims):
        token = jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        response = await client.get(
            "/patient/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    async def test_sub_claim_is_accepted(self, client, patient_user, patient_profile):
        token = jwt.encode(
            {"sub": str(patient_user.id), "role": "patient"},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        response = await client.get(
            "/patient/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200


class TestRolePolicy:

    @pytest.mark.parametrize(
        "role, action, allowed",
        [
            ("admin", Action.LIST_ALL_MEDICAL_REPORTS, True),
            ("doctor", Action.LIST_ALL_MEDICAL_REPORTS, True),
            ("patient", Action.LIST_ALL_MEDICAL_REPORTS, False),
            ("doctor", Action.LIST_ALL_DENTAL_IMAGES, False),
            ("admin", Action.LIST_ALL_IMAGE_URLS, True),
            ("doctor", Action.LIST_ALL_QUERIES, False),
            ("user", Action.CREATE_QUERY, True),
            ("admin", Action.CREATE_QUERY, False),
            ("unknown", Action.VIEW_ANY_PATIENT_DATA, False),
        ],
    )
    def test_policy_table(self, role, action, allowed):
        assert is_allowed(role, action) is allowed
