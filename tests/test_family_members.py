"""
Tests for family member endpoints and their ownership boundary.
"""

import pytest


class TestFamilyMembers:
    """CRUD on /patient/family for the owning patient."""

    async def test_add_family_member(self, client, patient_headers, patient_profile):
        response = await client.post(
            "/patient/family",
            json={
                "name": "Ravi",
                "dateOfBirth": "1970-01-01",
                "gender": "Male",
                "relation": "Father",
            },
            headers=patient_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["patientId"] == patient_profile["id"]
        assert data["name"] == "Ravi"
        assert data["dateOfBirth"] == "1970-01-01"

    async def test_add_requires_patient_profile(self, client, patient_headers):
        response = await client.post(
            "/patient/family",
            json={"name": "Ravi", "dateOfBirth": "1970-01-01", "gender": "Male", "relation": "Father"},
            headers=patient_headers,
        )
        assert response.status_code == 404

    async def test_invalid_gender_is_rejected(self, client, patient_headers, patient_profile):
        response = await client.post(
            "/patient/family",
            json={"name": "Ravi", "dateOfBirth": "1970-01-01", "gender": "Unknown", "relation": "Father"},
            headers=patient_headers,
        )
        assert response.status_code == 400

    async def test_missing_required_field_is_rejected(self, client, patient_headers, patient_profile):
        response = await client.post(
            "/patient/family",
            json={"name": "Ravi", "gender": "Male", "relation": "Father"},
            headers=patient_headers,
        )
        assert response.status_code == 400
        assert "dateOfBirth" in response.json()["message"]

    async def test_list_and_get(self, client, patient_headers, family_member):
        response = await client.get("/patient/family", headers=patient_headers)
        assert response.status_code == 200
        assert [m["id"] for m in response.json()["data"]] == [family_member["id"]]

        response = await client.get(
            f"/patient/family/{family_member['id']}", headers=patient_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["relation"] == "Father"

    async def test_partial_update_keeps_other_fields(self, client, patient_headers, family_member):
        response = await client.put(
            f"/patient/family/{family_member['id']}",
            json={"relation": "Grandfather"},
            headers=patient_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["relation"] == "Grandfather"
        assert data["name"] == "Ravi"
        assert data["gender"] == "Male"

    async def test_update_cannot_null_required_field(self, client, patient_headers, family_member):
        response = await client.put(
            f"/patient/family/{family_member['id']}",
            json={"name": None},
            headers=patient_headers,
        )
        assert response.status_code == 400

    async def test_delete_is_hard(self, client, patient_headers, family_member):
        response = await client.delete(
            f"/patient/family/{family_member['id']}", headers=patient_headers
        )
        assert response.status_code == 200
        assert response.json()["data"] is None

        response = await client.get(
            f"/patient/family/{family_member['id']}", headers=patient_headers
        )
        assert response.status_code == 404


class TestFamilyMemberOwnership:
    """Another patient cannot tell a foreign row from a missing one."""

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    async def test_foreign_member_is_not_found(
        self, client, family_member, other_patient_headers, other_patient_profile, method
    ):
        url = f"/patient/family/{family_member['id']}"
        if method == "put":
            response = await client.put(url, json={"relation": "x"}, headers=other_patient_headers)
        else:
            response = await getattr(client, method)(url, headers=other_patient_headers)

        missing = await client.get("/patient/family/987654", headers=other_patient_headers)

        assert response.status_code == 404
        assert response.json()["message"] == missing.json()["message"]

    async def test_foreign_member_untouched_after_attempts(
        self, client, patient_headers, family_member, other_patient_headers, other_patient_profile
    ):
        await client.delete(
            f"/patient/family/{family_member['id']}", headers=other_patient_headers
        )
        response = await client.get(
            f"/patient/family/{family_member['id']}", headers=patient_headers
        )
        assert response.status_code == 200

    async def test_unauthenticated_request(self, client, family_member):
        response = await client.get(f"/patient/family/{family_member['id']}")
        assert response.status_code == 401
