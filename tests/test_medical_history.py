"""
Tests for the medical history upsert.
"""

import pytest


class TestMedicalHistory:

    async def test_absent_history_is_null_success(self, client, patient_headers, patient_profile):
        response = await client.get("/patient/medical-history", headers=patient_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["data"] is None

    async def test_setup_creates_with_defaults(self, client, patient_headers, patient_profile):
        response = await client.post(
            "/patient/medical-history",
            json={"hasDiabetes": True, "allergies": "Penicillin"},
            headers=patient_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["patientId"] == patient_profile["id"]
        assert data["hasDiabetes"] is True
        assert data["hasAsthma"] is False
        assert data["smokesTobacco"] is False
        assert data["allergies"] == "Penicillin"

    async def test_second_setup_updates_and_keeps_omitted_fields(
        self, client, patient_headers, patient_profile
    ):
        await client.post(
            "/patient/medical-history",
            json={"hasDiabetes": True, "allergies": "Penicillin"},
            headers=patient_headers,
        )
        response = await client.post(
            "/patient/medical-history",
            json={"smokesTobacco": True, "tobaccoForm": "Pan Masala", "tobaccoFrequencyPerDay": 3},
            headers=patient_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["hasDiabetes"] is True
        assert data["allergies"] == "Penicillin"
        assert data["tobaccoForm"] == "Pan Masala"
        assert data["tobaccoFrequencyPerDay"] == 3

        response = await client.get("/patient/medical-history", headers=patient_headers)
        assert response.json()["data"]["id"] == data["id"]

    async def test_same_body_twice_is_idempotent(self, client, patient_headers, patient_profile):
        body = {"hasAsthma": True, "currentMedications": "Inhaler"}
        first = await client.post("/patient/medical-history", json=body, headers=patient_headers)
        second = await client.post("/patient/medical-history", json=body, headers=patient_headers)

        assert (first.status_code, second.status_code) == (201, 200)
        strip = lambda d: {k: v for k, v in d.items() if k != "updatedAt"}
        assert strip(first.json()["data"]) == strip(second.json()["data"])

    @pytest.mark.parametrize(
        "body",
        [
            {"tobaccoForm": "Cigar"},
            {"tobaccoFrequencyPerDay": -1},
        ],
    )
    async def test_out_of_domain_values_are_rejected(
        self, client, patient_headers, patient_profile, body
    ):
        response = await client.post("/patient/medical-history", json=body, headers=patient_headers)
        assert response.status_code == 400

    async def test_requires_patient_profile(self, client, patient_headers):
        response = await client.get("/patient/medical-history", headers=patient_headers)
        assert response.status_code == 404
