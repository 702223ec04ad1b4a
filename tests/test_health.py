"""
Tests for the health endpoint and the uniform error envelope.
"""

import main


class TestHealth:

    async def test_healthy(self, client, monkeypatch):
        async def db_ok():
            return True

        monkeypatch.setattr(main, "check_db_connection", db_ok)
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["eventLoopLagMs"] >= 0

    async def test_degraded_when_database_is_down(self, client, monkeypatch):
        async def db_down():
            return False

        monkeypatch.setattr(main, "check_db_connection", db_down)
        response = await client.get("/health")
        assert response.json()["data"]["status"] == "degraded"


class TestErrorEnvelope:

    async def test_unknown_route_is_enveloped(self, client):
        response = await client.get("/no-such-route")
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "error"
        assert body["code"] == 404

    async def test_unexpected_error_hides_details(self, client, patient_headers, monkeypatch):
        from services.patient_service import patient_service

        async def explode(db, principal):
            raise RuntimeError("secret connection string")

        monkeypatch.setattr(patient_service, "get_profile", explode)
        response = await client.get("/patient/profile", headers=patient_headers)
        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
        assert "secret" not in response.text
