"""
Tests for the contact query inbox.
"""

QUERY = {
    "name": "Asha",
    "email": "asha@example.com",
    "phone": "9000000000",
    "message": "Do you offer weekend consultations?",
}


class TestQueryCreate:

    async def test_unauthenticated_is_rejected(self, client):
        response = await client.post("/query/create", json=QUERY)
        assert response.status_code == 401
        assert response.json()["status"] == "error"

    async def test_user_query_visible_by_role(
        self, client, patient_user, make_headers, doctor_headers
    ):
        user_headers = make_headers(patient_user.id, "user")
        response = await client.post("/query/create", json=QUERY, headers=user_headers)
        assert response.status_code == 201
        created = response.json()["data"]
        assert created["role"] == "user"
        assert created["userId"] == patient_user.id

        response = await client.get("/query/by-role", headers=user_headers)
        assert created["id"] in [q["id"] for q in response.json()["data"]]

        response = await client.get("/query/by-role", headers=doctor_headers)
        assert response.status_code == 200
        assert created["id"] not in [q["id"] for q in response.json()["data"]]

    async def test_patient_role_is_filed_as_user(self, client, patient_headers):
        response = await client.post("/query/create", json=QUERY, headers=patient_headers)
        assert response.status_code == 201
        assert response.json()["data"]["role"] == "user"

    async def test_admin_cannot_submit(self, client, admin_headers):
        response = await client.post("/query/create", json=QUERY, headers=admin_headers)
        assert response.status_code == 403

    async def test_invalid_email(self, client, patient_headers):
        response = await client.post(
            "/query/create", json={**QUERY, "email": "not-an-email"}, headers=patient_headers
        )
        assert response.status_code == 400

    async def test_rate_limit(self, client, patient_headers):
        statuses = []
        for _ in range(21):
            response = await client.post("/query/create", json=QUERY, headers=patient_headers)
            statuses.append(response.status_code)
        assert statuses[:20] == [201] * 20
        assert statuses[20] == 429


class TestQueryAdminAndEdit:

    async def test_list_all_is_admin_only(self, client, patient_headers, admin_headers):
        await client.post("/query/create", json=QUERY, headers=patient_headers)

        assert (await client.get("/query/all", headers=patient_headers)).status_code == 403
        response = await client.get("/query/all", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

    async def test_author_can_edit(self, client, patient_headers):
        created = (await client.post("/query/create", json=QUERY, headers=patient_headers)).json()["data"]
        response = await client.put(
            f"/query/edit/{created['id']}", json={"message": "Updated"}, headers=patient_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["message"] == "Updated"

    async def test_admin_can_edit_any(self, client, patient_headers, admin_headers):
        created = (await client.post("/query/create", json=QUERY, headers=patient_headers)).json()["data"]
        response = await client.put(
            f"/query/edit/{created['id']}", json={"message": "Moderated"}, headers=admin_headers
        )
        assert response.status_code == 200

    async def test_other_user_edit_is_not_found(self, client, patient_headers, doctor_headers):
        created = (await client.post("/query/create", json=QUERY, headers=patient_headers)).json()["data"]
        response = await client.put(
            f"/query/edit/{created['id']}", json={"message": "Hijack"}, headers=doctor_headers
        )
        assert response.status_code == 404
