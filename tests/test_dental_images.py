"""
Tests for dental image batches.
"""

import pytest


def _images(count, field="images"):
    return [
        (field, (f"tooth{i}.jpg", f"jpeg-bytes-{i}".encode(), "image/jpeg"))
        for i in range(count)
    ]


class TestDentalImageUpload:

    async def test_three_images_one_record(
        self, client, patient_user, patient_headers, family_member, fake_bucket
    ):
        response = await client.post(
            "/dental-images",
            data={"relativeId": str(family_member["id"]), "imageType": "intraoral"},
            files=_images(3),
            headers=patient_headers,
        )
        assert response.status_code == 201
        assert fake_bucket.upload_count == 3
        data = response.json()["data"]
        assert len(data["imageUrls"]) == 3
        assert data["imageUrls"][0].endswith("/files/file-1/view?project=proj")
        assert data["relativeId"] == family_member["id"]
        assert data["userId"] == patient_user.id
        assert data["imageType"] == "intraoral"

    async def test_bracket_field_name_is_accepted(self, client, patient_headers, fake_bucket):
        response = await client.post(
            "/dental-images", files=_images(2, field="images[]"), headers=patient_headers
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["relativeId"] is None
        assert data["imageType"] == "other"
        assert fake_bucket.upload_count == 2

    async def test_no_images(self, client, patient_headers):
        response = await client.post(
            "/dental-images", data={"description": "nothing"}, headers=patient_headers
        )
        assert response.status_code == 400

    async def test_too_many_images(self, client, patient_headers, fake_bucket):
        response = await client.post("/dental-images", files=_images(11), headers=patient_headers)
        assert response.status_code == 400
        assert fake_bucket.upload_count == 0

    async def test_empty_part_rejects_whole_batch(self, client, patient_headers, fake_bucket):
        files = _images(1) + [("images", ("blank.jpg", b"", "image/jpeg"))]
        response = await client.post("/dental-images", files=files, headers=patient_headers)
        assert response.status_code == 400
        assert "blank.jpg" in response.json()["message"]
        assert fake_bucket.upload_count == 0

    async def test_foreign_relative_is_not_found(
        self, client, family_member, other_patient_headers, other_patient_profile, fake_bucket
    ):
        response = await client.post(
            "/dental-images",
            data={"relativeId": str(family_member["id"])},
            files=_images(1),
            headers=other_patient_headers,
        )
        assert response.status_code == 404
        assert fake_bucket.upload_count == 0

    async def test_failed_upload_creates_no_record(
        self, client, session_factory, patient_headers, fake_bucket
    ):
        from sqlalchemy import func, select
        from models.dental_image import DentalImage

        fake_bucket.fail_with = 400
        response = await client.post("/dental-images", files=_images(2), headers=patient_headers)
        assert response.status_code == 502
        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(DentalImage)) == 0


class TestDentalImageReads:

    @pytest.fixture
    async def uploaded(self, client, patient_headers, family_member):
        ids = []
        for image_type in ("intraoral", "xray", "intraoral"):
            response = await client.post(
                "/dental-images",
                data={"relativeId": str(family_member["id"]), "imageType": image_type},
                files=_images(2),
                headers=patient_headers,
            )
            ids.append(response.json()["data"]["id"])
        return ids

    async def test_list_with_family_member_brief(self, client, patient_headers, family_member, uploaded):
        response = await client.get("/dental-images", headers=patient_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert [i["id"] for i in data["images"]] == list(reversed(uploaded))
        assert data["images"][0]["familyMember"] == {
            "id": family_member["id"],
            "name": "Ravi",
            "relation": "Father",
        }
        assert data["pagination"]["itemsPerPage"] == 10

    async def test_filter_by_image_type(self, client, patient_headers, uploaded):
        response = await client.get("/dental-images?imageType=xray", headers=patient_headers)
        assert response.json()["data"]["pagination"]["totalItems"] == 1

    async def test_get_and_soft_delete(self, client, patient_headers, uploaded):
        image_id = uploaded[0]
        response = await client.get(f"/dental-images/{image_id}", headers=patient_headers)
        assert response.status_code == 200
        assert response.json()["data"]["familyMember"]["name"] == "Ravi"

        response = await client.delete(f"/dental-images/{image_id}", headers=patient_headers)
        assert response.status_code == 200

        response = await client.get("/dental-images", headers=patient_headers)
        assert image_id not in [i["id"] for i in response.json()["data"]["images"]]
        response = await client.get(f"/dental-images/{image_id}", headers=patient_headers)
        assert response.status_code == 404

    async def test_other_user_cannot_see_image(
        self, client, uploaded, other_patient_headers
    ):
        response = await client.get(f"/dental-images/{uploaded[0]}", headers=other_patient_headers)
        assert response.status_code == 404

    async def test_admin_views_require_admin(self, client, patient_headers, doctor_headers):
        for url in ("/dental-images/admin/all", "/dental-images/admin/urls"):
            assert (await client.get(url, headers=patient_headers)).status_code == 403
            assert (await client.get(url, headers=doctor_headers)).status_code == 403

    async def test_admin_list_all(self, client, admin_headers, patient_user, uploaded):
        response = await client.get(
            f"/dental-images/admin/all?userId={patient_user.id}", headers=admin_headers
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["pagination"]["totalItems"] == 3
        assert data["pagination"]["itemsPerPage"] == 20

    async def test_admin_urls_are_flattened(self, client, admin_headers, uploaded):
        response = await client.get("/dental-images/admin/urls?limit=2", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["imageUrls"]) == 4
        assert data["pagination"]["totalImageUrls"] == 4
        assert data["pagination"]["totalItems"] == 3
        assert data["pagination"]["totalPages"] == 2
