"""
Tests for schema-level invariants: uniqueness and cascades.
"""

from datetime import date

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from models import (
    DentalImage,
    FamilyGender,
    FamilyMember,
    MedicalHistory,
    MedicalReportType,
    Patient,
    User,
    UserRole,
)


async def _patient(session, name="Asha"):
    user = User(name=name, phone="9000000000", role=UserRole.PATIENT)
    session.add(user)
    await session.flush()
    patient = Patient(user_id=user.id)
    session.add(patient)
    await session.commit()
    return user, patient


async def _count(session, model):
    return await session.scalar(select(func.count()).select_from(model))


class TestUniqueness:

    async def test_one_patient_per_user(self, db_session):
        user, _ = await _patient(db_session)
        db_session.add(Patient(user_id=user.id))
        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_one_history_per_patient(self, db_session):
        _, patient = await _patient(db_session)
        db_session.add(MedicalHistory(patient_id=patient.id))
        await db_session.commit()
        db_session.add(MedicalHistory(patient_id=patient.id))
        with pytest.raises(IntegrityError):
            await db_session.commit()


class TestCascades:

    async def test_deleting_user_removes_patient_tree(self, db_session):
        user, patient = await _patient(db_session)
        member = FamilyMember(
            patient_id=patient.id,
            name="Ravi",
            date_of_birth=date(1970, 1, 1),
            gender=FamilyGender.MALE,
            relation="Father",
        )
        db_session.add(member)
        await db_session.flush()
        db_session.add(
            DentalImage(user_id=user.id, relative_id=member.id, image_urls=["https://x"])
        )
        await db_session.commit()

        await db_session.execute(delete(User).where(User.id == user.id))
        await db_session.commit()

        for model in (Patient, FamilyMember, DentalImage):
            assert await _count(db_session, model) == 0

    async def test_deleting_family_member_removes_its_images(self, db_session):
        user, patient = await _patient(db_session)
        member = FamilyMember(
            patient_id=patient.id,
            name="Ravi",
            date_of_birth=date(1970, 1, 1),
            gender=FamilyGender.MALE,
            relation="Father",
        )
        db_session.add(member)
        await db_session.flush()
        db_session.add(DentalImage(user_id=user.id, relative_id=member.id, image_urls=[]))
        db_session.add(DentalImage(user_id=user.id, relative_id=None, image_urls=[]))
        await db_session.commit()

        await db_session.execute(delete(FamilyMember).where(FamilyMember.id == member.id))
        await db_session.commit()

        assert await _count(db_session, DentalImage) == 1


class TestReportTypeParsing:

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Xray", MedicalReportType.XRAY),
            ("x-ray", MedicalReportType.XRAY),
            ("X-Ray", MedicalReportType.XRAY),
            ("blood test", MedicalReportType.BLOOD_TEST),
            ("MedicalCertificate", MedicalReportType.MEDICAL_CERTIFICATE),
            ("Horoscope", None),
        ],
    )
    def test_parse(self, label, expected):
        assert MedicalReportType.parse(label) is expected
