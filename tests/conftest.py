"""
Pytest configuration and shared fixtures for the tele-health API tests.

This module provides:
- Test database setup (async SQLite in-memory, foreign keys on)
- An httpx client bound to the FastAPI app
- A fake Appwrite bucket behind httpx.MockTransport
- User fixtures and bearer-token helpers
"""

import os

# =============================================================================
# TEST SETTINGS BEFORE ANY APP IMPORTS
# =============================================================================
os.environ["SQLITE_MODE"] = "True"
os.environ["DB_NAME"] = "test_dental_telehealth"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APPWRITE_ENDPOINT"] = "https://store.test/v1"
os.environ["APPWRITE_PROJECT_ID"] = "proj"
os.environ["APPWRITE_API_KEY"] = "server-key"
os.environ["APPWRITE_BUCKET_ID"] = "bucket"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Dict, List

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from db.database import Base, enable_sqlite_foreign_keys, get_db
from models.user import User, UserRole
from services.storage_service import AppwriteStorageGateway, get_storage_gateway
from utils.rate_limiter import limiter
from utils.security import create_access_token


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
async def test_engine():
    """A fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        bind=test_engine, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(session_factory):
    """Session for seeding and inspecting rows directly."""
    async with session_factory() as session:
        yield session


# =============================================================================
# STORAGE FIXTURES
# =============================================================================

class FakeBucket:
    """Records uploads and answers like the Appwrite files endpoint."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.fail_with: int = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"message": "upload refused"})
        return httpx.Response(201, json={"$id": f"file-{len(self.requests)}"})

    @property
    def upload_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_bucket():
    return FakeBucket()


@pytest.fixture
async def storage(fake_bucket):
    gateway = AppwriteStorageGateway(transport=httpx.MockTransport(fake_bucket.handler))
    yield gateway
    await gateway.aclose()


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

@pytest.fixture
def app(session_factory, storage):
    """The FastAPI app wired to the test database and fake bucket."""
    from main import app as fastapi_app

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    fastapi_app.dependency_overrides[get_storage_gateway] = lambda: storage
    limiter.reset()
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# =============================================================================
# USER FIXTURES
# =============================================================================

async def _create_user(session, name: str, phone: str, role: UserRole) -> User:
    user = User(name=name, phone=phone, role=role)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def patient_user(db_session) -> User:
    return await _create_user(db_session, "Asha", "9000000000", UserRole.PATIENT)


@pytest.fixture
async def other_patient_user(db_session) -> User:
    return await _create_user(db_session, "Meera", "9111111111", UserRole.PATIENT)


@pytest.fixture
async def doctor_user(db_session) -> User:
    return await _create_user(db_session, "Dr. Rao", "9222222222", UserRole.DOCTOR)


@pytest.fixture
async def admin_user(db_session) -> User:
    return await _create_user(db_session, "Admin", "9333333333", UserRole.ADMIN)


# =============================================================================
# AUTHENTICATION HELPERS
# =============================================================================

def bearer(user_id: int, role: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture
def patient_headers(patient_user) -> Dict[str, str]:
    return bearer(patient_user.id, "patient")


@pytest.fixture
def other_patient_headers(other_patient_user) -> Dict[str, str]:
    return bearer(other_patient_user.id, "patient")


@pytest.fixture
def doctor_headers(doctor_user) -> Dict[str, str]:
    return bearer(doctor_user.id, "doctor")


@pytest.fixture
def admin_headers(admin_user) -> Dict[str, str]:
    return bearer(admin_user.id, "admin")


@pytest.fixture
async def patient_profile(client, patient_headers) -> dict:
    """The patient user's profile, created through the API."""
    response = await client.post(
        "/patient/profile",
        json={"name": "Asha", "phone": "9000000000", "gender": "Female"},
        headers=patient_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
async def other_patient_profile(client, other_patient_headers) -> dict:
    response = await client.post(
        "/patient/profile", json={"name": "Meera"}, headers=other_patient_headers
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
async def family_member(client, patient_headers, patient_profile) -> dict:
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
    return response.json()["data"]


@pytest.fixture
def make_headers():
    """Build bearer headers for an arbitrary user id and role."""
    return bearer
