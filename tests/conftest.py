'''
Pytest configuration for the FastAPI application.

This file sets up fixtures for:
1. Forcing the application into TEST_MODE before any app code is imported.
2. A FastAPI TestClient backed by a fresh SQLite database per test.
3. An isolated async database session for repository and service tests.
4. The payroll core wired to an in-memory repository.
'''

import os
import tempfile
from typing import AsyncGenerator

# --- Environment must be set before the app's settings are created ---
_TEST_DB_DIR = tempfile.mkdtemp(prefix="salary-tracker-tests-")
os.environ["TEST_MODE"] = "True"
os.environ["AUTO_CREATE_TABLES"] = "True"
os.environ["DATABASE_URL_TEST"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/default.db"
os.environ.setdefault("SECRET_KEY", "salary-tracker-test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest

# --- FastAPI & Testing Imports ---
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine

# --- Application Imports ---
from salary_tracker_backend.main import app
from salary_tracker_backend.common.config import settings
from salary_tracker_backend.database.models import Base
from salary_tracker_backend.database.repository import SQLAlchemyStudentRepository
from salary_tracker_backend.core.payroll import StudentPayroll
from salary_tracker_backend.services.student_service import StudentService
from salary_tracker_backend.services.user_service import UserService

from tests.constants import FIXED_NOW
from tests.memory_repository import InMemoryStudentRepository


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Forces the anyio backend to 'asyncio' for the whole session.
    """
    return "asyncio"


# --- 1. API Fixture ---

@pytest.fixture(scope="function")
def client(tmp_path, monkeypatch) -> TestClient:
    """
    Runs the app's lifespan against a brand new SQLite file, so every
    endpoint test starts from empty tables.
    """
    assert settings.TEST_MODE is True, \
        "TEST_MODE was not set to True! Check your .env file or environment."

    monkeypatch.setattr(settings, "DATABASE_URL_TEST", f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", True)

    with TestClient(app) as test_client:
        yield test_client


# --- 2. Database Fixtures (For Repository & Service Tests) ---

@pytest.fixture(scope="function")
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'repository.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a single session whose work is rolled back after the test.
    """
    session_factory = async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        await session.rollback()
        await session.close()


@pytest.fixture(scope="function")
def student_repository(db_session: AsyncSession) -> SQLAlchemyStudentRepository:
    return SQLAlchemyStudentRepository(db_session)


# --- 3. Service Fixtures ---

@pytest.fixture(scope="function")
def student_service(db_session: AsyncSession) -> StudentService:
    return StudentService(db=db_session)


@pytest.fixture(scope="function")
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(db=db_session)


# --- 4. Core Fixtures ---

@pytest.fixture(scope="function")
def memory_repository() -> InMemoryStudentRepository:
    return InMemoryStudentRepository()


@pytest.fixture(scope="function")
def payroll(memory_repository: InMemoryStudentRepository) -> StudentPayroll:
    """The payroll core over an in-memory store with a frozen clock."""
    return StudentPayroll(memory_repository, clock=lambda: FIXED_NOW)
