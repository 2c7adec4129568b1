"""Pytest fixtures for CareerStudio tests."""

import json
import os
from collections.abc import Generator
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

# Keep the application engine off the local development database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from careerstudio.core.config import Settings
from careerstudio.db.database import Base, get_db
from careerstudio.db.models import Company, Job, Recruiter
from careerstudio.main import app
from careerstudio.schemas.company import CompanyCreate, CompanyDocument
from careerstudio.schemas.job import JobType
from careerstudio.services.auth import create_access_token, hash_password
from careerstudio.services.companies import create_company

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ============================================================================
# Test Settings
# ============================================================================


@pytest.fixture(scope="session")
def test_settings():
    """Test settings with mock storage."""
    return Settings(
        database_url="sqlite:///:memory:",
        s3_endpoint_url="http://localhost:9000",
        s3_bucket="test-bucket",
        s3_access_key="test",
        s3_secret_key="test",
        public_base_url="http://testserver",
        secret_key="test-secret",
        bcrypt_rounds=4,
        max_upload_size_mb=1,
    )


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def test_db_engine():
    """Create a test database engine with SQLite in-memory."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def override_get_db(test_db_session):
    """Override the get_db dependency for testing."""

    def _override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    return _override_get_db


# ============================================================================
# Mock Storage Service
# ============================================================================


class MockStorageService:
    """Mock storage service for testing."""

    def __init__(self):
        self._storage: dict[str, bytes] = {}
        self.bucket = "test-bucket"
        self.client = MagicMock()

    def upload_file(self, file_obj, key: str, content_type: str = None):
        """Upload file to mock storage."""
        self._storage[key] = file_obj.read()
        return f"s3://{self.bucket}/{key}"

    def upload_bytes(self, data: bytes, key: str, content_type: str = None):
        """Upload bytes to mock storage."""
        self._storage[key] = data
        return f"s3://{self.bucket}/{key}"

    def object_exists(self, key: str) -> bool:
        return key in self._storage

    def get_presigned_url(self, key: str, expires_in: int = 3600, **kwargs) -> str:
        """Generate mock presigned URL."""
        return f"http://mock-storage/{key}"

    def delete_object(self, key: str) -> None:
        self._storage.pop(key, None)


@pytest.fixture(scope="function")
def mock_storage():
    """Create mock storage service."""
    return MockStorageService()


# ============================================================================
# Test Client
# ============================================================================


@pytest.fixture(scope="function")
def client(override_get_db, mock_storage, test_settings) -> Generator[TestClient, None, None]:
    """Create test client with mocked dependencies."""
    # Override database dependency
    app.dependency_overrides[get_db] = override_get_db

    # Patch settings and storage
    with (
        patch("careerstudio.core.config.get_settings", return_value=test_settings),
        patch("careerstudio.services.auth.get_settings", return_value=test_settings),
        patch("careerstudio.services.storage.get_settings", return_value=test_settings),
        patch("careerstudio.api.uploads.get_storage_service", return_value=mock_storage),
    ):
        with TestClient(app) as test_client:
            yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# Recruiter / Company Fixtures
# ============================================================================


def make_recruiter(session: Session, email: str) -> Recruiter:
    recruiter = Recruiter(email=email, password_hash=hash_password("password123", rounds=4))
    session.add(recruiter)
    session.commit()
    session.refresh(recruiter)
    return recruiter


def auth_headers_for(recruiter: Recruiter, settings: Settings) -> dict[str, str]:
    with patch("careerstudio.services.auth.get_settings", return_value=settings):
        token = create_access_token(str(recruiter.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def recruiter(test_db_session) -> Recruiter:
    """Create a recruiter account."""
    return make_recruiter(test_db_session, "recruiter@acmecorp.com")


@pytest.fixture
def auth_headers(recruiter, test_settings) -> dict[str, str]:
    """Bearer token headers for the recruiter fixture."""
    return auth_headers_for(recruiter, test_settings)


@pytest.fixture
def company(test_db_session, recruiter) -> Company:
    """Create the recruiter's company with default sections."""
    return create_company(test_db_session, recruiter, CompanyCreate(name="Acme Corp"))


@pytest.fixture
def token_headers(test_settings):
    """Factory fixture: bearer headers for any recruiter id and secret."""

    def _token_headers(recruiter_id: str, secret_key: str | None = None) -> dict[str, str]:
        settings = test_settings
        if secret_key is not None:
            settings = test_settings.model_copy(update={"secret_key": secret_key})
        with patch("careerstudio.services.auth.get_settings", return_value=settings):
            token = create_access_token(recruiter_id)
        return {"Authorization": f"Bearer {token}"}

    return _token_headers


@pytest.fixture
def other_recruiter(test_db_session) -> Recruiter:
    return make_recruiter(test_db_session, "other@globex.com")


@pytest.fixture
def other_auth_headers(other_recruiter, test_settings) -> dict[str, str]:
    return auth_headers_for(other_recruiter, test_settings)


def make_jobs(session: Session, company: Company, specs: list[tuple[str, str, JobType]]) -> list[Job]:
    """Create jobs, newest last in `specs` order."""
    base = datetime(2025, 1, 1, 12, 0, 0)
    jobs = []
    for i, (title, location, job_type) in enumerate(specs):
        job = Job(
            company_id=company.id,
            title=title,
            location=location,
            job_type=job_type,
            description=f"{title} in {location}",
            created_at=base + timedelta(minutes=i),
        )
        session.add(job)
        jobs.append(job)
    session.commit()
    return jobs


@pytest.fixture
def company_jobs(test_db_session, company) -> list[Job]:
    """Five jobs across locations and types."""
    return make_jobs(
        test_db_session,
        company,
        [
            ("Backend Engineer", "Berlin", JobType.FULL_TIME),
            ("Frontend Engineer", "Remote", JobType.FULL_TIME),
            ("Data Analyst", "Berlin", JobType.CONTRACT),
            ("Engineering Intern", "Paris", JobType.INTERNSHIP),
            ("Product Designer", "Remote", JobType.PART_TIME),
        ],
    )


# ============================================================================
# Fixture Data Loaders
# ============================================================================


def load_fixture(filename: str) -> dict:
    """Load a fixture file."""
    fixture_path = FIXTURES_DIR / filename
    with open(fixture_path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def company_fixture() -> dict:
    """Load the company document fixture."""
    return load_fixture("company.json")


@pytest.fixture
def company_document(company_fixture) -> CompanyDocument:
    return CompanyDocument.model_validate(company_fixture)


@pytest.fixture
def add_jobs(test_db_session):
    """Factory fixture: add jobs to a company."""

    def _add_jobs(company: Company, specs: list[tuple[str, str, JobType]]) -> list[Job]:
        return make_jobs(test_db_session, company, specs)

    return _add_jobs
