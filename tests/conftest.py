"""Pytest fixtures for testing"""

import os

# Point the application engine at SQLite before the app modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_loanready.db")

import pytest
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loanready.api.main import create_app
from loanready.infrastructure.database.models import Base
from loanready.infrastructure.database.session import get_db
from loanready.domain.models import (
    Business,
    Director,
    DocumentGroup,
    DocumentGroupStatus,
    DocumentGroupType,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def complete_business() -> Business:
    """Business with every required field filled and a short description"""
    return Business(
        legal_name="Sharma Textiles Pvt Ltd",
        entity_type="PRIVATE_LIMITED",
        sector="Manufacturing",
        city="Surat",
        state="Gujarat",
        brief_description="Textile mill",
    )


@pytest.fixture
def empty_business() -> Business:
    """Business missing the fields scored as basic information"""
    return Business(legal_name="", entity_type=None, sector=None, city=None, state=None)


@pytest.fixture
def kyc_director() -> Director:
    return Director(name="Anita Sharma", pan="ABCPS1234K", aadhaar_number="123456789012")


@pytest.fixture
def make_groups() -> Callable[..., list]:
    """Build the five document groups, NOT_STARTED unless overridden by type name"""

    def _make(**statuses: DocumentGroupStatus) -> list:
        return [
            DocumentGroup(type=group_type, status=statuses.get(group_type.value, DocumentGroupStatus.NOT_STARTED))
            for group_type in DocumentGroupType
        ]

    return _make


@pytest.fixture
def business_payload() -> dict:
    """Request body for creating a business through the API"""
    return {
        "owner_id": "owner_1",
        "legal_name": "Sharma Textiles Pvt Ltd",
        "entity_type": "PRIVATE_LIMITED",
        "sector": "Manufacturing",
        "city": "Surat",
        "state": "Gujarat",
    }
