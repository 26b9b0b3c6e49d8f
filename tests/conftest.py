"""
Test configuration for the clinic booking backend.
"""
import itertools
import os

# Keep the application's own engine off the filesystem
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, sessionmaker
from sqlalchemy.pool import StaticPool

from clinic.config import settings
from clinic.database import Base, get_db
from clinic.main import app
from clinic.users.models import User

API = settings.api_prefix

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_emails = itertools.count(1)


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}{next(_emails)}@clinic.example.com"


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


@pytest.fixture
def make_patient(client):
    """Register a patient through the API and return its JSON body."""
    def _make(**overrides):
        payload = {
            "email": unique_email("patient"),
            "password": "secret123",
            "name": "Pat Example",
            "age": 34,
            "gender": "female",
        }
        payload.update(overrides)
        response = client.post(f"{API}/patients", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_doctor(client):
    """Create a doctor through the API and return its JSON body."""
    def _make(**overrides):
        payload = {
            "email": unique_email("doctor"),
            "password": "secret123",
            "name": "Dr. Example",
            "specialization": "Cardiology",
            "license": "LIC-001",
        }
        payload.update(overrides)
        response = client.post(f"{API}/doctors", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_ambulance(client):
    """Create an ambulance through the API and return its JSON body."""
    def _make(**overrides):
        payload = {
            "email": unique_email("ambulance"),
            "password": "secret123",
            "name": "Unit 7",
            "latitude": 52.52,
            "longitude": 13.40,
        }
        payload.update(overrides)
        response = client.post(f"{API}/ambulances", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_appointment(client):
    """Create an appointment through the API and return its JSON body."""
    def _make(patient_id, **fields):
        payload = {"patientId": patient_id}
        payload.update(fields)
        response = client.post(f"{API}/appointments", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def fail_account_delete(monkeypatch):
    """Make the final step of every cascade, removing the account row, fail."""
    original = Query.delete

    def _delete(self, *args, **kwargs):
        if self.column_descriptions[0]["entity"] is User:
            raise SQLAlchemyError("boom")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Query, "delete", _delete)
