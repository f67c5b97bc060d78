"""Pytest configuration and fixtures"""
import os

# Settings are read once at import time, so the test environment goes first
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_EMAIL"] = "admin@sge-corp.com"
os.environ["ADMIN_PASSWORD"] = "Admin123!"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from sge.config import token_config
from sge.database import Base, SessionLocal, engine, get_db
from sge.main import app
from sge.models.department import Department
from sge.models.employee import Employee
from sge.repositories import RefreshTokenRepository, UserRepository
from sge.services.auth_service import AuthService
from sge.services.token_service import TokenService

ADMIN_CREDENTIALS = {"email": "admin@sge-corp.com", "password": "Admin123!"}
PASSWORD = "Passw0rd!"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def token_service(db: Session) -> TokenService:
    return TokenService(token_config, RefreshTokenRepository(db))


@pytest.fixture
def auth_service(db: Session, token_service: TokenService) -> AuthService:
    return AuthService(db, token_service, UserRepository(db))


@pytest.fixture
def sample_user_data() -> dict:
    """Sample registration payload"""
    return {
        "email": "a@x.com",
        "username": "alice",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "first_name": "Alice",
        "last_name": "Martin",
    }


@pytest.fixture
def user_headers(client: TestClient, sample_user_data: dict) -> dict:
    """Bearer headers of a freshly registered user (role User)"""
    response = client.post("/api/auth/register", json=sample_user_data)
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client: TestClient) -> dict:
    """Bearer headers of the seeded admin account"""
    response = client.post("/api/auth/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def department(db: Session) -> Department:
    department = Department(name="Engineering", code="ENG", description="Builds things")
    db.add(department)
    db.commit()
    return department


@pytest.fixture
def employee(db: Session, department: Department) -> Employee:
    employee = Employee(
        first_name="Jean",
        last_name="Dupont",
        email="jean.dupont@sge-corp.com",
        position="Developer",
        salary=42000,
        hire_date=date(2023, 1, 2),
        department_id=department.id,
    )
    db.add(employee)
    db.commit()
    return employee
