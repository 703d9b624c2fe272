"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite)
- Seed data: companies c1-c3, three jobs, users u1/u2 and admin a1
- FastAPI test client and bearer-token headers
"""

import os

# Must be set before the app (and its settings) are imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JSON_LOGS", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Application, Company, Job, User  # noqa: F401 - register tables on Base.metadata
from app.core.database import Base, Database, get_db
from app.core.security import create_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test and drop it afterwards.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(db_session):
    """Storage adapter over the test session"""
    return Database(db_session)


@pytest.fixture
def seeded(storage):
    """
    Insert the shared fixture rows and return the generated job ids.
    """
    for n in (1, 2, 3):
        company_crud.create(storage, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        })

    job1 = job_crud.create(storage, {"title": "Job1", "salary": 100000, "equity": 0.1, "companyHandle": "c1"})
    job2 = job_crud.create(storage, {"title": "Job2", "salary": 150000, "equity": 0.2, "companyHandle": "c2"})
    job3 = job_crud.create(storage, {"title": "Job3", "salary": 50000, "equity": 0, "companyHandle": "c1"})

    for username, is_admin in (("u1", False), ("u2", False), ("a1", True)):
        user_crud.register(storage, {
            "username": username,
            "password": f"password-{username}",
            "firstName": f"{username.upper()}F",
            "lastName": f"{username.upper()}L",
            "email": f"{username}@example.com",
            "isAdmin": is_admin,
        })

    return {"job_ids": [job1["id"], job2["id"], job3["id"]]}


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.

    Used without a `with` block so the startup hook (which targets the real
    database) does not run.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


def _headers(username: str, is_admin: bool) -> dict:
    token = create_token({"username": username, "isAdmin": is_admin})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def u1_headers():
    return _headers("u1", False)


@pytest.fixture
def u2_headers():
    return _headers("u2", False)


@pytest.fixture
def admin_headers():
    return _headers("a1", True)
