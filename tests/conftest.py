"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown with seeded companies, jobs and users
- FastAPI test client
- Tokens for a regular user and an admin
"""

import os

# Must be set before the app reads its settings
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite:///:memory:")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_token, get_password_hash
from app.models import Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed(db):
    """
    Three companies, four jobs (one without salary or equity) and two users.
    """
    db.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ])
    db.flush()

    db.add_all([
        Job(title="job1", salary=20000, equity=Decimal("0.25"), company_handle="c1"),
        Job(title="job2", salary=40000, equity=Decimal("0"), company_handle="c1"),
        Job(title="job3", salary=75000, equity=Decimal("0.6"), company_handle="c2"),
        Job(title="intern", salary=None, equity=None, company_handle="c3"),
    ])

    db.add_all([
        User(
            username="u1",
            password=get_password_hash("password1"),
            first_name="U1F",
            last_name="U1L",
            email="user1@user.com",
            is_admin=False,
        ),
        User(
            username="admin",
            password=get_password_hash("adminpass"),
            first_name="AdF",
            last_name="AdL",
            email="admin@user.com",
            is_admin=True,
        ),
    ])
    db.commit()


def job_id(db, title: str) -> int:
    """Look up a seeded job's generated id by title."""
    return db.query(Job).filter(Job.title == title).one().id


@pytest.fixture
def db_session():
    """
    Create a fresh, seeded database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    """Authorization header for the regular user u1"""
    return {"Authorization": f"Bearer {create_token('u1', False)}"}


@pytest.fixture
def admin_headers():
    """Authorization header for the admin user"""
    return {"Authorization": f"Bearer {create_token('admin', True)}"}


@pytest.fixture
def sample_company_data():
    """Sample company data for testing"""
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 10,
        "logoUrl": "http://new.img",
    }


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "newJob",
        "salary": 10000,
        "equity": 0.2,
        "companyHandle": "c1",
    }
