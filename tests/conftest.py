"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite)
- FastAPI test client
- Seed data (companies, users, jobs, technologies) and auth headers
"""

import os

# Cheap hashing for tests; must be set before the app reads its settings
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly import models  # noqa: F401  Register tables on Base.metadata
from jobly.core.database import Base, get_db, run_query
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces foreign keys (and their cascades) when asked to."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ensure that these match the seed data below
SEED_USERS = [
    {"username": "u1", "first_name": "U1F", "last_name": "U1L", "email": "user1@user.com", "is_admin": True},
    {"username": "u2", "first_name": "U2F", "last_name": "U2L", "email": "user2@user.com", "is_admin": False},
    {"username": "u3", "first_name": "U3F", "last_name": "U3L", "email": "user3@user.com", "is_admin": False},
]

SEED_JOBS = [
    {"id": 1, "title": "j1", "salary": 0, "equity": 1.0, "companyHandle": "c1"},
    {"id": 2, "title": "j2", "salary": 100, "equity": 0.5, "companyHandle": "c1"},
    {"id": 3, "title": "j3", "salary": 1000, "equity": 0.0, "companyHandle": "c2"},
]


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
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
def seeded_db(db_session):
    """
    Database with three companies, three users (u1 is an admin), three jobs
    and technologies linking them:

    - c1 (1 employee): j1 (salary 0, equity 1.0), j2 (salary 100, equity 0.5)
    - c2 (2 employees): j3 (salary 1000, equity 0)
    - c3 (3 employees): no jobs
    - j1 uses t1, t2, t3; j2 uses t1
    - u1 knows t1, t2; u2 knows t1
    """
    run_query(
        db_session,
        """INSERT INTO companies (handle, name, num_employees, description, logo_url)
           VALUES ('c1', 'C1', 1, 'Desc1', 'http://c1.img'),
                  ('c2', 'C2', 2, 'Desc2', 'http://c2.img'),
                  ('c3', 'C3', 3, 'Desc3', 'http://c3.img')""",
    )

    for index, user in enumerate(SEED_USERS, start=1):
        user_crud.register(db_session, password=f"password{index}", **user)

    for job in SEED_JOBS:
        run_query(
            db_session,
            "INSERT INTO jobs (title, salary, equity, company_handle) VALUES ($1, $2, $3, $4)",
            [job["title"], job["salary"], job["equity"], job["companyHandle"]],
        )

    run_query(db_session, "INSERT INTO technologies (name) VALUES ('t1'), ('t2'), ('t3')")
    run_query(
        db_session,
        "INSERT INTO jobs_technologies (job_id, tech_id) VALUES (1, 1), (1, 2), (1, 3), (2, 1)",
    )
    run_query(
        db_session,
        "INSERT INTO users_technologies (username, tech_id) VALUES ('u1', 1), ('u1', 2), ('u2', 1)",
    )
    db_session.commit()

    return db_session


@pytest.fixture
def admin_headers():
    """Authorization headers for u1 (admin)"""
    return {"Authorization": f"Bearer {create_access_token('u1', is_admin=True)}"}


@pytest.fixture
def user_headers():
    """Authorization headers for u2 (not an admin)"""
    return {"Authorization": f"Bearer {create_access_token('u2', is_admin=False)}"}
