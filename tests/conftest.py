"""
Shared fixtures: in-memory SQLite database, API client and authenticated users.
"""
import os
from datetime import date

# Keep the test run from writing log files
os.environ.setdefault("LOG_FILE", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.main import app
from jobtracker.db.base import Base
from jobtracker.db.models.user import User, Role
from jobtracker.db.models.job_application import JobApplication, ApplicationStatus
from jobtracker.db.session import get_db
from jobtracker.core.security import hash_password, create_access_token


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the database dependency
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    """Factory creating users directly in the database."""
    def _make_user(username: str, password: str = "secret123", role: Role = Role.USER, email: str = None) -> User:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_application(db_session):
    """Factory creating applications directly in the database."""
    def _make_application(owner: User, **fields) -> JobApplication:
        values = {
            "title": "Software Engineer",
            "company": "Acme",
            "status": ApplicationStatus.APPLIED,
            "applied_date": date(2026, 1, 15),
        }
        values.update(fields)
        application = JobApplication(user_id=owner.id, **values)
        db_session.add(application)
        db_session.commit()
        db_session.refresh(application)
        return application

    return _make_application


def bearer(user: User) -> dict:
    """Authorization header for a user."""
    return {"Authorization": f"Bearer {create_access_token(user.username)}"}


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def admin(make_user):
    return make_user("root", role=Role.ADMIN)


@pytest.fixture
def alice_headers(alice):
    return bearer(alice)


@pytest.fixture
def bob_headers(bob):
    return bearer(bob)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)
