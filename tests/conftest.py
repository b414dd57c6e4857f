"""
Test configuration for the hospital staff administration backend.
"""
import os

# Settings are read from the environment on first use, so configure it before
# the application is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hospital_admin.auth.models import User, UserRole
from hospital_admin.config import get_settings
from hospital_admin.core.security import create_access_token
from hospital_admin.database import Base, get_db
from hospital_admin.main import app

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


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

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

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def make_user(db):
    """
    Factory inserting a user straight into the store.
    """
    def _make_user(
        username="alice",
        password="secret123",
        name="Alice Zhang",
        email=None,
        role=UserRole.USER,
        is_active=True,
    ):
        user = User(
            username=username,
            name=name,
            email=email or f"{username}@example.com",
            role=role,
            is_active=is_active,
        )
        user.set_password(password)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user(username="root", password="adminpass", name="Admin", role=UserRole.ADMIN)


@pytest.fixture
def regular_user(make_user):
    return make_user(username="alice", password="secret123")


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user, settings):
    return bearer(create_access_token(admin_user.id, admin_user.role.value, settings))


@pytest.fixture
def user_headers(regular_user, settings):
    return bearer(create_access_token(regular_user.id, regular_user.role.value, settings))
