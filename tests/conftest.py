# ================================
# TEST CONFIGURATION (tests/conftest.py)
# ================================

import os
import tempfile

# Settings are read at import time, so the environment is prepared first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="societyhub-uploads-")
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient

from societyhub.main import app
from societyhub.core.database import engine, SessionLocal
from societyhub.core.security import create_access_token
from societyhub.models import Base
from societyhub.services.auth_service import AuthService

PASSWORD = "password123"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


# The shutdown hook disposes the engine, so the schema is torn down before the client
@pytest.fixture(autouse=True)
def db(client):
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db):
    """Factory creating a persisted user with the given role"""
    counter = {"n": 0}

    def _make_user(role="resident", name=None, email=None, password=PASSWORD, permissions=None, unit=None):
        counter["n"] += 1
        return AuthService.create_user(
            db,
            name=name or f"{role.title()} {counter['n']}",
            email=email or f"{role}{counter['n']}@greenvalley.org",
            password=password,
            role=role,
            permissions=permissions,
            unit=unit
        )

    return _make_user


def auth_headers(user) -> dict:
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def admin(make_user):
    return make_user("admin", name="Asha Admin", email="admin@greenvalley.org")


@pytest.fixture
def committee(make_user):
    return make_user("committee_member", name="Chetan Committee", email="committee@greenvalley.org")


@pytest.fixture
def resident(make_user):
    return make_user("resident", name="Riya Resident", email="riya@greenvalley.org", unit="A-101")


@pytest.fixture
def other_resident(make_user):
    return make_user("resident", name="Omar Resident", email="omar@greenvalley.org", unit="B-202")


@pytest.fixture
def staff(make_user):
    return make_user("staff", name="Sunil Staff", email="sunil@greenvalley.org")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def committee_headers(committee):
    return auth_headers(committee)


@pytest.fixture
def resident_headers(resident):
    return auth_headers(resident)


@pytest.fixture
def other_resident_headers(other_resident):
    return auth_headers(other_resident)


@pytest.fixture
def staff_headers(staff):
    return auth_headers(staff)
