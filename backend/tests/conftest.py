import os
import tempfile

# must happen before storefront.config is imported anywhere
_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["RESET_DB"] = "false"

import pytest
from fastapi.testclient import TestClient

from storefront.db import SessionLocal, init_db
from storefront.main import app
from storefront.repositories.user_repo import UserRepository


@pytest.fixture(autouse=True)
def reset_db():
    # Recreate DB fresh for every test
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def set_roles(email: str, roles, is_active: bool = True):
    s = SessionLocal()
    try:
        user = UserRepository(s).get_by_email(email)
        user.roles = list(roles)
        user.is_active = is_active
        s.commit()
    finally:
        s.close()


def register(client, email: str, password: str = "Abc123", full_name: str = "Test User"):
    res = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "full_name": full_name},
    )
    assert res.status_code == 201, res.text
    return res.json()


def auth_headers(client, email: str, roles=("user",), password: str = "Abc123"):
    """Register `email`, give it `roles`, log in and return the Authorization header."""
    register(client, email, password=password)
    set_roles(email, roles)
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return auth_headers(client, "admin@example.com", roles=("admin",))
