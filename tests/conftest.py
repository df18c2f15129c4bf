"""
Shared fixtures.

HTTP tests run a real application (``create_app``) against a throwaway
SQLite file; store tests use an in-memory SQLite database.
"""

from typing import Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from foodorder.core.config import Settings
from foodorder.database import Database
from foodorder.main import create_app

JWT_SECRET = "test-secret-do-not-use"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass123"


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=JWT_SECRET,
        data_directory=str(tmp_path / "data"),
        bootstrap_admin_email=ADMIN_EMAIL,
        bootstrap_admin_password=ADMIN_PASSWORD,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def client(settings):
    """Test client with the lifespan (database + bootstrap admin) running."""
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


def signup(client: TestClient, name: str, email: str, password: str = "password123"):
    return client.post("/signup", json={"name": name, "email": email, "password": password})


def login(client: TestClient, email: str, password: str = "password123") -> Dict[str, str]:
    """Log in and return headers carrying only that session's cookie.

    The client's own cookie jar is cleared so each test picks the identity
    per request, like a browser per user.
    """
    res = client.post("/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    token = res.cookies.get("jwt")
    assert token
    client.cookies.clear()
    return {"Cookie": f"jwt={token}"}


@pytest.fixture
def user_headers(client) -> Dict[str, str]:
    assert signup(client, "Regular User", "user@example.com", "userpass123").status_code == 201
    return login(client, "user@example.com", "userpass123")


@pytest.fixture
def admin_headers(client) -> Dict[str, str]:
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest_asyncio.fixture
async def database():
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.connect()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as s:
        yield s
