from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Root scripts (list_users.py, reset_password.py ...) live beside the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cardzen_api.app.core.config import Settings
from cardzen_api.app.core.db import Database
from cardzen_api.app.main import create_app


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        secret_key="test-secret",
        database_url=str(tmp_path / "cardzen.db"),
        password_hash_iterations=1_000,
    )


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app_settings) -> Database:
    database = Database(app_settings.database_url)
    database.init_db()
    return database


@pytest.fixture
def signup(client):
    """Register and log in a user; return the bearer headers."""

    def _signup(username: str = "alice", email: str | None = None, password: str = "pw1") -> dict:
        email = email or f"{username}@x.com"
        resp = client.post("/register", json={"username": username, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        resp = client.post("/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _signup
