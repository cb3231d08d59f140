import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the record store at a fresh sqlite file for each test."""
    path = str(tmp_path / "ward-test.db")
    monkeypatch.setattr(settings, "DATABASE_PATH", path)
    return path


@pytest.fixture
def client(db_path):
    # Entering the context runs the startup hook (tables, bed seeding)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    def _register(email, password="secret", role="NURSE", **extra):
        payload = {"name": email.split("@")[0], "email": email, "password": password, "role": role}
        payload.update(extra)
        return client.post("/users/register", json=payload)
    return _register
