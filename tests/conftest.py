"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

import services.db as db
from main import app


@pytest.fixture
def client(monkeypatch):
    """App client backed by a private in-memory SQLite database."""
    eng = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    monkeypatch.setattr(db, "_ENGINE", eng)
    with TestClient(app) as c:     # runs lifespan ➜ tables created
        yield c


@pytest.fixture
def auth_headers(client):
    client.post("/api/v1/auth/init-demo")
    r = client.post("/api/v1/auth/login", json={"username": "demo", "password": "password"})
    token = r.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
