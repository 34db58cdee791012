"""
Shared fixtures for the API test suite.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from teacher_registry.core import rate_limit
from teacher_registry.core.config import settings
from teacher_registry.core.database import get_db
from teacher_registry.main import app

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture(autouse=True)
def reset_rate_limit_store(monkeypatch):
    """Start every test with an empty in-memory rate limit window."""
    rate_limit._memory_store.clear()
    monkeypatch.setattr(rate_limit, "_last_sweep", 0.0)
    yield
    rate_limit._memory_store.clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point storage at a temp directory and configure a known admin token."""
    monkeypatch.setattr(settings, "admin_token", ADMIN_TOKEN)
    monkeypatch.setattr(settings, "upload_dir", tmp_path / "uploads")
    monkeypatch.setattr(settings, "data_dir", tmp_path / "data")
    return settings


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def client(mock_db):
    """
    Test client with the database dependency overridden.

    The lifespan is not run, so no real database or Redis is contacted.
    """

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
