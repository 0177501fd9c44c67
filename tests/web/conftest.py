"""Shared fixtures for web API tests."""

import pytest
from fastapi.testclient import TestClient

from web.deps import get_feedback_store


@pytest.fixture
def app():
    from web.app import app

    return app


@pytest.fixture
def client(app, feedback_store):
    """Test client backed by a fresh tmp SQLite store."""
    app.dependency_overrides[get_feedback_store] = lambda: feedback_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def visitor_headers():
    return {"X-Visitor-Id": "v_1700000000000_abc123def"}
