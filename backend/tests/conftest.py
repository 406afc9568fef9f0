"""
Pytest fixtures for gateway tests
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from main import app
from services.upstream import get_http_client

API_BASE = "https://api.tmdb.test/3"
IMAGE_BASE = "https://image.tmdb.test"


def make_settings(**overrides) -> Settings:
    values = {
        "tmdb_api_key": "test-key",
        "tmdb_api_base": API_BASE,
        "tmdb_image_base": IMAGE_BASE,
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(settings):
    """Test client whose upstream calls go through the real httpx stack (mock with respx)."""
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def transport_client(settings):
    """Factory: test client whose upstream is an httpx.MockTransport handler."""
    def _make(handler) -> TestClient:
        upstream = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = lambda: upstream
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
