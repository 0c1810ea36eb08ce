"""Shared fixtures: an in-memory graph store and a live test client."""

import pytest
from fastapi.testclient import TestClient

from graph_canvas.api.main import create_app
from graph_canvas.config.settings import APISettings, DatabaseSettings, Settings
from graph_canvas.storage.duckdb_client import DuckDBClient


@pytest.fixture
def db():
    """Initialized in-memory DuckDB client with the graph schema."""
    client = DuckDBClient(":memory:")
    client.initialize()
    yield client
    client.close()


@pytest.fixture
def settings():
    """Settings pointing at an in-memory store."""
    return Settings(
        database=DatabaseSettings(path=":memory:"),
        api=APISettings(cors_allowed_origins="http://localhost:5173"),
    )


@pytest.fixture
def client(settings):
    """Test client running the full app lifespan."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
