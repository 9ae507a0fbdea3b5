"""Fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient

from simpleca.application import create_app
from simpleca.di import get_infrastructure_factory


@pytest.fixture
def client(infrastructure_factory):
    """Test client whose repositories use the test storage directory."""
    app = create_app()
    app.dependency_overrides[get_infrastructure_factory] = lambda: infrastructure_factory
    return TestClient(app)


@pytest.fixture
def client_with_ca(client):
    """Test client with a generated root CA."""
    response = client.post(
        "/api/root-ca/generate",
        json={"commonName": "Test Root", "days": 30, "keySize": 1024},
    )
    assert response.status_code == 200
    return client
