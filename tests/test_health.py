"""Tests for health check endpoint."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at an isolated data file."""
    return Settings(data_file=tmp_path / "businesses.json")


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Create a test client with the app lifespan running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def test_health_check_returns_healthy(client: TestClient) -> None:
    """Health endpoint should return healthy status."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["business_count"] == 0


def test_health_check_includes_version(client: TestClient, settings: Settings) -> None:
    """Health endpoint should include app version from settings."""
    response = client.get("/health")

    assert response.json()["version"] == settings.app_version


def test_health_check_counts_businesses(client: TestClient) -> None:
    """Health endpoint should report how many businesses are registered."""
    client.post(
        "/businesses",
        json={
            "name": "Acme",
            "description": "Widgets",
            "email": "a@a.com",
            "category": "product",
        },
    )

    assert client.get("/health").json()["business_count"] == 1


def test_health_check_without_service(settings: Settings) -> None:
    """Health endpoint should answer 503 before the service is configured."""
    client = TestClient(create_app(settings))  # lifespan not started

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"error": "Business service not configured"}
