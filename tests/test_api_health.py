"""Tests for the /health API endpoint."""

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.api.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        app_name="Audiograph Test Service",
        log_level="DEBUG",
        sample_rate=22050,
    )


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create a test client with the app."""
    app = create_app(test_settings)
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        """Test that /health returns status ok."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"

    def test_health_includes_version(self, client: TestClient, test_settings: Settings) -> None:
        """Test that /health includes the app version."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["app_version"] == test_settings.app_version

    def test_health_includes_sample_rate(self, client: TestClient, test_settings: Settings) -> None:
        """Test that /health includes the configured sample rate."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["sample_rate"] == 22050

    def test_health_has_request_id_header(self, client: TestClient) -> None:
        """Test that response includes X-Request-ID header."""
        response = client.get("/health")

        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        request_id = response.headers["X-Request-ID"]
        assert len(request_id) > 0

    def test_health_with_custom_request_id(self, client: TestClient) -> None:
        """Test that custom X-Request-ID is preserved."""
        custom_id = "test-request-123"
        response = client.get(
            "/health",
            headers={"X-Request-ID": custom_id},
        )

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == custom_id

    def test_health_has_timing_header(self, client: TestClient) -> None:
        """Test that response includes the response time header."""
        response = client.get("/health")

        assert response.headers["X-Response-Time"].endswith("ms")
