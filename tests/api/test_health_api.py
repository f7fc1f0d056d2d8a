"""API tests for health endpoints."""

import pytest
from fastapi.testclient import TestClient

from tileraster.web.api import create_app


@pytest.fixture
def client():
    """Create test client."""
    app = create_app()
    return TestClient(app)


class TestHealthAPI:
    """Tests for health check endpoints."""

    def test_health_live(self, client):
        """Test GET /api/v1/health/live."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "alive"

    def test_health_ready(self, client):
        """Test GET /api/v1/health/ready."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["config"] == "ready"

    def test_health_not_ready_on_bad_config(self, client, tmp_path, monkeypatch):
        from tileraster.config import reset_config

        config_file = tmp_path / "bad.yaml"
        config_file.write_text("root: [unclosed\n")
        monkeypatch.setenv("TILERASTER_CONFIG_PATH", str(config_file))
        reset_config()

        response = client.get("/api/v1/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "not_ready"
