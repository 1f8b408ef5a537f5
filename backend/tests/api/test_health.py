"""
Tests for health check endpoints.
"""

from fastapi.testclient import TestClient

from api import app
from shared.config import get_settings

client = TestClient(app)


class TestHealthEndpoints:
    """Tests for /api/health and /api/ready."""

    def test_health_check(self):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == get_settings().app_version

    def test_readiness_without_database(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "")
        get_settings.cache_clear()

        data = client.get("/api/ready").json()

        assert data["status"] == "degraded"
        assert data["database"] == "not configured"
        assert data["routes"] == "consistent"

    def test_readiness_with_database(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
        get_settings.cache_clear()

        data = client.get("/api/ready").json()

        assert data["status"] == "ready"
        assert data["database"] == "configured"
