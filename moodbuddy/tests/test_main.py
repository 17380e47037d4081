"""
Tests for health checks and the error envelope.
"""
from fastapi.testclient import TestClient
from moodbuddy.core.exceptions import ForbiddenException
from moodbuddy.core.config import settings
from moodbuddy.main import app
from moodbuddy.services import stats_service


def test_health(client):
    """Test both health check paths."""
    for path in ("/health", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "timestamp" in body


def test_unknown_route(client):
    """Test that unknown routes get the envelope."""
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route /api/nothing-here not found"}


def test_forbidden_renders_envelope(client, auth_headers, monkeypatch):
    """Test that API exceptions keep their status and message."""
    def deny(*args, **kwargs):
        raise ForbiddenException("Not allowed to view statistics")

    monkeypatch.setattr(stats_service, "get_overall_stats", deny)
    response = client.get("/api/mood/stats", headers=auth_headers)
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Not allowed to view statistics"}


def test_unexpected_error_hides_details(client, auth_headers, monkeypatch):
    """Test that unexpected failures become a bare 500."""
    def explode(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(stats_service, "get_overall_stats", explode)
    quiet_client = TestClient(app, raise_server_exceptions=False)
    response = quiet_client.get("/api/mood/stats", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Server Error"}
    assert "database exploded" not in response.text


def test_unexpected_error_stack_in_development(client, auth_headers, monkeypatch):
    """Test that only development mode with DEBUG adds a traceback."""
    def explode(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(stats_service, "get_overall_stats", explode)
    quiet_client = TestClient(app, raise_server_exceptions=False)

    monkeypatch.setattr(settings, "DEBUG", True)
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    body = quiet_client.get("/api/mood/stats", headers=auth_headers).json()
    assert "stack" not in body

    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    body = quiet_client.get("/api/mood/stats", headers=auth_headers).json()
    assert body["message"] == "Server Error"
    assert any("database exploded" in line for line in body["stack"])
