"""Tests for main API endpoints."""

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "test"
    assert data["ai_enabled"] is False
    assert data["transcription_enabled"] is False
    assert data["timestamp"]


def test_api_root_endpoint(client: TestClient) -> None:
    """Test API v1 root endpoint."""
    response = client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Interview Coach API v1"
    assert data["version"] == "0.1.0"
    assert data["docs"] == "/api/v1/docs"


def test_public_settings_endpoint(client: TestClient) -> None:
    """Feature flags are public and reflect the test configuration."""
    response = client.get("/api/v1/settings")
    assert response.status_code == 200
    data = response.json()
    assert data["feature_flags"] == {
        "ai": False,
        "user_registrations": True,
        "transcription": False,
    }
    assert data["interview"] == {
        "answer_types": ["text", "voice", "video"],
        "min_question_count": 3,
        "max_question_count": 12,
        "default_question_count": 5,
        "max_media_mb": 25,
        "selection_threshold": 70,
    }
    assert data["payments"] == {"methods": ["upi"], "currency": "INR"}


def test_unknown_route_returns_404(client: TestClient) -> None:
    response = client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
