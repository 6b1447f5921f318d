"""Tests for profile API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from interview_coach import models
from tests.conftest import start_session


class TestGetProfile:
    def test_get_profile(
        self, client: TestClient, test_user: models.User, auth_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/profile", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        user = response.json()["user"]
        assert user["id"] == test_user.id
        assert user["name"] == "Test Candidate"
        assert user["security"]["violation_count"] == 0

    def test_get_profile_requires_authentication(self, client: TestClient) -> None:
        response = client.get("/api/v1/profile")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestUpdateProfile:
    def test_update_profile_fields(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.put(
            "/api/v1/profile",
            json={
                "target_role": "  Backend Engineer ",
                "experience_level": "Mid",
                "preferred_companies": "Google, Amazon, ",
                "resume_text": "Built payment systems in Python and Go.",
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Profile updated successfully."
        assert data["user"]["target_role"] == "Backend Engineer"
        assert data["user"]["preferred_companies"] == ["Google", "Amazon"]
        assert data["user"]["name"] == "Test Candidate"

    def test_update_profile_rejects_short_name(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.put("/api/v1/profile", json={"name": "A"}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteAccount:
    def test_delete_requires_confirmation(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.request(
            "DELETE", "/api/v1/profile/account", json={"confirmation": "yes"}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "DELETE" in response.json()["detail"]

    def test_delete_account_removes_sessions(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        auth_headers: dict[str, str],
        seeded_questions: int,
    ) -> None:
        user_id = test_user.id
        start_session(client, auth_headers)

        response = client.request(
            "DELETE",
            "/api/v1/profile/account",
            json={"confirmation": "DELETE"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["deleted"] == {"users": 1, "interview_sessions": 1, "payments": 0}
        db_session.expire_all()
        assert db_session.query(models.User).filter_by(id=user_id).first() is None
        assert db_session.query(models.InterviewSession).filter_by(user_id=user_id).count() == 0

        # The token no longer resolves to an account
        me = client.get("/api/v1/auth/me", headers=auth_headers)
        assert me.status_code == status.HTTP_401_UNAUTHORIZED
