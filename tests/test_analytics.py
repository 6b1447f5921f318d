"""Tests for progress, leaderboard and admin analytics endpoints."""

from datetime import UTC, datetime, timedelta

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from interview_coach import models
from tests.conftest import answer_question, auth_headers_for, create_test_user, start_session


def complete_one_session(client: TestClient, headers: dict[str, str]) -> dict:
    session = start_session(client, headers)
    answer_question(client, headers, session["id"], session["questions"][0]["id"])
    response = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=headers)
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["session"]


def buy_pro(client: TestClient, headers: dict[str, str]) -> str:
    intent = client.post("/api/v1/payments/intent", json={"plan": "pro"}, headers=headers)
    payment_id = intent.json()["payment"]["payment_id"]
    confirmed = client.post(
        f"/api/v1/payments/{payment_id}/confirm", json={"utr": "UTR998877"}, headers=headers
    )
    assert confirmed.status_code == status.HTTP_200_OK, confirmed.text
    return payment_id


class TestProgress:
    def test_empty_progress(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/analytics/progress", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["completed_sessions"] == 0
        assert data["average_score"] == 0
        assert data["score_trend"] == []
        assert data["category_breakdown"] == []
        assert len(data["metric_averages"]) == 8
        assert all(item["value"] == 0 for item in data["metric_averages"])
        missions = {mission["id"]: mission for mission in data["goals"]["missions"]}
        assert set(missions) == {"weekly_sessions_3", "weekly_avg_75", "weekly_clarity_70"}
        assert not any(mission["completed"] for mission in missions.values())

    def test_progress_after_completed_session(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        completed = complete_one_session(client, auth_headers)
        start_session(client, auth_headers)

        response = client.get("/api/v1/analytics/progress", headers=auth_headers)

        data = response.json()
        score = completed["overall_score"]
        assert data["completed_sessions"] == 1
        assert data["average_score"] == score
        assert [point["score"] for point in data["score_trend"]] == [score]
        assert data["category_breakdown"] == [
            {"category": "HR", "average_score": score, "sessions": 1}
        ]
        goals = data["goals"]
        assert goals["weekly_sessions"] == 1
        assert goals["weekly_average_score"] == score
        assert goals["streak"] == 1
        assert "First Mock" in goals["badges"]
        missions = {mission["id"]: mission for mission in goals["missions"]}
        assert missions["weekly_sessions_3"]["progress"] == 1
        assert missions["weekly_sessions_3"]["target"] == 3

    def test_requires_auth(self, client: TestClient) -> None:
        response = client.get("/api/v1/analytics/progress")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestLeaderboard:
    def test_orders_by_points_then_streak(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        test_user.points = 40
        db_session.commit()
        create_test_user(db_session, email="top@example.com", name="Top", points=90)
        create_test_user(db_session, email="tied@example.com", name="Tied", points=40, streak=3)

        response = client.get("/api/v1/leaderboard", headers=auth_headers_for(test_user))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [entry["name"] for entry in data["entries"]] == ["Top", "Tied", "Test Candidate"]
        assert [entry["rank"] for entry in data["entries"]] == [1, 2, 3]
        assert data["my_rank"]["rank"] == 3
        assert data["my_rank"]["sessions"] == 0

    def test_includes_session_stats(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        completed = complete_one_session(client, auth_headers)

        data = client.get("/api/v1/leaderboard", headers=auth_headers).json()

        assert data["my_rank"]["sessions"] == 1
        assert data["my_rank"]["average_score"] == completed["overall_score"]
        assert data["my_rank"]["points"] > 0


class TestAdminOverview:
    def test_requires_admin(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/analytics/admin-overview", headers=auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Admin access is required."

    def test_empty_platform(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/analytics/admin-overview", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["totals"]["sessions"] == 0
        assert data["totals"]["users"] == 1
        assert len(data["trend"]) == 14
        assert [alert["title"] for alert in data["alerts"]] == ["No session data yet"]

    def test_in_progress_session_raises_dropoff(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        admin_headers: dict[str, str],
        seeded_questions: int,
    ) -> None:
        start_session(client, auth_headers)

        data = client.get("/api/v1/analytics/admin-overview", headers=admin_headers).json()

        totals = data["totals"]
        assert totals["users"] == 2
        assert totals["sessions"] == 1
        assert totals["in_progress"] == 1
        assert totals["dropoff_percent"] == 100
        sources = {item["source"]: item for item in data["source_breakdown"]}
        assert sources["predefined"] == {"source": "predefined", "count": 1, "percent": 100}
        assert data["trend"][-1]["started"] == 1
        risk = data["top_risk_sessions"][0]
        assert risk["user_name"] == "Test Candidate"
        assert risk["progress_percent"] == 0
        assert risk["risk_score"] == 110
        titles = [alert["title"] for alert in data["alerts"]]
        assert "High drop-off trend" in titles
        assert "Low AI question usage" in titles


class TestAdminUsers:
    def test_list_and_filter(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        admin_headers: dict[str, str],
    ) -> None:
        create_test_user(
            db_session, email="banned@example.com", name="Banned", account_status="suspended"
        )

        everyone = client.get("/api/v1/analytics/admin-users", headers=admin_headers).json()
        suspended = client.get(
            "/api/v1/analytics/admin-users",
            params={"status": "suspended", "role": "nobody"},
            headers=admin_headers,
        ).json()

        assert everyone["totals"]["users"] == 3
        assert everyone["totals"]["admins"] == 1
        assert everyone["totals"]["suspended"] == 1
        assert everyone["filters"]["limit"] == 200
        assert suspended["filters"]["account_status"] == "suspended"
        assert suspended["filters"]["role"] == ""
        assert [user["email"] for user in suspended["users"]] == ["banned@example.com"]

    def test_search(
        self, client: TestClient, test_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        data = client.get(
            "/api/v1/analytics/admin-users", params={"search": "CANDIDATE@"}, headers=admin_headers
        ).json()

        assert [user["id"] for user in data["users"]] == [test_user.id]

    def test_suspend_and_reset_violations(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict[str, str],
    ) -> None:
        user = create_test_user(db_session, violation_count=3)

        response = client.patch(
            f"/api/v1/analytics/admin-users/{user.id}",
            json={"account_status": "Suspended", "reset_violations": True},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "User updated successfully."
        assert data["user"]["account_status"] == "suspended"
        assert data["user"]["security"]["violation_count"] == 0

    def test_invalid_role(
        self, client: TestClient, test_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/analytics/admin-users/{test_user.id}",
            json={"role": "owner"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid role. Allowed: user/admin."

    def test_admin_cannot_demote_self(
        self, client: TestClient, admin_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/analytics/admin-users/{admin_user.id}",
            json={"role": "user"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "You cannot change your own role."

    def test_admin_cannot_suspend_self(
        self, client: TestClient, admin_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/analytics/admin-users/{admin_user.id}",
            json={"account_status": "suspended"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "You cannot suspend your own account."

    def test_unknown_user(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.patch(
            "/api/v1/analytics/admin-users/9999",
            json={"role": "admin"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestAdminBilling:
    def test_totals_and_rows(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        payment_id = buy_pro(client, auth_headers)

        response = client.get("/api/v1/analytics/admin-billing", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        totals = data["totals"]
        assert totals["active_paid_users"] == 1
        assert totals["active_pro_users"] == 1
        assert totals["paid_payments"] == 1
        assert totals["revenue_by_currency"] == {"INR": 499}
        assert totals["revenue_inr_month"] == 499
        row = data["payments"][0]
        assert row["payment_id"] == payment_id
        assert row["user_email"] == "candidate@example.com"
        plans = {user["email"]: user["subscription"]["plan"] for user in data["subscribers"]}
        assert plans == {"admin@example.com": "free", "candidate@example.com": "pro"}

    def test_stale_intent_counts_as_expired(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        intent = client.post(
            "/api/v1/payments/intent", json={"plan": "elite"}, headers=auth_headers
        )
        payment_id = intent.json()["payment"]["payment_id"]
        row = db_session.query(models.Payment).filter_by(payment_id=payment_id).one()
        row.expires_at = datetime.now(UTC) - timedelta(minutes=5)
        db_session.commit()

        data = client.get(
            "/api/v1/analytics/admin-billing", params={"status": "expired"}, headers=admin_headers
        ).json()

        assert data["totals"]["expired_payments"] == 1
        assert data["totals"]["pending_payments"] == 0
        assert [item["status"] for item in data["payments"]] == ["expired"]

    def test_payment_status_filter(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        buy_pro(client, auth_headers)

        data = client.get(
            "/api/v1/analytics/admin-billing", params={"status": "pending"}, headers=admin_headers
        ).json()

        assert data["filters"]["status"] == "pending"
        assert data["payments"] == []
        assert data["totals"]["total_payments"] == 1


class TestAdminSubscription:
    def test_grant_plan(
        self, client: TestClient, test_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/analytics/admin-subscription/{test_user.id}",
            json={"plan": "Elite", "status": "active", "days": 10},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Subscription updated successfully."
        subscription = data["user"]["subscription"]
        assert subscription["plan"] == "elite"
        assert subscription["status"] == "active"
        start = datetime.fromisoformat(subscription["current_period_start"])
        end = datetime.fromisoformat(subscription["current_period_end"])
        assert end - start == timedelta(days=10)

    def test_reset_to_free(
        self, client: TestClient, test_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        client.patch(
            f"/api/v1/analytics/admin-subscription/{test_user.id}",
            json={"plan": "pro", "status": "active"},
            headers=admin_headers,
        )

        response = client.patch(
            f"/api/v1/analytics/admin-subscription/{test_user.id}",
            json={"plan": "free", "status": "active"},
            headers=admin_headers,
        )

        subscription = response.json()["user"]["subscription"]
        assert subscription["plan"] == "free"
        assert subscription["current_period_end"] is None

    def test_invalid_plan(
        self, client: TestClient, test_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/analytics/admin-subscription/{test_user.id}",
            json={"plan": "gold", "status": "active"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Valid plan is required (free/pro/elite)."

    def test_days_out_of_range(
        self, client: TestClient, test_user: models.User, admin_headers: dict[str, str]
    ) -> None:
        response = client.patch(
            f"/api/v1/analytics/admin-subscription/{test_user.id}",
            json={"plan": "pro", "status": "active", "days": 1000},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
