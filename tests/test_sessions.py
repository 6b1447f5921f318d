"""Tests for interview session API endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from interview_coach import models
from interview_coach.domain.interview.entities.interview_session import (
    TERMINATION_RECOMMENDATION,
)
from interview_coach.domain.interview.services.answer_evaluator import ExternalAssessment
from interview_coach.infrastructure.ai.ai_service import AIInterviewService
from interview_coach.infrastructure.ai.transcription_service import WhisperTranscriptionService
from tests.conftest import answer_question, auth_headers_for, create_test_user, start_session

SUBMISSION_MODULE = "interview_coach.application.interview.use_cases.answer_submission_use_case"
COACHING_MODULE = "interview_coach.application.interview.use_cases.interview_coaching_use_case"


class TestCreateSession:
    def test_predefined_session(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        assert session["status"] == "in_progress"
        assert session["category"] == "HR"
        assert session["question_source"] == "predefined"
        assert session["target_role"] == "Generalist"
        assert session["company_simulation"] == "Startup"
        assert len(session["questions"]) == 3
        assert [q["position"] for q in session["questions"]] == [1, 2, 3]
        assert all(q["question_ref"] is not None for q in session["questions"])
        assert all(q["answer"] is None for q in session["questions"])
        assert session["certificate"]["id"] == ""

    def test_count_is_clamped(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers, count=1)

        assert len(session["questions"]) == 3

    def test_empty_bank(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/v1/sessions",
            json={"category": "HR", "source": "predefined"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "No predefined questions found for this setup."

    def test_generated_session_falls_back_to_templates(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        session = start_session(
            client,
            auth_headers,
            category="Technical",
            source="ai",
            count=4,
            target_role="Data Engineer",
            focus_areas=["clarity", "clarity", "confidence"],
        )

        assert session["question_source"] == "ai"
        assert len(session["questions"]) == 4
        assert all(q["question_ref"] is None for q in session["questions"])
        assert session["focus_areas"] == ["clarity", "confidence"]
        assert "Data Engineer" in session["questions"][0]["prompt"]

    def test_invalid_source(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/v1/sessions", json={"category": "HR", "source": "forum"}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid question source."

    def test_requires_authentication(self, client: TestClient) -> None:
        response = client.post("/api/v1/sessions", json={"category": "HR"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestReadSessions:
    def test_list_sessions(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        first = start_session(client, auth_headers)
        second = start_session(client, auth_headers, category="Technical")

        response = client.get("/api/v1/sessions", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        sessions = response.json()["sessions"]
        assert {item["id"] for item in sessions} == {first["id"], second["id"]}
        assert all(item["question_count"] == 3 for item in sessions)
        assert all(item["answered_count"] == 0 for item in sessions)

    def test_get_session(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        created = start_session(client, auth_headers)

        response = client.get(f"/api/v1/sessions/{created['id']}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["session"]["id"] == created["id"]

    def test_other_users_session_is_hidden(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        seeded_questions: int,
    ) -> None:
        created = start_session(client, auth_headers)
        other = create_test_user(db_session, email="other@example.com", name="Other")

        response = client.get(
            f"/api/v1/sessions/{created['id']}", headers=auth_headers_for(other)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Session not found."

    def test_missing_session(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/sessions/999999", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSubmitAnswer:
    def test_text_answer_is_scored(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)
        question_id = session["questions"][0]["id"]

        data = answer_question(client, auth_headers, session["id"], question_id)

        assert data["question_id"] == question_id
        answer = data["answer"]
        assert answer["answer_type"] == "text"
        assert answer["transcript"].startswith("I led the migration")
        assert answer["media_reference"] == ""
        assert answer["duration_sec"] == 30
        assert 0 < answer["scores"]["overall"] <= 100
        assert answer["scores"]["clarity"] == answer["scores"]["communication"]
        assert answer["scores"]["relevance"] == answer["scores"]["technical_accuracy"]
        assert answer["scores"]["facial_expression"] == 60
        assert [marker["second"] for marker in answer["timeline_markers"]] == [6, 17, 26]
        assert answer["feedback_tips"]
        assert data["follow_up_question"].startswith("Follow-up:")

    def test_client_timeline_markers_are_kept(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={
                "answer_type": "text",
                "text_answer": "I owned the release and improved uptime.",
                "timeline_markers": '[{"second": 4, "label": "Pause here"}, {"second": 9}]',
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        markers = response.json()["answer"]["timeline_markers"]
        assert markers == [{"second": 4, "label": "Pause here", "kind": "info"}]

    def test_out_of_range_ratings_are_clamped(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={
                "answer_type": "text",
                "text_answer": "I owned the release and improved uptime for the team.",
                "facial_expression_score": "150",
                "confidence_self_rating": "12",
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        answer = response.json()["answer"]
        assert answer["facial_expression_score"] == 100
        assert answer["confidence_self_rating"] == 10

    def test_answer_is_stored_on_session(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)
        question_id = session["questions"][1]["id"]
        answer_question(client, auth_headers, session["id"], question_id)

        response = client.get(f"/api/v1/sessions/{session['id']}", headers=auth_headers)

        questions = response.json()["session"]["questions"]
        assert questions[0]["answer"] is None
        assert questions[1]["answer"]["answer_type"] == "text"

    def test_empty_answer(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={"answer_type": "text", "text_answer": "   "},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == (
            "Answer is empty. Provide text or upload recorded media."
        )

    def test_unknown_answer_type(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={"answer_type": "telepathy", "text_answer": "Some answer text"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_question_not_in_session(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/999999",
            data={"answer_type": "text", "text_answer": "An answer"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Question not found in this session."

    def test_voice_answer_with_transcript_hint(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={"answer_type": "text", "transcript_hint": "I built the onboarding flow."},
            files={"audio_file": ("answer.webm", b"fake-audio", "audio/webm")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        answer = response.json()["answer"]
        assert answer["answer_type"] == "voice"
        assert answer["transcript"] == "I built the onboarding flow."
        assert answer["media_reference"].startswith(f"upload://{session['id']}/")

    def test_audio_without_transcription_is_rejected(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={"answer_type": "voice"},
            files={"audio_file": ("answer.webm", b"fake-audio", "audio/webm")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "Could not detect speech" in response.json()["detail"]

    def test_unsupported_audio_format(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={"answer_type": "voice", "transcript_hint": "Hello there"},
            files={"audio_file": ("answer.txt", b"not audio", "text/plain")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"].startswith("Unsupported audio format")

    def test_audio_is_transcribed_when_enabled(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)
        transcribe = AsyncMock(return_value="I delivered the payments rewrite on time.")

        with (
            patch(f"{SUBMISSION_MODULE}.is_transcription_enabled", return_value=True),
            patch.object(WhisperTranscriptionService, "transcribe", new=transcribe),
        ):
            response = client.post(
                f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
                data={"answer_type": "video", "duration_sec": "20"},
                files={"video_file": ("answer.mp4", b"fake-video", "video/mp4")},
                headers=auth_headers,
            )

        assert response.status_code == status.HTTP_200_OK
        answer = response.json()["answer"]
        assert answer["answer_type"] == "video"
        assert answer["transcript"] == "I delivered the payments rewrite on time."
        transcribe.assert_awaited_once()
        assert transcribe.await_args.args[1:] == ("answer.mp4", "video/mp4")

    def test_ai_assessment_is_blended(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)
        assessment = ExternalAssessment(
            confidence=90,
            communication=90,
            grammar=90,
            technical_accuracy=90,
            speaking_speed=90,
            facial_expression=90,
            feedback_tips=["Great structure."],
            improvements=["Quantify the impact."],
            relevance_notes="Directly answers the question.",
        )

        with (
            patch(f"{SUBMISSION_MODULE}.is_ai_enabled", return_value=True),
            patch.object(
                AIInterviewService, "evaluate_answer", new=AsyncMock(return_value=assessment)
            ),
            patch.object(
                AIInterviewService,
                "generate_follow_up",
                new=AsyncMock(return_value="  What would you do differently next time?  "),
            ),
        ):
            data = answer_question(
                client, auth_headers, session["id"], session["questions"][0]["id"]
            )

        answer = data["answer"]
        assert answer["feedback_tips"] == ["Great structure."]
        assert answer["improvements"] == ["Quantify the impact."]
        assert answer["relevance_notes"] == "Directly answers the question."
        assert data["follow_up_question"] == "What would you do differently next time?"

    def test_ai_failure_keeps_heuristic_scores(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        with (
            patch(f"{SUBMISSION_MODULE}.is_ai_enabled", return_value=True),
            patch.object(
                AIInterviewService,
                "evaluate_answer",
                new=AsyncMock(side_effect=RuntimeError("timeout")),
            ),
            patch.object(
                AIInterviewService,
                "generate_follow_up",
                new=AsyncMock(side_effect=RuntimeError("timeout")),
            ),
        ):
            data = answer_question(
                client, auth_headers, session["id"], session["questions"][0]["id"]
            )

        assert data["answer"]["scores"]["overall"] > 0
        assert data["follow_up_question"].startswith("Follow-up:")


class TestFollowUp:
    def test_follow_up_uses_supplied_text(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/questions/{session['questions'][0]['id']}/follow-up",
            json={"answer_text": "I mentored interns through onboarding"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["follow_up_question"] == (
            "Follow-up: In your answer about mentored, what specific action did you personally "
            "own, and what was the final result?"
        )

    def test_follow_up_without_body(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/questions/{session['questions'][0]['id']}/follow-up",
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert "generalist" in response.json()["follow_up_question"]


class TestJudgeChat:
    def _chat(
        self, client: TestClient, headers: dict[str, str], session_id: int, **body: object
    ) -> dict:
        response = client.post(
            f"/api/v1/sessions/{session_id}/judge-chat", json=body, headers=headers
        )
        assert response.status_code == status.HTTP_200_OK, response.text
        return response.json()

    def test_judge_greeting(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        data = self._chat(client, auth_headers, session["id"], message="Hello judge")

        assert data["role"] == "judge"
        assert data["can_speak"] is True
        assert data["reply"].startswith("Judge: We begin now.")

    def test_judge_asks_for_score_before_answer(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        data = self._chat(client, auth_headers, session["id"], message="What is my score")

        assert data["reply"].startswith("Judge: I cannot score without a submitted answer.")

    def test_judge_reports_score_after_answer(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)
        question_id = session["questions"][0]["id"]
        answered = answer_question(client, auth_headers, session["id"], question_id)

        data = self._chat(
            client,
            auth_headers,
            session["id"],
            message="What is my score",
            question_id=question_id,
        )

        overall = answered["answer"]["scores"]["overall"]
        assert data["reply"].startswith(f"Judge: Your current score is {overall}/100.")

    def test_stuck_candidate_gets_steps(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        data = self._chat(client, auth_headers, session["id"], message="I don't know")

        assert "Step 1: Situation" in data["reply"]

    def test_live_interviewer_repeats_question(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)
        first = session["questions"][0]

        data = self._chat(
            client,
            auth_headers,
            session["id"],
            message="Can you repeat the question",
            question_id=first["id"],
            mode="live_interviewer",
        )

        assert data["role"] == "interviewer"
        expected = f"Interviewer: Sure, here is the question again: \"{first['prompt']}\""
        assert data["reply"] == expected

    def test_live_interviewer_sample_answer_fallback(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        data = self._chat(
            client,
            auth_headers,
            session["id"],
            message="Give me a sample answer",
            mode="live_interviewer",
        )

        assert data["reply"].startswith(
            "Interviewer: Sure. A strong sample answer for this question is:"
        )

    def test_question_pack(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        data = self._chat(
            client,
            auth_headers,
            session["id"],
            message="Give me 2 technical questions with answers",
        )

        reply = data["reply"]
        assert reply.startswith("Judge: Here are 2 Technical interview question-answer pairs")
        assert "Q1:" in reply
        assert "A2:" in reply
        assert "Q3:" not in reply

    def test_ai_reply_is_prefixed_with_persona(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        with (
            patch(f"{COACHING_MODULE}.is_ai_enabled", return_value=True),
            patch.object(
                AIInterviewService,
                "chat_reply",
                new=AsyncMock(return_value="Judge: Tighten the result section."),
            ),
        ):
            data = self._chat(
                client,
                auth_headers,
                session["id"],
                message=(
                    "In my last project the team shipped a new billing flow "
                    "and customers were happier afterwards"
                ),
                history=[{"role": "user", "text": "Hi"}, {"role": "robot", "text": "ignored"}],
            )

        assert data["reply"] == "Judge: Tighten the result section."

    def test_ai_failure_falls_back_to_rules(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        with (
            patch(f"{COACHING_MODULE}.is_ai_enabled", return_value=True),
            patch.object(
                AIInterviewService,
                "chat_reply",
                new=AsyncMock(side_effect=RuntimeError("rate limited")),
            ),
        ):
            data = self._chat(client, auth_headers, session["id"], message="short reply here")

        assert data["reply"].startswith("Judge: Your answer is too short.")

    def test_empty_message_is_rejected(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/judge-chat",
            json={"message": ""},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestSecurityIncident:
    def test_incident_is_recorded(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        auth_headers: dict[str, str],
        seeded_questions: int,
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/security-incident",
            json={"type": "FOCUS", "reason": "  Tab switched  ", "meta": "3 seconds"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Security incident recorded."
        assert data["terminated"] is False
        assert data["violation_count"] == 1
        assert data["incident"]["type"] == "focus"
        assert data["incident"]["reason"] == "Tab switched"
        db_session.refresh(test_user)
        assert test_user.violation_count == 1
        assert test_user.last_violation_reason == "Tab switched"

    def test_unknown_type_becomes_policy(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/security-incident",
            json={"type": "webcam", "reason": "Face not visible"},
            headers=auth_headers,
        )

        assert response.json()["incident"]["type"] == "policy"

    def test_incident_can_terminate_session(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/security-incident",
            json={"type": "network", "reason": "Went offline", "terminate_session": True},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["terminated"] is True
        assert response.json()["message"] == "Security incident recorded and session closed."

        detail = client.get(f"/api/v1/sessions/{session['id']}", headers=auth_headers).json()
        assert detail["session"]["status"] == "completed"
        assert detail["session"]["summary"]["recommendation"] == TERMINATION_RECOMMENDATION
        assert len(detail["session"]["integrity_events"]) == 1

        # A terminated session no longer accepts answers
        blocked = client.post(
            f"/api/v1/sessions/{session['id']}/answers/{session['questions'][0]['id']}",
            data={"answer_type": "text", "text_answer": "Late answer"},
            headers=auth_headers,
        )
        assert blocked.status_code == status.HTTP_400_BAD_REQUEST
        assert blocked.json()["detail"] == "Session is already completed."

    def test_blank_reason(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(
            f"/api/v1/sessions/{session['id']}/security-incident",
            json={"type": "focus", "reason": "   "},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Incident reason is required."


class TestCompleteSession:
    def test_complete_without_answers(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)

        response = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Answer at least one question before completing."

    def test_complete_session(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        auth_headers: dict[str, str],
        seeded_questions: int,
    ) -> None:
        session = start_session(client, auth_headers)
        answer_question(client, auth_headers, session["id"], session["questions"][0]["id"])

        response = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Session completed."
        completed = data["session"]
        assert completed["status"] == "completed"
        score = completed["overall_score"]
        assert score == completed["metrics"]["overall"]
        assert completed["summary"]["strengths"]
        assert completed["summary"]["recommendation"]

        certificate = completed["certificate"]
        assert certificate["id"].startswith("CERT-")
        assert len(certificate["id"]) == len("CERT-") + 12
        assert certificate["verification_url"].endswith(
            f"/api/v1/sessions/certificates/{certificate['id']}"
        )

        gamification = data["gamification"]
        expected_points = 20 + int(score / 5 + 0.5) + (10 if score >= 85 else 0)
        assert gamification["points_earned"] == expected_points
        assert gamification["total_points"] == expected_points
        assert gamification["streak"] == 1
        assert "First Mock" in gamification["awarded_badges"]

        selection = data["selection"]
        assert selection["threshold"] == 70
        assert selection["selected"] is (score >= 70)

        db_session.refresh(test_user)
        assert test_user.points == expected_points
        assert "First Mock" in test_user.badges

    def test_complete_twice(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(client, auth_headers)
        answer_question(client, auth_headers, session["id"], session["questions"][0]["id"])
        first = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=auth_headers)

        second = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=auth_headers)

        assert second.status_code == status.HTTP_200_OK
        data = second.json()
        assert data["message"] == "Session already completed."
        assert data["gamification"] is None
        assert data["session"]["certificate"]["id"] == (
            first.json()["session"]["certificate"]["id"]
        )

    def test_job_fit_score(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> None:
        session = start_session(
            client, auth_headers, job_description_text="Python migration latency"
        )
        answer_question(client, auth_headers, session["id"], session["questions"][0]["id"])

        response = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=auth_headers)

        # The default answer mentions migration and latency but not python
        assert response.json()["session"]["summary"]["job_fit_score"] == 67


class TestCertificateVerification:
    @pytest.fixture
    def certificate_id(
        self, client: TestClient, auth_headers: dict[str, str], seeded_questions: int
    ) -> str:
        session = start_session(client, auth_headers)
        answer_question(client, auth_headers, session["id"], session["questions"][0]["id"])
        response = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=auth_headers)
        return response.json()["session"]["certificate"]["id"]

    def test_verify_certificate_is_public(self, client: TestClient, certificate_id: str) -> None:
        response = client.get(f"/api/v1/sessions/certificates/{certificate_id.lower()}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["valid"] is True
        assert data["certificate"]["id"] == certificate_id
        assert data["certificate"]["candidate_name"] == "Test Candidate"
        assert data["certificate"]["category"] == "HR"

    def test_unknown_certificate(self, client: TestClient, db_session: Session) -> None:
        response = client.get("/api/v1/sessions/certificates/CERT-000000000000")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Certificate not found."
