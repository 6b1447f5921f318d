"""Tests for SessionScoringService domain service."""

from datetime import UTC, datetime

from interview_coach.domain.common.value_objects import (
    InterviewSessionId,
    SessionQuestionId,
    UserId,
)
from interview_coach.domain.interview.entities.answer import Answer, ScoreCard
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    SessionQuestion,
)
from interview_coach.domain.interview.services.session_scoring import (
    SessionScoringService,
    create_certificate_id,
)

NOW = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)


def _answered(id: int, text: str, scores: ScoreCard) -> SessionQuestion:
    return SessionQuestion(
        id=SessionQuestionId(id),
        position=id,
        prompt=f"Question {id}",
        answer=Answer(answer_type="text", transcript=text, scores=scores, answered_at=NOW),
    )


def _uniform(value: int) -> ScoreCard:
    return ScoreCard(**dict.fromkeys(ScoreCard.__dataclass_fields__, value))


def _session(questions: list[SessionQuestion], job_description: str = "") -> InterviewSession:
    return InterviewSession(
        id=InterviewSessionId(1),
        user_id=UserId(1),
        category="Technical",
        question_source="predefined",
        questions=questions,
        job_description_text=job_description,
    )


class TestAggregateMetrics:
    def test_averages_answered_questions(self) -> None:
        service = SessionScoringService()
        first = _answered(1, "a", ScoreCard(confidence=70, overall=60))
        second = _answered(2, "b", ScoreCard(confidence=75, overall=71))

        metrics = service.aggregate_metrics([first, second])

        assert metrics.confidence == 73
        assert metrics.overall == 66

    def test_missing_communication_uses_clarity(self) -> None:
        service = SessionScoringService()
        question = _answered(1, "a", ScoreCard(communication=0, clarity=64, relevance=58))

        metrics = service.aggregate_metrics([question])

        assert metrics.communication == 64
        assert metrics.technical_accuracy == 58


class TestJobFitScore:
    def test_share_of_job_description_keywords(self) -> None:
        service = SessionScoringService()
        question = _answered(1, "The migration cut latency in half.", _uniform(70))

        assert service.job_fit_score("Python migration latency", [question]) == 67

    def test_without_job_description(self) -> None:
        service = SessionScoringService()
        question = _answered(1, "The migration cut latency in half.", _uniform(70))

        assert service.job_fit_score("", [question]) == 0
        assert service.job_fit_score("a an of", [question]) == 0


class TestAssess:
    def test_strong_session(self) -> None:
        service = SessionScoringService()
        session = _session([_answered(1, "Delivered the rollout.", _uniform(80))])

        assessment = service.assess(session)

        assert assessment.metrics.overall == 80
        assert len(assessment.summary.strengths) == 8
        assert assessment.summary.improvements == ["Add tighter examples with measurable impact."]
        assert assessment.summary.recommendation.startswith("Prioritize confidence")
        assert assessment.summary.job_fit_score == 0

    def test_weak_metrics_and_low_job_fit(self) -> None:
        service = SessionScoringService()
        scores = ScoreCard(
            confidence=80,
            communication=80,
            clarity=80,
            grammar=55,
            technical_accuracy=80,
            speaking_speed=80,
            facial_expression=80,
            relevance=80,
            overall=76,
        )
        session = _session(
            [_answered(1, "Kafka pipelines at scale.", scores)],
            job_description="Kafka Spark Airflow",
        )

        assessment = service.assess(session)

        summary = assessment.summary
        assert summary.improvements[0] == "Work on grammar with focused drills."
        assert summary.improvements[-1].startswith("Job description fit is low (33/100).")
        assert summary.recommendation == (
            "Prioritize grammar in your next practice using STAR + quantified outcomes. "
            "Current JD fit score is 33/100."
        )
        assert summary.job_fit_score == 33


class TestCertificateId:
    def test_format(self) -> None:
        certificate_id = create_certificate_id(1, 2, NOW)

        assert certificate_id.startswith("CERT-")
        assert len(certificate_id) == 17
        assert certificate_id == certificate_id.upper()

    def test_unique(self) -> None:
        assert create_certificate_id(1, 2, NOW) != create_certificate_id(1, 2, NOW)
