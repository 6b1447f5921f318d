"""
Domain service for the final assessment of an interview session.

This is a pure domain service with no infrastructure dependencies.
"""

import hashlib
import secrets
from datetime import datetime

from interview_coach.domain.common.text import clamp_score, round_half_up, tokenize
from interview_coach.domain.interview.entities.answer import METRIC_KEYS, METRIC_LABELS, ScoreCard
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    SessionAssessment,
    SessionQuestion,
    SessionSummary,
)

LOW_JOB_FIT_THRESHOLD = 55

# A zero score means the metric is missing on older answers
_METRIC_FALLBACKS = {
    "communication": "clarity",
    "technical_accuracy": "relevance",
}


def _average(values: list[int]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def create_certificate_id(session_id: int, user_id: int, issued_at: datetime) -> str:
    seed = f"{session_id}-{user_id}-{int(issued_at.timestamp() * 1000)}-{secrets.token_hex(4)}"
    digest = hashlib.sha1(seed.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"CERT-{digest[:12].upper()}"


class SessionScoringService:
    """Aggregates answer scores into session metrics, a summary and a job fit score."""

    def aggregate_metrics(self, answered: list[SessionQuestion]) -> ScoreCard:
        values: dict[str, int] = {}
        cards = [question.answer.scores for question in answered if question.answer]
        for key in METRIC_KEYS:
            fallback = _METRIC_FALLBACKS.get(key)
            values[key] = _average(
                [
                    getattr(card, key) or (getattr(card, fallback) if fallback else 0)
                    for card in cards
                ]
            )
        values["overall"] = _average([card.overall for card in cards])
        return ScoreCard(**values)

    def job_fit_score(self, job_description_text: str, answered: list[SessionQuestion]) -> int:
        """Percentage of distinct job description keywords the answers mention."""
        jd_tokens = {token for token in tokenize(job_description_text) if len(token) >= 4}
        if not jd_tokens:
            return 0
        answer_tokens = {
            token
            for question in answered
            if question.answer
            for token in tokenize(question.answer.text)
            if len(token) >= 4
        }
        if not answer_tokens:
            return 0
        return clamp_score(len(jd_tokens & answer_tokens) / len(jd_tokens) * 100)

    def assess(self, session: InterviewSession) -> SessionAssessment:
        """
        Build metrics, strengths, improvements and a recommendation.

        Metrics at 78 or above become strengths, metrics under 62 become
        improvements. The recommendation targets the weakest metric.
        """
        answered = session.answered_questions
        metrics = self.aggregate_metrics(answered)

        strengths: list[str] = []
        improvements: list[str] = []
        for key, value in metrics.metrics().items():
            label = METRIC_LABELS[key]
            if value >= 78:
                strengths.append(f"Strong {label} ({value}).")
            if value < 62:
                improvements.append(f"Work on {label} with focused drills.")

        if not strengths:
            strengths.append("Consistent baseline across all dimensions.")
        if not improvements:
            improvements.append("Add tighter examples with measurable impact.")

        job_fit = self.job_fit_score(session.job_description_text, answered)
        if 0 < job_fit < LOW_JOB_FIT_THRESHOLD:
            improvements.append(
                f"Job description fit is low ({job_fit}/100). "
                "Add examples with JD keywords and required outcomes."
            )

        weakest = metrics.weakest_metric()
        if weakest:
            recommendation = (
                f"Prioritize {METRIC_LABELS[weakest[0]]} in your next practice "
                "using STAR + quantified outcomes."
            )
        else:
            recommendation = "Continue with mixed category practice to maintain consistency."
        if job_fit > 0:
            recommendation += f" Current JD fit score is {job_fit}/100."

        return SessionAssessment(
            metrics=metrics,
            summary=SessionSummary(
                strengths=strengths,
                improvements=improvements,
                recommendation=recommendation,
                job_fit_score=job_fit,
            ),
        )
