from .answer import METRIC_KEYS, METRIC_LABELS, Answer, ScoreCard, TimelineMarker
from .interview_session import (
    Certificate,
    IntegrityEvent,
    InterviewSession,
    SessionAssessment,
    SessionQuestion,
    SessionSummary,
)
from .question import Question

__all__ = [
    "METRIC_KEYS",
    "METRIC_LABELS",
    "Answer",
    "Certificate",
    "IntegrityEvent",
    "InterviewSession",
    "Question",
    "ScoreCard",
    "SessionAssessment",
    "SessionQuestion",
    "SessionSummary",
    "TimelineMarker",
]
