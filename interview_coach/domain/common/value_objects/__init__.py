"""Common value objects shared across all domain modules."""

from .ids import InterviewSessionId, PaymentId, QuestionId, SessionQuestionId, UserId

__all__ = [
    "InterviewSessionId",
    "PaymentId",
    "QuestionId",
    "SessionQuestionId",
    "UserId",
]
