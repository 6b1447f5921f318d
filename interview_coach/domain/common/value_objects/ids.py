from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Candidate or admin account."""


@dataclass(frozen=True)
class QuestionId(EntityId):
    """Question bank entry. Session questions keep it as ``question_ref``."""


@dataclass(frozen=True)
class InterviewSessionId(EntityId):
    """Mock interview session."""


@dataclass(frozen=True)
class SessionQuestionId(EntityId):
    """Question as asked inside one session; answers are stored against it."""


@dataclass(frozen=True)
class PaymentId(EntityId):
    """Database key of a payment row, distinct from its public ``PAY-...`` reference."""
