"""
Errors raised by use cases and adapters.

Each carries the HTTP status it maps to; ``message`` is returned to the
client verbatim as ``{"detail": message}``.
"""

from fastapi import HTTPException
from starlette import status


class InterviewCoachError(Exception):
    """Base for application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(InterviewCoachError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404)


class SessionNotFoundError(NotFoundError):
    """Unknown session, or a session owned by another candidate."""

    def __init__(self, session_id: int | None = None) -> None:
        self.session_id = session_id
        super().__init__("Session not found.")


class QuestionNotFoundError(NotFoundError):
    def __init__(self, question_id: int | None = None) -> None:
        self.question_id = question_id
        super().__init__("Question not found.")


class CertificateNotFoundError(NotFoundError):
    def __init__(self, certificate_id: str) -> None:
        self.certificate_id = certificate_id
        super().__init__("Certificate not found.")


class PaymentNotFoundError(NotFoundError):
    def __init__(self, payment_id: str) -> None:
        self.payment_id = payment_id
        super().__init__("Payment not found.")


class ValidationError(InterviewCoachError):
    """Request data a use case rejects before touching the domain."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code=status_code)


class EmptyAnswerError(ValidationError):
    """Neither typed text nor a transcript produced any words."""

    def __init__(self) -> None:
        super().__init__(
            "Could not detect speech from recording. Retry with clearer audio or type your answer.",
            status_code=422,
        )


class ServiceError(InterviewCoachError):
    """An external provider failed."""


class TranscriptionFailedError(ServiceError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Transcription failed: {reason}", status_code=502)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
