"""Use case for proctoring incidents raised during a session."""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.application.interview.use_cases.interview_session_use_case import (
    load_owned_session,
)
from interview_coach.domain.interview.entities.interview_session import IntegrityEvent

logger = structlog.get_logger(__name__)


@dataclass
class IncidentResult:
    event: IntegrityEvent
    terminated: bool
    violation_count: int


class SessionIntegrityUseCase:
    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
    ) -> None:
        self.session_repository = session_repository
        self.user_repository = user_repository

    def record_incident(
        self,
        session_id: int,
        user_id: int,
        event_type: str | None,
        reason: str | None,
        meta: str | None = None,
        terminate_session: bool = False,
    ) -> IncidentResult:
        """
        Log an integrity incident and count it against the user.

        Raises:
            SessionNotFoundError: If the session is not the user's
            ValidationError: If the reason is blank
        """
        session = load_owned_session(self.session_repository, session_id, user_id)
        now = datetime.now(UTC)
        event, terminated = session.record_integrity_event(
            event_type, reason, meta, now, terminate=terminate_session
        )
        self.session_repository.save(session)

        violation_count = 0
        user = self.user_repository.find_by_id(session.user_id)
        if user is not None:
            user.record_violation(event.reason, now)
            user = self.user_repository.save(user)
            violation_count = user.violation_count

        logger.warning(
            "security_incident_recorded",
            session_id=session_id,
            user_id=user_id,
            event_type=event.event_type,
            terminated=terminated,
            violation_count=violation_count,
        )
        return IncidentResult(event=event, terminated=terminated, violation_count=violation_count)
