"""Protocol for the interview session repository."""

from dataclasses import dataclass
from typing import Protocol

from interview_coach.domain.common.value_objects.ids import InterviewSessionId, UserId
from interview_coach.domain.interview.entities.interview_session import InterviewSession


@dataclass(frozen=True)
class UserSessionStats:
    """Completed-session totals of one user."""

    completed_sessions: int
    average_score: int


class SessionRepositoryProtocol(Protocol):
    """Protocol for interview session persistence."""

    def find_by_id(
        self, session_id: InterviewSessionId, user_id: UserId
    ) -> InterviewSession | None:
        """
        Find a session with its questions and integrity events.

        Returns:
            The session if it exists and belongs to the user, None otherwise
        """
        ...

    def find_by_certificate_id(self, certificate_id: str) -> InterviewSession | None: ...

    def list_for_user(self, user_id: UserId, limit: int) -> list[InterviewSession]:
        """Most recently created sessions first."""
        ...

    def list_completed_for_user(self, user_id: UserId) -> list[InterviewSession]:
        """Completed sessions ordered by ended_at ascending."""
        ...

    def count_completed_for_user(self, user_id: UserId) -> int: ...

    def list_all(self) -> list[InterviewSession]: ...

    def stats_for_users(self, user_ids: list[UserId]) -> dict[int, UserSessionStats]:
        """Completed session count and average overall score keyed by user id."""
        ...

    def save(self, session: InterviewSession) -> InterviewSession:
        """
        Save a session with its questions and integrity events (create or update).

        Returns:
            Saved session with database-generated ids
        """
        ...

    def delete_all_for_user(self, user_id: UserId) -> int:
        """Delete every session of a user. Returns the number deleted."""
        ...
