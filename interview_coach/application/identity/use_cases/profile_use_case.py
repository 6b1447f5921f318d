"""Use case for the candidate's own profile."""

from dataclasses import dataclass

import structlog

from interview_coach.application.billing.protocols.payment_repository import (
    PaymentRepositoryProtocol,
)
from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.user import User
from interview_coach.domain.identity.exceptions import (
    InvalidDeletionConfirmationError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)

DELETE_CONFIRMATION = "DELETE"


@dataclass
class ProfileUpdate:
    """Profile fields sent by the client. None means unchanged."""

    name: str | None = None
    target_role: str | None = None
    experience_level: str | None = None
    preferred_companies: list[str] | None = None
    profile_summary: str | None = None
    resume_text: str | None = None


@dataclass
class DeletionSummary:
    users: int
    interview_sessions: int
    payments: int


class ProfileUseCase:
    """Read, update and delete the signed-in user's account."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        session_repository: SessionRepositoryProtocol,
        payment_repository: PaymentRepositoryProtocol,
    ) -> None:
        self.user_repository = user_repository
        self.session_repository = session_repository
        self.payment_repository = payment_repository

    def get_profile(self, user_id: int) -> User:
        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def update_profile(self, user_id: int, update: ProfileUpdate) -> User:
        """
        Update the career profile.

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If the new name is invalid
        """
        user = self.get_profile(user_id)
        user.update_profile(
            name=update.name,
            target_role=update.target_role,
            experience_level=update.experience_level,
            preferred_companies=update.preferred_companies,
            profile_summary=update.profile_summary,
            resume_text=update.resume_text,
        )
        user = self.user_repository.save(user)
        logger.info("profile_updated", user_id=user_id)
        return user

    def delete_account(self, user_id: int, confirmation: str | None) -> DeletionSummary:
        """
        Permanently delete the account with its sessions and payments.

        Raises:
            InvalidDeletionConfirmationError: Unless confirmation is "DELETE"
            UserNotFoundError: If the user does not exist
        """
        if (confirmation or "").strip().upper() != DELETE_CONFIRMATION:
            raise InvalidDeletionConfirmationError

        user_id_vo = UserId(user_id)
        if self.user_repository.find_by_id(user_id_vo) is None:
            raise UserNotFoundError(user_id)

        sessions_deleted = self.session_repository.delete_all_for_user(user_id_vo)
        payments_deleted = self.payment_repository.delete_all_for_user(user_id_vo)
        users_deleted = 1 if self.user_repository.delete(user_id_vo) else 0

        logger.info(
            "account_deleted",
            user_id=user_id,
            interview_sessions=sessions_deleted,
            payments=payments_deleted,
        )
        return DeletionSummary(
            users=users_deleted,
            interview_sessions=sessions_deleted,
            payments=payments_deleted,
        )
