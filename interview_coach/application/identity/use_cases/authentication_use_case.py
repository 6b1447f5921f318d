"""Use case for authentication operations."""

import structlog

from interview_coach.application.identity.protocols.password_service import (
    PasswordServiceProtocol,
)
from interview_coach.application.identity.protocols.token_service import (
    TokenPair,
    TokenServiceProtocol,
)
from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.user import User, normalize_email
from interview_coach.domain.identity.exceptions import (
    AccountNotFoundError,
    AccountSuspendedError,
    InvalidCredentialsError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


class AuthenticationUseCase:
    """Use case for authentication operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.password_service = password_service
        self.token_service = token_service

    def verify_credentials(self, email: str, password: str) -> User:
        """
        Check an email and password pair without issuing tokens.

        Raises:
            AccountNotFoundError: If no account uses the email
            InvalidCredentialsError: If the account signs in through a provider or the
                password is wrong
            AccountSuspendedError: If the account is suspended
        """
        user = self.user_repository.find_by_email(normalize_email(email))

        # Unknown emails still pay for one hash verification
        if not user:
            self.password_service.verify_against_dummy(password)
            raise AccountNotFoundError

        if user.auth_provider != "local":
            raise InvalidCredentialsError("This account uses single sign-on.")

        if user.is_suspended:
            raise AccountSuspendedError

        if not user.hashed_password or not self.password_service.verify_password(
            password, user.hashed_password
        ):
            raise InvalidCredentialsError

        return user

    def authenticate_user(self, email: str, password: str) -> tuple[User, TokenPair]:
        """
        Authenticate a user with email and password.

        Args:
            email: User's email address
            password: User's plain text password

        Returns:
            Tuple of (authenticated user, token pair)
        """
        user = self.verify_credentials(email, password)
        token_pair = self.token_service.create_token_pair(user.id.value)

        logger.info("user_authenticated", user_id=user.id.value, email=user.email)

        return user, token_pair

    def refresh_access_token(self, refresh_token: str) -> tuple[User, TokenPair]:
        """
        Refresh access token using a refresh token.

        Args:
            refresh_token: Valid refresh token

        Returns:
            Tuple of (user, new token pair)

        Raises:
            InvalidCredentialsError: If refresh token is invalid or user not found
        """
        user_id = self.token_service.verify_refresh_token(refresh_token)
        if user_id is None:
            raise InvalidCredentialsError("Invalid or expired refresh token")

        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise InvalidCredentialsError("Invalid or expired refresh token")
        if user.is_suspended:
            raise AccountSuspendedError

        token_pair = self.token_service.create_token_pair(user.id.value)

        logger.info("access_token_refreshed", user_id=user.id.value)

        return user, token_pair

    def get_user_by_id(self, user_id: int) -> User:
        """
        Get a user by ID (used internally by dependency injection).

        Raises:
            UserNotFoundError: If user is not found
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)
        return user
