"""Use case for user registration."""

import structlog

from interview_coach.application.identity.protocols.password_service import (
    PasswordServiceProtocol,
)
from interview_coach.application.identity.protocols.token_service import (
    TokenPair,
    TokenServiceProtocol,
)
from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.identity.entities.user import User, is_valid_email, normalize_email
from interview_coach.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    RegistrationDisabledError,
)
from interview_coach.feature_flags import is_user_registrations_enabled

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


def validate_new_password(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters.", field="password"
        )


class RegisterUserUseCase:
    """Use case for user registration operations."""

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

    def register_user(
        self, name: str, email: str, password: str
    ) -> tuple[User, TokenPair]:
        """
        Register a new user account.

        Args:
            name: Display name
            email: User's email address
            password: User's plain text password (will be hashed)

        Returns:
            Tuple of (created user, token pair for immediate login)

        Raises:
            RegistrationDisabledError: If registration is disabled via feature flag
            ValidationError: If the name, email or password is invalid
            EmailAlreadyExistsError: If email is already registered
        """
        if not is_user_registrations_enabled():
            raise RegistrationDisabledError

        normalized_email = normalize_email(email)
        if not is_valid_email(normalized_email):
            raise ValidationError("Please provide a valid email.", field="email")
        validate_new_password(password)

        if self.user_repository.find_by_email(normalized_email):
            raise EmailAlreadyExistsError(normalized_email)

        user = User.create(
            name=name,
            email=normalized_email,
            hashed_password=self.password_service.hash_password(password),
        )
        user = self.user_repository.save(user)
        token_pair = self.token_service.create_token_pair(user.id.value)

        logger.info("user_registered", user_id=user.id.value, email=user.email)

        return user, token_pair
