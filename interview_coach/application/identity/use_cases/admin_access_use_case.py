"""Use case for administrator sign-in and bootstrap."""

import structlog

from interview_coach.application.identity.protocols.password_service import (
    PasswordServiceProtocol,
)
from interview_coach.application.identity.protocols.token_service import (
    TokenPair,
    TokenServiceProtocol,
)
from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.identity.use_cases.register_user_use_case import (
    validate_new_password,
)
from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.user import User, is_valid_email, normalize_email
from interview_coach.domain.identity.exceptions import (
    AccountSuspendedError,
    AdminAccessRequiredError,
    AdminAlreadyExistsError,
    AdminBootstrapDisabledError,
    InvalidCredentialsError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)

DEFAULT_ADMIN_NAME = "Admin"


class AdminAccessUseCase:
    """
    Sign-in for the admin panel.

    While no admin exists outside production, the first successful admin
    login bootstraps the caller into the admin role.
    """

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
        environment: str,
    ) -> None:
        self.user_repository = user_repository
        self.password_service = password_service
        self.token_service = token_service
        self.environment = environment

    def can_bootstrap(self) -> bool:
        return self.environment != "production" and not self.user_repository.admin_exists()

    def admin_login(
        self, email: str, password: str, name: str | None = None
    ) -> tuple[User, TokenPair]:
        """
        Authenticate an administrator.

        Raises:
            InvalidCredentialsError: If the account is unknown or the password is wrong
            AccountSuspendedError: If the account is suspended
            AdminAccessRequiredError: If the account is not an admin and bootstrap is closed
        """
        normalized_email = normalize_email(email)
        can_bootstrap = self.can_bootstrap()
        user = self.user_repository.find_by_email(normalized_email)

        if user is None:
            if not can_bootstrap:
                self.password_service.verify_against_dummy(password)
                raise InvalidCredentialsError("Invalid credentials.")
            user = self._create_bootstrap_admin(name, normalized_email, password)
        else:
            if user.is_suspended:
                raise AccountSuspendedError

            if user.auth_provider != "local":
                if not can_bootstrap:
                    raise AdminAccessRequiredError
                validate_new_password(password)
                user.auth_provider = "local"
                user.hashed_password = self.password_service.hash_password(password)
                user.promote_to_admin()
                user = self.user_repository.save(user)
                logger.info("admin_converted_to_local", user_id=user.id.value)
            elif not user.hashed_password or not self.password_service.verify_password(
                password, user.hashed_password
            ):
                raise InvalidCredentialsError("Invalid credentials.")

            if not user.is_admin:
                if not can_bootstrap:
                    raise AdminAccessRequiredError
                user.promote_to_admin()
                user = self.user_repository.save(user)
                logger.info("admin_bootstrapped", user_id=user.id.value)

        token_pair = self.token_service.create_token_pair(user.id.value)
        logger.info("admin_authenticated", user_id=user.id.value)
        return user, token_pair

    def _create_bootstrap_admin(self, name: str | None, email: str, password: str) -> User:
        if not is_valid_email(email):
            raise ValidationError("Please provide a valid email.", field="email")
        validate_new_password(password)

        user = User.create(
            name=(name or "").strip() or DEFAULT_ADMIN_NAME,
            email=email,
            hashed_password=self.password_service.hash_password(password),
        )
        user.promote_to_admin()
        user = self.user_repository.save(user)
        logger.info("admin_created_by_bootstrap", user_id=user.id.value, email=user.email)
        return user

    def bootstrap_admin(self, user_id: int) -> User:
        """
        Promote the signed-in user when no admin exists yet.

        Idempotent for accounts that are already admins.

        Raises:
            AdminBootstrapDisabledError: In production
            AdminAlreadyExistsError: If another admin exists
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        if user.is_admin:
            return user
        if self.environment == "production":
            raise AdminBootstrapDisabledError
        if self.user_repository.admin_exists():
            raise AdminAlreadyExistsError

        user.promote_to_admin()
        user = self.user_repository.save(user)
        logger.info("admin_bootstrapped", user_id=user.id.value)
        return user
