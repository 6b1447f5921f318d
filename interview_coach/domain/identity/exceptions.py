"""Identity domain exceptions."""

from interview_coach.domain.common.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    ValidationError,
)


class UserNotFoundError(EntityNotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: int) -> None:
        super().__init__("User", user_id, message="User not found.")


class EmailAlreadyExistsError(BusinessRuleViolationError):
    """Raised when attempting to register with an email that already exists."""

    def __init__(self, email: str) -> None:
        super().__init__("unique_email", "An account with this email already exists.")
        self.email = email


class AccountNotFoundError(DomainError):
    """Raised when logging in with an email that has no account."""

    def __init__(self) -> None:
        super().__init__("Account not found.")


class InvalidCredentialsError(DomainError):
    """Raised when authentication fails due to a wrong password or auth provider."""

    def __init__(self, message: str = "Incorrect password.") -> None:
        super().__init__(message)


class AccountSuspendedError(AuthorizationError):
    """Raised when a suspended account tries to authenticate."""

    def __init__(self) -> None:
        super().__init__("Account is suspended. Contact support.")


class AdminAccessRequiredError(AuthorizationError):
    """Raised when a non-admin account calls an admin-only operation."""

    def __init__(self) -> None:
        super().__init__("Admin access is required.")


class RegistrationDisabledError(AuthorizationError):
    """Raised when user registration is disabled via feature flag."""

    def __init__(self) -> None:
        super().__init__("User registration is currently disabled")


class AdminAlreadyExistsError(BusinessRuleViolationError):
    """Raised when bootstrapping an admin while one already exists."""

    def __init__(self) -> None:
        super().__init__(
            "single_bootstrap_admin",
            "Admin already exists. Ask an admin to promote your account.",
        )


class AdminBootstrapDisabledError(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("Admin bootstrap is disabled in production.")


class SelfManagementError(ValidationError):
    """Raised when an admin tries to demote or suspend their own account."""


class InvalidDeletionConfirmationError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Please send confirmation='DELETE' to permanently delete account.",
            field="confirmation",
        )
