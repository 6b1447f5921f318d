"""User entity for identity management."""

import re
from dataclasses import dataclass, field
from datetime import datetime

from interview_coach.domain.common.entity import Entity
from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.common.text import collapse_whitespace
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.subscription import Subscription

# Domain constraints
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 80
MAX_EMAIL_LENGTH = 255
MAX_VIOLATION_REASON_LENGTH = 180

ROLES = ("user", "admin")
ACCOUNT_STATUSES = ("active", "suspended")
AUTH_PROVIDERS = ("local", "oauth")

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email)) and len(email) <= MAX_EMAIL_LENGTH


def _validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not MIN_NAME_LENGTH <= len(cleaned) <= MAX_NAME_LENGTH:
        raise ValidationError(
            f"Name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters.",
            field="name",
            value=name,
        )
    return cleaned


@dataclass
class User(Entity[UserId]):
    """
    Candidate or administrator account.

    Business Rules:
    - Email is unique (enforced at repository level) and stored lowercase
    - Name is 2-80 characters
    - Only local accounts can sign in with a password
    - Points, streak and violation count never go negative
    """

    id: UserId
    name: str
    email: str
    hashed_password: str | None = None
    role: str = "user"
    account_status: str = "active"
    auth_provider: str = "local"

    target_role: str = ""
    experience_level: str = ""
    preferred_companies: list[str] = field(default_factory=list)
    profile_summary: str = ""
    resume_text: str = ""

    points: int = 0
    badges: list[str] = field(default_factory=list)
    streak: int = 0
    last_practice_date: datetime | None = None

    subscription: Subscription = field(default_factory=Subscription)

    violation_count: int = 0
    last_violation_at: datetime | None = None
    last_violation_reason: str = ""

    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.name = _validate_name(self.name)
        self.email = normalize_email(self.email)
        if not is_valid_email(self.email):
            raise ValidationError("A valid email is required.", field="email", value=self.email)
        if self.role not in ROLES:
            raise ValidationError("Invalid role. Allowed: user/admin.", "role", self.role)
        if self.account_status not in ACCOUNT_STATUSES:
            raise ValidationError(
                "Invalid account status. Allowed: active/suspended.",
                "account_status",
                self.account_status,
            )
        if self.auth_provider not in AUTH_PROVIDERS:
            raise ValidationError("Unknown auth provider", "auth_provider", self.auth_provider)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_suspended(self) -> bool:
        return self.account_status == "suspended"

    @property
    def uses_password_login(self) -> bool:
        return self.auth_provider == "local" and bool(self.hashed_password)

    def update_profile(
        self,
        name: str | None = None,
        target_role: str | None = None,
        experience_level: str | None = None,
        preferred_companies: list[str] | None = None,
        profile_summary: str | None = None,
        resume_text: str | None = None,
    ) -> None:
        """
        Update career profile fields. Fields left as None are unchanged.

        Raises:
            ValidationError: If the new name is invalid
        """
        if name is not None:
            self.name = _validate_name(name)
        if target_role is not None:
            self.target_role = target_role.strip()
        if experience_level is not None:
            self.experience_level = experience_level.strip()
        if preferred_companies is not None:
            self.preferred_companies = [c.strip() for c in preferred_companies if c.strip()]
        if profile_summary is not None:
            self.profile_summary = profile_summary.strip()
        if resume_text is not None:
            self.resume_text = resume_text.strip()

    def change_role(self, role: str) -> None:
        if role not in ROLES:
            raise ValidationError("Invalid role. Allowed: user/admin.", "role", role)
        self.role = role

    def change_account_status(self, status: str) -> None:
        if status not in ACCOUNT_STATUSES:
            raise ValidationError(
                "Invalid account status. Allowed: active/suspended.", "account_status", status
            )
        self.account_status = status

    def promote_to_admin(self) -> None:
        self.role = "admin"

    def record_violation(self, reason: str, occurred_at: datetime) -> None:
        """Count an integrity incident raised during a practice session."""
        self.violation_count += 1
        self.last_violation_at = occurred_at
        self.last_violation_reason = collapse_whitespace(reason)[:MAX_VIOLATION_REASON_LENGTH]

    def reset_violations(self) -> None:
        self.violation_count = 0
        self.last_violation_at = None
        self.last_violation_reason = ""

    def apply_practice_reward(
        self, points_earned: int, streak: int, badges: list[str], practiced_at: datetime
    ) -> None:
        """Store the outcome of a completed session's gamification pass."""
        self.points = max(0, self.points + points_earned)
        self.streak = max(0, streak)
        self.badges = badges
        self.last_practice_date = practiced_at

    @classmethod
    def create(cls, name: str, email: str, hashed_password: str | None = None) -> "User":
        """
        Create a new local account.

        Raises:
            ValidationError: If name or email is invalid
        """
        return cls(
            id=UserId.unsaved(),
            name=name,
            email=email,
            hashed_password=hashed_password,
        )
