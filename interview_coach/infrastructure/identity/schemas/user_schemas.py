"""Pydantic schemas for account and authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from interview_coach.application.identity.protocols.token_service import TokenPair
from interview_coach.domain.identity.entities.subscription import Subscription
from interview_coach.domain.identity.entities.user import User


class SubscriptionResponse(BaseModel):
    """Schema for a user's subscription state."""

    plan: str
    status: str
    currency: str
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    auto_renew: bool = False
    last_payment_at: datetime | None = None

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionResponse":
        return cls(
            plan=subscription.plan,
            status=subscription.status,
            currency=subscription.currency,
            current_period_start=subscription.current_period_start,
            current_period_end=subscription.current_period_end,
            auto_renew=subscription.auto_renew,
            last_payment_at=subscription.last_payment_at,
        )


class SecurityResponse(BaseModel):
    """Schema for a user's integrity counters."""

    violation_count: int = 0
    last_violation_at: datetime | None = None
    last_violation_reason: str = ""


class UserResponse(BaseModel):
    """Schema for a user as returned to the owner or an admin."""

    id: int
    name: str
    email: str
    role: str
    account_status: str
    auth_provider: str
    target_role: str = ""
    experience_level: str = ""
    preferred_companies: list[str] = Field(default_factory=list)
    profile_summary: str = ""
    resume_text: str = ""
    points: int = 0
    badges: list[str] = Field(default_factory=list)
    streak: int = 0
    last_practice_date: datetime | None = None
    subscription: SubscriptionResponse
    security: SecurityResponse
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email,
            role=user.role,
            account_status=user.account_status,
            auth_provider=user.auth_provider,
            target_role=user.target_role,
            experience_level=user.experience_level,
            preferred_companies=list(user.preferred_companies),
            profile_summary=user.profile_summary,
            resume_text=user.resume_text,
            points=user.points,
            badges=list(user.badges),
            streak=user.streak,
            last_practice_date=user.last_practice_date,
            subscription=SubscriptionResponse.from_entity(user.subscription),
            security=SecurityResponse(
                violation_count=user.violation_count,
                last_violation_at=user.last_violation_at,
                last_violation_reason=user.last_violation_reason,
            ),
            created_at=user.created_at,
        )


class SignupRequest(BaseModel):
    """Schema for creating a local account."""

    name: str = Field(..., description="Display name, 2-80 characters")
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password, at least 8 characters")


class LoginRequest(BaseModel):
    """Schema for email and password sign-in."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class AdminLoginRequest(LoginRequest):
    """Schema for admin panel sign-in."""

    name: str | None = Field(
        None, description="Display name used when the first admin account is created"
    )


class RefreshTokenRequest(BaseModel):
    """Request body for refresh token (used by non-browser clients)."""

    refresh_token: str | None = None


class AuthResponse(BaseModel):
    """Schema for a successful sign-in."""

    token: TokenPair
    user: UserResponse


class AdminBootstrapResponse(BaseModel):
    message: str
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    """Schema for updating the career profile. Omitted fields are unchanged."""

    name: str | None = None
    target_role: str | None = None
    experience_level: str | None = None
    preferred_companies: list[str] | None = Field(
        None, description="List of companies or a comma separated string"
    )
    profile_summary: str | None = None
    resume_text: str | None = None

    @field_validator("preferred_companies", mode="before")
    @classmethod
    def split_companies(cls, value: object) -> object:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


class ProfileResponse(BaseModel):
    user: UserResponse


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class AccountDeleteRequest(BaseModel):
    confirmation: str | None = Field(None, description='Must be "DELETE"')


class DeletedCounts(BaseModel):
    users: int
    interview_sessions: int
    payments: int


class AccountDeleteResponse(BaseModel):
    message: str
    deleted: DeletedCounts
