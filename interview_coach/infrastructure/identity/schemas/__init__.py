"""Identity context schemas."""

from interview_coach.infrastructure.identity.schemas.user_schemas import (
    AccountDeleteRequest,
    AccountDeleteResponse,
    AdminBootstrapResponse,
    AdminLoginRequest,
    AuthResponse,
    DeletedCounts,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RefreshTokenRequest,
    SignupRequest,
    SubscriptionResponse,
    UserResponse,
)

__all__ = [
    "AccountDeleteRequest",
    "AccountDeleteResponse",
    "AdminBootstrapResponse",
    "AdminLoginRequest",
    "AuthResponse",
    "DeletedCounts",
    "LoginRequest",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "ProfileUpdateResponse",
    "RefreshTokenRequest",
    "SignupRequest",
    "SubscriptionResponse",
    "UserResponse",
]
