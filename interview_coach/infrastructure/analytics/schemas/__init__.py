"""Analytics context schemas."""

from interview_coach.infrastructure.analytics.schemas.analytics_schemas import (
    AdminBillingResponse,
    AdminOverviewResponse,
    AdminSubscriptionUpdateRequest,
    AdminUsersResponse,
    AdminUserUpdateRequest,
    AdminUserUpdateResponse,
    BillingFiltersResponse,
    BillingPaymentRow,
    BillingTotalsResponse,
    LeaderboardResponse,
    ProgressResponse,
    UserFiltersResponse,
    UserTotalsResponse,
)

__all__ = [
    "AdminBillingResponse",
    "AdminOverviewResponse",
    "AdminSubscriptionUpdateRequest",
    "AdminUserUpdateRequest",
    "AdminUserUpdateResponse",
    "AdminUsersResponse",
    "BillingFiltersResponse",
    "BillingPaymentRow",
    "BillingTotalsResponse",
    "LeaderboardResponse",
    "ProgressResponse",
    "UserFiltersResponse",
    "UserTotalsResponse",
]
