"""Pydantic schemas for progress, leaderboard and admin analytics endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from interview_coach.infrastructure.billing.schemas import PaymentResponse
from interview_coach.infrastructure.identity.schemas import UserResponse


class TrendPointResponse(BaseModel):
    date: datetime | None = None
    score: int
    category: str


class CategoryStatResponse(BaseModel):
    category: str
    average_score: int
    sessions: int


class MetricAverageResponse(BaseModel):
    metric: str
    value: int


class MissionResponse(BaseModel):
    id: str
    label: str
    progress: int
    target: int
    completed: bool


class GoalsResponse(BaseModel):
    weekly_sessions: int
    weekly_average_score: int
    weekly_clarity: int
    missions: list[MissionResponse]
    streak: int = 0
    points: int = 0
    badges: list[str] = Field(default_factory=list)


class ProgressResponse(BaseModel):
    """Schema for the candidate's progress dashboard."""

    completed_sessions: int
    average_score: int
    score_trend: list[TrendPointResponse]
    category_breakdown: list[CategoryStatResponse]
    metric_averages: list[MetricAverageResponse]
    goals: GoalsResponse


class LeaderboardEntryResponse(BaseModel):
    rank: int
    user_id: int
    name: str
    points: int
    streak: int
    badges: list[str] = Field(default_factory=list)
    average_score: int
    sessions: int


class LeaderboardResponse(BaseModel):
    """Schema for the points leaderboard."""

    entries: list[LeaderboardEntryResponse]
    my_rank: LeaderboardEntryResponse | None = None


class OverviewTotalsResponse(BaseModel):
    users: int
    sessions: int
    completed: int
    in_progress: int
    dropoff_percent: int
    average_score: int


class SourceShareResponse(BaseModel):
    source: str
    count: int
    percent: int


class CategoryPerformanceResponse(BaseModel):
    category: str
    sessions: int
    average_score: int


class TrendDayResponse(BaseModel):
    date: str
    started: int
    completed: int
    average_score: int


class RiskSessionResponse(BaseModel):
    session_id: int
    user_name: str
    target_role: str
    company_simulation: str
    category: str
    created_at: datetime | None = None
    age_hours: int
    questions_count: int
    answered_count: int
    progress_percent: int
    risk_score: int


class AlertResponse(BaseModel):
    severity: str
    title: str
    detail: str


class AdminOverviewResponse(BaseModel):
    """Schema for the platform health overview."""

    generated_at: datetime
    totals: OverviewTotalsResponse
    source_breakdown: list[SourceShareResponse]
    category_breakdown: list[CategoryPerformanceResponse]
    trend: list[TrendDayResponse]
    top_risk_sessions: list[RiskSessionResponse]
    alerts: list[AlertResponse]


class UserFiltersResponse(BaseModel):
    search: str = ""
    role: str = ""
    account_status: str = ""
    plan: str = ""
    limit: int


class UserTotalsResponse(BaseModel):
    users: int
    active: int
    suspended: int
    admins: int
    flagged: int


class AdminUsersResponse(BaseModel):
    """Schema for the admin user directory."""

    generated_at: datetime
    filters: UserFiltersResponse
    totals: UserTotalsResponse
    users: list[UserResponse]


class AdminUserUpdateRequest(BaseModel):
    """Schema for an admin change to an account. Omitted fields are unchanged."""

    role: str | None = Field(None, description="user or admin")
    account_status: str | None = Field(None, description="active or suspended")
    reset_violations: bool = False


class AdminUserUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class BillingFiltersResponse(BaseModel):
    search: str = ""
    plan: str = ""
    status: str = ""
    limit: int


class BillingTotalsResponse(BaseModel):
    active_paid_users: int
    active_pro_users: int
    active_elite_users: int
    total_payments: int
    paid_payments: int
    pending_payments: int
    failed_payments: int
    expired_payments: int
    revenue_inr_month: int
    revenue_by_currency: dict[str, int] = Field(default_factory=dict)


class BillingPaymentRow(PaymentResponse):
    """A payment flattened with its owner for the billing table."""

    user_id: int
    user_name: str = ""
    user_email: str = ""


class AdminBillingResponse(BaseModel):
    """Schema for the admin billing report."""

    generated_at: datetime
    filters: BillingFiltersResponse
    totals: BillingTotalsResponse
    payments: list[BillingPaymentRow]
    subscribers: list[UserResponse]


class AdminSubscriptionUpdateRequest(BaseModel):
    """Schema for overriding a user's subscription."""

    plan: str = Field(..., description="free, pro or elite")
    status: str = Field(..., description="active, expired or cancelled")
    currency: str | None = Field(None, description="INR, USD or EUR")
    days: int | None = Field(None, ge=0, le=730, description="Period length in days")
