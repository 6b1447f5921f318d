"""Subscription state carried by a user account."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from interview_coach.domain.common.exceptions import ValidationError

PLANS = ("free", "pro", "elite")
PAID_PLANS = ("pro", "elite")
SUBSCRIPTION_STATUSES = ("active", "expired", "cancelled")
CURRENCIES = ("INR", "USD", "EUR")

DEFAULT_DURATION_DAYS = {"free": 0, "pro": 30, "elite": 365}
MAX_ADMIN_DURATION_DAYS = 730


@dataclass
class Subscription:
    """
    Plan entitlement for a user.

    Business Rules:
    - Free plans carry no billing period
    - A paid activation extends from the current period end while it is still running
    - Admin overrides may grant at most MAX_ADMIN_DURATION_DAYS days
    """

    plan: str = "free"
    status: str = "active"
    currency: str = "INR"
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    auto_renew: bool = False
    last_payment_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.plan not in PLANS:
            raise ValidationError("Valid plan is required (free/pro/elite).", "plan", self.plan)
        if self.status not in SUBSCRIPTION_STATUSES:
            raise ValidationError(
                "Valid status is required (active/expired/cancelled).", "status", self.status
            )
        if self.currency not in CURRENCIES:
            raise ValidationError("Unsupported currency", "currency", self.currency)

    def is_paid_and_running(self, now: datetime) -> bool:
        return (
            self.status == "active"
            and self.plan in PAID_PLANS
            and self.current_period_end is not None
            and self.current_period_end > now
        )

    def activate_from_payment(
        self, plan: str, currency: str, duration_days: int, now: datetime
    ) -> None:
        """Start or extend a paid period after a confirmed payment."""
        has_running_period = self.current_period_end is not None and self.current_period_end > now
        base = self.current_period_end if has_running_period and self.current_period_end else now

        self.plan = plan
        self.status = "active"
        self.currency = currency
        self.current_period_start = now
        self.current_period_end = base + timedelta(days=duration_days)
        self.auto_renew = False
        self.last_payment_at = now

    def override(
        self,
        plan: str,
        status: str,
        currency: str,
        now: datetime,
        days: int | None = None,
    ) -> None:
        """
        Apply an administrator change to the subscription.

        Args:
            plan: free | pro | elite
            status: active | expired | cancelled
            currency: INR | USD | EUR
            now: Reference time for the new period
            days: Period length; defaults to the plan's standard length
        """
        if plan not in PLANS:
            raise ValidationError("Valid plan is required (free/pro/elite).", "plan", plan)
        if status not in SUBSCRIPTION_STATUSES:
            raise ValidationError(
                "Valid status is required (active/expired/cancelled).", "status", status
            )
        if currency not in CURRENCIES:
            raise ValidationError("Unsupported currency", "currency", currency)

        duration = DEFAULT_DURATION_DAYS[plan] if not days else days
        duration = max(0, min(MAX_ADMIN_DURATION_DAYS, duration))

        self.plan = plan
        self.status = status
        self.currency = currency

        if status == "active" and plan != "free":
            self.current_period_start = now
            self.current_period_end = now + timedelta(days=duration) if duration else None
            self.last_payment_at = now
        elif plan == "free":
            self.current_period_start = None
            self.current_period_end = None
        else:
            self.current_period_end = now
