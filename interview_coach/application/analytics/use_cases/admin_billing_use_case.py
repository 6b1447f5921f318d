"""Use case for the administrator's billing dashboard."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from interview_coach.application.analytics.use_cases.admin_users_use_case import (
    clamp_admin_limit,
    normalize_choice,
)
from interview_coach.application.billing.protocols.payment_repository import (
    PaymentRepositoryProtocol,
)
from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.domain.billing.entities.payment import Payment
from interview_coach.domain.identity.entities.subscription import PLANS, SUBSCRIPTION_STATUSES
from interview_coach.domain.identity.entities.user import User

DEFAULT_BILLING_LIMIT = 150
MAX_SUBSCRIBER_ROWS = 300
PAYMENT_FILTER_STATUSES = ("paid", "pending", "failed", "expired", "cancelled")
STATUS_FILTERS = (*SUBSCRIPTION_STATUSES, *PAYMENT_FILTER_STATUSES)


def effective_payment_status(payment: Payment, now: datetime) -> str:
    """Pending payments past their window count as expired even before they are re-read."""
    if payment.is_pending and payment.is_past_window(now):
        return "expired"
    return payment.status


@dataclass
class BillingFilters:
    search: str = ""
    plan: str = ""
    status: str = ""
    limit: int = DEFAULT_BILLING_LIMIT


@dataclass
class BillingTotals:
    active_paid_users: int = 0
    active_pro_users: int = 0
    active_elite_users: int = 0
    total_payments: int = 0
    paid_payments: int = 0
    pending_payments: int = 0
    failed_payments: int = 0
    expired_payments: int = 0
    revenue_inr_month: int = 0
    revenue_by_currency: dict[str, int] = field(default_factory=dict)


@dataclass
class PaymentRow:
    payment: Payment
    user: User | None
    status: str


@dataclass
class BillingReport:
    generated_at: datetime
    filters: BillingFilters
    totals: BillingTotals
    payments: list[PaymentRow]
    subscribers: list[User]


class AdminBillingUseCase:
    """Flattens every payment and subscription into one filterable report."""

    def __init__(
        self,
        payment_repository: PaymentRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
    ) -> None:
        self.payment_repository = payment_repository
        self.user_repository = user_repository

    def get_billing(
        self,
        search: str | None = None,
        plan: str | None = None,
        status: str | None = None,
        limit: int | None = None,
    ) -> BillingReport:
        """
        Build the billing report.

        A subscription status filter only narrows subscribers and a payment
        status filter only narrows payments. Totals ignore the filters.
        """
        now = datetime.now(UTC)
        filters = BillingFilters(
            search=(search or "").strip().lower(),
            plan=normalize_choice(plan, PLANS),
            status=normalize_choice(status, STATUS_FILTERS),
            limit=clamp_admin_limit(limit, DEFAULT_BILLING_LIMIT),
        )
        totals = BillingTotals()
        users = self.user_repository.list_all()
        users_by_id = {user.id.value: user for user in users}

        subscribers: list[User] = []
        for user in users:
            subscription = user.subscription
            if subscription.is_paid_and_running(now):
                totals.active_paid_users += 1
                if subscription.plan == "pro":
                    totals.active_pro_users += 1
                elif subscription.plan == "elite":
                    totals.active_elite_users += 1

            if filters.search and filters.search not in f"{user.name} {user.email}".lower():
                continue
            if filters.plan and subscription.plan != filters.plan:
                continue
            if filters.status in SUBSCRIPTION_STATUSES and subscription.status != filters.status:
                continue
            subscribers.append(user)

        month = (now.year, now.month)
        rows: list[PaymentRow] = []
        for payment in self.payment_repository.list_all():
            effective = effective_payment_status(payment, now)
            totals.total_payments += 1
            if effective == "paid":
                totals.paid_payments += 1
                totals.revenue_by_currency[payment.currency] = (
                    totals.revenue_by_currency.get(payment.currency, 0) + payment.amount
                )
                paid_at = payment.paid_at
                if payment.currency == "INR" and paid_at and (paid_at.year, paid_at.month) == month:
                    totals.revenue_inr_month += payment.amount
            elif effective == "pending":
                totals.pending_payments += 1
            elif effective == "failed":
                totals.failed_payments += 1
            elif effective == "expired":
                totals.expired_payments += 1

            owner = users_by_id.get(payment.user_id.value)
            if filters.search:
                haystack = f"{owner.name} {owner.email}".lower() if owner else ""
                if (
                    filters.search not in haystack
                    and filters.search not in payment.payment_id.lower()
                ):
                    continue
            if filters.plan and payment.plan != filters.plan:
                continue
            if filters.status in PAYMENT_FILTER_STATUSES and effective != filters.status:
                continue
            rows.append(PaymentRow(payment=payment, user=owner, status=effective))

        subscribers.sort(
            key=lambda user: (user.subscription.status != "active", user.name.lower())
        )
        rows.sort(
            key=lambda row: row.payment.created_at.timestamp() if row.payment.created_at else 0,
            reverse=True,
        )
        return BillingReport(
            generated_at=now,
            filters=filters,
            totals=totals,
            payments=rows[: filters.limit],
            subscribers=subscribers[:MAX_SUBSCRIBER_ROWS],
        )

