"""Use case for subscription purchases over UPI."""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from interview_coach.application.billing.protocols.payment_repository import (
    PaymentRepositoryProtocol,
)
from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.domain.billing.entities.payment import Payment
from interview_coach.domain.billing.exceptions import PaymentExpiredError
from interview_coach.domain.billing.plans import (
    PLAN_CATALOG,
    PlanOffer,
    get_plan_offer,
    normalize_currency,
)
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.user import User
from interview_coach.domain.identity.exceptions import UserNotFoundError
from interview_coach.exceptions import PaymentNotFoundError

logger = structlog.get_logger(__name__)

MAX_PAYMENT_HISTORY = 40
LATEST_PAYMENTS_LIMIT = 10
MAX_MERCHANT_NAME_LENGTH = 48


@dataclass(frozen=True)
class UpiSettings:
    upi_id: str
    merchant_name: str
    qr_provider: str
    expiry_minutes: int


@dataclass
class PaymentView:
    payment: Payment
    user: User


@dataclass
class ConfirmationResult:
    payment: Payment
    user: User
    newly_paid: bool


@dataclass
class SubscriptionOverview:
    user: User
    latest_payments: list[Payment]


class PaymentUseCase:
    """Create, inspect and confirm UPI payment intents."""

    def __init__(
        self,
        payment_repository: PaymentRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        upi_settings: UpiSettings,
    ) -> None:
        self.payment_repository = payment_repository
        self.user_repository = user_repository
        self.upi_settings = upi_settings

    def list_plans(self) -> list[PlanOffer]:
        return list(PLAN_CATALOG.values())

    def _get_user(self, user_id: int) -> User:
        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _get_payment(self, payment_id: str, user_id: int) -> Payment:
        reference = (payment_id or "").strip()
        payment = (
            self.payment_repository.find_by_reference(reference, UserId(user_id))
            if reference
            else None
        )
        if payment is None:
            raise PaymentNotFoundError(reference)
        return payment

    def create_intent(
        self, user_id: int, plan: str | None, method: str | None, currency: str | None
    ) -> PaymentView:
        """
        Create a pending UPI payment with a QR code for a plan.

        Raises:
            ValidationError: If the plan, method or currency is not accepted
            UserNotFoundError: If the user does not exist
        """
        offer = get_plan_offer(plan)
        user = self._get_user(user_id)
        settings = self.upi_settings

        payment = Payment.create_intent(
            user_id=user.id,
            offer=offer,
            method=method,
            currency=normalize_currency(currency or "INR"),
            upi_id=settings.upi_id.strip(),
            merchant_name=settings.merchant_name.strip()[:MAX_MERCHANT_NAME_LENGTH],
            qr_provider=settings.qr_provider.strip(),
            now=datetime.now(UTC),
            expiry_minutes=settings.expiry_minutes,
        )
        payment = self.payment_repository.save(payment)
        self.payment_repository.prune_for_user(user.id, keep=MAX_PAYMENT_HISTORY)

        logger.info(
            "payment_intent_created",
            user_id=user_id,
            payment_id=payment.payment_id,
            plan=payment.plan,
            amount=payment.amount,
        )
        return PaymentView(payment=payment, user=user)

    def get_payment(self, payment_id: str, user_id: int) -> PaymentView:
        """
        Look up a payment, expiring it when its window has passed.

        Raises:
            PaymentNotFoundError: If the user has no such payment
        """
        user = self._get_user(user_id)
        payment = self._get_payment(payment_id, user_id)
        if payment.expire_if_due(datetime.now(UTC)):
            payment = self.payment_repository.save(payment)
        return PaymentView(payment=payment, user=user)

    def confirm_payment(self, payment_id: str, user_id: int, utr: str | None) -> ConfirmationResult:
        """
        Confirm a payment with its UTR and activate the subscription.

        Raises:
            PaymentNotFoundError: If the user has no such payment
            InvalidUtrError: If the UTR is malformed
            PaymentExpiredError: If the payment window has passed
            PaymentNotPendingError: If the payment is no longer pending
        """
        user = self._get_user(user_id)
        payment = self._get_payment(payment_id, user_id)
        now = datetime.now(UTC)

        try:
            newly_paid = payment.confirm(utr, now)
        except PaymentExpiredError:
            self.payment_repository.save(payment)
            raise

        if not newly_paid:
            return ConfirmationResult(payment=payment, user=user, newly_paid=False)

        offer = get_plan_offer(payment.plan)
        user.subscription.activate_from_payment(
            plan=payment.plan,
            currency=payment.currency,
            duration_days=offer.duration_days,
            now=now,
        )
        payment = self.payment_repository.save(payment)
        user = self.user_repository.save(user)

        logger.info(
            "payment_confirmed",
            user_id=user_id,
            payment_id=payment.payment_id,
            plan=payment.plan,
            period_end=user.subscription.current_period_end,
        )
        return ConfirmationResult(payment=payment, user=user, newly_paid=True)

    def subscription_overview(self, user_id: int) -> SubscriptionOverview:
        user = self._get_user(user_id)
        payments = self.payment_repository.list_for_user(user.id, limit=LATEST_PAYMENTS_LIMIT)
        return SubscriptionOverview(user=user, latest_payments=payments)
