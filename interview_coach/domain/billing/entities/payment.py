"""Payment entity for subscription purchases."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from interview_coach.domain.billing.exceptions import (
    InvalidUtrError,
    PaymentExpiredError,
    PaymentNotPendingError,
    UnsupportedCurrencyError,
    UnsupportedPaymentMethodError,
)
from interview_coach.domain.billing.plans import PAYMENT_METHODS, PlanOffer
from interview_coach.domain.billing.upi import (
    build_qr_code_url,
    build_upi_uri,
    create_payment_reference,
    is_valid_utr,
    normalize_utr,
)
from interview_coach.domain.common.entity import Entity
from interview_coach.domain.common.value_objects.ids import PaymentId, UserId

PAYMENT_STATUSES = ("pending", "paid", "failed", "expired")


@dataclass
class Payment(Entity[PaymentId]):
    """
    UPI payment intent for a subscription plan.

    Business Rules:
    - Only UPI in INR is accepted
    - A pending intent expires after its payment window
    - Confirming requires a valid UTR and is idempotent once paid
    """

    id: PaymentId
    payment_id: str
    user_id: UserId
    plan: str
    method: str
    status: str
    currency: str
    amount: int
    created_at: datetime
    upi_id: str = ""
    upi_uri: str = ""
    qr_code_url: str = ""
    utr: str = ""
    expires_at: datetime | None = None
    paid_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    def is_past_window(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now

    def expire_if_due(self, now: datetime) -> bool:
        """
        Mark a pending intent as expired once its window has passed.

        Returns:
            True if the status changed
        """
        if self.is_pending and self.is_past_window(now):
            self.status = "expired"
            return True
        return False

    def confirm(self, utr: str | None, now: datetime) -> bool:
        """
        Settle the payment with the bank reference supplied by the payer.

        Returns:
            False if the payment was already settled, True if it was settled now

        Raises:
            InvalidUtrError: If the UTR is malformed
            PaymentExpiredError: If the payment window has passed
            PaymentNotPendingError: If the payment failed
        """
        cleaned = normalize_utr(utr)
        if not is_valid_utr(cleaned):
            raise InvalidUtrError()
        if self.is_paid:
            return False
        if self.expire_if_due(now) or self.status == "expired":
            raise PaymentExpiredError()
        if not self.is_pending:
            raise PaymentNotPendingError()

        self.status = "paid"
        self.utr = cleaned
        self.paid_at = now
        return True

    @classmethod
    def create_intent(
        cls,
        user_id: UserId,
        offer: PlanOffer,
        method: str | None,
        currency: str,
        upi_id: str,
        merchant_name: str,
        qr_provider: str,
        now: datetime,
        expiry_minutes: int = 15,
    ) -> "Payment":
        """
        Create a pending UPI payment with its deep link and QR code.

        Raises:
            UnsupportedPaymentMethodError: If the method is not UPI
            UnsupportedCurrencyError: If the currency is not INR
        """
        normalized_method = (method or "upi").strip().lower()
        if normalized_method not in PAYMENT_METHODS:
            raise UnsupportedPaymentMethodError(method)
        if currency != "INR":
            raise UnsupportedCurrencyError(currency)

        reference = create_payment_reference(now)
        amount = offer.price_for(currency)
        upi_uri = build_upi_uri(
            upi_id=upi_id,
            merchant_name=merchant_name,
            amount=amount,
            note=f"{offer.plan.upper()} subscription",
            reference=reference,
        )
        return cls(
            id=PaymentId.unsaved(),
            payment_id=reference,
            user_id=user_id,
            plan=offer.plan,
            method=normalized_method,
            status="pending",
            currency=currency,
            amount=amount,
            upi_id=upi_id,
            upi_uri=upi_uri,
            qr_code_url=build_qr_code_url(qr_provider, upi_uri),
            created_at=now,
            expires_at=now + timedelta(minutes=expiry_minutes),
        )
