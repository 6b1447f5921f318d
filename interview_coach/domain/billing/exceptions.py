"""Billing domain exceptions."""

from interview_coach.domain.common.exceptions import (
    BusinessRuleViolationError,
    ValidationError,
)


class UnsupportedPaymentMethodError(ValidationError):
    def __init__(self, method: str | None) -> None:
        super().__init__("Only UPI payments are supported right now.", "method", method)


class UnsupportedCurrencyError(ValidationError):
    def __init__(self, currency: str) -> None:
        super().__init__("UPI supports INR in this flow. Please choose INR.", "currency", currency)


class InvalidUtrError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Valid UTR is required to confirm payment and activate subscription.", "utr"
        )


class PaymentExpiredError(BusinessRuleViolationError):
    def __init__(self) -> None:
        super().__init__(
            "payment_window", "Payment window expired. Generate a fresh QR and retry."
        )


class PaymentNotPendingError(BusinessRuleViolationError):
    def __init__(self) -> None:
        super().__init__("payment_pending", "This payment is no longer pending.")
