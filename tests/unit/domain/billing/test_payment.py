"""Tests for the Payment entity."""

from datetime import UTC, datetime, timedelta

import pytest

from interview_coach.domain.billing.entities.payment import Payment
from interview_coach.domain.billing.exceptions import (
    InvalidUtrError,
    PaymentExpiredError,
    PaymentNotPendingError,
    UnsupportedCurrencyError,
    UnsupportedPaymentMethodError,
)
from interview_coach.domain.billing.plans import get_plan_offer
from interview_coach.domain.common.value_objects import UserId

NOW = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)


def _intent(method: str | None = "upi", currency: str = "INR") -> Payment:
    return Payment.create_intent(
        user_id=UserId(1),
        offer=get_plan_offer("pro"),
        method=method,
        currency=currency,
        upi_id="coach@upi",
        merchant_name="Interview Coach",
        qr_provider="https://qr.example/",
        now=NOW,
    )


class TestCreateIntent:
    def test_pending_intent(self) -> None:
        payment = _intent(method=" UPI ")

        assert payment.status == "pending"
        assert payment.method == "upi"
        assert payment.amount == 499
        assert payment.expires_at == NOW + timedelta(minutes=15)
        assert f"tr={payment.payment_id}" in payment.upi_uri
        assert "tn=PRO+subscription" in payment.upi_uri
        assert payment.qr_code_url.startswith("https://qr.example/?size=260x260&data=")

    def test_method_defaults_to_upi(self) -> None:
        assert _intent(method=None).method == "upi"

    def test_rejects_other_methods(self) -> None:
        with pytest.raises(UnsupportedPaymentMethodError):
            _intent(method="card")

    def test_rejects_other_currencies(self) -> None:
        with pytest.raises(UnsupportedCurrencyError):
            _intent(currency="USD")


class TestExpiry:
    def test_expires_after_window(self) -> None:
        payment = _intent()

        assert payment.expire_if_due(NOW + timedelta(minutes=10)) is False
        assert payment.expire_if_due(NOW + timedelta(minutes=16)) is True
        assert payment.status == "expired"

    def test_paid_payments_never_expire(self) -> None:
        payment = _intent()
        payment.confirm("UTR123456", NOW)

        assert payment.expire_if_due(NOW + timedelta(days=1)) is False
        assert payment.status == "paid"


class TestConfirm:
    def test_confirm(self) -> None:
        payment = _intent()
        paid_at = NOW + timedelta(minutes=2)

        assert payment.confirm(" UTR 123 456 ", paid_at) is True
        assert payment.status == "paid"
        assert payment.utr == "UTR123456"
        assert payment.paid_at == paid_at

    def test_confirm_is_idempotent(self) -> None:
        payment = _intent()
        payment.confirm("UTR123456", NOW)

        assert payment.confirm("UTR999999", NOW + timedelta(hours=1)) is False
        assert payment.utr == "UTR123456"

    def test_invalid_utr_is_checked_first(self) -> None:
        payment = _intent()
        payment.confirm("UTR123456", NOW)

        with pytest.raises(InvalidUtrError):
            payment.confirm("bad", NOW)

    def test_expired_window(self) -> None:
        payment = _intent()

        with pytest.raises(PaymentExpiredError):
            payment.confirm("UTR123456", NOW + timedelta(minutes=20))
        assert payment.status == "expired"

    def test_failed_payment(self) -> None:
        payment = _intent()
        payment.status = "failed"

        with pytest.raises(PaymentNotPendingError):
            payment.confirm("UTR123456", NOW)
