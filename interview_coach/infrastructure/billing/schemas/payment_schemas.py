"""Pydantic schemas for payment endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from interview_coach.domain.billing.entities.payment import Payment
from interview_coach.domain.billing.plans import PlanOffer
from interview_coach.infrastructure.identity.schemas import SubscriptionResponse, UserResponse


class PlanResponse(BaseModel):
    """Schema for a purchasable plan."""

    plan: str
    duration_days: int
    prices: dict[str, int]

    @classmethod
    def from_offer(cls, offer: PlanOffer) -> "PlanResponse":
        return cls(plan=offer.plan, duration_days=offer.duration_days, prices=dict(offer.prices))


class PlansResponse(BaseModel):
    plans: list[PlanResponse]
    methods: list[str]
    currencies: list[str]


class PaymentResponse(BaseModel):
    """Schema for a payment intent as shown to its owner."""

    payment_id: str
    plan: str
    method: str
    status: str
    currency: str
    amount: int
    upi_id: str = ""
    upi_uri: str = ""
    qr_code_url: str = ""
    utr: str = ""
    created_at: datetime
    expires_at: datetime | None = None
    paid_at: datetime | None = None

    @classmethod
    def from_entity(cls, payment: Payment, status: str | None = None) -> "PaymentResponse":
        return cls(
            payment_id=payment.payment_id,
            plan=payment.plan,
            method=payment.method,
            status=status or payment.status,
            currency=payment.currency,
            amount=payment.amount,
            upi_id=payment.upi_id,
            upi_uri=payment.upi_uri,
            qr_code_url=payment.qr_code_url,
            utr=payment.utr,
            created_at=payment.created_at,
            expires_at=payment.expires_at,
            paid_at=payment.paid_at,
        )


class PaymentIntentRequest(BaseModel):
    """Schema for requesting a UPI payment QR."""

    plan: str = Field(..., description="pro or elite")
    method: str = Field("upi", description="Payment method, only upi is accepted")
    currency: str = Field("INR", description="Currency, UPI supports INR only")


class PaymentIntentResponse(BaseModel):
    message: str
    payment: PaymentResponse
    subscription: SubscriptionResponse


class PaymentDetailResponse(BaseModel):
    payment: PaymentResponse
    subscription: SubscriptionResponse


class PaymentConfirmRequest(BaseModel):
    """Schema for confirming a payment with the bank's UTR reference."""

    utr: str = Field("", description="UPI transaction reference, 6-64 characters")


class PaymentConfirmResponse(BaseModel):
    message: str
    payment: PaymentResponse
    subscription: SubscriptionResponse
    user: UserResponse


class SubscriptionOverviewResponse(BaseModel):
    subscription: SubscriptionResponse
    latest_payments: list[PaymentResponse]
