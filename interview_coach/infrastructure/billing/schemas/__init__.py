"""Billing context schemas."""

from interview_coach.infrastructure.billing.schemas.payment_schemas import (
    PaymentConfirmRequest,
    PaymentConfirmResponse,
    PaymentDetailResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentResponse,
    PlanResponse,
    PlansResponse,
    SubscriptionOverviewResponse,
)

__all__ = [
    "PaymentConfirmRequest",
    "PaymentConfirmResponse",
    "PaymentDetailResponse",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    "PaymentResponse",
    "PlanResponse",
    "PlansResponse",
    "SubscriptionOverviewResponse",
]
