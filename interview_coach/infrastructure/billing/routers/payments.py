"""API routes for subscription payments."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from interview_coach.application.billing.use_cases.payment_use_case import PaymentUseCase
from interview_coach.core import container
from interview_coach.domain.billing.plans import PAYMENT_METHODS
from interview_coach.domain.common.exceptions import DomainError
from interview_coach.domain.identity.entities.subscription import CURRENCIES
from interview_coach.exceptions import InterviewCoachError
from interview_coach.infrastructure.billing.schemas import (
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
from interview_coach.infrastructure.common.di import inject_use_case
from interview_coach.infrastructure.identity.dependencies import CurrentUser
from interview_coach.infrastructure.identity.schemas import SubscriptionResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/plans", response_model=PlansResponse)
def list_plans(
    current_user: CurrentUser,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> PlansResponse:
    return PlansResponse(
        plans=[PlanResponse.from_offer(offer) for offer in use_case.list_plans()],
        methods=list(PAYMENT_METHODS),
        currencies=list(CURRENCIES),
    )


@router.get("/subscription/me", response_model=SubscriptionOverviewResponse)
def get_my_subscription(
    current_user: CurrentUser,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> SubscriptionOverviewResponse:
    """The caller's subscription with their 10 most recent payments."""
    overview = use_case.subscription_overview(current_user.id.value)
    return SubscriptionOverviewResponse(
        subscription=SubscriptionResponse.from_entity(overview.user.subscription),
        latest_payments=[PaymentResponse.from_entity(p) for p in overview.latest_payments],
    )


@router.post(
    "/intent", response_model=PaymentIntentResponse, status_code=status.HTTP_201_CREATED
)
def create_payment_intent(
    request: PaymentIntentRequest,
    current_user: CurrentUser,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> PaymentIntentResponse:
    """
    Create a pending UPI payment and its QR code.

    Raises:
        HTTPException 400: If the plan, method or currency is not accepted
    """
    try:
        view = use_case.create_intent(
            current_user.id.value, request.plan, request.method, request.currency
        )
        return PaymentIntentResponse(
            message="QR generated. Complete UPI payment and confirm once done.",
            payment=PaymentResponse.from_entity(view.payment),
            subscription=SubscriptionResponse.from_entity(view.user.subscription),
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to create payment intent for user {current_user.id.value}: {e!s}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{payment_id}", response_model=PaymentDetailResponse)
def get_payment(
    payment_id: str,
    current_user: CurrentUser,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> PaymentDetailResponse:
    view = use_case.get_payment(payment_id, current_user.id.value)
    return PaymentDetailResponse(
        payment=PaymentResponse.from_entity(view.payment),
        subscription=SubscriptionResponse.from_entity(view.user.subscription),
    )


@router.post("/{payment_id}/confirm", response_model=PaymentConfirmResponse)
def confirm_payment(
    payment_id: str,
    request: PaymentConfirmRequest,
    current_user: CurrentUser,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> PaymentConfirmResponse:
    """
    Confirm a payment with its UTR and activate the subscription.

    Confirming an already paid payment is a no-op.

    Raises:
        HTTPException 400: If the UTR is malformed
        HTTPException 404: If the payment does not exist
        HTTPException 409: If the payment expired or is no longer pending
    """
    try:
        result = use_case.confirm_payment(payment_id, current_user.id.value, request.utr)
        message = (
            "Payment received and subscription activated."
            if result.newly_paid
            else "Payment already marked as successful."
        )
        return PaymentConfirmResponse(
            message=message,
            payment=PaymentResponse.from_entity(result.payment),
            subscription=SubscriptionResponse.from_entity(result.user.subscription),
            user=UserResponse.from_entity(result.user),
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to confirm payment {payment_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
