"""API routes for progress tracking and admin analytics."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status

from interview_coach.application.analytics.use_cases.admin_billing_use_case import (
    AdminBillingUseCase,
)
from interview_coach.application.analytics.use_cases.admin_overview_use_case import (
    AdminOverviewUseCase,
)
from interview_coach.application.analytics.use_cases.admin_users_use_case import (
    AdminUsersUseCase,
)
from interview_coach.application.analytics.use_cases.progress_use_case import ProgressUseCase
from interview_coach.core import container
from interview_coach.domain.common.exceptions import DomainError
from interview_coach.exceptions import InterviewCoachError
from interview_coach.infrastructure.analytics.schemas import (
    AdminBillingResponse,
    AdminOverviewResponse,
    AdminSubscriptionUpdateRequest,
    AdminUsersResponse,
    AdminUserUpdateRequest,
    AdminUserUpdateResponse,
    BillingFiltersResponse,
    BillingPaymentRow,
    BillingTotalsResponse,
    ProgressResponse,
    UserFiltersResponse,
    UserTotalsResponse,
)
from interview_coach.infrastructure.billing.schemas import PaymentResponse
from interview_coach.infrastructure.common.di import inject_use_case
from interview_coach.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser
from interview_coach.infrastructure.identity.schemas import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/progress", response_model=ProgressResponse)
def get_progress(
    current_user: CurrentUser,
    use_case: ProgressUseCase = Depends(inject_use_case(container.progress_use_case)),
) -> ProgressResponse:
    """Score trend, breakdowns and weekly missions of the caller."""
    report = use_case.get_progress(current_user.id.value)
    return ProgressResponse.model_validate(asdict(report))


@router.get("/admin-overview", response_model=AdminOverviewResponse)
def get_admin_overview(
    current_admin: CurrentAdmin,
    use_case: AdminOverviewUseCase = Depends(inject_use_case(container.admin_overview_use_case)),
) -> AdminOverviewResponse:
    """Platform totals, 14-day trend, at-risk sessions and alerts."""
    try:
        overview = use_case.get_overview()
        return AdminOverviewResponse.model_validate(asdict(overview))
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to build admin overview: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/admin-users", response_model=AdminUsersResponse)
def list_admin_users(
    current_admin: CurrentAdmin,
    search: str | None = Query(None),
    role: str | None = Query(None),
    account_status: str | None = Query(None, alias="status"),
    plan: str | None = Query(None),
    limit: int | None = Query(None),
    use_case: AdminUsersUseCase = Depends(inject_use_case(container.admin_users_use_case)),
) -> AdminUsersResponse:
    directory = use_case.list_users(
        search=search, role=role, account_status=account_status, plan=plan, limit=limit
    )
    return AdminUsersResponse(
        generated_at=directory.generated_at,
        filters=UserFiltersResponse.model_validate(asdict(directory.filters)),
        totals=UserTotalsResponse.model_validate(asdict(directory.totals)),
        users=[UserResponse.from_entity(user) for user in directory.users],
    )


@router.patch("/admin-users/{user_id}", response_model=AdminUserUpdateResponse)
def update_admin_user(
    user_id: int,
    request: AdminUserUpdateRequest,
    current_admin: CurrentAdmin,
    use_case: AdminUsersUseCase = Depends(inject_use_case(container.admin_users_use_case)),
) -> AdminUserUpdateResponse:
    """
    Change a user's role or account status, or clear their violations.

    Raises:
        HTTPException 400: Invalid value, or an admin demoting or suspending themselves
        HTTPException 404: User not found
    """
    try:
        user = use_case.update_user(
            current_admin.id.value,
            user_id,
            role=request.role,
            account_status=request.account_status,
            reset_violations=request.reset_violations,
        )
        return AdminUserUpdateResponse(
            message="User updated successfully.", user=UserResponse.from_entity(user)
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/admin-billing", response_model=AdminBillingResponse)
def get_admin_billing(
    current_admin: CurrentAdmin,
    search: str | None = Query(None),
    plan: str | None = Query(None),
    payment_status: str | None = Query(None, alias="status"),
    limit: int | None = Query(None),
    use_case: AdminBillingUseCase = Depends(inject_use_case(container.admin_billing_use_case)),
) -> AdminBillingResponse:
    """
    Flattened payments with owners, subscriber list and revenue totals.

    The status filter accepts a subscription status or a payment status.
    """
    report = use_case.get_billing(search=search, plan=plan, status=payment_status, limit=limit)
    rows = []
    for row in report.payments:
        payment = PaymentResponse.from_entity(row.payment, status=row.status)
        rows.append(
            BillingPaymentRow(
                **payment.model_dump(),
                user_id=row.payment.user_id.value,
                user_name=row.user.name if row.user else "",
                user_email=row.user.email if row.user else "",
            )
        )
    return AdminBillingResponse(
        generated_at=report.generated_at,
        filters=BillingFiltersResponse.model_validate(asdict(report.filters)),
        totals=BillingTotalsResponse.model_validate(asdict(report.totals)),
        payments=rows,
        subscribers=[UserResponse.from_entity(user) for user in report.subscribers],
    )


@router.patch("/admin-subscription/{user_id}", response_model=AdminUserUpdateResponse)
def update_admin_subscription(
    user_id: int,
    request: AdminSubscriptionUpdateRequest,
    current_admin: CurrentAdmin,
    use_case: AdminUsersUseCase = Depends(inject_use_case(container.admin_users_use_case)),
) -> AdminUserUpdateResponse:
    """
    Override a user's subscription plan, status and period.

    Setting plan to free resets the subscription.
    """
    try:
        user = use_case.update_subscription(
            current_admin.id.value,
            user_id,
            plan=request.plan,
            status=request.status,
            currency=request.currency,
            days=request.days,
        )
        return AdminUserUpdateResponse(
            message="Subscription updated successfully.", user=UserResponse.from_entity(user)
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update subscription of user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
