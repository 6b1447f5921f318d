"""API routes for the signed-in user's profile."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from interview_coach.application.identity.use_cases.profile_use_case import (
    ProfileUpdate,
    ProfileUseCase,
)
from interview_coach.core import container
from interview_coach.domain.common.exceptions import DomainError
from interview_coach.exceptions import InterviewCoachError
from interview_coach.infrastructure.common.di import inject_use_case
from interview_coach.infrastructure.identity.dependencies import CurrentUser
from interview_coach.infrastructure.identity.schemas import (
    AccountDeleteRequest,
    AccountDeleteResponse,
    DeletedCounts,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(
    current_user: CurrentUser,
    use_case: ProfileUseCase = Depends(inject_use_case(container.profile_use_case)),
) -> ProfileResponse:
    user = use_case.get_profile(current_user.id.value)
    return ProfileResponse(user=UserResponse.from_entity(user))


@router.put("", response_model=ProfileUpdateResponse)
def update_profile(
    request: ProfileUpdateRequest,
    current_user: CurrentUser,
    use_case: ProfileUseCase = Depends(inject_use_case(container.profile_use_case)),
) -> ProfileUpdateResponse:
    """
    Update the career profile.

    Only fields present in the request change.
    """
    try:
        user = use_case.update_profile(
            current_user.id.value,
            ProfileUpdate(
                name=request.name,
                target_role=request.target_role,
                experience_level=request.experience_level,
                preferred_companies=request.preferred_companies,
                profile_summary=request.profile_summary,
                resume_text=request.resume_text,
            ),
        )
        return ProfileUpdateResponse(
            message="Profile updated successfully.", user=UserResponse.from_entity(user)
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update profile {current_user.id.value}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete("/account", response_model=AccountDeleteResponse)
def delete_account(
    request: AccountDeleteRequest,
    current_user: CurrentUser,
    use_case: ProfileUseCase = Depends(inject_use_case(container.profile_use_case)),
) -> AccountDeleteResponse:
    """
    Permanently delete the account with its sessions and payments.

    The body must carry confirmation="DELETE".
    """
    try:
        summary = use_case.delete_account(current_user.id.value, request.confirmation)
        return AccountDeleteResponse(
            message="Account deleted permanently.",
            deleted=DeletedCounts(
                users=summary.users,
                interview_sessions=summary.interview_sessions,
                payments=summary.payments,
            ),
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete account {current_user.id.value}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
