"""API routes for the points leaderboard."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from interview_coach.application.analytics.use_cases.leaderboard_use_case import (
    LeaderboardUseCase,
)
from interview_coach.core import container
from interview_coach.infrastructure.analytics.schemas import LeaderboardResponse
from interview_coach.infrastructure.common.di import inject_use_case
from interview_coach.infrastructure.identity.dependencies import CurrentUser

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardResponse)
def get_leaderboard(
    current_user: CurrentUser,
    use_case: LeaderboardUseCase = Depends(inject_use_case(container.leaderboard_use_case)),
) -> LeaderboardResponse:
    """Top 30 users by points, with the caller's own entry when ranked."""
    leaderboard = use_case.get_leaderboard(current_user.id.value)
    return LeaderboardResponse.model_validate(asdict(leaderboard))
