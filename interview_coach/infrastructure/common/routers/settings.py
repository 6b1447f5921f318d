from fastapi import APIRouter

from interview_coach.application.interview.use_cases.answer_submission_use_case import (
    MAX_MEDIA_BYTES,
)
from interview_coach.config import get_settings
from interview_coach.domain.billing.plans import DEFAULT_CURRENCY, PAYMENT_METHODS
from interview_coach.domain.interview.constants import (
    ANSWER_TYPES,
    DEFAULT_QUESTION_COUNT,
    MAX_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
)
from interview_coach.feature_flags import get_feature_flags
from interview_coach.infrastructure.common.schemas.settings_schemas import (
    AppSettingsResponse,
    InterviewLimits,
    PaymentOptions,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_app_settings() -> AppSettingsResponse:
    """Feature flags and interview limits; no authentication required."""
    return AppSettingsResponse(
        feature_flags=get_feature_flags(),
        interview=InterviewLimits(
            answer_types=list(ANSWER_TYPES),
            min_question_count=MIN_QUESTION_COUNT,
            max_question_count=MAX_QUESTION_COUNT,
            default_question_count=DEFAULT_QUESTION_COUNT,
            max_media_mb=MAX_MEDIA_BYTES // (1024 * 1024),
            selection_threshold=get_settings().INTERVIEW_SELECTION_THRESHOLD,
        ),
        payments=PaymentOptions(methods=list(PAYMENT_METHODS), currency=DEFAULT_CURRENCY),
    )
