from pydantic import BaseModel, Field

from interview_coach.feature_flags import FeatureFlags


class InterviewLimits(BaseModel):
    """Bounds the client enforces before submitting sessions and answers."""

    answer_types: list[str]
    min_question_count: int
    max_question_count: int
    default_question_count: int
    max_media_mb: int
    selection_threshold: int = Field(..., description="Overall score counted as selected")


class PaymentOptions(BaseModel):
    methods: list[str]
    currency: str


class AppSettingsResponse(BaseModel):
    """Public, non-user-specific configuration."""

    feature_flags: FeatureFlags
    interview: InterviewLimits
    payments: PaymentOptions
