"""Runtime feature toggles derived from configuration."""

from pydantic import BaseModel, Field

from interview_coach.config import get_settings


class FeatureFlags(BaseModel):
    """Public switches the client uses to hide AI, signup and recording features."""

    ai: bool = Field(..., description="AI scoring, question generation and coaching replies")
    user_registrations: bool = Field(..., description="Self-service signup is open")
    transcription: bool = Field(
        ..., description="Voice and video answers are transcribed server-side"
    )


def get_feature_flags() -> FeatureFlags:
    settings = get_settings()
    return FeatureFlags(
        ai=settings.ai_enabled,
        user_registrations=settings.ALLOW_USER_REGISTRATIONS,
        transcription=settings.transcription_enabled,
    )


def is_ai_enabled() -> bool:
    """When off, scoring, question generation and chat use the heuristic fallbacks."""
    return get_feature_flags().ai


def is_user_registrations_enabled() -> bool:
    return get_feature_flags().user_registrations


def is_transcription_enabled() -> bool:
    """When off, recorded answers rely on the typed text or the browser transcript."""
    return get_feature_flags().transcription
