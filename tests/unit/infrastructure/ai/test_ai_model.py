"""Tests for provider selection and the AI settings validator."""

import pytest
from pydantic import ValidationError
from pydantic_ai.models.openai import OpenAIChatModel

from interview_coach.config import Settings
from interview_coach.infrastructure.ai.ai_model import build_ai_model


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


class TestBuildAiModel:
    def test_disabled_ai_has_no_model(self) -> None:
        with pytest.raises(ValueError, match="No AI model available"):
            build_ai_model(_settings(AI_PROVIDER=None))

    def test_openai_provider(self) -> None:
        model = build_ai_model(
            _settings(AI_PROVIDER="openai", AI_MODEL_NAME="gpt-4o-mini", OPENAI_API_KEY="sk-test")
        )

        assert isinstance(model, OpenAIChatModel)
        assert model.model_name == "gpt-4o-mini"


class TestProviderValidation:
    def test_model_name_is_required(self) -> None:
        with pytest.raises(ValidationError, match="AI_MODEL_NAME is required"):
            _settings(AI_PROVIDER="openai", OPENAI_API_KEY="sk-test")

    @pytest.mark.parametrize(
        ("provider", "credential"),
        [
            ("ollama", "OPENAI_BASE_URL"),
            ("openai", "OPENAI_API_KEY"),
            ("anthropic", "ANTHROPIC_API_KEY"),
            ("google", "GEMINI_API_KEY"),
        ],
    )
    def test_provider_credential_is_required(self, provider: str, credential: str) -> None:
        with pytest.raises(ValidationError, match=f"{credential} is required"):
            _settings(
                AI_PROVIDER=provider,
                AI_MODEL_NAME="model",
                OPENAI_BASE_URL=None,
                OPENAI_API_KEY=None,
                ANTHROPIC_API_KEY=None,
                GEMINI_API_KEY=None,
            )

    def test_selection_threshold_is_clamped(self) -> None:
        assert _settings(INTERVIEW_SELECTION_THRESHOLD=140).INTERVIEW_SELECTION_THRESHOLD == 100
        assert _settings(INTERVIEW_SELECTION_THRESHOLD=-5).INTERVIEW_SELECTION_THRESHOLD == 0
