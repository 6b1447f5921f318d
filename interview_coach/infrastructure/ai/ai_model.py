"""Builds the pydantic-ai model for the configured provider."""

from collections.abc import Callable
from functools import lru_cache

from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.ollama import OllamaProvider
from pydantic_ai.providers.openai import OpenAIProvider

from interview_coach.config import Settings, get_settings


def _ollama(settings: Settings, model_name: str) -> Model:
    return OpenAIChatModel(
        model_name=model_name,
        provider=OllamaProvider(base_url=settings.OPENAI_BASE_URL),
    )


def _openai(settings: Settings, model_name: str) -> Model:
    return OpenAIChatModel(
        model_name=model_name,
        provider=OpenAIProvider(api_key=settings.OPENAI_API_KEY, base_url=settings.OPENAI_BASE_URL),
    )


def _anthropic(settings: Settings, model_name: str) -> Model:
    return AnthropicModel(
        model_name=model_name, provider=AnthropicProvider(api_key=settings.ANTHROPIC_API_KEY)
    )


def _google(settings: Settings, model_name: str) -> Model:
    return GoogleModel(
        model_name=model_name, provider=GoogleProvider(api_key=settings.GEMINI_API_KEY)
    )


_BUILDERS: dict[str, Callable[[Settings, str], Model]] = {
    "ollama": _ollama,
    "openai": _openai,
    "anthropic": _anthropic,
    "google": _google,
}


def build_ai_model(settings: Settings) -> Model:
    """
    Model for ``AI_PROVIDER``.

    Credentials were already checked by the settings validator.

    Raises:
        ValueError: If AI is disabled or the provider is unknown
    """
    builder = _BUILDERS.get(settings.AI_PROVIDER or "")
    if builder is None or settings.AI_MODEL_NAME is None:
        raise ValueError(f"No AI model available for provider {settings.AI_PROVIDER!r}")
    return builder(settings, settings.AI_MODEL_NAME)


@lru_cache
def get_ai_model() -> Model:
    """Built lazily, so nothing provider-specific loads while AI is disabled."""
    return build_ai_model(get_settings())
