"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


NOISY_LOGGERS = ("httpx", "httpcore", "openai", "multipart")

_PROVIDER_CREDENTIALS = {
    "ollama": "OPENAI_BASE_URL",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GEMINI_API_KEY",
}


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = (
        "postgresql+psycopg://interview_coach:interview_coach_dev_password"
        "@localhost:5432/interview_coach"
    )

    SECRET_KEY: str = "dev-secret-change-me"  # noqa: S105

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Interview Coach API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Auth
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    REFRESH_TOKEN_SECRET_KEY: str = ""
    COOKIE_SECURE: bool = True
    PASSWORD_PEPPER: str = ""

    # Registration
    ALLOW_USER_REGISTRATIONS: bool = True

    # Interview sessions
    INTERVIEW_SELECTION_THRESHOLD: int = 70
    SEED_QUESTION_BANK: bool = True

    # Payments
    PAYMENT_UPI_ID: str = "interviewcoach@upi"
    PAYMENT_MERCHANT_NAME: str = "Interview Coach"
    PAYMENT_QR_PROVIDER: str = "https://api.qrserver.com/v1/create-qr-code/"
    PAYMENT_INTENT_EXPIRY_MINUTES: int = 15

    # AI configuration
    AI_PROVIDER: (
        Literal["ollama"] | Literal["openai"] | Literal["anthropic"] | Literal["google"] | None
    ) = None
    AI_MODEL_NAME: str | None = None

    # ollama
    OPENAI_BASE_URL: str | None = None
    # openai (also used for speech-to-text)
    OPENAI_API_KEY: str | None = None
    # anthropic
    ANTHROPIC_API_KEY: str | None = None
    # google
    GEMINI_API_KEY: str | None = None

    # Speech-to-text
    WHISPER_MODEL_NAME: str = "whisper-1"
    TRANSCRIPTION_LANGUAGE: str | None = None
    OPENAI_TIMEOUT_SECONDS: float = 20.0
    OPENAI_MAX_RETRIES: int = 3

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ai_enabled(self) -> bool:
        """Whether AI features are enabled."""
        return self.AI_PROVIDER is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def transcription_enabled(self) -> bool:
        """Whether audio and video answers can be transcribed server-side."""
        return bool(self.OPENAI_API_KEY)

    @field_validator("INTERVIEW_SELECTION_THRESHOLD", mode="after")
    @classmethod
    def clamp_selection_threshold(cls, value: int) -> int:
        """Keep the selection threshold on the 0-100 score scale."""
        return max(0, min(100, value))

    @field_validator("OPENAI_MAX_RETRIES", mode="after")
    @classmethod
    def at_least_one_attempt(cls, value: int) -> int:
        return max(1, value)

    @model_validator(mode="after")
    def validate_ai_provider_config(self) -> "Settings":
        """Each provider needs a model name plus its own endpoint or key."""
        if self.AI_PROVIDER is None:
            return self
        if self.AI_MODEL_NAME is None:
            msg = f"AI_MODEL_NAME is required when AI_PROVIDER is '{self.AI_PROVIDER}'"
            raise ValueError(msg)
        required = _PROVIDER_CREDENTIALS[self.AI_PROVIDER]
        if not getattr(self, required):
            msg = f"{required} is required when AI_PROVIDER is '{self.AI_PROVIDER}'"
            raise ValueError(msg)
        return self


def configure_logging(environment: str = "development") -> None:
    """
    Configure structlog on top of stdlib logging.

    Production emits one JSON object per line; other environments get the
    coloured console renderer. HTTP client loggers of the AI SDKs stay
    at WARNING.
    """
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
