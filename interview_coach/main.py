"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from interview_coach.config import configure_logging, get_settings
from interview_coach.core import container
from interview_coach.database import dispose_engine, session_scope
from interview_coach.domain.common.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
)
from interview_coach.domain.identity.exceptions import (
    AccountNotFoundError,
    InvalidCredentialsError,
)
from interview_coach.exceptions import InterviewCoachError
from interview_coach.infrastructure.analytics.routers import analytics, leaderboard
from interview_coach.infrastructure.billing.routers import payments
from interview_coach.infrastructure.common.di import bound_session
from interview_coach.infrastructure.common.routers import settings as settings_router
from interview_coach.infrastructure.identity.routers import auth, profile
from interview_coach.infrastructure.interview.routers import questions, sessions
from interview_coach.infrastructure.interview.seed.question_bank import QUESTION_BANK

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


def seed_question_bank() -> int:
    """Load the built-in questions into an empty bank."""
    with session_scope(settings) as db, bound_session(db):
        return container.seed_question_bank_use_case().seed(QUESTION_BANK)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: seed on startup, dispose the engine on shutdown."""
    logger.info(
        "starting_application",
        environment=settings.ENVIRONMENT,
        ai_enabled=settings.ai_enabled,
        transcription_enabled=settings.transcription_enabled,
    )
    if settings.SEED_QUESTION_BANK:
        inserted = seed_question_bank()
        logger.info("question_bank_ready", inserted=inserted)
    yield
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    lifespan=lifespan,
)

app.state.limiter = auth.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _domain_status(exc: DomainError) -> int:
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, BusinessRuleViolationError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, InvalidCredentialsError | AccountNotFoundError):
        return status.HTTP_401_UNAUTHORIZED
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate domain errors into HTTP responses."""
    status_code = _domain_status(exc)
    if status_code >= status.HTTP_409_CONFLICT:
        logger.warning("domain_rule_violated", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(InterviewCoachError)
async def application_error_handler(request: Request, exc: InterviewCoachError) -> JSONResponse:
    """Translate application errors into HTTP responses."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("service_error", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(profile.router, prefix=settings.API_V1_PREFIX)
app.include_router(settings_router.router, prefix=settings.API_V1_PREFIX)
app.include_router(questions.router, prefix=settings.API_V1_PREFIX)
app.include_router(sessions.router, prefix=settings.API_V1_PREFIX)
app.include_router(payments.router, prefix=settings.API_V1_PREFIX)
app.include_router(analytics.router, prefix=settings.API_V1_PREFIX)
app.include_router(leaderboard.router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
async def health_check() -> dict[str, object]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "ai_enabled": settings.ai_enabled,
        "transcription_enabled": settings.transcription_enabled,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get(f"{settings.API_V1_PREFIX}/")
async def api_root() -> dict[str, str]:
    """API v1 root endpoint."""
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }
