import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette import status

from interview_coach.application.identity.protocols.token_service import TokenPair
from interview_coach.application.identity.use_cases.admin_access_use_case import (
    AdminAccessUseCase,
)
from interview_coach.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from interview_coach.application.identity.use_cases.register_user_use_case import (
    RegisterUserUseCase,
)
from interview_coach.config import get_settings
from interview_coach.core import container
from interview_coach.domain.common.exceptions import DomainError
from interview_coach.domain.identity.exceptions import InvalidCredentialsError
from interview_coach.exceptions import InterviewCoachError
from interview_coach.infrastructure.common.di import inject_use_case
from interview_coach.infrastructure.common.schemas import MessageResponse
from interview_coach.infrastructure.identity.dependencies import CurrentUser
from interview_coach.infrastructure.identity.schemas import (
    AdminBootstrapResponse,
    AdminLoginRequest,
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    SignupRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address)
settings = get_settings()

REFRESH_COOKIE_PATH = f"{settings.API_V1_PREFIX}/auth"


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Set the refresh token as an httpOnly cookie."""
    response.set_cookie(
        key="refresh_token",
        value=refresh_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def _clear_refresh_cookie(response: Response) -> None:
    """Clear the refresh token cookie."""
    response.delete_cookie(
        key="refresh_token",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
    )


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")  # type: ignore[misc]
async def signup(
    request: Request,
    response: Response,
    body: SignupRequest,
    use_case: RegisterUserUseCase = Depends(inject_use_case(container.register_user_use_case)),
) -> AuthResponse:
    """
    Register a new local account.

    Returns a token pair for immediate login after registration.
    """
    try:
        user, token_pair = use_case.register_user(body.name, body.email, body.password)
        set_refresh_cookie(response, token_pair.refresh_token)
        return AuthResponse(token=token_pair, user=UserResponse.from_entity(user))
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("register user", e) from e


@router.post("/login")
@limiter.limit("5/minute")  # type: ignore[misc]
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> AuthResponse:
    try:
        user, token_pair = use_case.authenticate_user(body.email, body.password)
        set_refresh_cookie(response, token_pair.refresh_token)
        return AuthResponse(token=token_pair, user=UserResponse.from_entity(user))
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("log in", e) from e


@router.post("/admin/login")
@limiter.limit("5/minute")  # type: ignore[misc]
async def admin_login(
    request: Request,
    response: Response,
    body: AdminLoginRequest,
    use_case: AdminAccessUseCase = Depends(inject_use_case(container.admin_access_use_case)),
) -> AuthResponse:
    """
    Sign in to the admin panel.

    Outside production, the first admin login promotes the caller while
    no admin account exists yet.
    """
    try:
        user, token_pair = use_case.admin_login(body.email, body.password, body.name)
        set_refresh_cookie(response, token_pair.refresh_token)
        return AuthResponse(token=token_pair, user=UserResponse.from_entity(user))
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("log in admin", e) from e


@router.post("/admin/bootstrap")
async def admin_bootstrap(
    current_user: CurrentUser,
    use_case: AdminAccessUseCase = Depends(inject_use_case(container.admin_access_use_case)),
) -> AdminBootstrapResponse:
    """Promote the caller to admin while no admin exists (never in production)."""
    user = use_case.bootstrap_admin(current_user.id.value)
    return AdminBootstrapResponse(
        message="Admin access granted.", user=UserResponse.from_entity(user)
    )


@router.post("/refresh")
@limiter.limit("10/minute")  # type: ignore[misc]
async def refresh(
    request: Request,
    response: Response,
    body: RefreshTokenRequest | None = None,
    refresh_token: Annotated[str | None, Cookie()] = None,
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> TokenPair:
    """
    Refresh the access token using a refresh token.

    The refresh token can be provided either:
    - In an httpOnly cookie (for web clients)
    - In the request body (for other clients)
    """
    token = refresh_token
    if not token and body and body.refresh_token:
        token = body.refresh_token

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token required",
        )

    try:
        _, token_pair = use_case.refresh_access_token(token)
        set_refresh_cookie(response, token_pair.refresh_token)
        return token_pair
    except InvalidCredentialsError:
        _clear_refresh_cookie(response)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        ) from None


@router.post("/logout")
async def logout(response: Response) -> MessageResponse:
    """
    Log out by clearing the refresh token cookie.

    The access token stays valid until it expires.
    """
    _clear_refresh_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me")
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get the signed-in user."""
    return UserResponse.from_entity(current_user)
