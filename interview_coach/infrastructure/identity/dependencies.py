"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from interview_coach.core import container
from interview_coach.database import DatabaseSession
from interview_coach.domain.identity.entities.user import User
from interview_coach.domain.identity.exceptions import (
    AccountSuspendedError,
    AdminAccessRequiredError,
    UserNotFoundError,
)
from interview_coach.exceptions import CredentialsException
from interview_coach.infrastructure.common.di import bound_session

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)], db: DatabaseSession
) -> User:
    """
    Get the current authenticated user from the access token.

    Args:
        token: JWT access token from Authorization header
        db: Database session

    Returns:
        User domain entity

    Raises:
        CredentialsException: If token is missing or invalid, or the user is gone
        AccountSuspendedError: If the account is suspended
    """
    if not token:
        raise CredentialsException
    user_id = container.token_service().verify_access_token(token)
    if user_id is None:
        raise CredentialsException

    try:
        with bound_session(db):
            use_case = container.authentication_use_case()
        user = use_case.get_user_by_id(user_id)
    except UserNotFoundError:
        raise CredentialsException from None

    if user.is_suspended:
        raise AccountSuspendedError
    return user


async def get_current_admin(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """
    Require the current user to be an administrator.

    Raises:
        AdminAccessRequiredError: If the user is not an admin
    """
    if not current_user.is_admin:
        raise AdminAccessRequiredError
    return current_user


CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[User, Depends(get_current_admin)]
