"""JWT access and refresh tokens."""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Literal

import jwt
from jwt import InvalidTokenError

from interview_coach.application.identity.protocols.token_service import TokenPair
from interview_coach.config import Settings, get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TokenType = Literal["access", "refresh"]


class TokenService:
    """
    Issue and verify HS256 tokens carrying the user id in ``sub``.

    Refresh tokens are signed with their own key and tagged ``type=refresh`` so
    one can never be replayed as a bearer token.
    """

    def __init__(
        self,
        secret_key: str,
        refresh_secret_key: str,
        access_token_minutes: int,
        refresh_token_days: int,
    ) -> None:
        self.keys: dict[TokenType, str] = {"access": secret_key, "refresh": refresh_secret_key}
        self.lifetimes: dict[TokenType, timedelta] = {
            "access": timedelta(minutes=access_token_minutes),
            "refresh": timedelta(days=refresh_token_days),
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            refresh_secret_key=settings.REFRESH_TOKEN_SECRET_KEY or settings.SECRET_KEY,
            access_token_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_token_days=settings.REFRESH_TOKEN_EXPIRE_DAYS,
        )

    def _encode(self, user_id: int, token_type: TokenType) -> str:
        expire = datetime.now(UTC) + self.lifetimes[token_type]
        claims = {"sub": str(user_id), "exp": expire, "type": token_type}
        return jwt.encode(claims, self.keys[token_type], algorithm=ALGORITHM)

    def _decode(self, token: str, token_type: TokenType) -> int | None:
        try:
            payload = jwt.decode(token, self.keys[token_type], algorithms=[ALGORITHM])
        except InvalidTokenError as e:
            logger.debug(f"Rejected {token_type} token: {e}")
            return None
        if payload.get("type") != token_type:
            return None
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            return None

    def create_access_token(self, user_id: int) -> str:
        return self._encode(user_id, "access")

    def create_token_pair(self, user_id: int) -> TokenPair:
        return TokenPair(
            access_token=self._encode(user_id, "access"),
            refresh_token=self._encode(user_id, "refresh"),
            token_type="bearer",  # noqa: S106
            expires_in=int(self.lifetimes["access"].total_seconds()),
        )

    def verify_access_token(self, token: str) -> int | None:
        return self._decode(token, "access")

    def verify_refresh_token(self, token: str) -> int | None:
        return self._decode(token, "refresh")


@lru_cache
def get_token_service() -> TokenService:
    return TokenService.from_settings(get_settings())
