"""Port for issuing and checking the access/refresh token pair."""

from typing import Protocol

from pydantic import BaseModel


class TokenPair(BaseModel):
    """Tokens handed to the client after signup, login or refresh."""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int


class TokenServiceProtocol(Protocol):
    def create_token_pair(self, user_id: int) -> TokenPair: ...

    def verify_access_token(self, token: str) -> int | None: ...

    def verify_refresh_token(self, token: str) -> int | None: ...
