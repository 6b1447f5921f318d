"""Peppered password hashing backed by pwdlib."""

from functools import cached_property, lru_cache

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from interview_coach.config import get_settings


class PasswordService:
    """
    Hash and verify account passwords.

    The pepper is appended before hashing so a leaked ``users`` table alone is
    not enough to brute-force passwords offline.
    """

    def __init__(self, pepper: str = "", hasher: PasswordHash | None = None) -> None:
        self.pepper = pepper
        self.hasher = hasher or PasswordHash.recommended()

    def hash_password(self, plain_password: str) -> str:
        return self.hasher.hash(plain_password + self.pepper)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self.hasher.verify(plain_password + self.pepper, hashed_password)
        except UnknownHashError:
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hasher.hash("interview-coach-unknown-account")

    def verify_against_dummy(self, plain_password: str) -> None:
        self.verify_password(plain_password, self._dummy_hash)


@lru_cache
def get_password_service() -> PasswordService:
    return PasswordService(pepper=get_settings().PASSWORD_PEPPER)
