from typing import Protocol


class PasswordServiceProtocol(Protocol):
    def hash_password(self, plain_password: str) -> str: ...

    def verify_password(self, plain_password: str, hashed_password: str) -> bool: ...

    def verify_against_dummy(self, plain_password: str) -> None:
        """Spend the same time as a real check when the account does not exist."""
        ...
