from .password_service import PasswordServiceProtocol
from .token_service import TokenServiceProtocol
from .user_repository import UserRepositoryProtocol

__all__ = [
    "PasswordServiceProtocol",
    "TokenServiceProtocol",
    "UserRepositoryProtocol",
]
