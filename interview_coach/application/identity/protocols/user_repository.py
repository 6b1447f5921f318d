from typing import Protocol

from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    def find_by_id(self, user_id: UserId) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def find_by_ids(self, user_ids: list[UserId]) -> dict[int, User]: ...

    def admin_exists(self) -> bool: ...

    def count(self) -> int: ...

    def list_all(self) -> list[User]: ...

    def list_leaderboard(self, limit: int) -> list[User]: ...

    def save(self, user: User) -> User: ...

    def delete(self, user_id: UserId) -> bool: ...
