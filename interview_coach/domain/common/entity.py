"""
Identity-carrying domain objects.

Aggregates (users, questions, interview sessions, payments) are mutable
dataclasses keyed by an integer primary key. Until the repository inserts
them, their id holds the ``UNSAVED`` sentinel.
"""

from dataclasses import dataclass
from typing import Generic, Self, TypeVar

UNSAVED = 0


@dataclass(frozen=True)
class EntityId:
    """
    Integer primary key wrapped in its own type.

    ``UserId(3)`` and ``PaymentId(3)`` never compare equal, so a session cannot
    be looked up with a payment id by mistake.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{self.__class__.__name__} cannot be negative: {self.value}")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @property
    def is_assigned(self) -> bool:
        return self.value != UNSAVED

    def as_column(self) -> int | None:
        """Primary key value for an ORM insert; None lets the database assign one."""
        return self.value if self.is_assigned else None

    @classmethod
    def unsaved(cls) -> Self:
        return cls(UNSAVED)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(Generic[IdType]):
    """Base for aggregates and their child entities."""

    id: IdType

    @property
    def is_new(self) -> bool:
        """True until the repository has stored the entity."""
        return not self.id.is_assigned
