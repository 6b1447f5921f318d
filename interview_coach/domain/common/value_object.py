"""
Immutable value types embedded in aggregates.

Value objects are frozen dataclasses compared by their fields. Most of them
(score cards, timeline markers, certificates) are persisted inside JSON
columns, so the base knows how to flatten one into a dict and rebuild it.
"""

from dataclasses import asdict, fields
from typing import Any, Self


class ValueObject:
    """Mixin for ``@dataclass(frozen=True)`` value types."""

    def to_json(self) -> dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> Self:
        """
        Rebuild from a stored JSON object.

        Unknown keys are ignored and missing ones take the field default, so
        rows written by older code still load.
        """
        data = data or {}
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        return cls(**{key: value for key, value in data.items() if key in known})
