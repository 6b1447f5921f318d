"""Protocol for the payment repository."""

from typing import Protocol

from interview_coach.domain.billing.entities.payment import Payment
from interview_coach.domain.common.value_objects.ids import UserId


class PaymentRepositoryProtocol(Protocol):
    def find_by_reference(self, payment_id: str, user_id: UserId) -> Payment | None:
        """Find a payment by its public PAY- reference, scoped to its owner."""
        ...

    def list_for_user(self, user_id: UserId, limit: int | None = None) -> list[Payment]:
        """Newest payments first."""
        ...

    def list_all(self, limit: int | None = None) -> list[Payment]:
        """Newest payments first."""
        ...

    def save(self, payment: Payment) -> Payment: ...

    def prune_for_user(self, user_id: UserId, keep: int) -> int:
        """Delete all but the newest `keep` payments of a user. Returns the number deleted."""
        ...

    def delete_all_for_user(self, user_id: UserId) -> int: ...
