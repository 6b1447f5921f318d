"""Repository for Payment domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from interview_coach.domain.billing.entities.payment import Payment
from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.infrastructure.billing.mappers.payment_mapper import PaymentMapper
from interview_coach.models import Payment as PaymentORM

logger = logging.getLogger(__name__)


class PaymentRepository:
    """Repository for Payment domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = PaymentMapper()

    def find_by_reference(self, payment_id: str, user_id: UserId) -> Payment | None:
        """
        Find a payment by its public reference.

        Args:
            payment_id: The PAY- reference shown to the payer
            user_id: Owner of the payment

        Returns:
            Payment entity if found and owned by the user, None otherwise
        """
        stmt = select(PaymentORM).where(
            PaymentORM.payment_id == payment_id, PaymentORM.user_id == user_id.value
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def list_for_user(self, user_id: UserId, limit: int | None = None) -> list[Payment]:
        """Newest payments first."""
        stmt = (
            select(PaymentORM)
            .where(PaymentORM.user_id == user_id.value)
            .order_by(PaymentORM.created_at.desc(), PaymentORM.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def list_all(self, limit: int | None = None) -> list[Payment]:
        """Newest payments first."""
        stmt = select(PaymentORM).order_by(PaymentORM.created_at.desc(), PaymentORM.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def save(self, payment: Payment) -> Payment:
        """
        Save a payment (create or update).

        Returns:
            Saved payment with database-generated values
        """
        if payment.is_new:
            orm_model = self.mapper.to_orm(payment)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created payment {payment.payment_id} for user {payment.user_id.value}")
            return self.mapper.to_domain(orm_model)

        stmt = select(PaymentORM).where(PaymentORM.id == payment.id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            raise ValueError(f"Payment with id {payment.id.value} not found")

        orm_model = self.mapper.to_orm(payment, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        logger.info(f"Updated payment {payment.payment_id} (status={payment.status})")
        return self.mapper.to_domain(orm_model)

    def prune_for_user(self, user_id: UserId, keep: int) -> int:
        """Delete all but the newest `keep` payments of a user. Returns the number deleted."""
        stmt = (
            select(PaymentORM)
            .where(PaymentORM.user_id == user_id.value)
            .order_by(PaymentORM.created_at.desc(), PaymentORM.id.desc())
            .offset(keep)
        )
        stale = list(self.db.execute(stmt).scalars())
        if not stale:
            return 0
        for orm_model in stale:
            self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Pruned {len(stale)} old payments of user {user_id.value}")
        return len(stale)

    def delete_all_for_user(self, user_id: UserId) -> int:
        stmt = select(PaymentORM).where(PaymentORM.user_id == user_id.value)
        orm_models = list(self.db.execute(stmt).scalars())
        for orm_model in orm_models:
            self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Deleted {len(orm_models)} payments of user {user_id.value}")
        return len(orm_models)
