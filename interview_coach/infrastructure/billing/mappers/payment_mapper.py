"""Mapper for Payment ORM ↔ Domain conversion."""

from interview_coach.domain.billing.entities.payment import Payment
from interview_coach.domain.common.value_objects.ids import PaymentId, UserId
from interview_coach.domain.common.timestamps import as_utc
from interview_coach.models import Payment as PaymentORM


class PaymentMapper:
    """Mapper for Payment ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: PaymentORM) -> Payment:
        return Payment(
            id=PaymentId(orm_model.id),
            payment_id=orm_model.payment_id,
            user_id=UserId(orm_model.user_id),
            plan=orm_model.plan,
            method=orm_model.method,
            status=orm_model.status,
            currency=orm_model.currency,
            amount=orm_model.amount,
            created_at=as_utc(orm_model.created_at) or orm_model.created_at,
            upi_id=orm_model.upi_id,
            upi_uri=orm_model.upi_uri,
            qr_code_url=orm_model.qr_code_url,
            utr=orm_model.utr,
            expires_at=as_utc(orm_model.expires_at),
            paid_at=as_utc(orm_model.paid_at),
        )

    def to_orm(self, domain_entity: Payment, orm_model: PaymentORM | None = None) -> PaymentORM:
        if orm_model is None:
            orm_model = PaymentORM(
                id=domain_entity.id.as_column()
            )
        orm_model.payment_id = domain_entity.payment_id
        orm_model.user_id = domain_entity.user_id.value
        orm_model.plan = domain_entity.plan
        orm_model.method = domain_entity.method
        orm_model.status = domain_entity.status
        orm_model.currency = domain_entity.currency
        orm_model.amount = domain_entity.amount
        orm_model.upi_id = domain_entity.upi_id
        orm_model.upi_uri = domain_entity.upi_uri
        orm_model.qr_code_url = domain_entity.qr_code_url
        orm_model.utr = domain_entity.utr
        orm_model.created_at = domain_entity.created_at
        orm_model.expires_at = domain_entity.expires_at
        orm_model.paid_at = domain_entity.paid_at
        return orm_model
