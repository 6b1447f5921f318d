"""Mapper for User ORM ↔ Domain conversion."""

from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.subscription import Subscription
from interview_coach.domain.identity.entities.user import User
from interview_coach.domain.common.timestamps import as_utc
from interview_coach.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=UserId(orm_model.id),
            name=orm_model.name,
            email=orm_model.email,
            hashed_password=orm_model.hashed_password,
            role=orm_model.role,
            account_status=orm_model.account_status,
            auth_provider=orm_model.auth_provider,
            target_role=orm_model.target_role,
            experience_level=orm_model.experience_level,
            preferred_companies=list(orm_model.preferred_companies or []),
            profile_summary=orm_model.profile_summary,
            resume_text=orm_model.resume_text,
            points=orm_model.points,
            badges=list(orm_model.badges or []),
            streak=orm_model.streak,
            last_practice_date=as_utc(orm_model.last_practice_date),
            subscription=Subscription(
                plan=orm_model.subscription_plan,
                status=orm_model.subscription_status,
                currency=orm_model.subscription_currency,
                current_period_start=as_utc(orm_model.subscription_period_start),
                current_period_end=as_utc(orm_model.subscription_period_end),
                auto_renew=orm_model.subscription_auto_renew,
                last_payment_at=as_utc(orm_model.subscription_last_payment_at),
            ),
            violation_count=orm_model.violation_count,
            last_violation_at=as_utc(orm_model.last_violation_at),
            last_violation_reason=orm_model.last_violation_reason,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Convert domain entity to ORM model."""
        if orm_model is None:
            orm_model = UserORM(
                id=domain_entity.id.as_column()
            )

        subscription = domain_entity.subscription
        orm_model.name = domain_entity.name
        orm_model.email = domain_entity.email
        orm_model.hashed_password = domain_entity.hashed_password
        orm_model.role = domain_entity.role
        orm_model.account_status = domain_entity.account_status
        orm_model.auth_provider = domain_entity.auth_provider
        orm_model.target_role = domain_entity.target_role
        orm_model.experience_level = domain_entity.experience_level
        orm_model.preferred_companies = list(domain_entity.preferred_companies)
        orm_model.profile_summary = domain_entity.profile_summary
        orm_model.resume_text = domain_entity.resume_text
        orm_model.points = domain_entity.points
        orm_model.badges = list(domain_entity.badges)
        orm_model.streak = domain_entity.streak
        orm_model.last_practice_date = domain_entity.last_practice_date
        orm_model.subscription_plan = subscription.plan
        orm_model.subscription_status = subscription.status
        orm_model.subscription_currency = subscription.currency
        orm_model.subscription_period_start = subscription.current_period_start
        orm_model.subscription_period_end = subscription.current_period_end
        orm_model.subscription_auto_renew = subscription.auto_renew
        orm_model.subscription_last_payment_at = subscription.last_payment_at
        orm_model.violation_count = domain_entity.violation_count
        orm_model.last_violation_at = domain_entity.last_violation_at
        orm_model.last_violation_reason = domain_entity.last_violation_reason
        return orm_model
