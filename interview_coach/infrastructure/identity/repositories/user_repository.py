"""Repository for User domain entities."""

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from interview_coach.domain.common.value_objects.ids import UserId
from interview_coach.domain.identity.entities.user import User
from interview_coach.domain.identity.exceptions import EmailAlreadyExistsError
from interview_coach.infrastructure.identity.mappers.user_mapper import UserMapper
from interview_coach.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def _to_domain_list(self, stmt: Select[tuple[UserORM]]) -> list[User]:
        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def find_by_id(self, user_id: UserId) -> User | None:
        orm_model = self.db.get(UserORM, user_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> User | None:
        """Look up an account by its normalized (trimmed, lowercase) email."""
        orm_model = self.db.execute(
            select(UserORM).where(UserORM.email == email)
        ).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_ids(self, user_ids: list[UserId]) -> dict[int, User]:
        if not user_ids:
            return {}
        stmt = select(UserORM).where(UserORM.id.in_([user_id.value for user_id in user_ids]))
        return {
            orm_model.id: self.mapper.to_domain(orm_model)
            for orm_model in self.db.execute(stmt).scalars()
        }

    def admin_exists(self) -> bool:
        stmt = select(UserORM.id).where(UserORM.role == "admin").limit(1)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def count(self) -> int:
        return self.db.execute(select(func.count(UserORM.id))).scalar_one()

    def list_all(self) -> list[User]:
        return self._to_domain_list(
            select(UserORM).order_by(UserORM.created_at.desc(), UserORM.id.desc())
        )

    def list_leaderboard(self, limit: int) -> list[User]:
        """Users ordered by points, then streak, then earliest sign-up."""
        stmt = (
            select(UserORM)
            .order_by(
                UserORM.points.desc(),
                UserORM.streak.desc(),
                UserORM.created_at.asc(),
                UserORM.id.asc(),
            )
            .limit(limit)
        )
        return self._to_domain_list(stmt)

    def save(self, user: User) -> User:
        """
        Insert a new account or write back changes to an existing one.

        Raises:
            EmailAlreadyExistsError: If a new account reuses a registered email
        """
        if user.is_new:
            return self._insert(user)

        orm_model = self.db.get(UserORM, user.id.value)
        if orm_model is None:
            raise ValueError(f"User with id {user.id.value} not found")
        self.mapper.to_orm(user, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def _insert(self, user: User) -> User:
        orm_model = self.mapper.to_orm(user)
        self.db.add(orm_model)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # unique index on users.email
            if "email" in str(e.orig):
                raise EmailAlreadyExistsError(user.email) from e
            raise
        self.db.refresh(orm_model)
        logger.info(f"Registered user {orm_model.id} ({user.role})")
        return self.mapper.to_domain(orm_model)

    def delete(self, user_id: UserId) -> bool:
        orm_model = self.db.get(UserORM, user_id.value)
        if orm_model is None:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Deleted user {user_id.value}")
        return True
