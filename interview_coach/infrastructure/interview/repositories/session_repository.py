"""Repository for InterviewSession aggregates."""

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, selectinload

from interview_coach.application.interview.protocols.session_repository import UserSessionStats
from interview_coach.domain.common.text import round_half_up
from interview_coach.domain.common.value_objects.ids import InterviewSessionId, UserId
from interview_coach.domain.interview.entities.interview_session import InterviewSession
from interview_coach.infrastructure.interview.mappers.session_mapper import SessionMapper
from interview_coach.models import InterviewSession as InterviewSessionORM

logger = logging.getLogger(__name__)


def _with_children(stmt: Select) -> Select:
    return stmt.options(
        selectinload(InterviewSessionORM.questions),
        selectinload(InterviewSessionORM.integrity_events),
    )


class SessionRepository:
    """Repository for InterviewSession aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = SessionMapper()

    def find_by_id(
        self, session_id: InterviewSessionId, user_id: UserId
    ) -> InterviewSession | None:
        """
        Find a session with its questions and integrity events.

        Args:
            session_id: The session ID
            user_id: Owner of the session

        Returns:
            The session if it exists and belongs to the user, None otherwise
        """
        stmt = _with_children(
            select(InterviewSessionORM).where(
                InterviewSessionORM.id == session_id.value,
                InterviewSessionORM.user_id == user_id.value,
            )
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_certificate_id(self, certificate_id: str) -> InterviewSession | None:
        stmt = _with_children(
            select(InterviewSessionORM).where(InterviewSessionORM.certificate_id == certificate_id)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def list_for_user(self, user_id: UserId, limit: int) -> list[InterviewSession]:
        """Most recently created sessions first."""
        stmt = _with_children(
            select(InterviewSessionORM)
            .where(InterviewSessionORM.user_id == user_id.value)
            .order_by(InterviewSessionORM.created_at.desc(), InterviewSessionORM.id.desc())
            .limit(limit)
        )
        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def list_completed_for_user(self, user_id: UserId) -> list[InterviewSession]:
        """Completed sessions ordered by ended_at ascending."""
        stmt = _with_children(
            select(InterviewSessionORM)
            .where(
                InterviewSessionORM.user_id == user_id.value,
                InterviewSessionORM.status == "completed",
            )
            .order_by(InterviewSessionORM.ended_at.asc(), InterviewSessionORM.id.asc())
        )
        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def count_completed_for_user(self, user_id: UserId) -> int:
        stmt = select(func.count(InterviewSessionORM.id)).where(
            InterviewSessionORM.user_id == user_id.value,
            InterviewSessionORM.status == "completed",
        )
        return self.db.execute(stmt).scalar_one()

    def list_all(self) -> list[InterviewSession]:
        stmt = _with_children(
            select(InterviewSessionORM).order_by(
                InterviewSessionORM.created_at.desc(), InterviewSessionORM.id.desc()
            )
        )
        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def stats_for_users(self, user_ids: list[UserId]) -> dict[int, UserSessionStats]:
        """Completed session count and average overall score keyed by user id."""
        if not user_ids:
            return {}
        stmt = (
            select(
                InterviewSessionORM.user_id,
                func.count(InterviewSessionORM.id),
                func.avg(func.coalesce(InterviewSessionORM.overall_score, 0)),
            )
            .where(
                InterviewSessionORM.user_id.in_([user_id.value for user_id in user_ids]),
                InterviewSessionORM.status == "completed",
            )
            .group_by(InterviewSessionORM.user_id)
        )
        return {
            owner_id: UserSessionStats(
                completed_sessions=count,
                average_score=round_half_up(float(average or 0)),
            )
            for owner_id, count, average in self.db.execute(stmt).all()
        }

    def save(self, session: InterviewSession) -> InterviewSession:
        """
        Save a session with its questions and integrity events (create or update).

        Returns:
            Saved session with database-generated ids
        """
        if session.is_new:
            orm_model = self.mapper.to_orm(session)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(
                f"Created interview session {orm_model.id} for user {session.user_id.value}"
            )
            return self.mapper.to_domain(orm_model)

        stmt = _with_children(
            select(InterviewSessionORM).where(InterviewSessionORM.id == session.id.value)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            raise ValueError(f"Interview session with id {session.id.value} not found")

        orm_model = self.mapper.to_orm(session, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        logger.info(f"Updated interview session {session.id.value} (status={session.status})")
        return self.mapper.to_domain(orm_model)

    def delete_all_for_user(self, user_id: UserId) -> int:
        """Delete every session of a user. Returns the number deleted."""
        stmt = select(InterviewSessionORM).where(InterviewSessionORM.user_id == user_id.value)
        orm_models = list(self.db.execute(stmt).scalars())
        for orm_model in orm_models:
            self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Deleted {len(orm_models)} interview sessions of user {user_id.value}")
        return len(orm_models)
