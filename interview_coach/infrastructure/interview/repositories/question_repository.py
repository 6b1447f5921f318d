"""Repository for question bank entities."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from interview_coach.domain.common.value_objects.ids import QuestionId
from interview_coach.domain.interview.entities.question import Question
from interview_coach.infrastructure.interview.mappers.question_mapper import QuestionMapper
from interview_coach.models import Question as QuestionORM

logger = logging.getLogger(__name__)


class QuestionRepository:
    """Repository for question bank entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = QuestionMapper()

    def find_by_id(self, question_id: QuestionId) -> Question | None:
        stmt = select(QuestionORM).where(QuestionORM.id == question_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def sample(
        self,
        categories: list[str],
        limit: int,
        role_focus: list[str] | None = None,
        company_context: list[str] | None = None,
        predefined_only: bool = True,
    ) -> list[Question]:
        """
        Random questions from the bank.

        Args:
            categories: Accepted interview categories
            limit: Maximum number of questions
            role_focus: Accepted role_focus values, None for any
            company_context: Accepted company_context values, None for any
            predefined_only: Restrict to questions with source "predefined"

        Returns:
            Up to `limit` questions in random order
        """
        if not categories or limit <= 0:
            return []

        stmt = select(QuestionORM).where(QuestionORM.category.in_(categories))
        if predefined_only:
            stmt = stmt.where(QuestionORM.source == "predefined")
        if role_focus:
            stmt = stmt.where(QuestionORM.role_focus.in_(role_focus))
        if company_context:
            stmt = stmt.where(QuestionORM.company_context.in_(company_context))
        stmt = stmt.order_by(func.random()).limit(limit)

        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def search(
        self,
        category: str | None = None,
        source: str | None = None,
        search: str | None = None,
        limit: int = 80,
    ) -> list[Question]:
        """Questions newest first. Search is a case-insensitive match on the prompt."""
        stmt = select(QuestionORM)
        if category:
            stmt = stmt.where(QuestionORM.category == category)
        if source:
            stmt = stmt.where(QuestionORM.source == source)
        if search:
            stmt = stmt.where(QuestionORM.prompt.ilike(f"%{search}%"))
        stmt = stmt.order_by(QuestionORM.created_at.desc(), QuestionORM.id.desc()).limit(limit)

        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def list_by_category(self, category: str) -> list[Question]:
        stmt = (
            select(QuestionORM)
            .where(QuestionORM.category == category)
            .order_by(QuestionORM.id.asc())
        )
        return [self.mapper.to_domain(orm_model) for orm_model in self.db.execute(stmt).scalars()]

    def count_predefined(self) -> int:
        stmt = select(func.count(QuestionORM.id)).where(QuestionORM.source == "predefined")
        return self.db.execute(stmt).scalar_one()

    def save(self, question: Question) -> Question:
        """
        Save a question (create or update).

        Returns:
            Saved question with database-generated values
        """
        if question.is_new:
            orm_model = self.mapper.to_orm(question)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created question {orm_model.id} in category {question.category}")
            return self.mapper.to_domain(orm_model)

        stmt = select(QuestionORM).where(QuestionORM.id == question.id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            raise ValueError(f"Question with id {question.id.value} not found")

        orm_model = self.mapper.to_orm(question, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        logger.info(f"Updated question {question.id.value}")
        return self.mapper.to_domain(orm_model)

    def delete(self, question_id: QuestionId) -> bool:
        """
        Delete a question. Sessions keep their snapshot of the prompt.

        Returns:
            True if deleted, False if not found
        """
        stmt = select(QuestionORM).where(QuestionORM.id == question_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if not orm_model:
            return False

        self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Deleted question {question_id.value}")
        return True
