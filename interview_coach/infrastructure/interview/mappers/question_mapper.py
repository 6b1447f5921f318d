"""Mapper for Question ORM ↔ Domain conversion."""

from interview_coach.domain.common.value_objects.ids import QuestionId
from interview_coach.domain.interview.entities.question import Question
from interview_coach.domain.common.timestamps import as_utc
from interview_coach.models import Question as QuestionORM


class QuestionMapper:
    """Mapper for Question ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: QuestionORM) -> Question:
        return Question(
            id=QuestionId(orm_model.id),
            category=orm_model.category,
            prompt=orm_model.prompt,
            tags=list(orm_model.tags or []),
            role_focus=orm_model.role_focus,
            company_context=orm_model.company_context,
            difficulty=orm_model.difficulty,
            source=orm_model.source,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Question, orm_model: QuestionORM | None = None) -> QuestionORM:
        if orm_model is None:
            orm_model = QuestionORM(
                id=domain_entity.id.as_column()
            )
        orm_model.category = domain_entity.category
        orm_model.prompt = domain_entity.prompt
        orm_model.tags = list(domain_entity.tags)
        orm_model.role_focus = domain_entity.role_focus
        orm_model.company_context = domain_entity.company_context
        orm_model.difficulty = domain_entity.difficulty
        orm_model.source = domain_entity.source
        return orm_model
