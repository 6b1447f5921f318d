"""Use case for curating the question bank."""

from dataclasses import dataclass

import structlog

from interview_coach.application.interview.protocols.question_repository import (
    QuestionRepositoryProtocol,
)
from interview_coach.domain.common.value_objects.ids import QuestionId
from interview_coach.domain.interview.entities.question import (
    Question,
    validate_category,
    validate_source,
)
from interview_coach.domain.interview.exceptions import DuplicateQuestionError
from interview_coach.exceptions import QuestionNotFoundError

logger = structlog.get_logger(__name__)

DEFAULT_ADMIN_LIST_LIMIT = 80
MAX_ADMIN_LIST_LIMIT = 200


@dataclass
class QuestionDraft:
    """Admin input for a question. None leaves a field unchanged on update."""

    category: str | None = None
    prompt: str | None = None
    tags: list[str] | str | None = None
    role_focus: str | None = None
    company_context: str | None = None
    difficulty: str | None = None
    source: str | None = None


class QuestionAdminUseCase:
    """Admin CRUD over the question bank."""

    def __init__(self, question_repository: QuestionRepositoryProtocol) -> None:
        self.question_repository = question_repository

    def list_questions(
        self,
        category: str | None = None,
        source: str | None = None,
        search: str | None = None,
        limit: int = DEFAULT_ADMIN_LIST_LIMIT,
    ) -> list[Question]:
        if category:
            validate_category(category)
        if source:
            validate_source(source)
        limit = max(1, min(MAX_ADMIN_LIST_LIMIT, limit))
        return self.question_repository.search(
            category=category or None,
            source=source or None,
            search=(search or "").strip() or None,
            limit=limit,
        )

    def _ensure_unique(self, question: Question) -> None:
        for existing in self.question_repository.list_by_category(question.category):
            if existing.id != question.id and existing.prompt_key == question.prompt_key:
                raise DuplicateQuestionError(question.category)

    def create_question(self, draft: QuestionDraft) -> Question:
        """
        Add a question to the bank.

        Raises:
            ValidationError: If a field is invalid
            DuplicateQuestionError: If the category already holds the prompt
        """
        question = Question.create(
            category=(draft.category or "").strip(),
            prompt=draft.prompt or "",
            tags=draft.tags,
            role_focus=draft.role_focus or "",
            company_context=draft.company_context or "",
            difficulty=draft.difficulty,
            source=(draft.source or "predefined").strip().lower(),
        )
        self._ensure_unique(question)
        question = self.question_repository.save(question)

        logger.info("question_created", question_id=question.id.value, category=question.category)
        return question

    def update_question(self, question_id: int, draft: QuestionDraft) -> Question:
        """
        Edit a question.

        Raises:
            QuestionNotFoundError: If the question does not exist
            ValidationError: If a field is invalid
            DuplicateQuestionError: If the edit collides with another prompt
        """
        question = self.question_repository.find_by_id(QuestionId(question_id))
        if question is None:
            raise QuestionNotFoundError(question_id)

        question.update(
            prompt=draft.prompt,
            category=draft.category.strip() if draft.category is not None else None,
            tags=draft.tags,
            role_focus=draft.role_focus,
            company_context=draft.company_context,
            difficulty=draft.difficulty,
            source=draft.source,
        )
        self._ensure_unique(question)
        question = self.question_repository.save(question)

        logger.info("question_updated", question_id=question_id)
        return question

    def delete_question(self, question_id: int) -> None:
        if not self.question_repository.delete(QuestionId(question_id)):
            raise QuestionNotFoundError(question_id)
        logger.info("question_deleted", question_id=question_id)
