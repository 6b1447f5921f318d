"""Use case for loading the built-in question bank."""

from collections.abc import Iterable
from typing import Any

import structlog

from interview_coach.application.interview.protocols.question_repository import (
    QuestionRepositoryProtocol,
)
from interview_coach.domain.interview.entities.question import Question

logger = structlog.get_logger(__name__)


class SeedQuestionBankUseCase:
    def __init__(self, question_repository: QuestionRepositoryProtocol) -> None:
        self.question_repository = question_repository

    def seed(self, entries: Iterable[dict[str, Any]]) -> int:
        """
        Insert the entries when the bank holds no predefined questions.

        Returns:
            Number of questions inserted
        """
        if self.question_repository.count_predefined() > 0:
            return 0

        inserted = 0
        for entry in entries:
            self.question_repository.save(
                Question.create(
                    category=entry["category"],
                    prompt=entry["prompt"],
                    tags=entry.get("tags"),
                    role_focus=entry.get("role_focus", "General"),
                    company_context=entry.get("company_context", "General"),
                    difficulty=entry.get("difficulty"),
                    source="predefined",
                )
            )
            inserted += 1

        logger.info("question_bank_seeded", inserted=inserted)
        return inserted
