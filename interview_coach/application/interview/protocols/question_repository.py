"""Protocol for the question bank repository."""

from typing import Protocol

from interview_coach.domain.common.value_objects.ids import QuestionId
from interview_coach.domain.interview.entities.question import Question


class QuestionRepositoryProtocol(Protocol):
    """Protocol for question bank persistence."""

    def find_by_id(self, question_id: QuestionId) -> Question | None: ...

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
        """
        ...

    def search(
        self,
        category: str | None = None,
        source: str | None = None,
        search: str | None = None,
        limit: int = 80,
    ) -> list[Question]:
        """Questions newest first. Search is a case-insensitive match on the prompt."""
        ...

    def list_by_category(self, category: str) -> list[Question]: ...

    def count_predefined(self) -> int: ...

    def save(self, question: Question) -> Question: ...

    def delete(self, question_id: QuestionId) -> bool: ...
