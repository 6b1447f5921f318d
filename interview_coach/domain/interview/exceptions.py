"""Interview domain exceptions."""

from interview_coach.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    ValidationError,
)


class QuestionNotInSessionError(EntityNotFoundError):
    """Raised when a question id is not part of the session."""

    def __init__(self, question_id: int) -> None:
        super().__init__(
            "SessionQuestion", question_id, message="Question not found in this session."
        )


class SessionAlreadyCompletedError(ValidationError):
    """Raised when answering a question of a closed session."""

    def __init__(self) -> None:
        super().__init__("Session is already completed.", field="status", value="completed")


class NoAnsweredQuestionsError(ValidationError):
    """Raised when completing a session without any answers."""

    def __init__(self) -> None:
        super().__init__("Answer at least one question before completing.")


class DuplicateQuestionError(BusinessRuleViolationError):
    """Raised when the bank already holds the same prompt in the category."""

    def __init__(self, category: str, message: str | None = None) -> None:
        super().__init__(
            "unique_prompt_per_category",
            message or "This question already exists in the selected category.",
        )
        self.category = category


class NoQuestionsAvailableError(DomainError):
    """Raised when no question could be selected for a new session."""

    def __init__(self) -> None:
        super().__init__("No predefined questions found for this setup.")
