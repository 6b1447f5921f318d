"""Question bank entity."""

from dataclasses import dataclass, field
from datetime import datetime

from interview_coach.domain.common.entity import Entity
from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.common.text import collapse_whitespace, normalize_prompt
from interview_coach.domain.common.value_objects.ids import QuestionId
from interview_coach.domain.interview.constants import (
    CATEGORIES,
    DIFFICULTIES,
    DIFFICULTY_ALIASES,
    GENERAL_CONTEXT,
    MAX_QUESTION_TAGS,
    MIN_PROMPT_LENGTH,
    QUESTION_SOURCES,
)


def normalize_difficulty(value: str | None) -> str:
    """Map easy/medium/hard aliases onto the canonical difficulty levels."""
    raw = (value or "").strip().lower()
    if not raw:
        return "intermediate"
    raw = DIFFICULTY_ALIASES.get(raw, raw)
    if raw not in DIFFICULTIES:
        raise ValidationError("Invalid difficulty.", field="difficulty", value=value)
    return raw


def normalize_tags(tags: list[str] | str | None) -> list[str]:
    """Accept a list or a comma separated string; lowercase, trim, dedupe and cap."""
    if tags is None:
        return []
    items = tags.split(",") if isinstance(tags, str) else tags
    result: list[str] = []
    for item in items:
        tag = str(item or "").strip().lower()
        if tag and tag not in result:
            result.append(tag)
    return result[:MAX_QUESTION_TAGS]


def validate_category(category: str) -> str:
    if category not in CATEGORIES:
        raise ValidationError("Invalid category.", field="category", value=category)
    return category


def validate_source(source: str) -> str:
    if source not in QUESTION_SOURCES:
        raise ValidationError("Invalid source.", field="source", value=source)
    return source


@dataclass
class Question(Entity[QuestionId]):
    """
    Entry in the question bank.

    Business Rules:
    - Category is one of HR, Technical, Behavioral, Coding
    - Prompt is whitespace-collapsed and at least 10 characters
    - Tags are lowercase, unique and capped at 12
    - Blank role focus or company context means "General"
    """

    id: QuestionId
    category: str
    prompt: str
    tags: list[str] = field(default_factory=list)
    role_focus: str = GENERAL_CONTEXT
    company_context: str = GENERAL_CONTEXT
    difficulty: str = "intermediate"
    source: str = "predefined"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        validate_category(self.category)
        validate_source(self.source)
        self.prompt = self._validate_prompt(self.prompt)
        self.tags = normalize_tags(self.tags)
        self.difficulty = normalize_difficulty(self.difficulty)
        self.role_focus = (self.role_focus or "").strip() or GENERAL_CONTEXT
        self.company_context = (self.company_context or "").strip() or GENERAL_CONTEXT

    @staticmethod
    def _validate_prompt(prompt: str) -> str:
        cleaned = collapse_whitespace(prompt)
        if not cleaned:
            raise ValidationError("Question prompt is required.", field="prompt")
        if len(cleaned) < MIN_PROMPT_LENGTH:
            raise ValidationError(
                f"Question prompt must be at least {MIN_PROMPT_LENGTH} characters.",
                field="prompt",
                value=cleaned,
            )
        return cleaned

    @property
    def prompt_key(self) -> str:
        """Normalized prompt used for duplicate detection."""
        return normalize_prompt(self.prompt)

    def update(
        self,
        prompt: str | None = None,
        category: str | None = None,
        tags: list[str] | str | None = None,
        role_focus: str | None = None,
        company_context: str | None = None,
        difficulty: str | None = None,
        source: str | None = None,
    ) -> None:
        """Apply an admin edit. Fields left as None are unchanged."""
        if prompt is not None:
            self.prompt = self._validate_prompt(prompt)
        if category is not None:
            self.category = validate_category(category)
        if tags is not None:
            self.tags = normalize_tags(tags)
        if role_focus is not None:
            self.role_focus = role_focus.strip() or GENERAL_CONTEXT
        if company_context is not None:
            self.company_context = company_context.strip() or GENERAL_CONTEXT
        if difficulty is not None:
            self.difficulty = normalize_difficulty(difficulty)
        if source is not None:
            self.source = validate_source(source.strip().lower())

    @classmethod
    def create(
        cls,
        category: str,
        prompt: str,
        tags: list[str] | str | None = None,
        role_focus: str = GENERAL_CONTEXT,
        company_context: str = GENERAL_CONTEXT,
        difficulty: str | None = None,
        source: str = "predefined",
    ) -> "Question":
        """
        Create a new question bank entry.

        Raises:
            ValidationError: If category, prompt, difficulty or source is invalid
        """
        return cls(
            id=QuestionId.unsaved(),
            category=category,
            prompt=prompt,
            tags=normalize_tags(tags),
            role_focus=role_focus,
            company_context=company_context,
            difficulty=normalize_difficulty(difficulty),
            source=source,
        )
