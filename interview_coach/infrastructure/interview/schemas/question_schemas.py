"""Pydantic schemas for question bank endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from interview_coach.domain.interview.constants import DEFAULT_COMPANY, DEFAULT_TARGET_ROLE
from interview_coach.domain.interview.entities.question import Question
from interview_coach.domain.interview.services.question_generator import GeneratedQuestion


class QuestionMetaResponse(BaseModel):
    """Schema for the vocabularies used when configuring a session."""

    categories: list[str]
    companies: list[str]
    sources: list[str]
    answer_types: list[str]
    difficulties: list[str]


class QuestionResponse(BaseModel):
    """Schema for a question bank entry."""

    id: int
    category: str
    prompt: str
    tags: list[str] = Field(default_factory=list)
    role_focus: str
    company_context: str
    difficulty: str
    source: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, question: Question) -> "QuestionResponse":
        return cls(
            id=question.id.value,
            category=question.category,
            prompt=question.prompt,
            tags=list(question.tags),
            role_focus=question.role_focus,
            company_context=question.company_context,
            difficulty=question.difficulty,
            source=question.source,
            created_at=question.created_at,
            updated_at=question.updated_at,
        )


class QuestionsListResponse(BaseModel):
    """Schema for a list of question bank entries."""

    questions: list[QuestionResponse] = Field(..., description="List of questions")


class QuestionGenerateRequest(BaseModel):
    """Schema for generating practice questions without starting a session."""

    category: str = Field("HR", description="Interview category")
    role: str = Field(DEFAULT_TARGET_ROLE, max_length=120, description="Target role")
    company: str = Field(DEFAULT_COMPANY, max_length=120, description="Company style")
    count: int = Field(5, description="Number of questions, clamped to 3..12")
    resume_text: str = Field("", description="Optional resume text to personalise questions")
    job_description_text: str = Field("", description="Optional job description")
    focus_areas: list[str] = Field(default_factory=list, description="Topics to emphasise")


class GeneratedQuestionResponse(BaseModel):
    """Schema for a generated question."""

    prompt: str
    tags: list[str] = Field(default_factory=list)
    source: str

    @classmethod
    def from_generated(cls, question: GeneratedQuestion) -> "GeneratedQuestionResponse":
        return cls(prompt=question.prompt, tags=list(question.tags), source=question.source)


class QuestionGenerateResponse(BaseModel):
    """Schema for the generated question set."""

    source: str = Field(..., description="ai, or resume when resume text was supplied")
    questions: list[GeneratedQuestionResponse]


class QuestionCreateRequest(BaseModel):
    """Schema for adding a question to the bank."""

    category: str = Field(..., description="HR, Technical, Behavioral or Coding")
    prompt: str = Field(..., description="Question text, at least 10 characters")
    tags: list[str] | str | None = Field(None, description="List or comma-separated tags")
    role_focus: str = Field("", max_length=120, description="Role, blank for General")
    company_context: str = Field("", max_length=120, description="Company, blank for General")
    difficulty: str | None = Field(None, description="beginner, intermediate or advanced")
    source: str = Field("predefined", description="predefined, ai or resume")


class QuestionUpdateRequest(BaseModel):
    """Schema for editing a question. Omitted fields are unchanged."""

    category: str | None = None
    prompt: str | None = None
    tags: list[str] | str | None = None
    role_focus: str | None = Field(None, max_length=120)
    company_context: str | None = Field(None, max_length=120)
    difficulty: str | None = None
    source: str | None = None


class QuestionMutationResponse(BaseModel):
    """Schema for question create and update responses."""

    message: str = Field(..., description="Response message")
    question: QuestionResponse
