"""Use case for browsing and generating practice questions."""

from dataclasses import dataclass

import structlog

from interview_coach.application.interview.protocols.ai_interview_service import QuestionRequest
from interview_coach.application.interview.services.question_sourcing_service import (
    QuestionSourcingService,
)
from interview_coach.domain.interview.constants import MAX_QUESTION_COUNT, MIN_QUESTION_COUNT
from interview_coach.domain.interview.entities.question import Question, validate_category
from interview_coach.domain.interview.services.question_generator import GeneratedQuestion

logger = structlog.get_logger(__name__)

MAX_PREDEFINED_LIMIT = 50


@dataclass
class GeneratedQuestionSet:
    questions: list[GeneratedQuestion]
    source: str


class QuestionBankUseCase:
    """Predefined question lookups and on-demand generation for candidates."""

    def __init__(self, sourcing_service: QuestionSourcingService) -> None:
        self.sourcing_service = sourcing_service

    def list_predefined(
        self, category: str, target_role: str, company_simulation: str, limit: int
    ) -> list[Question]:
        """
        Predefined questions for a role and company, unique by prompt.

        Raises:
            ValidationError: If the category is unknown
        """
        validate_category(category)
        limit = max(1, min(MAX_PREDEFINED_LIMIT, limit))
        return self.sourcing_service.pick_predefined(
            category, target_role, company_simulation, limit
        )

    async def generate_questions(self, request: QuestionRequest) -> GeneratedQuestionSet:
        """
        Generate personalised questions without starting a session.

        Raises:
            ValidationError: If the category is unknown
        """
        validate_category(request.category)
        count = max(MIN_QUESTION_COUNT, min(MAX_QUESTION_COUNT, request.count))
        questions = await self.sourcing_service.generate(
            QuestionRequest(
                category=request.category,
                target_role=request.target_role,
                company_simulation=request.company_simulation,
                count=count,
                resume_text=request.resume_text,
                job_description_text=request.job_description_text,
                focus_areas=request.focus_areas,
            )
        )
        source = "resume" if request.resume_text.strip() else "ai"

        logger.info(
            "questions_generated",
            category=request.category,
            requested=count,
            generated=len(questions),
        )
        return GeneratedQuestionSet(questions=questions, source=source)
