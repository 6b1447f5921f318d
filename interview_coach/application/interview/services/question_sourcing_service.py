"""Selects bank questions and generates personalised ones for new sessions."""

import structlog

from interview_coach.application.interview.protocols.ai_interview_service import (
    AIInterviewServiceProtocol,
    QuestionRequest,
)
from interview_coach.application.interview.protocols.question_repository import (
    QuestionRepositoryProtocol,
)
from interview_coach.domain.interview.constants import GENERAL_CONTEXT
from interview_coach.domain.interview.entities.question import Question
from interview_coach.domain.interview.services.question_generator import (
    GeneratedQuestion,
    QuestionGeneratorService,
    dedupe_by_prompt,
    normalize_generated_questions,
)
from interview_coach.feature_flags import is_ai_enabled

logger = structlog.get_logger(__name__)

MIN_BROADER_POOL = 16


def dedupe_questions(questions: list[Question]) -> list[Question]:
    seen: set[str] = set()
    unique: list[Question] = []
    for question in questions:
        if question.prompt_key not in seen:
            seen.add(question.prompt_key)
            unique.append(question)
    return unique


class QuestionSourcingService:
    """Application service shared by the question bank and session use cases."""

    def __init__(
        self,
        question_repository: QuestionRepositoryProtocol,
        ai_service: AIInterviewServiceProtocol,
    ) -> None:
        self.question_repository = question_repository
        self.ai_service = ai_service
        self.generator = QuestionGeneratorService()

    def pick_predefined(
        self, category: str, target_role: str, company_simulation: str, count: int
    ) -> list[Question]:
        """
        Random predefined questions matching the role and company, topped up by category.
        """
        primary = self.question_repository.sample(
            [category],
            count,
            role_focus=[GENERAL_CONTEXT, target_role],
            company_context=[GENERAL_CONTEXT, company_simulation],
        )
        questions = dedupe_questions(primary)
        if len(questions) < count:
            broader = self.question_repository.sample(
                [category], max(count * 4, MIN_BROADER_POOL)
            )
            questions = dedupe_questions([*questions, *broader])
        return questions[:count]

    async def generate(self, request: QuestionRequest) -> list[GeneratedQuestion]:
        """
        Generate questions with AI, topped up by templates.

        AI failures are logged and fall back to templates.
        """
        generated: list[GeneratedQuestion] = []
        if is_ai_enabled():
            try:
                proposed = await self.ai_service.generate_questions(request)
                generated = normalize_generated_questions(proposed, request.count)
            except Exception as e:
                logger.warning("ai_question_generation_failed", error=str(e))

        if len(generated) < request.count:
            templates = self.generator.generate(
                category=request.category,
                target_role=request.target_role,
                company_simulation=request.company_simulation,
                count=max(request.count * 2, 10),
                resume_text=request.resume_text,
                job_description_text=request.job_description_text,
                focus_areas=request.focus_areas,
            )
            generated = dedupe_by_prompt([*generated, *templates])

        return generated[: request.count]
