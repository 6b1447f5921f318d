"""API routes for the question bank."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from interview_coach.application.interview.protocols.ai_interview_service import QuestionRequest
from interview_coach.application.interview.use_cases.question_admin_use_case import (
    QuestionAdminUseCase,
    QuestionDraft,
)
from interview_coach.application.interview.use_cases.question_bank_use_case import (
    QuestionBankUseCase,
)
from interview_coach.core import container
from interview_coach.domain.common.exceptions import DomainError
from interview_coach.domain.interview.constants import (
    ANSWER_TYPES,
    CATEGORIES,
    COMPANIES,
    DEFAULT_COMPANY,
    DEFAULT_TARGET_ROLE,
    DIFFICULTIES,
    QUESTION_SOURCES,
)
from interview_coach.exceptions import InterviewCoachError
from interview_coach.infrastructure.common.di import inject_use_case
from interview_coach.infrastructure.common.schemas import MessageResponse
from interview_coach.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser
from interview_coach.infrastructure.interview.schemas import (
    GeneratedQuestionResponse,
    QuestionCreateRequest,
    QuestionGenerateRequest,
    QuestionGenerateResponse,
    QuestionMetaResponse,
    QuestionMutationResponse,
    QuestionResponse,
    QuestionsListResponse,
    QuestionUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.get("/meta", response_model=QuestionMetaResponse)
def get_question_meta(current_user: CurrentUser) -> QuestionMetaResponse:
    """Vocabularies for the session setup form."""
    return QuestionMetaResponse(
        categories=list(CATEGORIES),
        companies=list(COMPANIES),
        sources=list(QUESTION_SOURCES),
        answer_types=list(ANSWER_TYPES),
        difficulties=list(DIFFICULTIES),
    )


@router.get("/predefined", response_model=QuestionsListResponse)
def list_predefined_questions(
    current_user: CurrentUser,
    category: str = Query("HR"),
    role: str = Query(DEFAULT_TARGET_ROLE),
    company: str = Query(DEFAULT_COMPANY),
    limit: int = Query(20, ge=1, le=50),
    use_case: QuestionBankUseCase = Depends(inject_use_case(container.question_bank_use_case)),
) -> QuestionsListResponse:
    """
    Predefined questions for a role and company.

    Questions marked General for role or company are always included.
    """
    try:
        questions = use_case.list_predefined(category, role, company, limit)
        return QuestionsListResponse(
            questions=[QuestionResponse.from_entity(question) for question in questions]
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("list predefined questions", e) from e


@router.post("/generate", response_model=QuestionGenerateResponse)
async def generate_questions(
    request: QuestionGenerateRequest,
    current_user: CurrentUser,
    use_case: QuestionBankUseCase = Depends(inject_use_case(container.question_bank_use_case)),
) -> QuestionGenerateResponse:
    """
    Generate personalised questions.

    Uses AI when enabled and falls back to templates otherwise.
    """
    try:
        result = await use_case.generate_questions(
            QuestionRequest(
                category=request.category,
                target_role=request.role,
                company_simulation=request.company,
                count=request.count,
                resume_text=request.resume_text,
                job_description_text=request.job_description_text,
                focus_areas=request.focus_areas,
            )
        )
        return QuestionGenerateResponse(
            source=result.source,
            questions=[GeneratedQuestionResponse.from_generated(q) for q in result.questions],
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("generate questions", e) from e


@router.get("/admin", response_model=QuestionsListResponse)
def list_admin_questions(
    current_admin: CurrentAdmin,
    category: str | None = Query(None),
    source: str | None = Query(None),
    search: str | None = Query(None),
    limit: int = Query(80, ge=1, le=200),
    use_case: QuestionAdminUseCase = Depends(inject_use_case(container.question_admin_use_case)),
) -> QuestionsListResponse:
    try:
        questions = use_case.list_questions(
            category=category, source=source, search=search, limit=limit
        )
        return QuestionsListResponse(
            questions=[QuestionResponse.from_entity(question) for question in questions]
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("list admin questions", e) from e


@router.post(
    "/admin", response_model=QuestionMutationResponse, status_code=status.HTTP_201_CREATED
)
def create_question(
    request: QuestionCreateRequest,
    current_admin: CurrentAdmin,
    use_case: QuestionAdminUseCase = Depends(inject_use_case(container.question_admin_use_case)),
) -> QuestionMutationResponse:
    """
    Add a question to the bank.

    Raises:
        HTTPException 400: If a field is invalid
        HTTPException 409: If the category already holds the same prompt
    """
    try:
        question = use_case.create_question(
            QuestionDraft(
                category=request.category,
                prompt=request.prompt,
                tags=request.tags,
                role_focus=request.role_focus,
                company_context=request.company_context,
                difficulty=request.difficulty,
                source=request.source,
            )
        )
        logger.info(f"Admin {current_admin.id.value} created question {question.id.value}")
        return QuestionMutationResponse(
            message="Question created.", question=QuestionResponse.from_entity(question)
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("create question", e) from e


@router.put("/admin/{question_id}", response_model=QuestionMutationResponse)
def update_question(
    question_id: int,
    request: QuestionUpdateRequest,
    current_admin: CurrentAdmin,
    use_case: QuestionAdminUseCase = Depends(inject_use_case(container.question_admin_use_case)),
) -> QuestionMutationResponse:
    try:
        question = use_case.update_question(
            question_id,
            QuestionDraft(
                category=request.category,
                prompt=request.prompt,
                tags=request.tags,
                role_focus=request.role_focus,
                company_context=request.company_context,
                difficulty=request.difficulty,
                source=request.source,
            ),
        )
        return QuestionMutationResponse(
            message="Question updated.", question=QuestionResponse.from_entity(question)
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"update question {question_id}", e) from e


@router.delete("/admin/{question_id}", response_model=MessageResponse)
def delete_question(
    question_id: int,
    current_admin: CurrentAdmin,
    use_case: QuestionAdminUseCase = Depends(inject_use_case(container.question_admin_use_case)),
) -> MessageResponse:
    try:
        use_case.delete_question(question_id)
        return MessageResponse(message="Question deleted.")
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"delete question {question_id}", e) from e
