"""Use case for starting and browsing interview sessions."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.interview.protocols.ai_interview_service import QuestionRequest
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.application.interview.services.question_sourcing_service import (
    QuestionSourcingService,
)
from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.common.value_objects.ids import (
    InterviewSessionId,
    QuestionId,
    UserId,
)
from interview_coach.domain.interview.constants import (
    CATEGORIES,
    DEFAULT_COMPANY,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TARGET_ROLE,
    MAX_JOB_DESCRIPTION_LENGTH,
    MAX_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
    QUESTION_SOURCES,
)
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    normalize_focus_areas,
)
from interview_coach.domain.interview.exceptions import NoQuestionsAvailableError
from interview_coach.exceptions import CertificateNotFoundError, SessionNotFoundError

logger = structlog.get_logger(__name__)

RECENT_SESSIONS_LIMIT = 40


@dataclass
class SessionSetup:
    """Options chosen by the candidate before an interview."""

    category: str = "HR"
    target_role: str = DEFAULT_TARGET_ROLE
    company_simulation: str = DEFAULT_COMPANY
    source: str = "predefined"
    count: int = DEFAULT_QUESTION_COUNT
    resume_text: str = ""
    job_description_text: str = ""
    focus_areas: list[str] = field(default_factory=list)


@dataclass
class CertificateVerification:
    session: InterviewSession
    candidate_name: str


def load_owned_session(
    repository: SessionRepositoryProtocol, session_id: int, user_id: int
) -> InterviewSession:
    """
    Fetch a session of the user.

    Raises:
        SessionNotFoundError: If the session does not exist or belongs to someone else
    """
    session = repository.find_by_id(InterviewSessionId(session_id), UserId(user_id))
    if session is None:
        raise SessionNotFoundError(session_id)
    return session


class InterviewSessionUseCase:
    """Start, list and look up interview sessions."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        sourcing_service: QuestionSourcingService,
    ) -> None:
        self.session_repository = session_repository
        self.user_repository = user_repository
        self.sourcing_service = sourcing_service

    async def create_session(self, user_id: int, setup: SessionSetup) -> InterviewSession:
        """
        Start a session with predefined or generated questions.

        Args:
            user_id: Candidate starting the session
            setup: Category, role, company, question source and count

        Returns:
            The saved in-progress session

        Raises:
            ValidationError: If the category or source is invalid
            NoQuestionsAvailableError: If the bank has nothing for a predefined setup
        """
        category = (setup.category or "HR").strip()
        source = (setup.source or "predefined").strip()
        if category not in CATEGORIES:
            raise ValidationError("Invalid category.", field="category", value=category)
        if source not in QUESTION_SOURCES:
            raise ValidationError("Invalid question source.", field="source", value=source)

        target_role = (setup.target_role or "").strip() or DEFAULT_TARGET_ROLE
        company = (setup.company_simulation or "").strip() or DEFAULT_COMPANY
        count = max(MIN_QUESTION_COUNT, min(MAX_QUESTION_COUNT, setup.count))
        job_description = (setup.job_description_text or "").strip()[:MAX_JOB_DESCRIPTION_LENGTH]
        focus_areas = normalize_focus_areas(setup.focus_areas)

        prompts: list[tuple[str, list[str], QuestionId | None]]
        if source == "predefined":
            picked = self.sourcing_service.pick_predefined(category, target_role, company, count)
            if not picked:
                raise NoQuestionsAvailableError
            prompts = [(question.prompt, question.tags, question.id) for question in picked]
        else:
            generated = await self.sourcing_service.generate(
                QuestionRequest(
                    category=category,
                    target_role=target_role,
                    company_simulation=company,
                    count=count,
                    resume_text=(setup.resume_text or "").strip(),
                    job_description_text=job_description,
                    focus_areas=focus_areas,
                )
            )
            prompts = [(question.prompt, question.tags, None) for question in generated]

        session = InterviewSession.create(
            user_id=UserId(user_id),
            category=category,
            question_source=source,
            prompts=prompts,
            started_at=datetime.now(UTC),
            target_role=target_role,
            company_simulation=company,
            focus_areas=focus_areas,
            job_description_text=job_description,
        )
        session = self.session_repository.save(session)

        logger.info(
            "interview_session_created",
            session_id=session.id.value,
            user_id=user_id,
            category=category,
            source=source,
            questions=len(session.questions),
        )
        return session

    def list_sessions(self, user_id: int) -> list[InterviewSession]:
        return self.session_repository.list_for_user(UserId(user_id), RECENT_SESSIONS_LIMIT)

    def get_session(self, session_id: int, user_id: int) -> InterviewSession:
        return load_owned_session(self.session_repository, session_id, user_id)

    def verify_certificate(self, certificate_id: str) -> CertificateVerification:
        """
        Public lookup of a completion certificate.

        Raises:
            CertificateNotFoundError: If no completed session carries the certificate
        """
        cleaned = (certificate_id or "").strip().upper()
        session = self.session_repository.find_by_certificate_id(cleaned) if cleaned else None
        if session is None or not session.is_completed:
            raise CertificateNotFoundError(cleaned)

        user = self.user_repository.find_by_id(session.user_id)
        return CertificateVerification(
            session=session,
            candidate_name=user.name if user else "Candidate",
        )
