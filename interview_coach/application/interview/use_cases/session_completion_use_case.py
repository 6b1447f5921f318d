"""Use case for closing an interview session."""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from interview_coach.application.identity.protocols.user_repository import UserRepositoryProtocol
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.application.interview.use_cases.interview_session_use_case import (
    load_owned_session,
)
from interview_coach.domain.gamification.services.badge_service import (
    BadgeService,
    GamificationResult,
)
from interview_coach.domain.interview.entities.interview_session import InterviewSession
from interview_coach.domain.interview.services.session_scoring import (
    SessionScoringService,
    create_certificate_id,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SelectionOutcome:
    threshold: int
    selected: bool
    message: str


@dataclass
class CompletionResult:
    session: InterviewSession
    already_completed: bool
    gamification: GamificationResult | None = None
    selection: SelectionOutcome | None = None


def selection_outcome(score: int, threshold: int) -> SelectionOutcome:
    if score >= threshold:
        return SelectionOutcome(
            threshold=threshold,
            selected=True,
            message=f"Selected: your score of {score} meets the {threshold} bar.",
        )
    return SelectionOutcome(
        threshold=threshold,
        selected=False,
        message=(
            f"Not selected this time: your score of {score} is below the {threshold} bar. "
            "Keep practicing."
        ),
    )


class SessionCompletionUseCase:
    """Scores a finished session, issues its certificate and rewards the candidate."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        selection_threshold: int,
    ) -> None:
        self.session_repository = session_repository
        self.user_repository = user_repository
        self.selection_threshold = selection_threshold
        self.scoring = SessionScoringService()
        self.badges = BadgeService()

    def complete_session(self, session_id: int, user_id: int) -> CompletionResult:
        """
        Complete a session.

        Completing twice only backfills the job fit score and certificate.

        Raises:
            SessionNotFoundError: If the session is not the user's
            NoAnsweredQuestionsError: If nothing was answered
        """
        session = load_owned_session(self.session_repository, session_id, user_id)
        now = datetime.now(UTC)

        if session.is_completed:
            job_fit = self.scoring.job_fit_score(
                session.job_description_text, session.answered_questions
            )
            certificate_id = create_certificate_id(session.id.value, user_id, now)
            if session.backfill_completion(job_fit, certificate_id, now):
                session = self.session_repository.save(session)
            return CompletionResult(session=session, already_completed=True)

        assessment = self.scoring.assess(session)
        session.complete(
            assessment, create_certificate_id(session.id.value, user_id, now), completed_at=now
        )
        session = self.session_repository.save(session)
        score = session.overall_score or 0

        gamification = GamificationResult(points_earned=0, total_points=0, streak=0)
        user = self.user_repository.find_by_id(session.user_id)
        if user is not None:
            completed = self.session_repository.count_completed_for_user(session.user_id)
            gamification = self.badges.apply(user, score, completed, now)
            self.user_repository.save(user)
        else:
            logger.warning("session_completion_user_missing", session_id=session_id)

        logger.info(
            "interview_session_completed",
            session_id=session_id,
            user_id=user_id,
            overall_score=score,
            points_earned=gamification.points_earned,
        )
        return CompletionResult(
            session=session,
            already_completed=False,
            gamification=gamification,
            selection=selection_outcome(score, self.selection_threshold),
        )
