"""
InterviewSession aggregate root.
"""

from dataclasses import dataclass, field
from datetime import datetime

from interview_coach.domain.common.entity import Entity
from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.common.text import collapse_whitespace, unique_strings
from interview_coach.domain.common.value_object import ValueObject
from interview_coach.domain.common.value_objects.ids import (
    InterviewSessionId,
    QuestionId,
    SessionQuestionId,
    UserId,
)
from interview_coach.domain.interview.constants import (
    CATEGORIES,
    DEFAULT_COMPANY,
    DEFAULT_TARGET_ROLE,
    INTEGRITY_EVENT_TYPES,
    MAX_FOCUS_AREAS,
    MAX_INTEGRITY_EVENTS,
    MAX_INTEGRITY_TEXT_LENGTH,
    MAX_JOB_DESCRIPTION_LENGTH,
    QUESTION_SOURCES,
)
from interview_coach.domain.interview.entities.answer import Answer, ScoreCard
from interview_coach.domain.interview.exceptions import (
    NoAnsweredQuestionsError,
    QuestionNotInSessionError,
    SessionAlreadyCompletedError,
)

TERMINATION_IMPROVEMENT = "Interview auto-closed due to policy violation during unstable network."
TERMINATION_RECOMMENDATION = (
    "Session closed due to policy violation. "
    "Retry interview with stable network and keep tab focused."
)
MAX_SUMMARY_IMPROVEMENTS = 6


def normalize_focus_areas(focus_areas: list[str] | None) -> list[str]:
    return unique_strings(focus_areas or [], MAX_FOCUS_AREAS)


def normalize_integrity_text(value: str | None) -> str:
    return collapse_whitespace(value)[:MAX_INTEGRITY_TEXT_LENGTH]


def normalize_integrity_event_type(value: str | None) -> str:
    event_type = (value or "").strip().lower()
    return event_type if event_type in INTEGRITY_EVENT_TYPES else "policy"


@dataclass
class SessionQuestion(Entity[SessionQuestionId]):
    """Question snapshot asked inside a session, with the candidate's answer once given."""

    id: SessionQuestionId
    position: int
    prompt: str
    tags: list[str] = field(default_factory=list)
    question_ref: QuestionId | None = None
    answer: Answer | None = None

    @property
    def is_answered(self) -> bool:
        return self.answer is not None and self.answer.answered_at is not None


@dataclass(frozen=True)
class IntegrityEvent(ValueObject):
    """Proctoring incident reported by the client."""

    event_type: str
    reason: str
    meta: str
    created_at: datetime


@dataclass
class SessionSummary:
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    recommendation: str = ""
    job_fit_score: int = 0


@dataclass(frozen=True)
class Certificate(ValueObject):
    """Public proof of a completed session."""

    id: str
    issued_at: datetime


@dataclass
class SessionAssessment:
    """Outcome of scoring the answered questions of a session."""

    metrics: ScoreCard
    summary: SessionSummary


@dataclass
class InterviewSession(Entity[InterviewSessionId]):
    """
    Mock interview session aggregate root.

    Business Rules:
    - Only in-progress sessions accept answers
    - A session completes once, after at least one answered question
    - Focus areas are unique and capped at 6
    - Job description text is capped at 12000 characters
    - Only the latest 40 integrity events are kept
    """

    id: InterviewSessionId
    user_id: UserId
    category: str
    question_source: str
    target_role: str = DEFAULT_TARGET_ROLE
    company_simulation: str = DEFAULT_COMPANY
    focus_areas: list[str] = field(default_factory=list)
    job_description_text: str = ""
    status: str = "in_progress"
    questions: list[SessionQuestion] = field(default_factory=list)
    integrity_events: list[IntegrityEvent] = field(default_factory=list)

    metrics: ScoreCard | None = None
    summary: SessionSummary = field(default_factory=SessionSummary)
    overall_score: int | None = None
    certificate: Certificate | None = None

    started_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.category not in CATEGORIES:
            raise ValidationError("Invalid category.", field="category", value=self.category)
        if self.question_source not in QUESTION_SOURCES:
            raise ValidationError(
                "Invalid question source.", field="question_source", value=self.question_source
            )
        self.focus_areas = normalize_focus_areas(self.focus_areas)
        self.job_description_text = (self.job_description_text or "")[:MAX_JOB_DESCRIPTION_LENGTH]

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def answered_questions(self) -> list[SessionQuestion]:
        return [question for question in self.questions if question.is_answered]

    @property
    def answered_count(self) -> int:
        return len(self.answered_questions)

    @property
    def progress_percent(self) -> int:
        if not self.questions:
            return 0
        return round(self.answered_count / len(self.questions) * 100)

    def get_question(self, question_id: SessionQuestionId) -> SessionQuestion:
        """
        Look up a question of this session.

        Raises:
            QuestionNotInSessionError: If the id does not belong to the session
        """
        for question in self.questions:
            if question.id == question_id:
                return question
        raise QuestionNotInSessionError(question_id.value)

    def active_question(
        self, question_id: SessionQuestionId | None = None
    ) -> SessionQuestion | None:
        """The requested question, else the first unanswered one, else the first one."""
        if question_id is not None:
            for question in self.questions:
                if question.id == question_id:
                    return question
        for question in self.questions:
            if not question.is_answered:
                return question
        return self.questions[0] if self.questions else None

    def ensure_accepts_answers(self) -> None:
        if self.status != "in_progress":
            raise SessionAlreadyCompletedError()

    def record_answer(self, question_id: SessionQuestionId, answer: Answer) -> SessionQuestion:
        """
        Store an evaluated answer, replacing any previous one.

        Raises:
            SessionAlreadyCompletedError: If the session is closed
            QuestionNotInSessionError: If the question is not part of the session
        """
        self.ensure_accepts_answers()
        question = self.get_question(question_id)
        question.answer = answer
        return question

    def record_integrity_event(
        self,
        event_type: str | None,
        reason: str | None,
        meta: str | None,
        occurred_at: datetime,
        terminate: bool = False,
    ) -> tuple[IntegrityEvent, bool]:
        """
        Append a proctoring incident and optionally close the session.

        Returns:
            Tuple of (recorded event, whether the session was terminated)

        Raises:
            ValidationError: If the reason is blank
        """
        cleaned_reason = normalize_integrity_text(reason)
        if not cleaned_reason:
            raise ValidationError("Incident reason is required.", field="reason")

        event = IntegrityEvent(
            event_type=normalize_integrity_event_type(event_type),
            reason=cleaned_reason,
            meta=normalize_integrity_text(meta),
            created_at=occurred_at,
        )
        self.integrity_events = [*self.integrity_events, event][-MAX_INTEGRITY_EVENTS:]

        if not terminate or self.status != "in_progress":
            return event, False

        self.status = "completed"
        self.ended_at = occurred_at
        self.summary = SessionSummary(
            strengths=list(self.summary.strengths),
            improvements=[*self.summary.improvements, TERMINATION_IMPROVEMENT][
                -MAX_SUMMARY_IMPROVEMENTS:
            ],
            recommendation=TERMINATION_RECOMMENDATION,
            job_fit_score=self.summary.job_fit_score,
        )
        return event, True

    def complete(
        self, assessment: SessionAssessment, certificate_id: str, completed_at: datetime
    ) -> None:
        """
        Close the session with its final assessment and issue a certificate.

        Raises:
            SessionAlreadyCompletedError: If the session is already closed
            NoAnsweredQuestionsError: If nothing was answered
        """
        if self.is_completed:
            raise SessionAlreadyCompletedError()
        if not self.answered_questions:
            raise NoAnsweredQuestionsError()

        self.status = "completed"
        self.metrics = assessment.metrics
        self.overall_score = assessment.metrics.overall
        self.summary = assessment.summary
        self.ended_at = completed_at
        self.certificate = Certificate(id=certificate_id, issued_at=completed_at)

    def backfill_completion(self, job_fit_score: int, certificate_id: str, now: datetime) -> bool:
        """
        Fill in details that older completed sessions may lack.

        Returns:
            True if anything changed
        """
        changed = False
        if not self.summary.job_fit_score and self.job_description_text and job_fit_score:
            self.summary.job_fit_score = job_fit_score
            changed = True
        if self.certificate is None:
            self.certificate = Certificate(id=certificate_id, issued_at=self.ended_at or now)
            changed = True
        return changed

    @classmethod
    def create(
        cls,
        user_id: UserId,
        category: str,
        question_source: str,
        prompts: list[tuple[str, list[str], QuestionId | None]],
        started_at: datetime,
        target_role: str = DEFAULT_TARGET_ROLE,
        company_simulation: str = DEFAULT_COMPANY,
        focus_areas: list[str] | None = None,
        job_description_text: str = "",
    ) -> "InterviewSession":
        """
        Factory method for starting a new session.

        Args:
            user_id: Candidate taking the interview
            category: Interview category
            question_source: Where the questions came from
            prompts: (prompt, tags, bank question id) for each question, in order
            started_at: Session start time
            target_role: Role the candidate is preparing for
            company_simulation: Company style being simulated
            focus_areas: Metrics or topics to emphasise
            job_description_text: Optional job description used for job fit scoring

        Returns:
            New InterviewSession instance
        """
        questions = [
            SessionQuestion(
                id=SessionQuestionId.unsaved(),
                position=index + 1,
                prompt=prompt,
                tags=list(tags),
                question_ref=question_ref,
            )
            for index, (prompt, tags, question_ref) in enumerate(prompts)
        ]
        return cls(
            id=InterviewSessionId.unsaved(),
            user_id=user_id,
            category=category,
            question_source=question_source,
            target_role=(target_role or "").strip() or DEFAULT_TARGET_ROLE,
            company_simulation=(company_simulation or "").strip() or DEFAULT_COMPANY,
            focus_areas=focus_areas or [],
            job_description_text=(job_description_text or "").strip(),
            status="in_progress",
            questions=questions,
            started_at=started_at,
        )
