"""Pydantic schemas for interview session endpoints."""

from datetime import datetime
from pydantic import BaseModel, Field

from interview_coach.domain.interview.constants import (
    DEFAULT_COMPANY,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TARGET_ROLE,
)
from interview_coach.domain.interview.entities.answer import Answer, ScoreCard
from interview_coach.domain.interview.entities.interview_session import (
    IntegrityEvent,
    InterviewSession,
    SessionQuestion,
)


class SessionCreateRequest(BaseModel):
    """Schema for starting an interview session."""

    category: str = Field("HR", description="Interview category")
    target_role: str = Field(DEFAULT_TARGET_ROLE, max_length=120)
    company_simulation: str = Field(DEFAULT_COMPANY, max_length=120)
    source: str = Field("predefined", description="predefined, ai or resume")
    count: int = Field(DEFAULT_QUESTION_COUNT, description="Number of questions, clamped to 3..12")
    resume_text: str = ""
    job_description_text: str = ""
    focus_areas: list[str] = Field(default_factory=list)


class ScoreCardResponse(BaseModel):
    confidence: int = 0
    communication: int = 0
    clarity: int = 0
    grammar: int = 0
    technical_accuracy: int = 0
    speaking_speed: int = 0
    facial_expression: int = 0
    relevance: int = 0
    overall: int = 0

    @classmethod
    def from_value(cls, scores: ScoreCard) -> "ScoreCardResponse":
        return cls(**scores.to_json())


class TimelineMarkerResponse(BaseModel):
    second: int
    label: str
    kind: str


class AnswerResponse(BaseModel):
    """Schema for a stored answer with its evaluation."""

    answer_type: str
    transcript: str
    raw_text: str = ""
    media_reference: str = ""
    duration_sec: float = 0
    speaking_speed_wpm: int = 0
    facial_expression_score: float = 0
    confidence_self_rating: float = 0
    scores: ScoreCardResponse
    feedback_tips: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    relevance_notes: str = ""
    timeline_markers: list[TimelineMarkerResponse] = Field(default_factory=list)
    answered_at: datetime | None = None

    @classmethod
    def from_value(cls, answer: Answer) -> "AnswerResponse":
        return cls(
            answer_type=answer.answer_type,
            transcript=answer.transcript,
            raw_text=answer.raw_text,
            media_reference=answer.media_reference,
            duration_sec=answer.duration_sec,
            speaking_speed_wpm=answer.speaking_speed_wpm,
            facial_expression_score=answer.facial_expression_score,
            confidence_self_rating=answer.confidence_self_rating,
            scores=ScoreCardResponse.from_value(answer.scores),
            feedback_tips=list(answer.feedback_tips),
            improvements=list(answer.improvements),
            relevance_notes=answer.relevance_notes,
            timeline_markers=[
                TimelineMarkerResponse(second=marker.second, label=marker.label, kind=marker.kind)
                for marker in answer.timeline_markers
            ],
            answered_at=answer.answered_at,
        )


class SessionQuestionResponse(BaseModel):
    id: int
    position: int
    prompt: str
    tags: list[str] = Field(default_factory=list)
    question_ref: int | None = None
    answer: AnswerResponse | None = None

    @classmethod
    def from_entity(cls, question: SessionQuestion) -> "SessionQuestionResponse":
        return cls(
            id=question.id.value,
            position=question.position,
            prompt=question.prompt,
            tags=list(question.tags),
            question_ref=question.question_ref.value if question.question_ref else None,
            answer=AnswerResponse.from_value(question.answer) if question.answer else None,
        )


class IntegrityEventResponse(BaseModel):
    type: str
    reason: str
    meta: str = ""
    created_at: datetime

    @classmethod
    def from_value(cls, event: IntegrityEvent) -> "IntegrityEventResponse":
        return cls(
            type=event.event_type,
            reason=event.reason,
            meta=event.meta,
            created_at=event.created_at,
        )


class SessionSummaryResponse(BaseModel):
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    recommendation: str = ""
    job_fit_score: int = 0


class CertificateResponse(BaseModel):
    id: str = ""
    issued_at: datetime | None = None
    verification_url: str = ""


def _summary(session: InterviewSession) -> SessionSummaryResponse:
    return SessionSummaryResponse(
        strengths=list(session.summary.strengths),
        improvements=list(session.summary.improvements),
        recommendation=session.summary.recommendation,
        job_fit_score=session.summary.job_fit_score,
    )


def _certificate(session: InterviewSession, verification_url: str) -> CertificateResponse:
    if session.certificate is None:
        return CertificateResponse()
    return CertificateResponse(
        id=session.certificate.id,
        issued_at=session.certificate.issued_at,
        verification_url=verification_url,
    )


class SessionListItem(BaseModel):
    """Schema for a session row in the history list."""

    id: int
    category: str
    target_role: str
    company_simulation: str
    status: str
    question_source: str
    focus_areas: list[str] = Field(default_factory=list)
    question_count: int
    answered_count: int
    overall_score: int | None = None
    job_fit_score: int = 0
    certificate_id: str = ""
    started_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, session: InterviewSession) -> "SessionListItem":
        return cls(
            id=session.id.value,
            category=session.category,
            target_role=session.target_role,
            company_simulation=session.company_simulation,
            status=session.status,
            question_source=session.question_source,
            focus_areas=list(session.focus_areas),
            question_count=len(session.questions),
            answered_count=session.answered_count,
            overall_score=session.overall_score,
            job_fit_score=session.summary.job_fit_score,
            certificate_id=session.certificate.id if session.certificate else "",
            started_at=session.started_at,
            ended_at=session.ended_at,
            created_at=session.created_at,
        )


class SessionsListResponse(BaseModel):
    sessions: list[SessionListItem]


class SessionDetail(BaseModel):
    """Schema for a full session with questions, answers and assessment."""

    id: int
    category: str
    target_role: str
    company_simulation: str
    status: str
    question_source: str
    focus_areas: list[str] = Field(default_factory=list)
    job_description_text: str = ""
    overall_score: int | None = None
    metrics: ScoreCardResponse | None = None
    summary: SessionSummaryResponse
    certificate: CertificateResponse
    questions: list[SessionQuestionResponse]
    integrity_events: list[IntegrityEventResponse] = Field(default_factory=list)
    started_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(
        cls, session: InterviewSession, verification_url: str = ""
    ) -> "SessionDetail":
        return cls(
            id=session.id.value,
            category=session.category,
            target_role=session.target_role,
            company_simulation=session.company_simulation,
            status=session.status,
            question_source=session.question_source,
            focus_areas=list(session.focus_areas),
            job_description_text=session.job_description_text,
            overall_score=session.overall_score,
            metrics=ScoreCardResponse.from_value(session.metrics) if session.metrics else None,
            summary=_summary(session),
            certificate=_certificate(session, verification_url),
            questions=[SessionQuestionResponse.from_entity(q) for q in session.questions],
            integrity_events=[
                IntegrityEventResponse.from_value(event) for event in session.integrity_events
            ],
            started_at=session.started_at,
            ended_at=session.ended_at,
            created_at=session.created_at,
        )


class SessionResponse(BaseModel):
    session: SessionDetail


class CertificateDetails(BaseModel):
    id: str
    issued_at: datetime | None = None
    candidate_name: str
    category: str
    target_role: str
    company_simulation: str
    overall_score: int = 0
    job_fit_score: int = 0


class CertificateVerificationResponse(BaseModel):
    """Schema for the public certificate check."""

    valid: bool = True
    certificate: CertificateDetails


class AnswerSubmitResponse(BaseModel):
    question_id: int
    answer: AnswerResponse
    follow_up_question: str


class FollowUpRequest(BaseModel):
    answer_text: str | None = Field(
        None, description="Answer to follow up on, defaults to the stored one"
    )


class FollowUpResponse(BaseModel):
    follow_up_question: str


class ChatHistoryItem(BaseModel):
    role: str
    text: str = ""


class JudgeChatRequest(BaseModel):
    """Schema for a message to the judge or the live interviewer."""

    message: str = Field(..., min_length=1, max_length=2000)
    question_id: int | None = None
    history: list[ChatHistoryItem] = Field(default_factory=list)
    mode: str | None = Field(None, description="judge or live_interviewer")


class JudgeChatResponse(BaseModel):
    reply: str
    role: str
    can_speak: bool = True
    timestamp: datetime


class SecurityIncidentRequest(BaseModel):
    """Schema for a proctoring incident reported by the client."""

    type: str = Field("policy", description="network, focus, clipboard or policy")
    reason: str = ""
    meta: str = ""
    terminate_session: bool = False


class SecurityIncidentResponse(BaseModel):
    message: str
    incident: IntegrityEventResponse
    terminated: bool
    violation_count: int


class GamificationResponse(BaseModel):
    points_earned: int
    total_points: int
    streak: int
    awarded_badges: list[str] = Field(default_factory=list)


class SelectionResponse(BaseModel):
    threshold: int
    selected: bool
    message: str


class SessionCompleteResponse(BaseModel):
    """Schema for the completion result."""

    message: str = ""
    session: SessionDetail
    gamification: GamificationResponse | None = None
    selection: SelectionResponse | None = None

