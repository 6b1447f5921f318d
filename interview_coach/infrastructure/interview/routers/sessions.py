"""API routes for interview sessions."""

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from interview_coach.application.interview.use_cases.answer_submission_use_case import (
    AnswerSubmission,
    AnswerSubmissionUseCase,
    MediaUpload,
)
from interview_coach.application.interview.use_cases.interview_coaching_use_case import (
    InterviewCoachingUseCase,
)
from interview_coach.application.interview.use_cases.interview_session_use_case import (
    InterviewSessionUseCase,
    SessionSetup,
)
from interview_coach.application.interview.use_cases.session_completion_use_case import (
    SessionCompletionUseCase,
)
from interview_coach.application.interview.use_cases.session_integrity_use_case import (
    SessionIntegrityUseCase,
)
from interview_coach.core import container
from interview_coach.domain.common.exceptions import DomainError
from interview_coach.domain.interview.entities.interview_session import InterviewSession
from interview_coach.domain.interview.services.interviewer_chat import ChatTurn
from interview_coach.exceptions import InterviewCoachError
from interview_coach.infrastructure.common.di import inject_use_case
from interview_coach.infrastructure.identity.dependencies import CurrentUser
from interview_coach.infrastructure.interview.schemas import (
    AnswerResponse,
    AnswerSubmitResponse,
    CertificateDetails,
    CertificateVerificationResponse,
    FollowUpRequest,
    FollowUpResponse,
    GamificationResponse,
    IntegrityEventResponse,
    JudgeChatRequest,
    JudgeChatResponse,
    SecurityIncidentRequest,
    SecurityIncidentResponse,
    SelectionResponse,
    SessionCompleteResponse,
    SessionCreateRequest,
    SessionDetail,
    SessionListItem,
    SessionResponse,
    SessionsListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

SessionUseCase = Annotated[
    InterviewSessionUseCase, Depends(inject_use_case(container.interview_session_use_case))
]
CoachingUseCase = Annotated[
    InterviewCoachingUseCase, Depends(inject_use_case(container.interview_coaching_use_case))
]


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


def _verification_url(request: Request, session: InterviewSession) -> str:
    if session.certificate is None:
        return ""
    return str(request.url_for("verify_certificate", certificate_id=session.certificate.id))


def _parse_markers(raw: str) -> list[dict[str, object]]:
    """Timeline markers arrive as a JSON array in a form field; anything else is ignored."""
    if not raw.strip():
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        return []
    return [item for item in parsed if isinstance(item, dict)] if isinstance(parsed, list) else []


async def _read_upload(upload: UploadFile | None) -> MediaUpload | None:
    if upload is None or not upload.filename:
        return None
    return MediaUpload(
        content=await upload.read(),
        filename=upload.filename,
        content_type=upload.content_type or "",
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    body: SessionCreateRequest,
    current_user: CurrentUser,
    use_case: SessionUseCase,
) -> SessionResponse:
    """
    Start an interview session.

    Predefined sessions sample the question bank; ai and resume sessions
    generate questions, falling back to templates.

    Raises:
        HTTPException 400: If the category or source is invalid, or the bank
            has no question for the setup
    """
    try:
        session = await use_case.create_session(
            current_user.id.value,
            SessionSetup(
                category=body.category,
                target_role=body.target_role,
                company_simulation=body.company_simulation,
                source=body.source,
                count=body.count,
                resume_text=body.resume_text,
                job_description_text=body.job_description_text,
                focus_areas=body.focus_areas,
            ),
        )
        return SessionResponse(session=SessionDetail.from_entity(session))
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"create session for user {current_user.id.value}", e) from e


@router.get("", response_model=SessionsListResponse)
def list_sessions(current_user: CurrentUser, use_case: SessionUseCase) -> SessionsListResponse:
    """The 40 most recent sessions of the user."""
    sessions = use_case.list_sessions(current_user.id.value)
    return SessionsListResponse(sessions=[SessionListItem.from_entity(s) for s in sessions])


@router.get("/certificates/{certificate_id}", response_model=CertificateVerificationResponse)
def verify_certificate(
    certificate_id: str, use_case: SessionUseCase
) -> CertificateVerificationResponse:
    """Public check of a completion certificate. No authentication required."""
    verification = use_case.verify_certificate(certificate_id)
    session = verification.session
    certificate = session.certificate
    return CertificateVerificationResponse(
        valid=True,
        certificate=CertificateDetails(
            id=certificate.id if certificate else certificate_id,
            issued_at=certificate.issued_at if certificate else session.ended_at,
            candidate_name=verification.candidate_name,
            category=session.category,
            target_role=session.target_role,
            company_simulation=session.company_simulation,
            overall_score=session.overall_score or 0,
            job_fit_score=session.summary.job_fit_score,
        ),
    )


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: int, request: Request, current_user: CurrentUser, use_case: SessionUseCase
) -> SessionResponse:
    session = use_case.get_session(session_id, current_user.id.value)
    return SessionResponse(
        session=SessionDetail.from_entity(session, _verification_url(request, session))
    )


@router.post("/{session_id}/answers/{question_id}", response_model=AnswerSubmitResponse)
async def submit_answer(
    session_id: int,
    question_id: int,
    current_user: CurrentUser,
    answer_type: Annotated[str, Form()] = "text",
    text_answer: Annotated[str, Form()] = "",
    transcript_hint: Annotated[str, Form()] = "",
    duration_sec: Annotated[float, Form()] = 0,
    confidence_self_rating: Annotated[float, Form()] = 0,
    facial_expression_score: Annotated[float, Form()] = 0,
    timeline_markers: Annotated[str, Form()] = "",
    audio_file: Annotated[UploadFile | None, File()] = None,
    video_file: Annotated[UploadFile | None, File()] = None,
    use_case: AnswerSubmissionUseCase = Depends(
        inject_use_case(container.answer_submission_use_case)
    ),
) -> AnswerSubmitResponse:
    """
    Score an answer given as text, a voice recording or a video recording.

    Recorded media is transcribed unless the client sends a transcript hint.

    Raises:
        HTTPException 400: Invalid answer type, empty answer, rejected media or a closed session
        HTTPException 404: Session or question not found
        HTTPException 422: No text could be derived from the answer
        HTTPException 502: Transcription failed
    """
    try:
        result = await use_case.submit_answer(
            session_id,
            question_id,
            current_user.id.value,
            AnswerSubmission(
                answer_type=answer_type,
                raw_text=text_answer,
                transcript_hint=transcript_hint,
                duration_sec=duration_sec,
                facial_expression_score=facial_expression_score,
                confidence_self_rating=confidence_self_rating,
                timeline_markers=_parse_markers(timeline_markers),
                audio_file=await _read_upload(audio_file),
                video_file=await _read_upload(video_file),
            ),
        )
        answer = result.question.answer
        if answer is None:
            raise ValueError(f"Answer missing after submission for question {question_id}")
        return AnswerSubmitResponse(
            question_id=result.question.id.value,
            answer=AnswerResponse.from_value(answer),
            follow_up_question=result.follow_up_question,
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"submit answer {session_id}/{question_id}", e) from e


@router.post("/{session_id}/questions/{question_id}/follow-up", response_model=FollowUpResponse)
async def follow_up_question(
    session_id: int,
    question_id: int,
    current_user: CurrentUser,
    use_case: CoachingUseCase,
    body: FollowUpRequest | None = None,
) -> FollowUpResponse:
    try:
        follow_up = await use_case.follow_up(
            session_id,
            question_id,
            current_user.id.value,
            answer_text=body.answer_text if body else None,
        )
        return FollowUpResponse(follow_up_question=follow_up)
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"build follow-up for {session_id}/{question_id}", e) from e


@router.post("/{session_id}/judge-chat", response_model=JudgeChatResponse)
async def judge_chat(
    session_id: int,
    body: JudgeChatRequest,
    current_user: CurrentUser,
    use_case: CoachingUseCase,
) -> JudgeChatResponse:
    """
    Talk to the judge, or to the interviewer in live mode.

    Spoken commands such as repeat, hint or next question are handled
    without AI. Other messages get an AI reply with rule-based fallback.
    """
    try:
        reply = await use_case.judge_chat(
            session_id,
            current_user.id.value,
            body.message,
            question_id=body.question_id,
            history=[ChatTurn(role=item.role, text=item.text) for item in body.history],
            mode=body.mode,
        )
        return JudgeChatResponse(
            reply=reply.reply, role=reply.role, can_speak=True, timestamp=reply.timestamp
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"reply in judge chat for session {session_id}", e) from e


@router.post("/{session_id}/security-incident", response_model=SecurityIncidentResponse)
def report_security_incident(
    session_id: int,
    body: SecurityIncidentRequest,
    current_user: CurrentUser,
    use_case: SessionIntegrityUseCase = Depends(
        inject_use_case(container.session_integrity_use_case)
    ),
) -> SecurityIncidentResponse:
    try:
        result = use_case.record_incident(
            session_id,
            current_user.id.value,
            event_type=body.type,
            reason=body.reason,
            meta=body.meta,
            terminate_session=body.terminate_session,
        )
        return SecurityIncidentResponse(
            message="Security incident recorded and session closed."
            if result.terminated
            else "Security incident recorded.",
            incident=IntegrityEventResponse.from_value(result.event),
            terminated=result.terminated,
            violation_count=result.violation_count,
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"record incident for session {session_id}", e) from e


@router.post("/{session_id}/complete", response_model=SessionCompleteResponse)
def complete_session(
    session_id: int,
    request: Request,
    current_user: CurrentUser,
    use_case: SessionCompletionUseCase = Depends(
        inject_use_case(container.session_completion_use_case)
    ),
) -> SessionCompleteResponse:
    """
    Score the session, issue its certificate and award points.

    Completing an already completed session returns it unchanged apart
    from backfilled job fit and certificate.
    """
    try:
        result = use_case.complete_session(session_id, current_user.id.value)
        session = SessionDetail.from_entity(
            result.session, _verification_url(request, result.session)
        )
        if result.already_completed:
            return SessionCompleteResponse(message="Session already completed.", session=session)

        gamification = result.gamification
        selection = result.selection
        return SessionCompleteResponse(
            message="Session completed.",
            session=session,
            gamification=GamificationResponse(
                points_earned=gamification.points_earned,
                total_points=gamification.total_points,
                streak=gamification.streak,
                awarded_badges=list(gamification.awarded_badges),
            )
            if gamification
            else None,
            selection=SelectionResponse(
                threshold=selection.threshold,
                selected=selection.selected,
                message=selection.message,
            )
            if selection
            else None,
        )
    except (InterviewCoachError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"complete session {session_id}", e) from e
