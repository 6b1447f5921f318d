"""Use case for answering a session question."""

import secrets
import string
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from interview_coach.application.interview.protocols.ai_interview_service import (
    AIInterviewServiceProtocol,
)
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.application.interview.protocols.transcription_service import (
    TranscriptionServiceProtocol,
)
from interview_coach.application.interview.use_cases.interview_session_use_case import (
    load_owned_session,
)
from interview_coach.domain.common.value_objects.ids import SessionQuestionId
from interview_coach.domain.interview.constants import ANSWER_TYPES
from interview_coach.domain.interview.entities.answer import Answer
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    SessionQuestion,
)
from interview_coach.domain.interview.services.answer_evaluator import (
    AnswerEvaluation,
    AnswerEvaluationService,
    ExternalAssessment,
)
from interview_coach.domain.interview.services.question_generator import follow_up_question
from interview_coach.domain.interview.services.timeline import (
    build_timeline_markers,
    parse_timeline_markers,
)
from interview_coach.exceptions import EmptyAnswerError, ValidationError
from interview_coach.feature_flags import is_ai_enabled, is_transcription_enabled

logger = structlog.get_logger(__name__)

MAX_MEDIA_BYTES = 25 * 1024 * 1024
ALLOWED_AUDIO_TYPES = frozenset(
    {
        "audio/webm",
        "audio/wav",
        "audio/x-wav",
        "audio/mpeg",
        "audio/mp3",
        "audio/mp4",
        "audio/aac",
        "audio/ogg",
    }
)
ALLOWED_VIDEO_TYPES = frozenset({"video/webm", "video/mp4", "video/quicktime", "video/x-msvideo"})

_REFERENCE_ALPHABET = string.ascii_lowercase + string.digits


@dataclass
class MediaUpload:
    content: bytes
    filename: str
    content_type: str


@dataclass
class AnswerSubmission:
    """Everything the client sent for one answer."""

    answer_type: str = "text"
    raw_text: str = ""
    transcript_hint: str = ""
    duration_sec: float = 0
    facial_expression_score: float = 0
    confidence_self_rating: float = 0
    timeline_markers: list[dict[str, object]] = field(default_factory=list)
    audio_file: MediaUpload | None = None
    video_file: MediaUpload | None = None


@dataclass
class AnswerResult:
    question: SessionQuestion
    follow_up_question: str


def validate_media(audio: MediaUpload | None, video: MediaUpload | None) -> None:
    """
    Check recorded media against the accepted formats and size limit.

    Raises:
        ValidationError: On an unsupported format or an oversized file
    """
    for upload in (audio, video):
        if upload is not None and len(upload.content) > MAX_MEDIA_BYTES:
            raise ValidationError(
                f"Uploaded media is too large (max {MAX_MEDIA_BYTES // (1024 * 1024)}MB)."
            )
    if audio is not None:
        mime = (audio.content_type or "").strip().lower()
        if mime not in ALLOWED_AUDIO_TYPES and mime not in ALLOWED_VIDEO_TYPES:
            raise ValidationError("Unsupported audio format. Use webm/wav/mp3/mp4/ogg.")
    if video is not None:
        mime = (video.content_type or "").strip().lower()
        if mime not in ALLOWED_VIDEO_TYPES:
            raise ValidationError("Unsupported video format. Use webm/mp4/mov/avi.")


def build_media_reference(session_id: int, question_id: int, now: datetime) -> str:
    suffix = "".join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(6))
    return f"upload://{session_id}/{question_id}/{int(now.timestamp() * 1000)}/{suffix}"


class AnswerSubmissionUseCase:
    """Transcribe, score and store a candidate's answer."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        ai_service: AIInterviewServiceProtocol,
        transcription_service: TranscriptionServiceProtocol,
    ) -> None:
        self.session_repository = session_repository
        self.ai_service = ai_service
        self.transcription_service = transcription_service
        self.evaluator = AnswerEvaluationService()

    async def submit_answer(
        self, session_id: int, question_id: int, user_id: int, submission: AnswerSubmission
    ) -> AnswerResult:
        """
        Score an answer and store it on the session question.

        Args:
            session_id: Session being answered
            question_id: Session question id
            user_id: Owner of the session
            submission: Typed text, transcript hint and recorded media

        Returns:
            AnswerResult with the stored question and a follow-up question

        Raises:
            SessionNotFoundError: If the session is not the user's
            SessionAlreadyCompletedError: If the session is closed
            QuestionNotInSessionError: If the question is not part of the session
            ValidationError: If the answer is empty, the type is unknown or media is rejected
            TranscriptionFailedError: If speech-to-text fails
            EmptyAnswerError: If no text could be derived from the answer
        """
        session = load_owned_session(self.session_repository, session_id, user_id)
        session.ensure_accepts_answers()
        question = session.get_question(SessionQuestionId(question_id))

        requested_type = (submission.answer_type or "text").strip().lower()
        raw_text = (submission.raw_text or "").strip()
        transcript_hint = (submission.transcript_hint or "").strip()
        audio, video = submission.audio_file, submission.video_file
        has_media = audio is not None or video is not None

        if requested_type not in ANSWER_TYPES:
            raise ValidationError("answerType must be text, voice, or video.")
        if not has_media and not raw_text and not transcript_hint:
            raise ValidationError("Answer is empty. Provide text or upload recorded media.")
        validate_media(audio, video)

        answer_type = requested_type
        if video is not None:
            answer_type = "video"
        elif audio is not None and answer_type == "text":
            answer_type = "voice"

        now = datetime.now(UTC)
        media_reference = build_media_reference(session_id, question_id, now) if has_media else ""

        transcript = transcript_hint
        recording = audio or video
        if not transcript and recording is not None and is_transcription_enabled():
            transcript = await self.transcription_service.transcribe(
                recording.content, recording.filename, recording.content_type
            )

        effective_text = (transcript or raw_text).strip()
        if not effective_text:
            raise EmptyAnswerError

        duration_sec = max(0.0, submission.duration_sec or 0)
        facial_score = max(0.0, min(100.0, submission.facial_expression_score or 0))
        self_rating = max(0.0, min(10.0, submission.confidence_self_rating or 0))

        evaluation = await self._evaluate(
            session,
            question,
            answer_type,
            effective_text,
            duration_sec,
            facial_score,
            self_rating,
        )

        client_markers = parse_timeline_markers(submission.timeline_markers)
        markers = client_markers or build_timeline_markers(
            duration_sec, effective_text, evaluation.improvements, evaluation.relevance_notes
        )

        answer = Answer(
            answer_type=answer_type,
            transcript=evaluation.transcript,
            raw_text=raw_text,
            media_reference=media_reference,
            duration_sec=duration_sec,
            speaking_speed_wpm=evaluation.speaking_speed_wpm,
            facial_expression_score=facial_score,
            confidence_self_rating=self_rating,
            scores=evaluation.scores,
            feedback_tips=evaluation.feedback_tips,
            improvements=evaluation.improvements,
            relevance_notes=evaluation.relevance_notes,
            timeline_markers=markers,
            answered_at=now,
        )
        session.record_answer(question.id, answer)
        follow_up = await self._follow_up(session, question, evaluation.transcript)
        session = self.session_repository.save(session)

        logger.info(
            "answer_evaluated",
            session_id=session_id,
            question_id=question_id,
            answer_type=answer_type,
            has_media=has_media,
            transcript_chars=len(evaluation.transcript),
            overall_score=evaluation.scores.overall,
        )
        return AnswerResult(
            question=session.get_question(question.id),
            follow_up_question=follow_up,
        )

    async def _evaluate(
        self,
        session: InterviewSession,
        question: SessionQuestion,
        answer_type: str,
        text: str,
        duration_sec: float,
        facial_score: float,
        self_rating: float,
    ) -> AnswerEvaluation:
        external: list[ExternalAssessment] = []
        if is_ai_enabled():
            try:
                external.append(
                    await self.ai_service.evaluate_answer(
                        question.prompt, session.category, session.target_role, text
                    )
                )
            except Exception as e:
                logger.warning(
                    "ai_answer_evaluation_failed", session_id=session.id.value, error=str(e)
                )

        return self.evaluator.evaluate(
            prompt=question.prompt,
            tags=question.tags,
            answer_type=answer_type,
            text=text,
            duration_sec=duration_sec,
            facial_expression_score=facial_score,
            confidence_self_rating=self_rating,
            external=external,
        )

    async def _follow_up(
        self, session: InterviewSession, question: SessionQuestion, answer_text: str
    ) -> str:
        return await generate_follow_up(
            self.ai_service, question.prompt, answer_text, session.category, session.target_role
        )


async def generate_follow_up(
    ai_service: AIInterviewServiceProtocol,
    prompt: str,
    answer_text: str,
    category: str,
    target_role: str,
) -> str:
    """AI follow-up question, or the template one when AI is off or fails."""
    if is_ai_enabled():
        try:
            generated = (
                await ai_service.generate_follow_up(prompt, answer_text, category, target_role)
            ).strip()
            if generated:
                return generated
        except Exception as e:
            logger.warning("ai_follow_up_failed", error=str(e))
    return follow_up_question(answer_text, category, target_role)
