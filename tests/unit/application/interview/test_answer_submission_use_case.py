"""Unit tests for AnswerSubmissionUseCase with mocked collaborators."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from interview_coach.application.interview.use_cases.answer_submission_use_case import (
    MAX_MEDIA_BYTES,
    AnswerSubmission,
    AnswerSubmissionUseCase,
    MediaUpload,
    build_media_reference,
    validate_media,
)
from interview_coach.domain.common.value_objects import (
    InterviewSessionId,
    SessionQuestionId,
    UserId,
)
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    SessionQuestion,
)
from interview_coach.domain.interview.exceptions import SessionAlreadyCompletedError
from interview_coach.exceptions import EmptyAnswerError, SessionNotFoundError, ValidationError

MODULE = "interview_coach.application.interview.use_cases.answer_submission_use_case"


def _session(status: str = "in_progress") -> InterviewSession:
    return InterviewSession(
        id=InterviewSessionId(3),
        user_id=UserId(1),
        category="Technical",
        question_source="predefined",
        status=status,
        questions=[
            SessionQuestion(
                id=SessionQuestionId(11), position=1, prompt="Design a URL shortener."
            )
        ],
    )


def _use_case(session: InterviewSession | None) -> tuple[AnswerSubmissionUseCase, MagicMock]:
    repository = MagicMock()
    repository.find_by_id.return_value = session
    repository.save.side_effect = lambda s: s
    transcription = MagicMock()
    transcription.transcribe = AsyncMock(return_value="I would hash the URL into a short key.")
    use_case = AnswerSubmissionUseCase(
        session_repository=repository,
        ai_service=MagicMock(),
        transcription_service=transcription,
    )
    return use_case, repository


def _audio(content: bytes = b"RIFF....", content_type: str = "audio/webm") -> MediaUpload:
    return MediaUpload(content=content, filename="answer.webm", content_type=content_type)


class TestValidateMedia:
    def test_accepts_supported_formats(self) -> None:
        validate_media(_audio(), MediaUpload(b"x", "clip.mp4", "video/mp4"))

    def test_audio_field_accepts_video_mime(self) -> None:
        validate_media(_audio(content_type="video/webm"), None)

    def test_rejects_unknown_audio_format(self) -> None:
        with pytest.raises(ValidationError, match="Unsupported audio format"):
            validate_media(_audio(content_type="audio/flac"), None)

    def test_rejects_audio_mime_in_video_field(self) -> None:
        with pytest.raises(ValidationError, match="Unsupported video format"):
            validate_media(None, MediaUpload(b"x", "clip.webm", "audio/webm"))

    def test_rejects_oversized_upload(self) -> None:
        with pytest.raises(ValidationError, match="too large"):
            validate_media(_audio(content=b"0" * (MAX_MEDIA_BYTES + 1)), None)


class TestBuildMediaReference:
    def test_reference_shape(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        reference = build_media_reference(3, 11, now)

        prefix = f"upload://3/11/{int(now.timestamp() * 1000)}/"
        assert reference.startswith(prefix)
        assert len(reference) == len(prefix) + 6


class TestSubmitAnswer:
    @pytest.mark.asyncio
    async def test_unknown_session_raises_not_found(self) -> None:
        use_case, _ = _use_case(None)

        with pytest.raises(SessionNotFoundError):
            await use_case.submit_answer(3, 11, 1, AnswerSubmission(raw_text="Answer"))

    @pytest.mark.asyncio
    async def test_completed_session_rejects_answers(self) -> None:
        use_case, _ = _use_case(_session(status="completed"))

        with pytest.raises(SessionAlreadyCompletedError):
            await use_case.submit_answer(3, 11, 1, AnswerSubmission(raw_text="Answer"))

    @pytest.mark.asyncio
    async def test_unknown_answer_type_is_rejected(self) -> None:
        use_case, _ = _use_case(_session())

        with pytest.raises(ValidationError, match="answerType must be"):
            await use_case.submit_answer(
                3, 11, 1, AnswerSubmission(answer_type="sms", raw_text="Answer")
            )

    @pytest.mark.asyncio
    async def test_empty_answer_is_rejected(self) -> None:
        use_case, repository = _use_case(_session())

        with pytest.raises(ValidationError, match="Answer is empty"):
            await use_case.submit_answer(3, 11, 1, AnswerSubmission(raw_text="   "))
        repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_text_answer_is_scored_and_saved(self) -> None:
        use_case, repository = _use_case(_session())

        with patch(f"{MODULE}.is_ai_enabled", return_value=False):
            result = await use_case.submit_answer(
                3,
                11,
                1,
                AnswerSubmission(
                    raw_text="  I would use a base62 encoded counter with a cache in front.  ",
                    duration_sec=40,
                ),
            )

        answer = result.question.answer
        assert answer is not None
        assert answer.answer_type == "text"
        assert answer.raw_text == "I would use a base62 encoded counter with a cache in front."
        assert answer.media_reference == ""
        assert 0 <= answer.scores.overall <= 100
        assert result.follow_up_question.startswith("Follow-up:")
        repository.save.assert_called_once()
        use_case.transcription_service.transcribe.assert_not_called()

    @pytest.mark.asyncio
    async def test_audio_upload_is_transcribed_and_typed_as_voice(self) -> None:
        use_case, _ = _use_case(_session())

        with (
            patch(f"{MODULE}.is_ai_enabled", return_value=False),
            patch(f"{MODULE}.is_transcription_enabled", return_value=True),
        ):
            result = await use_case.submit_answer(
                3, 11, 1, AnswerSubmission(answer_type="text", audio_file=_audio())
            )

        answer = result.question.answer
        assert answer is not None
        assert answer.answer_type == "voice"
        assert answer.media_reference.startswith("upload://3/11/")
        use_case.transcription_service.transcribe.assert_awaited_once_with(
            b"RIFF....", "answer.webm", "audio/webm"
        )

    @pytest.mark.asyncio
    async def test_transcript_hint_skips_transcription(self) -> None:
        use_case, _ = _use_case(_session())

        with (
            patch(f"{MODULE}.is_ai_enabled", return_value=False),
            patch(f"{MODULE}.is_transcription_enabled", return_value=True),
        ):
            result = await use_case.submit_answer(
                3,
                11,
                1,
                AnswerSubmission(
                    transcript_hint="Browser transcript of my answer.",
                    video_file=MediaUpload(b"x", "clip.mp4", "video/mp4"),
                ),
            )

        assert result.question.answer is not None
        assert result.question.answer.answer_type == "video"
        use_case.transcription_service.transcribe.assert_not_called()

    @pytest.mark.asyncio
    async def test_media_without_speech_raises_empty_answer(self) -> None:
        use_case, repository = _use_case(_session())
        use_case.transcription_service.transcribe = AsyncMock(return_value="")

        with (
            patch(f"{MODULE}.is_ai_enabled", return_value=False),
            patch(f"{MODULE}.is_transcription_enabled", return_value=True),
            pytest.raises(EmptyAnswerError),
        ):
            await use_case.submit_answer(3, 11, 1, AnswerSubmission(audio_file=_audio()))
        repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_ai_failure_falls_back_to_heuristics(self) -> None:
        use_case, _ = _use_case(_session())
        use_case.ai_service.evaluate_answer = AsyncMock(side_effect=RuntimeError("boom"))
        use_case.ai_service.generate_follow_up = AsyncMock(side_effect=RuntimeError("boom"))

        with patch(f"{MODULE}.is_ai_enabled", return_value=True):
            result = await use_case.submit_answer(
                3, 11, 1, AnswerSubmission(raw_text="I would shard the storage by key prefix.")
            )

        assert result.question.answer is not None
        assert result.follow_up_question.startswith("Follow-up:")
        use_case.ai_service.evaluate_answer.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_ai_follow_up_is_used_when_available(self) -> None:
        use_case, _ = _use_case(_session())
        use_case.ai_service.evaluate_answer = AsyncMock(side_effect=RuntimeError("boom"))
        use_case.ai_service.generate_follow_up = AsyncMock(
            return_value="  How would you expire old links?  "
        )

        with patch(f"{MODULE}.is_ai_enabled", return_value=True):
            result = await use_case.submit_answer(
                3, 11, 1, AnswerSubmission(raw_text="I would shard the storage by key prefix.")
            )

        assert result.follow_up_question == "How would you expire old links?"
