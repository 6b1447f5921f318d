"""Use case for follow-up questions and the in-session interviewer chat."""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from interview_coach.application.interview.protocols.ai_interview_service import (
    AIInterviewServiceProtocol,
    ChatContext,
)
from interview_coach.application.interview.protocols.question_repository import (
    QuestionRepositoryProtocol,
)
from interview_coach.application.interview.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from interview_coach.application.interview.services.question_sourcing_service import (
    dedupe_questions,
)
from interview_coach.application.interview.use_cases.answer_submission_use_case import (
    generate_follow_up,
)
from interview_coach.application.interview.use_cases.interview_session_use_case import (
    load_owned_session,
)
from interview_coach.domain.common.text import collapse_whitespace
from interview_coach.domain.common.value_objects.ids import SessionQuestionId
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    SessionQuestion,
)
from interview_coach.domain.interview.services.interviewer_chat import (
    LIVE_INTERVIEWER_MODE,
    ChatTurn,
    InterviewerChatService,
    LiveCommand,
    detect_question_request,
    direct_query_fallback,
    format_question_pack,
    infer_requested_categories,
    infer_requested_count,
    normalize_history,
    normalize_mode,
    persona_label,
    persona_role,
    sample_answer_fallback,
    sanitize_candidate_message,
    strip_persona_prefix,
)
from interview_coach.feature_flags import is_ai_enabled

logger = structlog.get_logger(__name__)


@dataclass
class ChatReply:
    reply: str
    role: str
    timestamp: datetime


class InterviewCoachingUseCase:
    """Follow-up questions and judge or live interviewer replies."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        question_repository: QuestionRepositoryProtocol,
        ai_service: AIInterviewServiceProtocol,
    ) -> None:
        self.session_repository = session_repository
        self.question_repository = question_repository
        self.ai_service = ai_service
        self.chat = InterviewerChatService()

    async def follow_up(
        self, session_id: int, question_id: int, user_id: int, answer_text: str | None = None
    ) -> str:
        """
        Follow-up question for a session question.

        Uses the supplied text, else the stored answer.

        Raises:
            SessionNotFoundError: If the session is not the user's
            QuestionNotInSessionError: If the question is not part of the session
        """
        session = load_owned_session(self.session_repository, session_id, user_id)
        question = session.get_question(SessionQuestionId(question_id))

        text = (answer_text or "").strip()
        if not text and question.answer is not None:
            text = question.answer.text

        return await generate_follow_up(
            self.ai_service, question.prompt, text, session.category, session.target_role
        )

    async def judge_chat(
        self,
        session_id: int,
        user_id: int,
        message: str,
        question_id: int | None = None,
        history: list[ChatTurn] | None = None,
        mode: str | None = None,
    ) -> ChatReply:
        """
        Reply to a candidate message as the judge or the live interviewer.

        Spoken commands and question pack requests are answered first; then
        an AI reply is attempted, with rule-based coaching as the fallback.
        """
        session = load_owned_session(self.session_repository, session_id, user_id)
        chat_mode = normalize_mode(mode)
        cleaned = sanitize_candidate_message(message)
        turns = normalize_history(history)
        question = session.active_question(
            SessionQuestionId(question_id) if question_id else None
        )

        reply: str | None = None
        if chat_mode == LIVE_INTERVIEWER_MODE:
            reply = await self._live_command_reply(cleaned, session, question)
        if reply is None and detect_question_request(cleaned):
            reply = await self._question_pack(cleaned, session, chat_mode)
        if reply is None:
            reply = await self._ai_reply(cleaned, session, question, turns, chat_mode)
        if reply is None:
            reply = self.chat.fallback_reply(chat_mode, cleaned, session, question)

        return ChatReply(reply=reply, role=persona_role(chat_mode), timestamp=datetime.now(UTC))

    async def _live_command_reply(
        self, message: str, session: InterviewSession, question: SessionQuestion | None
    ) -> str | None:
        command = self.chat.detect_live_command(message)
        if command is None:
            return None
        if command == LiveCommand.SAMPLE_ANSWER:
            prompt = question.prompt if question else ""
            sample = await self.sample_answer(session.category, prompt, session.target_role)
            return f"Interviewer: Sure. A strong sample answer for this question is: {sample}"
        if command == LiveCommand.DIRECT_QUESTION:
            return f"Interviewer: {await self.direct_answer(message, session.target_role)}"
        return self.chat.live_command_reply(command, session, question)

    async def sample_answer(self, category: str, prompt: str, target_role: str) -> str:
        if is_ai_enabled() and prompt.strip():
            try:
                generated = collapse_whitespace(
                    await self.ai_service.sample_answer(prompt, category, target_role)
                )
                if generated:
                    return generated
            except Exception as e:
                logger.warning("ai_sample_answer_failed", error=str(e))
        return sample_answer_fallback(category, prompt, target_role)

    async def direct_answer(self, query: str, target_role: str) -> str:
        if is_ai_enabled():
            try:
                generated = strip_persona_prefix(
                    await self.ai_service.answer_direct_question(query, target_role)
                )
                if generated:
                    return generated
            except Exception as e:
                logger.warning("ai_direct_answer_failed", error=str(e))
        return direct_query_fallback(query)

    async def _question_pack(self, message: str, session: InterviewSession, mode: str) -> str:
        categories = infer_requested_categories(message, session.category)
        count = infer_requested_count(message)

        picked = self.question_repository.sample(categories, count)
        if len(picked) < count:
            broader = self.question_repository.sample(categories, count, predefined_only=False)
            picked = dedupe_questions([*picked, *broader])
        picked = picked[:count]

        pairs = [
            (
                question.prompt,
                await self.sample_answer(question.category, question.prompt, session.target_role),
            )
            for question in picked
        ]
        logger.info("question_pack_built", session_id=session.id.value, questions=len(pairs))
        return format_question_pack(mode, session.target_role, categories, pairs)

    async def _ai_reply(
        self,
        message: str,
        session: InterviewSession,
        question: SessionQuestion | None,
        history: list[ChatTurn],
        mode: str,
    ) -> str | None:
        if not is_ai_enabled():
            return None
        try:
            generated = await self.ai_service.chat_reply(
                ChatContext(
                    mode=mode,
                    category=session.category,
                    target_role=session.target_role,
                    company_simulation=session.company_simulation,
                    question_prompt=question.prompt if question else "",
                    answer_text=question.answer.text if question and question.answer else "",
                    message=message,
                    history=history,
                )
            )
        except Exception as e:
            logger.warning("ai_chat_reply_failed", session_id=session.id.value, error=str(e))
            return None

        cleaned = strip_persona_prefix(generated)
        if not cleaned:
            return None
        return f"{persona_label(mode)}: {cleaned}"
