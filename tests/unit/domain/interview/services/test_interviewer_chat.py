"""Tests for the rule-based judge and live interviewer chat."""

from datetime import UTC, datetime

import pytest

from interview_coach.domain.common.value_objects import (
    InterviewSessionId,
    SessionQuestionId,
    UserId,
)
from interview_coach.domain.interview.entities.answer import Answer, ScoreCard
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    SessionQuestion,
)
from interview_coach.domain.interview.services.interviewer_chat import (
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
    sample_answer_fallback,
    sanitize_candidate_message,
    strip_persona_prefix,
)

PROMPT = "Describe a time you handled conflict professionally."


def _question(answer: Answer | None = None) -> SessionQuestion:
    return SessionQuestion(id=SessionQuestionId(1), position=1, prompt=PROMPT, answer=answer)


def _session(question: SessionQuestion) -> InterviewSession:
    return InterviewSession(
        id=InterviewSessionId(1),
        user_id=UserId(1),
        category="HR",
        question_source="predefined",
        target_role="Data Engineer",
        questions=[question],
    )


def _answer(overall: int = 74) -> Answer:
    return Answer(
        answer_type="text",
        transcript="I mediated between design and engineering.",
        scores=ScoreCard(
            confidence=80,
            communication=75,
            clarity=75,
            grammar=50,
            technical_accuracy=70,
            speaking_speed=90,
            facial_expression=60,
            relevance=70,
            overall=overall,
        ),
        improvements=["Quantify the outcome."],
        answered_at=datetime(2026, 3, 2, tzinfo=UTC),
    )


@pytest.fixture
def chat() -> InterviewerChatService:
    return InterviewerChatService()


class TestNormalization:
    def test_normalize_mode(self) -> None:
        assert normalize_mode(" LIVE_INTERVIEWER ") == "live_interviewer"
        assert normalize_mode("coach") == "judge"
        assert normalize_mode(None) == "judge"

    def test_normalize_history_keeps_latest_valid_turns(self) -> None:
        turns = [ChatTurn(role="User", text=f"message  {i}") for i in range(12)]
        turns += [ChatTurn(role="system", text="ignored"), ChatTurn(role="judge", text="  ")]

        history = normalize_history(turns)

        assert len(history) == 10
        assert history[0] == ChatTurn(role="user", text="message 2")
        assert history[-1].text == "message 11"

    def test_prefixes(self) -> None:
        assert strip_persona_prefix("Judge:  Tighten it.") == "Tighten it."
        assert strip_persona_prefix("interviewer : hi") == "hi"
        assert sanitize_candidate_message("Candidate response:  I   led it") == "I led it"


class TestQuestionRequests:
    def test_detect_question_request(self) -> None:
        assert detect_question_request("Give me 2 technical questions")
        assert detect_question_request("mock interview questions please")
        assert not detect_question_request("What is this question about")

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Give me 2 technical questions with answers", 2),
            ("5 questions", 5),
            ("give me 20 questions", 6),
            ("0 questions", 1),
            ("some questions", 3),
        ],
    )
    def test_infer_requested_count(self, text: str, expected: int) -> None:
        assert infer_requested_count(text) == expected

    def test_infer_requested_categories(self) -> None:
        assert infer_requested_categories("hr and coding questions", "Technical") == [
            "HR",
            "Coding",
        ]
        assert infer_requested_categories("any questions", "Behavioral") == ["Behavioral"]
        assert infer_requested_categories("any questions", "Sales") == ["HR"]


class TestFallbackContent:
    def test_technical_sample_answer_uses_prompt_keywords(self) -> None:
        prompt = "Explain CAP theorem tradeoffs for a globally distributed application."

        text = sample_answer_fallback("Technical", prompt, "SRE")

        assert text.startswith(f'For "{prompt}"')
        assert "explain, theorem, tradeoffs" in text

    def test_hr_introduction(self) -> None:
        text = sample_answer_fallback("HR", "Tell me about yourself.", "SRE")

        assert text.startswith("I am a SRE with strong execution")

    def test_behavioral_sample_answer(self) -> None:
        text = sample_answer_fallback("Behavioral", PROMPT, "Data Engineer")

        assert "as a Data Engineer while handling" in text

    def test_direct_query_fallback(self) -> None:
        assert direct_query_fallback("REST vs GraphQL?").startswith("REST usually")
        assert direct_query_fallback("how does JWT work").startswith("JWT is a signed token")
        assert direct_query_fallback("why microservices").startswith("Microservices split")
        assert direct_query_fallback("what is a heap").startswith("In simple terms")

    def test_format_question_pack(self) -> None:
        text = format_question_pack("judge", "SRE", ["Technical"], [("Q  one", "A one")])

        assert text == (
            "Judge: Here are 1 Technical interview question-answer pairs for SRE practice.\n"
            "Q1: Q one\nA1: A one"
        )

    def test_empty_question_pack(self) -> None:
        text = format_question_pack("live_interviewer", "SRE", ["HR"], [])

        assert text.startswith("Interviewer: I could not find question bank entries")


class TestLiveCommands:
    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("Hello there", LiveCommand.GREETING),
            ("Can you repeat the question", LiveCommand.REPEAT),
            ("again please", LiveCommand.REPEAT),
            ("Please explain this", LiveCommand.EXPLAIN),
            ("give me a hint", LiveCommand.HINT),
            ("what is a sample answer", LiveCommand.SAMPLE_ANSWER),
            ("what is my score", LiveCommand.SCORE),
            ("What is the difference between REST and GraphQL?", LiveCommand.DIRECT_QUESTION),
            ("give me 2 technical questions", None),
            ("", None),
        ],
    )
    def test_detect_live_command(
        self, chat: InterviewerChatService, message: str, expected: LiveCommand | None
    ) -> None:
        assert chat.detect_live_command(message) == expected

    def test_repeat_reply(self, chat: InterviewerChatService) -> None:
        question = _question()

        reply = chat.live_command_reply(LiveCommand.REPEAT, _session(question), question)

        assert reply == f'Interviewer: Sure, here is the question again: "{PROMPT}"'

    def test_score_reply_names_weakest_metric(self, chat: InterviewerChatService) -> None:
        question = _question(_answer())

        reply = chat.live_command_reply(LiveCommand.SCORE, _session(question), question)

        assert reply == (
            "Interviewer: Your current score is 74/100. Improve grammar (50) in your next response."
        )

    def test_score_reply_without_answer(self, chat: InterviewerChatService) -> None:
        question = _question()

        reply = chat.live_command_reply(LiveCommand.SCORE, _session(question), question)

        assert reply.startswith("Interviewer: I can score accurately after")

    def test_generated_commands_are_rejected(self, chat: InterviewerChatService) -> None:
        question = _question()

        with pytest.raises(ValueError):
            chat.live_command_reply(LiveCommand.SAMPLE_ANSWER, _session(question), question)

    def test_explain_conflict_question(self, chat: InterviewerChatService) -> None:
        reply = chat.explanation_reply(PROMPT, "HR", "SRE")

        assert reply.startswith("Interviewer: Sure. This checks conflict handling")


class TestJudgeReply:
    def test_empty_message(self, chat: InterviewerChatService) -> None:
        question = _question()

        reply = chat.judge_reply("", _session(question), question)

        assert reply.endswith(f'Start with your strongest example for: "{PROMPT}".')

    def test_score_with_answer(self, chat: InterviewerChatService) -> None:
        question = _question(_answer())

        reply = chat.judge_reply("what is my score", _session(question), question)

        assert reply == (
            "Judge: Your current score is 74/100. Weakest area is grammar (50). Improve that next."
        )

    def test_improvement_from_answer(self, chat: InterviewerChatService) -> None:
        question = _question(_answer())

        reply = chat.judge_reply("how can I improve", _session(question), question)

        assert reply == (
            "Judge: Priority improvement: Quantify the outcome. Then give one quantified result."
        )

    def test_stuck(self, chat: InterviewerChatService) -> None:
        question = _question()

        reply = chat.judge_reply("I don't know", _session(question), question)

        assert "Step 1: Situation - describe the context." in reply
        assert f'"{PROMPT}"' in reply

    def test_answer_without_ownership(self, chat: InterviewerChatService) -> None:
        question = _question()
        message = "The team project was hard and the billing pipeline had many issues that quarter"

        reply = chat.judge_reply(message, _session(question), question)

        assert reply.startswith("Judge: Clarify what you personally did")

    def test_complete_star_answer(self, chat: InterviewerChatService) -> None:
        question = _question()
        message = (
            "I led the team project and delivered a new billing pipeline that reduced "
            "latency by 30 percent overall"
        )

        reply = chat.judge_reply(message, _session(question), question)

        assert reply.startswith("Judge: Good direction.")
        assert "Follow-up: In your answer about project," in reply


class TestLiveInterviewerReply:
    def test_short_answer(self, chat: InterviewerChatService) -> None:
        question = _question()

        reply = chat.live_interviewer_reply("I built it", _session(question), question)

        assert reply.startswith("Interviewer: Good start.")

    def test_fallback_reply_routes_by_mode(self, chat: InterviewerChatService) -> None:
        question = _question()
        session = _session(question)

        assert chat.fallback_reply("live_interviewer", "", session, question).startswith(
            "Interviewer: No rush"
        )
        assert chat.fallback_reply("judge", "hello", session, question).startswith(
            "Judge: We begin now."
        )
