from pydantic import BaseModel, Field
from pydantic_ai import Agent

from interview_coach.infrastructure.ai.ai_model import get_ai_model


class AnswerAssessment(BaseModel):
    confidence: int = Field(ge=0, le=100)
    communication: int = Field(ge=0, le=100)
    grammar: int = Field(ge=0, le=100)
    technical_accuracy: int = Field(ge=0, le=100)
    speaking_speed: int = Field(ge=0, le=100)
    facial_expression: int = Field(ge=0, le=100)
    feedback_tips: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    relevance_notes: str = ""


class GeneratedQuestionOutput(BaseModel):
    prompt: str
    tags: list[str] = Field(default_factory=list)


def get_evaluation_agent() -> Agent[None, AnswerAssessment]:
    return Agent(
        get_ai_model(),
        output_type=AnswerAssessment,
        instructions="""
        You are a strict interview evaluator. Score the candidate's answer to the
        interview question fairly and do not inflate scores.

        Score each metric from 0 to 100:
        - confidence: assertive, ownership-driven language without hedging
        - communication: structure and flow, ideally Situation, Task, Action, Result
        - grammar: sentence quality and correctness
        - technical_accuracy: correctness and depth relative to the question
        - speaking_speed: pacing suitable for an interview (about 120-160 words per minute)
        - facial_expression: use 50 unless the input states otherwise

        Add up to 4 short feedback_tips on what went well, up to 4 concrete
        improvements, and one sentence of relevance_notes on how well the answer
        addressed the question.
        """,
    )


def get_question_agent() -> Agent[None, list[GeneratedQuestionOutput]]:
    return Agent(
        get_ai_model(),
        output_type=list[GeneratedQuestionOutput],
        instructions="""
        You write realistic mock interview questions.

        Use the category, target role and company style you are given. When a
        resume or job description is included, ground questions in the skills,
        projects and requirements it mentions. Respect any focus areas.

        Each question must be a single, self-contained prompt of one or two
        sentences. Do not number the questions. Add 2-4 lowercase tags per
        question. Never repeat a question.
        """,
    )


def get_follow_up_agent() -> Agent[None, str]:
    return Agent(
        get_ai_model(),
        output_type=str,
        instructions="""
        You are an interviewer. Given the original question and the candidate's
        answer, ask exactly one probing follow-up question that digs into a gap,
        a claim that needs evidence, or a measurable outcome.
        Output only the question, with no preamble.
        """,
    )


def get_chat_agent() -> Agent[None, str]:
    return Agent(
        get_ai_model(),
        output_type=str,
        instructions="""
        You take part in a mock interview, either as a supportive judge who coaches
        the candidate or as a live interviewer who keeps the interview moving.

        Stay on the current question and the candidate's target role. Keep replies
        under 90 words and in plain text. As judge, give specific, actionable
        coaching and mention STAR structure where it helps. As interviewer, stay
        in character, be concise and do not reveal model answers unless asked.
        """,
    )


def get_sample_answer_agent() -> Agent[None, str]:
    return Agent(
        get_ai_model(),
        output_type=str,
        instructions="""
        Write a strong, concise sample answer (80-140 words) to the interview
        question for the given role. Behavioral and HR answers follow STAR and end
        with a measurable result. Technical and coding answers state the approach,
        the tradeoffs and how it would be validated.
        Output only the answer text.
        """,
    )


def get_direct_answer_agent() -> Agent[None, str]:
    return Agent(
        get_ai_model(),
        output_type=str,
        instructions="""
        The candidate asked the interviewer a direct question during a mock interview.
        Answer it briefly and accurately in at most 80 words, relating it to the
        candidate's target role where useful. Output plain text only.
        """,
    )
