from dataclasses import dataclass, field
from typing import Protocol

from interview_coach.domain.interview.services.answer_evaluator import ExternalAssessment
from interview_coach.domain.interview.services.interviewer_chat import ChatTurn
from interview_coach.domain.interview.services.question_generator import GeneratedQuestion


@dataclass(frozen=True)
class QuestionRequest:
    category: str
    target_role: str
    company_simulation: str
    count: int
    resume_text: str = ""
    job_description_text: str = ""
    focus_areas: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ChatContext:
    mode: str
    category: str
    target_role: str
    company_simulation: str
    question_prompt: str
    answer_text: str
    message: str
    history: list[ChatTurn] = field(default_factory=list)


class AIInterviewServiceProtocol(Protocol):
    async def evaluate_answer(
        self, prompt: str, category: str, target_role: str, answer_text: str
    ) -> ExternalAssessment: ...

    async def generate_questions(self, request: QuestionRequest) -> list[GeneratedQuestion]: ...

    async def generate_follow_up(
        self, prompt: str, answer_text: str, category: str, target_role: str
    ) -> str: ...

    async def chat_reply(self, context: ChatContext) -> str: ...

    async def sample_answer(self, prompt: str, category: str, target_role: str) -> str: ...

    async def answer_direct_question(self, query: str, target_role: str) -> str: ...
