from interview_coach.application.interview.protocols.ai_interview_service import (
    ChatContext,
    QuestionRequest,
)
from interview_coach.domain.interview.services.answer_evaluator import ExternalAssessment
from interview_coach.domain.interview.services.question_generator import GeneratedQuestion
from interview_coach.infrastructure.ai.ai_agents import (
    get_chat_agent,
    get_direct_answer_agent,
    get_evaluation_agent,
    get_follow_up_agent,
    get_question_agent,
    get_sample_answer_agent,
)

MAX_CONTEXT_CHARS = 6000


def _section(label: str, value: str) -> str:
    return f"{label}:\n{value.strip()[:MAX_CONTEXT_CHARS]}\n" if value.strip() else ""


class AIInterviewService:
    async def evaluate_answer(
        self, prompt: str, category: str, target_role: str, answer_text: str
    ) -> ExternalAssessment:
        agent = get_evaluation_agent()
        result = await agent.run(
            f"Category: {category}\nTarget role: {target_role}\n"
            f"Question: {prompt}\n\nCandidate answer:\n{answer_text[:MAX_CONTEXT_CHARS]}"
        )
        output = result.output
        return ExternalAssessment(
            confidence=output.confidence,
            communication=output.communication,
            grammar=output.grammar,
            technical_accuracy=output.technical_accuracy,
            speaking_speed=output.speaking_speed,
            facial_expression=output.facial_expression,
            feedback_tips=list(output.feedback_tips),
            improvements=list(output.improvements),
            relevance_notes=output.relevance_notes,
        )

    async def generate_questions(self, request: QuestionRequest) -> list[GeneratedQuestion]:
        agent = get_question_agent()
        focus = ", ".join(request.focus_areas)
        result = await agent.run(
            f"Generate {request.count} {request.category} interview questions.\n"
            f"Target role: {request.target_role}\n"
            f"Company style: {request.company_simulation}\n"
            + (f"Focus areas: {focus}\n" if focus else "")
            + _section("Resume", request.resume_text)
            + _section("Job description", request.job_description_text)
        )
        return [
            GeneratedQuestion(prompt=item.prompt.strip(), tags=list(item.tags))
            for item in result.output
            if item.prompt.strip()
        ]

    async def generate_follow_up(
        self, prompt: str, answer_text: str, category: str, target_role: str
    ) -> str:
        agent = get_follow_up_agent()
        result = await agent.run(
            f"Category: {category}\nTarget role: {target_role}\nQuestion: {prompt}\n"
            f"Candidate answer:\n{answer_text[:MAX_CONTEXT_CHARS] or '(no answer yet)'}"
        )
        return result.output

    async def chat_reply(self, context: ChatContext) -> str:
        agent = get_chat_agent()
        history = "\n".join(f"{turn.role}: {turn.text}" for turn in context.history)
        result = await agent.run(
            f"Mode: {context.mode}\nCategory: {context.category}\n"
            f"Target role: {context.target_role}\nCompany style: {context.company_simulation}\n"
            + _section("Current question", context.question_prompt)
            + _section("Candidate's latest answer", context.answer_text)
            + _section("Conversation so far", history)
            + f"Candidate message: {context.message}"
        )
        return result.output

    async def sample_answer(self, prompt: str, category: str, target_role: str) -> str:
        agent = get_sample_answer_agent()
        result = await agent.run(
            f"Category: {category}\nTarget role: {target_role}\nQuestion: {prompt}"
        )
        return result.output

    async def answer_direct_question(self, query: str, target_role: str) -> str:
        agent = get_direct_answer_agent()
        result = await agent.run(f"Target role: {target_role}\nQuestion: {query}")
        return result.output
