"""
Rule-based replies for the in-session judge and live interviewer chat.

The chat has two personas. The judge evaluates what the candidate says
and pushes for STAR structure. The live interviewer behaves like a
human interviewer and understands spoken commands such as "repeat the
question" or "give me a hint". AI replies are attempted by the
application layer; everything here is the deterministic side.
"""

import re
from dataclasses import dataclass
from enum import StrEnum

from interview_coach.domain.common.text import collapse_whitespace, tokenize
from interview_coach.domain.interview.constants import CATEGORIES
from interview_coach.domain.interview.entities.answer import METRIC_LABELS
from interview_coach.domain.interview.entities.interview_session import (
    InterviewSession,
    SessionQuestion,
)
from interview_coach.domain.interview.services.question_generator import follow_up_question

JUDGE_MODE = "judge"
LIVE_INTERVIEWER_MODE = "live_interviewer"
CHAT_MODES = (JUDGE_MODE, LIVE_INTERVIEWER_MODE)
HISTORY_ROLES = ("user", "judge", "assistant")
MAX_HISTORY_TURNS = 10
MIN_PACK_SIZE = 1
MAX_PACK_SIZE = 6
DEFAULT_PACK_SIZE = 3

SAMPLE_ANSWER_STOP_WORDS = frozenset(
    {
        "about", "after", "also", "and", "because", "been", "from", "have", "into",
        "more", "that", "their", "there", "these", "this", "those", "with", "your",
        "you", "what", "why", "where", "when", "which", "would", "could", "should",
        "will", "round", "interview", "question",
    }
)  # fmt: skip

_CANDIDATE_PREFIX = re.compile(r"^candidate response:\s*", re.IGNORECASE)
_PERSONA_PREFIX = re.compile(r"^(judge|interviewer|assistant)\s*:\s*", re.IGNORECASE)

_SITUATION = re.compile(r"\b(team|project|client|context|challenge|issue|problem)\b")
_ACTION = re.compile(
    r"\b(i built|i led|i implemented|i designed|i optimized|i solved|i delivered|i created)\b"
)
_RESULT = re.compile(
    r"%|\b(percent|reduced|improved|increased|saved|faster|impact|outcome|result)\b"
)
_STUCK = re.compile(
    r"\b(i don't know|dont know|do not know|not sure|no idea|can't answer|cannot answer"
    r"|skip|pass|help me|hint)\b"
)
_QUESTION_OPENER = re.compile(
    r"^(what|why|how|can|could|would|should|do|does|did|is|are|please|tell|explain|define)\b"
)
_FIRST_PERSON = re.compile(r"\b(i|my|we|our)\b")
_NARRATIVE_ACTION = re.compile(
    r"\b(built|led|implemented|designed|optimized|delivered|created|handled|managed"
    r"|launched|improved|reduced)\b"
)
_NARRATIVE_OUTCOME = re.compile(
    r"%|\b(percent|improved|reduced|increased|impact|result|outcome|saved)\b"
)
_ASKS_QUESTION = re.compile(
    r"\b(question|questions|ques|interview question|problem|problems"
    r"|scenario|case study|challenge)\b"
)
_ASKS_TO_PROVIDE = re.compile(r"\b(give|share|provide|ask|generate|send|need|want|some|practice)\b")
_ASKS_PRACTICE = re.compile(r"\b(practice|mock|round|interview)\b")
_REQUESTED_COUNT = (
    re.compile(r"\b(\d{1,2})\s*(question|questions|ques)\b"),
    re.compile(r"\b(\d{1,2})\b(?:\s+\w+){0,4}\s+(question|questions|ques)\b"),
)
_CATEGORY_PATTERNS = (
    ("HR", re.compile(r"\b(hr|human resource|human resources)\b")),
    ("Technical", re.compile(r"\b(technical|system design|backend|frontend|devops)\b")),
    ("Behavioral", re.compile(r"\b(behavioral|behavioural|leadership|culture)\b")),
    ("Coding", re.compile(r"\b(coding|code|dsa|algorithm)\b")),
)

_GREETING = re.compile(r"^(hi|hello|hey|hii|good\s(morning|afternoon|evening))\b")
_JUDGE_GREETING = re.compile(r"\b(hello|hi|hey|good\s(morning|afternoon|evening))\b")
_REPEAT = re.compile(r"\b(repeat|again|once more|one more time|say (it )?again)\b")
_REPEAT_TARGET = re.compile(r"\b(question|prompt|ask)\b")
_REPEAT_COMMAND = re.compile(r"^(repeat|again)\b")
_EXPLAIN = re.compile(r"\b(explain|clarify|meaning|break down)\b")
_EXPLAIN_TARGET = re.compile(r"\b(question|prompt|this|it)\b")
_HINT = re.compile(r"\b(hint|starter|start line|how to start|help me start|tip)\b")
_SAMPLE_ANSWER = re.compile(
    r"\b(sample answer|example answer|model answer|ideal answer|best answer|answer this"
    r"|give answer|tell answer)\b|\bwhat should i answer\b"
)
_SCORE = re.compile(r"\b(score|rating|mark|how am i doing)\b")

_JUDGE_SCORE = re.compile(r"score|mark|rating|how am i")
_JUDGE_IMPROVE = re.compile(r"improve|better|tip|hint|feedback|where")
_JUDGE_FOLLOW = re.compile(r"follow|next question|next")
_JUDGE_FIT = re.compile(r"job description|jd|fit")


class LiveCommand(StrEnum):
    GREETING = "greeting"
    REPEAT = "repeat"
    EXPLAIN = "explain"
    HINT = "hint"
    SAMPLE_ANSWER = "sample_answer"
    SCORE = "score"
    DIRECT_QUESTION = "direct_question"


@dataclass(frozen=True)
class ChatTurn:
    role: str
    text: str


@dataclass(frozen=True)
class StarHints:
    has_situation: bool
    has_action: bool
    has_result: bool


def normalize_mode(mode: str | None) -> str:
    normalized = (mode or "").strip().lower()
    return normalized if normalized in CHAT_MODES else JUDGE_MODE


def normalize_history(turns: list[ChatTurn] | None) -> list[ChatTurn]:
    """Keep valid turns only, capped to the most recent ten."""
    cleaned = [
        ChatTurn(role=turn.role.strip().lower(), text=collapse_whitespace(turn.text))
        for turn in turns or []
    ]
    return [turn for turn in cleaned if turn.role in HISTORY_ROLES and turn.text][
        -MAX_HISTORY_TURNS:
    ]


def persona_label(mode: str) -> str:
    return "Interviewer" if mode == LIVE_INTERVIEWER_MODE else "Judge"


def persona_role(mode: str) -> str:
    return "interviewer" if mode == LIVE_INTERVIEWER_MODE else "judge"


def sanitize_candidate_message(message: str | None) -> str:
    return collapse_whitespace(_CANDIDATE_PREFIX.sub("", message or ""))


def strip_persona_prefix(text: str | None) -> str:
    return _PERSONA_PREFIX.sub("", (text or "").strip()).strip()


def detect_star_hints(text: str) -> StarHints:
    normalized = text.lower()
    return StarHints(
        has_situation=bool(_SITUATION.search(normalized)),
        has_action=bool(_ACTION.search(normalized)),
        has_result=bool(_RESULT.search(normalized)),
    )


def is_stuck_message(text: str) -> bool:
    return bool(_STUCK.search(text.lower()))


def is_direct_user_question(text: str) -> bool:
    normalized = text.lower().strip()
    if not normalized:
        return False
    if "?" in normalized:
        return True
    return bool(_QUESTION_OPENER.search(normalized))


def looks_like_candidate_answer(text: str) -> bool:
    normalized = text.lower()
    has_detail = _NARRATIVE_ACTION.search(normalized) or _NARRATIVE_OUTCOME.search(normalized)
    return (
        len(normalized.split()) >= 12
        and bool(_FIRST_PERSON.search(normalized))
        and bool(has_detail)
    )


def detect_question_request(text: str) -> bool:
    """Whether the candidate asks for a pack of practice questions."""
    normalized = text.lower()
    if not _ASKS_QUESTION.search(normalized):
        return False
    return bool(_ASKS_TO_PROVIDE.search(normalized) or _ASKS_PRACTICE.search(normalized))


def infer_requested_categories(text: str, fallback_category: str) -> list[str]:
    normalized = text.lower()
    found = [category for category, pattern in _CATEGORY_PATTERNS if pattern.search(normalized)]
    if found:
        return found
    return [fallback_category if fallback_category in CATEGORIES else "HR"]


def infer_requested_count(text: str, fallback: int = DEFAULT_PACK_SIZE) -> int:
    normalized = text.lower()
    for pattern in _REQUESTED_COUNT:
        match = pattern.search(normalized)
        if match:
            return max(MIN_PACK_SIZE, min(MAX_PACK_SIZE, int(match.group(1))))
    return fallback


def prompt_keywords(prompt: str, limit: int = 3) -> list[str]:
    keywords: list[str] = []
    for token in tokenize(prompt):
        if len(token) < 4 or token in SAMPLE_ANSWER_STOP_WORDS or token in keywords:
            continue
        keywords.append(token)
        if len(keywords) >= limit:
            break
    return keywords


def sample_answer_fallback(category: str, prompt: str, target_role: str) -> str:
    """Canned sample answer shaped by the question category."""
    prompt = prompt.strip()
    if category == "Coding":
        keywords = " and ".join(prompt_keywords(prompt, 2))
        around = f" around {keywords}" if keywords else ""
        return (
            f"I would start by clarifying constraints and edge cases{around}, then present a "
            "brute-force baseline and an optimized approach. I would write clean code, dry-run "
            "test cases, and explain time-space complexity with trade-offs. I would finish with "
            "how I validated correctness and production readiness."
        )
    if category == "Technical":
        keywords = prompt_keywords(prompt, 3)
        subject = ", ".join(keywords) if keywords else "system design and implementation"
        return (
            f'For "{prompt}", I would frame requirements first, then explain architecture choices '
            f"for {subject}. I would cover trade-offs, reliability strategy, and observability, "
            "then share measurable impact such as reducing latency by 28% and improving uptime to "
            "99.95%. Finally, I would mention one alternative design and why I rejected it."
        )
    if category == "Behavioral":
        keywords = " and ".join(prompt_keywords(prompt, 2))
        handling = f" while handling {keywords}" if keywords else ""
        return (
            f"I would answer this using STAR with strong ownership as a {target_role}{handling}. "
            "I would describe the challenge, the key decision I made, and how I aligned "
            "stakeholders. I would close with a measurable result such as a 20% delivery speed "
            "improvement and stronger team trust."
        )
    return _hr_sample_answer(prompt, target_role)


def _hr_sample_answer(prompt: str, target_role: str) -> str:
    normalized = prompt.lower()
    if re.search(r"\btell me about yourself|introduce yourself\b", normalized):
        return (
            f"I am a {target_role} with strong execution on end-to-end ownership. In my recent "
            "project, I led planning to delivery, improved release predictability by 25%, and "
            "reduced post-release defects by 18%. That mix of ownership and measurable impact is "
            "what I will bring here."
        )
    if re.search(r"\bmanager\b|\bteam environment\b|\bwork environment\b", normalized):
        return (
            "I work best with a manager who sets clear outcomes and gives autonomy on execution. "
            "In my last team, I aligned weekly goals, documented risks early, and improved sprint "
            "completion rate from 78% to 92%. That environment helped me deliver faster while "
            "keeping quality stable."
        )
    if re.search(r"\bconflict\b|\bdisagree\b", normalized):
        return (
            "In one release, design and engineering priorities conflicted on scope and timeline. "
            "I facilitated a decision meeting, split must-have vs nice-to-have, and created a "
            "phased rollout plan. We shipped on time and reduced rework by 30% compared with the "
            "previous release."
        )
    if re.search(
        r"\bgoogle\b|\bamazon\b|\bmicrosoft\b|\bmeta\b|\bwhy do you want to work\b"
        r"|\bvalue would you bring\b",
        normalized,
    ):
        return (
            "I want to join because the role requires high ownership, cross-functional "
            "execution, and measurable customer impact. In my current team, I delivered a "
            "reliability initiative that cut production incidents by 35% and improved customer "
            "satisfaction by 11 points. I can bring the same outcome-focused execution here."
        )
    keywords = " and ".join(prompt_keywords(prompt, 2))
    topic = f" on {keywords}" if keywords else ""
    return (
        f"For this {target_role} question{topic}, I would answer in STAR format with clear "
        "ownership and one quantified outcome. A good example is leading a process improvement "
        "that reduced turnaround time by 22% while improving quality metrics."
    )


def direct_query_fallback(query: str) -> str:
    """Short canned explanation for common concepts a candidate may ask about."""
    normalized = collapse_whitespace(query).lower()
    if re.search(r"\brest\b", normalized) and re.search(r"\bgraphql\b", normalized):
        return (
            "REST usually uses multiple fixed endpoints and often over-fetches or under-fetches "
            "data, while GraphQL uses a single endpoint where clients request exactly the fields "
            "they need. For fast-changing frontend requirements, GraphQL can reduce payload and "
            "iteration time, but it needs stronger schema governance and query cost controls."
        )
    if re.search(r"\bjwt\b|\bauth\b", normalized):
        return (
            "JWT is a signed token carrying claims, commonly used for stateless authentication. "
            "Keep token expiry short, store refresh tokens securely, and always validate "
            "signature, issuer, and audience on the server to prevent misuse."
        )
    if re.search(r"\bmicroservices\b", normalized):
        return (
            "Microservices split a system into independently deployable services, improving team "
            "autonomy and scalability. The trade-off is higher operational complexity, so strong "
            "observability, clear service contracts, and resilient communication patterns are "
            "essential."
        )
    return (
        "In simple terms, this depends on the use case and constraints. A strong interview answer "
        "is to define the concept clearly, compare alternatives with one trade-off, and finish "
        "with a real project example where your choice improved reliability, speed, or developer "
        "productivity."
    )


def format_question_pack(
    mode: str, target_role: str, categories: list[str], pairs: list[tuple[str, str]]
) -> str:
    label = persona_label(mode)
    if not pairs:
        return (
            f"{label}: I could not find question bank entries right now. Please retry with "
            "category HR, Technical, Behavioral, or Coding."
        )
    category_label = "/".join(categories)
    lines = [
        f"Q{index}: {collapse_whitespace(question)}\nA{index}: {collapse_whitespace(answer)}"
        for index, (question, answer) in enumerate(pairs, start=1)
    ]
    header = (
        f"{label}: Here are {len(pairs)} {category_label} interview question-answer pairs "
        f"for {target_role} practice."
    )
    return "\n".join([header, *lines])


def _weakest_label(question: SessionQuestion | None) -> tuple[str, int] | None:
    if question is None or question.answer is None:
        return None
    weakest = question.answer.scores.weakest_metric()
    if weakest is None:
        return None
    return METRIC_LABELS[weakest[0]], weakest[1]


class InterviewerChatService:
    """Deterministic judge and interviewer replies."""

    def detect_live_command(self, message: str) -> LiveCommand | None:
        """Recognise spoken commands addressed to the live interviewer."""
        normalized = message.lower()
        if not normalized:
            return None
        if _GREETING.search(normalized):
            return LiveCommand.GREETING
        if (_REPEAT.search(normalized) and _REPEAT_TARGET.search(normalized)) or (
            _REPEAT_COMMAND.search(normalized)
        ):
            return LiveCommand.REPEAT
        if _EXPLAIN.search(normalized) and _EXPLAIN_TARGET.search(normalized):
            return LiveCommand.EXPLAIN
        if _HINT.search(normalized):
            return LiveCommand.HINT
        if _SAMPLE_ANSWER.search(normalized):
            return LiveCommand.SAMPLE_ANSWER
        if _SCORE.search(normalized):
            return LiveCommand.SCORE
        if (
            is_direct_user_question(message)
            and not detect_question_request(message)
            and not looks_like_candidate_answer(message)
        ):
            return LiveCommand.DIRECT_QUESTION
        return None

    def live_command_reply(
        self,
        command: LiveCommand,
        session: InterviewSession,
        question: SessionQuestion | None,
    ) -> str:
        """Reply to commands that need no AI call."""
        prompt = collapse_whitespace(question.prompt) if question else "this question"

        if command == LiveCommand.GREETING:
            return (
                "Interviewer: Hi, welcome. I am ready when you are. You can ask me to repeat the "
                "question, explain it, give a hint, share a sample answer, or give HR/Technical/"
                "Coding/Behavioral questions with answers."
            )
        if command == LiveCommand.REPEAT:
            return f'Interviewer: Sure, here is the question again: "{prompt}"'
        if command == LiveCommand.EXPLAIN:
            return self.explanation_reply(prompt, session.category, session.target_role)
        if command == LiveCommand.HINT:
            return self.starter_hint_reply(prompt, session.category, session.target_role)
        if command == LiveCommand.SCORE:
            answer = question.answer if question else None
            if answer is None or not answer.scores.overall:
                return (
                    "Interviewer: I can score accurately after you submit one full answer. "
                    "For now, focus on STAR plus one quantified outcome."
                )
            weakest = _weakest_label(question)
            focus = f"{weakest[0]} ({weakest[1]})" if weakest else "structure and quantified impact"
            return (
                f"Interviewer: Your current score is {answer.scores.overall}/100. "
                f"Improve {focus} in your next response."
            )
        raise ValueError(f"Command {command} needs a generated reply")

    def explanation_reply(self, prompt: str, category: str, target_role: str) -> str:
        normalized = prompt.lower()
        if re.search(r"conflict|disagree|stakeholder|team", normalized):
            return (
                "Interviewer: Sure. This checks conflict handling and collaboration. Use STAR: "
                "short context, your exact action, and a measurable result. Starter line: "
                '"I aligned both sides by clarifying goals and shipping a phased plan."'
            )
        if re.search(
            r"design|architecture|scalable|system|microservices|observability", normalized
        ):
            return (
                f"Interviewer: This tests system thinking for {target_role}. Start with "
                "requirements, then architecture choice, trade-offs, and one reliability metric. "
                "Keep it practical and role-specific."
            )
        if category == "Coding" or re.search(r"algorithm|complexity|edge case|code", normalized):
            return (
                "Interviewer: This checks coding depth. First confirm constraints, then explain "
                "approach, complexity, and edge cases. End with how you validated correctness."
            )
        return (
            "Interviewer: This question checks role fit, communication, and ownership for "
            f"{target_role}. Answer in STAR format and close with one measurable impact."
        )

    def starter_hint_reply(self, prompt: str, category: str, target_role: str) -> str:
        if category == "Coding":
            return (
                'Interviewer: Starter line: "Let me confirm constraints first, then I will share '
                'baseline and optimized solutions." Then cover complexity and one edge case for '
                f'"{prompt}".'
            )
        return (
            f'Interviewer: Starter line: "In my previous {target_role} role, I handled a similar '
            'situation where..." Then cover Situation, your Action, and measurable Result for '
            f'"{prompt}".'
        )

    def stuck_reply(self, session: InterviewSession, question: SessionQuestion | None) -> str:
        prompt = question.prompt if question else "this question"
        follow_up = follow_up_question(
            f"{session.target_role} example", session.category, session.target_role
        ).removeprefix("Follow-up: ")
        return (
            f'Judge: No problem, this is normal. Let us take it in easy steps for "{prompt}".\n'
            "Step 1: Situation - describe the context.\n"
            "Step 2: Action - say what you personally did.\n"
            "Step 3: Result - share the measurable impact (%, time saved, quality).\n"
            'Use this start line: "In my previous role, I handled a similar case where...". '
            f"Try 3-4 lines; then I will refine. {follow_up}"
        )

    def judge_reply(
        self, message: str, session: InterviewSession, question: SessionQuestion | None
    ) -> str:
        """Strict but helpful evaluation of the candidate's latest message."""
        raw = sanitize_candidate_message(message)
        lower = raw.lower()
        answer = question.answer if question else None

        if not raw:
            prompt = question.prompt if question else "current question"
            return (
                "Judge: Keep this concise and evidence-based. Use STAR and quantify results. "
                f'Start with your strongest example for: "{prompt}".'
            )
        if _JUDGE_GREETING.search(lower):
            return (
                "Judge: We begin now. Answer directly, avoid filler, and support each claim "
                "with measurable impact."
            )
        if is_stuck_message(raw):
            return self.stuck_reply(session, question)
        if _JUDGE_SCORE.search(lower):
            if answer is None:
                return (
                    "Judge: I cannot score without a submitted answer. Provide your response "
                    "first, then ask for rating."
                )
            weakest = _weakest_label(question)
            area = f"{weakest[0]} ({weakest[1]})" if weakest else "not enough data"
            return (
                f"Judge: Your current score is {answer.scores.overall}/100. "
                f"Weakest area is {area}. Improve that next."
            )
        if _JUDGE_IMPROVE.search(lower):
            if answer is not None and answer.improvements:
                return (
                    f"Judge: Priority improvement: {answer.improvements[0]} "
                    "Then give one quantified result."
                )
            if session.summary.improvements:
                return (
                    f"Judge: Priority improvement: {session.summary.improvements[0]} "
                    "Keep your next answer under 90 seconds."
                )
            return (
                "Judge: Improve by structuring Situation, Task, Action, and Result, with one "
                "concrete metric in the Result."
            )
        if _JUDGE_FOLLOW.search(lower):
            answer_text = answer.text if answer and answer.text else raw
            return "Judge: " + follow_up_question(
                answer_text, session.category, session.target_role
            )
        if _JUDGE_FIT.search(lower):
            score = session.summary.job_fit_score
            if score > 0:
                return (
                    f"Judge: Current job fit score is {score}/100. Mirror JD keywords and tie "
                    "examples to required outcomes."
                )
            return (
                "Judge: Add the job description in setup, then answer with JD keywords and "
                "role-relevant impact."
            )

        follow_up = follow_up_question(raw, session.category, session.target_role)
        star = detect_star_hints(raw)
        if len(raw.split()) < 12:
            return (
                "Judge: Your answer is too short. Add context, your exact action, and a "
                f"measurable result. {follow_up}"
            )
        if not star.has_action:
            return f"Judge: Clarify what you personally did; ownership is not clear. {follow_up}"
        if not star.has_result:
            return (
                "Judge: Add one quantified outcome (percentage, time saved, revenue, or quality "
                f"improvement). {follow_up}"
            )
        return (
            "Judge: Good direction. Make it tighter with STAR flow and concrete business "
            f"impact. {follow_up}"
        )

    def live_interviewer_reply(
        self, message: str, session: InterviewSession, question: SessionQuestion | None
    ) -> str:
        """Conversational fallback when no command matched and no AI reply is available."""
        raw = sanitize_candidate_message(message)
        prompt = question.prompt if question else "this question"
        follow_up = follow_up_question(
            raw or f"{session.target_role} example", session.category, session.target_role
        ).removeprefix("Follow-up: ")

        if not raw:
            return (
                "Interviewer: No rush, take a moment. Start with one short real example for "
                f'"{prompt}", then we will build it together.'
            )
        if is_direct_user_question(raw):
            return (
                "Interviewer: Good question. I can repeat the prompt, explain it, give a starter "
                f'hint, or provide a sample answer. Tell me which one you want for "{prompt}".'
            )
        if is_stuck_message(raw):
            return (
                "Interviewer: Totally fine, this happens in real interviews too. Start with: "
                '"In my previous role, I handled a similar situation where...", then tell me '
                f"your action and result. {follow_up}"
            )
        if len(raw.split()) < 8:
            return (
                "Interviewer: Good start. Add what exactly you did and one measurable result, "
                f"then answer this: {follow_up}"
            )
        return (
            "Interviewer: Nice direction. Can you make it more specific with impact? "
            f"{follow_up}"
        )

    def fallback_reply(
        self, mode: str, message: str, session: InterviewSession, question: SessionQuestion | None
    ) -> str:
        if mode == LIVE_INTERVIEWER_MODE:
            return self.live_interviewer_reply(message, session, question)
        return self.judge_reply(message, session, question)
