"""
Template-based question generation.

Used when no AI provider is configured or when the AI output is
unusable. Prompts combine the target role, the simulated company's
interview style, a category verb and a keyword drawn from the
candidate's focus areas, job description or resume.
"""

from collections import Counter
from dataclasses import dataclass, field

from interview_coach.domain.common.text import collapse_whitespace, normalize_prompt, tokenize

COMPANY_STYLES = {
    "Google": "focus on scale, ambiguity, and user impact",
    "Amazon": "align with leadership principles and measurable ownership",
    "Startup": "prioritize speed, resourcefulness, and shipping outcomes",
    "Microsoft": "balance collaboration, reliability, and customer empathy",
    "Meta": "emphasize product iteration speed and data-driven decisions",
}

CATEGORY_VERBS = {
    "HR": ("motivate", "collaborate", "align", "communicate"),
    "Technical": ("design", "debug", "optimize", "architect"),
    "Behavioral": ("lead", "resolve", "influence", "execute"),
    "Coding": ("implement", "refactor", "optimize", "test"),
}

DEFAULT_KEYWORDS = (
    "scalability",
    "teamwork",
    "delivery",
    "ownership",
    "communication",
    "leadership",
)

STOP_WORDS = frozenset(
    {
        "about", "after", "also", "because", "been", "from", "have", "into", "more",
        "that", "their", "there", "these", "this", "those", "with", "your", "what",
        "where", "when", "which", "would", "could", "should", "will",
    }
)  # fmt: skip

MAX_KEYWORDS = 10
MAX_GENERATED_TAGS = 8

_FOCUS_KEYWORDS = (
    ("clarity", "structured storytelling"),
    ("confidence", "confident delivery"),
    ("relevance", "role alignment"),
    ("speaking", "concise pacing"),
    ("facial", "non-verbal presence"),
)


@dataclass
class GeneratedQuestion:
    prompt: str
    tags: list[str] = field(default_factory=list)
    source: str = "ai"


def keyword_tokens(text: str | None) -> list[str]:
    """Tokens of at least four characters that are not stop words."""
    return [token for token in tokenize(text) if len(token) >= 4 and token not in STOP_WORDS]


def extract_keywords(text: str | None, limit: int = MAX_KEYWORDS) -> list[str]:
    """Most frequent keywords, ties kept in order of first appearance."""
    return [word for word, _ in Counter(keyword_tokens(text)).most_common(limit)]


def metric_to_focus_keyword(metric: str) -> str:
    normalized = (metric or "").strip().lower()
    for marker, keyword in _FOCUS_KEYWORDS:
        if marker in normalized:
            return keyword
    return normalized


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(item for item in items if item))


def template_question(category: str, role: str, company: str, keyword: str, index: int) -> str:
    """Build one prompt; index rotates the verb and the phrasing."""
    verbs = CATEGORY_VERBS.get(category, CATEGORY_VERBS["HR"])
    verb = verbs[index % len(verbs)]
    style = COMPANY_STYLES.get(company, COMPANY_STYLES["Startup"])

    if category == "Technical":
        prompts = [
            f"For a {role} interview at {company}, explain how you would {verb} a production "
            f"feature involving {keyword} while keeping {style}.",
            f"As a {role} candidate for {company}, walk through your technical approach to "
            f"{verb} systems that depend on {keyword}.",
            f"{company} asks for depth: how would you {verb} a {keyword}-heavy module as a "
            f"{role} while balancing reliability and speed?",
        ]
    elif category == "Coding":
        prompts = [
            f"Coding Round: As a {role} candidate for {company}, write an approach to {verb} a "
            f"solution around {keyword}. Include edge cases, complexity, and test strategy "
            f"({style}).",
            f"In a {company} coding interview for {role}, how would you {verb} an algorithm "
            f"centered on {keyword}, and how would you validate correctness?",
            f"Implement a {keyword}-focused problem for a {role} role: explain how you would "
            f"{verb} the solution and optimize it for scale.",
        ]
    elif category == "Behavioral":
        prompts = [
            f"Share a STAR example where you had to {verb} around {keyword} as a {role}; "
            f"include outcomes relevant to {company} ({style}).",
            f"Tell me about a behavioral situation where {keyword} was central and you had to "
            f"{verb} as a {role}. What was the measurable result?",
            f"Describe a real scenario from your experience where you {verb} through a "
            f"{keyword}-related challenge and what impact it created.",
        ]
    else:
        prompts = [
            f"How does your experience with {keyword} help you {verb} as a {role} candidate at "
            f"{company}, considering teams that {style}?",
            f"Why should {company} trust your {role} profile when the role requires strong "
            f"{keyword} ownership?",
            f"As a {role}, how would you use your {keyword} experience to deliver impact quickly "
            f"in a {company}-style environment?",
        ]
    return prompts[index % len(prompts)]


def dedupe_by_prompt(items: list[GeneratedQuestion]) -> list[GeneratedQuestion]:
    seen: set[str] = set()
    unique: list[GeneratedQuestion] = []
    for item in items:
        key = normalize_prompt(item.prompt)
        if key and key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def normalize_generated_questions(
    items: list[GeneratedQuestion], count: int
) -> list[GeneratedQuestion]:
    """Clean AI-produced questions: collapse whitespace, lowercase tags, drop duplicates."""
    cleaned = [
        GeneratedQuestion(
            prompt=collapse_whitespace(item.prompt),
            tags=_unique([str(tag).strip().lower() for tag in item.tags])[:MAX_GENERATED_TAGS],
            source="ai",
        )
        for item in items
        if collapse_whitespace(item.prompt)
    ]
    return dedupe_by_prompt(cleaned)[:count]


def follow_up_question(answer_text: str, category: str, target_role: str) -> str:
    """Probe the candidate's answer, anchored on a distinctive word they used."""
    tokens = [token for token in tokenize(answer_text) if len(token) >= 4][:20]
    anchor = next((token for token in tokens if len(token) >= 6), target_role.lower())

    if category == "Technical":
        return (
            f"Follow-up: You mentioned {anchor}. What trade-offs did you evaluate, "
            "and what metric proved success?"
        )
    if category == "Coding":
        return (
            f"Follow-up: For the {anchor} solution, what is the time/space complexity "
            "and which edge case could still fail?"
        )
    if category == "Behavioral":
        return (
            f"Follow-up: For the example related to {anchor}, what conflict occurred "
            "and how did you resolve it with measurable impact?"
        )
    return (
        f"Follow-up: In your answer about {anchor}, what specific action did you personally "
        "own, and what was the final result?"
    )


class QuestionGeneratorService:
    """Generates personalised questions from templates."""

    def generate(
        self,
        category: str,
        target_role: str,
        company_simulation: str,
        count: int,
        resume_text: str = "",
        job_description_text: str = "",
        focus_areas: list[str] | None = None,
    ) -> list[GeneratedQuestion]:
        """
        Generate up to `count` unique template questions.

        Questions are tagged "resume" when the resume yields keywords,
        otherwise "ai".
        """
        resume_keywords = extract_keywords(resume_text)
        jd_keywords = extract_keywords(job_description_text)
        focus_keywords = _unique([metric_to_focus_keyword(item) for item in focus_areas or []])
        pool = _unique([*focus_keywords, *jd_keywords, *resume_keywords, *DEFAULT_KEYWORDS])
        source = "resume" if resume_keywords else "ai"

        generated: list[GeneratedQuestion] = []
        seen: set[str] = set()
        max_iterations = max(count * 6, 18)

        for index in range(max_iterations):
            if len(generated) >= count:
                break
            keyword = pool[index % len(pool)]
            prompt = template_question(category, target_role, company_simulation, keyword, index)
            if focus_keywords:
                prompt += f" Focus area: {focus_keywords[index % len(focus_keywords)]}."
            if jd_keywords:
                prompt += f" Keep relevance to job requirements such as {jd_keywords[0]}."

            key = collapse_whitespace(prompt).lower()
            if key in seen:
                continue
            seen.add(key)
            generated.append(
                GeneratedQuestion(
                    prompt=prompt,
                    tags=_unique(
                        [
                            keyword,
                            target_role.lower(),
                            company_simulation.lower(),
                            category.lower(),
                            *focus_keywords,
                            *jd_keywords[:4],
                        ]
                    ),
                    source=source,
                )
            )

        return generated[:count]
