"""
Domain service for scoring a single interview answer.

Heuristic scores are always computed. Assessments proposed by AI
evaluators are blended in when available.

This is a pure domain service with no infrastructure dependencies.
"""

import re
from dataclasses import dataclass, field

from interview_coach.domain.common.text import clamp_score, round_half_up, tokenize, unique_strings
from interview_coach.domain.interview.entities.answer import ScoreCard

FILLER_WORDS = frozenset({"um", "uh", "like", "actually", "basically", "youknow"})
CONFIDENT_WORDS = frozenset(
    {
        "delivered", "owned", "improved", "built", "led",
        "solved", "optimized", "launched", "measured",
    }
)  # fmt: skip

OVERALL_WEIGHTS = {
    "confidence": 0.2,
    "communication": 0.2,
    "grammar": 0.15,
    "technical_accuracy": 0.25,
    "speaking_speed": 0.1,
    "facial_expression": 0.1,
}
HEURISTIC_WEIGHT = 0.35
EXTERNAL_WEIGHT = 0.65
MAX_TIPS = 6

TIP_LABELS = {
    "confidence": "confidence",
    "communication": "communication",
    "grammar": "grammar",
    "technical_accuracy": "technical accuracy",
    "speaking_speed": "speaking speed",
    "facial_expression": "facial expression",
}

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_TERMINAL_PUNCTUATION = re.compile(r"[.!?]\s*$")
_REPEATED_PUNCTUATION = re.compile(r"[!?.,]{2,}")
_CAPITALIZED_WORD = re.compile(r"\b[A-Z][a-z]+\b")
_LONG_NUMBER = re.compile(r"[0-9]{4,}")


@dataclass
class ExternalAssessment:
    """Scores proposed by an AI evaluator. Missing metrics fall back to the heuristic."""

    confidence: int | None = None
    communication: int | None = None
    grammar: int | None = None
    technical_accuracy: int | None = None
    speaking_speed: int | None = None
    facial_expression: int | None = None
    feedback_tips: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    relevance_notes: str = ""


@dataclass
class AnswerEvaluation:
    scores: ScoreCard
    speaking_speed_wpm: int
    feedback_tips: list[str]
    improvements: list[str]
    relevance_notes: str
    transcript: str


def count_sentences(text: str) -> int:
    return len([part for part in _SENTENCE_SPLIT.split(text) if part.strip()])


def words_per_minute(word_count: int, duration_sec: float) -> int:
    if not duration_sec or duration_sec <= 0:
        return word_count * 2
    return round_half_up(word_count / duration_sec * 60)


class AnswerEvaluationService:
    """
    Domain service that scores an answer on six metrics.

    Clarity mirrors communication and relevance mirrors technical
    accuracy. The overall score is a weighted blend of the six metrics.
    """

    def score_communication(self, text: str) -> int:
        words = tokenize(text)
        if not words:
            return 30

        filler_count = sum(1 for word in words if word in FILLER_WORDS)
        filler_penalty = filler_count / len(words) * 120
        average_sentence_length = len(words) / max(count_sentences(text), 1)

        score: float = 68 if len(words) >= 35 else 55
        if 9 <= average_sentence_length <= 24:
            score += 12
        else:
            score -= 8
        score -= filler_penalty
        return clamp_score(score)

    def score_grammar(self, text: str) -> int:
        raw = (text or "").strip()
        if not raw:
            return 35

        words = tokenize(raw)
        score = 58
        if count_sentences(raw) >= 2:
            score += 12
        if _TERMINAL_PUNCTUATION.search(raw):
            score += 8
        if len(words) > 20 and _CAPITALIZED_WORD.search(raw):
            score += 6
        score -= len(_REPEATED_PUNCTUATION.findall(raw)) * 6
        score -= sum(1 for word in words if _LONG_NUMBER.search(word)) * 2
        return clamp_score(score)

    def score_speaking_speed(self, word_count: int, duration_sec: float) -> tuple[int, int]:
        """Return (words per minute, score)."""
        wpm = words_per_minute(word_count, duration_sec)
        if 110 <= wpm <= 160:
            return wpm, 90
        if 90 <= wpm < 110:
            return wpm, 78
        if 160 < wpm <= 190:
            return wpm, 74
        if wpm < 70 or wpm > 220:
            return wpm, 42
        return wpm, 50

    def score_confidence(self, text: str, self_rating: float) -> int:
        words = tokenize(text)
        if not words:
            return 35

        hits = sum(1 for word in words if word in CONFIDENT_WORDS)
        score: float = 58 + min(hits * 3, 18)
        if self_rating > 0:
            score = score * 0.75 + clamp_score(self_rating * 10) * 0.25
        if text.count("?") > 2:
            score -= 5
        return clamp_score(score)

    def score_technical_accuracy(
        self, text: str, tags: list[str], prompt: str
    ) -> tuple[int, str]:
        """Score coverage of the concepts named by the question tags and prompt."""
        answer_words = set(tokenize(text))
        if not answer_words:
            return 30, "Very short answer with low technical/topic coverage."

        expected: set[str] = set()
        for tag in tags:
            expected.update(token for token in tokenize(tag) if len(token) >= 4)
        expected.update(token for token in tokenize(prompt) if len(token) >= 6)

        if not expected:
            return 72, "Technical estimate based on general prompt alignment."

        coverage = len(expected & answer_words) / len(expected)
        score = clamp_score(35 + coverage * 65)
        if coverage > 0.6:
            return score, "Strong technical alignment with expected concepts."
        if coverage > 0.35:
            return score, "Partial technical alignment; add deeper role-specific details."
        return score, "Low technical alignment; include direct examples tied to the question."

    def score_facial_expression(self, answer_type: str, provided_score: float) -> int:
        if answer_type != "video":
            return 60
        if provided_score > 0:
            return clamp_score(provided_score)
        return 68

    def build_tips(self, metrics: dict[str, int]) -> tuple[list[str], list[str]]:
        """Return (strengths, improvements) derived from the metric scores."""
        strengths: list[str] = []
        improvements: list[str] = []
        for key, label in TIP_LABELS.items():
            value = metrics[key]
            if value >= 78:
                strengths.append(f"Strong {label} ({value}).")
            if value < 62:
                improvements.append(f"Improve {label} ({value}) with focused practice.")

        if not strengths:
            strengths.append("Consistent baseline across metrics.")
        if not improvements:
            improvements.append("Push for sharper storytelling with measurable outcomes.")
        return strengths, improvements

    @staticmethod
    def _blend(heuristic: int, proposals: list[int | None]) -> int:
        values = [clamp_score(value) for value in proposals if value is not None]
        if not values:
            return clamp_score(heuristic)
        external = round_half_up(sum(values) / len(values))
        return clamp_score(heuristic * HEURISTIC_WEIGHT + external * EXTERNAL_WEIGHT)

    def evaluate(
        self,
        prompt: str,
        tags: list[str],
        answer_type: str,
        text: str,
        duration_sec: float = 0,
        facial_expression_score: float = 0,
        confidence_self_rating: float = 0,
        external: list[ExternalAssessment] | None = None,
    ) -> AnswerEvaluation:
        """
        Score an answer, blending in any external assessments.

        Args:
            prompt: Question prompt
            tags: Question tags
            answer_type: text | voice | video
            text: Transcript or typed answer
            duration_sec: Recording length, 0 when unknown
            facial_expression_score: Client-side expression score for video answers
            confidence_self_rating: Candidate's own rating on a 0-10 scale
            external: Assessments from AI evaluators

        Returns:
            AnswerEvaluation with merged scores and coaching tips
        """
        merged_text = (text or "").strip()
        external = external or []

        wpm, speaking_speed = self.score_speaking_speed(len(tokenize(merged_text)), duration_sec)
        technical, technical_note = self.score_technical_accuracy(merged_text, tags, prompt)
        heuristic = {
            "confidence": self.score_confidence(merged_text, confidence_self_rating),
            "communication": self.score_communication(merged_text),
            "grammar": self.score_grammar(merged_text),
            "technical_accuracy": technical,
            "speaking_speed": speaking_speed,
            "facial_expression": self.score_facial_expression(answer_type, facial_expression_score),
        }

        merged = {
            key: self._blend(value, [getattr(item, key) for item in external])
            for key, value in heuristic.items()
        }
        overall = clamp_score(sum(merged[key] * weight for key, weight in OVERALL_WEIGHTS.items()))

        scores = ScoreCard(
            confidence=merged["confidence"],
            communication=merged["communication"],
            clarity=merged["communication"],
            grammar=merged["grammar"],
            technical_accuracy=merged["technical_accuracy"],
            speaking_speed=merged["speaking_speed"],
            facial_expression=merged["facial_expression"],
            relevance=merged["technical_accuracy"],
            overall=overall,
        )

        fallback_strengths, fallback_improvements = self.build_tips(merged)
        feedback_tips = unique_strings(
            [tip for item in external for tip in item.feedback_tips], MAX_TIPS
        )
        improvements = unique_strings(
            [tip for item in external for tip in item.improvements], MAX_TIPS
        )
        external_note = next(
            (item.relevance_notes.strip() for item in external if item.relevance_notes.strip()), ""
        )

        return AnswerEvaluation(
            scores=scores,
            speaking_speed_wpm=wpm,
            feedback_tips=feedback_tips or fallback_strengths,
            improvements=improvements or fallback_improvements,
            relevance_notes=external_note or technical_note,
            transcript=merged_text,
        )
