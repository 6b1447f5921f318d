"""Scored answer value types stored on a session question."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from interview_coach.domain.common.value_object import ValueObject

METRIC_LABELS = {
    "confidence": "confidence",
    "communication": "communication",
    "clarity": "clarity",
    "grammar": "grammar",
    "technical_accuracy": "technical accuracy",
    "speaking_speed": "speaking speed",
    "facial_expression": "facial expression",
    "relevance": "relevance",
}

METRIC_KEYS = tuple(METRIC_LABELS)


@dataclass(frozen=True)
class ScoreCard(ValueObject):
    """Per-metric scores on the 0-100 scale plus the weighted overall score."""

    confidence: int = 0
    communication: int = 0
    clarity: int = 0
    grammar: int = 0
    technical_accuracy: int = 0
    speaking_speed: int = 0
    facial_expression: int = 0
    relevance: int = 0
    overall: int = 0

    def metrics(self) -> dict[str, int]:
        """All metric scores except overall, in display order."""
        return {key: getattr(self, key) for key in METRIC_KEYS}

    def weakest_metric(self) -> tuple[str, int] | None:
        metrics = self.metrics()
        if not metrics:
            return None
        # min() keeps the first key on ties
        key = min(metrics, key=lambda name: metrics[name])
        return key, metrics[key]

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "ScoreCard":
        """Floats are truncated to ints; missing or non-numeric scores become 0."""
        data = data or {}
        values: dict[str, int] = {}
        for key in (*METRIC_KEYS, "overall"):
            raw = data.get(key, 0)
            values[key] = int(raw) if isinstance(raw, int | float) else 0
        return cls(**values)


@dataclass(frozen=True)
class TimelineMarker(ValueObject):
    """Coaching hint pinned to a second of the recorded answer."""

    second: int
    label: str
    kind: str = "info"


@dataclass
class Answer:
    """Candidate answer with its evaluation."""

    answer_type: str
    transcript: str
    raw_text: str = ""
    media_reference: str = ""
    duration_sec: float = 0
    speaking_speed_wpm: int = 0
    facial_expression_score: float = 0
    confidence_self_rating: float = 0
    scores: ScoreCard = field(default_factory=ScoreCard)
    feedback_tips: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    relevance_notes: str = ""
    timeline_markers: list[TimelineMarker] = field(default_factory=list)
    answered_at: datetime | None = None

    @property
    def text(self) -> str:
        """Best available answer text: transcript first, then the typed text."""
        return (self.transcript or self.raw_text or "").strip()

    @property
    def overall_score(self) -> int:
        return self.scores.overall
