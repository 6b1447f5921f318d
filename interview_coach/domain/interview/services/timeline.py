"""Timeline markers pinned onto a recorded or typed answer."""

from interview_coach.domain.common.text import round_half_up
from interview_coach.domain.interview.entities.answer import TimelineMarker

WORDS_PER_MINUTE = 140
MIN_ESTIMATED_SECONDS = 10

_DEFAULT_MARKERS = (
    (0.2, "Start with stronger context and clearer framing.", "clarity"),
    (0.55, "Add a specific action with measurable result.", "relevance"),
    (0.85, "Close with impact and ownership.", "confidence"),
)


def estimate_duration(text: str | None) -> int:
    """Seconds needed to speak the text at a conversational pace."""
    words = len((text or "").split())
    if not words:
        return 0
    return max(MIN_ESTIMATED_SECONDS, round_half_up(words / WORDS_PER_MINUTE * 60))


def build_timeline_markers(
    duration_sec: float,
    text: str,
    improvements: list[str] | None = None,
    relevance_notes: str = "",
) -> list[TimelineMarker]:
    """
    Place three coaching markers at 20%, 55% and 85% of the answer.

    The middle marker carries the top improvement and the last one the
    relevance note when those are available.
    """
    duration = duration_sec if duration_sec > 0 else estimate_duration(text)
    if not duration:
        return []

    labels = [label for _, label, _ in _DEFAULT_MARKERS]
    top_improvement = (improvements[0] if improvements else "").strip()
    if top_improvement:
        labels[1] = top_improvement
    if relevance_notes.strip():
        labels[2] = relevance_notes.strip()

    return [
        TimelineMarker(
            second=max(1, min(int(duration), round_half_up(duration * ratio))),
            label=label,
            kind=kind,
        )
        for (ratio, _, kind), label in zip(_DEFAULT_MARKERS, labels, strict=True)
    ]


def parse_timeline_markers(items: list[dict[str, object]] | None) -> list[TimelineMarker]:
    """Accept client-supplied markers, dropping entries without a label."""
    markers: list[TimelineMarker] = []
    for item in items or []:
        label = str(item.get("label") or "").strip()
        if not label:
            continue
        try:
            second = max(0, int(float(str(item.get("second") or 0))))
        except ValueError:
            second = 0
        kind = str(item.get("kind") or "info").strip() or "info"
        markers.append(TimelineMarker(second=second, label=label, kind=kind))
    return markers
