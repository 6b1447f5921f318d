"""Tests for answer timeline markers."""

from interview_coach.domain.interview.entities.answer import TimelineMarker
from interview_coach.domain.interview.services.timeline import (
    build_timeline_markers,
    estimate_duration,
    parse_timeline_markers,
)


class TestEstimateDuration:
    def test_empty(self) -> None:
        assert estimate_duration("") == 0

    def test_short_answers_take_at_least_ten_seconds(self) -> None:
        assert estimate_duration("one two three four five") == 10

    def test_conversational_pace(self) -> None:
        assert estimate_duration(" ".join(["word"] * 280)) == 120


class TestBuildTimelineMarkers:
    def test_default_markers(self) -> None:
        markers = build_timeline_markers(30, "answer")

        assert [marker.second for marker in markers] == [6, 17, 26]
        assert [marker.kind for marker in markers] == ["clarity", "relevance", "confidence"]
        assert markers[0].label == "Start with stronger context and clearer framing."

    def test_coaching_labels(self) -> None:
        markers = build_timeline_markers(
            30, "answer", improvements=[" Quantify impact. "], relevance_notes="  On topic. "
        )

        assert markers[1].label == "Quantify impact."
        assert markers[2].label == "On topic."

    def test_estimates_when_duration_is_missing(self) -> None:
        markers = build_timeline_markers(0, "one two three")

        assert [marker.second for marker in markers] == [2, 6, 9]

    def test_nothing_to_mark(self) -> None:
        assert build_timeline_markers(0, "") == []

    def test_markers_stay_inside_short_answers(self) -> None:
        markers = build_timeline_markers(1, "yes")

        assert [marker.second for marker in markers] == [1, 1, 1]


class TestParseTimelineMarkers:
    def test_parses_and_skips_unlabelled(self) -> None:
        markers = parse_timeline_markers(
            [
                {"second": "4.7", "label": " Pause here "},
                {"second": 3, "label": ""},
                {"second": "abc", "label": "Restate", "kind": ""},
            ]
        )

        assert markers == [
            TimelineMarker(second=4, label="Pause here", kind="info"),
            TimelineMarker(second=0, label="Restate", kind="info"),
        ]

    def test_none(self) -> None:
        assert parse_timeline_markers(None) == []
