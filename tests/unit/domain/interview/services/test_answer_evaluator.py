"""Tests for AnswerEvaluationService domain service."""

import pytest

from interview_coach.domain.interview.services.answer_evaluator import (
    AnswerEvaluationService,
    ExternalAssessment,
    words_per_minute,
)


@pytest.fixture
def service() -> AnswerEvaluationService:
    return AnswerEvaluationService()


class TestCommunication:
    def test_empty_answer(self, service: AnswerEvaluationService) -> None:
        assert service.score_communication("") == 30

    def test_well_sized_sentence(self, service: AnswerEvaluationService) -> None:
        text = "I designed the service and measured latency across every region."
        assert service.score_communication(text) == 67

    def test_filler_words_are_penalised(self, service: AnswerEvaluationService) -> None:
        assert service.score_communication("Um I like did it.") == 0


class TestGrammar:
    def test_empty_answer(self, service: AnswerEvaluationService) -> None:
        assert service.score_grammar("   ") == 35

    def test_two_punctuated_sentences(self, service: AnswerEvaluationService) -> None:
        assert service.score_grammar("I shipped it. It worked!") == 78

    def test_repeated_punctuation(self, service: AnswerEvaluationService) -> None:
        assert service.score_grammar("wow!!") == 60


class TestSpeakingSpeed:
    @pytest.mark.parametrize(
        ("words", "duration", "expected"),
        [
            (30, 15, (120, 90)),
            (25, 15, (100, 78)),
            (45, 15, (180, 74)),
            (50, 15, (200, 50)),
            (10, 15, (40, 42)),
            (40, 0, (80, 50)),
        ],
    )
    def test_bands(
        self,
        service: AnswerEvaluationService,
        words: int,
        duration: float,
        expected: tuple[int, int],
    ) -> None:
        assert service.score_speaking_speed(words, duration) == expected

    def test_unknown_duration_assumes_thirty_seconds(self) -> None:
        assert words_per_minute(60, 0) == 120


class TestConfidence:
    def test_empty_answer(self, service: AnswerEvaluationService) -> None:
        assert service.score_confidence("", 0) == 35

    def test_ownership_words(self, service: AnswerEvaluationService) -> None:
        assert service.score_confidence("I led and delivered it", 0) == 64

    def test_bonus_is_capped(self, service: AnswerEvaluationService) -> None:
        text = "led owned built solved launched measured delivered improved"
        assert service.score_confidence(text, 0) == 76

    def test_self_rating_is_blended(self, service: AnswerEvaluationService) -> None:
        assert service.score_confidence("I led and delivered it", 10) == 73


class TestTechnicalAccuracy:
    def test_empty_answer(self, service: AnswerEvaluationService) -> None:
        score, note = service.score_technical_accuracy("", ["api"], "Why?")
        assert score == 30
        assert note.startswith("Very short answer")

    def test_no_expected_terms(self, service: AnswerEvaluationService) -> None:
        score, _ = service.score_technical_accuracy("some answer", [], "Why?")
        assert score == 72

    def test_partial_coverage(self, service: AnswerEvaluationService) -> None:
        score, note = service.score_technical_accuracy(
            "design caching system", ["system design", "scalability"], "Explain caching"
        )
        assert score == 74
        assert note.startswith("Partial technical alignment")


class TestFacialExpression:
    def test_non_video_answers_get_neutral_score(self, service: AnswerEvaluationService) -> None:
        assert service.score_facial_expression("text", 90) == 60

    def test_video_without_client_score(self, service: AnswerEvaluationService) -> None:
        assert service.score_facial_expression("video", 0) == 68

    def test_video_with_client_score(self, service: AnswerEvaluationService) -> None:
        assert service.score_facial_expression("video", 83.4) == 83


class TestEvaluate:
    ANSWER = (
        "I led the migration of our billing service and measured a thirty percent drop "
        "in latency. I delivered it with two engineers in six weeks."
    )

    def test_heuristic_only(self, service: AnswerEvaluationService) -> None:
        result = service.evaluate(
            prompt="Describe a migration you led.",
            tags=["ownership"],
            answer_type="text",
            text=f"  {self.ANSWER}  ",
            duration_sec=12,
        )

        scores = result.scores
        assert result.transcript == self.ANSWER
        assert scores.clarity == scores.communication
        assert scores.relevance == scores.technical_accuracy
        assert scores.facial_expression == 60
        assert 0 <= scores.overall <= 100
        assert result.feedback_tips
        assert result.improvements

    def test_external_assessment_is_blended(self, service: AnswerEvaluationService) -> None:
        baseline = service.evaluate("Prompt text here", [], "text", self.ANSWER)

        result = service.evaluate(
            "Prompt text here",
            [],
            "text",
            self.ANSWER,
            external=[
                ExternalAssessment(
                    grammar=100,
                    feedback_tips=["Clear structure.", "Clear structure."],
                    improvements=["Quantify the team impact."],
                    relevance_notes="  Answers the question directly. ",
                )
            ],
        )

        expected_grammar = int(baseline.scores.grammar * 0.35 + 100 * 0.65 + 0.5)
        assert result.scores.grammar == expected_grammar
        assert result.scores.confidence == baseline.scores.confidence
        assert result.feedback_tips == ["Clear structure."]
        assert result.improvements == ["Quantify the team impact."]
        assert result.relevance_notes == "Answers the question directly."


class TestBuildTips:
    def test_all_strong(self, service: AnswerEvaluationService) -> None:
        metrics = dict.fromkeys(
            [
                "confidence",
                "communication",
                "grammar",
                "technical_accuracy",
                "speaking_speed",
                "facial_expression",
            ],
            80,
        )

        strengths, improvements = service.build_tips(metrics)

        assert len(strengths) == 6
        assert strengths[0] == "Strong confidence (80)."
        assert improvements == ["Push for sharper storytelling with measurable outcomes."]
