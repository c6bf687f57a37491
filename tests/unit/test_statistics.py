# =============================================================================
# TESTES - Quiz Statistics
# =============================================================================

import pytest


@pytest.fixture
def calculator():
    from quiz_engine.engine.statistics import QuizStatisticsCalculator

    return QuizStatisticsCalculator()


def _detail(question_id, is_correct):
    from quiz_engine.models.schemas import DetailedAnswerResult

    return DetailedAnswerResult(
        question_id=question_id,
        question_type="SHORT_ANSWER",
        is_correct=is_correct,
        points_earned=10 if is_correct else 0,
        correct_answer="x",
    )


class TestSummarize:
    """Testes para summarize."""

    def test_empty(self, calculator):
        stats = calculator.summarize([], max_score=100, quiz_id=1)

        assert stats.total_attempts == 0
        assert stats.pass_rate == 0.0
        assert stats.max_score == 100
        assert stats.average_time_seconds is None

    def test_aggregates(self, calculator, make_result):
        """Verifica contagens, médias e extremos."""
        results = [
            make_result(90, 60, player_id=1),
            make_result(50, None, player_id=2),
            make_result(20, 120, player_id=3),
        ]

        stats = calculator.summarize(results, max_score=100, quiz_id=1)

        assert stats.total_attempts == 3
        assert stats.passed_attempts == 2
        assert stats.failed_attempts == 1
        assert stats.pass_rate == pytest.approx(66.666, rel=1e-3)
        assert stats.average_score == pytest.approx(53.333, rel=1e-3)
        assert stats.highest_score == 90
        assert stats.lowest_score == 20
        assert stats.average_time_seconds == 90.0


class TestQuestionDifficulty:
    """Testes para question_difficulty."""

    def test_hardest_first(self, calculator, make_result):
        results = [
            make_result(10, player_id=1, detailed_answers=[_detail(1, True), _detail(2, False)]),
            make_result(20, player_id=2, detailed_answers=[_detail(1, True), _detail(2, True)]),
        ]

        rows = calculator.question_difficulty(results)

        assert [r.question_id for r in rows] == [2, 1]
        assert rows[0].correct_rate == 50.0
        assert rows[1].correct == 2

    def test_no_details(self, calculator, make_result):
        assert calculator.question_difficulty([make_result(10)]) == []
