# =============================================================================
# TESTES - Leaderboard Ranker
# =============================================================================
# Ordenação, top N e posição do jogador
# =============================================================================

import pytest


@pytest.fixture
def ranker():
    from quiz_engine.engine.leaderboard import LeaderboardRanker

    return LeaderboardRanker()


class TestOrdering:
    """Testes da ordem do ranking."""

    def test_score_descending(self, ranker, make_result):
        results = [make_result(40, player_id=1), make_result(90, player_id=2), make_result(70, player_id=3)]

        ordered = ranker.full_order(results)

        assert [r.player_id for r in ordered] == [2, 3, 1]

    def test_tie_broken_by_time(self, ranker, make_result):
        """Verifica empate: 90s antes de 120s antes de sem tempo."""
        results = [
            make_result(80, time_taken_seconds=None, player_id="sem-tempo"),
            make_result(80, time_taken_seconds=120, player_id="lento"),
            make_result(80, time_taken_seconds=90, player_id="rápido"),
        ]

        ordered = ranker.full_order(results)

        assert [r.player_id for r in ordered] == ["rápido", "lento", "sem-tempo"]

    def test_full_tie_broken_by_completion(self, ranker, make_result):
        results = [
            make_result(80, 60, player_id="b", completed_offset=30),
            make_result(80, 60, player_id="c"),
            make_result(80, 60, player_id="a", completed_offset=10),
        ]

        ordered = ranker.full_order(results)

        assert [r.player_id for r in ordered] == ["a", "b", "c"]

    def test_order_independent_of_input(self, ranker, make_result):
        """Verifica que a mesma entrada em outra ordem gera o mesmo ranking."""
        results = [
            make_result(50, 30, player_id=1, completed_offset=1),
            make_result(50, 30, player_id=2, completed_offset=2),
            make_result(70, None, player_id=3),
            make_result(70, 10, player_id=4),
        ]

        assert ranker.full_order(results) == ranker.full_order(list(reversed(results)))

    def test_adjacent_pairs_respect_order(self, ranker, make_result):
        results = [
            make_result(score, time, player_id=i)
            for i, (score, time) in enumerate([(30, 5), (30, None), (90, 100), (60, 20), (90, 50)])
        ]

        ordered = ranker.full_order(results)

        for first, second in zip(ordered, ordered[1:]):
            assert first.score >= second.score
            if first.score == second.score and second.time_taken_seconds is not None:
                assert first.time_taken_seconds is not None
                assert first.time_taken_seconds <= second.time_taken_seconds


class TestTopN:
    """Testes para top_n."""

    def test_default_limit(self, ranker, make_result):
        results = [make_result(i, player_id=i) for i in range(15)]

        top = ranker.top_n(results)

        assert len(top) == 10
        assert top[0].score == 14

    @pytest.mark.parametrize("n", [0, -5, None])
    def test_non_positive_uses_default(self, make_result, n):
        from quiz_engine.engine.leaderboard import LeaderboardRanker

        results = [make_result(i, player_id=i) for i in range(8)]

        assert len(LeaderboardRanker(default_limit=3).top_n(results, n)) == 3

    def test_explicit_limit(self, ranker, make_result):
        results = [make_result(i, player_id=i) for i in range(5)]

        assert [r.score for r in ranker.top_n(results, 2)] == [4, 3]

    def test_fewer_results_than_limit(self, ranker, make_result):
        assert len(ranker.top_n([make_result(10, player_id=1)], 5)) == 1

    def test_empty(self, ranker):
        assert ranker.top_n([]) == []


class TestPositionOf:
    """Testes para position_of."""

    def test_position(self, ranker, make_result):
        results = [
            make_result(90, 100, player_id=1),
            make_result(90, 50, player_id=2),
            make_result(40, 10, player_id=3),
        ]

        position = ranker.position_of(results, 1)

        assert position.position == 2
        assert position.total_players == 3
        assert position.score == 90

    def test_best_result_of_player(self, ranker, make_result):
        """Verifica que vale o melhor resultado do jogador."""
        results = [
            make_result(30, player_id=1),
            make_result(80, player_id=2),
            make_result(95, player_id=1),
        ]

        assert ranker.position_of(results, 1).position == 1

    def test_player_id_as_text(self, ranker, make_result):
        results = [make_result(30, player_id=5)]

        assert ranker.position_of(results, "5").position == 1

    def test_not_found(self, ranker, make_result):
        from quiz_engine.exceptions import NotFoundError

        results = [make_result(30, player_id=1)]

        with pytest.raises(NotFoundError) as exc_info:
            ranker.position_of(results, 42)

        assert exc_info.value.details["player_id"] == 42
        assert exc_info.value.to_dict()["error"] == "NotFoundError"

    def test_not_found_empty(self, ranker):
        from quiz_engine.exceptions import NotFoundError

        with pytest.raises(NotFoundError):
            ranker.position_of([], 1)
