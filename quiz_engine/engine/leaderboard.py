"""Leaderboard Ranker - Ordenação de resultados de um quiz."""

import logging
import math
from collections.abc import Iterable

from ..exceptions import NotFoundError
from ..models.schemas import RankingPosition, SessionResult

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class LeaderboardRanker:
    """Ranking dos resultados concluídos de um quiz.

    Ordem total:
        1. Pontuação decrescente
        2. Tempo crescente (sem tempo = mais lento)
        3. Conclusão crescente (sem data = por último), session_id, player_id

    A ordenação é estável, então resultados idênticos mantêm a ordem de
    entrada e o ranking não oscila entre chamadas.
    """

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        self.default_limit = default_limit

    @staticmethod
    def sort_key(result: SessionResult) -> tuple:
        time_taken = (
            result.time_taken_seconds if result.time_taken_seconds is not None else math.inf
        )
        completed = result.completed_at
        return (
            -result.score,
            time_taken,
            completed is None,
            completed.timestamp() if completed is not None else 0.0,
            result.session_id or "",
            str(result.player_id) if result.player_id is not None else "",
        )

    def full_order(self, results: Iterable[SessionResult]) -> list[SessionResult]:
        """Todos os resultados ordenados."""
        return sorted(results, key=self.sort_key)

    def top_n(self, results: Iterable[SessionResult], n: int | None = None) -> list[SessionResult]:
        """Primeiros N resultados (N <= 0 ou None usa o limite padrão)."""
        limit = n if n is not None and n > 0 else self.default_limit
        return self.full_order(results)[:limit]

    def position_of(
        self, results: Iterable[SessionResult], player_id: int | str
    ) -> RankingPosition:
        """Posição 1-based do melhor resultado do jogador.

        Raises:
            NotFoundError: Se o jogador não tem resultado concluído
        """
        ordered = self.full_order(results)

        for position, result in enumerate(ordered, start=1):
            if _same_player(result.player_id, player_id):
                logger.debug(f"Jogador {player_id} na posição {position}/{len(ordered)}")
                return RankingPosition(
                    player_id=player_id,
                    quiz_id=result.quiz_id,
                    position=position,
                    total_players=len(ordered),
                    score=result.score,
                    max_score=result.max_score,
                    percentage=result.percentage,
                    time_taken_seconds=result.time_taken_seconds,
                    completed_at=result.completed_at,
                )

        quiz_ids = sorted({str(r.quiz_id) for r in ordered if r.quiz_id is not None})
        raise NotFoundError(
            f"Nenhum resultado encontrado para o jogador {player_id}",
            details={"player_id": player_id, "quiz_ids": quiz_ids},
        )


def _same_player(candidate: int | str | None, player_id: int | str) -> bool:
    # IDs podem chegar como int ou texto dependendo da origem (JSON, banco)
    return candidate is not None and str(candidate) == str(player_id)
