"""Quiz Statistics - Agregados de desempenho de um quiz."""

from collections.abc import Sequence

from ..models.schemas import QuestionDifficulty, QuizStatistics, SessionResult


class QuizStatisticsCalculator:
    """Calcula estatísticas a partir dos resultados concluídos."""

    def summarize(
        self,
        results: Sequence[SessionResult],
        max_score: int = 0,
        quiz_id: int | None = None,
    ) -> QuizStatistics:
        """Tentativas, aprovação, média/maior/menor pontuação e tempo médio."""
        if not results:
            return QuizStatistics(quiz_id=quiz_id, max_score=max_score)

        total = len(results)
        passed = sum(1 for r in results if r.passed)
        scores = [r.score for r in results]
        times = [r.time_taken_seconds for r in results if r.time_taken_seconds is not None]

        return QuizStatistics(
            quiz_id=quiz_id,
            total_attempts=total,
            passed_attempts=passed,
            failed_attempts=total - passed,
            pass_rate=passed / total * 100,
            average_score=sum(scores) / total,
            highest_score=max(scores),
            lowest_score=min(scores),
            max_score=max_score,
            average_time_seconds=sum(times) / len(times) if times else None,
        )

    def question_difficulty(
        self, results: Sequence[SessionResult]
    ) -> list[QuestionDifficulty]:
        """Taxa de acerto por questão, das mais difíceis para as mais fáceis."""
        attempts: dict[int, int] = {}
        correct: dict[int, int] = {}

        for result in results:
            for answer in result.detailed_answers:
                attempts[answer.question_id] = attempts.get(answer.question_id, 0) + 1
                if answer.is_correct:
                    correct[answer.question_id] = correct.get(answer.question_id, 0) + 1

        rows = [
            QuestionDifficulty(
                question_id=qid,
                attempts=count,
                correct=correct.get(qid, 0),
                correct_rate=correct.get(qid, 0) / count * 100,
            )
            for qid, count in attempts.items()
        ]
        return sorted(rows, key=lambda row: (row.correct_rate, row.question_id))
