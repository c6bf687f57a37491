"""Scoring Engine - Motor de pontuação de sessões."""

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from ..models.enums import Grade
from ..models.grading import calculate_grade, calculate_percentage, is_passed
from ..models.question import Question, Quiz, SubmittedAnswer
from ..models.schemas import DetailedAnswerResult, SessionResult
from .answer_codec import AnswerCodec
from .answer_validator import AnswerValidator
from .shuffler import OptionPermutation

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Motor de pontuação de uma sessão de quiz.

    Regras:
        - Acerto: ``points`` da questão
        - Erro com pontos negativos habilitados no quiz e ``negative_points``
          definido: ``-negative_points``
        - Erro sem penalidade ou questão não respondida: 0

    A pontuação total nunca fica abaixo de zero, mas cada
    ``DetailedAnswerResult`` mantém o valor real (possivelmente negativo).

    Faixas de nota (sobre o percentual):
        - >= 90%: A
        - >= 80%: B
        - >= 70%: C
        - >= 60%: D
        - >= 50%: E (aprovado)
        - < 50%: F

    Example:
        >>> engine = ScoringEngine()
        >>> result = engine.score(quiz, [SubmittedAnswer(1, "0")])
        >>> print(result.grade, result.passed)
    """

    def __init__(
        self,
        validator: AnswerValidator | None = None,
        codec: AnswerCodec | None = None,
    ):
        self.codec = codec or AnswerCodec()
        self.validator = validator or AnswerValidator(self.codec)

    @staticmethod
    def calculate_percentage(score: int, max_score: int) -> float:
        return calculate_percentage(score, max_score)

    @staticmethod
    def calculate_grade(percentage: float | None) -> Grade:
        return calculate_grade(percentage)

    @staticmethod
    def is_passed(percentage: float | None) -> bool:
        return is_passed(percentage)

    def evaluate_answer(
        self,
        question: Question,
        submitted: Any,
        negative_points_enabled: bool = False,
        permutation: OptionPermutation | None = None,
    ) -> DetailedAnswerResult:
        """Avalia uma questão individual.

        Args:
            question: Questão respondida
            submitted: Resposta bruta (None se não respondida)
            negative_points_enabled: Se o quiz aplica penalidade por erro
            permutation: Permutação de apresentação das alternativas

        Returns:
            DetailedAnswerResult com pontos da questão (sem clamp)
        """
        answered = submitted is not None
        is_correct = answered and self.validator.is_correct(question, submitted, permutation)

        if is_correct:
            points_earned = question.points
        elif answered and negative_points_enabled and question.negative_points is not None:
            points_earned = -question.negative_points
        else:
            points_earned = 0

        return DetailedAnswerResult(
            question_id=question.id,
            question_text=question.text,
            question_type=question.question_type.value,
            is_correct=is_correct,
            points_earned=points_earned,
            correct_answer=self.codec.serialize_answer(
                question.question_type, question.correct_answer
            ),
            submitted_answer=_echo(submitted),
            explanation=question.explanation,
        )

    def score(
        self,
        quiz: Quiz,
        submissions: Iterable[SubmittedAnswer],
        *,
        player_id: int | str | None = None,
        session_id: str | None = None,
        time_taken_seconds: int | None = None,
        permutations: Mapping[int, OptionPermutation] | None = None,
        completed_at: datetime | None = None,
    ) -> SessionResult:
        """Calcula o resultado completo de uma sessão.

        Args:
            quiz: Quiz jogado (questões ativas no momento do jogo)
            submissions: Respostas enviadas; questões ausentes contam como erro
            player_id: ID do jogador
            session_id: ID da sessão
            time_taken_seconds: Tempo gasto
            permutations: Permutações geradas no início da sessão
            completed_at: Momento de conclusão (entrada explícita para que
                entradas iguais gerem resultados iguais)

        Returns:
            SessionResult imutável
        """
        questions = quiz.active_questions()
        known_ids = {q.id for q in questions}
        permutations = permutations or {}

        answers: dict[int, Any] = {}
        for submission in submissions:
            if submission.question_id not in known_ids:
                logger.warning(
                    f"[Quiz {quiz.id}] Questão não encontrada: {submission.question_id}"
                )
                continue
            if submission.question_id in answers:
                logger.debug(
                    f"[Quiz {quiz.id}] Resposta duplicada para questão "
                    f"{submission.question_id}, mantendo a última"
                )
            answers[submission.question_id] = submission.answer

        total_score = 0
        correct_count = 0
        wrong_count = 0
        detailed: list[DetailedAnswerResult] = []

        for question in questions:
            detail = self.evaluate_answer(
                question,
                answers.get(question.id),
                negative_points_enabled=quiz.negative_points_enabled,
                permutation=permutations.get(question.id),
            )
            detailed.append(detail)
            total_score += detail.points_earned
            if detail.is_correct:
                correct_count += 1
            else:
                wrong_count += 1

        # Clamp apenas no nível da sessão
        if total_score < 0:
            total_score = 0

        max_score = sum(q.points for q in questions)
        percentage = self.calculate_percentage(total_score, max_score)

        logger.info(
            f"[Quiz {quiz.id}] Sessão pontuada: {total_score}/{max_score}, "
            f"corretas: {correct_count}, erradas: {wrong_count}"
        )

        return SessionResult(
            quiz_id=quiz.id,
            player_id=player_id,
            session_id=session_id,
            score=total_score,
            max_score=max_score,
            correct_answers=correct_count,
            wrong_answers=wrong_count,
            total_questions=len(questions),
            time_taken_seconds=time_taken_seconds,
            percentage=percentage,
            completed_at=completed_at,
            detailed_answers=detailed,
        )


def _echo(submitted: Any) -> str | None:
    """Resposta enviada em texto, para revisão."""
    if submitted is None or isinstance(submitted, str):
        return submitted
    try:
        return json.dumps(submitted, ensure_ascii=False, default=str)
    except (ValueError, RecursionError):
        return f"<{type(submitted).__name__} não serializável>"
