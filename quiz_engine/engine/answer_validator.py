"""Answer Validator - Regra de igualdade por tipo de questão."""

import logging
from typing import Any

from ..exceptions import QuestionValidationError, UnknownQuestionTypeError
from ..models.answers import AnswerValue
from ..models.enums import QuestionType
from ..models.question import Question
from ..models.schemas import AnswerValidationResponse
from .answer_codec import AnswerCodec
from .shuffler import OptionPermutation

logger = logging.getLogger(__name__)


class AnswerValidator:
    """Decide se uma resposta enviada está correta.

    A resposta do jogador é sempre tratada como entrada não confiável:
    formato inválido ou ausente vira "incorreta", nunca exceção.
    Não há crédito parcial: a questão está inteira certa ou inteira errada.

    Regras:
        - SINGLE_CHOICE / DROPDOWN / TRUE_FALSE: índice exato
        - MULTIPLE_CHOICE: igualdade de conjuntos
        - SHORT_ANSWER: texto sem diferenciar maiúsculas, com trim
        - FILL_BLANKS: mesma quantidade, cada lacuna como SHORT_ANSWER
        - SORTING: lista exata (ordem importa)
        - MATCHING: igualdade de conjuntos de pares
    """

    def __init__(self, codec: AnswerCodec | None = None):
        self.codec = codec or AnswerCodec()

    def is_correct(
        self,
        question: Question,
        submitted: Any,
        permutation: OptionPermutation | None = None,
    ) -> bool:
        """Valida a resposta bruta enviada para a questão.

        Args:
            question: Questão com gabarito válido
            submitted: Resposta bruta (texto JSON, lista, índice ou None)
            permutation: Permutação de apresentação, se as alternativas
                foram embaralhadas
        """
        if submitted is None:
            return False

        try:
            value = self.codec.parse_answer(
                question.question_type, submitted, question_id=question.id
            )
            if permutation is not None:
                value = permutation.restore(value)
        except QuestionValidationError as e:
            logger.debug(f"Resposta rejeitada para questão {question.id}: {e.message}")
            return False

        return self.matches(question.question_type, question.correct_answer, value)

    def matches(
        self, question_type: QuestionType, correct: AnswerValue, submitted: AnswerValue
    ) -> bool:
        """Compara dois valores tipados segundo a regra do tipo."""
        if type(correct) is not type(submitted):
            return False

        match question_type:
            case QuestionType.SINGLE_CHOICE | QuestionType.DROPDOWN | QuestionType.TRUE_FALSE:
                return correct.index == submitted.index
            case QuestionType.MULTIPLE_CHOICE:
                return correct.indices == submitted.indices
            case QuestionType.SHORT_ANSWER:
                return _normalize(correct.text) == _normalize(submitted.text)
            case QuestionType.FILL_BLANKS:
                if len(correct.texts) != len(submitted.texts):
                    return False
                return all(
                    _normalize(expected) == _normalize(given)
                    for expected, given in zip(correct.texts, submitted.texts)
                )
            case QuestionType.SORTING:
                return correct.order == submitted.order
            case QuestionType.MATCHING:
                return correct.pairs == submitted.pairs
            case _:
                raise UnknownQuestionTypeError(
                    f"Tipo de questão sem regra de validação: {question_type}",
                    details={"question_type": str(question_type)},
                )

    def validate(
        self,
        question: Question,
        submitted: Any,
        permutation: OptionPermutation | None = None,
    ) -> AnswerValidationResponse:
        """Valida e monta a resposta com feedback."""
        is_correct = self.is_correct(question, submitted, permutation)

        if is_correct:
            feedback = "Resposta correta!"
            if question.explanation:
                feedback = f"{feedback} {question.explanation}"
        else:
            feedback = "Resposta incorreta."

        return AnswerValidationResponse(
            question_id=question.id,
            is_correct=is_correct,
            feedback=feedback,
        )


def _normalize(text: str) -> str:
    return text.strip().lower()
