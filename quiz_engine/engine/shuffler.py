"""Presentation Shuffler - Embaralhamento de questões e alternativas."""

import logging
import random
from dataclasses import dataclass, field

from ..exceptions import MalformedAnswerError, MalformedOptionsError
from ..models.answers import AnswerValue, IndexAnswer, IndexSetAnswer, OrderAnswer
from ..models.enums import QuestionType
from ..models.question import PlayerQuestion, Question, Quiz

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionPermutation:
    """Mapeamento entre posições apresentadas e índices originais.

    ``order[posicao_apresentada] == indice_original``. Respostas enviadas em
    posições apresentadas são restauradas para índices originais antes da
    validação, então o gabarito armazenado nunca muda.
    """

    question_id: int
    order: tuple[int, ...]

    def to_original(self, presented_index: int) -> int:
        if not 0 <= presented_index < len(self.order):
            raise MalformedAnswerError(
                "Posição apresentada fora do intervalo",
                details={"question_id": self.question_id, "index": presented_index},
            )
        return self.order[presented_index]

    def to_presented(self, original_index: int) -> int:
        try:
            return self.order.index(original_index)
        except ValueError as e:
            raise MalformedAnswerError(
                "Índice original fora do intervalo",
                details={"question_id": self.question_id, "index": original_index},
            ) from e

    def apply(self, items: tuple) -> tuple:
        """Reordena itens originais para a ordem apresentada."""
        return tuple(items[i] for i in self.order)

    @classmethod
    def rejecting(cls, question_id: int) -> "OptionPermutation":
        """Permutação vazia: toda resposta restaurada por ela é rejeitada.

        Usada quando a ordem devolvida pela camada de sessão é inválida, para
        que apenas essa questão conte como errada.
        """
        return cls(question_id=question_id, order=())

    def restore(self, value: AnswerValue) -> AnswerValue:
        """Converte uma resposta em posições apresentadas para índices originais."""
        if not self.order:
            raise MalformedAnswerError(
                "Sem ordem de apresentação válida", details={"question_id": self.question_id}
            )
        match value:
            case IndexAnswer(index=index):
                return IndexAnswer(self.to_original(index))
            case IndexSetAnswer(indices=indices):
                return IndexSetAnswer(frozenset(self.to_original(i) for i in indices))
            case OrderAnswer(order=order):
                return OrderAnswer(tuple(self.to_original(i) for i in order))
        return value


@dataclass(frozen=True)
class PresentedQuiz:
    """Versão do quiz para o jogador.

    Attributes:
        questions: Questões sem gabarito, na ordem de apresentação
        permutations: Permutações por questão (ficam com o chamador, para
            restaurar as respostas no submit)
    """

    quiz_id: int | None
    questions: tuple[PlayerQuestion, ...]
    permutations: dict[int, OptionPermutation] = field(default_factory=dict)

    def option_orders(self) -> dict[int, list[int]]:
        return {qid: list(p.order) for qid, p in self.permutations.items()}


# Tipos cujo embaralhamento precisa de remapeamento da resposta
_REMAPPED_TYPES = frozenset(
    {
        QuestionType.SINGLE_CHOICE,
        QuestionType.MULTIPLE_CHOICE,
        QuestionType.DROPDOWN,
        QuestionType.TRUE_FALSE,
        QuestionType.SORTING,
    }
)


class PresentationShuffler:
    """Produz a versão do quiz apresentada ao jogador.

    - ``random_question_order``: permutação uniforme das questões
    - ``random_answer_order``: permutação independente das alternativas de
      cada questão posicional, registrada em ``OptionPermutation``
    - SORTING: itens embaralhados com permutação registrada; a ordem correta
      continua expressa em índices originais
    - MATCHING: apenas a ordem dos pares muda, nunca o par em si
    - SHORT_ANSWER e FILL_BLANKS: inalterados

    Cada chamada usa o próprio gerador, sem estado global de random.

    Example:
        >>> shuffler = PresentationShuffler(seed=42)
        >>> presented = shuffler.shuffle(quiz)
        >>> presented.questions[0].options  # sem gabarito
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed

    def shuffle(self, quiz: Quiz, rng: random.Random | None = None) -> PresentedQuiz:
        """Gera as questões apresentadas (apenas as ativas)."""
        rng = rng or random.Random(self.seed)

        questions = quiz.active_questions()
        if quiz.random_question_order:
            rng.shuffle(questions)

        presented: list[PlayerQuestion] = []
        permutations: dict[int, OptionPermutation] = {}

        for question in questions:
            if not quiz.random_answer_order:
                presented.append(PlayerQuestion.from_question(question))
                continue

            player_question, permutation = self.shuffle_question(question, rng)
            presented.append(player_question)
            if permutation is not None:
                permutations[question.id] = permutation

        logger.debug(
            f"[Quiz {quiz.id}] {len(presented)} questões apresentadas, "
            f"{len(permutations)} com alternativas embaralhadas"
        )

        return PresentedQuiz(
            quiz_id=quiz.id,
            questions=tuple(presented),
            permutations=permutations,
        )

    def shuffle_question(
        self, question: Question, rng: random.Random
    ) -> tuple[PlayerQuestion, OptionPermutation | None]:
        """Embaralha as alternativas de uma questão.

        Returns:
            Tuple de (questão apresentada, permutação ou None)
        """
        if question.question_type in _REMAPPED_TYPES:
            order = list(range(len(question.options)))
            rng.shuffle(order)
            permutation = OptionPermutation(question_id=question.id, order=tuple(order))
            options = permutation.apply(question.options)
            return PlayerQuestion.from_question(question, options=options), permutation

        if question.question_type is QuestionType.MATCHING:
            pairs = list(question.options)
            rng.shuffle(pairs)
            return PlayerQuestion.from_question(question, options=tuple(pairs)), None

        return PlayerQuestion.from_question(question), None

    @staticmethod
    def permutation_from_order(question: Question, order: list[int]) -> OptionPermutation:
        """Reconstrói a permutação devolvida pela camada de sessão.

        Raises:
            MalformedOptionsError: Se a ordem não é uma permutação das opções
        """
        details = {
            "question_id": question.id,
            "question_type": question.question_type.value,
            "field": "option_order",
        }
        if question.question_type not in _REMAPPED_TYPES:
            raise MalformedOptionsError(
                "Questão sem alternativas embaralháveis", details=details
            )
        if sorted(order) != list(range(len(question.options))):
            raise MalformedOptionsError(
                "Ordem de alternativas inválida", details={**details, "order": list(order)}
            )
        return OptionPermutation(question_id=question.id, order=tuple(order))
