"""Questões, quiz e respostas enviadas."""

from dataclasses import dataclass, field
from typing import Any

from .answers import AnswerValue, OptionList
from .enums import QuestionType


@dataclass(frozen=True)
class Question:
    """Questão na visão do autor (inclui a resposta correta).

    Instâncias são criadas pelo ``AnswerCodec.build_question``, que garante
    que ``correct_answer`` e ``options`` são estruturalmente válidos para o
    tipo. Imutável: o embaralhamento de uma sessão nunca altera a questão.

    Attributes:
        id: ID da questão
        question_type: Tipo da questão
        text: Enunciado
        points: Pontos por acerto (>= 1)
        correct_answer: Resposta correta tipada
        options: Opções tipadas (vazio para SHORT_ANSWER)
        negative_points: Penalidade por erro (só vale com quiz negativo)
        active: Questões inativas não entram em jogo nem na pontuação máxima
        explanation: Explicação exibida na revisão pós-jogo
        time_limit_seconds: Tempo limite informativo
    """

    id: int
    question_type: QuestionType
    text: str
    points: int
    correct_answer: AnswerValue
    options: OptionList = ()
    negative_points: int | None = None
    active: bool = True
    explanation: str = ""
    time_limit_seconds: int | None = None


@dataclass(frozen=True)
class PlayerQuestion:
    """Questão na visão do jogador.

    Não possui campo de resposta correta nem de pontos negativos, então não
    há como vazar o gabarito para o jogador.
    """

    id: int
    question_type: QuestionType
    text: str
    points: int
    options: OptionList = ()
    time_limit_seconds: int | None = None

    @classmethod
    def from_question(
        cls, question: Question, options: OptionList | None = None
    ) -> "PlayerQuestion":
        """Cria a visão do jogador, opcionalmente com opções reordenadas."""
        return cls(
            id=question.id,
            question_type=question.question_type,
            text=question.text,
            points=question.points,
            options=question.options if options is None else options,
            time_limit_seconds=question.time_limit_seconds,
        )

    @property
    def display_name(self) -> str:
        return self.question_type.display_name

    @property
    def instruction(self) -> str:
        return self.question_type.instruction


@dataclass(frozen=True)
class Quiz:
    """Quiz com questões ordenadas e configurações de jogo."""

    id: int | None
    questions: tuple[Question, ...] = field(default_factory=tuple)
    title: str = ""
    random_question_order: bool = False
    random_answer_order: bool = False
    negative_points_enabled: bool = False

    def active_questions(self) -> list[Question]:
        """Questões ativas na ordem original."""
        return [q for q in self.questions if q.active]

    @property
    def total_points(self) -> int:
        """Soma dos pontos das questões ativas (derivado, nunca armazenado)."""
        return sum(q.points for q in self.active_questions())


@dataclass(frozen=True)
class SubmittedAnswer:
    """Resposta bruta enviada pelo jogador para uma questão."""

    question_id: int
    answer: Any = None
