"""Quiz Enums - Tipos de questão e notas."""

from enum import Enum

from ..exceptions import UnknownQuestionTypeError


class QuestionType(str, Enum):
    """Tipos de questão suportados.

    Cada tipo fixa o formato de ``answer_options`` e ``correct_answer``:

        - SINGLE_CHOICE / DROPDOWN: ["A", "B", ...] e "0" (índice)
        - TRUE_FALSE: ["True", "False"] e "0" ou "1"
        - MULTIPLE_CHOICE: ["A", "B", ...] e [0, 2] (índices)
        - SHORT_ANSWER: sem opções e "texto livre"
        - FILL_BLANKS: ["lacuna1", ...] e ["resposta1", ...]
        - SORTING: ["item1", ...] e [2, 0, 1] (ordem correta em índices)
        - MATCHING: [{"left": .., "right": ..}] e [{"left": .., "right": ..}]
    """

    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    TRUE_FALSE = "TRUE_FALSE"
    SHORT_ANSWER = "SHORT_ANSWER"
    DROPDOWN = "DROPDOWN"
    FILL_BLANKS = "FILL_BLANKS"
    SORTING = "SORTING"
    MATCHING = "MATCHING"

    @classmethod
    def parse(cls, value: "QuestionType | str") -> "QuestionType":
        """Converte valor bruto para QuestionType.

        Raises:
            UnknownQuestionTypeError: Se o valor não pertence ao enum
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise UnknownQuestionTypeError(
                message=f"Tipo de questão desconhecido: {value!r}",
                details={"question_type": str(value)},
            ) from e

    @property
    def display_name(self) -> str:
        return _DISPLAY[self][0]

    @property
    def instruction(self) -> str:
        return _DISPLAY[self][1]

    @property
    def is_positional(self) -> bool:
        """Opções apresentadas como lista indexável (sujeitas a embaralhamento)."""
        return self in _POSITIONAL

    @property
    def allows_multiple_answers(self) -> bool:
        return self is QuestionType.MULTIPLE_CHOICE

    @property
    def requires_text_input(self) -> bool:
        return self in (QuestionType.SHORT_ANSWER, QuestionType.FILL_BLANKS)

    @property
    def requires_ordering(self) -> bool:
        return self is QuestionType.SORTING

    @property
    def requires_matching(self) -> bool:
        return self is QuestionType.MATCHING


_POSITIONAL = frozenset(
    {
        QuestionType.SINGLE_CHOICE,
        QuestionType.MULTIPLE_CHOICE,
        QuestionType.DROPDOWN,
        QuestionType.TRUE_FALSE,
    }
)

_DISPLAY = {
    QuestionType.SINGLE_CHOICE: ("Single Choice", "Select one correct answer"),
    QuestionType.MULTIPLE_CHOICE: ("Multiple Choice", "Select all correct answers"),
    QuestionType.TRUE_FALSE: ("True/False", "Select True or False"),
    QuestionType.SHORT_ANSWER: ("Short Answer", "Type your answer"),
    QuestionType.DROPDOWN: ("Dropdown List", "Select from dropdown"),
    QuestionType.FILL_BLANKS: ("Fill in the Blanks", "Fill in the missing words"),
    QuestionType.SORTING: ("Sorting", "Arrange items in correct order"),
    QuestionType.MATCHING: ("Matching", "Match pairs correctly"),
}


class Grade(str, Enum):
    """Nota derivada do percentual de aproveitamento."""

    A = "A"  # >= 90%
    B = "B"  # >= 80%
    C = "C"  # >= 70%
    D = "D"  # >= 60%
    E = "E"  # >= 50% (aprovado)
    F = "F"  # < 50%
    NOT_AVAILABLE = "N/A"  # sem percentual calculado
