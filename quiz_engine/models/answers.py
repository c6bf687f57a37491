"""Valores tipados de opções e respostas.

Cada QuestionType tem exatamente uma variante de resposta. Depois do
AnswerCodec nenhum componente manipula texto JSON bruto.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MatchingPair:
    """Par esquerda/direita de uma questão MATCHING."""

    left: str
    right: str

    def to_dict(self) -> dict[str, str]:
        return {"left": self.left, "right": self.right}


@dataclass(frozen=True)
class IndexAnswer:
    """SINGLE_CHOICE, DROPDOWN e TRUE_FALSE: um índice zero-based."""

    index: int


@dataclass(frozen=True)
class IndexSetAnswer:
    """MULTIPLE_CHOICE: conjunto de índices (ordem e duplicatas irrelevantes)."""

    indices: frozenset[int]


@dataclass(frozen=True)
class TextAnswer:
    """SHORT_ANSWER: texto livre."""

    text: str


@dataclass(frozen=True)
class TextListAnswer:
    """FILL_BLANKS: um texto por lacuna, na ordem das lacunas."""

    texts: tuple[str, ...]


@dataclass(frozen=True)
class OrderAnswer:
    """SORTING: permutação alvo expressa em índices originais."""

    order: tuple[int, ...]


@dataclass(frozen=True)
class PairSetAnswer:
    """MATCHING: conjunto de pares (sem ordem, sem crédito parcial)."""

    pairs: frozenset[MatchingPair]


AnswerValue = Union[
    IndexAnswer,
    IndexSetAnswer,
    TextAnswer,
    TextListAnswer,
    OrderAnswer,
    PairSetAnswer,
]

# SHORT_ANSWER usa tupla vazia
OptionList = Union[tuple[str, ...], tuple[MatchingPair, ...]]
