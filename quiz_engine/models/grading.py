"""Faixas de nota e critério de aprovação.

Funções puras sobre o percentual: a nota e a aprovação nunca são
armazenadas separadamente do percentual.
"""

from .enums import Grade

PASS_THRESHOLD = 50.0

# (limite mínimo, nota) - ordem decrescente
GRADE_THRESHOLDS = [
    (90.0, Grade.A),
    (80.0, Grade.B),
    (70.0, Grade.C),
    (60.0, Grade.D),
    (50.0, Grade.E),
]


def calculate_percentage(score: int, max_score: int) -> float:
    """Percentual de aproveitamento (0.0 quando não há pontos possíveis)."""
    if max_score <= 0:
        return 0.0
    return score / max_score * 100


def calculate_grade(percentage: float | None) -> Grade:
    """Nota A-F a partir do percentual; N/A quando não há percentual."""
    if percentage is None:
        return Grade.NOT_AVAILABLE
    for threshold, grade in GRADE_THRESHOLDS:
        if percentage >= threshold:
            return grade
    return Grade.F


def is_passed(percentage: float | None) -> bool:
    return percentage is not None and percentage >= PASS_THRESHOLD
