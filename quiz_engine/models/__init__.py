"""Quiz Models - Enums, respostas tipadas, questões e schemas."""

from .answers import (
    AnswerValue,
    IndexAnswer,
    IndexSetAnswer,
    MatchingPair,
    OptionList,
    OrderAnswer,
    PairSetAnswer,
    TextAnswer,
    TextListAnswer,
)
from .enums import Grade, QuestionType
from .grading import calculate_grade, calculate_percentage, is_passed
from .question import PlayerQuestion, Question, Quiz, SubmittedAnswer
from .schemas import (
    AnswerValidationResponse,
    DetailedAnswerResult,
    QuestionDifficulty,
    QuizStatistics,
    RankingPosition,
    SessionResult,
)

__all__ = [
    # Enums
    "QuestionType",
    "Grade",
    # Respostas
    "AnswerValue",
    "OptionList",
    "IndexAnswer",
    "IndexSetAnswer",
    "TextAnswer",
    "TextListAnswer",
    "OrderAnswer",
    "PairSetAnswer",
    "MatchingPair",
    # Questões
    "Question",
    "PlayerQuestion",
    "Quiz",
    "SubmittedAnswer",
    # Schemas
    "DetailedAnswerResult",
    "SessionResult",
    "RankingPosition",
    "QuizStatistics",
    "QuestionDifficulty",
    "AnswerValidationResponse",
    # Notas
    "calculate_percentage",
    "calculate_grade",
    "is_passed",
]
