"""Quiz Engine - Validação de respostas, pontuação e ranking de quizzes.

Arquitetura:
- models/: Enums, valores tipados de resposta, Question/Quiz, Schemas Pydantic
- engine/: AnswerCodec, AnswerValidator, PresentationShuffler, ScoringEngine,
  LeaderboardRanker, QuizStatisticsCalculator
- config.py: Configuração via variáveis de ambiente
- router.py: FastAPI endpoints (stateless)
"""

from .engine import (
    AnswerCodec,
    AnswerValidator,
    LeaderboardRanker,
    OptionPermutation,
    PresentationShuffler,
    PresentedQuiz,
    QuizStatisticsCalculator,
    ScoringEngine,
)
from .exceptions import (
    InvalidQuestionError,
    MalformedAnswerError,
    MalformedOptionsError,
    NotFoundError,
    QuestionValidationError,
    QuizEngineError,
    UnknownQuestionTypeError,
)
from .models import (
    DetailedAnswerResult,
    Grade,
    PlayerQuestion,
    Question,
    QuestionType,
    Quiz,
    RankingPosition,
    SessionResult,
    SubmittedAnswer,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "QuestionType",
    "Grade",
    "Question",
    "PlayerQuestion",
    "Quiz",
    "SubmittedAnswer",
    "DetailedAnswerResult",
    "SessionResult",
    "RankingPosition",
    # Engines
    "AnswerCodec",
    "AnswerValidator",
    "PresentationShuffler",
    "OptionPermutation",
    "PresentedQuiz",
    "ScoringEngine",
    "LeaderboardRanker",
    "QuizStatisticsCalculator",
    # Errors
    "QuizEngineError",
    "QuestionValidationError",
    "MalformedOptionsError",
    "MalformedAnswerError",
    "InvalidQuestionError",
    "UnknownQuestionTypeError",
    "NotFoundError",
]
