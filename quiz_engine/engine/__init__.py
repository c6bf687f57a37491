"""Quiz Engines - Lógica de negócios."""

from .answer_codec import AnswerCodec
from .answer_validator import AnswerValidator
from .leaderboard import LeaderboardRanker
from .scoring_engine import ScoringEngine
from .shuffler import OptionPermutation, PresentationShuffler, PresentedQuiz
from .statistics import QuizStatisticsCalculator

__all__ = [
    "AnswerCodec",
    "AnswerValidator",
    "PresentationShuffler",
    "OptionPermutation",
    "PresentedQuiz",
    "ScoringEngine",
    "LeaderboardRanker",
    "QuizStatisticsCalculator",
]
