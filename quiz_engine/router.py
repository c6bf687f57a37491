"""Quiz Router - Endpoints FastAPI sobre o motor de quiz.

Todos os endpoints são stateless: o chamador envia os dados do quiz e dos
resultados em cada request. Persistência, autenticação e sessões ficam na
camada externa.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .config import get_config
from .engine.answer_codec import AnswerCodec
from .engine.answer_validator import AnswerValidator
from .engine.leaderboard import LeaderboardRanker
from .engine.scoring_engine import ScoringEngine
from .engine.shuffler import OptionPermutation, PresentationShuffler
from .engine.statistics import QuizStatisticsCalculator
from .exceptions import MalformedOptionsError, NotFoundError, QuizEngineError
from .models.answers import MatchingPair
from .models.question import PlayerQuestion, Question, Quiz, SubmittedAnswer
from .models.schemas import (
    AnswerValidationResponse,
    PlayerPositionRequest,
    PlayerQuestionSchema,
    QuestionPayload,
    QuizPayload,
    RankingPosition,
    RankingsRequest,
    SessionResult,
    StartGameRequest,
    StartGameResponse,
    StatisticsRequest,
    SubmitAnswersRequest,
    ValidateAnswerRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["Quiz"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_codec() -> AnswerCodec:
    return AnswerCodec()


def get_validator() -> AnswerValidator:
    return AnswerValidator()


def get_shuffler() -> PresentationShuffler:
    """Shuffler com semente da configuração (None = aleatório)."""
    return PresentationShuffler(seed=get_config().shuffle_seed)


def get_scoring_engine() -> ScoringEngine:
    return ScoringEngine()


def get_ranker() -> LeaderboardRanker:
    return LeaderboardRanker(default_limit=get_config().leaderboard_limit)


def get_statistics() -> QuizStatisticsCalculator:
    return QuizStatisticsCalculator()


# =============================================================================
# CONVERSÃO PAYLOAD -> DOMÍNIO
# =============================================================================


def build_question(payload: QuestionPayload, codec: AnswerCodec) -> Question:
    return codec.build_question(
        id=payload.id,
        question_type=payload.question_type,
        text=payload.question_text,
        correct_answer=payload.correct_answer,
        answer_options=payload.answer_options,
        points=payload.points,
        negative_points=payload.negative_points,
        active=payload.active,
        explanation=payload.explanation,
        time_limit_seconds=payload.time_limit_seconds,
    )


def build_quiz(payload: QuizPayload, codec: AnswerCodec) -> Quiz:
    return Quiz(
        id=payload.id,
        title=payload.title,
        questions=tuple(build_question(q, codec) for q in payload.questions),
        random_question_order=payload.random_question_order,
        random_answer_order=payload.random_answer_order,
        negative_points_enabled=payload.negative_points_enabled,
    )


def to_player_schema(question: PlayerQuestion) -> PlayerQuestionSchema:
    options: list[Any] | None = [
        option.to_dict() if isinstance(option, MatchingPair) else option
        for option in question.options
    ]
    return PlayerQuestionSchema(
        id=question.id,
        question_type=question.question_type.value,
        question_text=question.text,
        points=question.points,
        answer_options=options or None,
        time_limit_seconds=question.time_limit_seconds,
        display_name=question.display_name,
        instruction=question.instruction,
    )


# =============================================================================
# AUTORIA
# =============================================================================


@router.post("/questions/validate")
async def validate_question(
    payload: QuestionPayload,
    codec: AnswerCodec = Depends(get_codec),
):
    """Valida os dados de autoria de uma questão.

    Retorna o formato canônico de opções e resposta, ou HTTP 422 com o
    campo problemático.
    """
    question = build_question(payload, codec)
    return {
        "valid": True,
        "question_id": question.id,
        "question_type": question.question_type.value,
        "answer_options": codec.serialize_options(question.question_type, question.options),
        "correct_answer": codec.serialize_answer(
            question.question_type, question.correct_answer
        ),
    }


# =============================================================================
# JOGO
# =============================================================================


@router.post("/start", response_model=StartGameResponse)
async def start_game(
    request: StartGameRequest,
    codec: AnswerCodec = Depends(get_codec),
    shuffler: PresentationShuffler = Depends(get_shuffler),
):
    """Inicia uma sessão: devolve as questões sem gabarito.

    - Embaralha questões/alternativas conforme as configurações do quiz
    - ``option_orders`` deve ser guardado pela camada de sessão e enviado
      de volta no submit
    """
    quiz = build_quiz(request.quiz, codec)
    rng = random.Random(request.seed) if request.seed is not None else None
    presented = shuffler.shuffle(quiz, rng=rng)

    logger.info(f"[Quiz {quiz.id}] Sessão iniciada com {len(presented.questions)} questões")

    return StartGameResponse(
        quiz_id=quiz.id,
        title=quiz.title,
        total_questions=len(presented.questions),
        total_points=quiz.total_points,
        random_question_order=quiz.random_question_order,
        random_answer_order=quiz.random_answer_order,
        negative_points_enabled=quiz.negative_points_enabled,
        questions=[to_player_schema(q) for q in presented.questions],
        option_orders=presented.option_orders(),
    )


@router.post("/answer", response_model=AnswerValidationResponse)
async def validate_answer(
    request: ValidateAnswerRequest,
    codec: AnswerCodec = Depends(get_codec),
    validator: AnswerValidator = Depends(get_validator),
):
    """Valida uma resposta individual."""
    question = build_question(request.question, codec)
    permutation = None
    if request.option_order is not None:
        permutation = PresentationShuffler.permutation_from_order(question, request.option_order)
    return validator.validate(question, request.user_answer, permutation)


@router.post("/submit", response_model=SessionResult)
async def submit_answers(
    request: SubmitAnswersRequest,
    codec: AnswerCodec = Depends(get_codec),
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    """Calcula o resultado final da sessão.

    Uma ``option_order`` inválida faz apenas aquela questão contar como errada.
    """
    quiz = build_quiz(request.quiz, codec)
    by_id = {q.id: q for q in quiz.questions}

    permutations: dict[int, OptionPermutation] = {}
    for question_id, order in request.option_orders.items():
        question = by_id.get(question_id)
        if question is None:
            logger.warning(f"[Quiz {quiz.id}] option_order para questão desconhecida: {question_id}")
            continue
        try:
            permutations[question_id] = PresentationShuffler.permutation_from_order(
                question, order
            )
        except MalformedOptionsError as e:
            logger.warning(
                f"[Quiz {quiz.id}] option_order rejeitado para questão {question_id}: {e.message}"
            )
            permutations[question_id] = OptionPermutation.rejecting(question_id)

    return engine.score(
        quiz,
        [SubmittedAnswer(a.question_id, a.user_answer) for a in request.answers],
        player_id=request.player_id,
        session_id=request.session_id,
        time_taken_seconds=request.time_taken_seconds,
        permutations=permutations,
        completed_at=datetime.now(timezone.utc),
    )


# =============================================================================
# RANKING E ESTATÍSTICAS
# =============================================================================


@router.post("/rankings", response_model=list[SessionResult])
async def get_rankings(
    request: RankingsRequest,
    ranker: LeaderboardRanker = Depends(get_ranker),
):
    """Ranking completo ou top N (quando ``limit`` é informado)."""
    if request.limit is None:
        return ranker.full_order(request.results)
    return ranker.top_n(request.results, request.limit)


@router.post("/rankings/position", response_model=RankingPosition)
async def get_player_position(
    request: PlayerPositionRequest,
    ranker: LeaderboardRanker = Depends(get_ranker),
):
    """Posição do melhor resultado do jogador (HTTP 404 se não jogou)."""
    return ranker.position_of(request.results, request.player_id)


@router.post("/statistics")
async def get_statistics_summary(
    request: StatisticsRequest,
    calculator: QuizStatisticsCalculator = Depends(get_statistics),
):
    """Estatísticas agregadas e taxa de acerto por questão."""
    return {
        "statistics": calculator.summarize(
            request.results, max_score=request.max_score, quiz_id=request.quiz_id
        ),
        "question_difficulty": calculator.question_difficulty(request.results),
    }


# =============================================================================
# ERROS
# =============================================================================


async def quiz_engine_error_handler(request: Request, exc: QuizEngineError) -> JSONResponse:
    """Converte QuizEngineError em resposta HTTP."""
    status_code = 404 if isinstance(exc, NotFoundError) else 422
    logger.warning(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": exc.to_dict()})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuizEngineError, quiz_engine_error_handler)
