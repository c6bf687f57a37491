"""Quiz Schemas - Modelos Pydantic de resultado e de fronteira HTTP."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .enums import Grade
from .grading import calculate_grade, is_passed


class DetailedAnswerResult(BaseModel):
    """Resultado de uma questão, para revisão pós-jogo."""

    model_config = ConfigDict(frozen=True)

    question_id: int = Field(..., description="ID da questão")
    question_text: str = Field(default="", description="Enunciado")
    question_type: str = Field(..., description="Tipo da questão")
    is_correct: bool = Field(..., description="Se a resposta está correta")
    points_earned: int = Field(
        ..., description="Pontos da questão (negativo quando há penalidade)"
    )
    correct_answer: str = Field(..., description="Resposta correta serializada")
    submitted_answer: str | None = Field(
        default=None, description="Resposta enviada (None se não respondida)"
    )
    explanation: str = Field(default="", description="Explicação da resposta correta")


class SessionResult(BaseModel):
    """Resultado final de uma sessão de jogo.

    ``grade`` e ``passed`` são sempre recalculados a partir de
    ``percentage``, nunca lidos de um valor armazenado.
    """

    model_config = ConfigDict(frozen=True)

    quiz_id: int | None = Field(default=None, description="ID do quiz")
    player_id: int | str | None = Field(default=None, description="ID do jogador")
    session_id: str | None = Field(default=None, description="ID da sessão")
    score: int = Field(..., ge=0, description="Pontuação obtida (mínimo 0)")
    max_score: int = Field(..., ge=0, description="Pontuação máxima")
    correct_answers: int = Field(default=0, ge=0, description="Respostas corretas")
    wrong_answers: int = Field(default=0, ge=0, description="Respostas erradas")
    total_questions: int = Field(default=0, ge=0, description="Total de questões")
    time_taken_seconds: int | None = Field(
        default=None, ge=0, description="Tempo gasto na sessão"
    )
    percentage: float | None = Field(
        default=None, description="Percentual de aproveitamento"
    )
    completed_at: datetime | None = Field(default=None, description="Fim da sessão")
    detailed_answers: list[DetailedAnswerResult] = Field(
        default_factory=list, description="Resultado por questão"
    )

    @computed_field
    @property
    def grade(self) -> Grade:
        return calculate_grade(self.percentage)

    @computed_field
    @property
    def passed(self) -> bool:
        return is_passed(self.percentage)


class RankingPosition(BaseModel):
    """Posição do melhor resultado de um jogador no ranking do quiz."""

    player_id: int | str
    quiz_id: int | None = None
    position: int = Field(..., ge=1, description="Posição 1-based")
    total_players: int = Field(..., description="Total de resultados ranqueados")
    score: int
    max_score: int
    percentage: float | None = None
    time_taken_seconds: int | None = None
    completed_at: datetime | None = None


class QuestionDifficulty(BaseModel):
    """Taxa de acerto de uma questão entre os resultados."""

    question_id: int
    attempts: int
    correct: int
    correct_rate: float = Field(..., description="Percentual de acertos (0-100)")


class QuizStatistics(BaseModel):
    """Estatísticas agregadas dos resultados de um quiz."""

    quiz_id: int | None = None
    total_attempts: int = 0
    passed_attempts: int = 0
    failed_attempts: int = 0
    pass_rate: float = 0.0
    average_score: float = 0.0
    highest_score: int = 0
    lowest_score: int = 0
    max_score: int = 0
    average_time_seconds: float | None = None


class AnswerValidationResponse(BaseModel):
    """Resposta da validação de uma resposta individual."""

    question_id: int
    is_correct: bool
    feedback: str


# =============================================================================
# FRONTEIRA HTTP
# =============================================================================


class QuestionPayload(BaseModel):
    """Questão em formato bruto (como armazenada pela camada de CRUD)."""

    id: int = Field(..., description="ID da questão")
    question_type: str = Field(..., description="Um dos valores de QuestionType")
    question_text: str = Field(..., min_length=1, description="Enunciado")
    points: int = Field(default=1, description="Pontos por acerto")
    negative_points: int | None = Field(default=None, description="Penalidade por erro")
    answer_options: Any = Field(default=None, description="Opções (JSON ou lista)")
    correct_answer: Any = Field(..., description="Resposta correta (JSON ou valor)")
    active: bool = True
    explanation: str = ""
    time_limit_seconds: int | None = None


class QuizPayload(BaseModel):
    """Quiz com configurações e questões em formato bruto."""

    id: int | None = None
    title: str = ""
    random_question_order: bool = False
    random_answer_order: bool = False
    negative_points_enabled: bool = False
    questions: list[QuestionPayload] = Field(default_factory=list)


class PlayerQuestionSchema(BaseModel):
    """Questão enviada ao jogador (sem gabarito)."""

    id: int
    question_type: str
    question_text: str
    points: int
    answer_options: list[Any] | None = None
    time_limit_seconds: int | None = None
    display_name: str
    instruction: str


class StartGameRequest(BaseModel):
    quiz: QuizPayload
    seed: int | None = Field(default=None, description="Semente para embaralhamento")


class StartGameResponse(BaseModel):
    """Questões apresentadas ao jogador.

    ``option_orders`` (posição apresentada -> índice original) deve ser
    devolvido no submit para remapear as respostas.
    """

    quiz_id: int | None
    title: str
    total_questions: int
    total_points: int
    random_question_order: bool
    random_answer_order: bool
    negative_points_enabled: bool
    questions: list[PlayerQuestionSchema]
    option_orders: dict[int, list[int]] = Field(default_factory=dict)


class AnswerSubmission(BaseModel):
    question_id: int
    user_answer: Any = None


class SubmitAnswersRequest(BaseModel):
    quiz: QuizPayload
    answers: list[AnswerSubmission] = Field(default_factory=list)
    player_id: int | str | None = None
    session_id: str | None = None
    time_taken_seconds: int | None = Field(default=None, ge=0)
    option_orders: dict[int, list[int]] = Field(default_factory=dict)


class ValidateAnswerRequest(BaseModel):
    question: QuestionPayload
    user_answer: Any = None
    option_order: list[int] | None = None


class RankingsRequest(BaseModel):
    results: list[SessionResult] = Field(default_factory=list)
    limit: int | None = None


class PlayerPositionRequest(BaseModel):
    results: list[SessionResult] = Field(default_factory=list)
    player_id: int | str


class StatisticsRequest(BaseModel):
    quiz_id: int | None = None
    max_score: int = Field(default=0, ge=0)
    results: list[SessionResult] = Field(default_factory=list)
