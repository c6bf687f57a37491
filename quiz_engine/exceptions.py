"""Exceções do motor de quiz.

Todas carregam uma mensagem legível e um dict ``details`` com o contexto
necessário para corrigir o dado de autoria (question_id, tipo, campo).
"""

from typing import Any


class QuizEngineError(Exception):
    """Erro base do motor de quiz."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serializa o erro para respostas HTTP e logs."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} ({self.details})"


class QuestionValidationError(QuizEngineError):
    """Dados de autoria da questão violam o contrato estrutural do tipo."""


class MalformedOptionsError(QuestionValidationError):
    """answer_options não tem o formato exigido pelo tipo da questão."""


class MalformedAnswerError(QuestionValidationError):
    """correct_answer (ou resposta enviada) não pode ser interpretada."""


class InvalidQuestionError(QuestionValidationError):
    """Campos numéricos da questão fora da faixa (points, negative_points)."""


class UnknownQuestionTypeError(QuizEngineError):
    """Tipo de questão fora do conjunto fechado de QuestionType."""


class NotFoundError(QuizEngineError):
    """Recurso solicitado não existe (ex: jogador sem resultado no quiz)."""
