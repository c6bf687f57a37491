"""Answer Codec - Conversão entre JSON armazenado e valores tipados."""

import json
import logging
import re
from typing import Any

from ..exceptions import (
    InvalidQuestionError,
    MalformedAnswerError,
    MalformedOptionsError,
    QuestionValidationError,
    UnknownQuestionTypeError,
)
from ..models.answers import (
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
from ..models.enums import QuestionType
from ..models.question import Question

logger = logging.getLogger(__name__)

# Índice canônico: "0", "1", "12" (sem sinal, espaços ou zeros a esquerda)
_INDEX_PATTERN = re.compile(r"0|[1-9][0-9]*")


class AnswerCodec:
    """Interpreta e serializa opções e respostas de cada QuestionType.

    As questões chegam da camada de persistência com ``answer_options`` e
    ``correct_answer`` em texto JSON. O codec converte para os valores
    tipados de ``models.answers`` e aplica as regras estruturais de autoria,
    que rodam apenas na criação/edição da questão, nunca durante o jogo.

    Formatos aceitos:
        - Índice: "2" ou 2
        - Lista de índices: "[0, 2]", '["0", "2"]' ou [0, 2]
        - Lista de textos: '["Varsóvia", "1569"]'
        - Pares: '[{"left": "PL", "right": "Varsóvia"}]'
        - Texto livre (SHORT_ANSWER): usado como está, sem decodificar JSON

    Example:
        >>> codec = AnswerCodec()
        >>> codec.parse_answer(QuestionType.MULTIPLE_CHOICE, "[2, 0]")
        IndexSetAnswer(indices=frozenset({0, 2}))
    """

    # =========================================================================
    # OPÇÕES
    # =========================================================================

    def parse_options(
        self,
        question_type: QuestionType | str,
        raw: Any,
        question_id: int | None = None,
    ) -> OptionList:
        """Converte ``answer_options`` bruto para tupla tipada.

        Raises:
            MalformedOptionsError: Se o formato não corresponde ao tipo
            UnknownQuestionTypeError: Se o tipo não existe
        """
        question_type = QuestionType.parse(question_type)
        context = _context(question_type, "answer_options", question_id)

        match question_type:
            case QuestionType.SHORT_ANSWER:
                if raw is None or (isinstance(raw, str) and not raw.strip()):
                    return ()
                data = _decode(raw, MalformedOptionsError, context)
                if data is None or data == []:
                    return ()
                raise MalformedOptionsError(
                    "Questão SHORT_ANSWER não aceita opções", details=context
                )
            case (
                QuestionType.SINGLE_CHOICE
                | QuestionType.MULTIPLE_CHOICE
                | QuestionType.TRUE_FALSE
                | QuestionType.DROPDOWN
                | QuestionType.FILL_BLANKS
                | QuestionType.SORTING
            ):
                data = _decode(raw, MalformedOptionsError, context)
                return tuple(_text_list(data, MalformedOptionsError, context))
            case QuestionType.MATCHING:
                data = _decode(raw, MalformedOptionsError, context)
                return tuple(_pair_list(data, MalformedOptionsError, context))
            case _:
                raise UnknownQuestionTypeError(
                    f"Tipo de questão sem codec: {question_type}", details=context
                )

    def serialize_options(
        self, question_type: QuestionType | str, options: OptionList
    ) -> str | None:
        """Serializa opções para o JSON armazenado (None para SHORT_ANSWER)."""
        question_type = QuestionType.parse(question_type)
        if question_type is QuestionType.SHORT_ANSWER:
            return None
        if question_type is QuestionType.MATCHING:
            return json.dumps([pair.to_dict() for pair in options], ensure_ascii=False)
        return json.dumps(list(options), ensure_ascii=False)

    # =========================================================================
    # RESPOSTAS
    # =========================================================================

    def parse_answer(
        self,
        question_type: QuestionType | str,
        raw: Any,
        question_id: int | None = None,
    ) -> AnswerValue:
        """Converte uma resposta bruta (correta ou enviada) para valor tipado.

        Raises:
            MalformedAnswerError: Se a resposta não pode ser interpretada
            UnknownQuestionTypeError: Se o tipo não existe
        """
        question_type = QuestionType.parse(question_type)
        context = _context(question_type, "correct_answer", question_id)

        if raw is None:
            raise MalformedAnswerError("Resposta ausente", details=context)

        match question_type:
            case QuestionType.SINGLE_CHOICE | QuestionType.DROPDOWN | QuestionType.TRUE_FALSE:
                return IndexAnswer(_index(raw, context))
            case QuestionType.MULTIPLE_CHOICE:
                data = _decode(raw, MalformedAnswerError, context)
                return IndexSetAnswer(frozenset(_index_list(data, context)))
            case QuestionType.SHORT_ANSWER:
                return TextAnswer(_text(raw, MalformedAnswerError, context))
            case QuestionType.FILL_BLANKS:
                data = _decode(raw, MalformedAnswerError, context)
                return TextListAnswer(tuple(_text_list(data, MalformedAnswerError, context)))
            case QuestionType.SORTING:
                data = _decode(raw, MalformedAnswerError, context)
                return OrderAnswer(tuple(_index_list(data, context)))
            case QuestionType.MATCHING:
                data = _decode(raw, MalformedAnswerError, context)
                return PairSetAnswer(frozenset(_pair_list(data, MalformedAnswerError, context)))
            case _:
                raise UnknownQuestionTypeError(
                    f"Tipo de questão sem codec: {question_type}", details=context
                )

    def serialize_answer(self, question_type: QuestionType | str, value: AnswerValue) -> str:
        """Serializa um valor tipado no formato textual canônico."""
        question_type = QuestionType.parse(question_type)
        _require_variant(question_type, value, _context(question_type, "correct_answer"))

        match value:
            case IndexAnswer(index=index):
                return str(index)
            case IndexSetAnswer(indices=indices):
                return json.dumps(sorted(indices))
            case TextAnswer(text=text):
                return text
            case TextListAnswer(texts=texts):
                return json.dumps(list(texts), ensure_ascii=False)
            case OrderAnswer(order=order):
                return json.dumps(list(order))
            case PairSetAnswer(pairs=pairs):
                ordered = sorted(pairs, key=lambda p: (p.left, p.right))
                return json.dumps([p.to_dict() for p in ordered], ensure_ascii=False)

        raise MalformedAnswerError(
            "Valor de resposta desconhecido",
            details={"question_type": question_type.value, "value": repr(value)},
        )

    # =========================================================================
    # REGRAS DE AUTORIA
    # =========================================================================

    def validate_structure(
        self,
        question_type: QuestionType | str,
        options: OptionList,
        answer: AnswerValue,
        question_id: int | None = None,
    ) -> None:
        """Aplica as regras estruturais do tipo sobre valores já tipados.

        Raises:
            MalformedOptionsError: Quantidade de opções inválida
            MalformedAnswerError: Resposta correta incompatível com as opções
        """
        question_type = QuestionType.parse(question_type)
        opt_ctx = _context(question_type, "answer_options", question_id)
        ans_ctx = _context(question_type, "correct_answer", question_id)
        _require_variant(question_type, answer, ans_ctx)

        match question_type:
            case QuestionType.SINGLE_CHOICE | QuestionType.DROPDOWN:
                _min_options(options, 2, opt_ctx)
                _in_range(answer.index, len(options), ans_ctx)
            case QuestionType.TRUE_FALSE:
                if len(options) != 2:
                    raise MalformedOptionsError(
                        "Questão TRUE_FALSE deve ter exatamente 2 opções",
                        details={**opt_ctx, "count": len(options)},
                    )
                if answer.index not in (0, 1):
                    raise MalformedAnswerError(
                        "Resposta TRUE_FALSE deve ser 0 (True) ou 1 (False)",
                        details={**ans_ctx, "index": answer.index},
                    )
            case QuestionType.MULTIPLE_CHOICE:
                _min_options(options, 2, opt_ctx)
                if not answer.indices:
                    raise MalformedAnswerError(
                        "Questão MULTIPLE_CHOICE precisa de ao menos uma resposta correta",
                        details=ans_ctx,
                    )
                for index in sorted(answer.indices):
                    _in_range(index, len(options), ans_ctx)
            case QuestionType.SHORT_ANSWER:
                if not answer.text.strip():
                    raise MalformedAnswerError(
                        "Questão SHORT_ANSWER precisa de resposta correta", details=ans_ctx
                    )
            case QuestionType.FILL_BLANKS:
                _min_options(options, 1, opt_ctx)
                if not answer.texts:
                    raise MalformedAnswerError(
                        "Questão FILL_BLANKS precisa de respostas para as lacunas",
                        details=ans_ctx,
                    )
                if len(answer.texts) != len(options):
                    raise MalformedAnswerError(
                        "Número de lacunas diferente do número de respostas",
                        details={
                            **ans_ctx,
                            "blanks": len(options),
                            "answers": len(answer.texts),
                        },
                    )
            case QuestionType.SORTING:
                _min_options(options, 2, opt_ctx)
                if sorted(answer.order) != list(range(len(options))):
                    raise MalformedAnswerError(
                        "Ordem correta deve ser uma permutação de todos os itens",
                        details={**ans_ctx, "items": len(options), "order": list(answer.order)},
                    )
            case QuestionType.MATCHING:
                _min_options(options, 2, opt_ctx)
                if not answer.pairs:
                    raise MalformedAnswerError(
                        "Questão MATCHING precisa dos pares corretos", details=ans_ctx
                    )
            case _:
                raise UnknownQuestionTypeError(
                    f"Tipo de questão sem regras: {question_type}", details=ans_ctx
                )

    def build_question(
        self,
        *,
        id: int,
        question_type: QuestionType | str,
        text: str,
        correct_answer: Any,
        answer_options: Any = None,
        points: int = 1,
        negative_points: int | None = None,
        active: bool = True,
        explanation: str = "",
        time_limit_seconds: int | None = None,
    ) -> Question:
        """Cria uma Question válida a partir dos dados brutos de autoria.

        Único ponto de entrada para criação/edição: qualquer violação do
        contrato do tipo é rejeitada aqui, antes de chegar ao jogo.

        Raises:
            QuestionValidationError: Subclasse específica do problema
            UnknownQuestionTypeError: Tipo fora do enum
        """
        try:
            question_type = QuestionType.parse(question_type)
        except UnknownQuestionTypeError as e:
            e.details["question_id"] = id
            raise

        if points < 1:
            raise InvalidQuestionError(
                "Pontos da questão devem ser positivos",
                details={**_context(question_type, "points", id), "points": points},
            )
        if negative_points is not None and negative_points < 0:
            raise InvalidQuestionError(
                "Pontos negativos não podem ser menores que zero",
                details={
                    **_context(question_type, "negative_points", id),
                    "negative_points": negative_points,
                },
            )

        options = self.parse_options(question_type, answer_options, question_id=id)
        answer = self.parse_answer(question_type, correct_answer, question_id=id)
        self.validate_structure(question_type, options, answer, question_id=id)

        logger.debug(f"Questão {id} ({question_type.value}) validada")

        return Question(
            id=id,
            question_type=question_type,
            text=text,
            points=points,
            correct_answer=answer,
            options=options,
            negative_points=negative_points,
            active=active,
            explanation=explanation,
            time_limit_seconds=time_limit_seconds,
        )


# =============================================================================
# HELPERS
# =============================================================================


_VARIANTS = {
    QuestionType.SINGLE_CHOICE: IndexAnswer,
    QuestionType.DROPDOWN: IndexAnswer,
    QuestionType.TRUE_FALSE: IndexAnswer,
    QuestionType.MULTIPLE_CHOICE: IndexSetAnswer,
    QuestionType.SHORT_ANSWER: TextAnswer,
    QuestionType.FILL_BLANKS: TextListAnswer,
    QuestionType.SORTING: OrderAnswer,
    QuestionType.MATCHING: PairSetAnswer,
}


def _context(
    question_type: QuestionType, field: str, question_id: int | None = None
) -> dict[str, Any]:
    context: dict[str, Any] = {"question_type": question_type.value, "field": field}
    if question_id is not None:
        context["question_id"] = question_id
    return context


def _require_variant(
    question_type: QuestionType, value: AnswerValue, context: dict[str, Any]
) -> None:
    expected = _VARIANTS[question_type]
    if not isinstance(value, expected):
        raise MalformedAnswerError(
            f"Resposta do tipo {type(value).__name__} não serve para {question_type.value}",
            details={**context, "expected": expected.__name__},
        )


def _decode(
    raw: Any, error: type[QuestionValidationError], context: dict[str, Any]
) -> Any:
    """Decodifica JSON textual; valores já decodificados passam direto."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise error(
            f"JSON inválido: {e.msg}", details={**context, "raw": raw[:100]}
        ) from e
    except (ValueError, RecursionError) as e:
        # Inteiros gigantes ou aninhamento profundo
        raise error(
            "JSON inválido: conteúdo fora dos limites do decodificador",
            details={**context, "raw": raw[:100]},
        ) from e


def _preview(value: Any, limit: int = 50) -> str:
    try:
        return repr(value)[:limit]
    except (ValueError, RecursionError):
        return type(value).__name__


def _text(item: Any, error: type[QuestionValidationError], context: dict[str, Any]) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        try:
            return str(item)
        except ValueError as e:
            raise error("Número fora dos limites", details=context) from e
    raise error("Esperado texto", details={**context, "item": type(item).__name__})


def _text_list(
    data: Any, error: type[QuestionValidationError], context: dict[str, Any]
) -> list[str]:
    if not isinstance(data, list):
        raise error("Esperada uma lista de textos", details=context)
    return [_text(item, error, context) for item in data]


def _pair_list(
    data: Any, error: type[QuestionValidationError], context: dict[str, Any]
) -> list[MatchingPair]:
    if not isinstance(data, list):
        raise error("Esperada uma lista de pares {left, right}", details=context)

    pairs = []
    for item in data:
        if not isinstance(item, dict) or set(item) != {"left", "right"}:
            raise error(
                "Cada par deve ter exatamente os campos left e right",
                details={**context, "item": _preview(item, 80)},
            )
        pairs.append(
            MatchingPair(
                left=_text(item["left"], error, context),
                right=_text(item["right"], error, context),
            )
        )
    return pairs


def _index(raw: Any, context: dict[str, Any]) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        if raw < 0:
            raise MalformedAnswerError("Índice negativo", details={**context, "index": raw})
        return raw
    if isinstance(raw, str) and _INDEX_PATTERN.fullmatch(raw):
        try:
            return int(raw)
        except ValueError as e:
            raise MalformedAnswerError(
                "Índice fora dos limites", details={**context, "digits": len(raw)}
            ) from e
    raise MalformedAnswerError(
        "Índice inválido", details={**context, "raw": _preview(raw)}
    )


def _index_list(data: Any, context: dict[str, Any]) -> list[int]:
    if not isinstance(data, list):
        raise MalformedAnswerError("Esperada uma lista de índices", details=context)
    return [_index(item, context) for item in data]


def _min_options(options: OptionList, minimum: int, context: dict[str, Any]) -> None:
    if len(options) < minimum:
        raise MalformedOptionsError(
            f"Questão {context['question_type']} precisa de ao menos {minimum} opções",
            details={**context, "count": len(options)},
        )


def _in_range(index: int, size: int, context: dict[str, Any]) -> None:
    if not 0 <= index < size:
        raise MalformedAnswerError(
            "Índice da resposta correta fora do intervalo",
            details={**context, "index": index, "options": size},
        )
