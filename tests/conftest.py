# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Questões de exemplo para cada tipo, quizzes, resultados e cliente HTTP
# =============================================================================

from datetime import datetime, timedelta, timezone

import pytest


# =============================================================================
# FIXTURES DO CODEC / QUESTÕES
# =============================================================================


@pytest.fixture
def codec():
    """AnswerCodec padrão."""
    from quiz_engine.engine.answer_codec import AnswerCodec

    return AnswerCodec()


@pytest.fixture
def make_question(codec):
    """Factory de questões válidas via AnswerCodec.build_question."""

    def _make(question_type, correct_answer, answer_options=None, id=1, points=10, **kwargs):
        return codec.build_question(
            id=id,
            question_type=question_type,
            text=kwargs.pop("text", f"Questão {id}"),
            correct_answer=correct_answer,
            answer_options=answer_options,
            points=points,
            **kwargs,
        )

    return _make


@pytest.fixture
def single_choice_question(make_question):
    """Qual é a capital da Polônia? (correta: Varsóvia, índice 0)."""
    return make_question(
        "SINGLE_CHOICE",
        "0",
        '["Varsóvia", "Cracóvia", "Gdansk"]',
        id=1,
        explanation="Varsóvia é a capital desde 1596.",
    )


@pytest.fixture
def multiple_choice_question(make_question):
    """Quais são linguagens de programação? (corretas: Java e Python)."""
    return make_question(
        "MULTIPLE_CHOICE", "[0, 2]", '["Java", "HTML", "Python", "CSS"]', id=2
    )


@pytest.fixture
def true_false_question(make_question):
    return make_question("TRUE_FALSE", "0", '["True", "False"]', id=3)


@pytest.fixture
def short_answer_question(make_question):
    return make_question("SHORT_ANSWER", "Paris", None, id=4)


@pytest.fixture
def dropdown_question(make_question):
    return make_question("DROPDOWN", "2", '["Brasil", "Chile", "Peru"]', id=5)


@pytest.fixture
def fill_blanks_question(make_question):
    """Java foi criada por _____ em _____."""
    return make_question(
        "FILL_BLANKS", '["James Gosling", "1995"]', '["autor", "ano"]', id=6
    )


@pytest.fixture
def sorting_question(make_question):
    """Itens fora de ordem; ordem correta em índices originais."""
    return make_question(
        "SORTING",
        "[1, 3, 2, 0]",
        '["Era Digital", "Idade Média", "Revolução Industrial", "Renascimento"]',
        id=7,
    )


@pytest.fixture
def matching_question(make_question):
    pairs = (
        '[{"left": "Polônia", "right": "Varsóvia"}, '
        '{"left": "França", "right": "Paris"}, '
        '{"left": "Japão", "right": "Tóquio"}]'
    )
    return make_question("MATCHING", pairs, pairs, id=8)


@pytest.fixture
def all_questions(
    single_choice_question,
    multiple_choice_question,
    true_false_question,
    short_answer_question,
    dropdown_question,
    fill_blanks_question,
    sorting_question,
    matching_question,
):
    """Uma questão de cada tipo (ids 1-8, 10 pontos cada)."""
    return [
        single_choice_question,
        multiple_choice_question,
        true_false_question,
        short_answer_question,
        dropdown_question,
        fill_blanks_question,
        sorting_question,
        matching_question,
    ]


@pytest.fixture
def correct_submissions():
    """Respostas corretas para all_questions, sem embaralhamento."""
    from quiz_engine.models.question import SubmittedAnswer

    return [
        SubmittedAnswer(1, "0"),
        SubmittedAnswer(2, "[2, 0]"),
        SubmittedAnswer(3, "0"),
        SubmittedAnswer(4, "  paris "),
        SubmittedAnswer(5, "2"),
        SubmittedAnswer(6, '["james gosling", " 1995"]'),
        SubmittedAnswer(7, "[1, 3, 2, 0]"),
        SubmittedAnswer(
            8,
            [
                {"left": "Japão", "right": "Tóquio"},
                {"left": "Polônia", "right": "Varsóvia"},
                {"left": "França", "right": "Paris"},
            ],
        ),
    ]


@pytest.fixture
def sample_quiz(all_questions):
    """Quiz com os 8 tipos de questão, sem embaralhamento."""
    from quiz_engine.models.question import Quiz

    return Quiz(id=1, title="Geografia e História", questions=tuple(all_questions))


# =============================================================================
# FIXTURES DE RESULTADOS
# =============================================================================


@pytest.fixture
def base_time():
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_result(base_time):
    """Factory de SessionResult para testes de ranking."""
    from quiz_engine.models.schemas import SessionResult

    def _make(
        score,
        time_taken_seconds=None,
        player_id=None,
        completed_offset=None,
        max_score=100,
        quiz_id=1,
        **kwargs,
    ):
        completed_at = None
        if completed_offset is not None:
            completed_at = base_time + timedelta(seconds=completed_offset)
        return SessionResult(
            quiz_id=quiz_id,
            player_id=player_id,
            score=score,
            max_score=max_score,
            time_taken_seconds=time_taken_seconds,
            percentage=score / max_score * 100 if max_score else 0.0,
            completed_at=completed_at,
            **kwargs,
        )

    return _make


# =============================================================================
# FIXTURES DE CONFIGURAÇÃO
# =============================================================================


@pytest.fixture
def clean_config():
    """Reseta o singleton de configuração entre testes."""
    import quiz_engine.config as config_module

    config_module._config = None
    yield
    config_module._config = None


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client(clean_config):
    """Cliente de teste FastAPI."""
    from fastapi.testclient import TestClient

    from server import create_app

    return TestClient(create_app())


@pytest.fixture
def quiz_payload():
    """Quiz em formato bruto, como enviado pela camada de CRUD."""
    return {
        "id": 10,
        "title": "Capitais",
        "random_question_order": False,
        "random_answer_order": False,
        "negative_points_enabled": True,
        "questions": [
            {
                "id": 1,
                "question_type": "SINGLE_CHOICE",
                "question_text": "Capital da Polônia?",
                "points": 50,
                "negative_points": 10,
                "answer_options": '["Varsóvia", "Cracóvia", "Gdansk"]',
                "correct_answer": "0",
            },
            {
                "id": 2,
                "question_type": "MULTIPLE_CHOICE",
                "question_text": "Quais são capitais europeias?",
                "points": 50,
                "negative_points": 20,
                "answer_options": ["Paris", "Tóquio", "Roma", "Lima"],
                "correct_answer": "[0, 2]",
            },
        ],
    }


# =============================================================================
# FIXTURES DE LOGGING
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs para verificação em testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    caplog.set_level(logging.DEBUG, logger="quiz_engine")
    return caplog
