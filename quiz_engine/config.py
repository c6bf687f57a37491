# =============================================================================
# CONFIGURAÇÃO DO QUIZ ENGINE
# =============================================================================
# Valores lidos de variáveis de ambiente (e de um .env, via python-dotenv)
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass
class QuizEngineConfig:
    """Configuração do motor de quiz.

    Attributes:
        leaderboard_limit: Tamanho padrão do top N do ranking
        shuffle_seed: Semente fixa para embaralhamento (None = aleatório)
        log_level: Nível de log do pacote quiz_engine
    """

    leaderboard_limit: int = 10
    shuffle_seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "QuizEngineConfig":
        """Cria configuração a partir das variáveis de ambiente.

        Valores numéricos inválidos caem no padrão.
        """
        limit = _int_env("QUIZ_LEADERBOARD_LIMIT", 10)
        if limit is None or limit <= 0:
            limit = 10

        log_level = os.getenv("QUIZ_LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = "INFO"

        return cls(
            leaderboard_limit=limit,
            shuffle_seed=_int_env("QUIZ_SHUFFLE_SEED", None),
            log_level=log_level,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "leaderboard": {"limit": self.leaderboard_limit},
            "shuffle": {"seed": self.shuffle_seed},
            "logging": {"level": self.log_level},
        }


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Valor inválido para {name}: {raw!r}, usando {default}")
        return default


_config: QuizEngineConfig | None = None


def get_config() -> QuizEngineConfig:
    """Retorna a configuração global (criada na primeira chamada)."""
    global _config
    if _config is None:
        _config = QuizEngineConfig.from_env()
    return _config


def reload_config() -> QuizEngineConfig:
    """Recarrega .env e variáveis de ambiente."""
    global _config
    load_dotenv(override=True)
    _config = QuizEngineConfig.from_env()
    return _config


def configure_logging(config: QuizEngineConfig | None = None) -> logging.Logger:
    """Configura o logging do pacote e retorna o logger raiz dele."""
    config = config or get_config()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    package_logger = logging.getLogger("quiz_engine")
    package_logger.setLevel(config.log_level)
    return package_logger
