"""Configuracao do logging JSON do motor de disponibilidade.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="timetide_slots")
    logger = get_logger(__name__)
    logger.info("team_slots_calculated", extra={"members": 3})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveFieldFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "timetide_slots"

# Clientes HTTP dos providers logam cada request em INFO
NOISY_LOGGERS = ("httpx", "httpcore", "googleapiclient.discovery", "google.auth")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Instala um unico handler JSON no root logger.

    Chamada por `app.bootstrap.initialize_app`; chamadas repetidas
    substituem o handler anterior.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SensitiveFieldFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    # Em DEBUG o trafego dos providers e util; fora dele so avisos
    noisy_level = logging.DEBUG if level_upper == "DEBUG" else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que o calculo seguiu com valor degradado.

    Ex.: membro sem agenda padrao contribui sem slots
    (reason="missing_default_schedule").
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = round(elapsed_ms, 2)
    logger.info("fallback_applied", extra=extra)
