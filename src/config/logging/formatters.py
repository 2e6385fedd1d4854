"""Formatters de logging estruturado (JSON)."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

# Instantes de slots e busy times sao UTC; o timestamp do log tambem
TIMESTAMP_FIELD = "timestamp"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados e timestamp ISO em UTC.

    Exemplo de output:
        {
            "level": "WARNING",
            "logger": "app.services.busy_time_aggregator",
            "message": "busy_time_provider_failed",
            "correlation_id": "abc-123",
            "service": "timetide_slots",
            "timestamp": "2026-03-10T08:00:00.123000+00:00",
            "provider": "outlook"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        timestamp=TIMESTAMP_FIELD,
    )
