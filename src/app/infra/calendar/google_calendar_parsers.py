"""Helpers internos de parsing para respostas da Google Calendar API."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.domain.availability import BusyTime, ensure_utc

if TYPE_CHECKING:
    from googleapiclient.errors import HttpError


def extract_busy_times(response: dict[str, Any], calendar_id: str) -> list[BusyTime]:
    """Extrai os intervalos ocupados de uma resposta de `freebusy.query`.

    Entradas sem inicio/fim validos ou com fim <= inicio sao descartadas.
    """
    calendars = response.get("calendars") if isinstance(response, dict) else {}
    calendar_data = calendars.get(calendar_id, {}) if isinstance(calendars, dict) else {}
    busy = calendar_data.get("busy", []) if isinstance(calendar_data, dict) else []
    return sorted(
        (
            BusyTime(start=start, end=end)
            for item in busy if isinstance(item, dict)
            if (start := parse_google_datetime(item.get("start")))
            if (end := parse_google_datetime(item.get("end")))
            if end > start
        ),
        key=lambda busy_time: busy_time.start,
    )


def parse_google_datetime(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return ensure_utc(parsed)


def http_status(exc: HttpError) -> int | None:
    response = getattr(exc, "resp", None)
    return int(response.status) if response and getattr(response, "status", None) else None
