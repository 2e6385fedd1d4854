"""Primitivas de intervalo usadas pelo calculo de slots.

Busy times chegam de reservas e de calendarios externos fora de ordem e
sobrepostos; aqui ficam a normalizacao e o teste de conflito.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from typing import Any

from app.domain.availability import BusyTime, TimeSlot, ensure_utc


def merge_busy_times(busy_times: Iterable[BusyTime]) -> list[BusyTime]:
    """Ordena por inicio e funde intervalos sobrepostos ou encostados.

    Intervalos que apenas se tocam (`start == end` anterior) tambem sao
    fundidos. A entrada nao e modificada.
    """
    ordered = sorted(busy_times, key=lambda busy: busy.start)
    if not ordered:
        return []

    merged: list[BusyTime] = [ordered[0]]
    for current in ordered[1:]:
        last = merged[-1]
        if current.start <= last.end:
            if current.end > last.end:
                merged[-1] = BusyTime(start=last.start, end=current.end)
        else:
            merged.append(current)
    return merged


def is_slot_available(
    slot: TimeSlot,
    busy_times: Iterable[BusyTime],
    buffer_before: int = 0,
    buffer_after: int = 0,
) -> bool:
    """Indica se o slot, expandido pelos buffers, nao cruza nenhum busy time.

    Sobreposicao estrita: slot e busy que apenas se encostam nao conflitam.
    """
    window_start = slot.start - timedelta(minutes=buffer_before)
    window_end = slot.end + timedelta(minutes=buffer_after)
    return not any(
        window_start < busy.end and window_end > busy.start for busy in busy_times
    )


def parse_busy_times(raw: Iterable[BusyTime | Mapping[str, Any] | Any]) -> list[BusyTime]:
    """Converte entradas cruas de providers em BusyTime.

    Aceita BusyTime (repassado sem alteracao), mappings ou objetos com
    `start`/`end` como datetime ou string ISO-8601 (sufixo `Z` aceito).
    """
    parsed: list[BusyTime] = []
    for entry in raw:
        if isinstance(entry, BusyTime):
            parsed.append(entry)
            continue
        if isinstance(entry, Mapping):
            start, end = entry["start"], entry["end"]
        else:
            start, end = entry.start, entry.end
        parsed.append(BusyTime(start=_to_instant(start), end=_to_instant(end)))
    return parsed


def _to_instant(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


__all__ = ["is_slot_available", "merge_busy_times", "parse_busy_times"]
