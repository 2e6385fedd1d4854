"""Resolucao da janela de reserva a partir do tipo de periodo do evento.

Produz o horizonte (`max_days_in_advance`) e os limites do intervalo que
o chamador entrega ao calculador de slots.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum

from app.domain.availability import ensure_utc

DEFAULT_ROLLING_DAYS = 30
UNLIMITED_DAYS = 90


class PeriodType(StrEnum):
    """Como o evento limita a antecedencia das reservas."""

    ROLLING = "ROLLING"
    RANGE = "RANGE"
    UNLIMITED = "UNLIMITED"


@dataclass(frozen=True, slots=True)
class BookingWindow:
    """Intervalo efetivo de busca de slots."""

    range_start: datetime
    range_end: datetime | None
    max_days_in_advance: int


def resolve_booking_window(
    period_type: PeriodType | str | None,
    *,
    now: datetime | None = None,
    period_days: int | None = None,
    period_start_date: datetime | None = None,
    period_end_date: datetime | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> BookingWindow:
    """Calcula a janela de reserva.

    Tipo desconhecido ou ausente e tratado como ROLLING. `start_date` e
    `end_date` sao os limites pedidos pelo convidado e tem precedencia.
    Em RANGE o inicio e o mais tardio entre o pedido, o inicio do periodo
    e `now`.
    """
    current_time = ensure_utc(now) if now is not None else datetime.now(tz=UTC)
    range_start = ensure_utc(start_date) if start_date is not None else current_time
    requested_end = ensure_utc(end_date) if end_date is not None else None

    try:
        resolved_type = PeriodType(period_type) if period_type else PeriodType.ROLLING
    except ValueError:
        resolved_type = PeriodType.ROLLING

    if resolved_type is PeriodType.RANGE:
        period_end = (
            ensure_utc(period_end_date)
            if period_end_date is not None
            else current_time + timedelta(days=DEFAULT_ROLLING_DAYS)
        )
        remaining = (period_end - current_time) / timedelta(days=1)
        range_start = max(range_start, current_time)
        if period_start_date is not None:
            range_start = max(range_start, ensure_utc(period_start_date))
        return BookingWindow(
            range_start=range_start,
            range_end=requested_end or period_end,
            max_days_in_advance=max(0, math.ceil(remaining)),
        )

    if resolved_type is PeriodType.UNLIMITED:
        return BookingWindow(
            range_start=range_start,
            range_end=requested_end,
            max_days_in_advance=UNLIMITED_DAYS,
        )

    max_days = period_days or DEFAULT_ROLLING_DAYS
    return BookingWindow(
        range_start=range_start,
        range_end=requested_end or current_time + timedelta(days=max_days),
        max_days_in_advance=max_days,
    )


__all__ = ["BookingWindow", "PeriodType", "resolve_booking_window"]
