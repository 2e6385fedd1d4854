"""Formatacao de slots para exibicao ao convidado."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from app.domain.availability import CalculatedSlots, TimeSlot

# Nomes fixos em ingles, independentes do locale do processo
_EN_WEEKDAY = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_EN_MONTH = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def format_slot_for_display(
    slot: TimeSlot,
    timezone: str,
    include_date: bool = False,
) -> str:
    """Formata o slot no timezone informado.

    Exemplos: "9:00 AM - 9:30 AM" e "Tue, Mar 10 • 9:00 AM - 9:30 AM".
    """
    start, end = slot.localized(timezone)
    start_label = _format_time(start)
    if include_date:
        start_label = f"{_format_date(start)} • {start_label}"
    return f"{start_label} - {_format_time(end)}"


def get_next_available_slot(calculated_slots: CalculatedSlots) -> TimeSlot | None:
    """Primeiro slot do dia mais cedo com slots; None se nao houver."""
    for date_key in sorted(calculated_slots):
        day_slots = calculated_slots[date_key]
        if day_slots:
            return day_slots[0]
    return None


def group_slots_by_date(
    slots: Iterable[TimeSlot],
    timezone: str = "UTC",
) -> dict[str, list[TimeSlot]]:
    """Agrupa uma lista plana de slots pela data local (YYYY-MM-DD)."""
    grouped: dict[str, list[TimeSlot]] = {}
    for slot in sorted(slots, key=lambda slot: slot.start):
        local_start, _ = slot.localized(timezone)
        grouped.setdefault(local_start.date().isoformat(), []).append(slot)
    return grouped


def _format_time(value: datetime) -> str:
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {meridiem}"


def _format_date(value: datetime) -> str:
    return f"{_EN_WEEKDAY[value.weekday()]}, {_EN_MONTH[value.month - 1]} {value.day}"


__all__ = ["format_slot_for_display", "get_next_available_slot", "group_slots_by_date"]
