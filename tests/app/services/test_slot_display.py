"""Testes dos helpers de exibicao de slots."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from app.domain.availability import TimeSlot
from app.services.slot_display import (
    format_slot_for_display,
    get_next_available_slot,
    group_slots_by_date,
)


def _slot(day: int, hour: int, minute: int = 0) -> TimeSlot:
    start = datetime(2026, 3, day, hour, minute, tzinfo=UTC)
    return TimeSlot(start=start, end=start + timedelta(minutes=30))


class TestFormatSlotForDisplay:
    """Testes para format_slot_for_display."""

    def test_time_only(self) -> None:
        assert format_slot_for_display(_slot(10, 9), "UTC") == "9:00 AM - 9:30 AM"

    def test_with_date(self) -> None:
        assert (
            format_slot_for_display(_slot(10, 9), "UTC", include_date=True)
            == "Tue, Mar 10 • 9:00 AM - 9:30 AM"
        )

    def test_converts_to_invitee_timezone(self) -> None:
        """12:00 UTC e 9:00 em Sao Paulo."""
        assert format_slot_for_display(_slot(10, 12), "America/Sao_Paulo") == "9:00 AM - 9:30 AM"

    def test_noon_and_midnight(self) -> None:
        assert format_slot_for_display(_slot(10, 12), "UTC") == "12:00 PM - 12:30 PM"
        assert format_slot_for_display(_slot(10, 0), "UTC") == "12:00 AM - 12:30 AM"

    def test_afternoon_crossing_meridiem(self) -> None:
        assert format_slot_for_display(_slot(10, 11, 45), "UTC") == "11:45 AM - 12:15 PM"


class TestGetNextAvailableSlot:
    """Testes para get_next_available_slot."""

    def test_earliest_day_first_slot(self) -> None:
        slots = {
            "2026-03-12": [_slot(12, 9)],
            "2026-03-11": [_slot(11, 14), _slot(11, 15)],
        }
        assert get_next_available_slot(slots) == _slot(11, 14)

    def test_skips_empty_days(self) -> None:
        slots = {"2026-03-10": [], "2026-03-11": [_slot(11, 9)]}
        assert get_next_available_slot(slots) == _slot(11, 9)

    def test_empty_mapping_returns_none(self) -> None:
        assert get_next_available_slot({}) is None


class TestGroupSlotsByDate:
    """Testes para group_slots_by_date."""

    def test_groups_by_utc_date(self) -> None:
        grouped = group_slots_by_date([_slot(11, 9), _slot(10, 9), _slot(10, 10)])
        assert list(grouped) == ["2026-03-10", "2026-03-11"]
        assert grouped["2026-03-10"] == [_slot(10, 9), _slot(10, 10)]

    def test_groups_by_local_date(self) -> None:
        """01:00 UTC do dia 11 ainda e dia 10 em Sao Paulo."""
        grouped = group_slots_by_date([_slot(11, 1)], timezone="America/Sao_Paulo")
        assert list(grouped) == ["2026-03-10"]
