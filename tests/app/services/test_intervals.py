"""Testes das primitivas de intervalo."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from app.domain.availability import BusyTime, TimeSlot
from app.services.intervals import is_slot_available, merge_busy_times, parse_busy_times


def _busy(start_hour: int, start_minute: int, end_hour: int, end_minute: int) -> BusyTime:
    return BusyTime(
        start=datetime(2026, 3, 10, start_hour, start_minute, tzinfo=UTC),
        end=datetime(2026, 3, 10, end_hour, end_minute, tzinfo=UTC),
    )


def _slot(hour: int, minute: int, duration: int = 30) -> TimeSlot:
    start = datetime(2026, 3, 10, hour, minute, tzinfo=UTC)
    return TimeSlot(start=start, end=start + timedelta(minutes=duration))


class TestMergeBusyTimes:
    """Testes para merge_busy_times."""

    def test_empty_input_returns_empty_list(self) -> None:
        assert merge_busy_times([]) == []

    def test_overlapping_and_disjoint(self) -> None:
        """[9-10],[9:30-11],[13-14] -> [9-11],[13-14]."""
        merged = merge_busy_times([_busy(13, 0, 14, 0), _busy(9, 30, 11, 0), _busy(9, 0, 10, 0)])
        assert merged == [_busy(9, 0, 11, 0), _busy(13, 0, 14, 0)]

    def test_touching_intervals_are_merged(self) -> None:
        merged = merge_busy_times([_busy(9, 0, 10, 0), _busy(10, 0, 11, 0)])
        assert merged == [_busy(9, 0, 11, 0)]

    def test_contained_interval_is_absorbed(self) -> None:
        merged = merge_busy_times([_busy(9, 0, 12, 0), _busy(10, 0, 11, 0)])
        assert merged == [_busy(9, 0, 12, 0)]

    def test_input_is_not_modified(self) -> None:
        original = [_busy(10, 0, 11, 0), _busy(9, 0, 10, 30)]
        snapshot = list(original)
        merge_busy_times(original)
        assert original == snapshot

    def test_result_has_no_overlap_or_touch(self) -> None:
        busy = [_busy(h, m, h + 1, m) for h in range(8, 16, 2) for m in (0, 15, 45)]
        merged = merge_busy_times(busy)
        for previous, current in zip(merged, merged[1:], strict=False):
            assert previous.end < current.start


class TestIsSlotAvailable:
    """Testes para is_slot_available."""

    def test_slot_touching_busy_is_free(self) -> None:
        assert is_slot_available(_slot(10, 0), [_busy(9, 0, 10, 0)]) is True

    def test_overlapping_busy_blocks(self) -> None:
        assert is_slot_available(_slot(10, 0), [_busy(10, 15, 10, 45)]) is False

    def test_buffer_after_blocks_adjacent_busy(self) -> None:
        """Slot 10:00-10:30 com buffer_after 15 conflita com busy 10:30-11:00."""
        busy = [_busy(10, 30, 11, 0)]
        assert is_slot_available(_slot(10, 0), busy) is True
        assert is_slot_available(_slot(10, 0), busy, buffer_after=15) is False

    def test_buffer_before_blocks_previous_busy(self) -> None:
        busy = [_busy(9, 0, 10, 0)]
        assert is_slot_available(_slot(10, 0), busy, buffer_before=10) is False

    def test_no_busy_times(self) -> None:
        assert is_slot_available(_slot(10, 0), []) is True


class TestParseBusyTimes:
    """Testes para parse_busy_times."""

    def test_parses_iso_strings_with_z_suffix(self) -> None:
        parsed = parse_busy_times([{"start": "2026-03-10T10:00:00Z", "end": "2026-03-10T11:00:00Z"}])
        assert parsed == [_busy(10, 0, 11, 0)]

    def test_converts_offsets_to_utc(self) -> None:
        offset = timezone(timedelta(hours=-3))
        parsed = parse_busy_times(
            [
                {
                    "start": datetime(2026, 3, 10, 7, 0, tzinfo=offset),
                    "end": datetime(2026, 3, 10, 8, 0, tzinfo=offset),
                }
            ]
        )
        assert parsed == [_busy(10, 0, 11, 0)]

    def test_busy_time_instances_pass_through(self) -> None:
        busy = _busy(9, 0, 9, 30)
        assert parse_busy_times([busy])[0] is busy
