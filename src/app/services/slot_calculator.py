"""Calculo de slots reservaveis para um unico dono de agenda.

Percorre o intervalo pedido dia a dia no timezone do dono, resolve janelas
recorrentes e overrides, aplica antecedencia minima, limite diario de
reservas e remove candidatos em conflito (com buffers) com busy times.

Limites de seguranca (SchedulingSettings):
- duracao e intervalo abaixo do minimo sao elevados ao minimo;
- candidatos brutos por dia acima do teto sao descartados, mantendo os
  mais cedo. E uma troca deliberada entre robustez e completude para
  configuracoes patologicas, nao um erro silencioso de corretude.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, time, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from app.domain.availability import (
    AvailabilityWindow,
    CalculatedSlots,
    SlotCalculatorOptions,
    TimeSlot,
    ensure_utc,
    parse_hhmm,
)
from app.services.intervals import is_slot_available, merge_busy_times
from config.settings import get_scheduling_settings

if TYPE_CHECKING:
    from app.domain.availability import DateOverride
    from config.settings import SchedulingSettings

logger = logging.getLogger(__name__)

_COMPONENT = "slot_calculator"


class SlotCalculator:
    """Calculador puro (sem IO) de slots para um dono de agenda."""

    __slots__ = (
        "_buffer_after",
        "_buffer_before",
        "_busy_times",
        "_duration",
        "_limits",
        "_max_days",
        "_minimum_notice",
        "_options",
        "_overrides",
        "_step",
        "_windows_by_weekday",
        "_zone",
    )

    def __init__(
        self,
        options: SlotCalculatorOptions,
        *,
        limits: SchedulingSettings | None = None,
    ) -> None:
        self._limits = limits or get_scheduling_settings()
        self._options = options
        self._duration = max(
            self._limits.min_slot_duration_min,
            options.duration or self._limits.default_duration_min,
        )
        self._step = max(
            self._limits.min_slot_interval_min,
            options.slot_interval or self._duration,
        )
        max_days = options.max_days_in_advance
        if max_days is None:
            max_days = self._limits.default_max_days_in_advance
        self._max_days = min(self._limits.max_days_to_process, max(0, max_days))
        self._buffer_before = max(0, options.buffer_before)
        self._buffer_after = max(0, options.buffer_after)
        self._minimum_notice = max(0, options.minimum_notice)
        self._zone = ZoneInfo(options.host_timezone)
        self._busy_times = merge_busy_times(options.busy_times)
        self._overrides = _index_overrides(options.date_overrides)
        self._windows_by_weekday = _index_windows(options.availability)

    @property
    def options(self) -> SlotCalculatorOptions:
        return self._options

    @property
    def duration(self) -> int:
        """Duracao efetiva (ja elevada ao minimo) em minutos."""
        return self._duration

    @property
    def slot_interval(self) -> int:
        """Passo efetivo entre inicios de slots em minutos."""
        return self._step

    @property
    def max_days_in_advance(self) -> int:
        return self._max_days

    def calculate(
        self,
        range_start: datetime | date | None = None,
        *,
        now: datetime | None = None,
    ) -> CalculatedSlots:
        """Calcula slots de `range_start` (padrao: agora) ate o horizonte.

        Dias sem slots sao omitidos; as chaves seguem a ordem do calendario.
        """
        current_time = _resolve_now(now)
        first_day = self._to_local_date(range_start if range_start is not None else current_time)
        last_day = first_day + timedelta(days=self._max_days)

        slots: CalculatedSlots = {}
        day = first_day
        days_processed = 0
        while day <= last_day and days_processed < self._limits.max_days_to_process:
            day_slots = self.get_slots_for_day(day, current_time)
            if day_slots:
                slots[day.isoformat()] = day_slots
            day += timedelta(days=1)
            days_processed += 1

        logger.debug(
            "slots_calculated",
            extra={
                "component": _COMPONENT,
                "days_processed": days_processed,
                "days_with_slots": len(slots),
            },
        )
        return slots

    def get_slots_for_day(
        self,
        day: date | datetime,
        now: datetime | None = None,
    ) -> list[TimeSlot]:
        """Retorna os slots livres de um dia, em ordem cronologica.

        `day` pode ser uma data do calendario do dono ou um instante, que e
        convertido para a data local do dono. Um `day` naive ja e uma data de
        calendario local (so a parte de data importa).

        `now` e um instante: quando naive, e interpretado como UTC, igual aos
        demais instantes do modelo.
        """
        local_day = self._to_local_date(day)
        date_key = local_day.isoformat()

        cap = self._options.max_bookings_per_day
        if cap is not None and self._options.existing_bookings_per_day.get(date_key, 0) >= cap:
            return []

        windows = self._resolve_windows(local_day)
        if not windows:
            return []

        earliest_start = _resolve_now(now) + timedelta(minutes=self._minimum_notice)
        return [
            slot
            for slot in self._generate_candidates(local_day, windows)
            if slot.start >= earliest_start
            and is_slot_available(
                slot,
                self._busy_times,
                self._buffer_before,
                self._buffer_after,
            )
        ]

    def _resolve_windows(self, local_day: date) -> list[tuple[str, str]]:
        override = self._overrides.get(local_day)
        if override is not None:
            if not override.is_working:
                return []
            # Validado no modelo: override de dia trabalhado sempre traz horarios
            return [(override.start_time or "", override.end_time or "")]
        weekday = local_day.isoweekday() % 7
        return [
            (window.start_time, window.end_time)
            for window in self._windows_by_weekday.get(weekday, [])
        ]

    def _generate_candidates(
        self,
        local_day: date,
        windows: list[tuple[str, str]],
    ) -> list[TimeSlot]:
        max_slots = self._limits.max_slots_per_day
        duration = timedelta(minutes=self._duration)
        step = timedelta(minutes=self._step)

        by_start: dict[datetime, TimeSlot] = {}
        truncated = False
        for start_time, end_time in windows:
            slot_start = self._local_instant(local_day, start_time)
            window_end = self._local_instant(local_day, end_time)
            produced = 0
            while slot_start + duration <= window_end:
                if produced >= max_slots:
                    truncated = True
                    break
                by_start.setdefault(slot_start, TimeSlot(start=slot_start, end=slot_start + duration))
                slot_start += step
                produced += 1

        candidates = [by_start[start] for start in sorted(by_start)]
        if len(candidates) > max_slots:
            truncated = True
            candidates = candidates[:max_slots]
        if truncated:
            logger.warning(
                "slot_candidates_truncated",
                extra={
                    "component": _COMPONENT,
                    "date": local_day.isoformat(),
                    "max_slots_per_day": max_slots,
                },
            )
        return candidates

    def _local_instant(self, local_day: date, hhmm: str) -> datetime:
        hour, minute = parse_hhmm(hhmm)
        if hour == 24:
            local_day, hour = local_day + timedelta(days=1), 0
        wall_clock = datetime.combine(local_day, time(hour, minute), tzinfo=self._zone)
        return wall_clock.astimezone(UTC)

    def _to_local_date(self, value: date | datetime) -> date:
        if isinstance(value, datetime):
            # Instante naive e tratado como data de calendario ja local
            return value.astimezone(self._zone).date() if value.tzinfo else value.date()
        return value


def _resolve_now(now: datetime | None) -> datetime:
    return ensure_utc(now) if now is not None else datetime.now(tz=UTC)


def _index_overrides(overrides: list[DateOverride]) -> dict[date, DateOverride]:
    indexed: dict[date, DateOverride] = {}
    for override in overrides:
        indexed.setdefault(override.date, override)
    return indexed


def _index_windows(windows: list[AvailabilityWindow]) -> dict[int, list[AvailabilityWindow]]:
    indexed: dict[int, list[AvailabilityWindow]] = {}
    for window in windows:
        indexed.setdefault(window.day_of_week, []).append(window)
    for day_windows in indexed.values():
        day_windows.sort(key=lambda window: window.start_time)
    return indexed


__all__ = ["SlotCalculator"]
