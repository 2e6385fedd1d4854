"""Calculo de slots para eventos de equipe.

Fluxo:
1. Resolve membros ativos atribuidos ao evento (ordem de prioridade)
2. Para cada membro, em paralelo: agenda padrao + busy times agregados
3. Um SlotCalculator por membro, todos com o mesmo `now`
4. Combina conforme a politica (ROUND_ROBIN, COLLECTIVE, MANAGED)

Um repositorio indisponivel (RepositoryUnavailableError) exclui apenas o
membro afetado; outros erros propagam.

O cursor de round-robin devolvido e apenas proposto; persistir o cursor
cabe ao fluxo que confirma a reserva.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from app.domain.availability import SlotCalculatorOptions, ensure_utc
from app.domain.team import SchedulingType, TeamSlotCalculatorResult
from app.observability import get_correlation_id, record_latency, record_slot_count
from app.services.busy_time_aggregator import collect_busy_times
from app.services.slot_calculator import SlotCalculator
from app.services.team_assignment import (
    MemberSlots,
    assign_round_robin,
    collect_managed,
    intersect_collective,
)
from config.logging import log_fallback
from config.settings import get_scheduling_settings
from utils.errors import RepositoryUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.availability import BusyTime
    from app.domain.team import MemberSchedule, TeamCalculationOptions, TeamMemberInfo
    from app.protocols import (
        BookingRepositoryProtocol,
        BusyTimeProviderProtocol,
        ScheduleRepositoryProtocol,
        TeamRepositoryProtocol,
    )
    from config.settings import SchedulingSettings

logger = logging.getLogger(__name__)

_COMPONENT = "team_slot_calculator"


class TeamSlotCalculator:
    """Orquestra o calculo de disponibilidade de um evento de equipe."""

    def __init__(
        self,
        event_type_id: str,
        team_id: str,
        scheduling_type: SchedulingType | str,
        last_assigned_member_id: str | None = None,
        *,
        team_repository: TeamRepositoryProtocol,
        schedule_repository: ScheduleRepositoryProtocol,
        booking_repository: BookingRepositoryProtocol,
        providers: Sequence[BusyTimeProviderProtocol] = (),
        limits: SchedulingSettings | None = None,
    ) -> None:
        self._event_type_id = event_type_id
        self._team_id = team_id
        self._scheduling_type = SchedulingType(scheduling_type)
        self._last_assigned_member_id = last_assigned_member_id
        self._team_repository = team_repository
        self._schedule_repository = schedule_repository
        self._booking_repository = booking_repository
        self._providers = tuple(providers)
        self._limits = limits or get_scheduling_settings()

    async def calculate(
        self,
        options: TeamCalculationOptions,
        *,
        now: datetime | None = None,
    ) -> TeamSlotCalculatorResult:
        """Calcula os slots da equipe conforme a politica do evento."""
        started = time.perf_counter()
        current_time = ensure_utc(now) if now is not None else datetime.now(tz=UTC)

        members = await self._load_members()
        if not members:
            logger.info(
                "team_without_members",
                extra={
                    "component": _COMPONENT,
                    "team_id": self._team_id,
                    "event_type_id": self._event_type_id,
                    "correlation_id": get_correlation_id(),
                },
            )
            return TeamSlotCalculatorResult(
                scheduling_type=self._scheduling_type,
                last_assigned_member_id=self._last_assigned_member_id,
            )

        range_end = current_time + timedelta(days=self._horizon_days(options) + 1)
        member_slots = await asyncio.gather(
            *(
                self._calculate_member(member, options, current_time, range_end)
                for member in members
            )
        )

        cursor = self._last_assigned_member_id
        if self._scheduling_type is SchedulingType.ROUND_ROBIN:
            slots, cursor = assign_round_robin(member_slots, cursor)
        elif self._scheduling_type is SchedulingType.COLLECTIVE:
            slots = intersect_collective(member_slots)
        else:
            slots = collect_managed(member_slots)

        correlation_id = get_correlation_id()
        record_slot_count(
            _COMPONENT,
            self._scheduling_type.value,
            sum(len(day) for day in slots.values()),
            len(members),
            correlation_id,
        )
        record_latency(
            _COMPONENT,
            "calculate",
            (time.perf_counter() - started) * 1000,
            correlation_id,
        )
        return TeamSlotCalculatorResult(
            slots=slots,
            scheduling_type=self._scheduling_type,
            members=members,
            last_assigned_member_id=cursor,
        )

    async def _load_members(self) -> list[TeamMemberInfo]:
        members = await self._team_repository.list_assigned_members(self._event_type_id)
        active = [member for member in members if member.is_active]
        return sorted(active, key=lambda member: member.priority)

    async def _calculate_member(
        self,
        member: TeamMemberInfo,
        options: TeamCalculationOptions,
        range_start: datetime,
        range_end: datetime,
    ) -> MemberSlots:
        try:
            schedule, busy_times = await asyncio.gather(
                self._schedule_repository.get_default_schedule(member.user_id),
                collect_busy_times(
                    member.user_id,
                    range_start,
                    range_end,
                    providers=self._providers,
                    booking_repository=self._booking_repository,
                ),
            )
        except RepositoryUnavailableError as exc:
            logger.warning(
                "team_member_load_failed",
                extra={
                    "component": _COMPONENT,
                    "member_id": member.id,
                    "error_type": type(exc).__name__,
                    "correlation_id": get_correlation_id(),
                },
            )
            return MemberSlots(member=member)

        if schedule is None:
            log_fallback(logger, _COMPONENT, reason="missing_default_schedule")
            return MemberSlots(member=member)

        calculator = SlotCalculator(
            _member_options(member, schedule, busy_times, options),
            limits=self._limits,
        )
        return MemberSlots(member=member, slots=calculator.calculate(now=range_start))

    def _horizon_days(self, options: TeamCalculationOptions) -> int:
        max_days = options.max_days_in_advance
        if max_days is None:
            max_days = self._limits.default_max_days_in_advance
        return min(self._limits.max_days_to_process, max(0, max_days))


def _member_options(
    member: TeamMemberInfo,
    schedule: MemberSchedule,
    busy_times: list[BusyTime],
    options: TeamCalculationOptions,
) -> SlotCalculatorOptions:
    # Limite diario por membro sem contagem previa: contagens ficam com o chamador
    return SlotCalculatorOptions(
        duration=options.duration,
        buffer_before=options.buffer_before,
        buffer_after=options.buffer_after,
        slot_interval=options.slot_interval,
        minimum_notice=options.minimum_notice,
        max_days_in_advance=options.max_days_in_advance,
        host_timezone=member.timezone,
        invitee_timezone=options.invitee_timezone,
        availability=schedule.availability,
        date_overrides=schedule.date_overrides,
        busy_times=busy_times,
        max_bookings_per_day=options.max_bookings_per_day,
    )


__all__ = ["TeamSlotCalculator"]
