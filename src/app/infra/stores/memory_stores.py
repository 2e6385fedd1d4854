"""Repositorios em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from app.domain.availability import BusyTime, ensure_utc

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.calendar_connection import CalendarConnection, CalendarProvider
    from app.domain.team import MemberSchedule, TeamMemberInfo


class BookingStatus(StrEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


# Apenas reservas nesses status ocupam a agenda
_BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


@dataclass(frozen=True, slots=True)
class StoredBooking:
    """Reserva mínima para cálculo de ocupação."""

    host_id: str
    start: datetime
    end: datetime
    status: BookingStatus = BookingStatus.CONFIRMED
    assigned_user_id: str | None = None


class MemoryTeamRepository:
    """Membros atribuídos por tipo de evento — apenas para dev/test."""

    def __init__(self) -> None:
        self._members: dict[str, list[TeamMemberInfo]] = {}  # event_type_id -> membros

    def assign(self, event_type_id: str, members: list[TeamMemberInfo]) -> None:
        """Substitui os membros atribuídos ao evento."""
        self._members[event_type_id] = list(members)

    async def list_assigned_members(self, event_type_id: str) -> list[TeamMemberInfo]:
        return [member for member in self._members.get(event_type_id, []) if member.is_active]


class MemoryScheduleRepository:
    """Agenda padrão por usuário — apenas para dev/test."""

    def __init__(self) -> None:
        self._schedules: dict[str, MemberSchedule] = {}

    def set_schedule(self, user_id: str, schedule: MemberSchedule) -> None:
        self._schedules[user_id] = schedule

    async def get_default_schedule(self, user_id: str) -> MemberSchedule | None:
        return self._schedules.get(user_id)


class MemoryBookingRepository:
    """Reservas em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._bookings: list[StoredBooking] = []

    def add(self, booking: StoredBooking) -> None:
        self._bookings.append(booking)

    async def list_busy_bookings(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        """Reservas pendentes/confirmadas do usuário (host ou designado) na janela."""
        window_start, window_end = ensure_utc(range_start), ensure_utc(range_end)
        busy_times = [
            BusyTime(start=booking.start, end=booking.end)
            for booking in self._bookings
            if user_id in (booking.host_id, booking.assigned_user_id)
            and booking.status in _BLOCKING_STATUSES
            and ensure_utc(booking.start) < window_end
            and ensure_utc(booking.end) > window_start
        ]
        return sorted(busy_times, key=lambda busy: busy.start)


class MemoryCalendarConnectionRepository:
    """Calendários externos conectados — apenas para dev/test."""

    def __init__(self) -> None:
        self._connections: list[CalendarConnection] = []

    def add(self, connection: CalendarConnection) -> None:
        self._connections.append(connection)

    async def list_enabled_connections(
        self,
        user_id: str,
        provider: CalendarProvider,
    ) -> list[CalendarConnection]:
        return [
            connection
            for connection in self._connections
            if connection.user_id == user_id
            and connection.provider == provider
            and connection.is_enabled
        ]
