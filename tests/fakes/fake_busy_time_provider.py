"""Fakes de providers e repositórios para testes deterministas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils.errors import CalendarProviderError, RepositoryUnavailableError

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.availability import BusyTime
    from app.domain.team import MemberSchedule


class FakeBusyTimeProvider:
    """Provider sem IO com busy times fixos por usuário."""

    def __init__(self, name: str = "fake", busy_by_user: dict[str, list[BusyTime]] | None = None) -> None:
        self.name = name
        self._busy_by_user = busy_by_user or {}
        self.calls: list[tuple[str, datetime, datetime]] = []

    async def fetch_busy_times(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        self.calls.append((user_id, range_start, range_end))
        return list(self._busy_by_user.get(user_id, []))


class FailingBusyTimeProvider:
    """Provider que sempre falha, simulando indisponibilidade externa."""

    name = "failing"

    async def fetch_busy_times(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        _ = (user_id, range_start, range_end)
        raise CalendarProviderError("failing", "timeout")


class FailingScheduleRepository:
    """Repositório de agendas que falha apenas para os usuários informados."""

    def __init__(self, schedules: dict[str, MemberSchedule], failing_users: set[str]) -> None:
        self._schedules = schedules
        self._failing_users = failing_users

    async def get_default_schedule(self, user_id: str) -> MemberSchedule | None:
        if user_id in self._failing_users:
            raise RepositoryUnavailableError(f"schedule lookup failed for {user_id}")
        return self._schedules.get(user_id)


class FailingBookingRepository:
    """Repositório de reservas que falha para os usuários informados."""

    def __init__(self, failing_users: set[str], error: Exception | None = None) -> None:
        self._failing_users = failing_users
        self._error = error

    async def list_busy_bookings(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        _ = (range_start, range_end)
        if user_id in self._failing_users:
            raise self._error or RepositoryUnavailableError(f"bookings unavailable for {user_id}")
        return []
