"""Contratos de leitura dos repositorios consumidos pelo calculo.

O calculo so le snapshots; gravacao de reservas e do cursor de
round-robin pertencem ao fluxo de confirmacao de reserva.

Implementacoes sinalizam store inacessivel com
`utils.errors.RepositoryUnavailableError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.availability import BusyTime
    from app.domain.calendar_connection import CalendarConnection, CalendarProvider
    from app.domain.team import MemberSchedule, TeamMemberInfo


@runtime_checkable
class BookingRepositoryProtocol(Protocol):
    """Reservas pendentes/confirmadas que ocupam a agenda de um usuario."""

    async def list_busy_bookings(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        """Reservas como host ou usuario designado que cruzam a janela."""
        ...


@runtime_checkable
class ScheduleRepositoryProtocol(Protocol):
    """Agenda padrao (janelas + overrides) de um usuario."""

    async def get_default_schedule(self, user_id: str) -> MemberSchedule | None:
        """Retorna None quando o usuario nao tem agenda padrao."""
        ...


@runtime_checkable
class TeamRepositoryProtocol(Protocol):
    """Membros atribuidos a um tipo de evento de equipe."""

    async def list_assigned_members(self, event_type_id: str) -> list[TeamMemberInfo]:
        """Membros com atribuicao ativa e vinculo ativo na equipe."""
        ...


@runtime_checkable
class CalendarConnectionRepositoryProtocol(Protocol):
    """Calendarios externos conectados por usuario."""

    async def list_enabled_connections(
        self,
        user_id: str,
        provider: CalendarProvider,
    ) -> list[CalendarConnection]:
        """Conexoes habilitadas do usuario para o provider informado."""
        ...
