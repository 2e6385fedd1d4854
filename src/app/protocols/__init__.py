"""Protocolos e contratos do core de disponibilidade."""

from .busy_time_provider import BusyTimeProviderProtocol
from .repositories import (
    BookingRepositoryProtocol,
    CalendarConnectionRepositoryProtocol,
    ScheduleRepositoryProtocol,
    TeamRepositoryProtocol,
)

__all__ = [
    "BookingRepositoryProtocol",
    "BusyTimeProviderProtocol",
    "CalendarConnectionRepositoryProtocol",
    "ScheduleRepositoryProtocol",
    "TeamRepositoryProtocol",
]
