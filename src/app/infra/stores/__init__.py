"""Stores — implementações concretas dos repositórios de leitura.

Módulos disponíveis:
    - memory_stores: Repositórios em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    BookingStatus,
    MemoryBookingRepository,
    MemoryCalendarConnectionRepository,
    MemoryScheduleRepository,
    MemoryTeamRepository,
    StoredBooking,
)

__all__ = [
    "BookingStatus",
    "MemoryBookingRepository",
    "MemoryCalendarConnectionRepository",
    "MemoryScheduleRepository",
    "MemoryTeamRepository",
    "StoredBooking",
]
