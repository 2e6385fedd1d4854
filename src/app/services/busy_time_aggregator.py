"""Agregacao best-effort de busy times de um usuario.

Reservas existentes e calendarios externos sao consultados em paralelo.
Cada provider e isolado: falha ou excecao vira "nenhum busy time daquela
fonte" e nao impede o calculo. Falhas do repositorio de reservas sobem
para o chamador, que decide o que fazer com o membro.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from app.services.intervals import merge_busy_times, parse_busy_times

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from app.domain.availability import BusyTime
    from app.protocols import BookingRepositoryProtocol, BusyTimeProviderProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "busy_time_aggregator"


async def collect_busy_times(
    user_id: str,
    range_start: datetime,
    range_end: datetime,
    *,
    providers: Sequence[BusyTimeProviderProtocol],
    booking_repository: BookingRepositoryProtocol,
) -> list[BusyTime]:
    """Retorna busy times do usuario (reservas + calendarios) ja fundidos."""
    batches = await asyncio.gather(
        booking_repository.list_busy_bookings(user_id, range_start, range_end),
        *(
            _fetch_isolated(provider, user_id, range_start, range_end)
            for provider in providers
        ),
    )
    return merge_busy_times(busy for batch in batches for busy in batch)


async def _fetch_isolated(
    provider: BusyTimeProviderProtocol,
    user_id: str,
    range_start: datetime,
    range_end: datetime,
) -> list[BusyTime]:
    provider_name = getattr(provider, "name", type(provider).__name__)
    try:
        raw = await provider.fetch_busy_times(user_id, range_start, range_end)
        return parse_busy_times(raw)
    except Exception as exc:
        logger.warning(
            "busy_time_provider_failed",
            extra={
                "component": _COMPONENT,
                "provider": provider_name,
                "error_type": type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
        )
        return []


__all__ = ["collect_busy_times"]
