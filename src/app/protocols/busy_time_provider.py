"""Contrato de provider de busy times para o calculo de disponibilidade.

Cada provider de calendario (Google, Outlook, ...) implementa a mesma
capacidade; o agregador trata cada um como falhavel de forma isolada.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.availability import BusyTime


@runtime_checkable
class BusyTimeProviderProtocol(Protocol):
    """Contrato para leitura de intervalos ocupados de um usuario."""

    name: str

    async def fetch_busy_times(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        """Retorna intervalos ocupados (UTC) do usuario na janela informada.

        Implementacoes devem degradar para lista vazia em falha de provider.
        """
        ...
