"""Exceções de domínio para falhas recuperáveis de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class CalendarProviderError(InfrastructureError):
    """Falha de transporte/status ao consultar um provider de calendario."""

    def __init__(self, provider: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason
        self.status_code = status_code


class RepositoryUnavailableError(InfrastructureError):
    """Falha ao consultar repositorio de agendas, reservas ou membros."""
