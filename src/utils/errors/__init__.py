"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CalendarProviderError,
    InfrastructureError,
    RepositoryUnavailableError,
)

__all__ = [
    "CalendarProviderError",
    "InfrastructureError",
    "RepositoryUnavailableError",
]
