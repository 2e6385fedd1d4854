"""Filters que enriquecem ou saneiam records antes da formatacao JSON."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Credenciais de calendario que nunca podem chegar ao log
SENSITIVE_LOG_FIELDS = frozenset(
    {"access_token", "authorization", "credentials_json", "refresh_token"}
)
REDACTED = "[redacted]"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record.

    Um correlation_id passado via `extra` tem precedencia sobre o getter.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara campos `extra` com tokens OAuth ou credenciais."""

    def __init__(self, fields: Iterable[str] = SENSITIVE_LOG_FIELDS) -> None:
        super().__init__()
        self._fields = frozenset(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self._fields.intersection(record.__dict__):
            if record.__dict__[field]:
                setattr(record, field, REDACTED)
        return True
