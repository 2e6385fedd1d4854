"""Provider de busy times via Google Calendar API v3 (freebusy).

Cada conexao consulta com o token OAuth do proprio usuario. A service
account, quando configurada, so e usada para conexoes sem token (calendarios
compartilhados com ela).
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.domain.calendar_connection import CalendarProvider
from app.infra.calendar.google_calendar_parsers import extract_busy_times, http_status
from app.observability import get_correlation_id
from utils.errors import CalendarProviderError

if TYPE_CHECKING:
    from datetime import datetime

    from google.auth.credentials import Credentials

    from app.domain.availability import BusyTime
    from app.domain.calendar_connection import CalendarConnection
    from app.protocols import CalendarConnectionRepositoryProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "google_busy_time_provider"
_PROVIDER = "google"
_CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar.readonly"


class GoogleBusyTimeProvider:
    """Le intervalos ocupados de todos os calendarios Google habilitados do usuario."""

    __slots__ = ("_connections", "_fallback_credentials")

    name = _PROVIDER

    def __init__(
        self,
        *,
        connection_repository: CalendarConnectionRepositoryProtocol,
        credentials_json: str | None = None,
    ) -> None:
        self._connections = connection_repository
        self._fallback_credentials: Credentials | None = None
        if credentials_json:
            self._fallback_credentials = service_account.Credentials.from_service_account_info(
                json.loads(credentials_json),
                scopes=[_CALENDAR_SCOPE],
            )

    async def fetch_busy_times(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        connections = await self._connections.list_enabled_connections(
            user_id,
            CalendarProvider.GOOGLE,
        )
        batches = await asyncio.gather(
            *(
                self._fetch_calendar(connection, range_start, range_end)
                for connection in connections
            )
        )
        return [busy for batch in batches for busy in batch]

    async def _fetch_calendar(
        self,
        connection: CalendarConnection,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        body = {
            "timeMin": range_start.isoformat(),
            "timeMax": range_end.isoformat(),
            "items": [{"id": connection.external_id}],
        }
        try:
            credentials = self._credentials_for(connection)
            response = await asyncio.to_thread(self._query_freebusy_sync, credentials, body)
            return extract_busy_times(response, connection.external_id)
        except CalendarProviderError as exc:
            self._log_error(connection, reason=exc.reason)
            return []
        except HttpError as exc:
            self._log_error(connection, exc=exc)
            return []
        except Exception:
            self._log_error(connection)
            return []

    def _credentials_for(self, connection: CalendarConnection) -> Credentials:
        if connection.access_token:
            return user_credentials.Credentials(token=connection.access_token)
        if self._fallback_credentials is not None:
            return self._fallback_credentials
        raise CalendarProviderError(_PROVIDER, "missing_access_token")

    def _query_freebusy_sync(
        self,
        credentials: Credentials,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        return service.freebusy().query(body=body).execute()

    def _log_error(
        self,
        connection: CalendarConnection,
        *,
        exc: HttpError | None = None,
        reason: str | None = None,
    ) -> None:
        extra: dict[str, Any] = {
            "component": _COMPONENT,
            "action": "fetch_busy_times",
            "result": "error",
            "connection_id": connection.id,
            "correlation_id": get_correlation_id(),
        }
        if reason is not None:
            extra["reason"] = reason
            logger.warning("google_calendar_error", extra=extra)
            return
        if exc is not None:
            extra["status_code"] = http_status(exc)
            extra["error_type"] = type(exc).__name__
            logger.warning("google_calendar_http_error", extra=extra)
            return
        logger.exception("google_calendar_unexpected_error", extra=extra)
