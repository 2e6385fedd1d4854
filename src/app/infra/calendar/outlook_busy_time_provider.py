"""Provider de busy times via Microsoft Graph (calendarView)."""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

import httpx

from app.domain.availability import BusyTime, ensure_utc
from app.domain.calendar_connection import CalendarProvider
from app.observability import get_correlation_id
from config.settings import get_calendar_settings
from utils.errors import CalendarProviderError

if TYPE_CHECKING:
    from app.domain.calendar_connection import CalendarConnection
    from app.protocols import CalendarConnectionRepositoryProtocol
    from config.settings import CalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "outlook_busy_time_provider"
_PROVIDER = "outlook"
_NEXT_LINK = "@odata.nextLink"
_PAGE_SIZE = 100
_MAX_PAGES = 50

# Eventos marcados como free/tentative nao bloqueiam a agenda
BUSY_SHOW_AS = frozenset({"busy", "oof", "workingElsewhere"})

_GRAPH_DATETIME_REGEX = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})?$"
)


class OutlookBusyTimeProvider:
    """Le intervalos ocupados de todos os calendarios Outlook habilitados do usuario."""

    __slots__ = ("_connections", "_settings", "_transport")

    name = _PROVIDER

    def __init__(
        self,
        *,
        connection_repository: CalendarConnectionRepositoryProtocol,
        settings: CalendarSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._connections = connection_repository
        self._settings = settings or get_calendar_settings()
        self._transport = transport

    async def fetch_busy_times(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        connections = await self._connections.list_enabled_connections(
            user_id,
            CalendarProvider.OUTLOOK,
        )
        if not connections:
            return []
        async with httpx.AsyncClient(
            base_url=self._settings.graph_api_base_url,
            timeout=self._settings.request_timeout_seconds,
            transport=self._transport,
        ) as client:
            batches = await asyncio.gather(
                *(
                    self._fetch_calendar(client, connection, range_start, range_end)
                    for connection in connections
                )
            )
        return [busy for batch in batches for busy in batch]

    async def _fetch_calendar(
        self,
        client: httpx.AsyncClient,
        connection: CalendarConnection,
        range_start: datetime,
        range_end: datetime,
    ) -> list[BusyTime]:
        try:
            if not connection.access_token:
                raise CalendarProviderError(_PROVIDER, "missing_access_token")
            headers = {"Authorization": f"Bearer {connection.access_token}"}
            busy_times: list[BusyTime] = []
            payload = await self._get_page(
                client,
                "/me/calendarView",
                headers,
                params={
                    "startDateTime": range_start.isoformat(),
                    "endDateTime": range_end.isoformat(),
                    "$select": "start,end,showAs",
                    "$top": str(_PAGE_SIZE),
                },
            )
            for _ in range(_MAX_PAGES):
                busy_times.extend(extract_outlook_busy_times(payload))
                next_link = payload.get(_NEXT_LINK)
                if not isinstance(next_link, str) or not next_link:
                    return busy_times
                # nextLink e absoluto e ja carrega os parametros da consulta
                payload = await self._get_page(client, next_link, headers)
            raise CalendarProviderError(_PROVIDER, "too_many_pages")
        except CalendarProviderError as exc:
            self._log_error(connection, reason=exc.reason, status_code=exc.status_code)
            return []
        except httpx.HTTPError as exc:
            self._log_error(connection, reason=type(exc).__name__)
            return []

    async def _get_page(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        response = await client.get(url, params=params, headers=headers)
        if not response.is_success:
            raise CalendarProviderError(
                _PROVIDER,
                "unexpected_status",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise CalendarProviderError(_PROVIDER, "invalid_payload") from exc
        if not isinstance(payload, dict):
            raise CalendarProviderError(_PROVIDER, "invalid_payload")
        return payload

    def _log_error(
        self,
        connection: CalendarConnection,
        *,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        logger.warning(
            "outlook_calendar_error",
            extra={
                "component": _COMPONENT,
                "action": "fetch_busy_times",
                "result": "error",
                "reason": reason,
                "status_code": status_code,
                "connection_id": connection.id,
                "correlation_id": get_correlation_id(),
            },
        )


def extract_outlook_busy_times(payload: Any) -> list[BusyTime]:
    """Converte a resposta de calendarView em BusyTime.

    O Graph devolve `dateTime` sem offset (UTC por padrao); eventos com
    `showAs` livre ou tentativo sao ignorados.
    """
    events = payload.get("value", []) if isinstance(payload, dict) else []
    busy_times: list[BusyTime] = []
    for event in events:
        if not isinstance(event, dict) or event.get("showAs") not in BUSY_SHOW_AS:
            continue
        start = parse_graph_datetime(event.get("start"))
        end = parse_graph_datetime(event.get("end"))
        if start and end and end > start:
            busy_times.append(BusyTime(start=start, end=end))
    return busy_times


def parse_graph_datetime(value: Any) -> datetime | None:
    if not isinstance(value, dict) or not isinstance(value.get("dateTime"), str):
        return None
    match = _GRAPH_DATETIME_REGEX.match(value["dateTime"].strip())
    if match is None:
        return None
    # Graph usa 7 casas de fracao; datetime aceita ate 6
    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    try:
        offset = (match.group("offset") or "+00:00").replace("Z", "+00:00")
        parsed = datetime.fromisoformat(f"{match.group('base')}.{fraction}{offset}")
    except ValueError:
        return None
    return ensure_utc(parsed)
