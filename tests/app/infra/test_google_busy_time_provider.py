"""Testes unitarios para o provider de busy times do Google Calendar."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import httplib2
import pytest
from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account
from googleapiclient.errors import HttpError

from app.domain.availability import BusyTime
from app.domain.calendar_connection import CalendarConnection, CalendarProvider
from app.infra.calendar.google_busy_time_provider import GoogleBusyTimeProvider
from app.infra.calendar.google_calendar_parsers import (
    extract_busy_times,
    http_status,
    parse_google_datetime,
)
from app.infra.stores.memory_stores import MemoryCalendarConnectionRepository
from app.protocols import BusyTimeProviderProtocol

RANGE_START = datetime(2026, 3, 10, 0, 0, tzinfo=UTC)
RANGE_END = RANGE_START + timedelta(days=1)


def _connections(
    *external_ids: str,
    tokens: dict[str, str | None] | None = None,
) -> MemoryCalendarConnectionRepository:
    repository = MemoryCalendarConnectionRepository()
    for index, external_id in enumerate(external_ids):
        token = (tokens or {}).get(external_id, f"token-{external_id}")
        repository.add(
            CalendarConnection(
                id=f"c{index}",
                user_id="u1",
                provider=CalendarProvider.GOOGLE,
                external_id=external_id,
                access_token=token,
            )
        )
    return repository


def _build_provider(repository: MemoryCalendarConnectionRepository) -> GoogleBusyTimeProvider:
    # Sem service account: nenhuma autenticacao acontece na construcao
    return GoogleBusyTimeProvider(connection_repository=repository)


def _freebusy_response(calendar_id: str, *busy: tuple[str, str]) -> dict[str, Any]:
    return {
        "calendars": {
            calendar_id: {"busy": [{"start": start, "end": end} for start, end in busy]}
        }
    }


@pytest.mark.asyncio
async def test_fetch_busy_times_collects_every_enabled_calendar(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    provider = _build_provider(_connections("primary", "work"))
    bodies: list[dict[str, Any]] = []

    def _fake_query(
        self: GoogleBusyTimeProvider,
        credentials: Any,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        bodies.append(body)
        calendar_id = body["items"][0]["id"]
        if calendar_id == "primary":
            return _freebusy_response(calendar_id, ("2026-03-10T10:00:00Z", "2026-03-10T11:00:00Z"))
        return _freebusy_response(
            calendar_id, ("2026-03-10T14:00:00+01:00", "2026-03-10T15:00:00+01:00")
        )

    monkeypatch.setattr(GoogleBusyTimeProvider, "_query_freebusy_sync", _fake_query)

    busy = await provider.fetch_busy_times("u1", RANGE_START, RANGE_END)

    assert sorted(busy, key=lambda item: item.start) == [
        BusyTime(
            start=datetime(2026, 3, 10, 10, 0, tzinfo=UTC),
            end=datetime(2026, 3, 10, 11, 0, tzinfo=UTC),
        ),
        BusyTime(
            start=datetime(2026, 3, 10, 13, 0, tzinfo=UTC),
            end=datetime(2026, 3, 10, 14, 0, tzinfo=UTC),
        ),
    ]
    assert {body["timeMin"] for body in bodies} == {RANGE_START.isoformat()}


@pytest.mark.asyncio
async def test_each_connection_queries_with_its_own_token(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    provider = _build_provider(_connections("primary", "work"))
    tokens: dict[str, str] = {}

    def _fake_query(
        self: GoogleBusyTimeProvider,
        credentials: Any,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        assert isinstance(credentials, user_credentials.Credentials)
        tokens[body["items"][0]["id"]] = credentials.token
        return _freebusy_response(body["items"][0]["id"])

    monkeypatch.setattr(GoogleBusyTimeProvider, "_query_freebusy_sync", _fake_query)

    await provider.fetch_busy_times("u1", RANGE_START, RANGE_END)

    assert tokens == {"primary": "token-primary", "work": "token-work"}


@pytest.mark.asyncio
async def test_connection_without_token_is_skipped(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    provider = _build_provider(_connections("shared", "primary", tokens={"shared": None}))
    queried: list[str] = []

    def _fake_query(
        self: GoogleBusyTimeProvider,
        credentials: Any,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        calendar_id = body["items"][0]["id"]
        queried.append(calendar_id)
        return _freebusy_response(calendar_id, ("2026-03-10T10:00:00Z", "2026-03-10T11:00:00Z"))

    monkeypatch.setattr(GoogleBusyTimeProvider, "_query_freebusy_sync", _fake_query)

    with caplog.at_level("WARNING"):
        busy = await provider.fetch_busy_times("u1", RANGE_START, RANGE_END)

    assert queried == ["primary"]
    assert len(busy) == 1
    assert any(record.getMessage() == "google_calendar_error" for record in caplog.records)


@pytest.mark.asyncio
async def test_service_account_covers_connections_without_token(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    fallback = object()
    monkeypatch.setattr(
        service_account.Credentials,
        "from_service_account_info",
        lambda info, scopes: fallback,
    )
    provider = GoogleBusyTimeProvider(
        connection_repository=_connections("shared", "primary", tokens={"shared": None}),
        credentials_json="{}",
    )
    used: dict[str, Any] = {}

    def _fake_query(
        self: GoogleBusyTimeProvider,
        credentials: Any,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        used[body["items"][0]["id"]] = credentials
        return _freebusy_response(body["items"][0]["id"])

    monkeypatch.setattr(GoogleBusyTimeProvider, "_query_freebusy_sync", _fake_query)

    await provider.fetch_busy_times("u1", RANGE_START, RANGE_END)

    assert used["shared"] is fallback
    assert isinstance(used["primary"], user_credentials.Credentials)


@pytest.mark.asyncio
async def test_http_error_on_one_calendar_is_isolated(monkeypatch: pytest.MonkeyPatch) -> None:
    provider = _build_provider(_connections("broken", "primary"))

    def _fake_query(
        self: GoogleBusyTimeProvider,
        credentials: Any,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        calendar_id = body["items"][0]["id"]
        if calendar_id == "broken":
            raise HttpError(resp=httplib2.Response({"status": "503"}), content=b"{}")
        return _freebusy_response(calendar_id, ("2026-03-10T10:00:00Z", "2026-03-10T11:00:00Z"))

    monkeypatch.setattr(GoogleBusyTimeProvider, "_query_freebusy_sync", _fake_query)

    busy = await provider.fetch_busy_times("u1", RANGE_START, RANGE_END)

    assert len(busy) == 1


@pytest.mark.asyncio
async def test_unexpected_error_returns_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    provider = _build_provider(_connections("primary"))

    def _fake_query(
        self: GoogleBusyTimeProvider,
        credentials: Any,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        raise RuntimeError("boom")

    monkeypatch.setattr(GoogleBusyTimeProvider, "_query_freebusy_sync", _fake_query)

    assert await provider.fetch_busy_times("u1", RANGE_START, RANGE_END) == []


@pytest.mark.asyncio
async def test_no_connections_returns_empty() -> None:
    provider = _build_provider(_connections())
    assert await provider.fetch_busy_times("u1", RANGE_START, RANGE_END) == []


def test_provider_satisfies_protocol() -> None:
    provider = _build_provider(_connections())
    assert isinstance(provider, BusyTimeProviderProtocol)
    assert provider.name == "google"

class TestParsers:
    """Testes dos helpers de parsing."""

    def test_extract_busy_times_ignores_invalid_entries(self) -> None:
        response = {
            "calendars": {
                "primary": {
                    "busy": [
                        {"start": "2026-03-10T11:00:00Z", "end": "2026-03-10T12:00:00Z"},
                        {"start": "invalid", "end": "2026-03-10T12:00:00Z"},
                        {"start": "2026-03-10T12:00:00Z", "end": "2026-03-10T11:00:00Z"},
                        "garbage",
                        {"start": "2026-03-10T09:00:00Z", "end": "2026-03-10T10:00:00Z"},
                    ]
                }
            }
        }
        busy = extract_busy_times(response, "primary")
        assert [item.start.hour for item in busy] == [9, 11]

    def test_extract_busy_times_unknown_calendar(self) -> None:
        assert extract_busy_times({"calendars": {}}, "primary") == []

    def test_parse_google_datetime_normalizes_to_utc(self) -> None:
        parsed = parse_google_datetime("2026-03-10T09:00:00-03:00")
        assert parsed == datetime(2026, 3, 10, 12, 0, tzinfo=UTC)
        assert parse_google_datetime("") is None
        assert parse_google_datetime(None) is None

    def test_http_status(self) -> None:
        exc = HttpError(resp=httplib2.Response({"status": "404"}), content=b"{}")
        assert http_status(exc) == 404
