"""Settings dos providers de calendario (busy times).

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pelos adapters de Google e Outlook.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

GRAPH_API_BASE_URL = "https://graph.microsoft.com/v1.0"


class CalendarSettings(BaseModel):
    """Configuracoes de integracao com calendarios externos."""

    model_config = ConfigDict(extra="ignore")

    google_enabled: bool = Field(
        default=False,
        description="Habilita consulta de busy times no Google Calendar.",
    )
    google_service_account_json: str | None = Field(
        default=None,
        description="Service account opcional (JSON), usada em conexoes sem token.",
    )
    outlook_enabled: bool = Field(
        default=False,
        description="Habilita consulta de busy times no Outlook (Graph).",
    )
    graph_api_base_url: str = Field(
        default=GRAPH_API_BASE_URL,
        description="URL base da Microsoft Graph API.",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por chamada a provider externo.",
    )

    def validate_providers(self) -> list[str]:
        """Valida combinacoes minimas de configuracao.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if self.google_enabled and self.google_service_account_json:
            try:
                json.loads(self.google_service_account_json)
            except ValueError:
                errors.append("GOOGLE_SERVICE_ACCOUNT_JSON não é um JSON válido")
        return errors


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _parse_bool(value: str) -> bool:
    """Converte texto de env em bool com o mesmo padrao dos outros settings."""
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_calendar_from_env() -> CalendarSettings:
    """Carrega CalendarSettings a partir de variaveis de ambiente."""
    return CalendarSettings(
        google_enabled=_parse_bool(os.getenv("GOOGLE_CALENDAR_ENABLED", "false")),
        google_service_account_json=_read_optional_env("GOOGLE_SERVICE_ACCOUNT_JSON"),
        outlook_enabled=_parse_bool(os.getenv("OUTLOOK_CALENDAR_ENABLED", "false")),
        graph_api_base_url=os.getenv("OUTLOOK_GRAPH_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("CALENDAR_REQUEST_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_calendar_settings() -> CalendarSettings:
    """Retorna instancia cacheada de CalendarSettings."""
    return _load_calendar_from_env()


__all__ = ["GRAPH_API_BASE_URL", "CalendarSettings", "get_calendar_settings"]
