"""Calendario externo conectado por um usuario."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class CalendarProvider(StrEnum):
    """Providers de calendario suportados para leitura de busy times."""

    GOOGLE = "GOOGLE"
    OUTLOOK = "OUTLOOK"


class CalendarConnection(BaseModel):
    """Conexao de um usuario com um calendario de provider externo."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="ID interno da conexao.")
    user_id: str = Field(..., description="Usuario dono do calendario.")
    provider: CalendarProvider
    external_id: str = Field(..., description="ID do calendario no provider.")
    access_token: str | None = Field(
        default=None,
        repr=False,
        description="Token OAuth vigente do usuario (Google ou Outlook).",
    )
    is_enabled: bool = Field(default=True)


__all__ = ["CalendarConnection", "CalendarProvider"]
