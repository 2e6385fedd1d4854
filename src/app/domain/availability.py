"""Modelos de dominio para calculo de disponibilidade.

Contratos imutaveis de entrada/saida do calculador de slots. Horarios
recorrentes e overrides sao expressos no timezone do dono da agenda;
busy times e slots sao instantes em UTC.
"""

from __future__ import annotations

import datetime as _dt
import re
from datetime import UTC, datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_HHMM_REGEX = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")
END_OF_DAY = "24:00"


def parse_hhmm(value: str) -> tuple[int, int]:
    """Converte 'HH:mm' em (hora, minuto). '24:00' vira (24, 0)."""
    hour, minute = value.split(":")
    return int(hour), int(minute)


def ensure_utc(value: datetime) -> datetime:
    """Normaliza datetime para UTC; naive e interpretado como UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def validate_timezone(value: str) -> str:
    """Garante que o nome IANA existe no banco de timezones."""
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Timezone desconhecido: {value}") from exc
    return value


def _validate_start_time(value: str) -> str:
    if not _HHMM_REGEX.match(value):
        raise ValueError("Horario deve estar no formato HH:mm")
    return value


def _validate_end_time(value: str) -> str:
    if value != END_OF_DAY and not _HHMM_REGEX.match(value):
        raise ValueError("Horario deve estar no formato HH:mm")
    return value


class AvailabilityWindow(BaseModel):
    """Janela recorrente de trabalho em um dia da semana (domingo=0)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    day_of_week: int = Field(..., ge=0, le=6, description="Dia da semana, domingo=0.")
    start_time: str = Field(..., description="Inicio local (HH:mm).")
    end_time: str = Field(..., description="Fim local (HH:mm ou 24:00).")

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, value: str) -> str:
        return _validate_start_time(value)

    @field_validator("end_time")
    @classmethod
    def validate_end_time(cls, value: str) -> str:
        return _validate_end_time(value)


class DateOverride(BaseModel):
    """Excecao para uma data especifica; sempre vence a janela recorrente."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    # Alias do modulo: o nome do campo sombreia o tipo `date` dentro da classe
    date: _dt.date = Field(..., description="Dia no calendario do dono da agenda.")
    is_working: bool = Field(..., description="False bloqueia o dia inteiro.")
    start_time: str | None = Field(default=None, description="Inicio local (HH:mm).")
    end_time: str | None = Field(default=None, description="Fim local (HH:mm ou 24:00).")

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, value: str | None) -> str | None:
        return None if value is None else _validate_start_time(value)

    @field_validator("end_time")
    @classmethod
    def validate_end_time(cls, value: str | None) -> str | None:
        return None if value is None else _validate_end_time(value)

    @model_validator(mode="after")
    def require_hours_when_working(self) -> DateOverride:
        """Override de dia trabalhado precisa substituir as janelas por inteiro."""
        if self.is_working and (self.start_time is None or self.end_time is None):
            raise ValueError("Override com is_working=True exige start_time e end_time")
        return self


class BusyTime(BaseModel):
    """Intervalo ocupado (reserva existente ou evento de calendario externo)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    start: datetime = Field(..., description="Inicio do intervalo (UTC).")
    end: datetime = Field(..., description="Fim do intervalo (UTC).")

    @field_validator("start", "end")
    @classmethod
    def normalize_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class TimeSlot(BaseModel):
    """Slot reservavel; duracao fixada pela configuracao do evento."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    start: datetime = Field(..., description="Inicio do slot (UTC).")
    end: datetime = Field(..., description="Fim do slot (UTC).")

    @field_validator("start", "end")
    @classmethod
    def normalize_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    def localized(self, timezone: str) -> tuple[datetime, datetime]:
        """Retorna (inicio, fim) expressos no timezone informado."""
        zone = ZoneInfo(timezone)
        return self.start.astimezone(zone), self.end.astimezone(zone)


CalculatedSlots = dict[str, list[TimeSlot]]


class SlotCalculatorOptions(BaseModel):
    """Configuracao de um calculo de slots para um unico dono de agenda.

    Duracao, intervalo e horizonte invalidos nao sao rejeitados: o
    calculador os eleva/limita aos valores seguros de SchedulingSettings.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    duration: int = Field(..., description="Duracao do slot em minutos.")
    buffer_before: int = Field(default=0, description="Folga antes do slot em minutos.")
    buffer_after: int = Field(default=0, description="Folga depois do slot em minutos.")
    slot_interval: int | None = Field(
        default=None,
        description="Passo entre inicios de slots; padrao e a duracao.",
    )
    minimum_notice: int = Field(
        default=0,
        description="Antecedencia minima, em minutos, entre agora e o inicio.",
    )
    max_days_in_advance: int | None = Field(
        default=None,
        description="Horizonte de dias percorridos pelo calculo.",
    )
    host_timezone: str = Field(default="UTC", description="Timezone do dono da agenda.")
    invitee_timezone: str = Field(
        default="UTC",
        description="Timezone do convidado; usado apenas para exibicao.",
    )
    availability: list[AvailabilityWindow] = Field(default_factory=list)
    date_overrides: list[DateOverride] = Field(default_factory=list)
    busy_times: list[BusyTime] = Field(default_factory=list)
    max_bookings_per_day: int | None = Field(
        default=None,
        description="Limite de reservas por dia; None desativa.",
    )
    existing_bookings_per_day: dict[str, int] = Field(
        default_factory=dict,
        description="Reservas ja existentes por data (YYYY-MM-DD).",
    )

    @field_validator("host_timezone", "invitee_timezone")
    @classmethod
    def validate_timezones(cls, value: str) -> str:
        return validate_timezone(value)


__all__ = [
    "END_OF_DAY",
    "AvailabilityWindow",
    "BusyTime",
    "CalculatedSlots",
    "DateOverride",
    "SlotCalculatorOptions",
    "TimeSlot",
    "ensure_utc",
    "parse_hhmm",
    "validate_timezone",
]
