"""Modelos de dominio para agendamento em equipe.

Cobrem membros atribuidos a um tipo de evento, a agenda padrao de cada
membro e o resultado agregado das politicas de equipe.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.availability import (
    AvailabilityWindow,
    DateOverride,
    ensure_utc,
    validate_timezone,
)


class SchedulingType(StrEnum):
    """Politicas de agendamento de um evento de equipe."""

    ROUND_ROBIN = "ROUND_ROBIN"
    COLLECTIVE = "COLLECTIVE"
    MANAGED = "MANAGED"


class TeamMemberInfo(BaseModel):
    """Membro ativo atribuido a um evento de equipe."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="ID do vinculo de membro na equipe.")
    user_id: str = Field(..., description="ID do usuario dono da agenda.")
    display_name: str = Field(default="Team Member", description="Nome exibido.")
    image: str | None = Field(default=None, description="URL do avatar.")
    timezone: str = Field(default="UTC", description="Timezone da agenda do membro.")
    priority: int = Field(default=0, description="Ordem de rotacao (menor primeiro).")
    is_active: bool = Field(default=True, description="Membro ativo na equipe.")

    @field_validator("timezone")
    @classmethod
    def validate_member_timezone(cls, value: str) -> str:
        return validate_timezone(value)


class MemberSchedule(BaseModel):
    """Agenda padrao de um membro: janelas recorrentes e overrides."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    availability: list[AvailabilityWindow] = Field(default_factory=list)
    date_overrides: list[DateOverride] = Field(default_factory=list)


class TeamSlotWithAssignment(BaseModel):
    """Slot de equipe com membro designado ou membros candidatos."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    start: datetime = Field(..., description="Inicio do slot (UTC).")
    end: datetime = Field(..., description="Fim do slot (UTC).")
    assigned_member: TeamMemberInfo | None = Field(
        default=None,
        description="Membro designado (ROUND_ROBIN).",
    )
    available_members: list[TeamMemberInfo] | None = Field(
        default=None,
        description="Equipe inteira (COLLECTIVE) ou membros livres (MANAGED).",
    )

    @field_validator("start", "end")
    @classmethod
    def normalize_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


TeamCalculatedSlots = dict[str, list[TeamSlotWithAssignment]]


class TeamCalculationOptions(BaseModel):
    """Configuracao compartilhada por todos os membros de um evento de equipe."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    duration: int = Field(..., description="Duracao do slot em minutos.")
    buffer_before: int = Field(default=0)
    buffer_after: int = Field(default=0)
    slot_interval: int | None = Field(default=None)
    minimum_notice: int = Field(default=0)
    max_days_in_advance: int | None = Field(default=None)
    invitee_timezone: str = Field(default="UTC")
    max_bookings_per_day: int | None = Field(default=None)

    @field_validator("invitee_timezone")
    @classmethod
    def validate_invitee_timezone(cls, value: str) -> str:
        return validate_timezone(value)


class TeamSlotCalculatorResult(BaseModel):
    """Resultado do calculo de equipe.

    `last_assigned_member_id` e apenas o cursor proposto; gravar o cursor
    cabe ao fluxo de confirmacao da reserva.
    """

    model_config = ConfigDict(extra="ignore")

    slots: TeamCalculatedSlots = Field(default_factory=dict)
    scheduling_type: SchedulingType
    members: list[TeamMemberInfo] = Field(default_factory=list)
    last_assigned_member_id: str | None = None


__all__ = [
    "MemberSchedule",
    "SchedulingType",
    "TeamCalculatedSlots",
    "TeamCalculationOptions",
    "TeamMemberInfo",
    "TeamSlotCalculatorResult",
    "TeamSlotWithAssignment",
]
