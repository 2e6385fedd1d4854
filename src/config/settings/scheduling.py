"""Settings do motor de calculo de slots.

Limites de seguranca do calculador: evitam loops patologicos com duracao
ou intervalo minusculos e limitam quantos dias e slots sao processados.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class SchedulingSettings(BaseModel):
    """Limites e defaults usados pelo SlotCalculator."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    min_slot_duration_min: int = Field(
        default=5,
        ge=1,
        description="Duracao minima de um slot; valores menores sao elevados a ela.",
    )
    min_slot_interval_min: int = Field(
        default=5,
        ge=1,
        description="Passo minimo entre inicios de slots.",
    )
    max_slots_per_day: int = Field(
        default=100,
        ge=1,
        description="Teto de candidatos brutos gerados por dia.",
    )
    max_days_to_process: int = Field(
        default=90,
        ge=1,
        description="Teto de dias percorridos por calculo.",
    )
    default_duration_min: int = Field(
        default=30,
        ge=1,
        description="Duracao usada quando o evento nao informa uma.",
    )
    default_max_days_in_advance: int = Field(
        default=30,
        ge=1,
        description="Horizonte usado quando o evento nao informa um.",
    )


def _load_scheduling_from_env() -> SchedulingSettings:
    """Carrega SchedulingSettings a partir de variaveis de ambiente."""
    return SchedulingSettings(
        min_slot_duration_min=int(os.getenv("SCHEDULING_MIN_SLOT_DURATION_MIN", "5")),
        min_slot_interval_min=int(os.getenv("SCHEDULING_MIN_SLOT_INTERVAL_MIN", "5")),
        max_slots_per_day=int(os.getenv("SCHEDULING_MAX_SLOTS_PER_DAY", "100")),
        max_days_to_process=int(os.getenv("SCHEDULING_MAX_DAYS_TO_PROCESS", "90")),
        default_duration_min=int(os.getenv("SCHEDULING_DEFAULT_DURATION_MIN", "30")),
        default_max_days_in_advance=int(
            os.getenv("SCHEDULING_DEFAULT_MAX_DAYS_IN_ADVANCE", "30")
        ),
    )


@lru_cache(maxsize=1)
def get_scheduling_settings() -> SchedulingSettings:
    """Retorna instancia cacheada de SchedulingSettings."""
    return _load_scheduling_from_env()


__all__ = ["SchedulingSettings", "get_scheduling_settings"]
