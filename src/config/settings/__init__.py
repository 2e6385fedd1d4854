"""Agregador de settings do servico de disponibilidade.

Re-exporta as settings de cada dominio.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Calendar providers
from config.settings.calendar import (
    GRAPH_API_BASE_URL,
    CalendarSettings,
    get_calendar_settings,
)

# Slot calculation
from config.settings.scheduling import (
    SchedulingSettings,
    get_scheduling_settings,
)

__all__ = [
    "GRAPH_API_BASE_URL",
    "BaseSettings",
    "CalendarSettings",
    "Environment",
    "SchedulingSettings",
    "get_base_settings",
    "get_calendar_settings",
    "get_scheduling_settings",
]
