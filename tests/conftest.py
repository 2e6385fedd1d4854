"""Configuração do pytest para o motor de disponibilidade."""

import logging
import sys
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.domain.availability import AvailabilityWindow  # noqa: E402
from config.settings import SchedulingSettings  # noqa: E402


@pytest.fixture
def tuesday_morning() -> datetime:
    """Terça-feira, 2026-03-10 08:00 UTC."""
    return datetime(2026, 3, 10, 8, 0, tzinfo=UTC)


@pytest.fixture
def business_hours() -> list[AvailabilityWindow]:
    """Segunda a sexta, 09:00-17:00."""
    return [
        AvailabilityWindow(day_of_week=day, start_time="09:00", end_time="17:00")
        for day in range(1, 6)
    ]


@pytest.fixture
def limits() -> SchedulingSettings:
    """Limites padrão, independentes de variáveis de ambiente."""
    return SchedulingSettings()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """configure_logging substitui handlers do root; restaura após cada teste."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
