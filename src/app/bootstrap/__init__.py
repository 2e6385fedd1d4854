"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta os providers de calendário concretos ao protocolo de busy times.

Uso:
    from app.bootstrap import build_busy_time_providers, initialize_app

    # Na inicialização do serviço
    initialize_app()

    # Providers habilitados por env
    providers = build_busy_time_providers(connection_repository)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_calendar_settings

if TYPE_CHECKING:
    from app.protocols import (
        BusyTimeProviderProtocol,
        CalendarConnectionRepositoryProtocol,
    )
    from config.settings import CalendarSettings

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com correlation_id
    - Validação das settings de base e de calendário
    """
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
    )
    validate_runtime_settings()


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (logging em DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors = [f"base: {error}" for error in base.validate()]
    errors.extend(f"calendar: {error}" for error in get_calendar_settings().validate_providers())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


def build_busy_time_providers(
    connection_repository: CalendarConnectionRepositoryProtocol,
    settings: CalendarSettings | None = None,
) -> list[BusyTimeProviderProtocol]:
    """Instancia os providers de calendário habilitados por configuração.

    Ambos os providers usam o token OAuth de cada conexão; a service account
    do Google é opcional e só cobre conexões sem token.
    """
    calendar_settings = settings or get_calendar_settings()
    providers: list[BusyTimeProviderProtocol] = []

    if calendar_settings.google_enabled:
        from app.infra.calendar.google_busy_time_provider import GoogleBusyTimeProvider

        providers.append(
            GoogleBusyTimeProvider(
                connection_repository=connection_repository,
                credentials_json=calendar_settings.google_service_account_json,
            )
        )

    if calendar_settings.outlook_enabled:
        from app.infra.calendar.outlook_busy_time_provider import OutlookBusyTimeProvider

        providers.append(
            OutlookBusyTimeProvider(
                connection_repository=connection_repository,
                settings=calendar_settings,
            )
        )

    logger.info(
        "busy_time_providers_built",
        extra={
            "component": "bootstrap",
            "providers": [provider.name for provider in providers],
        },
    )
    return providers
