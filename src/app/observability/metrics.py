"""Registro de métricas via structured logging.

As métricas saem como logs JSON e são agregadas depois pelo backend de
logs (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de um cálculo por componente/operação
- Slots: quantidade de slots e membros de um cálculo de equipe

Uso:
    start = time.perf_counter()
    result = await calculator.calculate(options)
    record_latency("team_slot_calculator", "calculate", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "team_slot_calculator")
        operation: Nome da operação (ex: "calculate", "load_members")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_slot_count(
    component: str,
    scheduling_type: str,
    slot_count: int,
    member_count: int,
    correlation_id: str | None = None,
) -> None:
    """Registra volume de um cálculo de equipe.

    Args:
        component: Nome do componente
        scheduling_type: Política aplicada (ROUND_ROBIN, COLLECTIVE, MANAGED)
        slot_count: Total de slots emitidos (todos os dias)
        member_count: Membros considerados no cálculo
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_slot_count",
        extra={
            "metric_type": "slot_count",
            "component": component,
            "scheduling_type": scheduling_type,
            "slot_count": slot_count,
            "member_count": member_count,
            "correlation_id": correlation_id,
        },
    )
