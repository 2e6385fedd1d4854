"""Serviços de aplicação.

Cálculo de slots (sem IO direto) e orquestração de equipe.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.booking_window import BookingWindow, PeriodType, resolve_booking_window
from app.services.busy_time_aggregator import collect_busy_times
from app.services.intervals import is_slot_available, merge_busy_times, parse_busy_times
from app.services.slot_calculator import SlotCalculator
from app.services.slot_display import (
    format_slot_for_display,
    get_next_available_slot,
    group_slots_by_date,
)
from app.services.team_assignment import (
    MemberSlots,
    assign_round_robin,
    collect_managed,
    get_next_round_robin_member,
    intersect_collective,
)
from app.services.team_slot_calculator import TeamSlotCalculator

__all__ = [
    "BookingWindow",
    "MemberSlots",
    "PeriodType",
    "SlotCalculator",
    "TeamSlotCalculator",
    "assign_round_robin",
    "collect_busy_times",
    "collect_managed",
    "format_slot_for_display",
    "get_next_available_slot",
    "get_next_round_robin_member",
    "group_slots_by_date",
    "intersect_collective",
    "is_slot_available",
    "merge_busy_times",
    "parse_busy_times",
    "resolve_booking_window",
]
