"""Politicas de combinacao de slots de equipe.

Funcoes puras sobre os slots ja calculados de cada membro:
- ROUND_ROBIN: cada horario vai para o proximo membro livre na rotacao;
- COLLECTIVE: so sobrevivem horarios livres para todos;
- MANAGED: uniao dos horarios, com os membros livres em cada um.

Horarios sao comparados pelo instante de inicio (UTC), portanto membros em
timezones diferentes sao combinados corretamente mesmo quando a data local
de cada um difere.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from app.domain.team import TeamSlotWithAssignment

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from app.domain.availability import CalculatedSlots, TimeSlot
    from app.domain.team import TeamCalculatedSlots, TeamMemberInfo


@dataclass(frozen=True, slots=True)
class MemberSlots:
    """Slots calculados de um membro, agrupados pela data local dele."""

    member: TeamMemberInfo
    slots: CalculatedSlots = field(default_factory=dict)

    def starts(self) -> frozenset[datetime]:
        return frozenset(slot.start for day in self.slots.values() for slot in day)


def assign_round_robin(
    member_slots: Sequence[MemberSlots],
    last_assigned_member_id: str | None = None,
) -> tuple[TeamCalculatedSlots, str | None]:
    """Distribui cada horario ao proximo membro livre na rotacao.

    O ponteiro parte do indice de `last_assigned_member_id` (ou do ultimo
    indice, para que a primeira atribuicao comece no membro 0) e avanca a
    cada membro verificado, ate N passos por horario.

    Returns:
        (slots por dia, id do ultimo membro efetivamente designado). Sem
        nenhuma atribuicao, o cursor recebido e devolvido.
    """
    if not member_slots:
        return {}, last_assigned_member_id

    members = [entry.member for entry in member_slots]
    starts_by_member = [entry.starts() for entry in member_slots]
    pointer = _index_of(members, last_assigned_member_id)
    if pointer is None:
        pointer = len(members) - 1

    cursor = last_assigned_member_id
    result: TeamCalculatedSlots = {}
    for date_key, slots in _union_by_day(member_slots).items():
        day_slots: list[TeamSlotWithAssignment] = []
        for slot in slots:
            for _ in range(len(members)):
                pointer = (pointer + 1) % len(members)
                if slot.start in starts_by_member[pointer]:
                    member = members[pointer]
                    day_slots.append(
                        TeamSlotWithAssignment(
                            start=slot.start,
                            end=slot.end,
                            assigned_member=member,
                        )
                    )
                    cursor = member.id
                    break
        if day_slots:
            result[date_key] = day_slots
    return result, cursor


def intersect_collective(member_slots: Sequence[MemberSlots]) -> TeamCalculatedSlots:
    """Mantem apenas horarios em que todos os membros estao livres."""
    if not member_slots:
        return {}

    team = [entry.member for entry in member_slots]
    other_starts = [entry.starts() for entry in member_slots[1:]]
    result: TeamCalculatedSlots = {}
    for date_key, slots in sorted(member_slots[0].slots.items()):
        day_slots = [
            TeamSlotWithAssignment(start=slot.start, end=slot.end, available_members=team)
            for slot in sorted(slots, key=lambda slot: slot.start)
            if all(slot.start in starts for starts in other_starts)
        ]
        if day_slots:
            result[date_key] = day_slots
    return result


def collect_managed(member_slots: Sequence[MemberSlots]) -> TeamCalculatedSlots:
    """Uniao dos horarios, cada um com os membros livres (ordem da equipe)."""
    starts_by_member = [(entry.member, entry.starts()) for entry in member_slots]
    result: TeamCalculatedSlots = {}
    for date_key, slots in _union_by_day(member_slots).items():
        result[date_key] = [
            TeamSlotWithAssignment(
                start=slot.start,
                end=slot.end,
                available_members=[
                    member for member, starts in starts_by_member if slot.start in starts
                ],
            )
            for slot in slots
        ]
    return result


def get_next_round_robin_member(
    members: Sequence[TeamMemberInfo],
    last_assigned_member_id: str | None = None,
) -> TeamMemberInfo | None:
    """Proximo membro apos o cursor; o primeiro quando o cursor e desconhecido."""
    if not members:
        return None
    index = _index_of(members, last_assigned_member_id)
    if index is None:
        return members[0]
    return members[(index + 1) % len(members)]


def _index_of(members: Sequence[TeamMemberInfo], member_id: str | None) -> int | None:
    if member_id is None:
        return None
    for index, member in enumerate(members):
        if member.id == member_id:
            return index
    return None


def _union_by_day(member_slots: Sequence[MemberSlots]) -> dict[str, list[TimeSlot]]:
    # Um instante fica sob a primeira data em que aparece (dias em ordem)
    seen: dict[datetime, tuple[str, TimeSlot]] = {}
    for date_key in sorted({key for entry in member_slots for key in entry.slots}):
        for entry in member_slots:
            for slot in entry.slots.get(date_key, []):
                seen.setdefault(slot.start, (date_key, slot))

    grouped: dict[str, list[TimeSlot]] = {}
    for start in sorted(seen):
        date_key, slot = seen[start]
        grouped.setdefault(date_key, []).append(slot)
    return dict(sorted(grouped.items()))


__all__ = [
    "MemberSlots",
    "assign_round_robin",
    "collect_managed",
    "get_next_round_robin_member",
    "intersect_collective",
]
