from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.units import Unit

from .. import catalog
from ..errors import UnsubstantiatedAttack
from .movement import manhattan


def is_adjacent(a: Unit, b: Unit) -> bool:
    return manhattan(a.pos, b.pos) == 1


def inferred_attackers(before: dict[int, Unit], after: list[Unit]) -> list[Unit]:
    """Units whose attack flag went up in this update and which are still standing."""
    return [
        u
        for u in after
        if not before[u.id].has_attacked and u.has_attacked and u.alive
    ]


def hit_lands(target_before: Unit, target_after: Unit, power: int) -> bool:
    if not target_after.alive:
        return target_before.hp <= power
    return target_before.hp - target_after.hp == power


def check_attacks(before: dict[int, Unit], after: list[Unit]) -> None:
    """Every raised attack flag needs a full-power hit on an enemy adjacent to the attacker's old tile."""
    after_by_id = {u.id: u for u in after}
    for attacker in inferred_attackers(before, after):
        origin = before[attacker.id]
        power = catalog.archetype(origin.name).attack_power
        targets = [
            e
            for e in before.values()
            if e.team != origin.team and e.alive and is_adjacent(e, origin)
        ]
        if not any(hit_lands(t, after_by_id[t.id], power) for t in targets):
            raise UnsubstantiatedAttack(
                f"Unit {attacker.id} attacked but no adjacent enemy took {power} damage"
            )
