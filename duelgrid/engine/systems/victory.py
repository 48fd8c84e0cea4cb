from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.units import Unit

from ...models.enums import Team


def compute_winner(units: list[Unit]) -> Team | None:
    a_alive = any(u.alive for u in units if u.team == Team.A)
    b_alive = any(u.alive for u in units if u.team == Team.B)
    if a_alive and not b_alive:
        return Team.A
    if b_alive and not a_alive:
        return Team.B
    return None


def resolve(existing: Team | None, units: list[Unit]) -> Team | None:
    # The first decided winner sticks.
    return existing or compute_winner(units)
