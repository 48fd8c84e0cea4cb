from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.units import Unit, UnitArchetype

from ...models.enums import Coord
from ..errors import InvariantViolation, OccupancyConflict


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def in_bounds(p: Coord, grid_size: int) -> bool:
    return 0 <= p[0] < grid_size and 0 <= p[1] < grid_size


def clamp_hp(proposed: Unit, arch: UnitArchetype) -> int:
    # Healing past the cap is not an error; it is cut back to max HP.
    return min(proposed.hp, arch.max_hp)


def check_unit(before: Unit, after: Unit, grid_size: int) -> None:
    """Moves-left arithmetic and flag monotonicity for one unit within a turn."""
    if after.team != before.team:
        raise InvariantViolation(f"Unit {before.id} changed team")
    if not in_bounds(after.pos, grid_size):
        raise InvariantViolation(f"Unit {before.id} is off the grid at {after.pos}")
    if after.moves_left > before.moves_left:
        raise InvariantViolation(f"Unit {before.id} movesLeft increased")
    dist = manhattan(before.pos, after.pos)
    if dist > before.moves_left:
        raise InvariantViolation(
            f"Unit {before.id} moved {dist} tiles with only {before.moves_left} moves left"
        )
    if after.moves_left != before.moves_left - dist:
        raise InvariantViolation(
            f"Unit {before.id} movesLeft should be {before.moves_left - dist}, got {after.moves_left}"
        )
    if before.has_attacked and not after.has_attacked:
        raise InvariantViolation(f"Unit {before.id} attack status reverted")


def check_occupancy(units: list[Unit]) -> None:
    seen: dict[Coord, int] = {}
    for u in units:
        if not u.alive:
            continue
        if u.pos in seen:
            raise OccupancyConflict(
                f"Units {seen[u.pos]} and {u.id} both occupy {u.pos}"
            )
        seen[u.pos] = u.id
