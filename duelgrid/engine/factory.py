from __future__ import annotations

import itertools

from ..models.enums import Team
from ..models.match import MatchState
from ..models.units import Unit
from .catalog import ARCHETYPES


class IdAllocator:
    """Mints unit ids: monotonically increasing, never reused."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


def generate_team(team: Team, row: int, ids: IdAllocator) -> list[Unit]:
    """One unit per archetype, in catalog order, at column = archetype index."""
    return [
        Unit(
            id=ids.next(),
            name=a.name,
            team=team,
            x=col,
            y=row,
            hp=a.max_hp,
            atk=a.attack_power,
            move_range=a.move_range,
            moves_left=a.move_range,
            has_attacked=False,
        )
        for col, a in enumerate(ARCHETYPES)
    ]


def new_match(ids: IdAllocator, grid_size: int) -> MatchState:
    units = generate_team(Team.A, 0, ids) + generate_team(Team.B, grid_size - 1, ids)
    return MatchState(units=units, turn=Team.A, winner=None)
