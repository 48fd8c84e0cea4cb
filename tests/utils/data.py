# tests/utils/data.py
from __future__ import annotations

from duelgrid.engine import catalog
from duelgrid.models.enums import Team
from duelgrid.models.match import MatchState
from duelgrid.models.units import Unit


# ----- Unit Templates -----

def unit_template(
    uid: int,
    name: str = "Knight",
    team: Team = Team.A,
    pos: tuple[int, int] = (0, 0),
    *,
    hp: int | None = None,
    moves_left: int | None = None,
    has_attacked: bool = False,
) -> Unit:
    """A unit straight from the catalog, optionally worn down."""
    a = catalog.archetype(name)
    return Unit(
        id=uid,
        name=name,
        team=team,
        x=pos[0],
        y=pos[1],
        hp=a.max_hp if hp is None else hp,
        atk=a.attack_power,
        move_range=a.move_range,
        moves_left=a.move_range if moves_left is None else moves_left,
        has_attacked=has_attacked,
    )


def match_state(*units: Unit, turn: Team = Team.A, winner: Team | None = None) -> MatchState:
    return MatchState(units=list(units), turn=turn, winner=winner)


# ----- Proposals -----

def propose(
    st: MatchState,
    changes: dict[int, dict] | None = None,
    *,
    turn: Team | None = None,
    drop: tuple[int, ...] = (),
) -> dict:
    """Wire-shaped updateGame payload: `st` with per-unit field overrides applied."""
    changes = changes or {}
    characters = [
        u.model_copy(update=changes.get(u.id, {})).model_dump(mode="json", by_alias=True)
        for u in st.units
        if u.id not in drop
    ]
    return {"characters": characters, "turn": (turn or st.turn).value}
