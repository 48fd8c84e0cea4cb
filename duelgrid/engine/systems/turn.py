from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.units import Unit

from ...models.enums import Team
from ...models.match import MatchState
from .. import catalog
from ..errors import InvariantViolation, TurnViolation


def check_actor(state: MatchState, acting: Team) -> None:
    if acting != state.turn:
        raise TurnViolation(f"Not team {acting.value}'s turn, current turn is {state.turn.value}")
    if state.winner is not None:
        raise TurnViolation(f"The match is over, team {state.winner.value} won")


def check_reset(before: Unit, after: Unit) -> None:
    """A unit whose team's turn is starting must come back fully refreshed and unmoved."""
    arch = catalog.archetype(before.name)
    if after.team != before.team:
        raise InvariantViolation(f"Unit {before.id} changed team")
    if after.pos != before.pos:
        raise InvariantViolation(f"Unit {before.id} moved during the opponent's turn")
    if after.moves_left != arch.move_range or after.has_attacked:
        raise InvariantViolation(f"Unit {before.id} was not reset for the new turn")


def reset_unit(u: Unit) -> Unit:
    arch = catalog.archetype(u.name)
    return u.model_copy(update={"moves_left": arch.move_range, "has_attacked": False})


def advance(state: MatchState, requesting: Team) -> MatchState:
    """Hand the turn to the other team, refreshing its living units."""
    if requesting != state.turn:
        raise TurnViolation("It is not your turn.")
    if state.winner is not None:
        raise TurnViolation("The match is already over.")
    new_turn = state.turn.opponent
    units = [
        reset_unit(u) if u.team == new_turn and u.alive else u.model_copy()
        for u in state.units
    ]
    return MatchState(units=units, turn=new_turn, winner=state.winner)
