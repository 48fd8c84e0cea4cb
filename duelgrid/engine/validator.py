"""Judges client-proposed end states against the authoritative match state.

The client never says which move it made; the validator diffs the two
snapshots and accepts only if some legal sequence of moves and full-power
attacks explains the difference.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from .. import config
from ..models.api import Verdict
from ..models.enums import Team
from ..models.match import MatchState, ProposedState
from ..models.units import Unit
from . import catalog
from .errors import MalformedProposal, Rejection, UnknownUnit
from .systems import combat, movement, turn, victory

logger = logging.getLogger(__name__)


def parse_proposal(raw: Any) -> ProposedState:
    if isinstance(raw, ProposedState):
        return raw
    if not isinstance(raw, dict):
        raise MalformedProposal("Proposal must be an object with characters and turn")
    try:
        proposed = ProposedState.model_validate(raw)
    except ValidationError as e:
        raise MalformedProposal(f"Malformed proposal: {e.error_count()} invalid field(s)") from e
    ids = [u.id for u in proposed.units]
    if len(ids) != len(set(ids)):
        raise MalformedProposal("Proposal lists the same unit twice")
    return proposed


def _canonical(before: Unit, after: Unit) -> Unit:
    # Identity and archetype stats come from the server; only mutable fields come from the client.
    arch = catalog.archetype(before.name)
    return Unit(
        id=before.id,
        name=before.name,
        team=before.team,
        x=after.x,
        y=after.y,
        hp=movement.clamp_hp(after, arch),
        atk=arch.attack_power,
        move_range=arch.move_range,
        moves_left=after.moves_left,
        has_attacked=after.has_attacked,
    )


def next_state(
    current: MatchState, raw: Any, acting: Team, grid_size: int = config.GRID_SIZE
) -> MatchState:
    """Return the canonical next state or raise a Rejection."""
    proposed = parse_proposal(raw)
    turn.check_actor(current, acting)

    before = current.by_id()
    turn_changed = proposed.turn != current.turn

    after: list[Unit] = []
    for u in proposed.units:
        prior = before.get(u.id)
        if prior is None:
            raise UnknownUnit(f"Unit {u.id} does not exist in this match")
        if turn_changed and prior.team == proposed.turn:
            turn.check_reset(prior, u)
        else:
            movement.check_unit(prior, u, grid_size)
        after.append(_canonical(prior, u))

    # Units dropped from the proposal are recorded as dead where they stood.
    listed = {u.id for u in after}
    after.extend(
        u.model_copy(update={"hp": 0}) for u in current.units if u.id not in listed
    )

    movement.check_occupancy(after)
    combat.check_attacks(before, after)

    return MatchState(
        units=after,
        turn=proposed.turn,
        winner=victory.resolve(current.winner, after),
    )


def validate(
    current: MatchState, raw: Any, acting: Team, grid_size: int = config.GRID_SIZE
) -> Verdict:
    try:
        state = next_state(current, raw, acting, grid_size)
    except Rejection as e:
        logger.info("Validation failed for team %s: %s", acting.value, e.reason)
        return Verdict(accepted=False, kind=e.kind, reason=e.reason)
    logger.debug("Validation succeeded for team %s", acting.value)
    return Verdict(accepted=True, state=state)


def end_turn(current: MatchState, requesting: Team) -> Verdict:
    try:
        state = turn.advance(current, requesting)
    except Rejection as e:
        logger.info("End turn refused for team %s: %s", requesting.value, e.reason)
        return Verdict(accepted=False, kind=e.kind, reason=e.reason)
    return Verdict(accepted=True, state=state)
