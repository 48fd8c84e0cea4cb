from duelgrid.engine import validator
from duelgrid.engine.factory import IdAllocator, new_match
from duelgrid.engine.systems import turn, victory
from duelgrid.models.enums import RejectionKind, Team
from tests.utils.data import match_state, unit_template


def test_end_turn_resets_incoming_team_only():
    st = match_state(
        unit_template(1, "Knight", Team.A, (0, 1), moves_left=0, has_attacked=True),
        unit_template(2, "Rogue", Team.B, (5, 5), moves_left=1, has_attacked=True),
        unit_template(3, "Archer", Team.B, (6, 5), moves_left=0),
    )
    v = validator.end_turn(st, Team.A)
    assert v.accepted, v.reason
    nxt = v.state
    assert nxt.turn == Team.B
    assert nxt.unit(1).moves_left == 0 and nxt.unit(1).has_attacked is True
    assert nxt.unit(2).moves_left == 4 and nxt.unit(2).has_attacked is False
    assert nxt.unit(3).moves_left == 3
    # the original is left alone
    assert st.turn == Team.A and st.unit(2).moves_left == 1


def test_end_turn_skips_dead_units():
    st = match_state(
        unit_template(1, "Knight", Team.A, (0, 0)),
        unit_template(2, "Rogue", Team.B, (5, 5), hp=0, moves_left=0),
        unit_template(3, "Mage", Team.B, (6, 6), moves_left=0),
    )
    nxt = turn.advance(st, Team.A)
    assert nxt.unit(2).moves_left == 0
    assert nxt.unit(3).moves_left == 2


def test_end_turn_by_wrong_team_rejected():
    st = new_match(IdAllocator(), grid_size=8)
    v = validator.end_turn(st, Team.B)
    assert not v.accepted
    assert v.kind == RejectionKind.TURN_VIOLATION
    assert v.reason == "It is not your turn."


def test_end_turn_after_match_over_rejected():
    st = match_state(
        unit_template(1, "Knight", Team.A, (0, 0)),
        unit_template(2, "Rogue", Team.B, (5, 5), hp=0),
        winner=Team.A,
    )
    v = validator.end_turn(st, Team.A)
    assert not v.accepted
    assert v.kind == RejectionKind.TURN_VIOLATION


def test_turns_alternate():
    st = new_match(IdAllocator(), grid_size=8)
    st = turn.advance(st, Team.A)
    st = turn.advance(st, Team.B)
    assert st.turn == Team.A
    assert all(u.moves_left == u.move_range for u in st.units)


def test_compute_winner():
    both = [unit_template(1, team=Team.A), unit_template(2, team=Team.B, pos=(3, 3))]
    assert victory.compute_winner(both) is None
    only_a = [unit_template(1, team=Team.A), unit_template(2, team=Team.B, hp=0)]
    assert victory.compute_winner(only_a) == Team.A
    only_b = [unit_template(1, team=Team.A, hp=0), unit_template(2, team=Team.B)]
    assert victory.compute_winner(only_b) == Team.B
    nobody = [unit_template(1, team=Team.A, hp=0), unit_template(2, team=Team.B, hp=0)]
    assert victory.compute_winner(nobody) is None


def test_existing_winner_is_kept():
    only_b = [unit_template(1, team=Team.A, hp=0), unit_template(2, team=Team.B)]
    assert victory.resolve(Team.A, only_b) == Team.A
