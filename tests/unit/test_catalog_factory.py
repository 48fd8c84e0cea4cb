import pytest

from duelgrid.engine import catalog
from duelgrid.engine.factory import IdAllocator, generate_team, new_match
from duelgrid.models.enums import Team


def test_catalog_order_and_stats():
    assert catalog.names() == [
        "Knight", "Archer", "Mage", "Healer", "Warrior", "Rogue", "Summoner", "Paladin",
    ]
    knight = catalog.archetype("Knight")
    assert (knight.max_hp, knight.attack_power, knight.move_range) == (100, 30, 2)
    assert catalog.archetype("Rogue").move_range == 4


def test_unknown_archetype_raises():
    with pytest.raises(KeyError):
        catalog.archetype("Dragon")


def test_archetype_wire_shape():
    dumped = catalog.archetype("Mage").model_dump(by_alias=True)
    assert dumped == {"name": "Mage", "hp": 70, "atk": 40, "moveRange": 2}


def test_generate_team_lays_out_catalog_on_row():
    team = generate_team(Team.B, 7, IdAllocator())
    assert [u.name for u in team] == catalog.names()
    assert [(u.x, u.y) for u in team] == [(i, 7) for i in range(8)]
    for u in team:
        a = catalog.archetype(u.name)
        assert u.team == Team.B
        assert u.hp == a.max_hp
        assert u.moves_left == a.move_range
        assert u.has_attacked is False


def test_ids_are_unique_and_increasing_across_teams():
    ids = IdAllocator()
    first = generate_team(Team.A, 0, ids)
    second = generate_team(Team.B, 7, ids)
    all_ids = [u.id for u in first + second]
    assert all_ids == sorted(all_ids)
    assert len(set(all_ids)) == 16
    assert ids.next() == 17


def test_new_match_mirrors_teams_across_grid():
    st = new_match(IdAllocator(), grid_size=8)
    assert st.turn == Team.A
    assert st.winner is None
    a_rows = {u.y for u in st.units if u.team == Team.A}
    b_rows = {u.y for u in st.units if u.team == Team.B}
    assert a_rows == {0} and b_rows == {7}


def test_match_state_wire_shape():
    st = new_match(IdAllocator(), grid_size=8)
    wire = st.to_wire()
    assert set(wire) == {"characters", "turn", "winner"}
    assert wire["turn"] == "A" and wire["winner"] is None
    first = wire["characters"][0]
    assert first == {
        "id": 1,
        "name": "Knight",
        "team": "A",
        "x": 0,
        "y": 0,
        "hp": 100,
        "atk": 30,
        "moveRange": 2,
        "movesLeft": 2,
        "hasAttacked": False,
    }
