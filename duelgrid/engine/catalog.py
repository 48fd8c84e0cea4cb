from __future__ import annotations

from ..models.units import UnitArchetype

# Catalog order is significant: it fixes each archetype's starting column.
ARCHETYPES: tuple[UnitArchetype, ...] = (
    UnitArchetype(name="Knight", max_hp=100, attack_power=30, move_range=2),
    UnitArchetype(name="Archer", max_hp=80, attack_power=25, move_range=3),
    UnitArchetype(name="Mage", max_hp=70, attack_power=40, move_range=2),
    UnitArchetype(name="Healer", max_hp=90, attack_power=10, move_range=2),
    UnitArchetype(name="Warrior", max_hp=110, attack_power=35, move_range=1),
    UnitArchetype(name="Rogue", max_hp=75, attack_power=30, move_range=4),
    UnitArchetype(name="Summoner", max_hp=65, attack_power=45, move_range=2),
    UnitArchetype(name="Paladin", max_hp=95, attack_power=20, move_range=1),
)

_BY_NAME = {a.name: a for a in ARCHETYPES}


def archetype(name: str) -> UnitArchetype:
    if name not in _BY_NAME:
        raise KeyError(f"Unknown archetype: {name}")
    return _BY_NAME[name]


def names() -> list[str]:
    return [a.name for a in ARCHETYPES]
