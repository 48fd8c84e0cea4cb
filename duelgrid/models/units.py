from pydantic import BaseModel, ConfigDict, Field

from .enums import Coord, Team


class UnitArchetype(BaseModel):
    """Static template shared by every unit of the same name."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    max_hp: int = Field(alias="hp", gt=0)
    attack_power: int = Field(alias="atk", ge=0)
    move_range: int = Field(alias="moveRange", ge=0)


class Unit(BaseModel):
    # Wire form is the client's "character" object; extra keys (e.g. sprite) are dropped.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    name: str
    team: Team
    x: int
    y: int
    hp: int = Field(ge=0)
    atk: int = 0
    move_range: int = Field(default=0, alias="moveRange")
    moves_left: int = Field(alias="movesLeft", ge=0)
    has_attacked: bool = Field(default=False, alias="hasAttacked")

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)

    @property
    def alive(self) -> bool:
        return self.hp > 0
