from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import Team
from .units import Unit


class MatchState(BaseModel):
    """Authoritative state of one match; serialized as the `gameState` payload."""

    model_config = ConfigDict(populate_by_name=True)

    units: list[Unit] = Field(default_factory=list, alias="characters")
    turn: Team = Team.A
    winner: Team | None = None

    def unit(self, unit_id: int) -> Unit | None:
        return next((u for u in self.units if u.id == unit_id), None)

    def by_id(self) -> dict[int, Unit]:
        return {u.id: u for u in self.units}

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ProposedState(BaseModel):
    """Inbound `updateGame` payload: the client's claimed next state."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    units: list[Unit] = Field(alias="characters")
    turn: Team
