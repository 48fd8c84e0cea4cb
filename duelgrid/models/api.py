from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import ActionLogResult, GameOverReason, MatchEventKind, RejectionKind, Team
from .match import MatchState
from .units import UnitArchetype

# ----- Outbound event payloads -----


class StartGamePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: str = Field(alias="roomId")
    players: list[str]


class GameOverPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    winner_id: str = Field(alias="winnerId")
    reason: GameOverReason | None = None


# ----- Validation outcome -----


class Verdict(BaseModel):
    accepted: bool
    state: MatchState | None = None
    kind: RejectionKind | None = None
    reason: str = "ok"


# ----- HTTP views -----


class RoomView(BaseModel):
    id: str
    members: dict[str, Team]
    turn: Team
    winner: Team | None = None
    created_at: datetime


class RoomDetail(RoomView):
    state: dict


class CatalogResponse(BaseModel):
    grid_size: int
    archetypes: list[UnitArchetype]


# ----- Action Log -----


class ActionLogEntry(BaseModel):
    ts: datetime = Field(default_factory=datetime.now)
    room_id: str
    connection_id: str | None = None
    team: Team | None = None
    kind: MatchEventKind
    result: ActionLogResult = ActionLogResult.APPLIED
    message: str | None = None
    rejection: RejectionKind | None = None


class ActionLogResponse(BaseModel):
    entries: list[ActionLogEntry]
