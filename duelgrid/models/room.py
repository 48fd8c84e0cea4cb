from datetime import datetime

from pydantic import BaseModel, Field

from .enums import Team
from .match import MatchState


class Room(BaseModel):
    id: str
    members: dict[str, Team] = Field(default_factory=dict)
    state: MatchState
    created_at: datetime = Field(default_factory=datetime.now)

    def others(self, connection_id: str) -> list[str]:
        return [cid for cid in self.members if cid != connection_id]
