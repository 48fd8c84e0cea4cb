from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.api import Verdict
    from ...models.room import Room

from ...events import MatchEvent, RoomClosed, event_bus
from ...models.enums import ActionLogResult, MatchEventKind


def log_event(
    room: Room,
    kind: MatchEventKind,
    result: ActionLogResult = ActionLogResult.APPLIED,
    connection_id: str | None = None,
    message: str | None = None,
    verdict: Verdict | None = None,
) -> None:
    team = room.members.get(connection_id) if connection_id else None
    event_bus.emit(
        MatchEvent(
            room_id=room.id,
            kind=kind,
            result=result,
            connection_id=connection_id,
            team=team,
            message=message,
            rejection=verdict.kind if verdict else None,
        )
    )


def log_verdict(
    room: Room, kind: MatchEventKind, connection_id: str, verdict: Verdict
) -> None:
    result = ActionLogResult.APPLIED if verdict.accepted else ActionLogResult.REJECTED
    log_event(room, kind, result, connection_id, verdict.reason, verdict)


def log_room_closed(room_id: str) -> None:
    event_bus.emit(RoomClosed(room_id=room_id))
