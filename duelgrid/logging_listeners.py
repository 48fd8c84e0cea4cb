from __future__ import annotations

import logging
from collections.abc import Callable

from .events import MatchEvent, RoomClosed, event_bus
from .models.api import ActionLogEntry
from .models.enums import ActionLogResult
from .storage import LogStore

logger = logging.getLogger("duelgrid.match")


def _to_entry(ev: MatchEvent) -> ActionLogEntry:
    return ActionLogEntry(
        room_id=ev.room_id,
        connection_id=ev.connection_id,
        team=ev.team,
        kind=ev.kind,
        result=ev.result,
        message=ev.message,
        rejection=ev.rejection,
    )


def _on_match_event_log(ev: MatchEvent) -> None:
    level = logging.INFO if ev.result == ActionLogResult.APPLIED else logging.WARNING
    logger.log(
        level,
        "[%s] %s %s team=%s %s",
        ev.room_id,
        ev.kind.value,
        ev.result.value,
        ev.team.value if ev.team else "-",
        ev.message or "",
    )


def register_listeners(store: LogStore) -> Callable[[], None]:
    """Wire `store` and the match logger to the event bus; returns an unsubscribe hook."""

    def _on_match_event_store(ev: MatchEvent) -> None:
        # Convert event to ActionLogEntry JSON for persistence
        store.append(ev.room_id, _to_entry(ev).model_dump_json())

    def _on_room_closed(ev: RoomClosed) -> None:
        store.delete(ev.room_id)

    event_bus.subscribe(MatchEvent, _on_match_event_store)
    event_bus.subscribe(MatchEvent, _on_match_event_log)
    event_bus.subscribe(RoomClosed, _on_room_closed)

    def unregister() -> None:
        event_bus.unsubscribe(MatchEvent, _on_match_event_store)
        event_bus.unsubscribe(MatchEvent, _on_match_event_log)
        event_bus.unsubscribe(RoomClosed, _on_room_closed)

    return unregister
