"""Delivery of named events to connections and to room broadcast groups."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol
from uuid import uuid4

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class Messenger(Protocol):
    def send(self, connection_id: str, event: str, data: Any = None) -> None: ...
    def broadcast(self, room_id: str, event: str, data: Any = None) -> None: ...
    def join(self, connection_id: str, room_id: str) -> None: ...
    def leave(self, connection_id: str, room_id: str) -> None: ...
    def is_connected(self, connection_id: str) -> bool: ...


def envelope(event: str, data: Any = None) -> dict[str, Any]:
    return {"event": event, "data": {} if data is None else data}


class ConnectionHub:
    """Messenger over FastAPI WebSockets.

    Sends never block the caller: frames go onto a per-connection queue that a
    writer task drains, so lobby handlers run to completion without awaiting.
    """

    def __init__(self) -> None:
        self._outboxes: dict[str, asyncio.Queue[dict[str, Any] | None]] = {}
        self._groups: dict[str, set[str]] = {}

    def register(self) -> str:
        cid = uuid4().hex
        self._outboxes[cid] = asyncio.Queue()
        return cid

    def unregister(self, connection_id: str) -> None:
        box = self._outboxes.pop(connection_id, None)
        if box is not None:
            box.put_nowait(None)
        for members in self._groups.values():
            members.discard(connection_id)
        self._groups = {rid: m for rid, m in self._groups.items() if m}

    async def pump(self, connection_id: str, websocket: WebSocket) -> None:
        """Write queued frames to `websocket` until the connection is unregistered."""
        box = self._outboxes.get(connection_id)
        if box is None:
            return
        while True:
            frame = await box.get()
            if frame is None:
                return
            try:
                await websocket.send_json(frame)
            except (WebSocketDisconnect, RuntimeError, OSError) as exc:
                # Nothing more can reach this socket; stop queueing for it.
                logger.info("Send to %s failed: %r", connection_id, exc)
                self._outboxes.pop(connection_id, None)
                return

    def is_connected(self, connection_id: str) -> bool:
        return connection_id in self._outboxes

    def send(self, connection_id: str, event: str, data: Any = None) -> None:
        box = self._outboxes.get(connection_id)
        if box is None:
            logger.debug("Dropping %s for closed connection %s", event, connection_id)
            return
        box.put_nowait(envelope(event, data))

    def broadcast(self, room_id: str, event: str, data: Any = None) -> None:
        for cid in sorted(self._groups.get(room_id, ())):
            self.send(cid, event, data)

    def join(self, connection_id: str, room_id: str) -> None:
        self._groups.setdefault(room_id, set()).add(connection_id)

    def leave(self, connection_id: str, room_id: str) -> None:
        members = self._groups.get(room_id)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._groups[room_id]
