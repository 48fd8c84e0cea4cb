from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager, suppress
from typing import Any

from fastapi import FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import TypeAdapter, ValidationError

from . import config
from .engine import catalog
from .lobby import Lobby
from .logging_listeners import register_listeners
from .messaging import ConnectionHub
from .models.api import (
    ActionLogEntry,
    ActionLogResponse,
    CatalogResponse,
    RoomDetail,
    RoomView,
)
from .models.room import Room
from .storage import LogStore, make_log_store

logger = logging.getLogger(__name__)


def _room_view(room: Room) -> RoomView:
    return RoomView(
        id=room.id,
        members=room.members,
        turn=room.state.turn,
        winner=room.state.winner,
        created_at=room.created_at,
    )


def create_app(store: LogStore | None = None, grid_size: int = config.GRID_SIZE) -> FastAPI:
    hub = ConnectionHub()
    lobby = Lobby(hub, grid_size=grid_size)
    logs = store or make_log_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        unregister = register_listeners(logs)
        try:
            yield
        finally:
            unregister()

    app = FastAPI(title="DuelGrid", lifespan=lifespan)
    app.state.hub = hub
    app.state.lobby = lobby
    app.state.logs = logs

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"ok": True, "rooms": len(lobby.rooms), "waiting": len(lobby.queue)}

    @app.get("/catalog", response_model=CatalogResponse)
    def get_catalog():
        return CatalogResponse(grid_size=lobby.grid_size, archetypes=list(catalog.ARCHETYPES))

    @app.get("/rooms", response_model=list[RoomView])
    def list_rooms():
        return [_room_view(r) for r in lobby.rooms.values()]

    @app.get("/rooms/{room_id}", response_model=RoomDetail)
    def get_room(room_id: str):
        room = lobby.rooms.get(room_id)
        if not room:
            raise HTTPException(404, "room not found")
        return RoomDetail(**_room_view(room).model_dump(), state=room.state.to_wire())

    @app.get("/rooms/{room_id}/log", response_model=ActionLogResponse)
    def get_action_log(room_id: str, limit: int = Query(50, ge=1, le=1000)):
        raw = logs.list(room_id, limit)
        if not raw and room_id not in lobby.rooms:
            raise HTTPException(404, "room not found")
        ta = TypeAdapter(ActionLogEntry)
        entries: list[ActionLogEntry] = []
        for s in raw:
            try:
                entries.append(ta.validate_json(s))
            except ValidationError:
                logger.warning("Skipping malformed log entry for room %s", room_id)
        return ActionLogResponse(entries=entries)

    @app.websocket("/ws")
    async def play(websocket: WebSocket):
        await websocket.accept()
        cid = hub.register()
        writer = asyncio.create_task(hub.pump(cid, websocket))
        logger.info("Connection opened: %s", cid)
        lobby.connect(cid)
        try:
            while True:
                text = await websocket.receive_text()
                try:
                    frame = json.loads(text)
                except json.JSONDecodeError:
                    logger.info("Ignoring non-JSON frame from %s", cid)
                    continue
                if not isinstance(frame, dict) or not isinstance(frame.get("event"), str):
                    logger.info("Ignoring frame without event name from %s", cid)
                    continue
                lobby.dispatch(cid, frame["event"], frame.get("data"))
        except WebSocketDisconnect:
            logger.info("Connection closed: %s", cid)
        finally:
            lobby.disconnect(cid)
            hub.unregister(cid)
            writer.cancel()
            with suppress(asyncio.CancelledError):
                await writer

    return app


config.configure_logging()
app = create_app()
