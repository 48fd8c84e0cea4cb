"""Matchmaking queue and room registry.

Every public method is a synchronous, run-to-completion handler for one
inbound message: nothing here awaits, so no other handler can observe a
half-updated queue or room.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import Any
from uuid import uuid4

from . import config
from .engine import validator
from .engine.factory import IdAllocator, new_match
from .engine.logging.logger import log_event, log_room_closed, log_verdict
from .messaging import Messenger
from .models.api import GameOverPayload, StartGamePayload, Verdict
from .models.enums import GameOverReason, MatchEventKind
from .models.room import Room

logger = logging.getLogger(__name__)

# Outbound event names (wire contract)
ASSIGN_TEAM = "assignTeam"
START_GAME = "startGame"
GAME_STATE = "gameState"
INVALID_UPDATE = "invalidUpdate"
GAME_OVER = "gameOver"
GAME_ENDED = "gameEnded"
WAITING = "waitingForOpponent"


class Lobby:
    def __init__(
        self,
        messenger: Messenger,
        grid_size: int = config.GRID_SIZE,
        ids: IdAllocator | None = None,
    ) -> None:
        self.messenger = messenger
        self.grid_size = grid_size
        self.ids = ids or IdAllocator()
        self.queue: deque[str] = deque()
        self.rooms: dict[str, Room] = {}
        self.room_of: dict[str, str] = {}
        self._handlers: dict[str, Callable[[str, Any], None]] = {
            "updateGame": self.update_game,
            "endTurn": lambda cid, _data: self.end_turn(cid),
            "surrender": lambda cid, _data: self.surrender(cid),
            "playAgain": lambda cid, _data: self.play_again(cid),
        }

    # -- inbound messages --

    def dispatch(self, connection_id: str, event: str, data: Any = None) -> None:
        handler = self._handlers.get(event)
        if handler is None:
            logger.info("Ignoring unknown event %r from %s", event, connection_id)
            return
        handler(connection_id, data)

    def connect(self, connection_id: str) -> None:
        self.enqueue(connection_id)
        self._pair_or_wait(connection_id)

    def update_game(self, connection_id: str, payload: Any) -> None:
        room = self._room_for(connection_id, "updateGame")
        if room is None:
            return
        team = room.members[connection_id]
        verdict = validator.validate(room.state, payload, team, self.grid_size)
        self._commit(room, connection_id, MatchEventKind.UPDATE, verdict)

    def end_turn(self, connection_id: str) -> None:
        room = self._room_for(connection_id, "endTurn")
        if room is None:
            return
        verdict = validator.end_turn(room.state, room.members[connection_id])
        self._commit(room, connection_id, MatchEventKind.END_TURN, verdict)

    def surrender(self, connection_id: str) -> None:
        room = self._room_for(connection_id, "surrender")
        if room is None:
            return
        loser = room.members[connection_id]
        if room.state.winner is None:
            room.state.winner = loser.opponent
        winner_ids = [cid for cid, team in room.members.items() if team == room.state.winner]
        for winner_id in winner_ids:
            self.messenger.broadcast(
                room.id,
                GAME_OVER,
                _game_over(winner_id, GameOverReason.SURRENDER),
            )
        self.messenger.broadcast(room.id, GAME_ENDED)
        log_event(
            room,
            MatchEventKind.SURRENDER,
            connection_id=connection_id,
            message=f"team {loser.value} surrendered",
        )
        logger.info("Team %s surrendered in room %s", loser.value, room.id)
        self.teardown(room.id)

    def disconnect(self, connection_id: str) -> None:
        self._dequeue(connection_id)
        rid = self.room_of.pop(connection_id, None)
        room = self.rooms.get(rid) if rid else None
        if room is None:
            logger.info("Connection %s left without a room", connection_id)
            return
        leaver = room.members.get(connection_id)
        remaining = room.others(connection_id)
        if remaining and leaver is not None and room.state.winner is None:
            room.state.winner = leaver.opponent
            log_event(
                room,
                MatchEventKind.FORFEIT,
                connection_id=connection_id,
                message=f"team {leaver.value} disconnected",
            )
            for winner_id in remaining:
                self.messenger.send(
                    winner_id,
                    GAME_OVER,
                    _game_over(winner_id, GameOverReason.OPPONENT_DISCONNECTED),
                )
        room.members.pop(connection_id, None)
        self.messenger.leave(connection_id, room.id)
        if not room.members:
            del self.rooms[room.id]
            log_room_closed(room.id)
            logger.info("Deleted empty room %s", room.id)

    def play_again(self, connection_id: str) -> None:
        rid = self.room_of.get(connection_id)
        if rid is not None:
            self.teardown(rid)
        self.enqueue(connection_id)
        self._pair_or_wait(connection_id)

    # -- queue and pairing --

    def enqueue(self, connection_id: str) -> None:
        if connection_id not in self.queue:
            self.queue.append(connection_id)
            logger.info("Queued %s (queue length %d)", connection_id, len(self.queue))

    def try_pair(self) -> list[Room]:
        created: list[Room] = []
        while len(self.queue) >= 2:
            first = self.queue.popleft()
            second = self.queue.popleft()
            live = [cid for cid in (first, second) if self.messenger.is_connected(cid)]
            if len(live) < 2:
                # Stale entry: the survivor keeps its place at the front.
                self.queue.extendleft(reversed(live))
                logger.info("Dropped stale queue entries, requeued %s", live)
                continue
            created.append(self._open_room(first, second))
        return created

    def _pair_or_wait(self, connection_id: str) -> None:
        self.try_pair()
        if connection_id in self.queue:
            self.messenger.send(connection_id, WAITING)

    def _open_room(self, first: str, second: str) -> Room:
        rid = uuid4().hex
        while rid in self.rooms:
            rid = uuid4().hex
        room = Room(id=rid, state=new_match(self.ids, self.grid_size))
        room.members[first] = room.state.turn
        room.members[second] = room.state.turn.opponent
        self.rooms[rid] = room
        for cid in room.members:
            self.room_of[cid] = rid
            self.messenger.join(cid, rid)
        for cid, team in room.members.items():
            self.messenger.send(cid, ASSIGN_TEAM, team.value)
        self.messenger.broadcast(
            rid,
            START_GAME,
            StartGamePayload(room_id=rid, players=[first, second]).model_dump(by_alias=True),
        )
        self.messenger.broadcast(rid, GAME_STATE, room.state.to_wire())
        log_event(room, MatchEventKind.MATCH_STARTED, message=f"{first} (A) vs {second} (B)")
        logger.info("Room %s created with %s (A) and %s (B)", rid, first, second)
        return room

    # -- teardown --

    def teardown(self, room_id: str) -> None:
        """Remove the room and release every member from it and from the queue."""
        room = self.rooms.pop(room_id, None)
        if room is None:
            return
        for cid in room.members:
            if self.room_of.get(cid) == room_id:
                del self.room_of[cid]
            self._dequeue(cid)
            self.messenger.leave(cid, room_id)
        log_room_closed(room_id)
        logger.info("Room %s torn down", room_id)

    # -- helpers --

    def _dequeue(self, connection_id: str) -> None:
        if connection_id in self.queue:
            self.queue.remove(connection_id)

    def _room_for(self, connection_id: str, event: str) -> Room | None:
        rid = self.room_of.get(connection_id)
        room = self.rooms.get(rid) if rid else None
        if room is None or connection_id not in room.members:
            logger.info("%s: no room found for connection %s", event, connection_id)
            return None
        return room

    def _commit(
        self, room: Room, connection_id: str, kind: MatchEventKind, verdict: Verdict
    ) -> None:
        log_verdict(room, kind, connection_id, verdict)
        if verdict.accepted and verdict.state is not None:
            room.state = verdict.state
            self.messenger.broadcast(room.id, GAME_STATE, room.state.to_wire())
        else:
            self.messenger.send(connection_id, INVALID_UPDATE, verdict.reason)


def _game_over(winner_id: str, reason: GameOverReason) -> dict[str, Any]:
    return GameOverPayload(winner_id=winner_id, reason=reason).model_dump(mode="json", by_alias=True)
