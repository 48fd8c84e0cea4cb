import logging

import pytest

from duelgrid.engine.factory import IdAllocator
from duelgrid.lobby import Lobby

logger = logging.getLogger(__name__)


class FakeMessenger:
    """Records every outbound frame instead of delivering it."""

    def __init__(self) -> None:
        self.connected: set[str] = set()
        self.groups: dict[str, set[str]] = {}
        self.outbox: list[tuple[str, str, object]] = []

    # test controls
    def connect(self, cid: str) -> None:
        self.connected.add(cid)

    def drop(self, cid: str) -> None:
        self.connected.discard(cid)

    def events_for(self, cid: str) -> list[str]:
        return [e for target, e, _ in self.outbox if target == cid]

    def last(self, cid: str, event: str):
        frames = [d for target, e, d in self.outbox if target == cid and e == event]
        assert frames, f"{cid} never received {event}"
        return frames[-1]

    def clear(self) -> None:
        self.outbox.clear()

    # Messenger protocol
    def send(self, connection_id: str, event: str, data=None) -> None:
        self.outbox.append((connection_id, event, data))

    def broadcast(self, room_id: str, event: str, data=None) -> None:
        for cid in sorted(self.groups.get(room_id, ())):
            self.send(cid, event, data)

    def join(self, connection_id: str, room_id: str) -> None:
        self.groups.setdefault(room_id, set()).add(connection_id)

    def leave(self, connection_id: str, room_id: str) -> None:
        members = self.groups.get(room_id)
        if members is not None:
            members.discard(connection_id)
            if not members:
                del self.groups[room_id]

    def is_connected(self, connection_id: str) -> bool:
        return connection_id in self.connected


@pytest.fixture()
def messenger() -> FakeMessenger:
    return FakeMessenger()


@pytest.fixture()
def lobby(messenger: FakeMessenger) -> Lobby:
    return Lobby(messenger, grid_size=8, ids=IdAllocator())


@pytest.fixture()
def join(lobby: Lobby, messenger: FakeMessenger):
    """Open a connection and hand it to the lobby, as the transport would."""

    def _join(cid: str) -> str:
        messenger.connect(cid)
        lobby.connect(cid)
        logger.debug("[tests] %s joined, queue=%s", cid, list(lobby.queue))
        return cid

    return _join
