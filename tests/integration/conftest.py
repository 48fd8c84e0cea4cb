from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from duelgrid.app import create_app
from duelgrid.storage import MemoryLogStore


@pytest.fixture()
def client() -> Iterator[TestClient]:
    # Fresh lobby and log store per test; entering the client runs the app lifespan.
    app = create_app(store=MemoryLogStore(), grid_size=8)
    with TestClient(app) as c:
        yield c
