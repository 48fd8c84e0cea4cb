def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "rooms": 0, "waiting": 0}


def test_catalog(client):
    body = client.get("/catalog").json()
    assert body["grid_size"] == 8
    assert len(body["archetypes"]) == 8
    assert body["archetypes"][0] == {"name": "Knight", "hp": 100, "atk": 30, "moveRange": 2}


def test_unknown_room_is_404(client):
    assert client.get("/rooms/nope").status_code == 404
    assert client.get("/rooms/nope/log").status_code == 404


def test_rooms_empty(client):
    assert client.get("/rooms").json() == []
