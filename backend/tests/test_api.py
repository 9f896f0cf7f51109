def create(client, **overrides):
    body = {"roomName": "Fun", "isPublic": True, "timePerRound": 30, "maxPlayers": 4}
    body.update(overrides)
    return client.post("/api/create-room", json=body)


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json()["status"] == "OK"


def test_create_room(client):
    res = create(client, difficulty="hard")
    assert res.status_code == 200
    data = res.get_json()
    assert data["roomId"] == data["room"]["id"]
    assert data["room"]["status"] == "waiting"
    assert data["room"]["players"] == []
    assert data["room"]["difficulty"] == "hard"


def test_create_room_rejects_capacity(client):
    res = create(client, maxPlayers=9)
    assert res.status_code == 400
    assert res.get_json()["error"] == "invalid_config"

    res = create(client, timePerRound=0)
    assert res.status_code == 400


def test_list_public_rooms(client):
    public_id = create(client).get_json()["roomId"]
    create(client, roomName="Hidden", isPublic=False)

    rooms = client.get("/api/rooms").get_json()
    assert rooms == [
        {"id": public_id, "name": "Fun", "players": 0, "maxPlayers": 4, "difficulty": "medium"}
    ]


def test_get_room(client):
    room_id = create(client).get_json()["roomId"]
    res = client.get(f"/api/room/{room_id}")
    assert res.status_code == 200
    assert res.get_json()["id"] == room_id

    res = client.get("/api/room/NOPE1234")
    assert res.status_code == 404
    assert res.get_json()["error"] == "room_not_found"


def test_word_suggestions(client):
    res = client.get("/api/words?count=2&category=food")
    assert res.status_code == 200
    assert len(res.get_json()["words"]) == 2

    res = client.get("/api/words?category=planets")
    assert res.status_code == 400
