"""
/games API 測試：透過 TestClient 打完整的 HTTP 流程
"""
from models import Door


def create_game(client):
    res = client.post("/games")
    assert res.status_code == 201
    return int(res.headers["location"].rsplit("/", 1)[-1])


def door_ids(client, game_id):
    return [door["id"] for door in client.get(f"/games/{game_id}/doors").json()["doors"]]


def prize_door_id(session_factory, game_id):
    with session_factory() as session:
        doors = session.query(Door).filter(Door.game_id == game_id).all()
        return next(door.id for door in doors if door.is_prize)


def goat_door_id(session_factory, game_id):
    with session_factory() as session:
        doors = session.query(Door).filter(Door.game_id == game_id).order_by(Door.id).all()
        return next(door.id for door in doors if not door.is_prize)


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_game_sets_location(client):
    res = client.post("/games")

    assert res.status_code == 201
    assert res.content == b""
    location = res.headers["location"]
    assert location.startswith("http://testserver/games/")

    game = client.get(location)
    assert game.status_code == 200


def test_show_game(client):
    game_id = create_game(client)

    res = client.get(f"/games/{game_id}")

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == game_id
    assert body["status"] == "AWAITING_INITIAL_SELECTION"
    links = {link["rel"]: link["href"] for link in body["links"]}
    assert links["self"] == f"http://testserver/games/{game_id}"
    assert links["doors"] == f"http://testserver/games/{game_id}/doors"


def test_show_doors_hides_content(client):
    game_id = create_game(client)

    res = client.get(f"/games/{game_id}/doors")

    assert res.status_code == 200
    body = res.json()
    assert len(body["doors"]) == 3
    for door in body["doors"]:
        assert door["status"] == "CLOSED"
        assert door["content"] == "UNKNOWN"
        assert door["links"][0]["href"] == f"http://testserver/games/{game_id}/doors/{door['id']}"
    assert body["links"][0]["rel"] == "self"


def test_doors_listing_is_stable(client):
    game_id = create_game(client)
    assert door_ids(client, game_id) == door_ids(client, game_id)


def test_missing_game_returns_404(client):
    assert client.get("/games/999").status_code == 404
    assert client.get("/games/999/doors").status_code == 404
    assert client.delete("/games/999").status_code == 404
    res = client.put("/games/999/doors/1", json={"status": "SELECTED"})
    assert res.status_code == 404
    assert res.json()["detail"] == "Game 999 does not exist"


def test_destroy_game(client):
    game_id = create_game(client)

    res = client.delete(f"/games/{game_id}")

    assert res.status_code == 200
    assert client.get(f"/games/{game_id}").status_code == 404


def test_missing_door_returns_404_and_leaves_game(client):
    game_id = create_game(client)

    res = client.put(f"/games/{game_id}/doors/999", json={"status": "SELECTED"})

    assert res.status_code == 404
    assert "Door 999" in res.json()["detail"]
    assert client.get(f"/games/{game_id}").json()["status"] == "AWAITING_INITIAL_SELECTION"


def test_malformed_payload_returns_400(client):
    game_id = create_game(client)
    door_id = door_ids(client, game_id)[0]

    missing = client.put(f"/games/{game_id}/doors/{door_id}", json={"state": "SELECTED"})
    unknown = client.put(f"/games/{game_id}/doors/{door_id}", json={"status": "AJAR"})

    assert missing.status_code == 400
    assert "malformed" in missing.json()["detail"]
    assert unknown.status_code == 400
    assert unknown.json()["detail"] == "'AJAR' is not a valid door status"


def test_illegal_transition_returns_409(client):
    game_id = create_game(client)
    door_id = door_ids(client, game_id)[0]

    res = client.put(f"/games/{game_id}/doors/{door_id}", json={"status": "OPENED"})

    assert res.status_code == 409
    doors = client.get(f"/games/{game_id}/doors").json()["doors"]
    assert all(door["status"] == "CLOSED" for door in doors)


def test_switch_and_win(client, session_factory):
    game_id = create_game(client)
    first_pick = goat_door_id(session_factory, game_id)
    prize = prize_door_id(session_factory, game_id)

    res = client.put(f"/games/{game_id}/doors/{first_pick}", json={"status": "selected"})
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}

    body = client.get(f"/games/{game_id}").json()
    assert body["status"] == "AWAITING_FINAL_SELECTION"

    doors = {door["id"]: door for door in client.get(f"/games/{game_id}/doors").json()["doors"]}
    assert doors[first_pick]["status"] == "SELECTED"
    assert doors[prize]["status"] == "CLOSED"
    revealed = [door for door in doors.values() if door["status"] == "OPENED"]
    assert len(revealed) == 1
    assert revealed[0]["content"] in ("JUICER", "SMALL_FURRY_ANIMAL")

    res = client.put(f"/games/{game_id}/doors/{prize}", json={"status": "OPENED"})
    assert res.status_code == 200

    assert client.get(f"/games/{game_id}").json()["status"] == "WON"
    doors = {door["id"]: door for door in client.get(f"/games/{game_id}/doors").json()["doors"]}
    assert doors[prize]["content"] == "BICYCLE"


def test_stay_and_lose(client, session_factory):
    game_id = create_game(client)
    first_pick = goat_door_id(session_factory, game_id)

    client.put(f"/games/{game_id}/doors/{first_pick}", json={"status": "SELECTED"})
    res = client.put(f"/games/{game_id}/doors/{first_pick}", json={"status": "OPENED"})

    assert res.status_code == 200
    assert client.get(f"/games/{game_id}").json()["status"] == "LOST"

    again = client.put(f"/games/{game_id}/doors/{first_pick}", json={"status": "OPENED"})
    assert again.status_code == 409
    assert "already over" in again.json()["detail"]


def test_unreadable_body_returns_400(client):
    game_id = create_game(client)
    door_id = door_ids(client, game_id)[0]
    url = f"/games/{game_id}/doors/{door_id}"

    broken = client.put(url, content=b"{status: SELECTED", headers={"content-type": "application/json"})
    empty = client.put(url, content=b"", headers={"content-type": "application/json"})

    assert broken.status_code == 400
    assert "malformed" in broken.json()["detail"]
    assert empty.status_code == 400
    assert client.get(f"/games/{game_id}").json()["status"] == "AWAITING_INITIAL_SELECTION"
