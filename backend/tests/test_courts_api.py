from fastapi.testclient import TestClient


def test_court_crud(client: TestClient):
    response = client.post("/api/courts", json={"name": "Pista 1"})
    assert response.status_code == 201
    court = response.json()
    assert court["is_active"] is True

    response = client.put(f"/api/courts/{court['id']}", json={"name": "Pista 1 Cubierta", "is_active": False})
    assert response.status_code == 200
    assert response.json()["name"] == "Pista 1 Cubierta"
    assert response.json()["is_active"] is False

    assert client.delete(f"/api/courts/{court['id']}").status_code == 204
    assert client.get("/api/courts").json() == []


def test_list_active_courts(client: TestClient):
    client.post("/api/courts", json={"name": "B Court"})
    client.post("/api/courts", json={"name": "A Court"})
    client.post("/api/courts", json={"name": "Closed", "is_active": False})

    assert [c["name"] for c in client.get("/api/courts").json()] == ["A Court", "B Court", "Closed"]
    assert [c["name"] for c in client.get("/api/courts?active_only=true").json()] == ["A Court", "B Court"]


def test_court_name_required(client: TestClient):
    assert client.post("/api/courts", json={"name": "   "}).status_code == 422


def test_unknown_court(client: TestClient):
    assert client.put("/api/courts/999", json={"name": "Nope"}).status_code == 404
    assert client.delete("/api/courts/999").status_code == 404


def test_get_court(client: TestClient):
    court = client.post("/api/courts", json={"name": "Pista 3"}).json()

    response = client.get(f"/api/courts/{court['id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "Pista 3"
    assert client.get("/api/courts/999").status_code == 404


def test_court_with_matches_cannot_be_deleted(client: TestClient):
    championship = client.post(
        "/api/championships", json={"name": "Court Cup", "format": "liga", "start_date": "2026-06-01"}
    ).json()
    cid = championship["id"]
    for name in ("North", "South"):
        client.post(
            f"/api/championships/{cid}/teams", json={"name": name, "player1_name": "Ines", "player2_name": "Marta"}
        )
    client.post(f"/api/championships/{cid}/generate-fixtures")
    court = client.post("/api/courts", json={"name": "Pista 2"}).json()
    match = client.get(f"/api/championships/{cid}/matches").json()[0]
    client.put(f"/api/matches/{match['id']}", json={"court_id": court["id"]})

    assert client.delete(f"/api/courts/{court['id']}").status_code == 400

    detail = client.get(f"/api/matches/{match['id']}").json()
    assert detail["court_id"] == court["id"]
    assert detail["court_name"] == "Pista 2"
    assert client.get(f"/api/courts/{court['id']}").status_code == 200


def test_health(client: TestClient):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
