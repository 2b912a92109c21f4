"""
API tests for championships: CRUD, fixture generation, results and standings.
"""
import pytest
from fastapi.testclient import TestClient


def create_championship(client: TestClient, **overrides) -> dict:
    payload = {"name": "Winter League", "format": "liga", "start_date": "2026-11-01"}
    payload.update(overrides)
    response = client.post("/api/championships", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def register_teams(client: TestClient, championship_id: int, names, group_number=1) -> list:
    teams = []
    for name in names:
        response = client.post(
            f"/api/championships/{championship_id}/teams",
            json={
                "name": name,
                "player1_name": f"{name} Drive",
                "player2_name": f"{name} Reves",
                "group_number": group_number,
            },
        )
        assert response.status_code == 201, response.text
        teams.append(response.json())
    return teams


def list_matches(client: TestClient, championship_id: int) -> list:
    response = client.get(f"/api/championships/{championship_id}/matches")
    assert response.status_code == 200
    return response.json()


def find_match(matches, team_a, team_b) -> dict:
    wanted = {team_a["id"], team_b["id"]}
    return next(m for m in matches if {m["team1_id"], m["team2_id"]} == wanted)


def submit(client: TestClient, match: dict, winner: dict, winner_games=(6, 6), loser_games=(3, 2)):
    """Post a straight-sets win for ``winner``, oriented to the match's team order."""
    if match["team1_id"] == winner["id"]:
        sets = [{"team1_games": w, "team2_games": l} for w, l in zip(winner_games, loser_games)]
    else:
        sets = [{"team1_games": l, "team2_games": w} for w, l in zip(winner_games, loser_games)]
    response = client.post(f"/api/matches/{match['id']}/result", json={"sets": sets})
    assert response.status_code == 200, response.text
    return response.json()


# ============================================================================
# Championship CRUD
# ============================================================================


def test_create_championship_defaults(client: TestClient):
    data = create_championship(client)

    assert data["name"] == "Winter League"
    assert data["status"] == "draft"
    assert (data["points_win"], data["points_loss"], data["points_draw"]) == (3, 0, 0)
    assert data["num_groups"] == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "X"},
        {"format": "knockout"},
        {"num_groups": 0},
        {"points_win": -1},
        {"end_date": "2026-10-01"},
    ],
)
def test_create_championship_rejects_invalid_input(client: TestClient, overrides):
    payload = {"name": "Winter League", "format": "liga", "start_date": "2026-11-01"}
    payload.update(overrides)
    response = client.post("/api/championships", json=payload)
    assert response.status_code == 422


def test_update_and_delete_championship(client: TestClient):
    championship = create_championship(client)

    response = client.put(f"/api/championships/{championship['id']}", json={"status": "active", "points_win": 2})
    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert response.json()["points_win"] == 2

    response = client.put(f"/api/championships/{championship['id']}", json={"end_date": "2026-01-01"})
    assert response.status_code == 422

    assert client.delete(f"/api/championships/{championship['id']}").status_code == 204
    assert client.get(f"/api/championships/{championship['id']}").status_code == 404


def test_delete_championship_removes_teams_and_matches(client: TestClient):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["A1", "B1", "C1"])
    client.post(f"/api/championships/{championship['id']}/generate-fixtures")

    assert client.delete(f"/api/championships/{championship['id']}").status_code == 204
    assert client.get(f"/api/championships/{championship['id']}/matches").status_code == 404
    assert client.get(f"/api/championships/{championship['id']}/teams").status_code == 404


# ============================================================================
# Fixture generation
# ============================================================================


def test_generate_fixtures_for_four_teams(client: TestClient):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["Ana/Bea", "Carla/Dani", "Eva/Flor", "Gala/Hana"])

    response = client.post(f"/api/championships/{championship['id']}/generate-fixtures")

    assert response.status_code == 200
    assert response.json() == {"fixtures_count": 6, "rounds": 3}
    matches = list_matches(client, championship["id"])
    assert len(matches) == 6
    assert all(m["status"] == "pending" for m in matches)
    assert all(m["team1_name"] and m["team2_name"] for m in matches)


def test_generate_fixtures_for_odd_group(client: TestClient):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["T1", "T2", "T3", "T4", "T5"])

    response = client.post(f"/api/championships/{championship['id']}/generate-fixtures")

    assert response.json() == {"fixtures_count": 10, "rounds": 5}


def test_regenerating_fixtures_discards_results(client: TestClient):
    championship = create_championship(client)
    teams = register_teams(client, championship["id"], ["A1", "B1", "C1", "D1"])
    client.post(f"/api/championships/{championship['id']}/generate-fixtures")
    submit(client, find_match(list_matches(client, championship["id"]), teams[0], teams[1]), teams[0])

    response = client.post(f"/api/championships/{championship['id']}/generate-fixtures")

    assert response.status_code == 200
    matches = list_matches(client, championship["id"])
    assert len(matches) == 6
    assert all(m["status"] == "pending" and m["sets"] == [] for m in matches)


def test_generate_fixtures_needs_two_teams(client: TestClient):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["Lonely"])

    response = client.post(f"/api/championships/{championship['id']}/generate-fixtures")

    assert response.status_code == 400
    assert list_matches(client, championship["id"]) == []


def test_generate_fixtures_unknown_championship(client: TestClient):
    assert client.post("/api/championships/999/generate-fixtures").status_code == 404


def test_generate_fixtures_per_group(client: TestClient):
    championship = create_championship(client, num_groups=2)
    register_teams(client, championship["id"], ["A1", "A2", "A3"], group_number=1)
    register_teams(client, championship["id"], ["B1", "B2", "B3", "B4"], group_number=2)

    response = client.post(f"/api/championships/{championship['id']}/generate-fixtures")

    assert response.json() == {"fixtures_count": 3 + 6, "rounds": 3}
    matches = list_matches(client, championship["id"])
    assert sum(1 for m in matches if m["group_number"] == 1) == 3
    assert sum(1 for m in matches if m["group_number"] == 2) == 6


# ============================================================================
# Results and standings
# ============================================================================


def test_submit_result_returns_finished_match(client: TestClient):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["A1", "B1"])
    client.post(f"/api/championships/{championship['id']}/generate-fixtures")
    match = list_matches(client, championship["id"])[0]

    response = client.post(
        f"/api/matches/{match['id']}/result",
        json={"sets": [{"team1_games": 6, "team2_games": 4}, {"team1_games": 3, "team2_games": 6}, {"team1_games": 6, "team2_games": 2}]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "finished"
    assert (data["team1_sets"], data["team2_sets"]) == (2, 1)
    assert (data["team1_games"], data["team2_games"]) == (15, 12)
    assert data["winner_id"] == match["team1_id"]
    assert [s["set_number"] for s in data["sets"]] == [1, 2, 3]


def test_submit_result_rejects_set_without_winner(client: TestClient):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["A1", "B1"])
    client.post(f"/api/championships/{championship['id']}/generate-fixtures")
    match = list_matches(client, championship["id"])[0]

    response = client.post(
        f"/api/matches/{match['id']}/result", json={"sets": [{"team1_games": 4, "team2_games": 3}]}
    )

    assert response.status_code == 400
    assert "minimum 6 games" in response.json()["detail"]
    assert client.get(f"/api/matches/{match['id']}").json()["status"] == "pending"


@pytest.mark.parametrize(
    "sets",
    [
        [],
        [{"team1_games": 6, "team2_games": 0}] * 6,
        [{"team1_games": -1, "team2_games": 6}],
    ],
)
def test_submit_result_rejects_malformed_payload(client: TestClient, sets):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["A1", "B1"])
    client.post(f"/api/championships/{championship['id']}/generate-fixtures")
    match = list_matches(client, championship["id"])[0]

    response = client.post(f"/api/matches/{match['id']}/result", json={"sets": sets})

    assert response.status_code == 422


def test_submit_result_unknown_match(client: TestClient):
    response = client.post("/api/matches/999/result", json={"sets": [{"team1_games": 6, "team2_games": 0}]})
    assert response.status_code == 404


def test_standings_follow_tie_break_cascade(client: TestClient):
    championship = create_championship(client)
    alpha, beta, gamma, delta = register_teams(client, championship["id"], ["Alpha", "Beta", "Gamma", "Delta"])
    client.post(f"/api/championships/{championship['id']}/generate-fixtures")
    matches = list_matches(client, championship["id"])

    submit(client, find_match(matches, alpha, beta), alpha)
    submit(client, find_match(matches, gamma, alpha), gamma)
    submit(client, find_match(matches, beta, gamma), beta)
    submit(client, find_match(matches, delta, gamma), delta)
    submit(client, find_match(matches, beta, delta), beta)
    submit(client, find_match(matches, alpha, delta), alpha)

    response = client.get(f"/api/championships/{championship['id']}/standings")

    assert response.status_code == 200
    table = response.json()["standings"]
    # Alpha and Beta tie on 6 points, Delta and Gamma on 3; head-to-head decides both
    assert [row["team_name"] for row in table] == ["Alpha", "Beta", "Delta", "Gamma"]
    assert [row["position"] for row in table] == [1, 2, 3, 4]
    assert [row["points"] for row in table] == [6, 6, 3, 3]
    assert table[0]["player1_name"] == "Alpha Drive"
    assert all(row["matches_played"] == 3 for row in table)


def test_standings_before_any_result(client: TestClient):
    championship = create_championship(client)
    register_teams(client, championship["id"], ["A1", "B1", "C1"])

    response = client.get(f"/api/championships/{championship['id']}/standings")

    assert response.status_code == 200
    table = response.json()["standings"]
    assert [row["team_name"] for row in table] == ["A1", "B1", "C1"]
    assert all(row["points"] == 0 and row["matches_played"] == 0 for row in table)


def test_standings_use_championship_points(client: TestClient):
    championship = create_championship(client, points_win=2, points_loss=1)
    winner, loser = register_teams(client, championship["id"], ["Win", "Lose"])
    client.post(f"/api/championships/{championship['id']}/generate-fixtures")
    submit(client, list_matches(client, championship["id"])[0], winner)

    table = client.get(f"/api/championships/{championship['id']}/standings").json()["standings"]

    assert [(row["team_name"], row["points"]) for row in table] == [("Win", 2), ("Lose", 1)]


def test_standings_unknown_championship(client: TestClient):
    assert client.get("/api/championships/999/standings").status_code == 404
