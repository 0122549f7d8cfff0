"""HTTP surface for tournaments, teams and match scoring."""
import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def tournament(client: TestClient):
    """Create a four-team tournament for testing"""
    response = client.post("/api/tournaments", json={"name": "Club Open", "team_count": 4})
    assert response.status_code == 201
    return response.json()


def _find(tournament, round_number, match_index):
    for m in tournament["matches"]:
        if m["round_number"] == round_number and m["match_index"] == match_index:
            return m
    raise AssertionError(f"no match at round {round_number} index {match_index}")


def test_create_tournament(tournament):
    assert tournament["name"] == "Club Open"
    assert tournament["team_count"] == 4
    assert tournament["total_rounds"] == 2
    assert tournament["is_active"] is True
    assert [t["name"] for t in tournament["teams"]] == ["Team 1", "Team 2", "Team 3", "Team 4"]
    assert [(m["round_number"], m["match_index"]) for m in tournament["matches"]] == [(1, 0), (1, 1), (2, 0)]

    first = _find(tournament, 1, 0)
    assert first["team1"]["name"] == "Team 1"
    assert first["team2"]["name"] == "Team 2"
    assert _find(tournament, 2, 0)["team1"] is None


def test_create_rejects_non_power_of_two(client: TestClient):
    response = client.post("/api/tournaments", json={"name": "Odd", "team_count": 6})
    assert response.status_code == 422
    assert "power of two" in response.json()["detail"]
    assert client.get("/api/tournaments").json() == []


def test_create_rejects_empty_name(client: TestClient):
    response = client.post("/api/tournaments", json={"name": "  ", "team_count": 4})
    assert response.status_code == 422


def test_get_unknown_tournament(client: TestClient):
    response = client.get("/api/tournaments/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Tournament not found"


def test_scoring_flow_to_completion(client: TestClient, tournament):
    tid = tournament["id"]

    resp = client.put(f"/api/matches/{_find(tournament, 1, 0)['id']}/score", json={"score1": 11, "score2": 4})
    assert resp.status_code == 200
    data = resp.json()
    assert data["match"]["winner"]["name"] == "Team 1"
    assert data["advanced_count"] == 1
    assert data["is_active"] is True

    client.put(f"/api/matches/{_find(tournament, 1, 1)['id']}/score", json={"score1": 2, "score2": 11})

    current = client.get(f"/api/tournaments/{tid}").json()
    final = _find(current, 2, 0)
    assert final["team1"]["name"] == "Team 1"
    assert final["team2"]["name"] == "Team 4"

    resp = client.put(f"/api/matches/{final['id']}/score", json={"score1": 3, "score2": 6})
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False
    assert resp.json()["match"]["winner"]["name"] == "Team 4"

    (summary,) = client.get("/api/tournaments").json()
    assert summary["is_active"] is False
    assert (summary["total_matches"], summary["completed_matches"]) == (3, 3)


def test_equal_score_rejected(client: TestClient, tournament):
    match_id = _find(tournament, 1, 0)["id"]
    resp = client.put(f"/api/matches/{match_id}/score", json={"score1": 5, "score2": 5})
    assert resp.status_code == 422

    current = client.get(f"/api/tournaments/{tournament['id']}").json()
    assert _find(current, 1, 0)["winner"] is None


def test_oversized_score_rejected(client: TestClient, tournament):
    match_id = _find(tournament, 1, 0)["id"]
    resp = client.put(f"/api/matches/{match_id}/score", json={"score1": 10**20, "score2": 1})
    assert resp.status_code == 422
    assert "cannot exceed" in resp.json()["detail"]

    current = client.get(f"/api/tournaments/{tournament['id']}").json()
    assert _find(current, 1, 0)["winner"] is None


def test_score_unknown_match(client: TestClient):
    resp = client.put("/api/matches/4242/score", json={"score1": 6, "score2": 1})
    assert resp.status_code == 404


def test_rename_team_is_joined_at_read_time(client: TestClient, tournament, notifier):
    team_id = tournament["teams"][0]["id"]

    resp = client.put(f"/api/teams/{team_id}", json={"name": "Net Rushers"})
    assert resp.status_code == 200
    assert resp.json() == {"id": team_id, "name": "Net Rushers", "position": 1}

    current = client.get(f"/api/tournaments/{tournament['id']}").json()
    assert _find(current, 1, 0)["team1"]["name"] == "Net Rushers"
    assert notifier.names() == ["tournament_created", "team_updated"]


def test_delete_tournament(client: TestClient, tournament, notifier):
    tid = tournament["id"]

    assert client.delete(f"/api/tournaments/{tid}").status_code == 204
    assert client.get(f"/api/tournaments/{tid}").status_code == 404
    assert client.delete(f"/api/tournaments/{tid}").status_code == 404
    assert notifier.events[-1] == ("tournament_deleted", {"id": tid})


def test_resolve_advancements_idempotent(client: TestClient, tournament):
    """Run the repair endpoint twice; the second call fills nothing."""
    tid = tournament["id"]
    client.put(f"/api/matches/{_find(tournament, 1, 0)['id']}/score", json={"score1": 6, "score2": 3})

    r1 = client.post(f"/api/tournaments/{tid}/advancement/resolve")
    assert r1.status_code == 200
    assert r1.json()["matches_processed"] == 1

    r2 = client.post(f"/api/tournaments/{tid}/advancement/resolve")
    assert r2.status_code == 200
    assert r2.json()["slots_filled"] == 0


def test_health(client: TestClient):
    assert client.get("/api/health").json()["status"] == "healthy"
