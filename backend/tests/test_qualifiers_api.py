import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def qualifier(client: TestClient):
    response = client.post("/api/qualifiers", json={"name": "Saturday Qualifier", "team_count": 5})
    assert response.status_code == 201
    return response.json()


def test_create_qualifier_with_odd_count(qualifier):
    assert qualifier["team_count"] == 5
    assert len(qualifier["teams"]) == 5
    assert [(m["team1"]["position"], m["team2"]["position"]) for m in qualifier["matches"]] == [(1, 2), (3, 4)]
    assert qualifier["unmatched_team"]["position"] == 5


def test_create_qualifier_rejects_single_team(client: TestClient):
    response = client.post("/api/qualifiers", json={"name": "Solo", "team_count": 1})
    assert response.status_code == 422


def test_score_and_complete(client: TestClient, qualifier):
    first, second = qualifier["matches"]

    resp = client.put(f"/api/qualifier-matches/{first['id']}/score", json={"score1": 6, "score2": 2})
    assert resp.status_code == 200
    assert resp.json()["match"]["winner"]["position"] == 1
    assert resp.json()["is_active"] is True

    resp = client.put(f"/api/qualifier-matches/{second['id']}/score", json={"score1": 1, "score2": 6})
    assert resp.json()["is_active"] is False

    (summary,) = client.get("/api/qualifiers").json()
    assert (summary["total_matches"], summary["completed_matches"]) == (2, 2)


def test_equal_score_rejected(client: TestClient, qualifier):
    match_id = qualifier["matches"][0]["id"]
    resp = client.put(f"/api/qualifier-matches/{match_id}/score", json={"score1": 3, "score2": 3})
    assert resp.status_code == 422


def test_oversized_score_rejected(client: TestClient, qualifier):
    match_id = qualifier["matches"][0]["id"]
    resp = client.put(f"/api/qualifier-matches/{match_id}/score", json={"score1": 1, "score2": 10**20})
    assert resp.status_code == 422

    current = client.get(f"/api/qualifiers/{qualifier['id']}").json()
    assert current["matches"][0]["winner"] is None


def test_rename_and_delete(client: TestClient, qualifier, notifier):
    team_id = qualifier["teams"][4]["id"]
    resp = client.put(f"/api/qualifier-teams/{team_id}", json={"name": "Wildcard"})
    assert resp.status_code == 200

    current = client.get(f"/api/qualifiers/{qualifier['id']}").json()
    assert current["unmatched_team"]["name"] == "Wildcard"

    assert client.delete(f"/api/qualifiers/{qualifier['id']}").status_code == 204
    assert client.get(f"/api/qualifiers/{qualifier['id']}").status_code == 404
    assert notifier.names() == ["qualifier_created", "qualifier_team_updated", "qualifier_deleted"]


def test_unknown_qualifier_team(client: TestClient):
    resp = client.put("/api/qualifier-teams/31337", json={"name": "Ghost"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Qualifier team not found"
