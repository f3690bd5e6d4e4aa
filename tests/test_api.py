"""
HTTP layer: routes map storage results to JSON responses and status codes.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Garante que o pacote roster seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.app import create_app  # noqa: E402
from roster.core import config as core_config  # noqa: E402
from roster.repositories.kv_store import MemoryKeyValueStore  # noqa: E402
from roster.services.storage_service import StorageService  # noqa: E402


@pytest.fixture()
def store():
    return MemoryKeyValueStore()


@pytest.fixture()
def client(store):
    core_config.get_settings.cache_clear()
    app = create_app(StorageService(store))
    with TestClient(app) as test_client:
        yield test_client
    core_config.get_settings.cache_clear()


def _create_team(client, name="Tigers", team_id=None):
    body = {"name": name, "ageGroup": "10U", "season": "Spring"}
    if team_id:
        body["id"] = team_id
    resp = client.post("/api/teams", json=body)
    assert resp.status_code == 201
    return resp.json()["team"]


def test_health(client, store):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["services"]["storage"]["connected"] is True
    store.available = False
    assert client.get("/api/health").json()["success"] is False


def test_team_crud_and_current_pointer(client):
    team = _create_team(client, team_id="t1")
    assert team["id"] == "t1"
    assert team["createdAt"] > 0

    assert client.get("/api/teams/t1").json()["team"]["name"] == "Tigers"
    assert [t["id"] for t in client.get("/api/teams").json()["teams"]] == ["t1"]

    resp = client.put("/api/teams/t1", json={"name": "Lions", "ageGroup": "12U", "season": "Fall"})
    assert resp.status_code == 200
    assert resp.json()["team"]["name"] == "Lions"

    assert client.put("/api/teams/current", json={"teamId": "t1"}).status_code == 200
    assert client.get("/api/teams/current").json()["teamId"] == "t1"

    assert client.delete("/api/teams/t1").status_code == 200
    assert client.get("/api/teams/t1").status_code == 404
    assert client.get("/api/teams/current").json()["teamId"] is None


def test_team_errors(client):
    resp = client.post("/api/teams", json={"name": ""})
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"

    resp = client.put("/api/teams/current", json={"teamId": "ghost"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"

    assert client.put("/api/teams/current", json={}).status_code == 400


def test_lineup_routes_and_default_switch(client):
    _create_team(client, team_id="t1")
    l1 = client.post("/api/teams/t1/lineups", json={"id": "l1", "name": "L1", "positions": [{"position": "P", "playerId": "p1"}]})
    assert l1.status_code == 201
    client.post("/api/teams/t1/lineups", json={"id": "l2", "name": "L2", "positions": {"C": "p2"}})

    assert client.get("/api/teams/t1/lineups/default").status_code == 404
    assert client.post("/api/teams/t1/lineups/default", json={"lineupId": "l1"}).status_code == 200
    resp = client.post("/api/teams/t1/lineups/default", json={"lineupId": "l2"})
    assert resp.json()["lineup"]["isDefault"] is True

    lineups = client.get("/api/teams/t1/lineups").json()["lineups"]
    assert [(lu["id"], lu["isDefault"]) for lu in lineups] == [("l1", False), ("l2", True)]
    assert client.get("/api/teams/t1/lineups/default").json()["lineup"]["id"] == "l2"

    assert client.get("/api/lineups/l2").json()["lineup"]["positions"] == [{"position": "C", "playerId": "p2"}]
    assert client.delete("/api/lineups/l2").status_code == 200
    assert client.get("/api/lineups/l2").status_code == 404


def test_lineup_errors(client):
    _create_team(client, team_id="t1")
    resp = client.put("/api/lineups/l9", json={"teamId": "ghost", "name": "Nope"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_reference"

    resp = client.post("/api/teams/t1/lineups", json={"name": "Bad", "isDefault": "yes"})
    assert resp.status_code == 400

    assert client.post("/api/teams/t1/lineups/default", json={}).status_code == 400
    assert client.post("/api/teams/t1/lineups/default", json={"lineupId": "nope"}).status_code == 404
    assert client.get("/api/teams/ghost/lineups").status_code == 404


def test_store_outage_returns_503(client, store):
    _create_team(client, team_id="t1")
    store.available = False
    resp = client.get("/api/teams")
    assert resp.status_code == 503
    assert resp.json()["error"] == "store_unavailable"
    assert client.put("/api/teams/t1", json={"name": "X"}).status_code == 503
