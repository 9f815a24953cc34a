"""Tests for the REST layer, run against an in-memory app."""

import pytest
from fastapi.testclient import TestClient

from masterleague.core.league_config import LeagueConfig
from masterleague.main import create_app
from masterleague.storage import MemoryStorage

GAME_PAYLOAD = {
    "name": "A vs B",
    "homeTeam": "A",
    "awayTeam": "B",
    "homeOdd": 2.0,
    "awayOdd": 4.0,
    "drawOdd": 3.0,
}


@pytest.fixture
def client():
    app = create_app(storage=MemoryStorage(), config=LeagueConfig())
    return TestClient(app)


def _add_game(client, **overrides):
    resp = client.post("/api/games", json={**GAME_PAYLOAD, **overrides})
    assert resp.status_code == 200, resp.text
    return resp.json()


def _place_bet(client, game_id, bet_type="home", amount=1000000, player="Maria"):
    return client.post("/api/bets", json={
        "playerName": player,
        "gameId": game_id,
        "betType": bet_type,
        "amount": amount,
    })


# ---------------------------------------------------------------------------
# Health and login
# ---------------------------------------------------------------------------

def test_root_and_health(client):
    assert client.get("/").json()["status"] == "operational"
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["storage"] == "MemoryStorage"


def test_login_success(client, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")
    resp = client.post("/api/admin/login", json={"password": "s3cret"})
    assert resp.status_code == 200
    assert resp.json()["success"] is True


def test_login_wrong_password(client, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")
    resp = client.post("/api/admin/login", json={"password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_login_disabled_without_password(client, monkeypatch):
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    resp = client.post("/api/admin/login", json={"password": ""})
    assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------

def test_create_and_list_games(client):
    game = _add_game(client)
    assert game["homeTeam"] == "A"
    assert game["drawOdd"] == 3.0
    assert game["isActive"] is True
    assert "createdAt" in game

    listed = client.get("/api/games").json()
    assert [g["id"] for g in listed] == [game["id"]]
    assert client.get(f"/api/games/{game['id']}").json()["name"] == "A vs B"


def test_create_game_invalid_odd(client):
    resp = client.post("/api/games", json={**GAME_PAYLOAD, "homeOdd": 0})
    assert resp.status_code == 400
    assert resp.json()["code"] == "InvalidOdds"


def test_create_game_missing_field(client):
    payload = {k: v for k, v in GAME_PAYLOAD.items() if k != "awayTeam"}
    resp = client.post("/api/games", json=payload)
    assert resp.status_code == 400
    assert resp.json()["code"] == "MissingField"


def test_delete_game(client):
    game = _add_game(client)
    resp = client.delete(f"/api/games/{game['id']}")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert client.get("/api/games").json() == []
    assert client.get(f"/api/games/{game['id']}").status_code == 404


def test_delete_unknown_game(client):
    resp = client.delete("/api/games/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Game not found: does-not-exist", "code": "UnknownGame"}


def test_get_unknown_game(client):
    resp = client.get("/api/games/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["code"] == "UnknownGame"


def test_unknown_route_has_error_code(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["code"] == "NotFound"


def test_create_game_odd_too_large(client):
    resp = client.post("/api/games", json={**GAME_PAYLOAD, "homeOdd": 10 ** 400})
    assert resp.status_code == 400
    assert resp.json()["code"] == "InvalidOdds"
    assert client.get("/api/games").json() == []


# ---------------------------------------------------------------------------
# Bets
# ---------------------------------------------------------------------------

def test_place_bet(client):
    game = _add_game(client)
    resp = _place_bet(client, game["id"])
    assert resp.status_code == 200
    bet = resp.json()
    assert bet["odd"] == 2.0
    assert bet["possibleWin"] == 2000000
    assert bet["status"] == "Pendente"
    assert bet["gameName"] == "A vs B"
    assert bet["betType"] == "home"


def test_client_odd_and_possible_win_ignored(client):
    game = _add_game(client)
    resp = client.post("/api/bets", json={
        "playerName": "Maria",
        "gameId": game["id"],
        "gameName": "Something else",
        "betType": "away",
        "amount": "1.000.000",
        "odd": 50.0,
        "possibleWin": 50000000,
    })
    assert resp.status_code == 200
    bet = resp.json()
    assert bet["odd"] == 4.0
    assert bet["possibleWin"] == 4000000
    assert bet["gameName"] == "A vs B"


@pytest.mark.parametrize("amount, code", [
    (100000, "AmountOutOfRange"),
    (5000001, "AmountOutOfRange"),
    ("abc", "InvalidAmount"),
    ("", "MissingField"),
])
def test_place_bet_rejected(client, amount, code):
    game = _add_game(client)
    resp = _place_bet(client, game["id"], amount=amount)
    assert resp.status_code == 400
    assert resp.json()["code"] == code
    assert client.get("/api/bets").json() == []


def test_place_bet_amount_too_large(client):
    game = _add_game(client)
    resp = _place_bet(client, game["id"], amount=10 ** 400)
    assert resp.status_code == 400
    assert resp.json()["code"] == "InvalidAmount"
    assert client.get("/api/bets").json() == []


def test_place_bet_unknown_game(client):
    resp = _place_bet(client, "missing")
    assert resp.status_code == 400
    assert resp.json()["code"] == "GameNotFound"


def test_place_bet_bad_type(client):
    game = _add_game(client)
    resp = _place_bet(client, game["id"], bet_type="over")
    assert resp.status_code == 400
    assert resp.json()["code"] == "InvalidBetType"


def test_list_bets_newest_first(client):
    game = _add_game(client)
    first = _place_bet(client, game["id"], player="P1").json()
    second = _place_bet(client, game["id"], player="P2").json()
    ids = [b["id"] for b in client.get("/api/bets").json()]
    assert ids == [second["id"], first["id"]]


def test_bet_survives_game_deletion(client):
    game = _add_game(client)
    bet = _place_bet(client, game["id"], bet_type="draw").json()
    client.delete(f"/api/games/{game['id']}")
    kept = client.get(f"/api/bets/{bet['id']}").json()
    assert kept["gameName"] == "A vs B"
    assert kept["odd"] == 3.0
    assert kept["possibleWin"] == 3000000


def test_get_unknown_bet(client):
    resp = client.get("/api/bets/missing")
    assert resp.status_code == 404
    assert resp.json()["code"] == "BetNotFound"


# ---------------------------------------------------------------------------
# Settlement
# ---------------------------------------------------------------------------

def test_settle_bet_once(client):
    game = _add_game(client)
    bet = _place_bet(client, game["id"]).json()

    resp = client.patch(f"/api/bets/{bet['id']}/status", json={"status": "Ganhou"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "Ganhou"

    again = client.patch(f"/api/bets/{bet['id']}/status", json={"status": "Perdeu"})
    assert again.status_code == 400
    assert again.json()["code"] == "InvalidTransition"


def test_settle_to_pending_rejected(client):
    game = _add_game(client)
    bet = _place_bet(client, game["id"]).json()
    resp = client.patch(f"/api/bets/{bet['id']}/status", json={"status": "Pendente"})
    assert resp.status_code == 400


def test_settle_unknown_status_value(client):
    game = _add_game(client)
    bet = _place_bet(client, game["id"]).json()
    resp = client.patch(f"/api/bets/{bet['id']}/status", json={"status": "Cancelada"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "InvalidRequest"


def test_settle_unknown_bet(client):
    resp = client.patch("/api/bets/missing/status", json={"status": "Ganhou"})
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

def test_summary_endpoint(client):
    game = _add_game(client)
    bet = _place_bet(client, game["id"]).json()
    _place_bet(client, game["id"], bet_type="away", amount=500000)
    client.patch(f"/api/bets/{bet['id']}/status", json={"status": "Perdeu"})

    summary = client.get("/api/bets/summary").json()
    assert summary["totalBets"] == 2
    assert summary["lost"] == 1
    assert summary["pending"] == 1
    assert summary["houseResult"] == 1000000
    assert summary["pendingExposure"] == 2000000


def test_csv_export(client):
    game = _add_game(client)
    _place_bet(client, game["id"])
    resp = client.get("/api/bets/export.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "relatorio_apostas_masterleague_" in resp.headers["content-disposition"]
    lines = resp.text.splitlines()
    assert lines[0] == "Jogador,Jogo,Tipo,Valor,Odd,Ganho,Status,Data"
    assert lines[1].startswith("Maria,A vs B,Casa,1000000.0,2.0,2000000.0,Pendente,")
