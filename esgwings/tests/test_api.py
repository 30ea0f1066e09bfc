"""
Tests for API layer.

Tests:
- API service methods
- HTTP endpoints through the FastAPI test client
- Error mapping
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import (
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameModeName,
    GameStateResponse,
)
from ..api.service import APIService


class TestAPIService:
    """Tests for APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService()

    def test_create_game(self, service):
        response = service.create_game(CreateGameRequest(player_count=3, max_rounds=4, seed=42))

        assert isinstance(response, GameStateResponse)
        assert response.round == 1
        assert response.phase == "Event"
        assert response.mode == "Manual"
        assert len(response.players) == 3
        assert all(p.score == 16 for p in response.players)
        assert response.players[0].is_current_turn
        assert response.deck_sizes["main_deck"] == 40 - 15

    def test_invalid_setup_is_validation_error(self, service):
        request = CreateGameRequest.model_construct(
            player_count=9, max_rounds=5, mode=GameModeName.MANUAL, seed=None
        )
        response = service.create_game(request)
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_get_nonexistent_game(self, service):
        response = service.get_game("nonexistent-id")
        assert response.error_code == ErrorCode.GAME_NOT_FOUND

    def test_rejected_action_carries_code(self, service):
        game = service.create_game(CreateGameRequest(seed=1))
        response = service.end_turn(game.session_id)
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.WRONG_PHASE

    def test_play_via_auto_move(self, service):
        game = service.create_game(CreateGameRequest(seed=42))
        after_event = service.process_event(game.session_id)
        budget = after_event.players[0].budget

        move = service.auto_move(game.session_id)
        if move.action == "PLAY":
            played = service.play_card(game.session_id, move.card_id)
            assert played.players[0].budget < budget or move.card_id == "ACT_I_002"
            assert len(played.players[0].hand) == len(after_event.players[0].hand) - 1
            assert played.changes
        else:
            assert move.card_id is None

    def test_demo_game_runs_to_end(self, service):
        game = service.create_game(CreateGameRequest(mode=GameModeName.DEMO, max_rounds=2, seed=8))
        response = game
        for _ in range(2000):
            if response.is_over:
                break
            response = service.demo_step(game.session_id)
            assert isinstance(response, GameStateResponse)
        assert response.is_over
        assert response.winner_id is not None

        finished = service.demo_step(game.session_id)
        assert finished.error_code == ErrorCode.GAME_OVER

    def test_take_control_stops_demo(self, service):
        game = service.create_game(CreateGameRequest(mode=GameModeName.DEMO, seed=8))
        taken = service.take_control(game.session_id)
        assert taken.mode == "Manual"

        response = service.demo_step(game.session_id)
        assert response.error_code == ErrorCode.INVALID_MODE

        log = service.get_log(game.session_id)
        assert log.entries[-1].action == "take control"
        assert log.entries[-1].actor == "Player"

    def test_list_and_end_games(self, service):
        a = service.create_game(CreateGameRequest())
        b = service.create_game(CreateGameRequest())
        assert service.list_games().count == 2

        assert service.end_game(a.session_id).success
        listing = service.list_games()
        assert [g.session_id for g in listing.games] == [b.session_id]

    def test_catalog(self, service):
        catalog = service.get_catalog()
        assert len(catalog.cards) == 12
        saf = next(c for c in catalog.cards if c.card_id == "ACT_E_002")
        assert saf.cost == 3
        assert saf.effects == ["Carbon -3", "Cost +2", "Reputation +1"]
        fuel = next(c for c in catalog.cards if c.card_id == "EVT_001")
        assert fuel.effects == ["All: Cost +2"]


class TestHTTP:
    """Tests for the FastAPI application."""

    @pytest.fixture
    def client(self):
        return TestClient(create_app(APIService()))

    @pytest.fixture
    def game(self, client):
        response = client.post("/api/v1/games", json={"player_count": 2, "max_rounds": 3, "seed": 42})
        assert response.status_code == 201
        return response.json()

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["active_games"] == 0

    def test_create_with_defaults(self, client):
        response = client.post("/api/v1/games", json={})
        assert response.status_code == 201
        body = response.json()
        assert body["max_rounds"] == 5
        assert len(body["players"]) == 2

    def test_create_rejects_bad_player_count(self, client):
        response = client.post("/api/v1/games", json={"player_count": 5})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_get_game(self, client, game):
        response = client.get(f"/api/v1/games/{game['session_id']}")
        assert response.status_code == 200
        assert response.json()["game_id"] == game["game_id"]

    def test_unknown_game_404(self, client):
        for method, path in (
            ("get", "/api/v1/games/missing"),
            ("post", "/api/v1/games/missing/event"),
            ("get", "/api/v1/games/missing/log"),
            ("get", "/api/v1/games/missing/auto-move"),
            ("delete", "/api/v1/games/missing"),
        ):
            response = getattr(client, method)(path)
            assert response.status_code == 404
            assert response.json()["error_code"] == "GAME_NOT_FOUND"

    def test_turn_flow(self, client, game):
        sid = game["session_id"]

        response = client.post(f"/api/v1/games/{sid}/event")
        assert response.status_code == 200
        assert response.json()["phase"] == "Action"

        response = client.post(f"/api/v1/games/{sid}/end-turn")
        assert response.status_code == 200
        assert response.json()["current_player_id"] == "P2"

        response = client.post(f"/api/v1/games/{sid}/end-turn")
        body = response.json()
        assert body["round"] == 2
        assert body["phase"] == "Event"
        assert all(p["budget"] == 3 for p in body["players"])

    def test_rejection_is_409(self, client, game):
        sid = game["session_id"]

        response = client.post(f"/api/v1/games/{sid}/play", json={"card_id": "ACT_S_001"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "WRONG_PHASE"

        client.post(f"/api/v1/games/{sid}/event")
        response = client.post(f"/api/v1/games/{sid}/play", json={"card_id": "NOPE"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "UNKNOWN_CARD"

    def test_refresh(self, client, game):
        sid = game["session_id"]
        client.post(f"/api/v1/games/{sid}/event")

        response = client.post(f"/api/v1/games/{sid}/refresh")
        assert response.status_code == 200
        player = response.json()["players"][0]
        assert player["budget"] == 2
        assert len(player["hand"]) == 5

    def test_auto_move_and_log(self, client, game):
        sid = game["session_id"]
        client.post(f"/api/v1/games/{sid}/event")

        response = client.get(f"/api/v1/games/{sid}/auto-move")
        assert response.status_code == 200
        assert response.json()["action"] in {"PLAY", "END"}

        response = client.get(f"/api/v1/games/{sid}/log")
        entries = response.json()["entries"]
        assert entries[0]["action"] == "game started"
        assert entries[0]["round"] == 0
        assert entries[1]["action"] == "event drawn"

    def test_take_control_on_manual_game_is_409(self, client, game):
        response = client.post(f"/api/v1/games/{game['session_id']}/take-control")
        assert response.status_code == 409
        assert response.json()["error_code"] == "INVALID_MODE"

    def test_demo_step(self, client):
        game = client.post("/api/v1/games", json={"mode": "Demo", "seed": 3}).json()
        response = client.post(f"/api/v1/games/{game['session_id']}/demo-step")
        assert response.status_code == 200
        assert response.json()["phase"] == "Action"

    def test_list_and_delete(self, client, game):
        assert client.get("/api/v1/games").json()["count"] == 1

        response = client.delete(f"/api/v1/games/{game['session_id']}")
        assert response.status_code == 200
        assert response.json()["success"]
        assert client.get("/api/v1/games").json()["count"] == 0

    def test_catalog(self, client):
        body = client.get("/api/v1/catalog").json()
        assert body["catalog_id"] == "esg_wings_base"
        assert len(body["event_deck_ids"]) == 4
        assert len(body["main_deck_ids"]) == 20
