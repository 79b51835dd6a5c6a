"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from hexwizards.api.app import create_app
from hexwizards.api.runtime import ApiState
from hexwizards.config import Settings

BOARD = {"width": 10, "height": 5, "num_players": 2, "seed": "api-test"}


def _make_app():
    def factory() -> ApiState:
        settings = Settings(
            _env_file=None,
            board_width=10,
            board_height=5,
            num_players=2,
            max_automatic_turns=5,
        )
        return ApiState(settings=settings)

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _create_game(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/games", json={**BOARD, **overrides})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_health_and_rules():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["games"] == 0

        response = await client.get("/rules")
        assert response.status_code == 200
        rules = response.json()
        assert rules["movement"] == {"max_energy": 5, "placement_cost": 3}
        assert rules["visibility"]["sight_radius"] == 2
        assert rules["turns"]["max_automatic_turns"] == 5


@pytest.mark.asyncio
async def test_human_game_lifecycle_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        game = await _create_game(client)
        game_id = game["id"]
        assert game["phase"] == "await_input"
        assert game["active_player_id"] == 1
        assert game["seed"] == "api-test"
        assert [player["controller"] for player in game["players"]] == ["human", "ai"]

        response = await client.get(f"/games/{game_id}/moves")
        assert response.status_code == 200
        moves = response.json()
        assert moves["player_id"] == 1
        assert moves["remaining_energy"] == 5
        assert moves["moves"]

        response = await client.post(f"/games/{game_id}/click", json={"row": 99, "col": 99})
        assert response.status_code == 200
        rejected = response.json()
        assert rejected["accepted"] is False
        assert rejected["reason"] == "out_of_bounds"
        assert rejected["game"]["phase"] == "await_input"

        response = await client.post(f"/games/{game_id}/resume")
        assert response.status_code == 409

        target = moves["moves"][0]
        response = await client.post(f"/games/{game_id}/click", json=target)
        assert response.status_code == 200
        accepted = response.json()
        assert accepted["accepted"] is True
        assert accepted["cost"] > 0

        response = await client.get(f"/games/{game_id}/notifications")
        assert response.status_code == 200
        assert isinstance(response.json(), list)


@pytest.mark.asyncio
async def test_board_view_hides_fog():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        game = await _create_game(client)

        response = await client.get(f"/games/{game['id']}/board", params={"player_id": 1})
        assert response.status_code == 200
        board = response.json()
        assert board["player_id"] == 1
        assert len(board["hexes"]) == 10 * 3 + 9 * 2

        for hex_view in board["hexes"]:
            if not hex_view["discovered"]:
                assert hex_view["tile"] is None
            if not hex_view["visible"]:
                assert hex_view["occupant"] is None
        own = [h["occupant"] for h in board["hexes"] if h["occupant"] is not None]
        assert any(occupant["owner_id"] == 1 for occupant in own)

        response = await client.get(f"/games/{game['id']}/board")
        assert response.status_code == 200
        assert response.json()["player_id"] == 1

        response = await client.get(f"/games/{game['id']}/board", params={"player_id": 9})
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_interaction_mode_and_end_turn():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        game = await _create_game(client)
        game_id = game["id"]

        response = await client.post(f"/games/{game_id}/mode", json={})
        assert response.status_code == 200
        assert response.json() == {"player_id": 1, "interaction_mode": "place"}

        response = await client.post(f"/games/{game_id}/mode", json={"player_id": 2})
        assert response.status_code == 400

        response = await client.post(f"/games/{game_id}/mode", json={"player_id": 7})
        assert response.status_code == 404

        response = await client.post(f"/games/{game_id}/end-turn")
        assert response.status_code == 200
        summary = response.json()
        assert summary["turn_number"] >= 2
        assert summary["phase"] in {"await_input", "turn_end"}


@pytest.mark.asyncio
async def test_ai_only_game_pauses_and_resumes():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        game = await _create_game(client, human_players=0)
        assert game["paused"] is True
        assert game["phase"] == "turn_end"
        assert game["turn_number"] == 5

        response = await client.post(f"/games/{game['id']}/end-turn")
        assert response.status_code == 409

        response = await client.post(f"/games/{game['id']}/resume")
        assert response.status_code == 200
        assert response.json()["turn_number"] == 10

        response = await client.get("/games")
        assert [summary["id"] for summary in response.json()] == [game["id"]]


@pytest.mark.asyncio
async def test_errors_map_to_status_codes():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/games/99")
        assert response.status_code == 404
        assert response.json()["detail"] == "game 99 not found"

        response = await client.post(
            "/games", json={**BOARD, "min_continent_width": 3, "max_continent_width": 2}
        )
        assert response.status_code == 400

        response = await client.post("/games", json={**BOARD, "num_players": 12})
        assert response.status_code == 400

        response = await client.post("/games", json={**BOARD, "width": 1})
        assert response.status_code == 422

        response = await client.post("/games/99/click", json={"row": 0, "col": 0})
        assert response.status_code == 404
