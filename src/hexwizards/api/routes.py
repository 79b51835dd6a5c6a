"""HTTP routes for the Hex Wizards API."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from hexwizards import __version__
from hexwizards.api.runtime import ApiState, GameDraft, GameService, GameSession
from hexwizards.domain import models as dm

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class PlayerSummary(BaseModel):
    id: int
    name: str
    color: str
    controller: str
    interaction_mode: str
    main_token_id: int | None
    token_ids: list[int]
    met: list[int]


class GameSummary(BaseModel):
    id: int
    seed: str
    width: int
    height: int
    turn_number: int
    phase: str
    paused: bool
    active_player_id: int | None
    players: list[PlayerSummary]


class CreateGameRequest(BaseModel):
    width: int | None = Field(default=None, ge=2)
    height: int | None = Field(default=None, ge=1)
    num_continents: int | None = Field(default=None, ge=1)
    min_continent_width: int | None = Field(default=None, ge=0)
    max_continent_width: int | None = Field(default=None, ge=1)
    num_players: int | None = Field(default=None, ge=1, le=16)
    human_players: int = Field(default=1, ge=0)
    seed: str | None = Field(default=None, min_length=1)


class TokenSummary(BaseModel):
    id: int
    kind: str
    owner_id: int | None
    remaining_energy: int | None
    hit_points: int | None


class HexView(BaseModel):
    row: int
    col: int
    discovered: bool
    visible: bool
    tile: str | None
    color: str | None
    height: float | None
    occupant: TokenSummary | None


class BoardView(BaseModel):
    player_id: int
    width: int
    height: int
    hexes: list[HexView]


class MoveTarget(BaseModel):
    row: int
    col: int


class MovesResponse(BaseModel):
    player_id: int | None
    phase: str
    remaining_energy: int | None
    moves: list[MoveTarget]


class ClickRequest(BaseModel):
    row: int
    col: int


class ActionResponse(BaseModel):
    accepted: bool
    reason: str | None
    cost: int
    token_id: int | None
    game: GameSummary


class ModeRequest(BaseModel):
    player_id: int | None = None


class ModeResponse(BaseModel):
    player_id: int
    interaction_mode: str


class Notification(BaseModel):
    kind: str
    player_id: int | None
    recipient_id: int | None
    message: str


def _session(state: ApiState, game_id: int) -> GameSession:
    # GameNotFound is turned into a 404 by the app-level handler
    return state.games.get_session(dm.GameID(game_id))


def _summary(session: GameSession) -> GameSummary:
    return GameSummary.model_validate(GameService.to_summary_dict(session))


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "version": __version__,
        "games": len(state.games.list_sessions()),
    }


@router.get("/rules")
async def get_rules(state: ApiStateDep) -> dict[str, object]:
    return asdict(state.rules)


@router.get("/games", response_model=list[GameSummary])
async def list_games(state: ApiStateDep) -> list[GameSummary]:
    return [_summary(session) for session in state.games.list_sessions()]


@router.post("/games", response_model=GameSummary, status_code=status.HTTP_201_CREATED)
async def create_game(request: CreateGameRequest, state: ApiStateDep) -> GameSummary:
    draft = GameDraft(**request.model_dump())
    try:
        session = state.games.create_game(draft)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _summary(session)


@router.get("/games/{game_id}", response_model=GameSummary)
async def get_game(game_id: int, state: ApiStateDep) -> GameSummary:
    return _summary(_session(state, game_id))


@router.get("/games/{game_id}/board", response_model=BoardView)
async def get_board(
    game_id: int,
    state: ApiStateDep,
    player_id: Annotated[int | None, Query()] = None,
) -> BoardView:
    session = _session(state, game_id)
    game = session.game
    if player_id is None:
        humans = game.human_players
        if not humans:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="player_id is required when no human is playing",
            )
        player = humans[0]
    else:
        player = game.players.get(dm.PlayerID(player_id))
        if player is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="player not found"
            )
    return BoardView.model_validate(GameService.to_board_dict(game, player))


@router.get("/games/{game_id}/moves", response_model=MovesResponse)
async def get_moves(game_id: int, state: ApiStateDep) -> MovesResponse:
    session = _session(state, game_id)
    return MovesResponse.model_validate(GameService.to_moves_dict(session.controller))


@router.post("/games/{game_id}/click", response_model=ActionResponse)
async def click_hex(game_id: int, request: ClickRequest, state: ApiStateDep) -> ActionResponse:
    session = _session(state, game_id)
    async with session.lock:
        outcome = session.controller.validate_and_make_move(request.row, request.col)
    payload = GameService.to_outcome_dict(outcome)
    return ActionResponse(**payload, game=_summary(session))


@router.post("/games/{game_id}/end-turn", response_model=GameSummary)
async def end_turn(game_id: int, state: ApiStateDep) -> GameSummary:
    session = _session(state, game_id)
    async with session.lock:
        ended = session.controller.end_turn()
    if not ended:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="no human turn is awaiting input"
        )
    return _summary(session)


@router.post("/games/{game_id}/mode", response_model=ModeResponse)
async def switch_mode(game_id: int, request: ModeRequest, state: ApiStateDep) -> ModeResponse:
    session = _session(state, game_id)
    player_id = dm.PlayerID(request.player_id) if request.player_id is not None else None
    if player_id is not None and player_id not in session.game.players:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="player not found")

    async with session.lock:
        try:
            mode = session.controller.switch_interaction_mode(player_id)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        player = (
            session.game.players[player_id]
            if player_id is not None
            else session.controller.active_player
        )
    assert player is not None
    return ModeResponse(player_id=int(player.id), interaction_mode=str(mode))


@router.post("/games/{game_id}/resume", response_model=GameSummary)
async def resume_game(game_id: int, state: ApiStateDep) -> GameSummary:
    session = _session(state, game_id)
    async with session.lock:
        try:
            session.controller.resume()
        except RuntimeError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _summary(session)


@router.get("/games/{game_id}/notifications", response_model=list[Notification])
async def get_notifications(
    game_id: int,
    state: ApiStateDep,
    clear: Annotated[bool, Query()] = True,
) -> list[Notification]:
    session = _session(state, game_id)
    async with session.lock:
        pending = session.ui.drain() if clear else list(session.ui.notifications)
    return [Notification.model_validate(item) for item in pending]
