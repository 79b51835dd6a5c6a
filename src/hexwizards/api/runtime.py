"""Runtime primitives backing the Hex Wizards HTTP API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from hexwizards.config import Settings, get_settings
from hexwizards.domain import models as dm
from hexwizards.domain.ai import RandomPolicy
from hexwizards.domain.enums import TurnPhase
from hexwizards.domain.rules_config import DEFAULT_RULES, RulesConfig, TurnRules
from hexwizards.domain.setup import build_controller
from hexwizards.domain.terrain import MapSpecification
from hexwizards.domain.turn import ActionOutcome, TurnController
from hexwizards.utils.rng import create_rng, random_seed

logger = logging.getLogger(__name__)


class GameNotFound(LookupError):
    """Raised when a request names a game this process does not hold."""


class RecordingUI:
    """UI collaborator that queues dialogue for HTTP clients to poll."""

    def __init__(self) -> None:
        self.notifications: list[dict[str, object]] = []
        self.panel_visible = False

    def show_greeting(self, player: dm.Player, recipient: dm.Player) -> None:
        self.notifications.append(
            {
                "kind": "greeting",
                "player_id": int(player.id),
                "recipient_id": int(recipient.id),
                "message": f"You have met {player.name}.",
            }
        )
        self.show_panel(True)

    def show_notice(self, message: str) -> None:
        self.notifications.append(
            {"kind": "notice", "player_id": None, "recipient_id": None, "message": message}
        )

    def show_panel(self, visible: bool) -> None:
        self.panel_visible = visible

    def drain(self) -> list[dict[str, object]]:
        pending, self.notifications = self.notifications, []
        self.panel_visible = False
        return pending


@dataclass(slots=True)
class GameDraft:
    """API-facing initializer for new games; ``None`` fields fall back to settings."""

    width: int | None = None
    height: int | None = None
    num_continents: int | None = None
    min_continent_width: int | None = None
    max_continent_width: int | None = None
    num_players: int | None = None
    human_players: int = 1
    seed: str | None = None


@dataclass(slots=True)
class GameSession:
    """One running game plus the state the HTTP layer keeps around it."""

    controller: TurnController
    ui: RecordingUI
    seed: str
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def game(self) -> dm.Game:
        return self.controller.game


class GameService:
    """Creates games and serialises access to them."""

    def __init__(self, settings: Settings, *, rules: RulesConfig = DEFAULT_RULES) -> None:
        self._settings = settings
        self._rules = rules
        self._sessions: dict[dm.GameID, GameSession] = {}

    def list_sessions(self) -> list[GameSession]:
        return [self._sessions[key] for key in sorted(self._sessions, key=int)]

    def get_session(self, game_id: dm.GameID) -> GameSession:
        """Return a running game or raise :class:`GameNotFound`."""

        session = self._sessions.get(game_id)
        if session is None:
            raise GameNotFound(f"game {int(game_id)} not found")
        return session

    def create_game(self, draft: GameDraft) -> GameSession:
        """Build, register and start a new game.

        Raises:
            ValueError: If the board or player parameters are invalid
        """

        settings = self._settings
        spec = MapSpecification(
            width=_pick(draft.width, settings.board_width),
            height=_pick(draft.height, settings.board_height),
            num_continents=_pick(draft.num_continents, settings.num_continents),
            min_continent_width=_pick(draft.min_continent_width, settings.min_continent_width),
            max_continent_width=_pick(draft.max_continent_width, settings.max_continent_width),
        )
        num_players = _pick(draft.num_players, settings.num_players)
        seed = draft.seed or settings.seed or random_seed()
        rng = create_rng(seed)
        ui = RecordingUI()

        game_id = self._next_identifier()
        controller = build_controller(
            spec,
            num_players=num_players,
            rng=rng,
            human_players=draft.human_players,
            rules=self._rules,
            ui=ui,
            policy=RandomPolicy(rng),
            game_id=game_id,
        )
        controller.start()

        session = GameSession(controller=controller, ui=ui, seed=seed)
        self._sessions[game_id] = session
        logger.info("game %d started with seed %r", int(game_id), seed)
        return session

    def _next_identifier(self) -> dm.GameID:
        if not self._sessions:
            return dm.GameID(1)
        return dm.GameID(max(int(key) for key in self._sessions) + 1)

    def shutdown(self) -> None:
        self._sessions.clear()

    # ------------------------------------------------------------------
    # Serialisation

    @staticmethod
    def to_player_dict(player: dm.Player) -> dict[str, object]:
        return {
            "id": int(player.id),
            "name": player.name,
            "color": player.color,
            "controller": str(player.controller),
            "interaction_mode": str(player.interaction_mode),
            "main_token_id": int(player.main_token_id)
            if player.main_token_id is not None
            else None,
            "token_ids": [int(token_id) for token_id in player.token_ids],
            "met": sorted(int(other) for other, met in player.met.items() if met),
        }

    @staticmethod
    def to_summary_dict(session: GameSession) -> dict[str, object]:
        controller = session.controller
        game = session.game
        active = controller.active_player
        return {
            "id": int(game.id),
            "seed": session.seed,
            "width": game.grid.width,
            "height": game.grid.height,
            "turn_number": game.turn_number,
            "phase": str(controller.phase),
            "paused": controller.phase == TurnPhase.TURN_END,
            "active_player_id": int(active.id) if active is not None else None,
            "players": [
                GameService.to_player_dict(game.players[player_id])
                for player_id in game.turn_order
            ],
        }

    @staticmethod
    def to_token_dict(token: dm.Token) -> dict[str, object]:
        unit = token.unit
        return {
            "id": int(token.id),
            "kind": str(token.kind),
            "owner_id": int(token.owner_id) if token.owner_id is not None else None,
            "remaining_energy": unit.remaining_energy if unit is not None else None,
            "hit_points": unit.hit_points if unit is not None else None,
        }

    @staticmethod
    def to_board_dict(game: dm.Game, player: dm.Player) -> dict[str, object]:
        """Render the board as ``player`` knows it.

        Undiscovered hexes carry no terrain; occupants are only included on
        hexes the player currently sees.
        """

        hexes: list[dict[str, object]] = []
        for hex_ in game.grid.hexes():
            discovered = hex_.coord in player.discovered
            visible = hex_.coord in player.seen
            occupant = hex_.occupant if visible else None
            hexes.append(
                {
                    "row": hex_.coord.row,
                    "col": hex_.coord.col,
                    "discovered": discovered,
                    "visible": visible,
                    "tile": hex_.tile_type.name if discovered else None,
                    "color": hex_.tile_type.color if discovered else None,
                    "height": hex_.tile_type.height if discovered else None,
                    "occupant": GameService.to_token_dict(occupant)
                    if occupant is not None
                    else None,
                }
            )
        return {
            "player_id": int(player.id),
            "width": game.grid.width,
            "height": game.grid.height,
            "hexes": hexes,
        }

    @staticmethod
    def to_moves_dict(controller: TurnController) -> dict[str, object]:
        player = controller.active_player
        piece = controller.active_piece
        energy = piece.unit.remaining_energy if piece is not None and piece.unit else None
        return {
            "player_id": int(player.id) if player is not None else None,
            "phase": str(controller.phase),
            "remaining_energy": energy,
            "moves": [{"row": c.row, "col": c.col} for c in controller.reachable_moves],
        }

    @staticmethod
    def to_outcome_dict(outcome: ActionOutcome) -> dict[str, object]:
        return {
            "accepted": outcome.accepted,
            "reason": str(outcome.reason) if outcome.reason is not None else None,
            "cost": outcome.cost,
            "token_id": int(outcome.token_id) if outcome.token_id is not None else None,
        }


def _pick(value: int | None, default: int) -> int:
    return default if value is None else value


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig | None = None
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules or RulesConfig(
            turns=TurnRules(max_automatic_turns=self.settings.max_automatic_turns)
        )
        self.games = GameService(self.settings, rules=self.rules)

    async def shutdown(self) -> None:
        self.games.shutdown()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
