"""Game assembly: board, players and starting units.

Everything random (terrain, player colours, AI choices) is drawn from the one
``random.Random`` passed in, so a seed reproduces a whole game.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from hexwizards.domain.ai import RandomPolicy
from hexwizards.domain.enums import ControllerKind, PieceKind
from hexwizards.domain.events import EventBus
from hexwizards.domain.grid import HexGrid, InvalidDimensions
from hexwizards.domain.models import Coordinate, Game, GameID, Player, PlayerID
from hexwizards.domain.pieces import PieceFactory
from hexwizards.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexwizards.domain.terrain import MapSpecification, TerrainGenerator
from hexwizards.domain.turn import TurnController
from hexwizards.utils.rng import random_color

if TYPE_CHECKING:
    from hexwizards.interfaces import IAIPolicy, IGameUI, IPieceFactory

logger = logging.getLogger(__name__)


def start_positions(grid: HexGrid, num_players: int) -> list[Coordinate]:
    """Starting hexes for each player's main unit.

    Players line up along the middle row, ``width // (num_players + 1)``
    columns apart, the first at column 0.

    Raises:
        InvalidDimensions: If the board is too narrow to give every player
            a hex of their own
    """
    if num_players < 1:
        raise InvalidDimensions(f"num_players must be at least 1, got {num_players}")

    row = grid.height // 2
    spacing = grid.width // (num_players + 1)
    last_col = grid.row_width(row) - 1
    positions = [Coordinate(row, min(i * spacing, last_col)) for i in range(num_players)]
    if len(set(positions)) != len(positions):
        raise InvalidDimensions(
            f"a board {grid.width} wide cannot seat {num_players} players on one row"
        )
    return positions


def create_game(
    spec: MapSpecification,
    *,
    num_players: int,
    rng: random.Random,
    human_players: int = 1,
    rules: RulesConfig = DEFAULT_RULES,
    factory: IPieceFactory | None = None,
    game_id: GameID = GameID(1),
) -> Game:
    """Generate a board and seat ``num_players`` players on it.

    The first ``human_players`` seats are human-controlled, the rest are AI.
    Each player receives one unit as their main piece.
    """
    spec.validate()
    if not 0 <= human_players <= num_players:
        raise ValueError(
            f"human_players must be between 0 and {num_players}, got {human_players}"
        )

    grid = TerrainGenerator(rng).generate(spec)
    positions = start_positions(grid, num_players)
    factory = factory or PieceFactory(rules)

    game = Game(id=game_id, map_spec=spec, grid=grid)
    for index, coord in enumerate(positions):
        player_id = PlayerID(index + 1)
        player = Player(
            id=player_id,
            name=f"Player {index + 1}",
            color=random_color(rng),
            controller=ControllerKind.HUMAN if index < human_players else ControllerKind.AI,
        )
        unit = factory.make(PieceKind.UNIT)
        player.set_main_piece(unit)
        game.add_token(unit)
        grid.place_token(coord, unit)

        game.players[player_id] = player
        game.turn_order.append(player_id)

    logger.info(
        "created game %d: %dx%d board, %d players (%d human)",
        int(game_id),
        spec.width,
        spec.height,
        num_players,
        human_players,
    )
    return game


def build_controller(
    spec: MapSpecification,
    *,
    num_players: int,
    rng: random.Random,
    human_players: int = 1,
    rules: RulesConfig = DEFAULT_RULES,
    ui: IGameUI | None = None,
    policy: IAIPolicy | None = None,
    bus: EventBus | None = None,
    game_id: GameID = GameID(1),
) -> TurnController:
    """Create a game and wire a :class:`TurnController` around it.

    The controller is returned unstarted so callers can subscribe to its bus
    before the first turn runs.
    """
    factory = PieceFactory(rules)
    game = create_game(
        spec,
        num_players=num_players,
        rng=rng,
        human_players=human_players,
        rules=rules,
        factory=factory,
        game_id=game_id,
    )
    return TurnController(
        game,
        factory=factory,
        policy=policy or RandomPolicy(rng),
        ui=ui,
        rules=rules,
        bus=bus,
    )
