"""Pytest configuration and shared fixtures.

This adds the `src/` directory to `sys.path` so tests can import the
`hexwizards` package (e.g., `from hexwizards.domain.grid import HexGrid`)
without requiring an editable install in CI.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from hexwizards.domain.enums import ControllerKind, PieceKind  # noqa: E402
from hexwizards.domain.grid import HexGrid  # noqa: E402
from hexwizards.domain.models import (  # noqa: E402
    Coordinate,
    Game,
    GameID,
    Player,
    PlayerID,
)
from hexwizards.domain.pieces import PieceFactory  # noqa: E402
from hexwizards.domain.terrain import MapSpecification  # noqa: E402


class GameBuilder:
    """Hand-assembles small games with pieces at known coordinates."""

    def __init__(self, grid: HexGrid) -> None:
        self.grid = grid
        self.factory = PieceFactory()
        self.game = Game(
            id=GameID(1),
            map_spec=MapSpecification(width=grid.width, height=grid.height),
            grid=grid,
        )

    def add_player(
        self, coord: Coordinate | None, *, human: bool = False, name: str | None = None
    ) -> Player:
        player_id = PlayerID(len(self.game.players) + 1)
        player = Player(
            id=player_id,
            name=name or f"Player {int(player_id)}",
            color="#aa0000",
            controller=ControllerKind.HUMAN if human else ControllerKind.AI,
        )
        unit = self.factory.make(PieceKind.UNIT)
        player.set_main_piece(unit)
        self.game.add_token(unit)
        if coord is not None:
            self.grid.place_token(coord, unit)
        self.game.players[player_id] = player
        self.game.turn_order.append(player_id)
        return player


@pytest.fixture
def make_game():
    """Return a builder for a game on the given grid (all ocean by default)."""

    def _make(width: int = 6, height: int = 1, grid: HexGrid | None = None) -> GameBuilder:
        return GameBuilder(grid or HexGrid(width, height))

    return _make
