"""Dataclasses describing every Hex Wizards game entity.

The board, its tokens and the players are plain in-memory records.  Tokens
and players are addressed by strongly typed integer identifiers and stored in
the :class:`Game` aggregate; hexes are addressed by :class:`Coordinate` and
owned by the grid.  Nothing here knows about rendering: whether a hex is drawn
is decided by a renderer from a player's ``seen`` set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NewType

from .enums import ControllerKind, InteractionMode, PieceKind

if TYPE_CHECKING:
    from .grid import HexGrid
    from .terrain import MapSpecification

# --- Strongly typed identifiers -------------------------------------------------

GameID = NewType("GameID", int)
PlayerID = NewType("PlayerID", int)
TokenID = NewType("TokenID", int)


# --- Board ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True, order=True)
class Coordinate:
    """Offset-grid position of a hex.

    Attributes:
        row: Row index; even rows hold ``width`` cells, odd rows ``width - 1``
        col: Column index within the row
    """

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True, slots=True)
class TileType:
    """Terrain kind: display attributes plus the cost to enter the tile."""

    name: str
    color: str
    height: float
    cost: int = 1

    def __post_init__(self) -> None:
        if self.cost <= 0:
            raise ValueError(f"tile movement cost must be positive, got {self.cost}")

    @property
    def is_land(self) -> bool:
        return self != OCEAN


OCEAN = TileType(name="Ocean", color="#1f4fd8", height=0.1, cost=2)
PLAINS = TileType(name="Plains", color="#3fa34d", height=0.2, cost=5)


@dataclass(slots=True, eq=False)
class Hex:
    """One board cell; at most one token stands on it."""

    coord: Coordinate
    tile_type: TileType = OCEAN
    occupant: Token | None = None

    @property
    def is_land(self) -> bool:
        return self.tile_type.is_land

    def __repr__(self) -> str:
        return f"Hex{self.coord}[{self.tile_type.name}]"


# --- Pieces ---------------------------------------------------------------------


@dataclass(slots=True)
class UnitStats:
    """Mobile-token body: the per-turn energy budget and hit points."""

    max_energy: int
    remaining_energy: int = 0
    hit_points: int = 1

    def start_turn(self) -> None:
        self.remaining_energy = self.max_energy


@dataclass(slots=True, eq=False)
class Token:
    """Any placeable piece.

    ``kind`` is the variant tag; units carry a :class:`UnitStats` body while
    structures carry none.
    """

    id: TokenID
    kind: PieceKind
    sight: int
    owner_id: PlayerID | None = None
    coord: Coordinate | None = None
    unit: UnitStats | None = None

    @property
    def is_unit(self) -> bool:
        return self.unit is not None

    @property
    def on_board(self) -> bool:
        return self.coord is not None

    def __repr__(self) -> str:
        return f"Token#{int(self.id)}({self.kind}, owner={self.owner_id}, at={self.coord})"


# --- Players --------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class Player:
    """A participant: owned pieces plus fog-of-war and diplomacy state."""

    id: PlayerID
    name: str
    color: str
    controller: ControllerKind = ControllerKind.AI
    interaction_mode: InteractionMode = InteractionMode.MOVE
    token_ids: list[TokenID] = field(default_factory=list)
    main_token_id: TokenID | None = None
    discovered: set[Coordinate] = field(default_factory=set)
    seen: set[Coordinate] = field(default_factory=set)
    met: dict[PlayerID, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.met[self.id] = True

    @property
    def is_human(self) -> bool:
        return self.controller == ControllerKind.HUMAN

    def has_discovered(self, hex_: Hex) -> bool:
        return hex_.coord in self.discovered

    def has_met(self, other: Player) -> bool:
        return self.met.get(other.id, False)

    def meet(self, other: Player) -> bool:
        """Record first contact with ``other`` on both sides.

        Returns True when the relation changed, False if the two had already met.
        """
        if self.has_met(other):
            return False
        self.met[other.id] = True
        other.meet(self)
        return True

    def switch_interaction_mode(self) -> InteractionMode:
        if self.interaction_mode == InteractionMode.MOVE:
            self.interaction_mode = InteractionMode.PLACE
        else:
            self.interaction_mode = InteractionMode.MOVE
        return self.interaction_mode

    def add_token(self, token: Token) -> None:
        token.owner_id = self.id
        if token.id not in self.token_ids:
            self.token_ids.append(token.id)

    def set_main_piece(self, token: Token) -> None:
        self.add_token(token)
        self.main_token_id = token.id

    def remove_token(self, token: Token) -> None:
        self.token_ids = [tid for tid in self.token_ids if tid != token.id]
        if self.main_token_id == token.id:
            self.main_token_id = None


# --- Aggregate ------------------------------------------------------------------


@dataclass(slots=True)
class Game:
    """Root aggregate representing one game in progress."""

    id: GameID
    map_spec: MapSpecification
    grid: HexGrid
    players: dict[PlayerID, Player] = field(default_factory=dict)
    tokens: dict[TokenID, Token] = field(default_factory=dict)
    turn_order: list[PlayerID] = field(default_factory=list)
    turn_index: int = -1
    turn_number: int = 0

    @property
    def active_player(self) -> Player | None:
        if self.turn_index < 0 or not self.turn_order:
            return None
        return self.players[self.turn_order[self.turn_index]]

    @property
    def human_players(self) -> list[Player]:
        return [player for player in self.players.values() if player.is_human]

    def tokens_of(self, player: Player) -> list[Token]:
        return [self.tokens[tid] for tid in player.token_ids if tid in self.tokens]

    def active_piece(self, player: Player) -> Token | None:
        if player.main_token_id is None:
            return None
        return self.tokens.get(player.main_token_id)

    def add_token(self, token: Token) -> None:
        self.tokens[token.id] = token
