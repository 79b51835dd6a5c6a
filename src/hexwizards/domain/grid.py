"""Jagged offset-hex board.

Rows alternate in length: even rows hold ``width`` cells and odd rows hold
``width - 1``.  Neighbours of ``(row, col)``:

* even row: ``(r+1, c)``, ``(r+1, c+1)``, ``(r, c-1)``, ``(r, c+1)``,
  ``(r-1, c)``, ``(r-1, c+1)``
* odd row: the two diagonal columns use ``c-1`` instead of ``c+1``

Out-of-bounds neighbours are dropped; the board does not wrap.  Because an
even-row cell ``c`` touches odd-row cells ``c`` and ``c+1`` and an odd-row
cell ``c`` touches even-row cells ``c`` and ``c-1``, adjacency is symmetric.
"""

from __future__ import annotations

from collections.abc import Iterator

from hexwizards.domain.models import OCEAN, Coordinate, Hex, TileType, Token

MIN_WIDTH = 2
MIN_HEIGHT = 1


class InvalidDimensions(ValueError):
    """Raised when board or generation parameters are out of range."""


class OutOfBounds(LookupError):
    """Raised when a coordinate lies outside the jagged board."""


class HexGrid:
    """Stores the board's hexes and answers adjacency questions."""

    def __init__(self, width: int, height: int, fill: TileType = OCEAN) -> None:
        if width < MIN_WIDTH:
            raise InvalidDimensions(f"width must be at least {MIN_WIDTH}, got {width}")
        if height < MIN_HEIGHT:
            raise InvalidDimensions(f"height must be at least {MIN_HEIGHT}, got {height}")

        self.width = width
        self.height = height
        self._rows: list[list[Hex]] = [
            [Hex(coord=Coordinate(row, col), tile_type=fill) for col in range(self.row_width(row))]
            for row in range(height)
        ]

    # ------------------------------------------------------------------
    # Geometry

    def row_width(self, row: int) -> int:
        """Number of cells in ``row`` (even rows are the wide ones)."""
        return self.width if row % 2 == 0 else self.width - 1

    def in_bounds(self, coord: Coordinate) -> bool:
        if coord.row < 0 or coord.row >= self.height:
            return False
        return 0 <= coord.col < self.row_width(coord.row)

    def neighbors(self, coord: Coordinate) -> list[Coordinate]:
        """In-bounds neighbours of ``coord`` in a fixed order.

        Raises:
            OutOfBounds: If ``coord`` itself is not on the board
        """
        self._require(coord)
        row, col = coord.row, coord.col
        diagonal = col + 1 if row % 2 == 0 else col - 1
        candidates = (
            Coordinate(row + 1, col),
            Coordinate(row + 1, diagonal),
            Coordinate(row, col - 1),
            Coordinate(row, col + 1),
            Coordinate(row - 1, col),
            Coordinate(row - 1, diagonal),
        )
        return [candidate for candidate in candidates if self.in_bounds(candidate)]

    def adjacent(self, coord: Coordinate) -> set[Coordinate]:
        """Set of up to six coordinates adjacent to ``coord``."""
        return set(self.neighbors(coord))

    def adjacent_hexes(self, coord: Coordinate) -> list[Hex]:
        return [self.get(neighbor) for neighbor in self.neighbors(coord)]

    # ------------------------------------------------------------------
    # Lookup

    def get(self, coord: Coordinate) -> Hex:
        self._require(coord)
        return self._rows[coord.row][coord.col]

    def __getitem__(self, coord: Coordinate) -> Hex:
        return self.get(coord)

    def __contains__(self, coord: object) -> bool:
        return isinstance(coord, Coordinate) and self.in_bounds(coord)

    def hexes(self) -> Iterator[Hex]:
        for row in self._rows:
            yield from row

    def coordinates(self) -> Iterator[Coordinate]:
        for hex_ in self.hexes():
            yield hex_.coord

    def __len__(self) -> int:
        return sum(len(row) for row in self._rows)

    # ------------------------------------------------------------------
    # Mutation

    def set_type(self, coord: Coordinate, tile_type: TileType) -> None:
        self.get(coord).tile_type = tile_type

    def place_token(self, coord: Coordinate, token: Token) -> Token | None:
        """Put ``token`` on ``coord``, vacating wherever it stood before.

        Any other token already on the destination is evicted: it is taken
        off the board (its coordinate becomes ``None``) and returned.
        """
        destination = self.get(coord)

        if token.coord is not None and token.coord != coord:
            previous = self.get(token.coord)
            if previous.occupant is token:
                previous.occupant = None

        evicted = destination.occupant
        if evicted is token:
            evicted = None
        elif evicted is not None:
            evicted.coord = None

        destination.occupant = token
        token.coord = coord
        return evicted

    def remove_token(self, coord: Coordinate) -> Token | None:
        hex_ = self.get(coord)
        token = hex_.occupant
        hex_.occupant = None
        if token is not None:
            token.coord = None
        return token

    # ------------------------------------------------------------------

    def _require(self, coord: Coordinate) -> None:
        if not self.in_bounds(coord):
            raise OutOfBounds(f"{coord.row}, {coord.col} is out of bounds.")

    def __repr__(self) -> str:
        return f"HexGrid(width={self.width}, height={self.height})"
