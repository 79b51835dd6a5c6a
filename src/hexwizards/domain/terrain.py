"""Procedural continent generation.

Continents start from seed hexes spread evenly along the middle row and grow
by a randomized flood fill: each land hex rolls a number in
``[min_continent_width, max_continent_width)`` and keeps spreading into its
ocean neighbours only while that roll is at least its distance from the seed.
The chance of stopping therefore rises with every step, which gives an
organic coastline instead of a fixed radius.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from hexwizards.domain.grid import HexGrid, InvalidDimensions
from hexwizards.domain.models import OCEAN, PLAINS, Coordinate, TileType

logger = logging.getLogger(__name__)

# The seed hex itself is the first ring of its continent.
SEED_DISTANCE = 1


@dataclass(frozen=True, slots=True)
class MapSpecification:
    """Board generation parameters."""

    width: int
    height: int
    num_continents: int = 1
    min_continent_width: int = 0
    max_continent_width: int = 1

    def validate(self) -> None:
        """Fail fast on parameters the generator cannot honour.

        Raises:
            InvalidDimensions: If any parameter is out of range
        """
        if self.width < 2:
            raise InvalidDimensions(f"width must be at least 2, got {self.width}")
        if self.height < 1:
            raise InvalidDimensions(f"height must be at least 1, got {self.height}")
        if self.num_continents < 1:
            raise InvalidDimensions(
                f"num_continents must be at least 1, got {self.num_continents}"
            )
        if self.min_continent_width < 0:
            raise InvalidDimensions(
                f"min_continent_width must be non-negative, got {self.min_continent_width}"
            )
        if self.max_continent_width <= self.min_continent_width:
            raise InvalidDimensions(
                "max_continent_width must be greater than min_continent_width "
                f"({self.max_continent_width} <= {self.min_continent_width})"
            )


class TerrainGenerator:
    """Carves land continents onto an all-ocean board."""

    def __init__(self, rng: random.Random, land: TileType = PLAINS) -> None:
        self._rng = rng
        self._land = land

    def generate(self, spec: MapSpecification) -> HexGrid:
        """Validate ``spec``, allocate the board and grow every continent."""

        spec.validate()
        grid = HexGrid(spec.width, spec.height, fill=OCEAN)
        for seed in self.continent_seeds(grid, spec):
            self.grow_continent(grid, seed, spec)

        land = sum(1 for hex_ in grid.hexes() if hex_.is_land)
        logger.debug("generated %dx%d board with %d land hexes", spec.width, spec.height, land)
        return grid

    @staticmethod
    def continent_seeds(grid: HexGrid, spec: MapSpecification) -> list[Coordinate]:
        """Seed hexes spaced evenly across the width at mid-height."""

        row = spec.height // 2
        space = spec.width // spec.num_continents
        last_col = grid.row_width(row) - 1
        return [
            Coordinate(row, min(space * i + space // 2, last_col))
            for i in range(spec.num_continents)
        ]

    def grow_continent(self, grid: HexGrid, seed: Coordinate, spec: MapSpecification) -> None:
        """Flood land outward from ``seed``.

        Only ocean hexes are grown into and each is turned to land before
        anything grows from it, so the fill cannot cycle.  An explicit stack
        keeps the depth-first order without recursion.
        """

        stack: list[tuple[Coordinate, int]] = [(seed, SEED_DISTANCE)]
        while stack:
            coord, distance = stack.pop()
            hex_ = grid.get(coord)
            if coord != seed and hex_.is_land:
                continue

            grid.set_type(coord, self._land)
            stop_roll = self._rng.randrange(spec.min_continent_width, spec.max_continent_width)
            if stop_roll < distance:
                continue

            # reversed so the first neighbour is grown first
            for neighbor in reversed(grid.neighbors(coord)):
                if not grid.get(neighbor).is_land:
                    stack.append((neighbor, distance + 1))


def generate_board(spec: MapSpecification, rng: random.Random) -> HexGrid:
    """Convenience wrapper building a board with the default land type."""

    return TerrainGenerator(rng).generate(spec)
