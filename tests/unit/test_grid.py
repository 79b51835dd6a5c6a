"""Tests for the jagged offset-hex board."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hexwizards.domain.enums import PieceKind
from hexwizards.domain.grid import HexGrid, InvalidDimensions, OutOfBounds
from hexwizards.domain.models import OCEAN, PLAINS, Coordinate, TileType
from hexwizards.domain.pieces import PieceFactory


class TestConstruction:
    def test_rows_alternate_in_length(self):
        grid = HexGrid(5, 4)

        assert [grid.row_width(row) for row in range(4)] == [5, 4, 5, 4]
        assert len(grid) == 18

    def test_every_hex_knows_its_coordinate(self):
        grid = HexGrid(4, 3)

        for coord in grid.coordinates():
            assert grid.get(coord).coord == coord

    def test_starts_as_ocean(self):
        grid = HexGrid(3, 2)

        assert all(hex_.tile_type == OCEAN for hex_ in grid.hexes())

    @pytest.mark.parametrize(("width", "height"), [(1, 3), (0, 1), (4, 0), (-2, -2)])
    def test_invalid_dimensions_rejected(self, width, height):
        with pytest.raises(InvalidDimensions):
            HexGrid(width, height)

    def test_invalid_dimensions_is_a_value_error(self):
        assert issubclass(InvalidDimensions, ValueError)


class TestAdjacency:
    def test_even_row_neighbours(self):
        grid = HexGrid(5, 3)

        assert grid.adjacent(Coordinate(2, 2)) == {
            Coordinate(2, 1),
            Coordinate(2, 3),
            Coordinate(1, 2),
            Coordinate(1, 3),
        }

    def test_odd_row_neighbours(self):
        grid = HexGrid(5, 3)

        assert grid.adjacent(Coordinate(1, 2)) == {
            Coordinate(2, 2),
            Coordinate(2, 1),
            Coordinate(1, 1),
            Coordinate(1, 3),
            Coordinate(0, 2),
            Coordinate(0, 1),
        }

    def test_corner_has_no_wraparound(self):
        grid = HexGrid(4, 2)

        assert grid.adjacent(Coordinate(0, 0)) == {
            Coordinate(0, 1),
            Coordinate(1, 0),
            Coordinate(1, 1),
        }
        assert grid.adjacent(Coordinate(1, 0)) == {Coordinate(0, 0), Coordinate(1, 1)}

    def test_two_cell_board(self):
        grid = HexGrid(2, 1)

        assert grid.adjacent(Coordinate(0, 0)) == {Coordinate(0, 1)}
        assert grid.adjacent(Coordinate(0, 1)) == {Coordinate(0, 0)}

    def test_neighbours_in_fixed_order(self):
        grid = HexGrid(5, 3)

        assert grid.neighbors(Coordinate(1, 2)) == [
            Coordinate(2, 2),
            Coordinate(2, 1),
            Coordinate(1, 1),
            Coordinate(1, 3),
            Coordinate(0, 2),
            Coordinate(0, 1),
        ]

    def test_neighbours_of_out_of_bounds_coordinate(self):
        with pytest.raises(OutOfBounds):
            HexGrid(3, 3).neighbors(Coordinate(1, 2))

    @given(
        width=st.integers(min_value=2, max_value=9),
        height=st.integers(min_value=1, max_value=9),
    )
    def test_adjacency_is_symmetric(self, width, height):
        grid = HexGrid(width, height)

        for coord in grid.coordinates():
            neighbours = grid.adjacent(coord)
            assert coord not in neighbours
            assert len(neighbours) <= 6
            for neighbour in neighbours:
                assert coord in grid.adjacent(neighbour)


class TestLookup:
    @pytest.mark.parametrize(
        "coord",
        [
            Coordinate(-1, 0),
            Coordinate(0, -1),
            Coordinate(0, 4),
            Coordinate(1, 3),
            Coordinate(3, 0),
        ],
    )
    def test_out_of_bounds(self, coord):
        grid = HexGrid(4, 3)

        assert coord not in grid
        with pytest.raises(OutOfBounds, match="out of bounds"):
            grid.get(coord)

    def test_last_cell_of_odd_row_is_in_bounds(self):
        grid = HexGrid(4, 3)

        assert grid.in_bounds(Coordinate(1, 2))
        assert grid[Coordinate(1, 2)].coord == Coordinate(1, 2)

    def test_set_type(self):
        grid = HexGrid(3, 1)
        grid.set_type(Coordinate(0, 1), PLAINS)

        assert grid.get(Coordinate(0, 1)).is_land
        assert not grid.get(Coordinate(0, 0)).is_land


class TestTokens:
    def test_place_token_sets_back_reference(self):
        grid = HexGrid(3, 1)
        token = PieceFactory().make(PieceKind.UNIT)

        assert grid.place_token(Coordinate(0, 1), token) is None
        assert token.coord == Coordinate(0, 1)
        assert grid.get(Coordinate(0, 1)).occupant is token

    def test_moving_token_vacates_previous_hex(self):
        grid = HexGrid(3, 1)
        token = PieceFactory().make(PieceKind.UNIT)
        grid.place_token(Coordinate(0, 0), token)

        grid.place_token(Coordinate(0, 2), token)

        assert grid.get(Coordinate(0, 0)).occupant is None
        assert grid.get(Coordinate(0, 2)).occupant is token

    def test_place_token_evicts_occupant(self):
        grid = HexGrid(3, 1)
        factory = PieceFactory()
        first = factory.make(PieceKind.UNIT)
        second = factory.make(PieceKind.STRUCTURE)
        grid.place_token(Coordinate(0, 1), first)

        evicted = grid.place_token(Coordinate(0, 1), second)

        assert evicted is first
        assert first.coord is None
        assert grid.get(Coordinate(0, 1)).occupant is second

    def test_placing_on_own_hex_evicts_nothing(self):
        grid = HexGrid(3, 1)
        token = PieceFactory().make(PieceKind.UNIT)
        grid.place_token(Coordinate(0, 1), token)

        assert grid.place_token(Coordinate(0, 1), token) is None
        assert grid.get(Coordinate(0, 1)).occupant is token

    def test_remove_token(self):
        grid = HexGrid(3, 1)
        token = PieceFactory().make(PieceKind.UNIT)
        grid.place_token(Coordinate(0, 2), token)

        assert grid.remove_token(Coordinate(0, 2)) is token
        assert token.coord is None
        assert grid.remove_token(Coordinate(0, 2)) is None


class TestTileType:
    def test_ocean_is_the_only_non_land(self):
        assert not OCEAN.is_land
        assert PLAINS.is_land
        assert TileType(name="Hills", color="#777777", height=0.4, cost=3).is_land

    @pytest.mark.parametrize("cost", [0, -1])
    def test_non_positive_cost_rejected(self, cost):
        with pytest.raises(ValueError, match="must be positive"):
            TileType(name="Bad", color="#000000", height=0.0, cost=cost)
