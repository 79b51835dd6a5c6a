"""Energy-bounded reachability and movement cost on the hex board.

Entering a hex costs that hex's tile cost.  Both searches only step onto hexes
accepted by a filter (the moving player's fog of war: undiscovered hexes are
never offered as moves and never routed through).  The origin hex is free and
never filtered.
"""

from __future__ import annotations

from collections.abc import Callable
from heapq import heappop, heappush

from hexwizards.domain.grid import HexGrid
from hexwizards.domain.models import Coordinate, Hex

HexFilter = Callable[[Hex], bool]


class NoPathError(Exception):
    """Raised when a destination expected to be reachable has no path."""


def _accept_all(_: Hex) -> bool:
    return True


def reachable_set(
    grid: HexGrid,
    origin: Coordinate,
    energy: int,
    is_discovered: HexFilter = _accept_all,
) -> set[Hex]:
    """Return every hex a piece at ``origin`` can reach with ``energy``.

    A hex is included when the energy left after entering it is ``>= 0`` and
    is explored further only while energy is left (``> 0``).  The best
    remaining energy seen per hex is kept, so a hex first reached by an
    expensive route is re-explored when a cheaper route turns up.  The origin
    is never part of the result.

    Args:
        grid: The board
        origin: Where the piece stands
        energy: Energy available for this move
        is_discovered: Filter a hex must pass to be entered

    Returns:
        Set of reachable hexes, excluding the origin
    """
    best_remaining: dict[Coordinate, int] = {origin: energy}
    stack: list[tuple[Coordinate, int]] = [(origin, energy)]

    while stack:
        coord, remaining = stack.pop()
        if remaining < best_remaining.get(coord, -1):
            continue  # superseded by a cheaper arrival

        for hex_ in grid.adjacent_hexes(coord):
            if hex_.coord == origin or not is_discovered(hex_):
                continue
            left = remaining - hex_.tile_type.cost
            if left < 0 or left <= best_remaining.get(hex_.coord, -1):
                continue
            best_remaining[hex_.coord] = left
            if left > 0:
                stack.append((hex_.coord, left))

    del best_remaining[origin]
    return {grid.get(coord) for coord in best_remaining}


def min_cost(
    grid: HexGrid,
    origin: Coordinate,
    destination: Coordinate,
    is_discovered: HexFilter = _accept_all,
) -> int | None:
    """Find the cheapest total tile cost from ``origin`` to ``destination``.

    Dijkstra's algorithm with a best-cost memo and a closed set; terminates on
    any board regardless of cycles.

    Returns:
        The minimum cost (``0`` when origin equals destination), or ``None``
        when no path exists through hexes accepted by ``is_discovered``
    """
    grid.get(destination)  # bounds check
    if origin == destination:
        return 0

    # Priority queue: (cost_so_far, coordinate)
    pq: list[tuple[int, Coordinate]] = [(0, origin)]
    best_cost: dict[Coordinate, int] = {origin: 0}
    visited: set[Coordinate] = set()

    while pq:
        cost, coord = heappop(pq)
        if coord in visited:
            continue
        visited.add(coord)

        if coord == destination:
            return cost

        for hex_ in grid.adjacent_hexes(coord):
            if hex_.coord in visited or not is_discovered(hex_):
                continue
            new_cost = cost + hex_.tile_type.cost
            if new_cost < best_cost.get(hex_.coord, new_cost + 1):
                best_cost[hex_.coord] = new_cost
                heappush(pq, (new_cost, hex_.coord))

    return None


def require_min_cost(
    grid: HexGrid,
    origin: Coordinate,
    destination: Coordinate,
    is_discovered: HexFilter = _accept_all,
) -> int:
    """Like :func:`min_cost` but for destinations already known to be reachable.

    Raises:
        NoPathError: If no path exists after all
    """
    cost = min_cost(grid, origin, destination, is_discovered)
    if cost is None:
        raise NoPathError(f"no path from {origin} to {destination}")
    return cost
