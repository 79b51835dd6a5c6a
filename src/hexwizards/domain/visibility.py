"""Fog of war: what each player has discovered and what it sees right now.

``discovered`` only ever grows; ``seen`` is cleared at the start of each of
the player's turns and refilled by revealing from every piece the player has
on the board.  Whether a renderer draws a hex (and the tokens on it) for a
player is a pure function of that player's ``seen`` set.
"""

from __future__ import annotations

from collections import deque

from hexwizards.domain.events import EventBus, PlayerSighted
from hexwizards.domain.grid import HexGrid
from hexwizards.domain.models import Coordinate, Player


class VisibilityTracker:
    """Performs radius-limited reveals and reports foreign pieces coming into view."""

    def __init__(self, grid: HexGrid, bus: EventBus | None = None) -> None:
        self._grid = grid
        self._bus = bus

    def reveal(self, player: Player, origin: Coordinate, radius: int) -> set[Coordinate]:
        """Mark every hex within ``radius`` hops of ``origin`` as discovered and seen.

        The flood follows plain grid adjacency; fog does not limit it.  For each
        hex that enters ``player.seen`` while occupied by another player's token,
        a :class:`PlayerSighted` event is published.

        Returns:
            Coordinates that were not in ``player.seen`` before this call
        """
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")

        self._grid.get(origin)  # bounds check

        newly_seen: set[Coordinate] = set()
        frontier: deque[tuple[Coordinate, int]] = deque([(origin, 0)])
        visited = {origin}

        while frontier:
            coord, hops = frontier.popleft()
            player.discovered.add(coord)
            if coord not in player.seen:
                player.seen.add(coord)
                newly_seen.add(coord)
                self._report_sighting(player, coord)

            if hops == radius:
                continue
            for neighbor in self._grid.neighbors(coord):
                if neighbor not in visited:
                    visited.add(neighbor)
                    frontier.append((neighbor, hops + 1))

        return newly_seen

    @staticmethod
    def reset_seen(player: Player) -> None:
        """Forget what ``player`` currently sees; discoveries are kept."""
        player.seen.clear()

    @staticmethod
    def is_visible(player: Player, coord: Coordinate) -> bool:
        return coord in player.seen

    @staticmethod
    def is_discovered(player: Player, coord: Coordinate) -> bool:
        return coord in player.discovered

    def _report_sighting(self, player: Player, coord: Coordinate) -> None:
        occupant = self._grid.get(coord).occupant
        if occupant is None or occupant.owner_id is None or occupant.owner_id == player.id:
            return
        if self._bus is not None:
            self._bus.publish(
                PlayerSighted(observer_id=player.id, sighted_id=occupant.owner_id, coord=coord)
            )
