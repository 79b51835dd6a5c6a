"""Domain model for Hex Wizards.

The package holds every game rule and runs purely in memory:

* Dataclasses describing the board, pieces and players (see :mod:`models`).
* The hex grid, terrain generation and movement search.
* Fog of war and first-contact diplomacy.
* The turn controller that sequences players and applies their actions.
* Rule configuration objects (see :mod:`rules_config`).
"""

from . import (
    ai,
    combat,
    enums,
    events,
    grid,
    models,
    pieces,
    reachability,
    rules_config,
    setup,
    terrain,
    turn,
    visibility,
)

__all__ = [
    "ai",
    "combat",
    "enums",
    "events",
    "grid",
    "models",
    "pieces",
    "reachability",
    "rules_config",
    "setup",
    "terrain",
    "turn",
    "visibility",
]
