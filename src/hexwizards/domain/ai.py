"""Move-selection strategies for computer players."""

from __future__ import annotations

import random
from collections.abc import Collection

from hexwizards.domain.models import Hex


def _ordered(options: Collection[Hex]) -> list[Hex]:
    if not options:
        raise ValueError("options cannot be empty")
    return sorted(options, key=lambda hex_: hex_.coord)


class RandomPolicy:
    """Picks uniformly at random among the legal destinations."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def choose(self, options: Collection[Hex]) -> Hex:
        # sorted first so a seeded rng gives the same pick regardless of set order
        return self._rng.choice(_ordered(options))


class FirstOptionPolicy:
    """Always picks the destination with the lowest coordinate."""

    def choose(self, options: Collection[Hex]) -> Hex:
        return _ordered(options)[0]
