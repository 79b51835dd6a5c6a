"""AI Policy Protocol Interface."""

from collections.abc import Collection
from typing import Protocol

from hexwizards.domain.models import Hex


class IAIPolicy(Protocol):
    """Protocol for computer-player move selection."""

    def choose(self, options: Collection[Hex]) -> Hex:
        """Pick exactly one destination.

        Args:
            options: Non-empty collection of legal destinations

        Returns:
            One element of ``options``

        Raises:
            ValueError: If ``options`` is empty
        """
        ...
