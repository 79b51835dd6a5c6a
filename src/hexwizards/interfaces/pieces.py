"""Piece Factory Protocol Interface."""

from typing import Protocol

from hexwizards.domain.enums import PieceKind
from hexwizards.domain.models import Token


class IPieceFactory(Protocol):
    """Protocol for whatever turns a piece kind into a fresh token."""

    def make(self, kind: PieceKind | str) -> Token:
        """Create a token of the given kind.

        Args:
            kind: ``unit`` or ``structure`` (aliases ``wizard`` / ``tower``)

        Returns:
            A new token with a game-unique id, not yet on the board

        Raises:
            UnknownPieceKind: If the kind is not recognised
        """
        ...
