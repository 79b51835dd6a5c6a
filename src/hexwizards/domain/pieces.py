"""Default piece factory.

Kept apart from the turn controller so that what a "unit" or a "structure"
is made of lives in one place.
"""

from __future__ import annotations

from hexwizards.domain.enums import PieceKind
from hexwizards.domain.models import Token, TokenID, UnitStats
from hexwizards.domain.rules_config import DEFAULT_RULES, RulesConfig

# Names used by earlier builds of the game for the two piece kinds.
PIECE_ALIASES: dict[str, PieceKind] = {
    "wizard": PieceKind.UNIT,
    "tower": PieceKind.STRUCTURE,
}


class UnknownPieceKind(ValueError):
    """Raised when asked to build a piece kind the factory does not know."""


def parse_piece_kind(kind: PieceKind | str) -> PieceKind:
    """Resolve a kind name (or alias) to a :class:`PieceKind`.

    Raises:
        UnknownPieceKind: If ``kind`` names nothing the factory can build
    """
    if isinstance(kind, PieceKind):
        return kind
    key = str(kind).strip().lower()
    if key in PIECE_ALIASES:
        return PIECE_ALIASES[key]
    try:
        return PieceKind(key)
    except ValueError as exc:
        raise UnknownPieceKind(f"cannot make a piece of kind {kind!r}") from exc


class PieceFactory:
    """Creates tokens with game-unique identifiers."""

    def __init__(self, rules: RulesConfig = DEFAULT_RULES, *, first_id: int = 1) -> None:
        self._rules = rules
        self._next_id = first_id

    def make(self, kind: PieceKind | str) -> Token:
        piece_kind = parse_piece_kind(kind)
        token_id = TokenID(self._next_id)
        self._next_id += 1

        sight = self._rules.visibility.sight_radius
        if piece_kind == PieceKind.UNIT:
            stats = UnitStats(
                max_energy=self._rules.movement.max_energy,
                hit_points=self._rules.combat.unit_hit_points,
            )
            return Token(id=token_id, kind=piece_kind, sight=sight, unit=stats)
        return Token(id=token_id, kind=piece_kind, sight=sight)
