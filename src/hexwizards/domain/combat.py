"""Hit-point damage and token destruction."""

from __future__ import annotations

import logging

from hexwizards.domain.events import EventBus, TokenDestroyed
from hexwizards.domain.models import Game, Token

logger = logging.getLogger(__name__)


def apply_damage(game: Game, token: Token, amount: int, bus: EventBus | None = None) -> bool:
    """Subtract ``amount`` hit points from a unit, destroying it at zero.

    Structures have no hit points and ignore damage.

    Returns:
        True if the token was destroyed
    """
    if amount < 0:
        raise ValueError(f"damage must be non-negative, got {amount}")

    stats = token.unit
    if stats is None:
        return False

    stats.hit_points = max(0, stats.hit_points - amount)
    if stats.hit_points > 0:
        return False

    destroy_token(game, token, bus)
    return True


def destroy_token(game: Game, token: Token, bus: EventBus | None = None) -> None:
    """Remove ``token`` from its hex, its owner and the game."""

    if token.coord is not None:
        hex_ = game.grid.get(token.coord)
        if hex_.occupant is token:
            game.grid.remove_token(token.coord)
        token.coord = None

    owner_id = token.owner_id
    if owner_id is not None and owner_id in game.players:
        game.players[owner_id].remove_token(token)

    game.tokens.pop(token.id, None)
    logger.info("token %d of player %s destroyed", int(token.id), owner_id)
    if bus is not None:
        bus.publish(TokenDestroyed(token_id=token.id, owner_id=owner_id))
