"""Typed game events and the channel that carries them.

The turn controller owns one :class:`EventBus` and hands it to the helpers
that need to report something (the visibility tracker reports sightings).
Adapters subscribe to the bus to translate events into rendering or UI calls;
nothing is wired through global state.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from hexwizards.domain.enums import RejectionReason
from hexwizards.domain.models import Coordinate, PlayerID, TokenID


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base class for everything published on the bus."""


@dataclass(frozen=True, slots=True)
class TurnStarted(GameEvent):
    player_id: PlayerID
    turn_number: int


@dataclass(frozen=True, slots=True)
class TurnEnded(GameEvent):
    """A player's turn ended; ``auto_passed`` when there was no legal move to make."""

    player_id: PlayerID
    auto_passed: bool


@dataclass(frozen=True, slots=True)
class TurnsPaused(GameEvent):
    """The automatic-turn limit was hit; ``resume()`` continues."""

    after_turns: int


@dataclass(frozen=True, slots=True)
class TokenMoved(GameEvent):
    token_id: TokenID
    player_id: PlayerID
    origin: Coordinate
    destination: Coordinate
    cost: int


@dataclass(frozen=True, slots=True)
class StructurePlaced(GameEvent):
    token_id: TokenID
    player_id: PlayerID
    coord: Coordinate


@dataclass(frozen=True, slots=True)
class TokenDestroyed(GameEvent):
    token_id: TokenID
    owner_id: PlayerID | None


@dataclass(frozen=True, slots=True)
class ActionRejected(GameEvent):
    player_id: PlayerID | None
    coord: Coordinate
    reason: RejectionReason


@dataclass(frozen=True, slots=True)
class PlayerSighted(GameEvent):
    """``observer_id`` newly sees a hex occupied by a token of ``sighted_id``."""

    observer_id: PlayerID
    sighted_id: PlayerID
    coord: Coordinate


@dataclass(frozen=True, slots=True)
class PlayersMet(GameEvent):
    player_id: PlayerID
    other_id: PlayerID


Handler = Callable[[GameEvent], None]
E = TypeVar("E", bound=GameEvent)


class EventBus:
    """Synchronous publish/subscribe channel with an in-memory history."""

    def __init__(self, *, keep_history: int = 1000) -> None:
        self._handlers: dict[type[GameEvent], list[Handler]] = defaultdict(list)
        self._keep_history = keep_history
        self.history: list[GameEvent] = []

    def subscribe(self, event_type: type[GameEvent], handler: Handler) -> None:
        """Call ``handler`` for every published event of ``event_type`` (or a subclass)."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[GameEvent], handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: GameEvent) -> None:
        self.history.append(event)
        if len(self.history) > self._keep_history:
            del self.history[: len(self.history) - self._keep_history]

        for event_type in type(event).__mro__:
            for handler in list(self._handlers.get(event_type, ())):
                handler(event)

    def of_type(self, event_type: type[E]) -> list[E]:
        return [event for event in self.history if isinstance(event, event_type)]
