"""Turn sequencing for Hex Wizards games.

One player acts at a time.  A turn runs through these phases::

    turn_start -> compute_visibility -> compute_reachable_moves
        -> await_input (human) | ai_acts (AI)
        -> apply_action -> compute_reachable_moves ... (while energy remains)
        -> turn_end -> turn_start (next player)

Human turns stop in ``await_input`` until :meth:`TurnController.validate_and_make_move`
(or :meth:`TurnController.end_turn`) is called.  AI turns and automatic passes
run synchronously inside the call that reached them.  A game in which no human
ever gets a move would otherwise never return, so after
``rules.turns.max_automatic_turns`` consecutive automatic turns the controller
parks in ``turn_end`` and waits for :meth:`TurnController.resume`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hexwizards.domain import combat
from hexwizards.domain.enums import InteractionMode, PieceKind, RejectionReason, TurnPhase
from hexwizards.domain.events import (
    ActionRejected,
    EventBus,
    GameEvent,
    PlayerSighted,
    PlayersMet,
    StructurePlaced,
    TokenMoved,
    TurnEnded,
    TurnsPaused,
    TurnStarted,
)
from hexwizards.domain.models import Coordinate, Game, Hex, Player, PlayerID, Token, TokenID
from hexwizards.domain.reachability import reachable_set, require_min_cost
from hexwizards.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexwizards.domain.visibility import VisibilityTracker

if TYPE_CHECKING:
    from hexwizards.interfaces import IAIPolicy, IGameUI, IPieceFactory

logger = logging.getLogger(__name__)

INSUFFICIENT_ENERGY_NOTICE = "Not enough energy to place that structure."


class EngineInvariantError(RuntimeError):
    """Raised when the engine reaches a state its own checks should have prevented."""


@dataclass(slots=True)
class ActionOutcome:
    """Result of a requested action."""

    accepted: bool
    reason: RejectionReason | None = None
    cost: int = 0
    token_id: TokenID | None = None

    @classmethod
    def rejected(cls, reason: RejectionReason) -> ActionOutcome:
        return cls(accepted=False, reason=reason)


class TurnController:
    """State machine driving a :class:`~hexwizards.domain.models.Game`."""

    def __init__(
        self,
        game: Game,
        *,
        factory: IPieceFactory,
        policy: IAIPolicy,
        ui: IGameUI | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        bus: EventBus | None = None,
    ) -> None:
        if not game.turn_order:
            raise ValueError("a game needs at least one player")

        self.game = game
        self.rules = rules
        self.bus = bus or EventBus()
        self.visibility = VisibilityTracker(game.grid, self.bus)
        self.phase = TurnPhase.NOT_STARTED
        self._factory = factory
        self._policy = policy
        self._ui = ui
        self._reachable: set[Hex] = set()

        self.bus.subscribe(PlayerSighted, self._on_player_sighted)

    # ------------------------------------------------------------------
    # Read-only views

    @property
    def active_player(self) -> Player | None:
        return self.game.active_player

    @property
    def active_piece(self) -> Token | None:
        player = self.active_player
        return self.game.active_piece(player) if player is not None else None

    @property
    def reachable_moves(self) -> list[Coordinate]:
        """Legal destinations for the active piece, in coordinate order."""
        return sorted(hex_.coord for hex_ in self._reachable)

    def is_legal_destination(self, coord: Coordinate) -> bool:
        return any(hex_.coord == coord for hex_ in self._reachable)

    # ------------------------------------------------------------------
    # External entry points

    def start(self) -> None:
        """Begin the first player's turn."""

        if self.phase != TurnPhase.NOT_STARTED:
            raise RuntimeError("game already started")
        self._run_turns()

    def resume(self) -> None:
        """Continue after the automatic-turn limit paused the game."""

        if self.phase != TurnPhase.TURN_END:
            raise RuntimeError(f"cannot resume from phase {self.phase}")
        self._run_turns()

    def validate_and_make_move(self, row: int, col: int) -> ActionOutcome:
        """Handle a click on ``(row, col)`` by the human whose turn it is.

        Illegal targets are declined without touching any state.
        """

        player = self.active_player
        coord = Coordinate(row, col)

        if self.phase != TurnPhase.AWAIT_INPUT or player is None:
            return self._reject(player, coord, RejectionReason.NOT_AWAITING_INPUT)
        if not self.game.grid.in_bounds(coord):
            return self._reject(player, coord, RejectionReason.OUT_OF_BOUNDS)

        destination = self.game.grid.get(coord)
        if destination not in self._reachable:
            return self._reject(player, coord, RejectionReason.NOT_REACHABLE)

        outcome = self._apply_action(player, destination)
        if not outcome.accepted:
            self.phase = TurnPhase.AWAIT_INPUT
            return outcome

        if self._continue_after_action(player):
            self.phase = TurnPhase.AWAIT_INPUT
        else:
            self._finish_turn(player, auto_passed=False)
            self._run_turns()
        return outcome

    def end_turn(self) -> bool:
        """Let the human whose turn it is pass voluntarily.

        Returns:
            False if no human turn was waiting for input
        """

        player = self.active_player
        if self.phase != TurnPhase.AWAIT_INPUT or player is None:
            return False
        self._finish_turn(player, auto_passed=False)
        self._run_turns()
        return True

    def switch_interaction_mode(self, player_id: PlayerID | None = None) -> InteractionMode:
        """Toggle a human player's click mode between move and place."""

        player = self.game.players[player_id] if player_id is not None else self.active_player
        if player is None or not player.is_human:
            raise ValueError("only human players choose an interaction mode")
        mode = player.switch_interaction_mode()
        logger.debug("player %d interaction mode changed to %s", int(player.id), mode)
        return mode

    def damage_token(self, token_id: TokenID, amount: int) -> bool:
        """Deal hit-point damage to a unit; returns True if it was destroyed."""

        token = self.game.tokens.get(token_id)
        if token is None:
            raise LookupError(f"token {int(token_id)} not found")

        was_active = token is self.active_piece
        destroyed = combat.apply_damage(self.game, token, amount, self.bus)

        if destroyed and was_active and self.phase == TurnPhase.AWAIT_INPUT:
            player = self.active_player
            assert player is not None
            if not self._compute_reachable_moves(player):
                self._finish_turn(player, auto_passed=True)
                self._run_turns()
            else:
                self.phase = TurnPhase.AWAIT_INPUT
        return destroyed

    # ------------------------------------------------------------------
    # Turn loop

    def _run_turns(self) -> None:
        automatic_turns = 0
        while True:
            player = self._advance_to_next_player()
            self._start_turn(player)
            self._compute_visibility(player)

            if not self._compute_reachable_moves(player):
                self._finish_turn(player, auto_passed=True)
            elif player.is_human:
                self.phase = TurnPhase.AWAIT_INPUT
                return
            else:
                self._take_ai_turn(player)

            automatic_turns += 1
            if automatic_turns >= self.rules.turns.max_automatic_turns:
                logger.info(
                    "pausing after %d automatic turns (turn %d)",
                    automatic_turns,
                    self.game.turn_number,
                )
                self._publish(TurnsPaused(after_turns=automatic_turns))
                return

    def _advance_to_next_player(self) -> Player:
        game = self.game
        game.turn_index = (game.turn_index + 1) % len(game.turn_order)
        game.turn_number += 1
        return game.players[game.turn_order[game.turn_index]]

    def _start_turn(self, player: Player) -> None:
        self.phase = TurnPhase.TURN_START
        for token in self.game.tokens_of(player):
            if token.unit is not None:
                token.unit.start_turn()
        logger.debug("turn %d: player %d", self.game.turn_number, int(player.id))
        self._publish(TurnStarted(player_id=player.id, turn_number=self.game.turn_number))

    def _compute_visibility(self, player: Player) -> None:
        self.phase = TurnPhase.COMPUTE_VISIBILITY
        self.visibility.reset_seen(player)
        self._reveal_from_pieces(player)

    def _reveal_from_pieces(self, player: Player) -> None:
        for token in self.game.tokens_of(player):
            if token.coord is not None:
                self.visibility.reveal(player, token.coord, token.sight)

    def _compute_reachable_moves(self, player: Player) -> bool:
        self.phase = TurnPhase.COMPUTE_REACHABLE_MOVES
        piece = self.game.active_piece(player)
        if piece is None or piece.coord is None or piece.unit is None:
            self._reachable = set()
        else:
            reachable = reachable_set(
                self.game.grid,
                piece.coord,
                piece.unit.remaining_energy,
                player.has_discovered,
            )
            # occupied hexes can be crossed but not entered
            self._reachable = {hex_ for hex_ in reachable if hex_.occupant is None}
        return bool(self._reachable)

    def _take_ai_turn(self, player: Player) -> None:
        while True:
            self.phase = TurnPhase.AI_ACTS
            destination = self._policy.choose(self._reachable)
            if destination not in self._reachable:
                raise EngineInvariantError(
                    f"AI policy chose {destination.coord}, which is not a legal destination"
                )
            outcome = self._apply_action(player, destination)
            if not outcome.accepted or not self._continue_after_action(player):
                break
        self._finish_turn(player, auto_passed=False)

    def _finish_turn(self, player: Player, *, auto_passed: bool) -> None:
        self.phase = TurnPhase.TURN_END
        self._reachable = set()
        self._publish(TurnEnded(player_id=player.id, auto_passed=auto_passed))

    # ------------------------------------------------------------------
    # Actions

    def _apply_action(self, player: Player, destination: Hex) -> ActionOutcome:
        self.phase = TurnPhase.APPLY_ACTION
        piece = self.game.active_piece(player)
        if piece is None or piece.coord is None or piece.unit is None:
            raise EngineInvariantError("applying an action without an active piece on the board")
        if destination.occupant is not None:
            raise EngineInvariantError(f"action targets occupied hex {destination.coord}")

        if player.interaction_mode == InteractionMode.MOVE:
            return self._move(player, piece, destination)
        return self._place_structure(player, piece, destination)

    def _move(self, player: Player, piece: Token, destination: Hex) -> ActionOutcome:
        assert piece.coord is not None and piece.unit is not None
        origin = piece.coord
        cost = require_min_cost(self.game.grid, origin, destination.coord, player.has_discovered)

        piece.unit.remaining_energy -= cost
        self.game.grid.place_token(destination.coord, piece)

        self._publish(
            TokenMoved(
                token_id=piece.id,
                player_id=player.id,
                origin=origin,
                destination=destination.coord,
                cost=cost,
            )
        )
        self.visibility.reveal(player, destination.coord, piece.sight)
        return ActionOutcome(accepted=True, cost=cost, token_id=piece.id)

    def _place_structure(self, player: Player, piece: Token, destination: Hex) -> ActionOutcome:
        assert piece.unit is not None
        cost = self.rules.movement.placement_cost
        if piece.unit.remaining_energy < cost:
            if self._ui is not None:
                self._ui.show_notice(INSUFFICIENT_ENERGY_NOTICE)
            return self._reject(player, destination.coord, RejectionReason.INSUFFICIENT_ENERGY)

        structure = self._factory.make(PieceKind.STRUCTURE)
        player.add_token(structure)
        self.game.add_token(structure)
        self.game.grid.place_token(destination.coord, structure)
        piece.unit.remaining_energy -= cost

        self._publish(
            StructurePlaced(token_id=structure.id, player_id=player.id, coord=destination.coord)
        )
        self.visibility.reveal(player, destination.coord, structure.sight)
        return ActionOutcome(accepted=True, cost=cost, token_id=structure.id)

    def _continue_after_action(self, player: Player) -> bool:
        """Decide whether the acting player keeps the turn."""

        piece = self.game.active_piece(player)
        if piece is None or piece.unit is None:
            return False

        remaining = piece.unit.remaining_energy
        if remaining < 0:
            raise EngineInvariantError(
                f"player {int(player.id)} has {remaining} energy after a validated action"
            )
        if remaining == 0:
            return False
        return self._compute_reachable_moves(player)

    def _reject(
        self, player: Player | None, coord: Coordinate, reason: RejectionReason
    ) -> ActionOutcome:
        logger.debug("rejected action at %s: %s", coord, reason)
        player_id = player.id if player is not None else None
        self._publish(ActionRejected(player_id=player_id, coord=coord, reason=reason))
        return ActionOutcome.rejected(reason)

    # ------------------------------------------------------------------
    # Diplomacy

    def _on_player_sighted(self, event: GameEvent) -> None:
        assert isinstance(event, PlayerSighted)
        observer = self.game.players.get(event.observer_id)
        sighted = self.game.players.get(event.sighted_id)
        if observer is None or sighted is None or not observer.meet(sighted):
            return

        self._publish(PlayersMet(player_id=observer.id, other_id=sighted.id))
        if self._ui is None:
            return
        if observer.is_human:
            self._ui.show_greeting(sighted, observer)
        if sighted.is_human:
            self._ui.show_greeting(observer, sighted)

    def _publish(self, event: GameEvent) -> None:
        self.bus.publish(event)


__all__ = [
    "INSUFFICIENT_ENERGY_NOTICE",
    "ActionOutcome",
    "EngineInvariantError",
    "TurnController",
]
