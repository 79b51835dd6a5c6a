"""Enumerations used across the Hex Wizards domain."""

from __future__ import annotations

from enum import StrEnum


class InteractionMode(StrEnum):
    """What a click on a hex asks the active piece to do."""

    MOVE = "move"
    PLACE = "place"


class ControllerKind(StrEnum):
    """Who decides a player's actions."""

    HUMAN = "human"
    AI = "ai"


class PieceKind(StrEnum):
    """Token variants the piece factory knows how to build."""

    UNIT = "unit"
    STRUCTURE = "structure"


class TurnPhase(StrEnum):
    """States of the turn controller."""

    NOT_STARTED = "not_started"
    TURN_START = "turn_start"
    COMPUTE_VISIBILITY = "compute_visibility"
    COMPUTE_REACHABLE_MOVES = "compute_reachable_moves"
    AWAIT_INPUT = "await_input"
    AI_ACTS = "ai_acts"
    APPLY_ACTION = "apply_action"
    TURN_END = "turn_end"


class RejectionReason(StrEnum):
    """Why an action was declined."""

    OUT_OF_BOUNDS = "out_of_bounds"
    NOT_REACHABLE = "not_reachable"
    INSUFFICIENT_ENERGY = "insufficient_energy"
    NOT_AWAITING_INPUT = "not_awaiting_input"
