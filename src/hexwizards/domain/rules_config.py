"""Declarative rule configuration for the game engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MovementRules:
    """Energy budget and action costs."""

    max_energy: int = 5
    placement_cost: int = 3


@dataclass(frozen=True, slots=True)
class VisibilityRules:
    """Sight radius shared by every token."""

    sight_radius: int = 2


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Hit points for freshly built units."""

    unit_hit_points: int = 10


@dataclass(frozen=True, slots=True)
class TurnRules:
    """Turn sequencing limits."""

    # consecutive AI turns / auto-passes before control returns to the caller
    max_automatic_turns: int = 64


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    movement: MovementRules = MovementRules()
    visibility: VisibilityRules = VisibilityRules()
    combat: CombatRules = CombatRules()
    turns: TurnRules = TurnRules()


DEFAULT_RULES = RulesConfig()
