"""Utility functions for the Hex Wizards game system."""

from hexwizards.utils.rng import (
    create_rng,
    generate_seed,
    random_color,
    random_seed,
    seed_to_int,
)

__all__ = [
    "create_rng",
    "generate_seed",
    "random_color",
    "random_seed",
    "seed_to_int",
]
