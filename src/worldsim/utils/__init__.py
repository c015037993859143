"""Utility functions for the world simulation."""

from worldsim.utils.rng import (
    RandomSource,
    check_success,
    generate_seed,
    random_uniform,
    seeded_random,
)

__all__ = [
    "RandomSource",
    "check_success",
    "generate_seed",
    "random_uniform",
    "seeded_random",
]
