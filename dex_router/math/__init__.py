"""Exact arithmetic primitives."""

from dex_router.math.fraction import (
    ONE,
    ZERO,
    ExactFraction,
    FractionLike,
    Rounding,
    round_div,
    to_fraction,
)

__all__ = [
    "ExactFraction",
    "FractionLike",
    "ONE",
    "Rounding",
    "ZERO",
    "round_div",
    "to_fraction",
]
