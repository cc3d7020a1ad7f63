"""Constant-product AMM pairs."""

from dex_router.amm.pair import (
    DEFAULT_FEE,
    Pair,
    PairSnapshot,
    fee_from_bps,
    parse_pair_snapshot,
)

__all__ = [
    "DEFAULT_FEE",
    "Pair",
    "PairSnapshot",
    "fee_from_bps",
    "parse_pair_snapshot",
]
