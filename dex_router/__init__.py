"""Exact-arithmetic routing for constant-product DEX pairs."""

from dex_router.amm import Pair, PairSnapshot, parse_pair_snapshot
from dex_router.config import RouterConfig
from dex_router.errors import (
    DexRouterError,
    InsufficientReserves,
    InvalidArgument,
    InvalidRoute,
    TokenMismatch,
)
from dex_router.math import ExactFraction, Rounding
from dex_router.models import TokenAmount, TokenRef, TokensPair, TokenType
from dex_router.routing import EmptyRoute, ExistingRoute, Route, RouteFinder, TradeType
from dex_router.swap import AmountInput, compute_swap_route, quote_counter_amount

__version__ = "0.1.0"
__all__ = [
    "AmountInput",
    "DexRouterError",
    "EmptyRoute",
    "ExactFraction",
    "ExistingRoute",
    "InsufficientReserves",
    "InvalidArgument",
    "InvalidRoute",
    "Pair",
    "PairSnapshot",
    "Route",
    "RouteFinder",
    "RouterConfig",
    "Rounding",
    "TokenAmount",
    "TokenMismatch",
    "TokenRef",
    "TokenType",
    "TokensPair",
    "TradeType",
    "__version__",
    "compute_swap_route",
    "parse_pair_snapshot",
    "quote_counter_amount",
]
