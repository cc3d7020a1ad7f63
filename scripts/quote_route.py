#!/usr/bin/env python3
"""Quote the best route for a swap from a JSON pair snapshot.

The snapshot file looks like:

    {
      "pairs": [
        {"tokenA": {...}, "tokenB": {...}, "reserveA": "1000", "reserveB": "2000", "fee": "0.003"}
      ],
      "tokens": {"WETH": {"address": "0x...", "decimals": 18, "symbol": "WETH"}, ...}
    }

Usage:
    python -m scripts.quote_route snapshot.json --sell WETH --buy DAI --amount 1.5
    python -m scripts.quote_route snapshot.json --sell WETH --buy DAI --amount 100 --exact-output
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog
from pydantic import BaseModel

from dex_router.amm.pair import PairSnapshot, parse_pair_snapshot
from dex_router.config import RouterConfig
from dex_router.errors import DexRouterError
from dex_router.models.amount import TokenAmount
from dex_router.models.token import TokenRef
from dex_router.routing.finder import RouteFinder
from dex_router.routing.types import ExistingRoute, SwapRouteResult

logger = structlog.get_logger()


class SnapshotFile(BaseModel):
    """Pair snapshot plus a symbol -> token lookup."""

    pairs: list[PairSnapshot]
    tokens: dict[str, TokenRef]


def load_snapshot(path: Path) -> SnapshotFile:
    with open(path) as f:
        data = json.load(f)
    return SnapshotFile.model_validate(data)


def run_quote(
    snapshot: SnapshotFile,
    sell: str,
    buy: str,
    amount: str,
    exact_output: bool = False,
    config: RouterConfig | None = None,
) -> SwapRouteResult:
    """Route `amount` (a human decimal string) between two symbols in the snapshot."""
    config = config if config is not None else RouterConfig.from_env()
    try:
        input_token = snapshot.tokens[sell]
        output_token = snapshot.tokens[buy]
    except KeyError as e:
        raise DexRouterError(f"Unknown token symbol: {e.args[0]}") from e

    pairs = [parse_pair_snapshot(p, default_fee=config.default_fee) for p in snapshot.pairs]
    exact_token = output_token if exact_output else input_token
    exact_amount = TokenAmount.from_token(exact_token, amount)

    return RouteFinder(config).from_best_rate(pairs, input_token, output_token, exact_amount)


def format_result(result: SwapRouteResult) -> str:
    if not isinstance(result, ExistingRoute):
        return "No route: insufficient liquidity"
    lines = [
        f"Route: {' -> '.join(token.label for token in result.route.tokens)}",
        f"Hops:  {result.route.hop_count}",
    ]
    for amount in result.amounts:
        lines.append(f"  {amount.to_fixed(6)} {amount.token.label}")
    lines.append(f"Mid price: {result.route.mid_price_in_tokens.to_fixed(6)}")
    return "\n".join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(description="Quote the best swap route from a pair snapshot")
    parser.add_argument("snapshot", type=Path, help="Path to the JSON pair snapshot")
    parser.add_argument("--sell", required=True, help="Symbol of the token to sell")
    parser.add_argument("--buy", required=True, help="Symbol of the token to buy")
    parser.add_argument("--amount", required=True, help="Exact amount as a decimal string")
    parser.add_argument(
        "--exact-output",
        action="store_true",
        help="Treat --amount as the exact amount to buy",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    if not args.snapshot.exists():
        logger.error("snapshot_not_found", path=str(args.snapshot))
        return 1

    try:
        result = run_quote(
            load_snapshot(args.snapshot),
            sell=args.sell,
            buy=args.buy,
            amount=args.amount,
            exact_output=args.exact_output,
        )
    except DexRouterError as e:
        logger.error("quote_failed", error=str(e))
        return 1

    print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
