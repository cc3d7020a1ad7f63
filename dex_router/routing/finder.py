"""Best-route search across a snapshot of pairs.

RouteFinder enumerates bounded-hop paths between two tokens, prices each
candidate at the caller's actual trade size, and keeps the best one:
- Exact input: strictly greatest output wins
- Exact output: strictly least required input wins
- Ties keep the route with fewer hops, then the earlier candidate

Mid price is never used for selection since it ignores slippage.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from dex_router.amm.pair import Pair
from dex_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from dex_router.errors import InsufficientReserves, InvalidArgument, TokenMismatch
from dex_router.models.amount import TokenAmount
from dex_router.models.token import TokenRef
from dex_router.routing.pathfinding import PathFinder
from dex_router.routing.route import Route
from dex_router.routing.types import EmptyRoute, ExistingRoute, SwapRouteResult, TradeType

logger = structlog.get_logger()


class RouteFinder:
    """Finds the best route for a trade through constant-product pairs.

    Stateless apart from its configuration; safe to share across threads.

    Args:
        config: Search bounds. Defaults to DEFAULT_ROUTER_CONFIG.
    """

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config if config is not None else DEFAULT_ROUTER_CONFIG

    def from_best_rate(
        self,
        pairs: Iterable[Pair],
        input_token: TokenRef,
        output_token: TokenRef,
        amount: TokenAmount,
    ) -> SwapRouteResult:
        """Find the best route from input_token to output_token.

        The token of `amount` selects the trade type: an amount of the input
        token is an exact-input trade, an amount of the output token is an
        exact-output trade.

        Args:
            pairs: Snapshot of available pairs (empty-reserve pairs are ignored)
            input_token: Token the user sells
            output_token: Token the user buys
            amount: Exact amount on one side of the trade

        Returns:
            ExistingRoute with the best route and its amounts, or EmptyRoute
            when no tradeable path can fill the trade

        Raises:
            InvalidArgument: If input and output tokens are the same, or two
                pairs share the same token pair
            TokenMismatch: If amount belongs to neither token
        """
        if input_token.same_as(output_token):
            raise InvalidArgument(f"Input and output token are both {input_token.label}")

        if amount.token.same_as(input_token):
            trade_type = TradeType.EXACT_INPUT
        elif amount.token.same_as(output_token):
            trade_type = TradeType.EXACT_OUTPUT
        else:
            raise TokenMismatch(
                f"Amount of {amount.token.label} matches neither "
                f"{input_token.label} nor {output_token.label}"
            )

        finder = PathFinder(pairs)
        paths = finder.find_all_paths(
            input_token.address,
            output_token.address,
            max_hops=self.config.max_hops,
            max_paths=self.config.max_paths,
        )

        best: ExistingRoute | None = None
        for path in paths:
            route = Route(finder.pairs_for_path(path), input_token, output_token)
            try:
                if trade_type is TradeType.EXACT_INPUT:
                    amounts = route.amounts_along(amount)
                else:
                    amounts = route.amounts_along_exact_output(amount)
            except InsufficientReserves as e:
                logger.debug(
                    "route_candidate_skipped",
                    path=[token.label for token in route.tokens],
                    reason=str(e),
                )
                continue

            candidate = ExistingRoute(route=route, trade_type=trade_type, amounts=tuple(amounts))
            if best is None or _is_better(candidate, best):
                best = candidate

        if best is None:
            logger.info(
                "no_route_found",
                input_token=input_token.label,
                output_token=output_token.label,
                candidates=len(paths),
            )
            return EmptyRoute()

        logger.debug(
            "best_route_selected",
            path=[token.label for token in best.route.tokens],
            hops=best.route.hop_count,
            amount_in=best.amount_in.raw,
            amount_out=best.amount_out.raw,
            candidates=len(paths),
        )
        return best


def _is_better(candidate: ExistingRoute, best: ExistingRoute) -> bool:
    """Strict improvement on the non-fixed side, else fewer hops on a tie."""
    if candidate.trade_type is TradeType.EXACT_INPUT:
        if candidate.amount_out.raw != best.amount_out.raw:
            return candidate.amount_out.raw > best.amount_out.raw
    elif candidate.amount_in.raw != best.amount_in.raw:
        return candidate.amount_in.raw < best.amount_in.raw
    return candidate.route.hop_count < best.route.hop_count


def from_best_rate(
    pairs: Iterable[Pair],
    input_token: TokenRef,
    output_token: TokenRef,
    amount: TokenAmount,
    config: RouterConfig | None = None,
) -> SwapRouteResult:
    """Find the best route with a one-off RouteFinder (see RouteFinder.from_best_rate)."""
    return RouteFinder(config).from_best_rate(pairs, input_token, output_token, amount)


__all__ = ["RouteFinder", "from_best_rate"]
