"""Swap quoting for a two-slot swap form.

The form holds a token for each slot (tokenA sold, tokenB bought) and one
typed amount. These helpers turn that state into a routing result and the
amount to show in the other slot. They return None while the form is
incomplete so callers can tell "not ready" apart from "no route".
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from dex_router.amm.pair import Pair
from dex_router.constants import COUNTER_AMOUNT_DISPLAY_DECIMALS
from dex_router.math.fraction import Rounding
from dex_router.models.amount import TokenAmount
from dex_router.models.pair_types import TokensPair, TokenType, mirror_token_type
from dex_router.models.token import TokenRef
from dex_router.routing.finder import RouteFinder
from dex_router.routing.types import ExistingRoute, SwapRouteResult


@dataclass(frozen=True)
class AmountInput:
    """An amount typed into one slot, in atomic units."""

    side: TokenType
    wei: int


@dataclass(frozen=True)
class CounterQuote:
    """Computed amount for the slot the user did not type into."""

    side: TokenType
    amount: TokenAmount
    # Rounded string suitable for writing back into the input field
    display: str


def compute_swap_route(
    tokens: TokensPair[TokenRef | None],
    pairs: Sequence[Pair] | None,
    amount: AmountInput | None,
    finder: RouteFinder | None = None,
) -> SwapRouteResult | None:
    """Route the form's current state.

    Args:
        tokens: Selected tokens; token_a is sold, token_b is bought
        pairs: Pair snapshot, or None while it is still loading
        amount: Typed amount and the slot it belongs to
        finder: RouteFinder to use (default configuration if omitted)

    Returns:
        None if tokens, pairs or amount are missing; otherwise the routing
        result for the exact amount on the typed side
    """
    input_token, output_token = tokens.token_a, tokens.token_b
    if pairs is None or input_token is None or output_token is None or amount is None:
        return None

    exact_token = input_token if amount.side == TokenType.TOKEN_A else output_token
    exact_amount = TokenAmount.from_wei(exact_token, amount.wei)

    finder = finder if finder is not None else RouteFinder()
    return finder.from_best_rate(
        pairs=pairs,
        input_token=input_token,
        output_token=output_token,
        amount=exact_amount,
    )


def quote_counter_amount(
    tokens: TokensPair[TokenRef | None],
    pairs: Sequence[Pair] | None,
    amount: AmountInput | None,
    finder: RouteFinder | None = None,
    display_decimals: int = COUNTER_AMOUNT_DISPLAY_DECIMALS,
) -> CounterQuote | None:
    """Compute the amount for the slot opposite to the typed one.

    Returns:
        CounterQuote for the mirrored slot, or None when the form is
        incomplete, the typed amount is not positive, or no route exists
    """
    if amount is None or amount.wei <= 0:
        return None

    result = compute_swap_route(tokens, pairs, amount, finder)
    if not isinstance(result, ExistingRoute):
        return None

    counter = result.counter_amount
    return CounterQuote(
        side=mirror_token_type(amount.side),
        amount=counter,
        display=counter.to_fixed(display_decimals, Rounding.HALF_UP),
    )


__all__ = [
    "AmountInput",
    "CounterQuote",
    "compute_swap_route",
    "quote_counter_amount",
]
