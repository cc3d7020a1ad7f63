"""Routes: connected chains of pairs from an input token to an output token."""

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce

from dex_router.amm.pair import Pair
from dex_router.errors import InvalidRoute, TokenMismatch
from dex_router.math.fraction import ONE, ExactFraction
from dex_router.models.amount import TokenAmount
from dex_router.models.token import TokenRef


class Route:
    """An ordered chain of pairs.

    Consecutive pairs share exactly one token and no token appears twice,
    so a route of n pairs visits n + 1 distinct tokens. The route holds
    references to the pairs it was built from; pairs are immutable.

    Attributes:
        pairs: Pairs in trade order
        input: Token sold on the first hop
        output: Token bought on the last hop
        tokens: Every token visited, input first
    """

    __slots__ = ("pairs", "input", "output", "tokens")

    pairs: tuple[Pair, ...]
    input: TokenRef
    output: TokenRef
    tokens: tuple[TokenRef, ...]

    def __init__(
        self,
        pairs: Sequence[Pair],
        input_token: TokenRef,
        output_token: TokenRef | None = None,
    ) -> None:
        """Validate and build a route.

        Args:
            pairs: Pairs in trade order
            input_token: Token entering the first pair
            output_token: Expected final token. If omitted, the route ends
                wherever the chain of pairs leads.

        Raises:
            InvalidRoute: If the path is empty, disconnected or cyclic, or
                does not end at output_token
        """
        if not pairs:
            raise InvalidRoute("Route must contain at least one pair")

        tokens = [input_token]
        seen = {input_token.address}
        current = input_token
        for i, pair in enumerate(pairs):
            if not pair.involves_token(current):
                raise InvalidRoute(
                    f"Pair {i} ({pair.token_a.label}/{pair.token_b.label}) "
                    f"does not contain {current.label}"
                )
            current = pair.other_token(current)
            if current.address in seen:
                raise InvalidRoute(f"Token {current.label} repeats at hop {i}")
            seen.add(current.address)
            tokens.append(current)

        if output_token is not None and not current.same_as(output_token):
            raise InvalidRoute(f"Route ends at {current.label}, expected {output_token.label}")

        self.pairs = tuple(pairs)
        self.input = input_token
        self.output = current
        self.tokens = tuple(tokens)

    @property
    def hop_count(self) -> int:
        return len(self.pairs)

    @property
    def path(self) -> list[str]:
        """Token addresses along the route, input first."""
        return [token.address for token in self.tokens]

    @property
    def is_multihop(self) -> bool:
        return len(self.pairs) > 1

    @property
    def mid_price(self) -> ExactFraction:
        """Marginal rate of output per input in atomic units, ignoring slippage.

        Product of each hop's price of its input token.
        """
        return reduce(
            lambda price, hop: price * hop[0].price_of(hop[1]),
            zip(self.pairs, self.tokens),
            ONE,
        )

    @property
    def mid_price_in_tokens(self) -> ExactFraction:
        """Mid price in whole tokens (adjusted for both decimal scales)."""
        return self.mid_price * ExactFraction(
            10**self.input.decimals, 10**self.output.decimals
        )

    def amounts_along(self, amount_in: TokenAmount) -> list[TokenAmount]:
        """Apply each hop's exact-input pricing in order.

        Args:
            amount_in: Amount of the route's input token

        Returns:
            [amount_in, hop 1 output, ..., final output]

        Raises:
            TokenMismatch: If amount_in is not of the input token
            InsufficientReserves: If any hop cannot fill its input
        """
        if not amount_in.token.same_as(self.input):
            raise TokenMismatch(
                f"Route input is {self.input.label}, got amount of {amount_in.token.label}"
            )
        amounts = [amount_in]
        for pair in self.pairs:
            amounts.append(pair.get_output_amount(amounts[-1]))
        return amounts

    def amounts_along_exact_output(self, amount_out: TokenAmount) -> list[TokenAmount]:
        """Work backwards from a desired output to the required input.

        Each hop rounds its required input up, so selling the returned
        first amount forward yields at least amount_out.

        Args:
            amount_out: Desired amount of the route's output token

        Returns:
            [required input, ..., amount_out], in trade order

        Raises:
            TokenMismatch: If amount_out is not of the output token
            InsufficientReserves: If any hop cannot provide its output
        """
        if not amount_out.token.same_as(self.output):
            raise TokenMismatch(
                f"Route output is {self.output.label}, got amount of {amount_out.token.label}"
            )
        amounts = [amount_out]
        for pair in reversed(self.pairs):
            amounts.append(pair.get_input_amount(amounts[-1]))
        amounts.reverse()
        return amounts

    def output_amount(self, amount_in: TokenAmount) -> TokenAmount:
        return self.amounts_along(amount_in)[-1]

    def input_amount(self, amount_out: TokenAmount) -> TokenAmount:
        return self.amounts_along_exact_output(amount_out)[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self.pairs == other.pairs and self.input.same_as(other.input)

    def __hash__(self) -> int:
        return hash((self.pairs, self.input.address))

    def __repr__(self) -> str:
        return f"Route({' -> '.join(token.label for token in self.tokens)})"


__all__ = ["Route"]
