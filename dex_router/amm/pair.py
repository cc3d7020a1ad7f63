"""Constant-product liquidity pair.

A pair holds reserves of two tokens and prices swaps with x * y = k,
charging a fee on the input amount:

    amount_out = reserve_out * in_after_fee / (reserve_in + in_after_fee)
    in_after_fee = amount_in * (1 - fee)

All math runs on ExactFraction and integers; results are rounded to atomic
units explicitly (down for outputs, up for required inputs).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import structlog
from pydantic import BaseModel, Field

from dex_router.constants import BPS_DENOMINATOR, DEFAULT_FEE_BPS
from dex_router.errors import InsufficientReserves, InvalidArgument
from dex_router.math.fraction import ONE, ZERO, ExactFraction, Rounding, to_fraction
from dex_router.models.amount import TokenAmount
from dex_router.models.token import TokenRef
from dex_router.models.types import Address, Uint256, normalize_address

logger = structlog.get_logger()


def fee_from_bps(fee_bps: int) -> ExactFraction:
    """Express a fee in basis points as an exact fraction (30 -> 30/10000)."""
    return ExactFraction(fee_bps, BPS_DENOMINATOR)


DEFAULT_FEE = fee_from_bps(DEFAULT_FEE_BPS)


@dataclass(frozen=True)
class Pair:
    """A constant-product pool snapshot.

    Reserves are a point-in-time snapshot: a Pair never changes after
    construction and can be shared read-only by every candidate route.
    """

    reserve_a: TokenAmount
    reserve_b: TokenAmount
    # Swap fee charged on input, as an exact fraction (3/1000 = 0.3%)
    fee: ExactFraction = field(default=DEFAULT_FEE)
    address: str | None = None

    def __post_init__(self) -> None:
        if self.reserve_a.token.same_as(self.reserve_b.token):
            raise InvalidArgument(f"Pair tokens must differ: {self.reserve_a.token.address}")
        if not isinstance(self.fee, ExactFraction):
            raise InvalidArgument(f"Pair fee must be an ExactFraction, got {self.fee!r}")
        if self.fee < ZERO or self.fee >= ONE:
            raise InvalidArgument(f"Pair fee must be in [0, 1), got {self.fee}")
        if self.address is not None:
            object.__setattr__(self, "address", normalize_address(self.address))

    @classmethod
    def from_reserves(
        cls,
        token_a: TokenRef,
        token_b: TokenRef,
        reserve_a: int,
        reserve_b: int,
        fee: ExactFraction = DEFAULT_FEE,
        address: str | None = None,
    ) -> Pair:
        """Build a pair from raw atomic reserves."""
        return cls(
            reserve_a=TokenAmount(token=token_a, raw=reserve_a),
            reserve_b=TokenAmount(token=token_b, raw=reserve_b),
            fee=fee,
            address=address,
        )

    def with_fee_bps(self, fee_bps: int) -> Pair:
        """Copy of this pair charging `fee_bps` basis points."""
        return replace(self, fee=fee_from_bps(fee_bps))

    @property
    def token_a(self) -> TokenRef:
        return self.reserve_a.token

    @property
    def token_b(self) -> TokenRef:
        return self.reserve_b.token

    @property
    def tokens(self) -> tuple[TokenRef, TokenRef]:
        return self.token_a, self.token_b

    @property
    def key(self) -> frozenset[str]:
        """Identity of the pair: its unordered token addresses."""
        return frozenset((self.token_a.address, self.token_b.address))

    @property
    def fee_multiplier(self) -> ExactFraction:
        """Share of the input that reaches the pool (1 - fee)."""
        return ONE - self.fee

    @property
    def is_tradeable(self) -> bool:
        """A pair with an empty reserve cannot price or fill any trade."""
        return self.reserve_a.raw > 0 and self.reserve_b.raw > 0

    def involves_token(self, token: TokenRef) -> bool:
        return self.token_a.same_as(token) or self.token_b.same_as(token)

    def other_token(self, token: TokenRef) -> TokenRef:
        """Get the token on the other side of the pair."""
        if self.token_a.same_as(token):
            return self.token_b
        if self.token_b.same_as(token):
            return self.token_a
        raise InvalidArgument(f"Token {token.address} not in pair")

    def reserve_of(self, token: TokenRef) -> TokenAmount:
        if self.token_a.same_as(token):
            return self.reserve_a
        if self.token_b.same_as(token):
            return self.reserve_b
        raise InvalidArgument(f"Token {token.address} not in pair")

    def get_reserves(self, token_in: TokenRef) -> tuple[TokenAmount, TokenAmount]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if self.token_a.same_as(token_in):
            return self.reserve_a, self.reserve_b
        if self.token_b.same_as(token_in):
            return self.reserve_b, self.reserve_a
        raise InvalidArgument(f"Token {token_in.address} not in pair")

    def _require_tradeable(self) -> None:
        if not self.is_tradeable:
            raise InsufficientReserves(
                f"Pair {self.token_a.label}/{self.token_b.label} has an empty reserve"
            )

    def price_of(self, token: TokenRef) -> ExactFraction:
        """Mid price of `token` in units of the other token (other / this reserve).

        Raises:
            InvalidArgument: If token is not in the pair
            InsufficientReserves: If either reserve is empty
        """
        reserve_this, reserve_other = self.get_reserves(token)
        self._require_tradeable()
        return ExactFraction(reserve_other.raw, reserve_this.raw)

    def get_output_amount(self, amount_in: TokenAmount) -> TokenAmount:
        """Calculate the output of an exact-input swap, rounded down.

        Args:
            amount_in: Amount of one of the pair's tokens to sell

        Returns:
            Amount of the other token received

        Raises:
            InvalidArgument: If the input token is not in the pair
            InsufficientReserves: If a reserve is empty or the output would
                drain the output reserve
        """
        reserve_in, reserve_out = self.get_reserves(amount_in.token)
        self._require_tradeable()
        if amount_in.is_zero:
            return TokenAmount.zero(reserve_out.token)

        in_after_fee = self.fee_multiplier * amount_in.raw
        exact_out = in_after_fee * reserve_out.raw / (in_after_fee + reserve_in.raw)
        amount_out = exact_out.to_integer(Rounding.DOWN)

        if amount_out >= reserve_out.raw:
            raise InsufficientReserves(
                f"Output {amount_out} would drain reserve {reserve_out.raw} "
                f"of {reserve_out.token.label}"
            )
        return TokenAmount(token=reserve_out.token, raw=amount_out)

    def get_input_amount(self, amount_out: TokenAmount) -> TokenAmount:
        """Calculate the input required for an exact-output swap, rounded up.

        Rounding up guarantees get_output_amount(result) >= amount_out.

        Args:
            amount_out: Desired amount of one of the pair's tokens

        Returns:
            Amount of the other token that must be sold

        Raises:
            InvalidArgument: If the output token is not in the pair
            InsufficientReserves: If a reserve is empty or amount_out is not
                strictly below the output reserve
        """
        reserve_out, reserve_in = self.get_reserves(amount_out.token)
        self._require_tradeable()
        if amount_out.raw >= reserve_out.raw:
            raise InsufficientReserves(
                f"Requested {amount_out.raw} of {reserve_out.token.label} "
                f"but reserve is {reserve_out.raw}"
            )
        if amount_out.is_zero:
            return TokenAmount.zero(reserve_in.token)

        exact_in = ExactFraction(reserve_in.raw * amount_out.raw) / (
            self.fee_multiplier * (reserve_out.raw - amount_out.raw)
        )
        return TokenAmount(token=reserve_in.token, raw=exact_in.to_integer(Rounding.CEILING))


class PairSnapshot(BaseModel):
    """Reserve snapshot of a pair as delivered by the chain-data layer."""

    address: Address | None = None
    token_a: TokenRef = Field(alias="tokenA")
    token_b: TokenRef = Field(alias="tokenB")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")
    # Decimal string ("0.003"); numbers are rejected to keep floats out
    fee: str | None = None

    model_config = {"populate_by_name": True}


def parse_pair_snapshot(snapshot: PairSnapshot, default_fee: ExactFraction = DEFAULT_FEE) -> Pair:
    """Convert a reserve snapshot into a Pair.

    Args:
        snapshot: Validated snapshot from the input provider
        default_fee: Fee to use when the snapshot has none or it is unusable

    Returns:
        Pair holding the snapshot's reserves
    """
    fee = default_fee
    if snapshot.fee:
        try:
            parsed = to_fraction(snapshot.fee)
        except InvalidArgument:
            parsed = None
        if parsed is not None and ZERO <= parsed < ONE:
            fee = parsed
        else:
            logger.warning(
                "fee_parse_failed",
                pair=snapshot.address,
                raw_fee=snapshot.fee,
                using_default=default_fee.to_fixed(4),
            )

    return Pair.from_reserves(
        token_a=snapshot.token_a,
        token_b=snapshot.token_b,
        reserve_a=snapshot.reserve_a,
        reserve_b=snapshot.reserve_b,
        fee=fee,
        address=snapshot.address,
    )


__all__ = [
    "DEFAULT_FEE",
    "Pair",
    "PairSnapshot",
    "fee_from_bps",
    "parse_pair_snapshot",
]
