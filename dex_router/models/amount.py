"""Token amounts in atomic units.

A TokenAmount pairs an integer amount of the smallest token unit ("wei")
with the token it belongs to. Human-readable values are derived through the
token's decimal scale using ExactFraction, never floats.
"""

from __future__ import annotations

from dataclasses import dataclass

from dex_router.errors import InvalidArgument, TokenMismatch
from dex_router.math.fraction import ExactFraction, Rounding, to_fraction
from dex_router.models.token import TokenRef


@dataclass(frozen=True)
class TokenAmount:
    """Non-negative atomic amount of a specific token."""

    token: TokenRef
    raw: int

    def __post_init__(self) -> None:
        if isinstance(self.raw, bool) or not isinstance(self.raw, int):
            raise InvalidArgument(
                f"Atomic amount must be an integer, got {type(self.raw).__name__}"
            )
        if self.raw < 0:
            raise InvalidArgument(f"Token amount cannot be negative: {self.raw}")

    @classmethod
    def from_wei(cls, token: TokenRef, raw: int | str) -> TokenAmount:
        """Construct from atomic units (int or integer string)."""
        if isinstance(raw, str):
            try:
                raw = int(raw.strip())
            except ValueError as err:
                raise InvalidArgument(f"Atomic amount must be an integer string: '{raw}'") from err
        return cls(token=token, raw=raw)

    @classmethod
    def from_token(
        cls,
        token: TokenRef,
        value: str,
        rounding: Rounding = Rounding.DOWN,
    ) -> TokenAmount:
        """Construct from a human decimal string such as "1.5".

        Digits beyond the token's decimal scale are rounded with the given
        mode (truncated by default).
        """
        scaled = to_fraction(value).multiply(10**token.decimals)
        return cls(token=token, raw=scaled.to_integer(rounding))

    @classmethod
    def zero(cls, token: TokenRef) -> TokenAmount:
        return cls(token=token, raw=0)

    @property
    def as_fraction(self) -> ExactFraction:
        """Amount in whole tokens: raw / 10**decimals."""
        return ExactFraction(self.raw, 10**self.token.decimals)

    @property
    def is_zero(self) -> bool:
        return self.raw == 0

    def to_token(self) -> str:
        """Exact human-readable value with trailing zeros trimmed."""
        text = self.as_fraction.to_fixed(self.token.decimals, Rounding.DOWN)
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    def to_fixed(
        self,
        decimals: int,
        rounding: Rounding = Rounding.HALF_UP,
        group_separator: str = "",
    ) -> str:
        """Human-readable value with a fixed number of decimals (for display)."""
        return self.as_fraction.to_fixed(decimals, rounding, group_separator)

    def _check_token(self, other: TokenAmount) -> None:
        if not self.token.same_as(other.token):
            raise TokenMismatch(
                f"Cannot combine amounts of {self.token.label} and {other.token.label}"
            )

    def add(self, other: TokenAmount) -> TokenAmount:
        self._check_token(other)
        return TokenAmount(token=self.token, raw=self.raw + other.raw)

    def subtract(self, other: TokenAmount) -> TokenAmount:
        """Subtract an amount of the same token.

        Raises:
            TokenMismatch: If the tokens differ
            InvalidArgument: If the result would be negative
        """
        self._check_token(other)
        return TokenAmount(token=self.token, raw=self.raw - other.raw)

    def __add__(self, other: TokenAmount) -> TokenAmount:
        return self.add(other)

    def __sub__(self, other: TokenAmount) -> TokenAmount:
        return self.subtract(other)

    def __lt__(self, other: TokenAmount) -> bool:
        self._check_token(other)
        return self.raw < other.raw

    def __le__(self, other: TokenAmount) -> bool:
        self._check_token(other)
        return self.raw <= other.raw

    def __gt__(self, other: TokenAmount) -> bool:
        self._check_token(other)
        return self.raw > other.raw

    def __ge__(self, other: TokenAmount) -> bool:
        self._check_token(other)
        return self.raw >= other.raw

    def __str__(self) -> str:
        return f"{self.to_token()} {self.token.label}"


__all__ = ["TokenAmount"]
