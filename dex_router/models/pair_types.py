"""Two-slot containers for the legs of a trade.

A swap form has two slots, "tokenA" (what the user gives) and "tokenB"
(what the user gets). TokensPair keeps values for both slots side by side
so callers never index into a two-element list.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class TokenType(str, Enum):
    """Which slot of the swap form a value belongs to."""

    TOKEN_A = "tokenA"
    TOKEN_B = "tokenB"


def mirror_token_type(token_type: TokenType) -> TokenType:
    """Return the opposite slot."""
    return TokenType.TOKEN_B if token_type == TokenType.TOKEN_A else TokenType.TOKEN_A


@dataclass(frozen=True)
class TokensPair(Generic[T]):
    """Values for both slots of a trade."""

    token_a: T
    token_b: T

    @classmethod
    def build(cls, fn: Callable[[TokenType], T]) -> TokensPair[T]:
        """Build a pair by evaluating fn for each slot."""
        return cls(token_a=fn(TokenType.TOKEN_A), token_b=fn(TokenType.TOKEN_B))

    def __getitem__(self, token_type: TokenType) -> T:
        if token_type == TokenType.TOKEN_A:
            return self.token_a
        return self.token_b

    def map(self, fn: Callable[[T], U]) -> TokensPair[U]:
        return TokensPair(token_a=fn(self.token_a), token_b=fn(self.token_b))


__all__ = ["TokenType", "TokensPair", "mirror_token_type"]
