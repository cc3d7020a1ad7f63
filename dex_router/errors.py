"""Error classes for exact-arithmetic routing.

"No route" is not an error: the finder returns an EmptyRoute result instead.
"""


class DexRouterError(Exception):
    """Base error for routing operations."""

    pass


class InvalidArgument(DexRouterError, ValueError):
    """Malformed construction input (zero denominator, negative decimals, floats)."""

    pass


class TokenMismatch(DexRouterError, ValueError):
    """Arithmetic attempted across amounts of different tokens."""

    pass


class InsufficientReserves(DexRouterError, ArithmeticError):
    """A pair cannot satisfy the requested trade size with its current reserves."""

    pass


class InvalidRoute(DexRouterError):
    """A path of pairs is empty, disconnected or cyclic."""

    pass


__all__ = [
    "DexRouterError",
    "InvalidArgument",
    "TokenMismatch",
    "InsufficientReserves",
    "InvalidRoute",
]
