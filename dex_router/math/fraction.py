"""Exact rational numbers for token amounts and prices.

ExactFraction holds an arbitrary-precision numerator/denominator pair and is
the only numeric type used for price math in this package:
- Results are never auto-reduced (no gcd on every operation)
- Equality and ordering use cross-multiplication, so unreduced fractions
  representing the same value compare equal
- Floats are rejected at every entry point

Usage pattern:
    from dex_router.math import ExactFraction, Rounding

    price = ExactFraction(997, 1000) * reserve_out / reserve_in
    price.to_fixed(6)                      # "1.234568"
    price.to_fixed(0, Rounding.DOWN)       # "1"
"""

from __future__ import annotations

import re
from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
)
from enum import Enum
from fractions import Fraction as _HashFraction
from math import gcd
from typing import Union

from dex_router.errors import InvalidArgument

# Plain decimal literal: optional sign, digits, optional fractional part
_DECIMAL_LITERAL = re.compile(r"^[+-]?\d+(\.\d+)?$")


class Rounding(str, Enum):
    """Rounding modes for converting a fraction to a fixed number of digits.

    Values are the matching `decimal` module constants so a mode can be
    handed to `Decimal.quantize` unchanged.
    """

    DOWN = ROUND_DOWN  # toward zero
    UP = ROUND_UP  # away from zero
    CEILING = ROUND_CEILING  # toward +infinity
    FLOOR = ROUND_FLOOR  # toward -infinity
    HALF_UP = ROUND_HALF_UP  # nearest, ties away from zero
    HALF_DOWN = ROUND_HALF_DOWN  # nearest, ties toward zero
    HALF_EVEN = ROUND_HALF_EVEN  # nearest, ties to even


def round_div(numerator: int, denominator: int, rounding: Rounding = Rounding.DOWN) -> int:
    """Divide two integers and round the result with the given mode.

    Args:
        numerator: Dividend
        denominator: Divisor (may be negative)
        rounding: Rounding mode applied to the exact quotient

    Returns:
        The rounded integer quotient

    Raises:
        InvalidArgument: If denominator is zero
    """
    if denominator == 0:
        raise InvalidArgument(f"Division by zero: {numerator} / 0")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    sign = -1 if numerator < 0 else 1
    quotient, remainder = divmod(abs(numerator), denominator)
    if remainder == 0:
        return sign * quotient

    twice = 2 * remainder
    if rounding is Rounding.DOWN:
        bump = False
    elif rounding is Rounding.UP:
        bump = True
    elif rounding is Rounding.CEILING:
        bump = sign > 0
    elif rounding is Rounding.FLOOR:
        bump = sign < 0
    elif rounding is Rounding.HALF_UP:
        bump = twice >= denominator
    elif rounding is Rounding.HALF_DOWN:
        bump = twice > denominator
    elif rounding is Rounding.HALF_EVEN:
        bump = twice > denominator or (twice == denominator and quotient % 2 == 1)
    else:
        raise InvalidArgument(f"Unsupported rounding mode: {rounding!r}")

    return sign * (quotient + 1 if bump else quotient)


def _parse_raw(value: object) -> tuple[int, int]:
    """Parse an integer-like or decimal-like raw value into (numerator, denominator).

    Decimal inputs keep their written scale: "1.50" becomes 150/100. A fraction
    contributes its own numerator and denominator.
    """
    if isinstance(value, ExactFraction):
        return value.numerator, value.denominator
    # bool is an int subclass; True/False are never amounts
    if isinstance(value, bool):
        raise InvalidArgument(f"Boolean is not a numeric value: {value!r}")
    if isinstance(value, int):
        return value, 1
    if isinstance(value, float):
        raise InvalidArgument(
            f"Floating point values are not accepted for exact arithmetic: {value!r}"
        )
    if isinstance(value, Decimal):
        sign, digits, exponent = value.as_tuple()
        # Non-finite decimals carry a letter code instead of an exponent
        if not isinstance(exponent, int):
            raise InvalidArgument(f"Non-finite decimal: {value}")
        magnitude = int("".join(str(d) for d in digits) or "0")
        signed = -magnitude if sign else magnitude
        if exponent >= 0:
            return signed * 10**exponent, 1
        return signed, 10**-exponent
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_LITERAL.match(text):
            raise InvalidArgument(f"Not a decimal number: '{value}'")
        if "." not in text:
            return int(text), 1
        whole, frac = text.split(".")
        return int(whole + frac), 10 ** len(frac)
    raise InvalidArgument(f"Cannot convert {type(value).__name__} to a fraction")


class ExactFraction:
    """Immutable arbitrary-precision rational number.

    Attributes:
        numerator: Integer numerator (read-only)
        denominator: Integer denominator, never zero (read-only)
    """

    __slots__ = ("_numerator", "_denominator")
    _numerator: int
    _denominator: int

    def __init__(self, numerator: RawValue, denominator: RawValue = 1) -> None:
        """Create a fraction from integer-like or decimal-like values.

        Args:
            numerator: int, integer/decimal string, Decimal, or ExactFraction
            denominator: int, integer/decimal string, Decimal, or ExactFraction
                (default 1)

        Raises:
            InvalidArgument: If the denominator is zero or an input is a float
                or otherwise not a number
        """
        num_n, num_d = _parse_raw(numerator)
        den_n, den_d = _parse_raw(denominator)
        if den_n == 0:
            raise InvalidArgument(f"Zero denominator: {numerator}/{denominator}")
        self._numerator = num_n * den_d
        self._denominator = num_d * den_n

    @classmethod
    def _raw(cls, numerator: int, denominator: int) -> ExactFraction:
        """Build from already-validated integers, skipping parsing."""
        if denominator == 0:
            raise InvalidArgument(f"Zero denominator: {numerator}/0")
        fraction = cls.__new__(cls)
        fraction._numerator = numerator
        fraction._denominator = denominator
        return fraction

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def quotient(self) -> int:
        """Integer part of numerator/denominator, truncated toward zero."""
        return round_div(self._numerator, self._denominator, Rounding.DOWN)

    @property
    def remainder(self) -> ExactFraction:
        """What is left after taking the quotient, over the same denominator."""
        return ExactFraction._raw(
            self._numerator - self.quotient * self._denominator, self._denominator
        )

    def to_integer(self, rounding: Rounding = Rounding.DOWN) -> int:
        """Round to an integer with an explicit rounding mode."""
        return round_div(self._numerator, self._denominator, rounding)

    def reduced(self) -> ExactFraction:
        """Return the normalized form (lowest terms, positive denominator)."""
        divisor = gcd(self._numerator, self._denominator)
        if self._denominator < 0:
            divisor = -divisor
        return ExactFraction._raw(self._numerator // divisor, self._denominator // divisor)

    # --- Arithmetic operations ---

    def invert(self) -> ExactFraction:
        """Swap numerator and denominator.

        Raises:
            InvalidArgument: If the fraction is zero
        """
        if self._numerator == 0:
            raise InvalidArgument("Cannot invert a zero fraction")
        return ExactFraction._raw(self._denominator, self._numerator)

    def add(self, other: FractionLike) -> ExactFraction:
        o = to_fraction(other)
        if self._denominator == o._denominator:
            return ExactFraction._raw(self._numerator + o._numerator, self._denominator)
        return ExactFraction._raw(
            self._numerator * o._denominator + o._numerator * self._denominator,
            self._denominator * o._denominator,
        )

    def subtract(self, other: FractionLike) -> ExactFraction:
        o = to_fraction(other)
        if self._denominator == o._denominator:
            return ExactFraction._raw(self._numerator - o._numerator, self._denominator)
        return ExactFraction._raw(
            self._numerator * o._denominator - o._numerator * self._denominator,
            self._denominator * o._denominator,
        )

    def multiply(self, other: FractionLike) -> ExactFraction:
        o = to_fraction(other)
        return ExactFraction._raw(
            self._numerator * o._numerator, self._denominator * o._denominator
        )

    def divide(self, other: FractionLike) -> ExactFraction:
        """Divide by another value.

        Raises:
            InvalidArgument: If other is zero
        """
        o = to_fraction(other)
        if o._numerator == 0:
            raise InvalidArgument(f"Division by zero: {self} / {o}")
        return ExactFraction._raw(
            self._numerator * o._denominator, self._denominator * o._numerator
        )

    # --- Comparison operations ---

    def _compare(self, other: FractionLike) -> int:
        """Sign of (self - other) by cross-multiplication."""
        o = to_fraction(other)
        diff = self._numerator * o._denominator - o._numerator * self._denominator
        # Cross-multiplying by a negative denominator flips the inequality
        if (self._denominator < 0) != (o._denominator < 0):
            diff = -diff
        return (diff > 0) - (diff < 0)

    def less_than(self, other: FractionLike) -> bool:
        return self._compare(other) < 0

    def equals(self, other: FractionLike) -> bool:
        return self._compare(other) == 0

    def greater_than(self, other: FractionLike) -> bool:
        return self._compare(other) > 0

    # --- Formatting ---

    def to_fixed(
        self,
        decimals: int,
        rounding: Rounding = Rounding.HALF_UP,
        group_separator: str = "",
    ) -> str:
        """Format as a decimal string with exactly `decimals` fractional digits.

        Args:
            decimals: Number of digits after the decimal point
            rounding: Rounding mode for the last digit (default HALF_UP)
            group_separator: Thousands separator for the integer part.
                Empty by default so the output can be parsed back.

        Returns:
            Decimal string, e.g. "0.3333" for 1/3 with 4 decimals

        Raises:
            InvalidArgument: If decimals is negative
        """
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise InvalidArgument(f"Decimals must be an integer, got {decimals!r}")
        if decimals < 0:
            raise InvalidArgument(f"{decimals} is negative.")

        scaled = round_div(self._numerator * 10**decimals, self._denominator, rounding)
        digits = str(abs(scaled)).rjust(decimals + 1, "0")
        if decimals:
            integer_part, fractional_part = digits[:-decimals], digits[-decimals:]
        else:
            integer_part, fractional_part = digits, ""

        if group_separator:
            groups = []
            while len(integer_part) > 3:
                groups.insert(0, integer_part[-3:])
                integer_part = integer_part[:-3]
            groups.insert(0, integer_part)
            integer_part = group_separator.join(groups)

        sign = "-" if scaled < 0 else ""
        if fractional_part:
            return f"{sign}{integer_part}.{fractional_part}"
        return f"{sign}{integer_part}"

    # --- Python operators ---

    def __add__(self, other: FractionLike) -> ExactFraction:
        return self.add(other)

    def __radd__(self, other: RawValue) -> ExactFraction:
        return to_fraction(other).add(self)

    def __sub__(self, other: FractionLike) -> ExactFraction:
        return self.subtract(other)

    def __rsub__(self, other: RawValue) -> ExactFraction:
        return to_fraction(other).subtract(self)

    def __mul__(self, other: FractionLike) -> ExactFraction:
        return self.multiply(other)

    def __rmul__(self, other: RawValue) -> ExactFraction:
        return to_fraction(other).multiply(self)

    def __truediv__(self, other: FractionLike) -> ExactFraction:
        return self.divide(other)

    def __rtruediv__(self, other: RawValue) -> ExactFraction:
        return to_fraction(other).divide(self)

    def __neg__(self) -> ExactFraction:
        return ExactFraction._raw(-self._numerator, self._denominator)

    def __eq__(self, other: object) -> bool:
        try:
            return self._compare(other) == 0  # type: ignore[arg-type]
        except InvalidArgument:
            return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: FractionLike) -> bool:
        return self._compare(other) < 0

    def __le__(self, other: FractionLike) -> bool:
        return self._compare(other) <= 0

    def __gt__(self, other: FractionLike) -> bool:
        return self._compare(other) > 0

    def __ge__(self, other: FractionLike) -> bool:
        return self._compare(other) >= 0

    def __hash__(self) -> int:
        # Equal values must hash equally regardless of reduction
        return hash(_HashFraction(self._numerator, self._denominator))

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __repr__(self) -> str:
        return f"ExactFraction({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        return f"{self._numerator}/{self._denominator}"


RawValue = Union[int, str, Decimal, ExactFraction]
FractionLike = Union[ExactFraction, int, str, Decimal]


def to_fraction(value: FractionLike) -> ExactFraction:
    """Coerce a fraction or raw numeric value into an ExactFraction.

    This is the single conversion step every binary operation runs before
    combining operands. Raw values get denominator 1 (decimal strings keep
    their written scale).

    Raises:
        InvalidArgument: If value is a float or not numeric
    """
    if isinstance(value, ExactFraction):
        return value
    numerator, denominator = _parse_raw(value)
    return ExactFraction._raw(numerator, denominator)


ZERO = ExactFraction(0)
ONE = ExactFraction(1)


__all__ = [
    "ExactFraction",
    "FractionLike",
    "ONE",
    "RawValue",
    "Rounding",
    "ZERO",
    "round_div",
    "to_fraction",
]
