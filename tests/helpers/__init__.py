"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token refs for mainnet-like and generic graph tokens
- factories: Token and pair factory functions
"""

from tests.helpers.constants import (
    DAI,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
    USDC,
    WBTC,
    WETH,
)
from tests.helpers.factories import make_pair, make_token

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "WBTC",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    # Factories
    "make_pair",
    "make_token",
]
