"""Pytest configuration and fixtures."""

import pytest

from dex_router.amm.pair import Pair
from dex_router.routing.finder import RouteFinder
from tests.helpers import DAI, USDC, WETH, make_pair


@pytest.fixture
def finder() -> RouteFinder:
    """RouteFinder with the default configuration."""
    return RouteFinder()


@pytest.fixture
def mainnet_pairs() -> list[Pair]:
    """WETH/USDC and WETH/DAI pairs with no direct USDC/DAI liquidity.

    Prices: 1 WETH = 2500 USDC = 2500 DAI.
    """
    return [
        make_pair(WETH, USDC, 100 * 10**18, 250_000 * 10**6),
        make_pair(WETH, DAI, 100 * 10**18, 250_000 * 10**18),
    ]
