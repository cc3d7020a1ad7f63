"""Integration tests routing against a recorded pair snapshot."""

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from dex_router.amm.pair import parse_pair_snapshot
from dex_router.errors import InsufficientReserves
from dex_router.models.amount import TokenAmount
from dex_router.routing.finder import RouteFinder
from dex_router.routing.pathfinding import PathFinder
from dex_router.routing.route import Route
from dex_router.routing.types import EmptyRoute, ExistingRoute, TradeType
from scripts.quote_route import load_snapshot

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures" / "snapshots"


@pytest.fixture
def snapshot():
    return load_snapshot(FIXTURES_DIR / "mainnet.json")


@pytest.fixture
def pairs(snapshot):
    return [parse_pair_snapshot(p) for p in snapshot.pairs]


@pytest.fixture
def tokens(snapshot):
    return snapshot.tokens


def _all_routes(pairs, input_token, output_token):
    finder = PathFinder(pairs)
    return [
        Route(finder.pairs_for_path(path), input_token, output_token)
        for path in finder.find_all_paths(input_token.address, output_token.address)
    ]


class TestSnapshotParsing:
    def test_bad_fee_uses_default(self, snapshot):
        with capture_logs() as logs:
            pairs = [parse_pair_snapshot(p) for p in snapshot.pairs]
        assert len(pairs) == 5
        assert [log["event"] for log in logs] == ["fee_parse_failed"]
        assert logs[0]["pair"] == "0x0d4a11d5eeaac28ec3f61d100daf4d40471f1852"


class TestSnapshotRouting:
    def test_stablecoin_swap_goes_through_weth(self, pairs, tokens):
        """The direct DAI/USDC pool is too shallow for 10k USDC."""
        usdc, dai, weth = tokens["USDC"], tokens["DAI"], tokens["WETH"]
        amount = TokenAmount.from_token(usdc, "10000")

        result = RouteFinder().from_best_rate(pairs, usdc, dai, amount)

        assert isinstance(result, ExistingRoute)
        assert result.route.tokens == (usdc, weth, dai)
        assert TokenAmount.from_token(dai, "9900") < result.amount_out

    def test_best_route_beats_every_candidate(self, pairs, tokens):
        usdc, dai = tokens["USDC"], tokens["DAI"]
        amount = TokenAmount.from_token(usdc, "10000")

        result = RouteFinder().from_best_rate(pairs, usdc, dai, amount)

        for route in _all_routes(pairs, usdc, dai):
            assert route.output_amount(amount).raw <= result.amount_out.raw

    def test_exact_output_needs_least_input(self, pairs, tokens):
        usdc, wbtc = tokens["USDC"], tokens["WBTC"]
        amount = TokenAmount.from_token(wbtc, "0.5")

        result = RouteFinder().from_best_rate(pairs, usdc, wbtc, amount)

        assert isinstance(result, ExistingRoute)
        assert result.trade_type is TradeType.EXACT_OUTPUT
        for route in _all_routes(pairs, usdc, wbtc):
            try:
                required = route.input_amount(amount)
            except InsufficientReserves:
                continue
            assert result.amount_in.raw <= required.raw

    def test_forward_trade_fills_exact_output(self, pairs, tokens):
        usdc, weth = tokens["USDC"], tokens["WETH"]
        amount = TokenAmount.from_token(weth, "1")

        result = RouteFinder().from_best_rate(pairs, usdc, weth, amount)

        assert isinstance(result, ExistingRoute)
        assert result.route.output_amount(result.amount_in).raw >= amount.raw

    def test_empty_pool_has_no_route(self, pairs, tokens):
        weth, usdt = tokens["WETH"], tokens["USDT"]
        result = RouteFinder().from_best_rate(
            pairs, weth, usdt, TokenAmount.from_token(weth, "1")
        )
        assert isinstance(result, EmptyRoute)

    def test_mid_price_in_tokens(self, pairs, tokens):
        weth, usdc = tokens["WETH"], tokens["USDC"]
        result = RouteFinder().from_best_rate(
            pairs, weth, usdc, TokenAmount.from_token(weth, "1")
        )
        assert isinstance(result, ExistingRoute)
        assert result.route.mid_price_in_tokens == 2500
