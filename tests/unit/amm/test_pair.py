"""Tests for constant-product pair math and snapshot parsing."""

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from dex_router.amm.pair import DEFAULT_FEE, Pair, PairSnapshot, fee_from_bps, parse_pair_snapshot
from dex_router.errors import InsufficientReserves, InvalidArgument
from dex_router.math.fraction import ZERO, ExactFraction
from dex_router.models.amount import TokenAmount
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, USDC, WETH, make_pair


class TestPairConstruction:
    """Tests for Pair validation."""

    def test_default_fee(self):
        assert make_pair(TOKEN_A, TOKEN_B).fee == ExactFraction(3, 1000)
        assert fee_from_bps(30) == DEFAULT_FEE

    def test_with_fee_bps(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 100, 200)
        cheaper = pair.with_fee_bps(5)
        assert cheaper.fee == ExactFraction(5, 10000)
        assert cheaper.reserve_b.raw == 200
        assert pair.fee == DEFAULT_FEE

    def test_tokens(self):
        assert make_pair(TOKEN_A, TOKEN_B).tokens == (TOKEN_A, TOKEN_B)

    def test_same_token_rejected(self):
        with pytest.raises(InvalidArgument):
            make_pair(TOKEN_A, TOKEN_A)

    @pytest.mark.parametrize("fee", [ExactFraction(-1, 100), ExactFraction(1), ExactFraction(3, 2)])
    def test_fee_out_of_range(self, fee):
        with pytest.raises(InvalidArgument):
            make_pair(TOKEN_A, TOKEN_B, fee=fee)

    def test_fee_must_be_fraction(self):
        with pytest.raises(InvalidArgument):
            make_pair(TOKEN_A, TOKEN_B, fee="0.003")  # type: ignore[arg-type]

    def test_negative_reserve_rejected(self):
        with pytest.raises(InvalidArgument):
            make_pair(TOKEN_A, TOKEN_B, reserve_a=-1)

    def test_address_normalized(self):
        pair = Pair.from_reserves(TOKEN_A, TOKEN_B, 1, 1, address="0x" + "AB" * 20)
        assert pair.address == "0x" + "ab" * 20

    def test_key_is_unordered(self):
        assert make_pair(TOKEN_A, TOKEN_B).key == make_pair(TOKEN_B, TOKEN_A).key

    def test_is_tradeable(self):
        assert make_pair(TOKEN_A, TOKEN_B).is_tradeable
        assert not make_pair(TOKEN_A, TOKEN_B, reserve_a=0).is_tradeable


class TestPairLookups:
    """Tests for token lookups."""

    def test_get_reserves_orders_by_input(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 100, 200)
        reserve_in, reserve_out = pair.get_reserves(TOKEN_B)
        assert (reserve_in.raw, reserve_out.raw) == (200, 100)

    def test_other_token(self):
        pair = make_pair(TOKEN_A, TOKEN_B)
        assert pair.other_token(TOKEN_A) == TOKEN_B
        assert pair.other_token(TOKEN_B) == TOKEN_A

    def test_reserve_of(self):
        assert make_pair(TOKEN_A, TOKEN_B, 100, 200).reserve_of(TOKEN_B).raw == 200

    def test_unknown_token(self):
        pair = make_pair(TOKEN_A, TOKEN_B)
        assert not pair.involves_token(TOKEN_C)
        with pytest.raises(InvalidArgument):
            pair.other_token(TOKEN_C)
        with pytest.raises(InvalidArgument):
            pair.get_reserves(TOKEN_C)
        with pytest.raises(InvalidArgument):
            pair.reserve_of(TOKEN_C)


class TestPriceOf:
    """Tests for mid price."""

    def test_price_in_other_token(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 1000, 2000)
        assert pair.price_of(TOKEN_A) == 2
        assert pair.price_of(TOKEN_B) == ExactFraction(1, 2)

    def test_prices_are_reciprocal(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 12345, 678)
        assert pair.price_of(TOKEN_A) * pair.price_of(TOKEN_B) == 1

    def test_empty_reserve(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 0, 1000)
        with pytest.raises(InsufficientReserves):
            pair.price_of(TOKEN_A)


class TestGetOutputAmount:
    """Tests for exact-input swaps."""

    def test_basic_swap(self):
        """100 in against 1000/1000 at 0.3% gives floor(99700/1099.7) = 90."""
        pair = make_pair(TOKEN_A, TOKEN_B, 1000, 1000)
        out = pair.get_output_amount(TokenAmount(TOKEN_A, 100))
        assert out.raw == 90
        assert out.token == TOKEN_B

    def test_matches_integer_formula(self):
        """Exact fraction math agrees with the usual integer formula."""
        reserve_in, reserve_out = 100 * 10**18, 250_000 * 10**6
        pair = make_pair(WETH, USDC, reserve_in, reserve_out)
        for amount_in in [1, 10**15, 10**18, 37 * 10**18]:
            expected = (amount_in * 9970 * reserve_out) // (reserve_in * 10000 + amount_in * 9970)
            assert pair.get_output_amount(TokenAmount(WETH, amount_in)).raw == expected

    def test_zero_input(self):
        pair = make_pair(TOKEN_A, TOKEN_B)
        assert pair.get_output_amount(TokenAmount.zero(TOKEN_A)).is_zero

    def test_output_below_reserve(self):
        """Even a huge input cannot drain the pool."""
        pair = make_pair(TOKEN_A, TOKEN_B, 1000, 1000)
        out = pair.get_output_amount(TokenAmount(TOKEN_A, 10**30))
        assert out.raw < 1000

    def test_monotonic_in_input(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 10**6, 10**6)
        outputs = [pair.get_output_amount(TokenAmount(TOKEN_A, n)).raw for n in range(0, 5000, 250)]
        assert outputs == sorted(outputs)

    def test_empty_reserve(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 1000, 0)
        with pytest.raises(InsufficientReserves):
            pair.get_output_amount(TokenAmount(TOKEN_A, 10))

    def test_foreign_token(self):
        with pytest.raises(InvalidArgument):
            make_pair(TOKEN_A, TOKEN_B).get_output_amount(TokenAmount(TOKEN_C, 10))


class TestGetInputAmount:
    """Tests for exact-output swaps."""

    def test_basic_swap(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 1000, 1000)
        amount_in = pair.get_input_amount(TokenAmount(TOKEN_B, 90))
        assert amount_in.raw == 100
        assert amount_in.token == TOKEN_A

    def test_no_fee_exact(self):
        """Without a fee, half the reserve costs exactly the other reserve."""
        pair = make_pair(TOKEN_A, TOKEN_B, 1000, 1000, fee=ZERO)
        assert pair.get_input_amount(TokenAmount(TOKEN_B, 500)).raw == 1000

    def test_rounds_up(self):
        """The returned input always buys at least the requested output."""
        pair = make_pair(WETH, USDC, 100 * 10**18, 250_000 * 10**6)
        for amount_out in [1, 999, 10**6, 1234 * 10**6]:
            amount_in = pair.get_input_amount(TokenAmount(USDC, amount_out))
            assert pair.get_output_amount(amount_in).raw >= amount_out

    def test_zero_output(self):
        pair = make_pair(TOKEN_A, TOKEN_B)
        assert pair.get_input_amount(TokenAmount.zero(TOKEN_B)).is_zero

    @pytest.mark.parametrize("amount_out", [1000, 1001])
    def test_output_at_or_above_reserve(self, amount_out):
        pair = make_pair(TOKEN_A, TOKEN_B, 1000, 1000)
        with pytest.raises(InsufficientReserves):
            pair.get_input_amount(TokenAmount(TOKEN_B, amount_out))

    def test_empty_reserve(self):
        pair = make_pair(TOKEN_A, TOKEN_B, 0, 1000)
        with pytest.raises(InsufficientReserves):
            pair.get_input_amount(TokenAmount(TOKEN_B, 10))


class TestParsePairSnapshot:
    """Tests for snapshot parsing."""

    def _snapshot(self, **overrides):
        data = {
            "address": "0x" + "12" * 20,
            "tokenA": {"address": TOKEN_A.address, "decimals": 18, "symbol": "A"},
            "tokenB": {"address": TOKEN_B.address, "decimals": 18, "symbol": "B"},
            "reserveA": "1000000",
            "reserveB": 2000000,
        }
        data.update(overrides)
        return PairSnapshot.model_validate(data)

    def test_parses_reserves(self):
        pair = parse_pair_snapshot(self._snapshot())
        assert pair.reserve_a.raw == 1_000_000
        assert pair.reserve_b.raw == 2_000_000
        assert pair.token_a == TOKEN_A
        assert pair.fee == DEFAULT_FEE

    def test_explicit_fee(self):
        pair = parse_pair_snapshot(self._snapshot(fee="0.0025"))
        assert pair.fee == ExactFraction(25, 10000)

    def test_default_fee_override(self):
        pair = parse_pair_snapshot(self._snapshot(), default_fee=ZERO)
        assert pair.fee == ZERO

    @pytest.mark.parametrize("fee", ["abc", "1.5", "-0.1"])
    def test_bad_fee_falls_back(self, fee):
        with capture_logs() as logs:
            pair = parse_pair_snapshot(self._snapshot(fee=fee))
        assert pair.fee == DEFAULT_FEE
        assert logs[0]["event"] == "fee_parse_failed"
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["raw_fee"] == fee

    def test_negative_reserve_rejected(self):
        with pytest.raises(ValidationError):
            self._snapshot(reserveA="-5")

    def test_float_fee_rejected(self):
        with pytest.raises(ValidationError):
            self._snapshot(fee=0.003)
