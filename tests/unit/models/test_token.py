"""Tests for TokenRef and the shared annotated types."""

import pytest
from pydantic import BaseModel, ValidationError

from dex_router.models.token import TokenRef
from dex_router.models.types import (
    Uint256,
    normalize_address,
    validate_uint256,
)
from tests.helpers import WETH


class TestTokenRef:
    """Tests for token identity."""

    def test_address_normalized_to_lowercase(self):
        token = TokenRef(address="0xC02AAA39B223FE8D0A0E5C4F27EAD9083C756CC2", decimals=18)
        assert token.address == WETH.address

    def test_same_as_ignores_symbol(self):
        other = TokenRef(address=WETH.address, decimals=18, symbol="Wrapped Ether")
        assert WETH.same_as(other)

    def test_invalid_address_rejected(self):
        with pytest.raises(ValidationError):
            TokenRef(address="0x1234", decimals=18)

    @pytest.mark.parametrize("decimals", [-1, 78])
    def test_decimals_out_of_range(self, decimals):
        with pytest.raises(ValidationError):
            TokenRef(address=WETH.address, decimals=decimals)

    def test_validation_error_is_value_error(self):
        """Callers catching ValueError also see token validation failures."""
        with pytest.raises(ValueError):
            TokenRef(address=WETH.address, decimals=-1)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            WETH.decimals = 6  # type: ignore[misc]

    def test_label_falls_back_to_address(self):
        token = TokenRef(address="0x" + "ab" * 20, decimals=18)
        assert token.label == "0xabab..abab"
        assert str(token) == token.label

    def test_label_uses_symbol(self):
        assert WETH.label == "WETH"


class TestValidateUint256:
    """Tests for validate_uint256."""

    def test_accepts_int_and_string(self):
        assert validate_uint256(5) == 5
        assert validate_uint256("5") == 5

    def test_max_value(self):
        assert validate_uint256(str(2**256 - 1)) == 2**256 - 1

    @pytest.mark.parametrize("value", [-1, 2**256, "abc", True, 1.5])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            validate_uint256(value)

    def test_in_model(self):
        class Holder(BaseModel):
            value: Uint256

        assert Holder(value="1000").value == 1000
        with pytest.raises(ValidationError):
            Holder(value="-1")


class TestAddressHelpers:
    """Tests for address helpers."""

    def test_normalize_adds_prefix(self):
        assert normalize_address("ABCD") == "0xabcd"
