"""Token identity and decimal scale."""

from pydantic import BaseModel, Field, field_validator

from dex_router.constants import MAX_TOKEN_DECIMALS
from dex_router.models.types import Address, normalize_address


class TokenRef(BaseModel):
    """A token as seen by the router: identity plus decimal scale.

    Two refs are the same token when their addresses match; the symbol is
    display metadata only.

    Raises:
        pydantic.ValidationError: On a malformed address or decimals outside
            [0, 77]. This is a ValueError but not a DexRouterError.
    """

    address: Address
    decimals: int = Field(ge=0, le=MAX_TOKEN_DECIMALS)
    symbol: str | None = None

    model_config = {"frozen": True}

    @field_validator("address")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_address(value)

    def same_as(self, other: "TokenRef") -> bool:
        """Check token identity (address only)."""
        return self.address == other.address

    @property
    def label(self) -> str:
        """Symbol when known, otherwise the shortened address."""
        return self.symbol or f"{self.address[:6]}..{self.address[-4:]}"

    def __str__(self) -> str:
        return self.label


__all__ = ["TokenRef"]
