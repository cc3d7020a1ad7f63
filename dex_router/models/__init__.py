"""Value types for tokens, amounts and trade slots."""

from dex_router.models.amount import TokenAmount
from dex_router.models.pair_types import TokensPair, TokenType, mirror_token_type
from dex_router.models.token import TokenRef
from dex_router.models.types import Address, Uint256, normalize_address

__all__ = [
    # Types
    "Address",
    "Uint256",
    "normalize_address",
    # Tokens and amounts
    "TokenRef",
    "TokenAmount",
    # Trade slots
    "TokenType",
    "TokensPair",
    "mirror_token_type",
]
