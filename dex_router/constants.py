"""Routing constants.

Centralizes fee defaults and search bounds.
"""

# Maximum uint256 value (largest reserve an on-chain pair can report)
UINT256_MAX = 2**256 - 1

# Largest decimal scale a token can declare (10**77 still fits in uint256)
MAX_TOKEN_DECIMALS = 77

# Basis point denominator (30 bps = 0.3%)
BPS_DENOMINATOR = 10_000

# Standard constant-product swap fee in basis points
DEFAULT_FEE_BPS = 30

# Search bounds for multi-hop routing (mirrors on-chain routers)
DEFAULT_MAX_HOPS = 3
DEFAULT_MAX_PATHS = 100

# Digits shown when a computed counter-amount is written back into an input field
COUNTER_AMOUNT_DISPLAY_DECIMALS = 5
