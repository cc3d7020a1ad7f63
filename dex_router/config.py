"""Router configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from dex_router.amm.pair import DEFAULT_FEE
from dex_router.constants import DEFAULT_MAX_HOPS, DEFAULT_MAX_PATHS
from dex_router.errors import InvalidArgument
from dex_router.math.fraction import ONE, ZERO, ExactFraction, to_fraction


@dataclass(frozen=True)
class RouterConfig:
    """Centralized configuration for route search.

    Attributes:
        max_hops: Longest route considered, in pairs (default: 3)
        max_paths: Cap on candidate paths evaluated per search (default: 100)
        default_fee: Fee applied to snapshots that carry none (default: 0.3%)
    """

    max_hops: int = DEFAULT_MAX_HOPS
    max_paths: int = DEFAULT_MAX_PATHS
    default_fee: ExactFraction = field(default=DEFAULT_FEE)

    def __post_init__(self) -> None:
        if self.max_hops < 1:
            raise InvalidArgument(f"max_hops must be at least 1, got {self.max_hops}")
        if self.max_paths < 1:
            raise InvalidArgument(f"max_paths must be at least 1, got {self.max_paths}")
        if self.default_fee < ZERO or self.default_fee >= ONE:
            raise InvalidArgument(f"default_fee must be in [0, 1), got {self.default_fee}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RouterConfig:
        """Build a config from environment variables.

        - DEX_ROUTER_MAX_HOPS: Longest route in pairs (default: 3)
        - DEX_ROUTER_MAX_PATHS: Candidate path cap (default: 100)
        - DEX_ROUTER_DEFAULT_FEE: Default fee as a decimal string (default: 0.003)

        Raises:
            InvalidArgument: If a variable is set to an unusable value
        """
        env = os.environ if environ is None else environ

        def _int(name: str, default: int) -> int:
            raw = env.get(name)
            if raw is None or raw == "":
                return default
            try:
                return int(raw)
            except ValueError as err:
                raise InvalidArgument(f"{name} must be an integer, got '{raw}'") from err

        raw_fee = env.get("DEX_ROUTER_DEFAULT_FEE")
        default_fee = to_fraction(raw_fee) if raw_fee else DEFAULT_FEE

        return cls(
            max_hops=_int("DEX_ROUTER_MAX_HOPS", DEFAULT_MAX_HOPS),
            max_paths=_int("DEX_ROUTER_MAX_PATHS", DEFAULT_MAX_PATHS),
            default_fee=default_fee,
        )


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()


__all__ = ["DEFAULT_ROUTER_CONFIG", "RouterConfig"]
