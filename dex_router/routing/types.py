"""Type definitions for routing results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, TypeAlias

from dex_router.models.amount import TokenAmount
from dex_router.routing.route import Route


class TradeType(str, Enum):
    """Which side of the trade the user fixed."""

    EXACT_INPUT = "exactInput"
    EXACT_OUTPUT = "exactOutput"


@dataclass(frozen=True)
class EmptyRoute:
    """No viable route for the current liquidity. Not an error."""

    kind: Literal["empty"] = "empty"


@dataclass(frozen=True)
class ExistingRoute:
    """Best route found, with the amounts it produces at each hop."""

    route: Route
    trade_type: TradeType
    # Amounts in trade order: [input, hop 1 output, ..., final output]
    amounts: tuple[TokenAmount, ...] = field(default=())
    kind: Literal["exist"] = "exist"

    @property
    def amount_in(self) -> TokenAmount:
        return self.amounts[0]

    @property
    def amount_out(self) -> TokenAmount:
        return self.amounts[-1]

    @property
    def counter_amount(self) -> TokenAmount:
        """The side the user did not fix: output for exact input, else input."""
        if self.trade_type is TradeType.EXACT_INPUT:
            return self.amount_out
        return self.amount_in


SwapRouteResult: TypeAlias = EmptyRoute | ExistingRoute


__all__ = ["EmptyRoute", "ExistingRoute", "SwapRouteResult", "TradeType"]
