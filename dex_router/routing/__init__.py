"""Route construction and best-route search.

Module structure:
- route.py: Route, a validated chain of pairs with per-hop pricing
- pathfinding.py: TokenGraph and PathFinder for candidate discovery
- finder.py: RouteFinder, best-rate selection among candidates
- types.py: TradeType and the EmptyRoute / ExistingRoute results
"""

from dex_router.routing.finder import RouteFinder, from_best_rate
from dex_router.routing.pathfinding import PathFinder, TokenGraph
from dex_router.routing.route import Route
from dex_router.routing.types import EmptyRoute, ExistingRoute, SwapRouteResult, TradeType

__all__ = [
    "EmptyRoute",
    "ExistingRoute",
    "PathFinder",
    "Route",
    "RouteFinder",
    "SwapRouteResult",
    "TokenGraph",
    "TradeType",
    "from_best_rate",
]
