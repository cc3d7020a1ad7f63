"""Token graph and pathfinding for multi-hop routing.

This module discovers candidate paths through a snapshot of pairs. It
separates the graph structure and path enumeration from pricing: paths are
lists of token addresses, and PathFinder maps them back to pairs.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

import structlog

from dex_router.amm.pair import Pair
from dex_router.constants import DEFAULT_MAX_HOPS, DEFAULT_MAX_PATHS
from dex_router.errors import InvalidArgument
from dex_router.models.types import normalize_address

logger = structlog.get_logger()


class TokenGraph:
    """Graph of tokens connected by tradeable pairs.

    Adjacency list where an edge means a pair with both reserves non-empty
    exists between two tokens.
    """

    def __init__(self) -> None:
        """Initialize an empty token graph."""
        self._adjacency: dict[str, set[str]] = {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[Pair]) -> TokenGraph:
        """Build a TokenGraph from pairs, skipping pairs with an empty reserve."""
        graph = cls()
        for pair in pairs:
            if pair.is_tradeable:
                graph._add_edge(pair.token_a.address, pair.token_b.address)
        return graph

    def _add_edge(self, token_a: str, token_b: str) -> None:
        """Add a bidirectional edge between two tokens."""
        self._adjacency.setdefault(token_a, set()).add(token_b)
        self._adjacency.setdefault(token_b, set()).add(token_a)

    def get_neighbors(self, token: str) -> set[str]:
        """Get all tokens directly tradeable with given token."""
        return self._adjacency.get(normalize_address(token), set())

    def _sorted_neighbors(self, token_normalized: str) -> list[str]:
        """Neighbors in a stable order so path enumeration is deterministic."""
        return sorted(self._adjacency.get(token_normalized, ()))

    def has_token(self, token: str) -> bool:
        return normalize_address(token) in self._adjacency

    @property
    def token_count(self) -> int:
        """Number of unique tokens in the graph."""
        return len(self._adjacency)


class PathFinder:
    """Path enumeration over one snapshot of pairs.

    Built per routing call; nothing is cached across snapshots.

    Usage:
        finder = PathFinder(pairs)
        for path in finder.find_all_paths(token_in, token_out, max_hops=3):
            hops = finder.pairs_for_path(path)
    """

    def __init__(self, pairs: Iterable[Pair]) -> None:
        """Index pairs by identity and build the graph.

        Args:
            pairs: Pair snapshot. Each unordered token pair may appear once.

        Raises:
            InvalidArgument: If two pairs share the same token pair
        """
        self._pairs: dict[frozenset[str], Pair] = {}
        for pair in pairs:
            if pair.key in self._pairs:
                raise InvalidArgument(
                    f"Duplicate pair for {pair.token_a.label}/{pair.token_b.label}"
                )
            self._pairs[pair.key] = pair
        self.graph = TokenGraph.from_pairs(self._pairs.values())

        skipped = len(self._pairs) - sum(1 for p in self._pairs.values() if p.is_tradeable)
        if skipped:
            logger.debug("untradeable_pairs_excluded", count=skipped)

    def get_pair(self, token_a: str, token_b: str) -> Pair | None:
        """Look up the pair between two tokens, if any."""
        return self._pairs.get(frozenset((normalize_address(token_a), normalize_address(token_b))))

    def pairs_for_path(self, path: list[str]) -> list[Pair]:
        """Map a token path to the pairs connecting consecutive tokens.

        Raises:
            InvalidArgument: If two consecutive tokens have no pair
        """
        pairs = []
        for token_in, token_out in zip(path, path[1:]):
            pair = self.get_pair(token_in, token_out)
            if pair is None:
                raise InvalidArgument(f"No pair for {token_in}/{token_out}")
            pairs.append(pair)
        return pairs

    def find_all_paths(
        self,
        token_in: str,
        token_out: str,
        max_hops: int = DEFAULT_MAX_HOPS,
        max_paths: int = DEFAULT_MAX_PATHS,
    ) -> list[list[str]]:
        """Find candidate paths from token_in to token_out.

        Shorter paths come first, so direct paths are returned before
        multi-hop ones:
        - Direct (1 hop): [token_in, token_out]
        - 2-hop: [token_in, intermediate, token_out]
        - 3-hop: [token_in, int1, int2, token_out]

        No token appears twice within a path.

        Args:
            token_in: Starting token address
            token_out: Target token address
            max_hops: Maximum number of pairs per path (default 3)
            max_paths: Maximum number of paths to return (default 100)

        Returns:
            List of paths, each a list of token addresses. Empty if none.
        """
        if max_hops < 1:
            raise InvalidArgument(f"max_hops must be at least 1, got {max_hops}")

        token_in_norm = normalize_address(token_in)
        token_out_norm = normalize_address(token_out)
        graph = self.graph

        if token_in_norm == token_out_norm:
            return []
        if not graph.has_token(token_in_norm) or not graph.has_token(token_out_norm):
            return []

        candidates: list[list[str]] = []
        start_neighbors = graph._sorted_neighbors(token_in_norm)
        end_neighbors = graph.get_neighbors(token_out_norm)

        # Direct path first (very common case)
        if token_out_norm in end_neighbors:
            candidates.append([token_in_norm, token_out_norm])
            if len(candidates) >= max_paths:
                return candidates
        if max_hops == 1:
            return candidates

        # 2-hop paths exist through every common neighbor
        common_neighbors = [
            n for n in start_neighbors if n in end_neighbors and n != token_out_norm
        ]
        for intermediate in common_neighbors:
            candidates.append([token_in_norm, intermediate, token_out_norm])
            if len(candidates) >= max_paths:
                return candidates

        if max_hops < 3:
            return candidates

        # 3+ hops: BFS over partial paths that already have two hops' worth
        # of tokens queued, so every path found here is at least 3 hops long
        queue: deque[tuple[list[str], frozenset[str]]] = deque()
        for neighbor in start_neighbors:
            if neighbor == token_out_norm:
                continue
            for second in graph._sorted_neighbors(neighbor):
                if second in (token_in_norm, token_out_norm):
                    continue
                queue.append(
                    ([token_in_norm, neighbor, second], frozenset((token_in_norm, neighbor, second)))
                )

        while queue and len(candidates) < max_paths:
            path, visited = queue.popleft()
            current = path[-1]

            if token_out_norm in graph.get_neighbors(current):
                candidates.append(path + [token_out_norm])
                if len(candidates) >= max_paths:
                    break

            # Extend only while another hop still fits before the destination
            if len(path) < max_hops:
                for neighbor in graph._sorted_neighbors(current):
                    if neighbor not in visited and neighbor != token_out_norm:
                        queue.append((path + [neighbor], visited | {neighbor}))

        return candidates


__all__ = ["PathFinder", "TokenGraph"]
