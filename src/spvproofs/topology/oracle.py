"""
Topology oracles

Every topology answers one question: given N committed elements, how many
hashes prove inclusion of element `to`? All topologies are dispatched
through proof_len(). Most are pure functions of (N, to); the luck-cache
and Huffman families also need the skip of every block, supplied by an
OracleContext.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple
import logging

from ..maaku import MaakuTree
from ..params import DEFAULT_BATCH_SIZE
from .batch import array_batch_proof_len, breadth_batch_proof_len
from .breadth import (
    maaku_proof_len,
    optimal_proof_len,
    reverse_breadth_proof_len,
)
from .huffman import LuckCache, cached_mmr_proof_len, huffman_proof_len
from .mmr import mmr_linear_proof_len, mmr_proof_len
from .rfc6962 import (
    array_proof_len,
    check_range,
    reverse_rfc6962_proof_len,
    rfc6962_proof_len,
)

logger = logging.getLogger(__name__)


class Topology(Enum):
    """Prev-tree topologies a block can commit its ancestors with."""

    ARRAY = 'array'
    OPTIMAL = 'optimal'
    MAAKU = 'maaku'
    MMR = 'mmr'
    MMR_LINEAR = 'mmr-linear'
    BREADTH_BATCH = 'breadth-batch'
    ARRAY_BATCH = 'array-batch'
    MMR_CACHE_16 = 'mmr-cache-16'
    MMR_CACHE_32 = 'mmr-cache-32'
    MMR_CACHE_64 = 'mmr-cache-64'
    MMR_CACHEHUFF_32 = 'mmr-cachehuff-32'
    MMR_CACHEHUFF_64 = 'mmr-cachehuff-64'
    HUFFMAN = 'huffman'
    NAIVE = 'naive'
    RFC6962 = 'rfc6962'
    REVERSE_RFC6962 = 'reverse-rfc6962'
    REVERSE_BREADTH = 'reverse-breadth'

    @classmethod
    def parse(cls, name: str) -> 'Topology':
        try:
            return cls(name)
        except ValueError:
            valid = ', '.join(t.value for t in cls)
            raise ValueError(f"Unknown topology {name!r} (expected one of: {valid})") from None

    @property
    def fast(self) -> bool:
        """Closed-form cost, cheap enough for the per-candidate DP."""
        return self in _FAST

    @property
    def needs_context(self) -> bool:
        """Cost depends on block skips, not only on (N, to)."""
        return self.cache_capacity is not None or self is Topology.HUFFMAN

    @property
    def slow(self) -> bool:
        """Builds a tree over all N elements for every query."""
        return self in (Topology.MAAKU, Topology.HUFFMAN)

    @property
    def cache_capacity(self) -> Optional[int]:
        if self.value.startswith('mmr-cache'):
            return int(self.value.rsplit('-', 1)[1])
        return None

    @property
    def huffman_cache(self) -> bool:
        return self.value.startswith('mmr-cachehuff')


_FAST = frozenset([
    Topology.OPTIMAL,
    Topology.MMR,
    Topology.MMR_LINEAR,
    Topology.BREADTH_BATCH,
    Topology.NAIVE,
    Topology.RFC6962,
    Topology.REVERSE_RFC6962,
    Topology.REVERSE_BREADTH,
])

_PURE = {
    Topology.ARRAY: array_proof_len,
    Topology.OPTIMAL: optimal_proof_len,
    Topology.MMR: mmr_proof_len,
    Topology.MMR_LINEAR: mmr_linear_proof_len,
    Topology.RFC6962: rfc6962_proof_len,
    Topology.REVERSE_RFC6962: reverse_rfc6962_proof_len,
    Topology.REVERSE_BREADTH: reverse_breadth_proof_len,
}


class OracleContext:
    """
    Chain state shared by the oracles of one simulation.

    Holds every block's skip and grows the maaku tree and luck caches
    forward as queries ask for larger N. A query for a smaller N than the
    structure already covers rebuilds it from scratch.
    """

    def __init__(self, skips: List[int], batch_size: int = DEFAULT_BATCH_SIZE):
        self.skips = skips
        self.batch_size = batch_size
        self._tree: Optional[MaakuTree] = None
        self._caches: Dict[int, Tuple[LuckCache, int]] = {}

    def maaku_tree(self, n: int) -> MaakuTree:
        """A maaku tree holding exactly 0..n-1."""
        if self._tree is None or len(self._tree) > n:
            if self._tree is not None:
                logger.debug("rebuilding maaku tree for n=%d", n)
            self._tree = MaakuTree()
        while len(self._tree) < n:
            self._tree.add(len(self._tree))
        return self._tree

    def luck_cache(self, capacity: int, n: int) -> LuckCache:
        """Luck cache fed with blocks 1..n-1."""
        cache, fed = self._caches.get(capacity, (None, 0))
        if cache is None or fed > n:
            if cache is not None:
                logger.debug("rebuilding luck cache %d for n=%d", capacity, n)
            cache, fed = LuckCache(capacity), 1
        for i in range(max(fed, 1), n):
            cache.offer(i, self.skips[i])
        self._caches[capacity] = (cache, max(fed, n))
        return cache


def proof_len(
    topology: Topology,
    n: int,
    to: int,
    context: Optional[OracleContext] = None
) -> int:
    """
    Hashes needed to prove element `to` among n committed elements.

    Args:
        topology: Prev-tree shape
        n: Number of committed elements
        to: Element to prove, 0 <= to < n
        context: Chain state; required when topology.needs_context

    Returns:
        Proof length in hashes
    """
    check_range(n, to)

    func = _PURE.get(topology)
    if func is not None:
        return func(n, to)

    if topology is Topology.NAIVE:
        return 1

    batch_size = context.batch_size if context is not None else DEFAULT_BATCH_SIZE
    if topology is Topology.BREADTH_BATCH:
        return breadth_batch_proof_len(n, to, batch_size)
    if topology is Topology.ARRAY_BATCH:
        return array_batch_proof_len(n, to, batch_size)

    if topology is Topology.MAAKU:
        tree = context.maaku_tree(n) if context is not None else None
        return maaku_proof_len(n, to, tree)

    if context is None:
        raise ValueError(f"Topology {topology.value} needs an OracleContext")

    if topology is Topology.HUFFMAN:
        return huffman_proof_len(n, to, context.skips)

    cache = context.luck_cache(topology.cache_capacity, n)
    return cached_mmr_proof_len(n, to, cache, huffman=topology.huffman_cache)
