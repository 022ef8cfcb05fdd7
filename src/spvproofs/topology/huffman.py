"""
Cache-augmented MMR and Huffman-weighted topologies

Blocks with an unusually large skip ("lucky" blocks) are the ones long
proofs tend to pass through. These topologies keep a small cache of the
luckiest ancestors next to the MMR so proofs through them are short.
"""

from bisect import bisect_right
from typing import Dict, Iterable, List, Tuple
import heapq
import math

from .mmr import mmr_proof_len
from .rfc6962 import check_range


class LuckCache:
    """
    The `capacity` highest-skip blocks offered so far, best first.

    Equal skips keep the earlier block ahead; the lowest-ranked entry is
    evicted only by a strictly larger skip.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._keys: List[int] = []       # -skip, ascending
        self._entries: List[Tuple[int, int]] = []  # (index, skip)
        self._members: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, index: int) -> bool:
        return index in self._members

    def offer(self, index: int, skip: int) -> bool:
        """Offer a block; returns True if it was admitted."""
        if index in self._members:
            return False
        if len(self._entries) == self.capacity and skip <= self._entries[-1][1]:
            return False

        pos = bisect_right(self._keys, -skip)
        self._keys.insert(pos, -skip)
        self._entries.insert(pos, (index, skip))
        self._members[index] = skip

        if len(self._entries) > self.capacity:
            self._keys.pop()
            evicted, _ = self._entries.pop()
            del self._members[evicted]
        return True

    def entries(self) -> List[Tuple[int, int]]:
        """(index, skip) pairs, best first."""
        return list(self._entries)


def huffman_depth(weights: Iterable[Tuple[int, int]], target: int) -> int:
    """
    Depth of `target` in the Huffman tree over (index, weight) pairs.

    The two lightest subtrees are merged repeatedly; equal weights merge in
    offer order. Only the merge chain containing `target` is tracked.
    """
    heap = []
    seq = 0
    for index, weight in weights:
        heap.append((weight, seq, 0 if index == target else None))
        seq += 1

    if not any(depth is not None for _, _, depth in heap):
        raise IndexError(f"Index {target} not among Huffman weights")

    heapq.heapify(heap)
    while len(heap) > 1:
        w1, _, d1 = heapq.heappop(heap)
        w2, _, d2 = heapq.heappop(heap)
        if d1 is not None:
            depth = d1 + 1
        elif d2 is not None:
            depth = d2 + 1
        else:
            depth = None
        heapq.heappush(heap, (w1 + w2, seq, depth))
        seq += 1

    return heap[0][2]


def cached_mmr_proof_len(
    n: int,
    to: int,
    cache: LuckCache,
    huffman: bool = False
) -> int:
    """
    MMR proof with a side structure over the luck cache.

    Args:
        n: Number of committed elements
        to: Element to prove
        cache: Luckiest blocks among 0..n-1
        huffman: Weight the cache structure by skip instead of balancing it
    """
    check_range(n, to)

    if n < 2 * cache.capacity:
        return mmr_proof_len(n, to)

    if to in cache:
        if huffman:
            return 1 + huffman_depth(cache.entries(), to)
        return 1 + math.ceil(math.log2(cache.capacity))

    return 1 + mmr_proof_len(n, to)


def huffman_proof_len(n: int, to: int, skips: List[int]) -> int:
    """Huffman tree over every element below n, weighted by skip."""
    check_range(n, to)
    return 1 + huffman_depth(((i, skips[i]) for i in range(n)), to)

