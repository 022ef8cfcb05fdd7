"""
Simulated block hashes and skip distances.

Block hashes are opaque 64-bit values drawn from a seeded stream, one per
block starting at block 1. A block may link back as far as
MAX_U64 // hash blocks: rare small hashes give long backlinks.
"""

from typing import List
import random

MAX_U64 = (1 << 64) - 1


class HashStream:
    """Seeded, re-creatable stream of 64-bit unsigned values."""

    def __init__(self, seed: int = 0):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_u64(self) -> int:
        return self._rng.getrandbits(64)


def skip_for(block: int, block_hash: int) -> int:
    """Maximum backward jump for a block, capped so it cannot pass genesis."""
    if block_hash == 0:
        return block
    return min(MAX_U64 // block_hash, block)


def chain_hashes(num_blocks: int, seed: int = 0) -> List[int]:
    """Hashes for blocks 0..num_blocks-1 (genesis has hash 0)."""
    stream = HashStream(seed)
    return [0] + [stream.next_u64() for _ in range(1, num_blocks)]


def chain_skips(hashes: List[int]) -> List[int]:
    """Skip distance of every block; genesis cannot skip."""
    return [skip_for(i, h) if i else 0 for i, h in enumerate(hashes)]
