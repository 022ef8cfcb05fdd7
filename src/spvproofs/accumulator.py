"""
Incremental Path Accumulator

Each block commits to a short array of ancestors (its path), merkled into
a tree of the chosen topology. Block i's path is block i-1's path up to
the ancestor i-1 actually used, plus i-1 itself. Entries past that point
can never be reached again, so the paths of those blocks are released.

Every entry records the hashes needed to get from the block that
appended it back to the root block; a block picks the reachable entry
with the fewest total hashes.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from .maaku import InvariantError
from .params import SimParams
from .rng import chain_hashes, chain_skips
from .topology import Topology, proof_len

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathEntry:
    """An ancestor in a block's path."""
    block_index: int
    cumulative_hashes: int


@dataclass
class Block:
    """A simulated block header."""
    index: int
    hash: int
    skip: int
    path: Optional[List[PathEntry]] = field(default_factory=list)
    prev_used: Optional[int] = None
    hashes_to_genesis: int = 0

    @property
    def released(self) -> bool:
        return self.path is None


@dataclass
class IncrementalResult:
    """Outcome of accumulating a whole chain."""
    topology: Topology
    hashes: int
    path_len: int
    live_paths: int

    def to_dict(self) -> Dict:
        return {
            'topology': self.topology.value,
            'hashes': self.hashes,
            'path_len': self.path_len,
            'live_paths': self.live_paths,
        }


def entry_proof_len(topology: Topology, path: List[PathEntry], block_index: int) -> int:
    """How deep block_index sits in the tree over `path`."""
    for position, entry in enumerate(path):
        if entry.block_index == block_index:
            return proof_len(topology, len(path), position)
    raise InvariantError(f"Block {block_index} missing from path")


class PathAccumulator:
    """
    Builds blocks one at a time, keeping only live ancestor paths.

    The root block (genesis, or params.target) has an empty path and costs
    nothing; blocks before it only consume their hash.
    """

    def __init__(self, params: SimParams, topology: Topology):
        self.params = params.validate()
        if topology.needs_context:
            raise ValueError(
                f"Topology {topology.value} depends on chain state; "
                "use Chain.path_costs instead")
        self.topology = topology
        self.root = params.target
        self.hashes = chain_hashes(params.num_blocks, params.seed)
        self.skips = chain_skips(self.hashes)
        self.blocks: List[Block] = []
        self.freed = 0

    def __len__(self) -> int:
        return len(self.blocks)

    def _new_path(self, prev: Block) -> List[PathEntry]:
        """Copy prev's path up to the ancestor it used, then append prev."""
        if prev.released:
            raise InvariantError(f"Path of block {prev.index} already released")

        kept = prev.path[:prev.prev_used + 1] if prev.prev_used is not None else []
        path = kept + [PathEntry(prev.index, 0)]
        hashes = prev.hashes_to_genesis + proof_len(self.topology, len(path), len(path) - 1)
        path[-1] = PathEntry(prev.index, hashes)
        return path

    def _release_unreachable(self, prev: Block):
        if prev.prev_used is None:
            return
        for entry in prev.path[prev.prev_used + 1:]:
            block = self.blocks[entry.block_index]
            if block.released:
                raise InvariantError(f"Path of block {block.index} released twice")
            block.path = None
            self.freed += 1
            logger.debug("released path of block %d", block.index)

    def _choose(self, block: Block):
        lowest = block.index - block.skip
        best = None
        best_hashes = 0

        # Oldest first; a tie keeps the older entry.
        for position, entry in enumerate(block.path):
            # Can't reach it?
            if entry.block_index < lowest:
                continue
            hashes = entry.cumulative_hashes + proof_len(
                self.topology, len(block.path), position)
            if best is None or hashes < best_hashes:
                best, best_hashes = position, hashes

        if best is None:
            raise InvariantError(f"Block {block.index} can reach no path entry")
        block.prev_used = best
        block.hashes_to_genesis = best_hashes

    def add_block(self) -> Block:
        """Append the next block and pick its backlink."""
        i = len(self.blocks)
        if i >= self.params.num_blocks:
            raise IndexError(f"Chain already holds {self.params.num_blocks} blocks")

        block = Block(index=i, hash=self.hashes[i], skip=self.skips[i])
        if i > self.root:
            prev = self.blocks[i - 1]
            block.path = self._new_path(prev)
            self._release_unreachable(prev)
            self._choose(block)
        self.blocks.append(block)
        return block

    def run(self) -> IncrementalResult:
        """Build every remaining block and report the tip's proof."""
        while len(self.blocks) < self.params.num_blocks:
            self.add_block()

        tip = self.blocks[-1]
        if tip.index == self.root:
            return IncrementalResult(self.topology, 0, 0, self.live_paths())

        entry = tip.path[tip.prev_used]
        hashes = entry.cumulative_hashes + entry_proof_len(
            self.topology, tip.path, entry.block_index)
        return IncrementalResult(
            topology=self.topology,
            hashes=hashes,
            path_len=len(tip.path) - 1,
            live_paths=self.live_paths(),
        )

    def live_paths(self) -> int:
        return sum(1 for b in self.blocks if not b.released)


def accumulate(params: SimParams, topology: Topology) -> IncrementalResult:
    return PathAccumulator(params, topology).run()
