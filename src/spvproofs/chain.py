"""
Skip-Link Chain Simulator

Simulates a chain of block headers where block i may link back to any
block within skip_i = MAX_U64 // hash_i of itself. A dynamic programming
pass picks, for every block, the reachable ancestor that minimises the
total proof cost back to the target block.

Two ways of scoring a topology:
- path_costs(): one generic hop-count DP shared by every topology, with
  each topology's proof length summed along that same path.
- optimal_cost(): a full DP per topology, scoring every candidate with the
  topology itself. Only closed-form (fast) topologies are allowed here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional
import logging

from .maaku import InvariantError
from .params import SimParams
from .rng import chain_hashes, chain_skips
from .topology import OracleContext, Topology, proof_len

logger = logging.getLogger(__name__)


@dataclass
class DPResult:
    """Per-block best cost and chosen backlink."""
    cost: List[int]
    step: List[Optional[int]]


@dataclass
class PathCost:
    """A topology's proof cost along a fixed path."""
    topology: Topology
    hashes: int
    hops: int


@dataclass
class ProofSummary:
    """Result of simulating one topology."""
    topology: Topology
    hashes: int
    hops: int
    optimal_hashes: Optional[int] = None
    path: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'topology': self.topology.value,
            'hashes': self.hashes,
            'hops': self.hops,
            'optimal_hashes': self.optimal_hashes,
        }


class Chain:
    """A deterministic synthetic chain of num_blocks headers."""

    def __init__(self, params: SimParams):
        self.params = params.validate()
        self.num_blocks = params.num_blocks
        self.target = params.target
        self.hashes = chain_hashes(params.num_blocks, params.seed)
        self.skips = chain_skips(self.hashes)
        self.context = OracleContext(self.skips, params.batch_size)
        self._hops: Optional[DPResult] = None

    def candidates(self, i: int) -> range:
        """Reachable ancestors of block i, nearest first; never below target."""
        lowest = max(i - self.skips[i], self.target)
        return range(i - 1, lowest - 1, -1)

    def _dp(self, cost_fn: Callable[[int, int], int]) -> DPResult:
        cost = [0] * self.num_blocks
        step: List[Optional[int]] = [None] * self.num_blocks

        for i in range(self.target + 1, self.num_blocks):
            best = None
            best_cost = 0
            # Scan nearest first; only a strictly better cost replaces.
            for j in self.candidates(i):
                c = cost_fn(i, j) + cost[j]
                if best is None or c < best_cost:
                    best, best_cost = j, c
            if best is None:
                raise InvariantError(f"Block {i} has no reachable ancestor")
            cost[i] = best_cost
            step[i] = best

        return DPResult(cost=cost, step=step)

    def hop_dp(self) -> DPResult:
        """Minimum number of backlink hops from every block to the target."""
        if self._hops is None:
            self._hops = self._dp(lambda i, j: 1)
        return self._hops

    def min_hops(self) -> List[int]:
        return self.hop_dp().cost

    def walk(self, step: List[Optional[int]]) -> List[int]:
        """Blocks visited from the tip back to the target, tip first."""
        path = [self.num_blocks - 1]
        while path[-1] != self.target:
            prev = step[path[-1]]
            if prev is None:
                raise InvariantError(f"Block {path[-1]} has no backlink")
            path.append(prev)
        return path

    def path_costs(self, topologies: Iterable[Topology]) -> Dict[Topology, PathCost]:
        """Sum each topology's proof length along the minimum-hop path."""
        path = self.walk(self.hop_dp().step)
        # Oldest hop first, so tree-backed oracles only ever grow.
        hops = list(zip(path[1:], path[:-1]))[::-1]

        results = {}
        for topology in topologies:
            hashes = sum(proof_len(topology, i, j, self.context) for j, i in hops)
            results[topology] = PathCost(topology=topology, hashes=hashes, hops=len(hops))
        return results

    def optimal_cost(self, topology: Topology) -> DPResult:
        """Full per-topology DP: cost[i] = min over j of proof_len(i, j) + cost[j]."""
        if not topology.fast:
            raise ValueError(
                f"Topology {topology.value} is too slow for the per-candidate DP")
        return self._dp(lambda i, j: proof_len(topology, i, j, self.context))

    def summarize(self, topology: Topology, optimal: bool = True) -> ProofSummary:
        """Proof cost from the tip to the target for one topology."""
        path = self.walk(self.hop_dp().step)
        cost = self.path_costs([topology])[topology]
        summary = ProofSummary(
            topology=topology,
            hashes=cost.hashes,
            hops=cost.hops,
            path=path,
        )
        if optimal and topology.fast:
            summary.optimal_hashes = self.optimal_cost(topology).cost[self.num_blocks - 1]
        logger.debug("%s: %d hashes over %d hops (optimal %s)",
                     topology.value, summary.hashes, summary.hops, summary.optimal_hashes)
        return summary


def default_topologies(include_slow: bool = True) -> List[Topology]:
    """Every topology, optionally without the tree-building ones."""
    return [t for t in Topology if include_slow or not t.slow]


def simulate(
    num_blocks: int,
    target: int = 0,
    seed: int = 0,
    topology: Topology = Topology.RFC6962,
    batch_size: Optional[int] = None
) -> ProofSummary:
    """
    Simulate a chain and measure the proof from its tip to `target`.

    Args:
        num_blocks: Chain length, >= 1
        target: Block the proof terminates at, < num_blocks
        seed: Seed for the block hash stream
        topology: Prev-tree topology to score
        batch_size: Subtree size for the batched topologies

    Returns:
        ProofSummary with the path cost and, for fast topologies, the
        optimal-at-every-step cost
    """
    kwargs = {} if batch_size is None else {'batch_size': batch_size}
    params = SimParams(num_blocks=num_blocks, target=target, seed=seed, **kwargs)
    return Chain(params).summarize(topology)


def min_hops(params: SimParams) -> List[int]:
    """Fewest backlink hops from every block down to params.target."""
    return Chain(params).min_hops()


def simulate_all(params: SimParams, topologies: Optional[Iterable[Topology]] = None,
                 optimal: bool = True) -> Dict[Topology, ProofSummary]:
    """Score several topologies against one chain."""
    chain = Chain(params)
    if topologies is None:
        topologies = default_topologies(params.include_slow)
    return {t: chain.summarize(t, optimal) for t in topologies}
