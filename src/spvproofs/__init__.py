"""
spvproofs: prev-tree topologies for compact SPV proofs

A light client proves that a block is an ancestor of a later one by
following backlinks. If every block commits to a tree of earlier blocks,
and lucky blocks (small hashes) may skip far back, the proof only needs a
handful of hops; what it costs in hashes depends on the tree shape.

This package simulates such chains and compares tree shapes:
- Topology oracles: proof length for N committed elements and a target
- Maaku tree: an incremental internal-node tree with the newest on top
- Chain simulator: skip-link chains and the DP choosing backlinks
- Path accumulator: per-block ancestor paths, pruned as the chain grows

Usage:
    from spvproofs import simulate, Topology

    summary = simulate(10000, seed=1, topology=Topology.MMR)
    print(summary.hashes, summary.hops, summary.optimal_hashes)
"""

from .maaku import (
    InvariantError,
    MaakuNode,
    MaakuTree,
    build_maaku_tree,
    grow,
)
from .params import SimParams, DEFAULT_BATCH_SIZE
from .rng import MAX_U64, HashStream, skip_for, chain_hashes, chain_skips
from .topology import Topology, OracleContext, proof_len
from .chain import (
    Chain,
    DPResult,
    PathCost,
    ProofSummary,
    default_topologies,
    min_hops,
    simulate,
    simulate_all,
)
from .accumulator import (
    PathEntry,
    Block,
    IncrementalResult,
    PathAccumulator,
    accumulate,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Maaku tree
    "InvariantError",
    "MaakuNode",
    "MaakuTree",
    "build_maaku_tree",
    "grow",
    # Parameters
    "SimParams",
    "DEFAULT_BATCH_SIZE",
    # Hash stream
    "MAX_U64",
    "HashStream",
    "skip_for",
    "chain_hashes",
    "chain_skips",
    # Topologies
    "Topology",
    "OracleContext",
    "proof_len",
    # Chain
    "Chain",
    "DPResult",
    "PathCost",
    "ProofSummary",
    "default_topologies",
    "min_hops",
    "simulate",
    "simulate_all",
    # Accumulator
    "PathEntry",
    "Block",
    "IncrementalResult",
    "PathAccumulator",
    "accumulate",
]
