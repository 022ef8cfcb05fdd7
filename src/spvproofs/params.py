"""
Simulation Parameters

SimParams collects every tunable of a simulation run. Parameters are
immutable and hashable so one instance can be shared across runs and
recorded in reports.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

DEFAULT_BATCH_SIZE = 65535


@dataclass(frozen=True)
class SimParams:
    """
    Parameters for one simulated chain.

    simulate(num_blocks, target, seed, topology) → proof summary
    """

    num_blocks: int = 1000
    """Chain length N; blocks are numbered 0..N-1, 0 is genesis."""

    target: int = 0
    """Block at which the SPV proof terminates."""

    seed: int = 0
    """Seed for the block hash stream."""

    batch_size: int = DEFAULT_BATCH_SIZE
    """Subtree size for the batched topologies."""

    include_slow: bool = True
    """Evaluate tree-building topologies (maaku, huffman) along the path."""

    def validate(self) -> 'SimParams':
        """Reject configurations that cannot be simulated."""
        if self.num_blocks < 1:
            raise ValueError(f"num_blocks must be >= 1, got {self.num_blocks}")
        if self.target < 0 or self.target >= self.num_blocks:
            raise ValueError(
                f"target {self.target} out of range [0, {self.num_blocks})")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
