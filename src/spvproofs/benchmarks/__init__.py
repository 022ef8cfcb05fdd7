"""
SPV Proof Benchmarks

1. TopologyComparison: proof hashes per topology along one chain
2. MaakuGrowth: incremental tree invariants and swap cost
3. IncrementalPath: per-block path accumulation with pruning
"""

from .base import Benchmark, BenchmarkResult, BenchmarkStatus, BenchmarkSuite
from .runner_topology import TopologyComparisonBenchmark
from .runner_maaku import MaakuGrowthBenchmark
from .runner_incremental import IncrementalPathBenchmark, incremental_topologies
from .spv_bench import run_all_benchmarks, BenchmarkReport

__all__ = [
    'Benchmark',
    'BenchmarkResult',
    'BenchmarkStatus',
    'BenchmarkSuite',
    'TopologyComparisonBenchmark',
    'MaakuGrowthBenchmark',
    'IncrementalPathBenchmark',
    'incremental_topologies',
    'run_all_benchmarks',
    'BenchmarkReport',
]
