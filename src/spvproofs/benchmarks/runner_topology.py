"""
Benchmark: Topology Comparison

Scores every prev-tree topology against one simulated chain.

Checks:
- The per-topology DP never does worse than the shared minimum-hop path
- A second chain built from the same seed gives identical results
"""

from typing import Dict, Iterable, List, Optional

from .base import Benchmark, BenchmarkResult, BenchmarkStatus
from ..chain import ProofSummary, default_topologies, simulate_all
from ..params import SimParams
from ..topology import Topology


class TopologyComparisonBenchmark(Benchmark):
    """Proof hashes from tip to target for every topology."""

    name = "topology_comparison"
    description = "Proof length per prev-tree topology"

    def __init__(self, params: SimParams, topologies: Optional[Iterable[Topology]] = None):
        self.params = params
        self.topologies = list(topologies) if topologies is not None else \
            default_topologies(params.include_slow)

    def run(self) -> BenchmarkResult:
        summaries = simulate_all(self.params, self.topologies)
        rerun = simulate_all(self.params, self.topologies)

        deterministic = all(
            summaries[t].to_dict() == rerun[t].to_dict()
            and summaries[t].path == rerun[t].path
            for t in self.topologies
        )
        regressions = [
            t.value for t, s in summaries.items()
            if s.optimal_hashes is not None and s.optimal_hashes > s.hashes
        ]

        ranking = self._rank(summaries)
        passed = deterministic and not regressions
        best = ranking[0] if ranking else None

        return BenchmarkResult(
            name=self.name,
            status=BenchmarkStatus.of(passed),
            target="Deterministic, optimal DP <= path cost",
            actual=(f"Best: {best['topology']} ({best['hashes']} hashes)"
                    if best else "No topologies"),
            details={
                'deterministic': deterministic,
                'regressions': regressions,
                'ranking': ranking,
            }
        )

    @staticmethod
    def _rank(summaries: Dict[Topology, ProofSummary]) -> List[Dict]:
        rows = [s.to_dict() for s in summaries.values()]
        return sorted(rows, key=lambda r: (r['hashes'], r['topology']))
