"""
Benchmark: Maaku Tree Growth

Inserts elements one at a time and verifies the tree after every step:
max_depth == floor(log2(k)), the root holds the newest element, and all
recorded depths are consistent. Swap counts show the cost of keeping the
newest elements near the root.
"""

from typing import List

from .base import Benchmark, BenchmarkResult, BenchmarkStatus
from ..maaku import MaakuTree


class MaakuGrowthBenchmark(Benchmark):

    name = "maaku_growth"
    description = "Incremental maaku tree invariants and swap cost"

    def __init__(self, count: int = 1024, check_every: int = 1):
        self.count = count
        self.check_every = check_every

    def run(self) -> BenchmarkResult:
        tree = MaakuTree()
        depth_violations: List[int] = []
        max_swaps = 0

        for k in range(1, self.count + 1):
            swaps = tree.add(k - 1)
            max_swaps = max(max_swaps, swaps)
            if tree.max_depth != k.bit_length() - 1:
                depth_violations.append(k)
            if k % self.check_every == 0 or k == self.count:
                tree.check(k - 1)

        passed = not depth_violations
        return BenchmarkResult(
            name=self.name,
            status=BenchmarkStatus.of(passed),
            target="max_depth == floor(log2(k)) after every insert",
            actual=f"{self.count} inserts, max_depth {tree.max_depth}, {tree.swaps} swaps",
            details={
                'count': self.count,
                'max_depth': tree.max_depth,
                'total_swaps': tree.swaps,
                'max_swaps_per_insert': max_swaps,
                'depth_violations': depth_violations[:10],
            }
        )
