"""
Benchmark plumbing shared by the SPV proof runners.

A benchmark measures something about a simulated chain and checks one
property of it while doing so; the result keeps both the measurement
(`actual`, `details`) and the property it was held to (`target`).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, List
from enum import Enum
import logging
import time

logger = logging.getLogger(__name__)


class BenchmarkStatus(Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"

    @classmethod
    def of(cls, passed: bool) -> 'BenchmarkStatus':
        return cls.PASS if passed else cls.FAIL


@dataclass
class BenchmarkResult:
    """Outcome of one benchmark against one chain."""
    name: str
    status: BenchmarkStatus
    target: str
    actual: str
    details: Dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'status': self.status.value,
            'target': self.target,
            'actual': self.actual,
            'details': self.details,
            'duration_ms': round(self.duration_ms, 2),
        }

    @property
    def passed(self) -> bool:
        return self.status == BenchmarkStatus.PASS


class Benchmark(ABC):
    """One measurement over a simulated chain or tree."""

    name: str = "benchmark"
    description: str = ""

    @abstractmethod
    def run(self) -> BenchmarkResult:
        """Measure, check, and report."""

    def timed_run(self) -> BenchmarkResult:
        """run() with wall-clock timing; an exception becomes an ERROR result."""
        start = time.perf_counter()
        try:
            result = self.run()
        except Exception as e:
            logger.exception("benchmark %s failed", self.name)
            result = BenchmarkResult(
                name=self.name,
                status=BenchmarkStatus.ERROR,
                target=self.description or "Complete without error",
                actual=f"{type(e).__name__}: {e}",
            )
        result.duration_ms = (time.perf_counter() - start) * 1000
        logger.debug("%s: %s in %.1f ms", self.name, result.status.value, result.duration_ms)
        return result


@dataclass
class BenchmarkSuite:
    """Benchmarks run against the same chain parameters."""
    name: str
    benchmarks: List[Benchmark]
    results: List[BenchmarkResult] = field(default_factory=list)

    def run_all(self, verbose: bool = False) -> List[BenchmarkResult]:
        self.results = []
        for bench in self.benchmarks:
            if verbose:
                print(f"  {bench.name}: {bench.description}")
            result = bench.timed_run()
            self.results.append(result)
            if verbose:
                mark = "✓" if result.passed else "✗"
                print(f"    {mark} {result.actual}")
        return self.results

    @property
    def all_passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def pass_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'suite': self.name,
            'passed': self.pass_count,
            'total': len(self.results),
            'all_passed': self.all_passed,
            'results': [r.to_dict() for r in self.results]
        }
