"""Benchmark harness for timing rule evaluation."""

from benchmarks.runner import BenchmarkResult, BenchmarkRunner
from benchmarks.scenarios import BenchmarkScenario, build_scenarios

__all__ = [
    "BenchmarkResult",
    "BenchmarkRunner",
    "BenchmarkScenario",
    "build_scenarios",
]
