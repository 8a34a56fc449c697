"""Timing harness for benchmark scenarios."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from benchmarks.scenarios import BenchmarkScenario
from decision_engine.rules import DecisionEngine


class BenchmarkResult(BaseModel):
    """Timing summary for one scenario."""

    name: str = Field(description="Scenario name")
    iterations: int = Field(description="Number of evaluations timed")
    total_seconds: float = Field(description="Wall time for all iterations")
    mean_us: float = Field(description="Mean microseconds per evaluation")
    ops_per_sec: float = Field(description="Evaluations per second")
    result: bool = Field(description="Verdict of the scenario")
    history_length: int = Field(description="Trace entries per evaluation")


class BenchmarkRunner:
    """Time repeated evaluations of benchmark scenarios."""

    def __init__(self, engine: DecisionEngine | None = None) -> None:
        self.engine = engine or DecisionEngine()

    def run(self, scenario: BenchmarkScenario, iterations: int) -> BenchmarkResult:
        """Evaluate a scenario `iterations` times and summarize the timing."""
        if iterations <= 0:
            raise ValueError(f"iterations must be positive, got {iterations}")

        outcome = self.engine.evaluate_rules(scenario.context, scenario.rules)

        start_time = time.perf_counter()
        for _ in range(iterations):
            self.engine.evaluate_rules(scenario.context, scenario.rules)
        elapsed = time.perf_counter() - start_time

        return BenchmarkResult(
            name=scenario.name,
            iterations=iterations,
            total_seconds=elapsed,
            mean_us=elapsed / iterations * 1_000_000,
            ops_per_sec=iterations / elapsed if elapsed > 0 else float("inf"),
            result=outcome.result,
            history_length=len(outcome.history),
        )

    def run_all(
        self, scenarios: list[BenchmarkScenario], iterations: int
    ) -> list[BenchmarkResult]:
        """Run every scenario with the same iteration count."""
        return [self.run(scenario, iterations) for scenario in scenarios]

    @staticmethod
    def fastest(results: list[BenchmarkResult]) -> BenchmarkResult | None:
        """Return the result with the highest throughput."""
        if not results:
            return None
        return max(results, key=lambda r: r.ops_per_sec)
