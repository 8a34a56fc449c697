"""CLI entry point for the rule evaluation engine."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from benchmarks.runner import BenchmarkResult, BenchmarkRunner
from benchmarks.scenarios import build_scenarios
from config.settings import get_settings
from decision_engine.errors import RuleEngineError
from decision_engine.operators import OPERATOR_NAMES
from decision_engine.rules import DecisionEngine
from models.schemas import (
    AllRule,
    AnyRule,
    AtomicRule,
    CombinedRule,
    EvaluationResult,
    RuleModel,
)


console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_json(path: Path) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path} is not valid JSON: {e}") from e


def _parse_fact(option: str) -> tuple[str, Any]:
    """Parse NAME=VALUE, decoding VALUE as JSON when possible."""
    name, sep, raw = option.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"Expected NAME=VALUE, got {option!r}", param_hint="--fact")
    try:
        return name, json.loads(raw)
    except json.JSONDecodeError:
        return name, raw


def _describe_rule(rule: RuleModel) -> str:
    """One-line summary of a rule node for trace tables."""
    if isinstance(rule, AtomicRule):
        return f"{rule.fact} {rule.operator} {rule.value!r}"
    if isinstance(rule, CombinedRule):
        return f"ALL({len(rule.all_of)}) AND ANY({len(rule.any_of)})"
    if isinstance(rule, AllRule):
        return f"ALL({len(rule.all_of)})"
    if isinstance(rule, AnyRule):
        return f"ANY({len(rule.any_of)})"
    return repr(rule)


@click.group()
@click.version_option(version="1.0.0")
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this run")
def cli(log_level: str | None) -> None:
    """Rule Engine - evaluate declarative rule trees against facts."""
    _configure_logging(log_level or get_settings().log_level)


@cli.command()
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--context",
    "context_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file holding the context object",
)
@click.option("--fact", "facts", multiple=True, help="Fact as NAME=JSON, repeatable")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def evaluate(
    rules_file: Path,
    context_file: Path | None,
    facts: tuple[str, ...],
    as_json: bool,
) -> None:
    """Evaluate RULES_FILE against a context."""
    rules = _load_json(rules_file)

    context: dict[str, Any] = {}
    if context_file is not None:
        loaded = _load_json(context_file)
        if not isinstance(loaded, dict):
            raise click.BadParameter("context must be a JSON object", param_hint="--context")
        context.update(loaded)
    for option in facts:
        name, value = _parse_fact(option)
        context[name] = value

    try:
        outcome = DecisionEngine().evaluate_rules(context, rules)
    except RuleEngineError as e:
        console.print(f"{type(e).__name__}: {e}", style="red", markup=False)
        sys.exit(1)

    if as_json:
        click.echo(outcome.model_dump_json(by_alias=True, indent=2))
        return

    _print_trace(outcome)


@cli.command()
def operators() -> None:
    """List the available operators."""
    for name in sorted(OPERATOR_NAMES):
        click.echo(name)


@cli.command()
@click.option("--iterations", type=click.IntRange(min=1), default=None, help="Evaluations per scenario")
@click.option(
    "--scenario",
    "scenario_names",
    multiple=True,
    type=click.Choice(["simple", "complex", "large", "extreme"]),
    help="Run only the named scenario(s)",
)
def bench(iterations: int | None, scenario_names: tuple[str, ...]) -> None:
    """Benchmark evaluation over contexts of increasing size."""
    settings = get_settings()
    iterations = iterations or settings.benchmark_iterations

    scenarios = build_scenarios(settings.benchmark_large_size, settings.benchmark_extreme_size)
    if scenario_names:
        scenarios = [s for s in scenarios if s.name in scenario_names]

    console.print(Panel(f"{len(scenarios)} scenario(s) x {iterations} iterations", title="Benchmark"))

    runner = BenchmarkRunner()
    results = runner.run_all(scenarios, iterations)
    _print_bench_results(results)

    fastest = runner.fastest(results)
    if fastest is not None:
        console.print(f"\nFastest is [bold]{fastest.name}[/bold]")


def _print_trace(outcome: EvaluationResult) -> None:
    """Print the verdict and the evaluation history."""
    table = Table(show_header=True, header_style="bold cyan", title="Evaluation History")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind")
    table.add_column("Rule", justify="left")
    table.add_column("Result", justify="center")

    for i, entry in enumerate(outcome.history, 1):
        passed = "[green]✓[/green]" if entry.result else "[red]✗[/red]"
        table.add_row(str(i), entry.rule.kind, _describe_rule(entry.rule), passed)

    console.print(table)
    verdict = "[bold green]true[/bold green]" if outcome.result else "[bold red]false[/bold red]"
    console.print(f"\nResult: {verdict}")


def _print_bench_results(results: list[BenchmarkResult]) -> None:
    """Print benchmark results in a formatted table."""
    table = Table(show_header=True, header_style="bold cyan", title="Benchmark Results")
    table.add_column("Scenario", style="dim")
    table.add_column("ops/sec", justify="right")
    table.add_column("mean µs", justify="right")
    table.add_column("Result", justify="center")
    table.add_column("Trace", justify="right")

    for r in results:
        table.add_row(
            r.name,
            f"{r.ops_per_sec:,.0f}",
            f"{r.mean_us:.1f}",
            str(r.result).lower(),
            str(r.history_length),
        )

    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
