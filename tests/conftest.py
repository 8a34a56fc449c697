"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("LOG_LEVEL", "WARNING")

from decision_engine.rules import DecisionEngine  # noqa: E402


def make_rule(fact: str, operator: str, value: Any = None) -> dict[str, Any]:
    """Factory for atomic rule mappings."""
    return {"fact": fact, "operator": operator, "value": value}


def make_all(*rules: dict[str, Any]) -> dict[str, Any]:
    """Factory for ALL rule mappings."""
    return {"all": list(rules)}


def make_any(*rules: dict[str, Any]) -> dict[str, Any]:
    """Factory for ANY rule mappings."""
    return {"any": list(rules)}


def make_combined(
    all_rules: list[dict[str, Any]], any_rules: list[dict[str, Any]]
) -> dict[str, Any]:
    """Factory for combined ALL + ANY rule mappings."""
    return {"all": all_rules, "any": any_rules}


@pytest.fixture
def engine() -> DecisionEngine:
    """Fresh engine with the default operator library."""
    return DecisionEngine()


@pytest.fixture
def applicant_context() -> dict[str, Any]:
    """Sample applicant facts for eligibility rules."""
    return {
        "age": 30,
        "income": 40000,
        "country": "Canada",
        "status": "single",
    }


@pytest.fixture
def nested_combined_rules() -> dict[str, Any]:
    """Combined rule whose groups nest further ALL/ANY nodes."""
    return make_combined(
        [
            make_rule("age", "greaterThan", 21),
            make_rule("income", "greaterThan", 30000),
            make_any(
                make_rule("age", "greaterThan", 25),
                make_rule("income", "greaterThan", 35000),
            ),
        ],
        [
            make_rule("country", "equal", "Canada"),
            make_rule("status", "equal", "married"),
            make_all(
                make_rule("age", "greaterThan", 18),
                make_rule("income", "greaterThan", 10000),
            ),
        ],
    )
