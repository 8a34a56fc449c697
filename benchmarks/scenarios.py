"""Benchmark contexts and rule trees of increasing size."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any


@dataclass(frozen=True)
class BenchmarkScenario:
    """A named (context, rules) pair to time."""

    name: str
    context: dict[str, Any]
    rules: dict[str, Any]


def _simple() -> BenchmarkScenario:
    return BenchmarkScenario(
        name="simple",
        context={"role": "user", "age": 25, "location": "USA"},
        rules={
            "any": [
                {"fact": "age", "operator": "greaterThan", "value": 18},
                {"fact": "location", "operator": "equal", "value": "USA"},
            ]
        },
    )


def _complex() -> BenchmarkScenario:
    return BenchmarkScenario(
        name="complex",
        context={
            "role": "admin",
            "age": 30,
            "subscription": "premium",
            "location": "USA",
            "actions": ["manage_users", "access_reports", "edit_settings"],
        },
        rules={
            "all": [
                {"fact": "role", "operator": "equal", "value": "admin"},
                {"fact": "subscription", "operator": "equal", "value": "premium"},
                {"fact": "actions", "operator": "contains", "value": "manage_users"},
            ]
        },
    )


def _large(size: int, now: datetime) -> BenchmarkScenario:
    users = [
        {
            "age": i + 20,
            "role": "admin" if i % 2 == 0 else "user",
            "subscription": "enterprise" if i % 3 == 0 else "standard",
            "lastLogin": (now - timedelta(minutes=i)).isoformat(),
            "actions": ["view_content", "edit_content"],
        }
        for i in range(size)
    ]
    return BenchmarkScenario(
        name="large",
        context={"users": users},
        rules={
            "any": [
                {
                    "all": [
                        {"fact": "users", "operator": "size", "value": size},
                        {
                            "fact": "users",
                            "operator": "contains",
                            "value": {"age": 500, "role": "admin", "subscription": "enterprise"},
                        },
                    ]
                }
            ]
        },
    )


def _extreme(size: int, now: datetime) -> BenchmarkScenario:
    accounts = [
        {
            "id": i + 1,
            "age": (i * 7) % 80 + 18,
            "location": f"Country_{i % 10}",
            "subscription": "premium" if i % 5 == 0 else "basic",
            "lastLogin": (now - timedelta(minutes=i)).isoformat(),
            "permissions": ["read", "write", "execute"] if i % 2 == 0 else ["read"],
        }
        for i in range(size)
    ]
    return BenchmarkScenario(
        name="extreme",
        context={"accounts": accounts},
        rules={
            "all": [
                {"fact": "accounts", "operator": "size", "value": size},
                {
                    "any": [
                        {
                            "all": [
                                {
                                    "fact": "accounts",
                                    "operator": "contains",
                                    "value": {"age": 65, "location": "Country_3"},
                                },
                                {
                                    "fact": "accounts",
                                    "operator": "contains",
                                    "value": {"subscription": "premium"},
                                },
                            ]
                        },
                        {
                            "fact": "accounts",
                            "operator": "contains",
                            "value": {"id": 7500, "permissions": ["read", "write", "execute"]},
                        },
                    ]
                },
            ]
        },
    )


def build_scenarios(large_size: int = 1000, extreme_size: int = 10000) -> list[BenchmarkScenario]:
    """Build all benchmark scenarios, smallest first."""
    now = datetime.now(timezone.utc)
    return [
        _simple(),
        _complex(),
        _large(large_size, now),
        _extreme(extreme_size, now),
    ]
