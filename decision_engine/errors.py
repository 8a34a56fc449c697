"""Error taxonomy raised by the decision engine."""

from __future__ import annotations

from typing import Any


class RuleEngineError(Exception):
    """Base exception for rule engine errors."""


class InvalidOperatorError(RuleEngineError):
    """Atomic rule names an operator that is not registered."""

    def __init__(self, operator: Any) -> None:
        super().__init__(f"Invalid operator: {operator}.")
        self.operator = operator


class InvalidRuleStructureError(RuleEngineError):
    """Rule node matches none of the atomic, all, any or combined shapes."""

    def __init__(self, rule: Any = None, detail: str | None = None) -> None:
        message = "Invalid rule structure."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.rule = rule
        self.detail = detail


class InvalidBetweenValueError(RuleEngineError):
    """'between' rule value is not a two-element sequence."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            "Invalid value for 'between' operator. Must be an array of two elements."
        )
        self.value = value


class InvalidSizeTypeError(RuleEngineError):
    """Size family operator applied to a fact that has no length."""

    def __init__(self, operator: str, fact_value: Any) -> None:
        super().__init__(
            f"Invalid fact type for '{operator}' operator. Must be an array or string."
        )
        self.operator = operator
        self.fact_value = fact_value


class UnsupportedTypeError(RuleEngineError):
    """Operands cannot be ordered or interpreted as dates."""

    def __init__(self, left: Any, right: Any = None) -> None:
        super().__init__(
            f"Unsupported context type for comparison: "
            f"{type(left).__name__} and {type(right).__name__}."
        )
        self.left = left
        self.right = right
