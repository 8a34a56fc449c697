"""Decision engine module for declarative rule evaluation."""

from decision_engine.errors import (
    InvalidBetweenValueError,
    InvalidOperatorError,
    InvalidRuleStructureError,
    InvalidSizeTypeError,
    RuleEngineError,
    UnsupportedTypeError,
)
from decision_engine.operators import OPERATOR_NAMES, OPERATORS, compare, get_operator
from decision_engine.rules import DecisionEngine, evaluate_rules, parse_rule

__all__ = [
    "DecisionEngine",
    "evaluate_rules",
    "parse_rule",
    "OPERATORS",
    "OPERATOR_NAMES",
    "compare",
    "get_operator",
    "RuleEngineError",
    "InvalidOperatorError",
    "InvalidRuleStructureError",
    "InvalidBetweenValueError",
    "InvalidSizeTypeError",
    "UnsupportedTypeError",
]
