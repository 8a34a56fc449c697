"""Models module containing Pydantic schemas for rule trees and results."""

from models.schemas import (
    AtomicRule,
    AllRule,
    AnyRule,
    CombinedRule,
    RuleNode,
    RuleModel,
    RuleResult,
    EvaluationResult,
    rule_kind,
    rule_to_dict,
)

__all__ = [
    "AtomicRule",
    "AllRule",
    "AnyRule",
    "CombinedRule",
    "RuleNode",
    "RuleModel",
    "RuleResult",
    "EvaluationResult",
    "rule_kind",
    "rule_to_dict",
]
