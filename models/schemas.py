"""Pydantic schemas for rule trees and evaluation results."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


RuleKind = Literal["atomic", "all", "any", "combined"]


# =============================================================================
# Rule Tree Schemas
# =============================================================================


class _RuleBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    kind: ClassVar[RuleKind]


class AtomicRule(_RuleBase):
    """Leaf condition comparing one fact against a literal."""

    kind: ClassVar[RuleKind] = "atomic"

    fact: str = Field(description="Name of the fact looked up in the context")
    operator: Any = Field(default=None, description="Operator name from the operator library")
    value: Any = Field(default=None, description="Literal compared against the fact")


class AllRule(_RuleBase):
    """True iff every child rule is true."""

    kind: ClassVar[RuleKind] = "all"

    all_of: list[RuleNode] = Field(alias="all", description="Child rules")


class AnyRule(_RuleBase):
    """True iff at least one child rule is true."""

    kind: ClassVar[RuleKind] = "any"

    any_of: list[RuleNode] = Field(alias="any", description="Child rules")


class CombinedRule(_RuleBase):
    """True iff the all-group and the any-group are both true."""

    kind: ClassVar[RuleKind] = "combined"

    all_of: list[RuleNode] = Field(alias="all", description="Rules that must all hold")
    any_of: list[RuleNode] = Field(alias="any", description="Rules of which one must hold")


def rule_kind(raw: Any) -> str | None:
    """Classify a raw mapping or a rule model into its variant tag."""
    if isinstance(raw, _RuleBase):
        return raw.kind
    if not isinstance(raw, Mapping):
        return None
    if "fact" in raw:
        return "atomic"
    if "all" in raw or "all_of" in raw:
        return "combined" if ("any" in raw or "any_of" in raw) else "all"
    if "any" in raw or "any_of" in raw:
        return "any"
    return None


RuleNode = Annotated[
    Union[
        Annotated[AtomicRule, Tag("atomic")],
        Annotated[AllRule, Tag("all")],
        Annotated[AnyRule, Tag("any")],
        Annotated[CombinedRule, Tag("combined")],
    ],
    Discriminator(rule_kind),
]

AllRule.model_rebuild()
AnyRule.model_rebuild()
CombinedRule.model_rebuild()

RuleModel = Union[AtomicRule, AllRule, AnyRule, CombinedRule]


def is_rule_model(value: Any) -> bool:
    """Check whether a value is already a typed rule node."""
    return isinstance(value, _RuleBase)


def rule_to_dict(rule: RuleModel) -> dict[str, Any]:
    """Serialize a rule tree back to its wire shape."""
    return rule.model_dump(by_alias=True)


# =============================================================================
# Evaluation Result Schemas
# =============================================================================


class RuleResult(BaseModel):
    """Outcome of one visited rule node."""

    rule: RuleNode = Field(description="The rule node that was evaluated")
    result: bool = Field(description="Boolean outcome of the node")


class EvaluationResult(BaseModel):
    """Verdict and post-order trace of a single evaluation call."""

    result: bool = Field(description="Final verdict of the rule tree")
    history: list[RuleResult] = Field(
        default_factory=list, description="Visited nodes, children before parents"
    )
