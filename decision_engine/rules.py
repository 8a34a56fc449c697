"""Recursive rule evaluator producing a verdict and a post-order trace."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from decision_engine.errors import InvalidRuleStructureError
from decision_engine.operators import OPERATORS, OperatorFunc, get_operator
from models.schemas import (
    AllRule,
    AnyRule,
    AtomicRule,
    CombinedRule,
    EvaluationResult,
    RuleModel,
    RuleNode,
    RuleResult,
    is_rule_model,
    rule_kind,
)


logger = logging.getLogger(__name__)

_RULE_ADAPTER: TypeAdapter[RuleModel] = TypeAdapter(RuleNode)


def parse_rule(raw: Any) -> RuleModel:
    """
    Convert a raw rule mapping (e.g. decoded JSON) into a typed rule tree.

    Typed rule nodes are returned unchanged.

    Raises:
        InvalidRuleStructureError: some node in the tree matches no rule shape.
    """
    if is_rule_model(raw):
        return raw
    try:
        return _RULE_ADAPTER.validate_python(raw)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        raise InvalidRuleStructureError(raw, f"{location}: {error['msg']}") from e


class DecisionEngine:
    """
    Evaluate rule trees against a context of named facts.

    The engine keeps no per-call state: the context and the trace are passed
    down the recursion explicitly, so one instance can serve any number of
    callers.

    Combinators never short-circuit. Every child of an all/any node is
    evaluated and recorded even once the aggregate outcome is known, which
    keeps the trace complete and lets errors from later children surface.

    Raw nodes are typed one at a time as the walk reaches them, so the first
    failing node in post-order decides which error the caller sees.
    """

    def __init__(self, operators: Mapping[str, OperatorFunc] | None = None) -> None:
        self.operators: Mapping[str, OperatorFunc] = (
            OPERATORS if operators is None else dict(operators)
        )

    def evaluate_rules(self, context: Mapping[str, Any], rules: Any) -> EvaluationResult:
        """
        Evaluate a rule tree against a context.

        Args:
            context: Fact name to value mapping; missing facts read as None
            rules: A typed rule node or a raw mapping in the rule grammar

        Returns:
            EvaluationResult with the verdict and the post-order history

        Raises:
            RuleEngineError: any invalid rule or operand aborts the whole call
        """
        history: list[RuleResult] = []
        node, result = self._evaluate(rules, context, history)

        logger.debug(
            "Evaluated %s rule tree: result=%s, %d trace entries",
            node.kind,
            result,
            len(history),
        )
        return EvaluationResult(result=result, history=history)

    def _evaluate(
        self, node: Any, context: Mapping[str, Any], history: list[RuleResult]
    ) -> tuple[RuleModel, bool]:
        kind = rule_kind(node)
        if kind == "atomic":
            return self._evaluate_atomic(parse_rule(node), context, history)
        if kind == "combined":
            return self._evaluate_combined(node, context, history)
        if kind == "all":
            return self._evaluate_all(node, _group(node, "all"), context, history)
        if kind == "any":
            return self._evaluate_any(node, _group(node, "any"), context, history)
        raise InvalidRuleStructureError(node, "matches no rule shape")

    def _evaluate_atomic(
        self, node: AtomicRule, context: Mapping[str, Any], history: list[RuleResult]
    ) -> tuple[RuleModel, bool]:
        operator = get_operator(node.operator, self.operators)
        result = bool(operator(context.get(node.fact), node.value))
        history.append(RuleResult(rule=node, result=result))
        return node, result

    def _evaluate_children(
        self, children: Sequence[Any], context: Mapping[str, Any], history: list[RuleResult]
    ) -> tuple[list[RuleModel], list[bool]]:
        nodes: list[RuleModel] = []
        results: list[bool] = []
        for child in children:
            child_node, child_result = self._evaluate(child, context, history)
            nodes.append(child_node)
            results.append(child_result)
        return nodes, results

    def _evaluate_all(
        self,
        node: Any,
        children: Sequence[Any],
        context: Mapping[str, Any],
        history: list[RuleResult],
    ) -> tuple[RuleModel, bool]:
        nodes, results = self._evaluate_children(children, context, history)
        rule = node if isinstance(node, AllRule) else AllRule(all_of=nodes)
        result = all(results)
        history.append(RuleResult(rule=rule, result=result))
        return rule, result

    def _evaluate_any(
        self,
        node: Any,
        children: Sequence[Any],
        context: Mapping[str, Any],
        history: list[RuleResult],
    ) -> tuple[RuleModel, bool]:
        nodes, results = self._evaluate_children(children, context, history)
        rule = node if isinstance(node, AnyRule) else AnyRule(any_of=nodes)
        result = any(results)
        history.append(RuleResult(rule=rule, result=result))
        return rule, result

    def _evaluate_combined(
        self, node: Any, context: Mapping[str, Any], history: list[RuleResult]
    ) -> tuple[RuleModel, bool]:
        all_rule, all_result = self._evaluate_all(None, _group(node, "all"), context, history)
        any_rule, any_result = self._evaluate_any(None, _group(node, "any"), context, history)
        rule = (
            node
            if isinstance(node, CombinedRule)
            else CombinedRule(all_of=all_rule.all_of, any_of=any_rule.any_of)
        )
        result = all_result and any_result
        history.append(RuleResult(rule=rule, result=result))
        return rule, result


def _group(node: Any, name: str) -> Sequence[Any]:
    """Children of the all/any group of a typed or raw node."""
    if is_rule_model(node):
        return getattr(node, f"{name}_of")
    children = node[name] if name in node else node[f"{name}_of"]
    if not isinstance(children, (list, tuple)):
        raise InvalidRuleStructureError(node, f"{name}: expected a list of rules")
    return children


_default_engine = DecisionEngine()


def evaluate_rules(context: Mapping[str, Any], rules: Any) -> EvaluationResult:
    """Evaluate with the default operator library."""
    return _default_engine.evaluate_rules(context, rules)
