"""Operator library: binary predicates over (fact value, rule value).

Every predicate is a pure function. Shape mismatches that are ordinary in
loosely typed context data evaluate to ``False``; mismatches that point at a
broken rule (an unsized fact for ``size``, a malformed ``between`` interval,
ordering across incompatible types) raise a ``RuleEngineError``.
"""

from __future__ import annotations

import locale
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from decision_engine.errors import (
    InvalidBetweenValueError,
    InvalidOperatorError,
    InvalidSizeTypeError,
    UnsupportedTypeError,
)


OperatorFunc = Callable[[Any, Any], bool]

_ONE_MS = timedelta(milliseconds=1)


# =============================================================================
# Type helpers
# =============================================================================


def _is_number(value: Any) -> bool:
    """Check for int/float, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_sized(value: Any) -> bool:
    return isinstance(value, (str, list, tuple))


def _strict_equal(left: Any, right: Any) -> bool:
    """Equality that never treats a bool as equal to a number."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _to_utc(value: date) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def parse_date(value: Any) -> datetime | None:
    """
    Parse an ISO-8601 string or date/datetime into an aware datetime.

    Returns None for anything that is not a valid date.
    """
    if isinstance(value, date):
        return _to_utc(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            return _to_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def _parse_rule_date(value: Any) -> datetime | None:
    """Parse the rule side of a date operator; numbers are epoch milliseconds."""
    if _is_number(value):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return parse_date(value)


def _require_date_fact(fact_value: Any, rule_value: Any) -> None:
    if not isinstance(fact_value, (str, date)):
        raise UnsupportedTypeError(fact_value, rule_value)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


# =============================================================================
# Shared comparator
# =============================================================================


def compare(left: Any, right: Any) -> float:
    """
    Order two values of the same supported type.

    Numbers compare by difference, strings by the current locale's collation,
    and dates by their difference in milliseconds. Returns a negative, zero or
    positive number.

    Raises:
        UnsupportedTypeError: operands are mismatched or of an unsupported type.
    """
    if _is_number(left) and _is_number(right):
        return left - right
    if isinstance(left, str) and isinstance(right, str):
        return locale.strcoll(left, right)
    if isinstance(left, date) and isinstance(right, date):
        return (_to_utc(left) - _to_utc(right)) / _ONE_MS
    raise UnsupportedTypeError(left, right)


# =============================================================================
# Equality and ordering
# =============================================================================


def equal(fact_value: Any, rule_value: Any) -> bool:
    return _strict_equal(fact_value, rule_value)


def not_equal(fact_value: Any, rule_value: Any) -> bool:
    return not _strict_equal(fact_value, rule_value)


def greater_than(fact_value: Any, rule_value: Any) -> bool:
    return compare(fact_value, rule_value) > 0


def less_than(fact_value: Any, rule_value: Any) -> bool:
    return compare(fact_value, rule_value) < 0


def greater_than_or_equal(fact_value: Any, rule_value: Any) -> bool:
    return compare(fact_value, rule_value) >= 0


def less_than_or_equal(fact_value: Any, rule_value: Any) -> bool:
    return compare(fact_value, rule_value) <= 0


def between(fact_value: Any, rule_value: Any) -> bool:
    """Closed interval test: min <= fact <= max."""
    if not _is_sequence(rule_value) or len(rule_value) != 2:
        raise InvalidBetweenValueError(rule_value)
    low, high = rule_value
    return compare(fact_value, low) >= 0 and compare(fact_value, high) <= 0


# =============================================================================
# Membership
# =============================================================================


def in_(fact_value: Any, rule_value: Any) -> bool:
    return _is_sequence(rule_value) and any(
        _strict_equal(fact_value, item) for item in rule_value
    )


def not_in(fact_value: Any, rule_value: Any) -> bool:
    return _is_sequence(rule_value) and not any(
        _strict_equal(fact_value, item) for item in rule_value
    )


def contains(fact_value: Any, rule_value: Any) -> bool:
    return _is_sequence(fact_value) and any(
        _strict_equal(item, rule_value) for item in fact_value
    )


# =============================================================================
# Strings
# =============================================================================


def starts_with(fact_value: Any, rule_value: Any) -> bool:
    return (
        isinstance(fact_value, str)
        and isinstance(rule_value, str)
        and fact_value.startswith(rule_value)
    )


def ends_with(fact_value: Any, rule_value: Any) -> bool:
    return (
        isinstance(fact_value, str)
        and isinstance(rule_value, str)
        and fact_value.endswith(rule_value)
    )


def regex(fact_value: Any, rule_value: Any) -> bool:
    """Search the fact string for the pattern; a missing pattern never matches."""
    if not isinstance(fact_value, str) or rule_value is None:
        return False
    return _compile(str(rule_value)).search(fact_value) is not None


def matches(fact_value: Any, rule_value: Any) -> bool:
    if not isinstance(fact_value, str) or not isinstance(rule_value, str):
        return False
    return _compile(rule_value).search(fact_value) is not None


def contains_substring(fact_value: Any, rule_value: Any) -> bool:
    return (
        isinstance(fact_value, str)
        and isinstance(rule_value, str)
        and rule_value in fact_value
    )


# =============================================================================
# Size
# =============================================================================


def _length_of(operator: str, fact_value: Any) -> int:
    if not _is_sized(fact_value):
        raise InvalidSizeTypeError(operator, fact_value)
    return len(fact_value)


def size(fact_value: Any, rule_value: Any) -> bool:
    return _strict_equal(_length_of("size", fact_value), rule_value)


def smaller(fact_value: Any, rule_value: Any) -> bool:
    length = _length_of("smaller", fact_value)
    return _is_number(rule_value) and length < rule_value


def bigger(fact_value: Any, rule_value: Any) -> bool:
    length = _length_of("bigger", fact_value)
    return _is_number(rule_value) and length > rule_value


def is_empty(fact_value: Any, rule_value: Any) -> bool:
    return _is_sized(fact_value) and len(fact_value) == 0


def is_not_empty(fact_value: Any, rule_value: Any) -> bool:
    return _is_sized(fact_value) and len(fact_value) > 0


# =============================================================================
# Dates
# =============================================================================


def within_last(fact_value: Any, rule_value: Any) -> bool:
    """True when the fact date lies no more than rule_value milliseconds ago."""
    _require_date_fact(fact_value, rule_value)
    if not _is_number(rule_value):
        raise UnsupportedTypeError(fact_value, rule_value)
    fact_date = parse_date(fact_value)
    if fact_date is None:
        return False
    elapsed = (datetime.now(timezone.utc) - fact_date) / _ONE_MS
    return elapsed <= rule_value


def before(fact_value: Any, rule_value: Any) -> bool:
    _require_date_fact(fact_value, rule_value)
    fact_date = parse_date(fact_value)
    rule_date = _parse_rule_date(rule_value)
    if fact_date is None or rule_date is None:
        return False
    return fact_date < rule_date


def after(fact_value: Any, rule_value: Any) -> bool:
    _require_date_fact(fact_value, rule_value)
    fact_date = parse_date(fact_value)
    rule_date = _parse_rule_date(rule_value)
    if fact_date is None or rule_date is None:
        return False
    return fact_date > rule_date


# =============================================================================
# Presence
# =============================================================================


def exists(fact_value: Any, rule_value: Any) -> bool:
    return fact_value is not None


def not_exists(fact_value: Any, rule_value: Any) -> bool:
    return fact_value is None


# =============================================================================
# Registry
# =============================================================================


OPERATORS: Mapping[str, OperatorFunc] = MappingProxyType(
    {
        "equal": equal,
        "notEqual": not_equal,
        "greaterThan": greater_than,
        "lessThan": less_than,
        "greaterThanOrEqual": greater_than_or_equal,
        "lessThanOrEqual": less_than_or_equal,
        "in": in_,
        "notIn": not_in,
        "contains": contains,
        "startsWith": starts_with,
        "endsWith": ends_with,
        "regex": regex,
        "between": between,
        "size": size,
        "smaller": smaller,
        "bigger": bigger,
        "withinLast": within_last,
        "before": before,
        "after": after,
        "exists": exists,
        "notExists": not_exists,
        "containsSubstring": contains_substring,
        "matches": matches,
        "isEmpty": is_empty,
        "isNotEmpty": is_not_empty,
    }
)

OPERATOR_NAMES: frozenset[str] = frozenset(OPERATORS)


def get_operator(
    name: Any, operators: Mapping[str, OperatorFunc] = OPERATORS
) -> OperatorFunc:
    """Look up an operator predicate by name."""
    func = operators.get(name) if isinstance(name, str) else None
    if func is None:
        raise InvalidOperatorError(name)
    return func
