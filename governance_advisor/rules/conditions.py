"""
Condition evaluation for business rules.

Operators
---------
    equals / not_equals                 strict equality (numeric strings are
                                        coerced when compared with numbers)
    greater_than / less_than / *_or_equal
    contains / not_contains             list membership, or case-insensitive
                                        substring for strings
    between                             inclusive numeric [lo, hi]
    in_list                             value is a member of the given list
    regex_match                         ``re.search`` on ``str(value)``
    is_empty / is_not_empty             None, blank string, empty list/dict

Any fault while comparing (an incomparable pair, a bad regex) makes the
condition not match; it is reported in the outcome, never raised.
"""

from __future__ import annotations

import logging
import operator as op
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from governance_advisor.models.rule import Condition, ConditionGroup
from governance_advisor.utils.parsing import parse_float

logger = logging.getLogger(__name__)

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "equals": op.eq,
    "not_equals": op.ne,
    "greater_than": op.gt,
    "less_than": op.lt,
    "greater_than_or_equal": op.ge,
    "less_than_or_equal": op.le,
}


@dataclass
class ConditionOutcome:
    condition: Condition
    matched: bool
    value: Any = None
    error: Optional[str] = None


@dataclass
class GroupOutcome:
    matched: bool
    details: list[ConditionOutcome] = field(default_factory=list)


def get_field_value(path: str, context: Mapping[str, Any]) -> Any:
    """Resolve a dotted ``path`` in ``context``; ``None`` when any hop is missing."""
    value: Any = context
    for part in path.split("."):
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            return None
    return value


def evaluate_conditions(group: Optional[ConditionGroup], context: Mapping[str, Any]) -> GroupOutcome:
    """Evaluate every condition in ``group`` and combine them."""
    if group is None or not group.rules:
        return GroupOutcome(matched=False)

    details = [evaluate_condition(c, context) for c in group.rules]
    results = [d.matched for d in details]

    if group.operator == "OR":
        matched = any(results)
    elif group.operator == "NOT":
        matched = not results[0]
    elif group.operator == "XOR":
        matched = results.count(True) == 1
    else:
        matched = all(results)
    return GroupOutcome(matched=matched, details=details)


def evaluate_condition(condition: Condition, context: Mapping[str, Any]) -> ConditionOutcome:
    value = get_field_value(condition.field, context)
    try:
        matched = _apply_operator(condition.operator, value, condition.value)
    except (TypeError, ValueError, re.error) as exc:
        logger.debug("Condition on %s failed: %s", condition.field, exc)
        return ConditionOutcome(condition, matched=False, value=value, error=str(exc))
    return ConditionOutcome(condition, matched=matched, value=value)


def _apply_operator(name: str, value: Any, expected: Any) -> bool:
    if name in _COMPARATORS:
        left, right = _coerce_pair(value, expected)
        return _COMPARATORS[name](left, right)
    if name == "contains":
        return contains_value(value, expected)
    if name == "not_contains":
        return not contains_value(value, expected)
    if name == "between":
        return is_between(value, expected)
    if name == "in_list":
        return isinstance(expected, list) and value in expected
    if name == "regex_match":
        return re.search(str(expected), "" if value is None else str(value)) is not None
    if name == "is_empty":
        return is_empty(value)
    if name == "is_not_empty":
        return not is_empty(value)
    logger.warning("Unknown condition operator: %s", name)
    return False


def _coerce_pair(left: Any, right: Any) -> tuple[Any, Any]:
    """Turn a numeric string into a number when the other side is a number."""
    if isinstance(left, str) and _is_number(right):
        parsed = parse_float(left)
        if parsed is not None:
            left = parsed
    if isinstance(right, str) and _is_number(left):
        parsed = parse_float(right)
        if parsed is not None:
            right = parsed
    return left, right


def contains_value(value: Any, search: Any) -> bool:
    if isinstance(value, list):
        return search in value
    if isinstance(value, str):
        return str(search).lower() in value.lower()
    return False


def is_between(value: Any, bounds: Any) -> bool:
    if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
        return False
    number, lo, hi = parse_float(value), parse_float(bounds[0]), parse_float(bounds[1])
    if number is None or lo is None or hi is None:
        return False
    return lo <= number <= hi


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
