"""Guard-condition evaluation for workflow steps.

A step's ``conditions`` is a list of ``{"field", "operator", "value"}``
objects; the step runs only if every condition holds against the current
execution context.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)


def _kind(value: Any) -> type:
    if isinstance(value, bool):
        return bool
    if isinstance(value, int | float):
        return float
    if isinstance(value, str):
        return str
    return type(value)


def _equals(actual: Any, expected: Any) -> bool:
    """Equality without cross-type coercion: ``True`` is not ``1``, ``"1"`` is not ``1``."""
    return _kind(actual) is _kind(expected) and actual == expected


def _contains(actual: Any, expected: Any) -> bool:
    return str(expected) in str(actual)


OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "equals": _equals,
    "not_equals": lambda actual, expected: not _equals(actual, expected),
    "greater_than": lambda actual, expected: actual > expected,
    "less_than": lambda actual, expected: actual < expected,
    "contains": _contains,
}


def evaluate_condition(condition: Mapping[str, Any], context: Mapping[str, Any]) -> bool:
    """Evaluate one condition; unknown operators and incomparable values are false."""
    operator = condition.get("operator")
    compare = OPERATORS.get(str(operator))
    if compare is None:
        logger.warning(
            "Unknown condition operator",
            extra={"operator": operator, "operation": "workflows.evaluate_condition"},
        )
        return False

    actual = context.get(str(condition.get("field")))
    try:
        return bool(compare(actual, condition.get("value")))
    except TypeError:
        return False


def evaluate_conditions(
    conditions: Sequence[Mapping[str, Any]] | None,
    context: Mapping[str, Any],
) -> bool:
    """Conjunction over all conditions; an empty or missing list always holds."""
    if not conditions:
        return True
    return all(evaluate_condition(condition, context) for condition in conditions)


__all__ = ["OPERATORS", "evaluate_condition", "evaluate_conditions"]
