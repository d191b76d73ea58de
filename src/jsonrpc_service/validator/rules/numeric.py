"""Numeric rules: number comparisons and length.

Both take the same options:

    equal_to, greater_than, greater_than_or_equal_to,
    less_than, less_than_or_equal_to

plus the aliases ``is`` (equal_to), ``min`` (greater_than_or_equal_to) and
``max`` (less_than_or_equal_to).
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from .base import RuleError, RuleResult, as_errors, error
from .types import _is_number

COMPARISONS: dict[str, tuple[Callable[[Any, Any], bool], str]] = {
    "equal_to": (operator.eq, "must be equal to {count}"),
    "greater_than": (operator.gt, "must be greater than {count}"),
    "greater_than_or_equal_to": (operator.ge, "must be greater than or equal to {count}"),
    "less_than": (operator.lt, "must be less than {count}"),
    "less_than_or_equal_to": (operator.le, "must be less than or equal to {count}"),
}

ALIASES = {
    "is": "equal_to",
    "min": "greater_than_or_equal_to",
    "max": "less_than_or_equal_to",
}


def _comparisons(options: Any) -> list[tuple[str, Any]]:
    if not isinstance(options, dict):
        raise ValueError(f"Number options must be a mapping, got {options!r}")

    result = []
    for key, bound in options.items():
        name = ALIASES.get(key, key)
        if name not in COMPARISONS:
            raise ValueError(f"Unknown number option: {key!r}")
        if not _is_number(bound):
            raise ValueError(f"Number option {key!r} must be numeric, got {bound!r}")
        result.append((name, bound))
    return result


class Number:
    """Compares a numeric value with every configured bound.

    Each failing comparison produces its own error.
    """

    name = "number"

    def check(self, value: Any, options: Any) -> RuleResult:
        comparisons = _comparisons(options)
        if not _is_number(value):
            return error("is not a number")

        errors: list[RuleError] = []
        for name, bound in comparisons:
            compare, message = COMPARISONS[name]
            if not compare(value, bound):
                errors.append(error(message, count=bound))
        return errors


class Length:
    """Applies number comparisons to the size of a value.

    Arrays count elements, strings count characters and objects count keys.
    """

    name = "length"

    def check(self, value: Any, options: Any) -> RuleResult:
        if isinstance(value, (list, tuple, str, dict)):
            size = len(value)
        else:
            return error("length check supports only arrays, strings and objects")

        return [e.prefixed("length ") for e in as_errors(Number().check(size, options))]
