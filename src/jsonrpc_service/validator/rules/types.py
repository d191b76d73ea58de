"""Type rule: exact runtime shape of a value."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from .base import RuleResult, error


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return _is_integer(value) or isinstance(value, float)


# kind -> (predicate, article used in the message)
KINDS: dict[str, tuple[Callable[[Any], bool], str]] = {
    "integer": (_is_integer, "an"),
    "float": (lambda v: isinstance(v, float), "a"),
    "number": (_is_number, "a"),
    "boolean": (lambda v: isinstance(v, bool), "a"),
    "string": (lambda v: isinstance(v, str), "a"),
    "array": (lambda v: isinstance(v, (list, tuple)), "an"),
    "object": (lambda v: isinstance(v, dict), "an"),
    "atom": (lambda v: isinstance(v, Enum), "an"),
    "symbol": (lambda v: isinstance(v, Enum), "a"),
}


class Type:
    """Checks the value against one kind.

    No coercion: 5.0 is not an integer, "5" is not a number, True is only
    a boolean.
    """

    name = "type"

    def check(self, value: Any, options: Any) -> RuleResult:
        kind = options.get("is") if isinstance(options, dict) else options
        if kind not in KINDS:
            raise ValueError(f"Unknown type kind: {kind!r}")

        predicate, article = KINDS[kind]
        if predicate(value):
            return None
        return error("is not {article} {kind}", article=article, kind=kind)
