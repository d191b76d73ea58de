"""Membership rules: inclusion and exclusion lists.

None always passes; absence is the business of the required rule.
"""

from __future__ import annotations

from typing import Any

from .base import MISSING, RuleResult, error, is_enumerable


def _enumeration(options: Any) -> Any:
    if isinstance(options, dict):
        return options.get("in", MISSING)
    return options


def _member(value: Any, enum: Any) -> bool:
    try:
        return value in enum
    except TypeError:
        # unhashable value against a set or dict
        return False


class Inclusion:
    name = "inclusion"

    message = "is not in the inclusion list: {list}"

    def check(self, value: Any, options: Any) -> RuleResult:
        if value is None:
            return None

        enum = _enumeration(options)
        if not is_enumerable(enum):
            return error(self.message, list="")
        if _member(value, enum):
            return None
        return error(self.message, list=list(enum))


class Exclusion:
    name = "exclusion"

    message = "is in the black list: {list}"

    def check(self, value: Any, options: Any) -> RuleResult:
        if value is None:
            return None

        enum = _enumeration(options)
        if not is_enumerable(enum):
            return error(self.message, list="")
        if _member(value, enum):
            return error(self.message, list=list(enum))
        return None
