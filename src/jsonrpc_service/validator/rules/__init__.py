"""Validation rules and the default rule registry.

Each rule takes ``(value, options)`` and returns None on success, or one or
more RuleError values. Custom rules are added with register_rule() and are
then available by name to every Validator.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .base import MISSING, Rule, RuleError, RuleResult, as_errors, error
from .membership import Exclusion, Inclusion
from .numeric import Length, Number
from .pattern import Format
from .presence import NotEmpty, Required
from .types import Type

RuleLike = Rule | Callable[[Any, Any], RuleResult]

_registry: dict[str, RuleLike] = {
    "type": Type(),
    "required": Required(),
    "not_empty": NotEmpty(),
    "length": Length(),
    "number": Number(),
    "inclusion": Inclusion(),
    "exclusion": Exclusion(),
    "format": Format(),
}


def register_rule(name: str, rule: RuleLike) -> None:
    """Register a rule under a name, replacing any previous one."""
    _registry[name] = rule


def unregister_rule(name: str) -> None:
    _registry.pop(name, None)


def get_rule(name: str) -> RuleLike:
    """Look up a rule by name.

    Raises:
        KeyError: If no rule is registered under that name.
    """
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(f"Unknown validation rule: {name}") from None


def registered_rules() -> list[str]:
    return sorted(_registry)


def run_rule(rule: RuleLike, value: Any, options: Any) -> list[RuleError]:
    """Run a rule object or plain callable and normalize the result."""
    check = getattr(rule, "check", rule)
    return as_errors(check(value, options))


def check(name: str, value: Any, options: Any = None) -> list[RuleError]:
    """Run the rule registered under ``name`` against a single value."""
    return run_rule(get_rule(name), value, options)


__all__ = [
    "MISSING",
    "Rule",
    "RuleError",
    "RuleResult",
    "RuleLike",
    "check",
    "error",
    "get_rule",
    "register_rule",
    "registered_rules",
    "run_rule",
    "unregister_rule",
    # Built-in rules
    "Exclusion",
    "Format",
    "Inclusion",
    "Length",
    "NotEmpty",
    "Number",
    "Required",
    "Type",
]
