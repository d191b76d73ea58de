"""Shared pieces for validation rules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol


class _Missing:
    """Marker for a field that is absent from the params."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class RuleError:
    """A failed check: message template plus its substitutions."""

    message: str
    substitutions: dict[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        """Fill in substitutions. Braces that name no substitution stay literal."""
        if not self.substitutions:
            return self.message
        values = _Substitutions(
            (key, _render_value(value)) for key, value in self.substitutions.items()
        )
        try:
            return self.message.format_map(values)
        except (AttributeError, LookupError, ValueError):
            return self.message

    def prefixed(self, prefix: str) -> "RuleError":
        return RuleError(f"{prefix}{self.message}", self.substitutions)


RuleResult = RuleError | list[RuleError] | None


class Rule(Protocol):
    """Protocol for validation rules."""

    def check(self, value: Any, options: Any) -> RuleResult: ...


def error(message: str, **substitutions: Any) -> RuleError:
    return RuleError(message, substitutions)


def as_errors(result: RuleResult) -> list[RuleError]:
    """Normalize a rule result into a list of errors."""
    if result is None:
        return []
    if isinstance(result, RuleError):
        return [result]
    return list(result)


def is_enumerable(value: Any) -> bool:
    """Iterable collections, excluding text and bytes."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray))


class _Substitutions(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _render_value(value: Any) -> str:
    if is_enumerable(value) and not isinstance(value, dict):
        return ", ".join(str(item) for item in value)
    return str(value)
