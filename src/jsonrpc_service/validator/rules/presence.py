"""Presence rules: required and not_empty."""

from __future__ import annotations

from typing import Any

from .base import MISSING, RuleResult, error


class Required:
    """Fails when the field is absent. A present None passes."""

    name = "required"

    def check(self, value: Any, options: Any = None) -> RuleResult:
        if value is MISSING:
            return error("is required")
        return None


class NotEmpty:
    """Fails on None, empty strings, empty arrays and empty objects."""

    name = "not_empty"

    def check(self, value: Any, options: Any = None) -> RuleResult:
        if value is None or value is MISSING:
            return error("can't be empty")
        if isinstance(value, (str, list, tuple, dict)) and len(value) == 0:
            return error("can't be empty")
        return None
