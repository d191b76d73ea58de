from __future__ import annotations

import re
from typing import Any

from .base import RuleResult, error


class Format:
    """Regular expression search against a string value."""

    name = "format"

    def check(self, value: Any, options: Any) -> RuleResult:
        pattern = options.get("with") if isinstance(options, dict) else options
        if not isinstance(pattern, (str, re.Pattern)):
            raise ValueError(f"Format pattern must be a string or compiled regex, got {pattern!r}")

        if isinstance(value, str) and re.search(pattern, value):
            return None
        return error("has invalid format")
