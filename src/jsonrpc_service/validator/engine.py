"""Rule engine: runs ordered rule lists per field and collects errors.

Usage:
    result = (
        Validator(params)
        .validate("x", [("type", "integer"), "required"])
        .validate("y", [("type", "integer"), "required", ("number", {"max": 100})])
        .unwrap()
    )
    if isinstance(result, Invalid):
        return error("invalid_params", result.to_dict())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .result import Invalid, Valid, ValidationResult
from .rules import MISSING, Required, RuleLike, get_rule, run_rule

logger = logging.getLogger(__name__)

# A rule reference: "required", ("type", "integer"), a rule object, a callable,
# or (rule object | callable, options).
RuleSpec = str | tuple[Any, ...] | RuleLike
Field = str | int


def _lookup(params: Any, field: Field) -> Any:
    if isinstance(params, Mapping):
        return params[field] if field in params else MISSING
    if isinstance(params, (list, tuple)) and isinstance(field, int):
        if -len(params) <= field < len(params):
            return params[field]
    return MISSING


class Validator:
    """Accumulating validation context for one params value."""

    def __init__(
        self,
        params: Any,
        *,
        rules: Mapping[str, RuleLike] | None = None,
    ) -> None:
        self.params = params
        self._extra_rules = dict(rules or {})
        self._errors: dict[str, list[str]] = {}

    @property
    def errors(self) -> dict[str, list[str]]:
        return {key: list(messages) for key, messages in self._errors.items()}

    def validate(self, field: Field, rules: Iterable[RuleSpec]) -> "Validator":
        """Run every rule for one field. Returns self for chaining."""
        resolved = [self._resolve(spec) for spec in rules]
        value = _lookup(self.params, field)

        is_required = any(isinstance(rule, Required) for rule, _ in resolved)
        if (value is None or value is MISSING) and not is_required:
            return self

        messages: list[str] = []
        for rule, options in resolved:
            # only the presence rule can see that the field is absent
            arg = value if isinstance(rule, Required) or value is not MISSING else None
            messages.extend(e.render() for e in run_rule(rule, arg, options))

        if messages:
            self._errors.setdefault(str(field), []).extend(messages)
        return self

    def unwrap(self) -> ValidationResult:
        if self._errors:
            logger.debug("Validation failed for fields: %s", ", ".join(self._errors))
            return Invalid(self._errors)
        return Valid(self.params)

    def _resolve(self, spec: RuleSpec) -> tuple[RuleLike, Any]:
        options: Any = None
        if isinstance(spec, tuple):
            if not spec or len(spec) > 2:
                raise ValueError(f"Rule must be (name, options), got {spec!r}")
            spec, options = spec[0], (spec[1] if len(spec) == 2 else None)

        if isinstance(spec, str):
            if spec in self._extra_rules:
                return self._extra_rules[spec], options
            return get_rule(spec), options
        if hasattr(spec, "check") or callable(spec):
            return spec, options
        raise ValueError(f"Not a validation rule: {spec!r}")


def validate(
    params: Any,
    schema: Mapping[Field, Iterable[RuleSpec]],
    *,
    rules: Mapping[str, RuleLike] | None = None,
) -> ValidationResult:
    """Validate params against a ``{field: [rules...]}`` mapping."""
    validator = Validator(params, rules=rules)
    for field, field_rules in schema.items():
        validator.validate(field, field_rules)
    return validator.unwrap()
