"""Rule-based parameter validation.

A method declares, per field, an ordered list of named rules. All rules of a
field run and their messages are collected; optional fields that are absent
or None skip their rules entirely.
"""

from __future__ import annotations

from jsonrpc_service.validator.engine import RuleSpec, Validator, validate
from jsonrpc_service.validator.result import Invalid, Valid, ValidationResult
from jsonrpc_service.validator.rules import (
    RuleError,
    check,
    error,
    register_rule,
    registered_rules,
    unregister_rule,
)

__all__ = [
    "Invalid",
    "RuleError",
    "RuleSpec",
    "Valid",
    "ValidationResult",
    "Validator",
    "check",
    "error",
    "register_rule",
    "registered_rules",
    "unregister_rule",
    "validate",
]
