"""Service definition errors.

Raised while a service is being put together, never while a request is being
handled (request failures always become JSON-RPC error envelopes):

- ServiceError: Base exception for all library errors
- DuplicateMethodError: A method name was registered twice
- ConfigurationError: Bad settings or an unusable handler reference

Usage:
    from jsonrpc_service.errors import DuplicateMethodError

    try:
        builder.method("add", AddMethod)
    except DuplicateMethodError as e:
        logger.error("Cannot register %s", e.context["method"])
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base exception for jsonrpc_service errors.

    Attributes:
        message: Human-readable error description
        context: Additional context for debugging
    """

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured dictionary."""
        return {
            "type": type(self).__name__.lower().replace("error", ""),
            "message": self.message,
            **{k: v for k, v in self.context.items() if v is not None},
        }


class DuplicateMethodError(ServiceError):
    """A method name was registered more than once."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Method already registered: {method}", context={"method": method})
        self.method = method


class ConfigurationError(ServiceError):
    """Invalid settings value or handler reference.

    Example:
        raise ConfigurationError("Unknown duplicate policy", setting="duplicate_methods")
    """

    def __init__(self, message: str, *, setting: str | None = None, value: Any = None) -> None:
        context: dict[str, Any] = {}
        if setting:
            context["setting"] = setting
        if value is not None:
            context["value"] = repr(value)
        super().__init__(message, context=context)
        self.setting = setting
