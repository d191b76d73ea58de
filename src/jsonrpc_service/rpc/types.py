"""RPC types and utilities.

Core types, error codes, and JSON-RPC 2.0 envelope helpers used by the
dispatcher and by method handlers.
"""

from __future__ import annotations

from typing import Any

# Type alias for JSON-serializable dict
JSON = dict[str, Any]

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Implementation-defined server error (reserved range -32000..-32099)
SERVER_ERROR = -32000

# Symbolic names accepted wherever an error code is expected
ERROR_CODES: dict[str, int] = {
    "parse_error": PARSE_ERROR,
    "invalid_request": INVALID_REQUEST,
    "method_not_found": METHOD_NOT_FOUND,
    "invalid_params": INVALID_PARAMS,
    "internal_error": INTERNAL_ERROR,
    "server_error": SERVER_ERROR,
}

ERROR_MESSAGES: dict[int, str] = {
    PARSE_ERROR: "Parse error",
    INVALID_REQUEST: "Invalid Request",
    METHOD_NOT_FOUND: "Method not found",
    INVALID_PARAMS: "Invalid params",
    INTERNAL_ERROR: "Internal error",
    SERVER_ERROR: "Server error",
}


def resolve_code(code: int | str) -> int:
    """Turn a symbolic error name into its numeric JSON-RPC code.

    Raises:
        ValueError: If the name is unknown or the code is not an integer.
    """
    if isinstance(code, bool):
        raise ValueError(f"Invalid error code: {code!r}")
    if isinstance(code, int):
        return code
    if isinstance(code, str) and code in ERROR_CODES:
        return ERROR_CODES[code]
    raise ValueError(f"Unknown error code: {code!r}")


def is_reserved_code(code: int) -> bool:
    """Check whether a code falls in the range reserved by JSON-RPC 2.0."""
    return -32768 <= code <= -32000


def default_message(code: int) -> str:
    """Default human-readable message for a numeric code."""
    if code in ERROR_MESSAGES:
        return ERROR_MESSAGES[code]
    if is_reserved_code(code) and code >= -32099:
        return ERROR_MESSAGES[SERVER_ERROR]
    return "Application error"


class RpcError(Exception):
    """JSON-RPC error with code, message, and optional data.

    Raising it from a method body returns that error to the caller and skips
    the rest of the body.
    """

    def __init__(
        self,
        code: int | str,
        message: str | None = None,
        data: Any = None,
    ) -> None:
        numeric = resolve_code(code)
        message = message if message is not None else default_message(numeric)
        super().__init__(message)
        self.code = numeric
        self.message = message
        self.data = data

    def to_dict(self) -> JSON:
        """Convert to JSON-RPC error object."""
        result: JSON = {"code": self.code, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result


def jsonrpc_error(request_id: str | int | None, error: RpcError) -> JSON:
    """Build a JSON-RPC 2.0 error response."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": error.to_dict(),
    }


def jsonrpc_result(request_id: str | int | None, result: Any) -> JSON:
    """Build a JSON-RPC 2.0 success response."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "result": result,
    }
