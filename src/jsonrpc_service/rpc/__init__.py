"""RPC module for jsonrpc_service.

JSON-RPC 2.0 types, request parsing and telemetry used by the dispatcher.
"""

from __future__ import annotations

from jsonrpc_service.rpc.request import InvalidRequest, Request
from jsonrpc_service.rpc.types import (
    JSON,
    RpcError,
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    SERVER_ERROR,
    ERROR_CODES,
    default_message,
    jsonrpc_error,
    jsonrpc_result,
    resolve_code,
)

__all__ = [
    # Types
    "JSON",
    "RpcError",
    "Request",
    "InvalidRequest",
    # Error codes
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
    "ERROR_CODES",
    # Utilities
    "default_message",
    "jsonrpc_error",
    "jsonrpc_result",
    "resolve_code",
]
