"""Transport-independent JSON-RPC 2.0 services.

There is no transport layer here, only the tools to describe methods,
validate their params and turn decoded request bodies into responses.

    from jsonrpc_service import Method, Ok, ServiceBuilder, error

    class DivideMethod(Method):
        rules = {
            "x": [("type", "integer"), "required"],
            "y": [("type", "integer"), "required"],
        }

        def handle_call(self, params, context):
            if params.y == 0:
                return error(12345, "divided by zero")
            return Ok(params.x // params.y)

    service = ServiceBuilder().method("divide", DivideMethod).build()
    service.handle({"jsonrpc": "2.0", "id": 2, "method": "divide", "params": {"x": 10, "y": 0}})
    # {"jsonrpc": "2.0", "id": 2, "error": {"code": 12345, "message": "divided by zero"}}
"""

from __future__ import annotations

from jsonrpc_service.errors import ConfigurationError, DuplicateMethodError, ServiceError
from jsonrpc_service.rpc import Request, RpcError
from jsonrpc_service.service import (
    Error,
    FunctionMethod,
    Method,
    Ok,
    Params,
    Service,
    ServiceBuilder,
    Throw,
    abort,
    error,
    throw,
)
from jsonrpc_service.settings import Settings, configure_logging
from jsonrpc_service.validator import Invalid, Valid, Validator, register_rule, validate

__version__ = "0.1.1"

__all__ = [
    "ConfigurationError",
    "DuplicateMethodError",
    "Error",
    "FunctionMethod",
    "Invalid",
    "Method",
    "Ok",
    "Params",
    "Request",
    "RpcError",
    "Service",
    "ServiceBuilder",
    "ServiceError",
    "Settings",
    "Throw",
    "Valid",
    "Validator",
    "abort",
    "configure_logging",
    "error",
    "register_rule",
    "throw",
    "validate",
]
