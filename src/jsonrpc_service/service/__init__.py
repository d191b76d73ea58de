"""Service dispatch: method contract, outcomes and the routing table."""

from __future__ import annotations

from jsonrpc_service.service.method import FunctionMethod, Method
from jsonrpc_service.service.outcome import Error, Ok, Outcome, Throw, abort, error, throw
from jsonrpc_service.service.params import Params, normalize_keys
from jsonrpc_service.service.service import Service, ServiceBuilder, describe_signal

__all__ = [
    "Error",
    "FunctionMethod",
    "Method",
    "Ok",
    "Outcome",
    "Params",
    "Service",
    "ServiceBuilder",
    "Throw",
    "abort",
    "describe_signal",
    "error",
    "normalize_keys",
    "throw",
]
