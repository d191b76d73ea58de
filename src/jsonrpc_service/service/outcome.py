"""Handler outcomes and error primitives.

A method body returns ``Ok(value)`` or ``error(...)``. To stop early it can
``abort(...)`` (raises RpcError, reported exactly like a returned error) or
``throw(payload)`` for a non-local exit that the method's handle_error hook
turns into an internal error.

Error descriptors come in three shapes:

    error(code)
    error(code, message_or_data)   # a str is the message, anything else is data
    error(code, message, data)

``code`` is an int or a symbolic name such as "invalid_params".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NoReturn

from jsonrpc_service.rpc.types import RpcError, default_message, resolve_code


@dataclass(frozen=True)
class Ok:
    """Successful call result."""

    value: Any = None


@dataclass(frozen=True)
class Error:
    """Error descriptor returned by a method."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_rpc_error(cls, exc: RpcError) -> "Error":
        return cls(code=exc.code, message=exc.message, data=exc.data)

    def to_rpc_error(self) -> RpcError:
        return RpcError(self.code, self.message, self.data)


def error(code: int | str, *details: Any) -> Error:
    """Build an error descriptor.

    Raises:
        TypeError: If more than two details are given.
        ValueError: If the code is not an int or a known symbolic name.
    """
    numeric = resolve_code(code)
    if not details:
        return Error(numeric, default_message(numeric))
    if len(details) == 1:
        (message_or_data,) = details
        if isinstance(message_or_data, str):
            return Error(numeric, message_or_data)
        return Error(numeric, default_message(numeric), message_or_data)
    if len(details) == 2:
        message, data = details
        return Error(numeric, str(message), data)
    raise TypeError(f"error() takes at most 3 arguments ({len(details) + 1} given)")


def abort(code: int | str, *details: Any) -> NoReturn:
    """Return an error from anywhere inside a method body."""
    descriptor = error(code, *details)
    raise descriptor.to_rpc_error()


class Throw(BaseException):
    """Non-local exit carrying an arbitrary payload.

    Lives outside the Exception tree so ordinary ``except Exception`` blocks
    in handler code do not intercept it.
    """

    def __init__(self, payload: Any) -> None:
        super().__init__(payload)
        self.payload = payload


def throw(payload: Any) -> NoReturn:
    raise Throw(payload)


Outcome = Ok | Error
