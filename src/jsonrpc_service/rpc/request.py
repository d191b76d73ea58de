"""JSON-RPC 2.0 request value.

Only the thin slice of the message grammar the dispatcher needs: turning a
decoded body into a Request and checking its structural validity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .types import JSONRPC_VERSION

RequestId = str | int | None


class InvalidRequest(Exception):
    """A decoded body could not be read as a request.

    Carries whatever id could be recovered from the body, possibly None.
    """

    def __init__(self, request_id: RequestId, reason: str) -> None:
        super().__init__(reason)
        self.request_id = request_id
        self.reason = reason


def _is_valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (str, int))


@dataclass(frozen=True)
class Request:
    """A parsed JSON-RPC request."""

    method: str
    params: dict[str, Any] | list[Any] = field(default_factory=dict)
    id: RequestId = None
    jsonrpc: str | None = JSONRPC_VERSION

    @property
    def is_notification(self) -> bool:
        return self.id is None

    @classmethod
    def parse(cls, body: Any) -> "Request":
        """Build a Request from a decoded body.

        Raises:
            InvalidRequest: If the body is not an object, carries a malformed
                id, or has no usable method name.
        """
        if not isinstance(body, dict):
            raise InvalidRequest(None, "request must be an object")

        request_id = body.get("id")
        if not _is_valid_id(request_id):
            raise InvalidRequest(None, "id must be a string, an integer or null")

        method = body.get("method")
        if not isinstance(method, str) or not method:
            raise InvalidRequest(request_id, "method must be a non-empty string")

        params = body.get("params")
        if params is None:
            params = {}

        return cls(
            method=method,
            params=params,
            id=request_id,
            jsonrpc=body.get("jsonrpc"),
        )

    def is_valid(self) -> bool:
        """Structural check: supported version and a params container."""
        return self.jsonrpc == JSONRPC_VERSION and isinstance(self.params, (dict, list))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": self.params,
        }
        if self.id is not None:
            result["id"] = self.id
        return result
