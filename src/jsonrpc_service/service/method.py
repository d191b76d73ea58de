"""Method contract.

Every service method is a Method. Subclasses override only the hooks they
need:

- handle_call(params, context): request path. Default: invalid_params.
- handle_cast(params, context): notification path. Default: handle_call.
- validate(params): Valid(params) or Invalid(errors). Default: the class
  ``rules`` if declared, otherwise params unchanged.
- handle_exception(request, exc, tb): a raised Exception. Default: server_error.
- handle_error(request, (kind, payload), tb): any other escape. Default:
  internal_error.

Usage:
    class DivideMethod(Method):
        rules = {
            "x": [("type", "integer"), "required"],
            "y": [("type", "integer"), "required"],
        }

        def handle_call(self, params, context):
            if params.y == 0:
                return error(12345, "divided by zero")
            return Ok(params.x // params.y)
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable, Mapping
from types import MappingProxyType, TracebackType
from typing import TYPE_CHECKING, Any, ClassVar

from jsonrpc_service.rpc.types import INTERNAL_ERROR, INVALID_PARAMS, SERVER_ERROR, RpcError
from jsonrpc_service.settings import Settings, settings as default_settings
from jsonrpc_service.validator import Invalid, RuleSpec, Valid, ValidationResult, validate

from .outcome import Error, Ok, abort, error
from .params import normalize_keys

if TYPE_CHECKING:
    from jsonrpc_service.rpc.request import Request

logger = logging.getLogger(__name__)

Signal = tuple[str, Any]


class Method:
    """Base class for service methods."""

    # field -> ordered rule list, checked by the default validate()
    rules: Mapping[str | int, list[RuleSpec]] = MappingProxyType({})

    # Optional record type built from the normalized params with **kwargs
    params_class: ClassVar[type | None] = None

    settings: Settings = default_settings

    error = staticmethod(error)
    abort = staticmethod(abort)

    def call(self, params: Any, context: Any = None) -> Any:
        """Validate params and run the request path."""
        return self._run(self.handle_call, params, context)

    def cast(self, params: Any, context: Any = None) -> Any:
        """Validate params and run the notification path."""
        return self._run(self.handle_cast, params, context)

    def handle_call(self, params: Any, context: Any) -> Any:
        return error(INVALID_PARAMS)

    def handle_cast(self, params: Any, context: Any) -> Any:
        return self.handle_call(params, context)

    def validate(self, params: Any) -> ValidationResult:
        if self.rules:
            return validate(params, self.rules)
        return Valid(params)

    def handle_exception(
        self,
        request: "Request",
        exc: BaseException,
        tb: TracebackType | None,
    ) -> Error:
        data: dict[str, Any] = {
            "ex": repr(exc),
            "message": "".join(traceback.format_exception_only(type(exc), exc)).strip(),
        }
        if self.settings.include_traceback:
            data["traceback"] = "".join(traceback.format_exception(type(exc), exc, tb))
        return error(SERVER_ERROR, data)

    def handle_error(
        self,
        request: "Request",
        signal: Signal,
        tb: TracebackType | None,
    ) -> Error:
        kind, payload = signal
        return error(INTERNAL_ERROR, {"kind": repr(kind), "payload": repr(payload)})

    def _run(self, func: Callable[[Any, Any], Any], params: Any, context: Any) -> Any:
        outcome = self.validate(params)
        if isinstance(outcome, Invalid):
            logger.debug("%r rejected params: %s", self, outcome.to_dict())
            return error(INVALID_PARAMS, outcome.to_dict())
        if not isinstance(outcome, Valid):
            return outcome

        prepared = normalize_keys(outcome.params)
        if self.params_class is not None:
            try:
                prepared = self._build_params(prepared)
            except TypeError as exc:
                return error(INVALID_PARAMS, str(exc))

        try:
            return func(prepared, context)
        except RpcError as exc:
            return Error.from_rpc_error(exc)

    def _build_params(self, params: Any) -> Any:
        assert self.params_class is not None
        if isinstance(params, Mapping):
            return self.params_class(**params)
        if isinstance(params, list):
            return self.params_class(*params)
        raise TypeError(f"cannot build {self.params_class.__name__} from {type(params).__name__}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class FunctionMethod(Method):
    """Adapts a plain ``fn(params, context)`` to the Method contract.

    A bare return value is wrapped in Ok; Ok, Error, Valid and Invalid are
    passed through.
    """

    def __init__(
        self,
        func: Callable[[Any, Any], Any],
        *,
        rules: Mapping[str | int, list[RuleSpec]] | None = None,
    ) -> None:
        self.func = func
        if rules:
            self.rules = MappingProxyType(dict(rules))

    def handle_call(self, params: Any, context: Any) -> Any:
        result = self.func(params, context)
        if isinstance(result, (Ok, Error, Valid, Invalid)):
            return result
        return Ok(result)

    def __repr__(self) -> str:
        return f"<FunctionMethod {getattr(self.func, '__qualname__', self.func)!r}>"
