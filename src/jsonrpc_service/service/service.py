"""Service definition and request dispatch.

A service is a fixed table of method name -> Method, built once:

    builder = ServiceBuilder()
    builder.method("add", AddMethod)
    builder.method("divide", DivideMethod)

    @builder.method("echo", rules={"text": [("type", "string"), "required"]})
    def echo(params, context):
        return params.text

    service = builder.build()

``Service.handle(body, context)`` is the single entry point. ``body`` is a
decoded request object or a batch list; the result is a response dict, a
list of response dicts, or None when nothing is to be sent back
(notifications).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType, TracebackType
from typing import Any

from jsonrpc_service.errors import ConfigurationError, DuplicateMethodError
from jsonrpc_service.rpc import telemetry
from jsonrpc_service.rpc.request import InvalidRequest, Request
from jsonrpc_service.rpc.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSON,
    METHOD_NOT_FOUND,
    RpcError,
    jsonrpc_error,
    jsonrpc_result,
)
from jsonrpc_service.settings import Settings, settings as default_settings
from jsonrpc_service.validator import Invalid, RuleSpec

from .method import FunctionMethod, Method
from .outcome import Error, Ok, Throw, error

logger = logging.getLogger(__name__)

Response = JSON | list[JSON] | None


def _as_method(
    handler: Any,
    rules: Mapping[str | int, list[RuleSpec]] | None,
) -> Method:
    if isinstance(handler, type) and issubclass(handler, Method):
        handler = handler()
    if isinstance(handler, Method):
        if rules:
            raise ConfigurationError("rules= only applies to plain function handlers")
        return handler
    if callable(handler):
        return FunctionMethod(handler, rules=rules)
    raise ConfigurationError(f"Not a method handler: {handler!r}", value=handler)


def describe_signal(signal: BaseException) -> tuple[str, Any]:
    """Split a non-Exception escape into (kind, payload)."""
    if isinstance(signal, Throw):
        return "throw", signal.payload
    if isinstance(signal, SystemExit):
        return "exit", signal.code
    return type(signal).__name__, signal.args


class ServiceBuilder:
    """Collects method registrations in order, then builds a Service."""

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self._registrations: list[tuple[str, Method]] = []

    def method(
        self,
        name: str,
        handler: Any = None,
        *,
        rules: Mapping[str | int, list[RuleSpec]] | None = None,
    ) -> Any:
        """Register a handler under ``name``.

        ``handler`` is a Method instance, a Method subclass (instantiated with
        no arguments) or a function ``fn(params, context)``. Without a
        handler this returns a decorator for functions.

        Raises:
            DuplicateMethodError: If the name is taken and the duplicate
                policy is "reject".
            ConfigurationError: If the name or handler is unusable.
        """
        if handler is None:

            def decorator(func: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
                self.method(name, func, rules=rules)
                return func

            return decorator

        if not isinstance(name, str) or not name:
            raise ConfigurationError("Method name must be a non-empty string", value=name)
        if self.settings.duplicate_methods == "reject" and name in self.method_names():
            raise DuplicateMethodError(name)

        self._registrations.append((name, _as_method(handler, rules)))
        return self

    def method_names(self) -> list[str]:
        return [name for name, _ in self._registrations]

    def build(self) -> "Service":
        """Freeze the registrations into a Service.

        Methods still on the package default settings adopt the builder's;
        a class or instance that sets its own ``settings`` keeps them.
        """
        table: dict[str, Method] = {}
        for name, method in self._registrations:
            if name in table:
                logger.warning("Method %s registered again, keeping %r", name, method)
            if method.settings is default_settings:
                method.settings = self.settings
            table[name] = method
        return Service(table, settings=self.settings)


class Service:
    """Immutable routing table plus the dispatch pipeline."""

    def __init__(self, methods: Mapping[str, Method], *, settings: Settings | None = None) -> None:
        self._methods: Mapping[str, Method] = MappingProxyType(dict(methods))
        self.settings = settings or default_settings

    @property
    def methods(self) -> Mapping[str, Method]:
        return self._methods

    def method_names(self) -> list[str]:
        return sorted(self._methods)

    def lookup(self, name: str) -> Method | None:
        return self._methods.get(name)

    def handle(self, body: Any, context: Any = None) -> Response:
        """Handle a decoded request object or a batch of them."""
        meta = {"req": body, "ctx": context}

        def run() -> tuple[Response, dict[str, Any]]:
            if isinstance(body, list):
                res: Response = self._handle_batch(body, context)
            else:
                res = self._handle_one(body, context)
            return res, {**meta, "res": res}

        return telemetry.span("service", meta, run)

    def _handle_batch(self, bodies: list[Any], context: Any) -> list[JSON]:
        workers = self.settings.batch_workers
        if workers > 1 and len(bodies) > 1:
            with ThreadPoolExecutor(max_workers=min(workers, len(bodies))) as pool:
                results = list(pool.map(lambda one: self._handle_one(one, context), bodies))
        else:
            results = [self._handle_one(one, context) for one in bodies]
        return [res for res in results if res is not None]

    def _handle_one(self, body: Any, context: Any) -> JSON | None:
        try:
            request = Request.parse(body)
        except InvalidRequest as exc:
            logger.warning("Invalid request: %s", exc.reason)
            return self._respond(exc.request_id, error(INVALID_REQUEST))

        if not request.is_valid():
            logger.warning("Invalid request for method %s (jsonrpc=%r)", request.method, request.jsonrpc)
            return self._respond(request.id, error(INVALID_REQUEST))

        handler = self._methods.get(request.method)
        if handler is None:
            logger.debug("Method not found: %s", request.method)
            return self._respond(
                request.id,
                error(
                    METHOD_NOT_FOUND,
                    f"Method not found: {request.method}",
                    {"method": request.method},
                ),
            )

        outcome = self._exec_handler(handler, request, context)
        return self._respond(request.id, outcome)

    def _exec_handler(self, handler: Method, request: Request, context: Any) -> Any:
        start_time = time.monotonic()
        meta = {"req": request, "ctx": context}
        try:
            if request.is_notification:
                return handler.cast(request.params, context)
            return handler.call(request.params, context)
        except RpcError as exc:
            return Error.from_rpc_error(exc)
        except Exception as exc:
            logger.error(
                "Exception in method %s: %s",
                request.method,
                exc,
                exc_info=True,
            )
            tb = exc.__traceback__
            telemetry.exception("service", start_time, "error", exc, tb, meta, {"count": 1})
            return self._recover(handler.handle_exception, Method.handle_exception, handler, request, exc, tb)
        except KeyboardInterrupt:
            raise
        except BaseException as signal:
            kind, payload = describe_signal(signal)
            logger.warning("Method %s exited with %s: %r", request.method, kind, payload)
            tb = signal.__traceback__
            telemetry.exception("service", start_time, kind, payload, tb, meta, {"count": 1})
            return self._recover(handler.handle_error, Method.handle_error, handler, request, (kind, payload), tb)

    def _recover(
        self,
        hook: Callable[..., Any],
        fallback: Callable[..., Any],
        handler: Method,
        request: Request,
        failure: Any,
        tb: TracebackType | None,
    ) -> Any:
        try:
            return hook(request, failure, tb)
        except KeyboardInterrupt:
            raise
        except BaseException:
            logger.exception("Error hook of method %s failed, using default", request.method)
            return fallback(handler, request, failure, tb)

    def _respond(self, request_id: Any, outcome: Any) -> JSON | None:
        if request_id is None:
            return None

        if isinstance(outcome, Ok):
            return jsonrpc_result(request_id, outcome.value)
        if isinstance(outcome, Invalid):
            return jsonrpc_error(request_id, RpcError(INVALID_PARAMS, data=outcome.to_dict()))
        if isinstance(outcome, Error):
            try:
                return jsonrpc_error(request_id, outcome.to_rpc_error())
            except (TypeError, ValueError) as exc:
                logger.warning("Malformed error outcome %r: %s", outcome, exc)
        else:
            logger.warning("Unrecognized method outcome: %r", outcome)
        return jsonrpc_error(request_id, RpcError(INTERNAL_ERROR, repr(outcome)))
