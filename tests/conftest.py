from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from jsonrpc_service import Method, Ok, Service, ServiceBuilder, Settings, abort, error, throw
from jsonrpc_service.rpc import telemetry


class AddMethod(Method):
    def handle_call(self, params: Any, context: Any) -> Any:
        if isinstance(params, list):
            return Ok(sum(params))
        return Ok(params.x + params.y)


class SubtractMethod(Method):
    rules = {
        0: [("type", "number"), "required"],
        1: [("type", "number"), "required"],
    }

    def handle_call(self, params: Any, context: Any) -> Any:
        return Ok(params[0] - params[1])


class DivideMethod(Method):
    rules = {
        "x": [("type", "integer"), "required"],
        "y": [("type", "integer"), "required"],
    }

    def handle_call(self, params: Any, context: Any) -> Any:
        if params.y == 0:
            return error(12345, "divided by zero")
        return Ok(params.x // params.y)


class SqrtMethod(Method):
    rules = {"x": [("type", "number"), "required"]}

    def handle_call(self, params: Any, context: Any) -> Any:
        if params.x < 0:
            abort("invalid_params", "x must not be negative", {"x": params.x})
        return Ok(params.x**0.5)


class ExplodingMethod(Method):
    def handle_call(self, params: Any, context: Any) -> Any:
        raise RuntimeError("boom")


class ThrowingMethod(Method):
    def handle_call(self, params: Any, context: Any) -> Any:
        throw({"reason": "stop"})


class ExitingMethod(Method):
    def handle_call(self, params: Any, context: Any) -> Any:
        raise SystemExit(3)


class RecordingMethod(Method):
    """Appends every invocation to the list passed as context."""

    def handle_call(self, params: Any, context: Any) -> Any:
        context.append(("call", params))
        return Ok("called")

    def handle_cast(self, params: Any, context: Any) -> Any:
        context.append(("cast", params))
        return error("internal_error", "notifications still fail quietly")


class RawResultMethod(Method):
    def handle_call(self, params: Any, context: Any) -> Any:
        return 42


class UnsupportedMethod(Method):
    pass


@pytest.fixture
def settings() -> Settings:
    return Settings(duplicate_methods="reject", include_traceback=False, batch_workers=1)


@pytest.fixture
def calculator(settings: Settings) -> Service:
    builder = ServiceBuilder(settings=settings)
    builder.method("add", AddMethod)
    builder.method("subtract", SubtractMethod)
    builder.method("divide", DivideMethod)
    builder.method("sqrt", SqrtMethod)
    builder.method("explode", ExplodingMethod)
    builder.method("throw", ThrowingMethod)
    builder.method("exit", ExitingMethod)
    builder.method("record", RecordingMethod)
    builder.method("raw", RawResultMethod)
    builder.method("unsupported", UnsupportedMethod)
    return builder.build()


@pytest.fixture
def events() -> Iterator[list[tuple[tuple[str, ...], dict[str, Any], dict[str, Any]]]]:
    """Record every service telemetry event emitted during the test."""
    recorded: list[tuple[tuple[str, ...], dict[str, Any], dict[str, Any]]] = []

    def listener(event: Any, measurements: Any, metadata: Any, config: Any) -> None:
        recorded.append((event, measurements, metadata))

    names = [
        ("jsonrpc2", "service", "start"),
        ("jsonrpc2", "service", "stop"),
        ("jsonrpc2", "service", "exception"),
    ]
    telemetry.attach("test-recorder", names, listener)
    try:
        yield recorded
    finally:
        telemetry.detach("test-recorder")

