"""Tests for the Method contract and handler outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from jsonrpc_service import (
    Error,
    FunctionMethod,
    Method,
    Ok,
    Params,
    Request,
    Settings,
    Valid,
    abort,
    error,
)
from jsonrpc_service.rpc import INTERNAL_ERROR, INVALID_PARAMS, SERVER_ERROR


class TestErrorDescriptors:
    def test_code_only(self) -> None:
        assert error("invalid_params") == Error(INVALID_PARAMS, "Invalid params")

    def test_code_and_message(self) -> None:
        assert error(12345, "divided by zero") == Error(12345, "divided by zero")

    def test_code_and_data(self) -> None:
        assert error(12345, {"a": 1}) == Error(12345, "Application error", {"a": 1})
        assert error("internal_error", ["x"]) == Error(INTERNAL_ERROR, "Internal error", ["x"])

    def test_code_message_and_data(self) -> None:
        assert error("server_error", "busy", {"retry": 5}) == Error(SERVER_ERROR, "busy", {"retry": 5})

    def test_unknown_symbolic_code(self) -> None:
        with pytest.raises(ValueError):
            error("bogus")

    def test_too_many_details(self) -> None:
        with pytest.raises(TypeError):
            error(1, "a", "b", "c")


class TestDefaultHooks:
    def test_call_is_unsupported_until_overridden(self) -> None:
        assert Method().call({"a": 1}) == Error(INVALID_PARAMS, "Invalid params")

    def test_cast_delegates_to_call(self) -> None:
        class Echo(Method):
            def handle_call(self, params: Any, context: Any) -> Any:
                return Ok((params, context))

        assert Echo().cast({"a": 1}, "ctx") == Ok(({"a": 1}, "ctx"))

    def test_cast_override(self) -> None:
        class Split(Method):
            def handle_call(self, params: Any, context: Any) -> Any:
                return Ok("call")

            def handle_cast(self, params: Any, context: Any) -> Any:
                return Ok("cast")

        assert Split().call({}) == Ok("call")
        assert Split().cast({}) == Ok("cast")

    def test_validate_is_identity(self) -> None:
        params = {"a": "1"}
        assert Method().validate(params) == Valid(params)

    def test_handle_exception(self) -> None:
        req = Request(method="m", id=1)
        result = Method().handle_exception(req, ValueError("bad"), None)
        assert result.code == SERVER_ERROR
        assert result.message == "Server error"
        assert result.data == {"ex": "ValueError('bad')", "message": "ValueError: bad"}

    def test_handle_exception_with_traceback(self) -> None:
        class Verbose(Method):
            settings = Settings(include_traceback=True)

        try:
            raise ValueError("bad")
        except ValueError as exc:
            result = Verbose().handle_exception(Request(method="m", id=1), exc, exc.__traceback__)

        assert "Traceback" in result.data["traceback"]
        assert "ValueError: bad" in result.data["traceback"]

    def test_handle_error(self) -> None:
        result = Method().handle_error(Request(method="m", id=1), ("throw", {"k": 1}), None)
        assert result == Error(
            INTERNAL_ERROR,
            "Internal error",
            {"kind": "'throw'", "payload": "{'k': 1}"},
        )


class TestValidationAndNormalization:
    class Divide(Method):
        rules = {
            "x": [("type", "integer"), "required"],
            "y": [("type", "integer"), "required"],
        }

        def handle_call(self, params: Any, context: Any) -> Any:
            if params.y == 0:
                return self.error(12345, "divided by zero")
            return Ok(params.x // params.y)

    def test_valid_params_reach_handler(self) -> None:
        assert self.Divide().call({"x": 13, "y": 5}) == Ok(2)

    def test_invalid_params_never_reach_handler(self) -> None:
        assert self.Divide().call({"x": 13, "y": "5"}) == Error(
            INVALID_PARAMS, "Invalid params", {"y": ["is not an integer"]}
        )

    def test_handler_error(self) -> None:
        assert self.Divide().call({"x": 13, "y": 0}) == Error(12345, "divided by zero")

    def test_keys_normalized_recursively(self) -> None:
        seen: list[Any] = []

        class Capture(Method):
            def handle_call(self, params: Any, context: Any) -> Any:
                seen.append(params)
                return Ok(None)

        Capture().call({"a": {"b": [{"c": 1}, 2]}, "d": "e"})
        params = seen[0]
        assert isinstance(params, Params)
        assert params.a.b[0].c == 1
        assert params.a.b[1] == 2
        assert params["d"] == "e"
        assert isinstance(params.a.b[0], Params)

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            Params({"a": 1}).b

    def test_validate_sees_raw_params(self) -> None:
        seen: list[type] = []

        class Inspect(Method):
            def validate(self, params: Any) -> Any:
                seen.append(type(params))
                return Valid({"changed": True})

            def handle_call(self, params: Any, context: Any) -> Any:
                return Ok(params.changed)

        assert Inspect().call({"a": 1}) == Ok(True)
        assert seen == [dict]

    def test_validate_may_return_anything(self) -> None:
        class Odd(Method):
            def validate(self, params: Any) -> Any:
                return "nope"

        assert Odd().call({}) == "nope"


class TestAbort:
    def test_abort_returns_error(self) -> None:
        class Guarded(Method):
            def handle_call(self, params: Any, context: Any) -> Any:
                if not params:
                    abort("invalid_params", "params required")
                return Ok("unreachable")

        assert Guarded().call({}) == Error(INVALID_PARAMS, "params required")

    def test_abort_from_helper_function(self) -> None:
        def check_positive(value: int) -> None:
            if value <= 0:
                abort(40001, "must be positive", {"value": value})

        class Positive(Method):
            def handle_call(self, params: Any, context: Any) -> Any:
                check_positive(params.n)
                return Ok(params.n)

        assert Positive().call({"n": -1}) == Error(40001, "must be positive", {"value": -1})
        assert Positive().call({"n": 3}) == Ok(3)

    def test_method_abort_helper(self) -> None:
        class Stop(Method):
            def handle_call(self, params: Any, context: Any) -> Any:
                self.abort("server_error")

        assert Stop().call({}) == Error(SERVER_ERROR, "Server error")


class TestFunctionMethod:
    def test_bare_value_is_wrapped(self) -> None:
        method = FunctionMethod(lambda params, context: params.a * 2)
        assert method.call({"a": 2}) == Ok(4)

    def test_outcomes_pass_through(self) -> None:
        method = FunctionMethod(lambda params, context: error(1, "no"))
        assert method.call({}) == Error(1, "no")

    def test_rules(self) -> None:
        method = FunctionMethod(
            lambda params, context: params.name,
            rules={"name": [("type", "string"), "required"]},
        )
        assert method.call({"name": "x"}) == Ok("x")
        assert method.call({}) == Error(
            INVALID_PARAMS, "Invalid params", {"name": ["is not a string", "is required"]}
        )

    def test_rules_are_per_instance(self) -> None:
        FunctionMethod(lambda p, c: p, rules={"a": ["required"]})
        assert FunctionMethod(lambda p, c: p).rules == {}

    def test_default_rules_are_read_only(self) -> None:
        class Plain(Method):
            pass

        with pytest.raises(TypeError):
            Plain.rules["x"] = ["required"]  # type: ignore[index]
        with pytest.raises(TypeError):
            FunctionMethod(lambda p, c: p, rules={"a": ["required"]}).rules["b"] = []  # type: ignore[index]
        assert Method.rules == {}
        assert Method().call({}) == Error(INVALID_PARAMS, "Invalid params")


@dataclass
class Point:
    x: int
    y: int


class TestParamsClass:
    class Norm(Method):
        params_class = Point

        def handle_call(self, params: Any, context: Any) -> Any:
            assert isinstance(params, Point)
            return Ok(abs(params.x) + abs(params.y))

    def test_named_params(self) -> None:
        assert self.Norm().call({"x": 3, "y": -4}) == Ok(7)

    def test_positional_params(self) -> None:
        assert self.Norm().call([1, 2]) == Ok(3)

    def test_unexpected_field_is_invalid_params(self) -> None:
        result = self.Norm().call({"x": 1, "y": 2, "z": 3})
        assert isinstance(result, Error)
        assert result.code == INVALID_PARAMS
