"""Tests for Parameter value resolution, validation and parsing."""

from __future__ import annotations

import math
from typing import Any

import pytest

from mongo_querystring import Parameter, ValueType
from mongo_querystring.exceptions import UnknownValueTypeError
from mongo_querystring.result import ParameterError, ValidationOutcome


class TestConstructorOptions:
    def test_keeps_value_over_default(self, make_param) -> None:
        assert make_param("foo", {"default_value": "bar"}).value == "foo"

    def test_default_for_missing_value(self, make_param) -> None:
        assert make_param(None, {"default_value": "bar"}).value == "bar"

    def test_default_for_empty_string(self, make_param) -> None:
        assert make_param("", {"default_value": "bar"}).value == "bar"

    def test_default_for_nan(self, make_param) -> None:
        assert make_param(math.nan, {"default_value": 3}).value == 3

    def test_no_default_configured(self, make_param) -> None:
        assert make_param(None, {}).value is None

    def test_trim(self, make_param) -> None:
        assert make_param(" foo ", {"trim": True}).value == "foo"

    def test_no_trim(self, make_param) -> None:
        assert make_param(" foo ", {"trim": False}).value == " foo "


class TestMultipleValues:
    def test_comma_splits_into_list(self, make_param) -> None:
        assert make_param("foo,bar", {"default_value": "bar"}).value == ["foo", "bar"]

    def test_empty_element_gets_default(self, make_param) -> None:
        assert make_param("foo,", {"default_value": "bar"}).value == ["foo", "bar"]

    def test_trim_each_element(self, make_param) -> None:
        assert make_param(" foo , bar ", {"trim": True}).value == ["foo", "bar"]

    def test_no_trim_each_element(self, make_param) -> None:
        assert make_param(" foo , bar ", {"trim": False}).value == [" foo ", " bar "]

    def test_list_input(self, make_param) -> None:
        assert make_param(["1", "b"]).value == [1, "b"]

    def test_elements_are_not_split_again(self, make_param) -> None:
        assert make_param(["a,b", "c"]).value == ["a,b", "c"]

    def test_raw_keeps_split_input(self, make_param) -> None:
        param = make_param("1,>2")
        assert param.raw == ["1", ">2"]
        assert param.value == [1, ">2"]

    def test_custom_separator(self) -> None:
        param = Parameter("test", "a|b", separator="|")
        assert param.value == ["a", "b"]


class TestTyping:
    def test_inferred_number(self, make_param) -> None:
        value = make_param("10").value
        assert value == 10
        assert isinstance(value, int)

    def test_inferred_boolean(self, make_param) -> None:
        assert make_param("true").value is True
        assert make_param("false").value is False

    def test_explicit_type_wins(self, make_param) -> None:
        assert make_param("10", {"type": ValueType.STRING}).value == "10"
        assert make_param("10", {"type": "string"}).value == "10"

    def test_explicit_number_falls_back_to_default(self, make_param) -> None:
        assert make_param("abc", {"type": int, "default_value": 30}).value == 30

    def test_unknown_type_raises(self, make_param) -> None:
        with pytest.raises(UnknownValueTypeError):
            make_param("x", {"type": "uuid"})

    def test_value_setter_resolves(self, make_param) -> None:
        param = make_param("a")
        param.value = "1,2"
        assert param.value == [1, 2]
        assert param.raw == ["1", "2"]

    def test_coerce_uses_inferred_type(self, make_param) -> None:
        param = make_param("bar")
        assert param.coerce("5") == 5
        assert param.coerce("false") is False

    def test_operator_prefix_is_not_part_of_the_value(self, make_param) -> None:
        param = make_param(">=18,!2", {"type": "number", "operators": (">", "!")})
        assert param.value == [18, 2]
        assert param.raw == [">=18", "!2"]
        assert param.validate() is True

    def test_prefix_kept_without_operators_option(self, make_param) -> None:
        assert make_param(">=18").value == ">=18"


class TestValidate:
    def test_required_with_error(self, make_param) -> None:
        assert make_param(None, {"required": True}).validate() is False

    def test_required_with_no_error(self, make_param) -> None:
        assert make_param("foo", {"required": True}).validate() is True

    def test_required_empty_string(self, make_param) -> None:
        assert make_param("", {"required": True}).validate() is False

    def test_not_required(self, make_param) -> None:
        assert make_param(None, {"required": False}).validate() is True

    def test_null_min_value_with_no_error(self, make_param) -> None:
        assert make_param(None, {"min": 10}).validate() is True

    def test_min_value_with_error(self, make_param) -> None:
        assert make_param(1, {"min": 10}).validate() is False

    def test_min_value_with_no_error(self, make_param) -> None:
        assert make_param(11, {"min": 10}).validate() is True

    def test_max_value(self, make_param) -> None:
        assert make_param(11, {"max": 10}).validate() is False
        assert make_param(10, {"max": 10}).validate() is True

    def test_non_numeric_value_fails_bounds(self, make_param) -> None:
        assert make_param("abc", {"min": 1}).validate() is False

    def test_error_shape(self, make_param) -> None:
        error = make_param(500, {"max": 100}).error()
        assert error == ParameterError(
            name="max",
            param="test",
            value=500,
            bound=100,
            message="test must be lower than or equal to 100",
        )
        assert error.to_dict() == {
            "name": "max",
            "param": "test",
            "value": 500,
            "max": 100,
            "valid": False,
            "message": "test must be lower than or equal to 100",
        }

    def test_first_failing_option_wins(self, make_param) -> None:
        error = make_param(None, {"min": 1, "required": True}).error()
        assert error is not None
        assert error.name == "required"

    def test_callback_receives_error(self, make_param) -> None:
        seen: list[Any] = []
        make_param(None, {"required": True}).validate(seen.append)
        assert seen[0].message == "test is required"

    def test_callback_receives_none_when_valid(self, make_param) -> None:
        seen: list[Any] = []
        make_param("x", {"required": True}).validate(seen.append)
        assert seen == [None]

    def test_sequence_stops_at_first_failure(self, make_param) -> None:
        error = make_param("5,50,500", {"max": 10}).error()
        assert error is not None
        assert error.value == 50

    def test_explicit_value_argument(self, make_param) -> None:
        param = make_param(5, {"max": 10})
        assert param.validate(None, 20) is False


class TestHandlers:
    def test_custom_validator_with_mapping_result(self, make_param) -> None:
        param = make_param("abc", {"even": True})
        param.validator(
            "even",
            lambda enabled, value, p: {
                "valid": not enabled or len(value) % 2 == 0,
                "message": f"{p.name} must have an even length",
            },
        )
        error = param.error()
        assert error is not None
        assert error.name == "even"
        assert error.message == "test must have an even length"

    def test_custom_validator_with_outcome(self, make_param) -> None:
        param = make_param("ab", {"even": True})
        param.validator(
            "even", lambda enabled, value, p: ValidationOutcome(len(value) % 2 == 0, "")
        )
        assert param.validate() is True

    def test_custom_formatter_applies_on_assignment(self, make_param) -> None:
        param = make_param("abc", {"upper": True})
        param.formatter("upper", lambda on, value, p: value.upper() if on else value)
        param.value = "abc"
        assert param.value == "ABC"

    def test_builtin_handlers_are_registered(self, make_param) -> None:
        param = make_param()
        assert param.formatter("trim") is not None
        assert param.validator("required") is not None
        assert param.validator("unknown") is None

    def test_handlers_are_per_instance(self, make_param) -> None:
        first = make_param()
        first.formatter("upper", lambda on, value, p: value)
        assert make_param().formatter("upper") is None


class TestOptions:
    def test_option_get_and_set(self, make_param) -> None:
        param = make_param("x", {"bind_to": "filter"})
        assert param.option("bind_to") == "filter"
        assert param.option("bind_to", "select") == "select"
        assert param.option("bind_to") == "select"

    def test_options_are_copied(self) -> None:
        descriptor = {"required": True}
        param = Parameter("test", "x", descriptor)
        param.option("required", False)
        assert descriptor == {"required": True}

    def test_options_view_is_read_only(self, make_param) -> None:
        param = make_param("x", {"trim": True})
        with pytest.raises(TypeError):
            param.options["trim"] = False  # type: ignore[index]


class TestParse:
    def test_without_parse_option(self, make_param) -> None:
        assert make_param("x").parse() == {}

    def test_parse_receives_value_param_and_siblings(self, make_param) -> None:
        calls: list[tuple[Any, ...]] = []

        def parse(value: Any, param: Parameter, siblings: Any) -> dict[str, Any]:
            calls.append((value, param, dict(siblings)))
            return {param.name: value}

        param = make_param("7", {"parse": parse})
        assert param.parse() == {"test": 7}
        assert calls[0][1] is param
        assert calls[0][2] == {"test": param}

    def test_parse_returning_none_is_empty(self, make_param) -> None:
        param = make_param("x", {"parse": lambda value, p, s: None})
        assert param.parse() == {}
