"""Tests for values and their coercions."""

import math

import pytest

from spindle.core.value import Value, ValueType


class TestConstruction:
    def test_number_from_int(self):
        value = Value(3)
        assert value.type is ValueType.NUMBER
        assert value.raw == 3.0
        assert isinstance(value.raw, float)

    def test_int_beyond_float_range_saturates(self):
        huge = 10**400
        assert Value(huge).as_number == math.inf
        assert Value(-huge).as_number == -math.inf
        assert Value(huge).as_string == "Infinity"

    def test_bool_is_not_a_number(self):
        assert Value(True).type is ValueType.BOOL
        assert Value(False).type is ValueType.BOOL

    def test_string_and_null(self):
        assert Value("hi").type is ValueType.STRING
        assert Value(None).type is ValueType.NULL
        assert Value().is_null

    def test_value_is_unwrapped(self):
        inner = Value("x")
        outer = Value(inner)
        assert outer.type is ValueType.STRING
        assert outer.raw == "x"

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError, match="list"):
            Value([1, 2])

    def test_values_are_immutable(self):
        value = Value(1)
        with pytest.raises(AttributeError):
            value.raw = 2.0

    def test_constants(self):
        assert Value.NULL.is_null
        assert Value.TRUE.raw is True
        assert Value.FALSE.raw is False

    def test_python_equality_is_identity(self):
        """Script equality goes through EqualTo, not ==."""
        value = Value(1)
        assert value == value
        assert Value(1) != Value(1)


class TestAsNumber:
    @pytest.mark.parametrize(
        ("literal", "expected"),
        [
            (2.5, 2.5),
            ("42", 42.0),
            ("  -7.5 ", -7.5),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("abc", 0.0),
            ("", 0.0),
            ("nan", 0.0),
            ("inf", 0.0),
            ("1_000", 0.0),
            (True, 1.0),
            (False, 0.0),
            (None, 0.0),
        ],
    )
    def test_coercion(self, literal, expected):
        assert Value(literal).as_number == expected


class TestAsString:
    @pytest.mark.parametrize(
        ("literal", "expected"),
        [
            (3, "3"),
            (3.0, "3"),
            (-0.0, "0"),
            (1.5, "1.5"),
            (math.nan, "NaN"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
        ],
    )
    def test_coercion(self, literal, expected):
        assert Value(literal).as_string == expected

    def test_str_uses_as_string(self):
        assert str(Value(2)) == "2"
        assert repr(Value(2)) == "Value(2.0)"


class TestAsBool:
    @pytest.mark.parametrize(
        ("literal", "expected"),
        [
            (1, True),
            (-0.5, True),
            (0, False),
            (math.nan, False),
            ("x", True),
            ("false", True),
            ("", False),
            (True, True),
            (False, False),
            (None, False),
        ],
    )
    def test_coercion(self, literal, expected):
        assert Value(literal).as_bool is expected
