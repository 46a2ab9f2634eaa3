"""Tests for the function library."""

import pytest

from spindle.core.errors import ArityMismatch, FunctionNotFound
from spindle.core.library import Function, FunctionLibrary
from spindle.core.value import Value, ValueType


def test_register_and_lookup():
    library = FunctionLibrary()
    function = library.register("double", 1, lambda args: args[0].as_number * 2)
    assert library.lookup("double") is function
    assert isinstance(function, Function)
    assert function.arity == 1
    assert "double" in library
    assert len(library) == 1


def test_lookup_missing_raises():
    library = FunctionLibrary()
    with pytest.raises(FunctionNotFound) as excinfo:
        library.lookup("nope")
    assert excinfo.value.name == "nope"


def test_invoke_wraps_literal_results():
    library = FunctionLibrary()
    library.register("double", 1, lambda args: args[0].as_number * 2)
    result = library.invoke("double", [Value(4)])
    assert result.type is ValueType.NUMBER
    assert result.as_number == 8.0


def test_invoke_passes_values_through():
    library = FunctionLibrary()
    greeting = Value("hello")
    library.register("greeting", 0, lambda args: greeting)
    assert library.invoke("greeting", []) is greeting


def test_void_function_returns_null():
    calls = []
    library = FunctionLibrary()
    library.register("effect", 1, lambda args: calls.append(args[0].as_string))
    result = library.invoke("effect", [Value("x")])
    assert result.is_null
    assert calls == ["x"]


@pytest.mark.parametrize("args", [[], [Value(1), Value(2)]])
def test_invoke_checks_arity(args):
    library = FunctionLibrary()
    library.register("one", 1, lambda args: args[0])
    with pytest.raises(ArityMismatch) as excinfo:
        library.invoke("one", args)
    assert excinfo.value.expected == 1
    assert excinfo.value.actual == len(args)


def test_arity_is_checked_before_the_implementation_runs():
    calls = []
    library = FunctionLibrary()
    library.register("count", 0, lambda args: calls.append(1))
    with pytest.raises(ArityMismatch):
        library.invoke("count", [Value(1)])
    assert calls == []


def test_negative_arity_rejected():
    library = FunctionLibrary()
    with pytest.raises(ValueError, match="negative arity"):
        library.register("bad", -1, lambda args: None)


def test_register_overwrites_silently():
    library = FunctionLibrary()
    library.register("f", 0, lambda args: 1)
    library.register("f", 1, lambda args: 2)
    assert library.lookup("f").arity == 1
    assert library.invoke("f", [Value.NULL]).as_number == 2.0


def test_import_library_overwrites_collisions():
    base = FunctionLibrary()
    base.register("shared", 0, lambda args: "base")
    base.register("only_base", 0, lambda args: "base")
    other = FunctionLibrary()
    other.register("shared", 0, lambda args: "other")
    other.register("only_other", 0, lambda args: "other")

    base.import_library(other)

    assert base.invoke("shared", []).as_string == "other"
    assert base.invoke("only_base", []).as_string == "base"
    assert base.invoke("only_other", []).as_string == "other"
    assert sorted(base.names()) == ["only_base", "only_other", "shared"]


def test_deregister():
    library = FunctionLibrary()
    library.register("f", 0, lambda args: None)
    library.deregister("f")
    library.deregister("f")
    assert "f" not in library
