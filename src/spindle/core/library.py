"""Function library consulted by the expression evaluator.

A library maps names to fixed-arity functions over ordered lists of
``Value``s. Arity is checked here, not by Python's call mechanism, so a
script calling ``visited`` with two arguments fails the same way no matter
how the implementation is written.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from spindle.core.errors import ArityMismatch, FunctionNotFound
from spindle.core.value import Value

FunctionImpl = Callable[[list[Value]], Any]


@dataclass(frozen=True)
class Function:
    """A registered function: name, arity and implementation."""

    name: str
    arity: int
    impl: FunctionImpl

    def invoke(self, args: list[Value]) -> Value:
        """Apply the implementation after checking the argument count.

        Literal results are wrapped in a ``Value``. Functions that only have
        effects return ``None``, which becomes ``Value.NULL``.
        """
        if len(args) != self.arity:
            raise ArityMismatch(self.name, self.arity, len(args))
        result = self.impl(list(args))
        if isinstance(result, Value):
            return result
        return Value(result)

    def __str__(self) -> str:
        return f"<function:{self.name}/{self.arity}>"


class FunctionLibrary:
    """Mutable name-keyed registry of functions.

    Mutation is expected during setup only, before a dialogue starts running.
    """

    def __init__(self) -> None:
        self._functions: dict[str, Function] = {}

    def register(self, name: str, arity: int, impl: FunctionImpl) -> Function:
        """Register a function, replacing any previous entry with the same name.

        Raises:
            ValueError: If arity is negative
        """
        if arity < 0:
            raise ValueError(f"Function {name} cannot have negative arity {arity}")
        function = Function(name, arity, impl)
        self._functions[name] = function
        return function

    def deregister(self, name: str) -> None:
        self._functions.pop(name, None)

    def lookup(self, name: str) -> Function:
        """Look up a function by name.

        Raises:
            FunctionNotFound: If no function has that name
        """
        function = self._functions.get(name)
        if function is None:
            raise FunctionNotFound(name)
        return function

    def invoke(self, name: str, args: list[Value]) -> Value:
        return self.lookup(name).invoke(args)

    def import_library(self, other: FunctionLibrary) -> None:
        """Copy every entry of ``other`` into this library, overwriting collisions."""
        for function in other:
            self._functions[function.name] = function

    def names(self) -> list[str]:
        return list(self._functions.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[Function]:
        return iter(list(self._functions.values()))

    def __len__(self) -> int:
        return len(self._functions)
