"""Dynamically typed values used by dialogue expressions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

LiteralValue = float | int | str | bool | None

_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class ValueType(Enum):
    """Tag of a runtime value."""

    NUMBER = "number"
    STRING = "string"
    BOOL = "bool"
    NULL = "null"


def _format_number(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _int_to_float(number: int) -> float:
    # ints past the float range saturate to a signed infinity
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


def _parse_number(text: str) -> float:
    stripped = text.strip()
    if _DECIMAL.fullmatch(stripped) is None:
        return 0.0
    return float(stripped)


@dataclass(frozen=True, eq=False, init=False)
class Value:
    """Immutable tagged scalar.

    Exactly one of number, string, bool or null is active. The coercions
    never fail:

        NUMBER -> string: integral values drop the fraction ("3"), others use repr
        STRING -> number: decimal literal or 0.0
        BOOL   -> number: 1.0 / 0.0, string: "true" / "false"
        NULL   -> number: 0.0, string: "null", bool: False

    Python equality is identity. Script equality is the ``EqualTo`` operator.
    """

    type: ValueType
    raw: float | str | bool | None

    NULL: ClassVar[Value]
    TRUE: ClassVar[Value]
    FALSE: ClassVar[Value]

    def __init__(self, literal: LiteralValue | Value = None) -> None:
        if isinstance(literal, Value):
            kind, raw = literal.type, literal.raw
        elif literal is None:
            kind, raw = ValueType.NULL, None
        elif isinstance(literal, bool):
            kind, raw = ValueType.BOOL, literal
        elif isinstance(literal, float):
            kind, raw = ValueType.NUMBER, literal
        elif isinstance(literal, int):
            kind, raw = ValueType.NUMBER, _int_to_float(literal)
        elif isinstance(literal, str):
            kind, raw = ValueType.STRING, literal
        else:
            raise TypeError(f"Cannot make a Value from {type(literal).__name__}")
        object.__setattr__(self, "type", kind)
        object.__setattr__(self, "raw", raw)

    @property
    def as_number(self) -> float:
        match self.type:
            case ValueType.NUMBER:
                return self.raw
            case ValueType.STRING:
                return _parse_number(self.raw)
            case ValueType.BOOL:
                return 1.0 if self.raw else 0.0
            case _:
                return 0.0

    @property
    def as_string(self) -> str:
        match self.type:
            case ValueType.NUMBER:
                return _format_number(self.raw)
            case ValueType.STRING:
                return self.raw
            case ValueType.BOOL:
                return "true" if self.raw else "false"
            case _:
                return "null"

    @property
    def as_bool(self) -> bool:
        match self.type:
            case ValueType.NUMBER:
                return not math.isnan(self.raw) and self.raw != 0.0
            case ValueType.STRING:
                return len(self.raw) > 0
            case ValueType.BOOL:
                return self.raw
            case _:
                return False

    @property
    def is_null(self) -> bool:
        return self.type is ValueType.NULL

    def __str__(self) -> str:
        return self.as_string

    def __repr__(self) -> str:
        return f"Value({self.raw!r})"


Value.NULL = Value(None)
Value.TRUE = Value(True)
Value.FALSE = Value(False)
