"""Standard operators available to every dialogue."""

from __future__ import annotations

import math
from enum import Enum

from spindle.core.library import FunctionLibrary
from spindle.core.value import Value, ValueType


class Operator(str, Enum):
    """Canonical operator names.

    The expression compiler emits a call to one of these names for every
    operator it finds in a node body.
    """

    ADD = "Add"
    MINUS = "Minus"
    UNARY_MINUS = "UnaryMinus"
    DIVIDE = "Divide"
    MULTIPLY = "Multiply"
    EQUAL_TO = "EqualTo"
    NOT_EQUAL_TO = "NotEqualTo"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL_TO = "GreaterThanOrEqualTo"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL_TO = "LessThanOrEqualTo"
    AND = "And"
    OR = "Or"
    XOR = "Xor"
    NOT = "Not"

    @property
    def arity(self) -> int:
        return 1 if self in (Operator.UNARY_MINUS, Operator.NOT) else 2


def _divide(left: float, right: float) -> float:
    # IEEE division: x/0 is a signed infinity, 0/0 is NaN
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class StandardOperatorSet(FunctionLibrary):
    """A library pre-seeded with arithmetic, comparison and logical operators."""

    def __init__(self) -> None:
        super().__init__()
        self.register(Operator.ADD.value, 2, self._add)
        self.register(Operator.MINUS.value, 2, lambda args: args[0].as_number - args[1].as_number)
        self.register(Operator.UNARY_MINUS.value, 1, lambda args: -args[0].as_number)
        self.register(Operator.DIVIDE.value, 2, lambda args: _divide(args[0].as_number, args[1].as_number))
        self.register(Operator.MULTIPLY.value, 2, lambda args: args[0].as_number * args[1].as_number)
        self.register(Operator.EQUAL_TO.value, 2, self._equal_to)
        self.register(Operator.NOT_EQUAL_TO.value, 2, self._not_equal_to)
        self.register(Operator.GREATER_THAN.value, 2, lambda args: args[0].as_number > args[1].as_number)
        self.register(
            Operator.GREATER_THAN_OR_EQUAL_TO.value, 2, lambda args: args[0].as_number >= args[1].as_number
        )
        self.register(Operator.LESS_THAN.value, 2, lambda args: args[0].as_number < args[1].as_number)
        self.register(Operator.LESS_THAN_OR_EQUAL_TO.value, 2, lambda args: args[0].as_number <= args[1].as_number)
        self.register(Operator.AND.value, 2, lambda args: args[0].as_bool and args[1].as_bool)
        self.register(Operator.OR.value, 2, lambda args: args[0].as_bool or args[1].as_bool)
        self.register(Operator.XOR.value, 2, lambda args: args[0].as_bool != args[1].as_bool)
        self.register(Operator.NOT.value, 1, lambda args: not args[0].as_bool)

    @staticmethod
    def _add(args: list[Value]) -> Value:
        left, right = args
        if left.type is ValueType.STRING or right.type is ValueType.STRING:
            return Value(left.as_string + right.as_string)
        return Value(left.as_number + right.as_number)

    @staticmethod
    def _equal_to(args: list[Value]) -> bool:
        left, right = args
        # the left operand is coerced to the right operand's type
        match right.type:
            case ValueType.NUMBER:
                return left.as_number == right.as_number
            case ValueType.STRING:
                return left.as_string == right.as_string
            case ValueType.BOOL:
                return left.as_bool == right.as_bool
            case ValueType.NULL:
                return left.type is ValueType.NULL
        return False

    def _not_equal_to(self, args: list[Value]) -> bool:
        return not self.invoke(Operator.EQUAL_TO.value, args).as_bool
