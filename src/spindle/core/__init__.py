"""Values, function libraries and result types."""

from spindle.core.errors import (
    ArityMismatch,
    ConfigurationError,
    DialogueError,
    FunctionNotFound,
    NodeNotFound,
    OptionSelectionError,
    ScriptLoadError,
)
from spindle.core.library import Function, FunctionLibrary
from spindle.core.operators import Operator, StandardOperatorSet
from spindle.core.results import Command, DialogueEvent, Line, NodeComplete, OptionSet, Result
from spindle.core.value import Value, ValueType

__all__ = [
    "ArityMismatch",
    "Command",
    "ConfigurationError",
    "DialogueError",
    "DialogueEvent",
    "Function",
    "FunctionLibrary",
    "FunctionNotFound",
    "Line",
    "NodeComplete",
    "NodeNotFound",
    "Operator",
    "OptionSelectionError",
    "OptionSet",
    "Result",
    "ScriptLoadError",
    "StandardOperatorSet",
    "Value",
    "ValueType",
]
