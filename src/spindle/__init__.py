"""Runtime for branching dialogue scripts."""

from spindle.core import (
    Command,
    DialogueError,
    FunctionLibrary,
    Line,
    OptionSet,
    StandardOperatorSet,
    Value,
    ValueType,
)
from spindle.runtime import DEFAULT_START, Dialogue, DialogueState, MemoryVariableStorage, Node, NodeTable

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_START",
    "Command",
    "Dialogue",
    "DialogueError",
    "DialogueState",
    "FunctionLibrary",
    "Line",
    "MemoryVariableStorage",
    "Node",
    "NodeTable",
    "OptionSet",
    "StandardOperatorSet",
    "Value",
    "ValueType",
]
