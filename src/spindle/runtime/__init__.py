"""Dialogue runtime: node tables, execution engine and controller."""

from spindle.runtime.ast import (
    Assign,
    Call,
    Choice,
    Clause,
    Evaluate,
    Expression,
    If,
    Jump,
    Literal,
    Node,
    Option,
    RunCommand,
    Say,
    Statement,
    Variable,
)
from spindle.runtime.dialogue import DEFAULT_START, Dialogue, DialogueState, current_node
from spindle.runtime.engine import ExecutionEngine
from spindle.runtime.nodes import NodeTable
from spindle.runtime.variables import MemoryVariableStorage, VariableStorage

__all__ = [
    "DEFAULT_START",
    "Assign",
    "Call",
    "Choice",
    "Clause",
    "Dialogue",
    "DialogueState",
    "Evaluate",
    "ExecutionEngine",
    "Expression",
    "If",
    "Jump",
    "Literal",
    "MemoryVariableStorage",
    "Node",
    "NodeTable",
    "Option",
    "RunCommand",
    "Say",
    "Statement",
    "Variable",
    "VariableStorage",
    "current_node",
]
