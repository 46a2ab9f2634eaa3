"""Execution engine: runs one node body and yields its results lazily."""

from __future__ import annotations

from collections.abc import Generator, Iterator, Sequence

from loguru import logger

from spindle.core.errors import DialogueError, OptionSelectionError
from spindle.core.library import FunctionLibrary
from spindle.core.results import Command, Line, NodeComplete, OptionSet, Result
from spindle.core.value import Value
from spindle.runtime.ast import (
    Assign,
    Call,
    Choice,
    Evaluate,
    Expression,
    If,
    Jump,
    Literal,
    Node,
    RunCommand,
    Say,
    Statement,
    Variable,
)
from spindle.runtime.variables import VariableStorage

# Generators over a block return the Jump that ended it, if any
BlockRun = Generator[Result, None, Jump | None]


class _Selection:
    """One-shot receiver for the host's option choice."""

    def __init__(self, options: tuple[str, ...]) -> None:
        self._options = options
        self.index: int | None = None

    def choose(self, index: int) -> None:
        if self.index is not None:
            raise OptionSelectionError("An option was already chosen for this option set")
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._options):
            raise OptionSelectionError(f"Option index {index!r} is out of range for {len(self._options)} option(s)")
        self.index = index


class ExecutionEngine:
    """Runs node bodies against a function library and a variable store.

    Work happens only when the caller pulls the next result, so every
    expression sees the effects of everything the host has consumed so far.
    """

    def __init__(self, library: FunctionLibrary, variables: VariableStorage) -> None:
        self._library = library
        self._variables = variables

    def run_node(self, node: Node) -> Iterator[Result]:
        """Yield the results of one traversal of ``node``, ending with ``NodeComplete``."""
        logger.debug("engine.node name={}", node.name)
        jump = yield from self._run_block(node.body)
        target = jump.target if jump is not None else None
        logger.debug("engine.node_complete name={} next={}", node.name, target)
        yield NodeComplete(target)

    def evaluate(self, expression: Expression) -> Value:
        match expression:
            case Literal(value):
                return Value(value)
            case Variable(name):
                return Value(self._variables.get(name))
            case Call(function, args):
                values = [self.evaluate(arg) for arg in args]
                return self._library.invoke(function, values)
            case _:
                raise DialogueError(f"Unknown expression type: {type(expression).__name__}")

    def _run_block(self, statements: Sequence[Statement]) -> BlockRun:
        for statement in statements:
            jump = yield from self._run_statement(statement)
            if jump is not None:
                return jump
        return None

    def _run_statement(self, statement: Statement) -> BlockRun:
        match statement:
            case Say(text):
                yield Line(text)
            case RunCommand(text):
                yield Command(text)
            case Evaluate(expression):
                self.evaluate(expression)
            case Assign(variable, expression):
                value = self.evaluate(expression)
                logger.debug("engine.assign variable={} value={!r}", variable, value)
                self._variables.set(variable, value)
            case If(clauses, otherwise):
                for clause in clauses:
                    if self.evaluate(clause.condition).as_bool:
                        return (yield from self._run_block(clause.body))
                return (yield from self._run_block(otherwise))
            case Choice(options):
                available = [
                    option for option in options if option.condition is None or self.evaluate(option.condition).as_bool
                ]
                if not available:
                    logger.debug("engine.choice_skipped reason=no_available_options")
                    return None
                selection = _Selection(tuple(option.text for option in available))
                yield OptionSet(tuple(option.text for option in available), selection.choose)
                if selection.index is None:
                    raise OptionSelectionError("Resumed past an option set without choosing an option")
                logger.debug("engine.option_chosen index={}", selection.index)
                return (yield from self._run_block(available[selection.index].body))
            case Jump():
                return statement
            case _:
                raise DialogueError(f"Unknown statement type: {type(statement).__name__}")
        return None
