"""Dialogue controller: drives a run from node to node."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from pathlib import Path

from loguru import logger

from spindle.core.errors import ConfigurationError, FunctionNotFound, NodeNotFound
from spindle.core.library import FunctionImpl, FunctionLibrary
from spindle.core.operators import StandardOperatorSet
from spindle.core.results import Command, DialogueEvent, Line, NodeComplete, OptionSet
from spindle.core.value import Value
from spindle.runtime.ast import Node
from spindle.runtime.engine import ExecutionEngine
from spindle.runtime.nodes import NodeTable
from spindle.runtime.variables import VariableStorage

DEFAULT_START = "Start"
STOP_COMMAND = "stop"

DiagnosticSink = Callable[[str], None]

_node_context: ContextVar[str] = ContextVar("dialogue_node")


def current_node() -> str:
    """Name of the node whose body is executing, or "-" outside a run."""
    return _node_context.get("-")


@contextmanager
def _executing(node_name: str) -> Iterator[None]:
    token = _node_context.set(node_name)
    try:
        yield
    finally:
        _node_context.reset(token)


class DialogueState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUSPENDED = "suspended"
    COMPLETED = "completed"
    ABORTED = "aborted"


class Dialogue:
    """Runs a dialogue over a table of nodes.

    The host supplies the variable store and two diagnostic sinks, loads
    nodes, then iterates ``run()``. Each item is a ``Line``, an ``OptionSet``
    (answer it through ``choose`` before pulling again) or a ``Command``.

    Two built-in functions are available to scripts:

        visited(name)  true once ``name`` has finished a traversal in this run
        assert(cond)   ends the run quietly when ``cond`` is false
    """

    def __init__(
        self,
        variables: VariableStorage,
        *,
        log_debug: DiagnosticSink | None = None,
        log_error: DiagnosticSink | None = None,
    ) -> None:
        self.variables = variables
        self.log_debug = log_debug
        self.log_error = log_error
        self.library = FunctionLibrary()
        self.library.import_library(StandardOperatorSet())
        self.library.register("visited", 1, self._visited_builtin)
        self.library.register("assert", 1, self._assert_builtin)
        self.stop_executing = False
        self.state = DialogueState.IDLE
        self.current_node: str | None = None
        self._nodes = NodeTable()
        self._visited: set[str] = set()

    @property
    def node_names(self) -> list[str]:
        return list(self._nodes)

    @property
    def visited_nodes(self) -> frozenset[str]:
        return frozenset(self._visited)

    def register_function(self, name: str, arity: int, impl: FunctionImpl) -> None:
        self.library.register(name, arity, impl)

    def load_nodes(self, nodes: Mapping[str, Node], *, strict: bool = False) -> int:
        """Add nodes to the table, replacing existing nodes with the same name.

        With ``strict`` every function the nodes call must already be
        registered, otherwise ``FunctionNotFound`` is raised and nothing is
        loaded.

        Returns:
            Number of nodes now loaded
        """
        self._require_sinks("loading")
        if strict:
            from spindle.loader import collect_calls

            missing = sorted(name for name in collect_calls(nodes.values()) if name not in self.library)
            if missing:
                raise FunctionNotFound(missing[0])
        self._nodes = self._nodes.merge(nodes)
        logger.debug("dialogue.load added={} total={}", len(nodes), len(self._nodes))
        self.log_debug(f"Loaded {len(nodes)} node(s)")
        return len(self._nodes)

    def load_string(self, text: str, *, strict: bool = False) -> int:
        from spindle.loader import load_script

        self._require_sinks("loading")
        return self.load_nodes(load_script(text), strict=strict)

    def load_file(self, path: str | Path, *, strict: bool = False) -> int:
        from spindle.loader import load_script_file

        self._require_sinks("loading")
        return self.load_nodes(load_script_file(path), strict=strict)

    def run(self, start_node: str = DEFAULT_START) -> Iterator[DialogueEvent]:
        """Start a run at ``start_node`` and return its lazy sequence of events.

        Raises:
            ConfigurationError: If a diagnostic sink is missing
        """
        self._require_sinks("running")
        self.stop_executing = False
        self._visited.clear()
        self.current_node = start_node
        self.state = DialogueState.RUNNING
        logger.debug("dialogue.run start={}", start_node)
        return self._run(start_node)

    def _run(self, start_node: str) -> Iterator[DialogueEvent]:
        engine = ExecutionEngine(self.library, self.variables)
        next_node: str | None = start_node
        try:
            while next_node is not None:
                self.current_node = next_node
                self.log_debug(f"Running node {next_node}")
                try:
                    node = self._nodes.get_node(next_node)
                except NodeNotFound as exc:
                    self.log_error(str(exc))
                    self._finish(DialogueState.ABORTED)
                    return

                next_node = None
                results = engine.run_node(node)
                while True:
                    # set only while the body executes, never across a yield to the host
                    with _executing(node.name):
                        result = next(results)
                    match result:
                        case Command(text=text) if text == STOP_COMMAND:
                            self._finish(DialogueState.COMPLETED)
                            return
                        case _ if self.stop_executing:
                            self._finish(DialogueState.ABORTED)
                            return
                        case NodeComplete(next_node=target):
                            # marked only after the whole body ran, so a node
                            # sees visited(itself) as false on its first pass
                            self._visited.add(node.name)
                            next_node = target
                            break
                        case Line() | OptionSet() | Command():
                            self.state = DialogueState.SUSPENDED
                            yield result
                            self.state = DialogueState.RUNNING

            self.log_debug("Run complete.")
            self._finish(DialogueState.COMPLETED)
        except GeneratorExit:
            self._finish(DialogueState.COMPLETED)
            raise
        except Exception:
            self._finish(DialogueState.ABORTED)
            raise

    def _finish(self, state: DialogueState) -> None:
        logger.debug("dialogue.finish state={} node={}", state.value, self.current_node)
        self.state = state

    def _require_sinks(self, action: str) -> None:
        if self.log_debug is None:
            raise ConfigurationError(f"log_debug must be set before {action}")
        if self.log_error is None:
            raise ConfigurationError(f"log_error must be set before {action}")

    def _visited_builtin(self, args: list[Value]) -> bool:
        return args[0].as_string in self._visited

    def _assert_builtin(self, args: list[Value]) -> None:
        if not args[0].as_bool:
            logger.debug("dialogue.assert_failed node={}", self.current_node)
            self.stop_executing = True
