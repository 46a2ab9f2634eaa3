"""Name-addressable node tables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from spindle.core.errors import NodeNotFound, ScriptLoadError
from spindle.runtime.ast import Node


class NodeTable(Mapping[str, Node]):
    """Immutable collection of nodes keyed by name."""

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        table: dict[str, Node] = {}
        for node in nodes:
            if node.name in table:
                raise ScriptLoadError(f"Duplicate node name: {node.name}")
            table[node.name] = node
        self._nodes = MappingProxyType(table)

    def get_node(self, name: str) -> Node:
        """Look up a node by name.

        Raises:
            NodeNotFound: If the table has no node with that name
        """
        node = self._nodes.get(name)
        if node is None:
            raise NodeNotFound(name)
        return node

    def merge(self, other: Mapping[str, Node]) -> NodeTable:
        """Return a new table with the nodes of ``other`` replacing ours by name."""
        merged = dict(self._nodes)
        merged.update(other)
        return NodeTable(merged.values())

    def __getitem__(self, name: str) -> Node:
        return self._nodes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"NodeTable({list(self._nodes)})"
