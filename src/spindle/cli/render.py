"""Rich rendering of dialogue events."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from spindle.runtime.nodes import NodeTable


class DialogueRenderer:
    """Writes lines, options and commands to a rich console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def line(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def command(self, text: str) -> None:
        self.console.print(f"<<{text}>>", style="dim", markup=False, highlight=False)

    def options(self, options: Sequence[str]) -> None:
        for number, text in enumerate(options, start=1):
            self.console.print(f"  [cyan]{number}.[/cyan] ", end="")
            self.console.print(text, markup=False, highlight=False)

    def info(self, text: str) -> None:
        self.console.print(text, style="bold", markup=False, highlight=False)

    def error(self, text: str) -> None:
        self.console.print(f"error: {text}", style="red", markup=False, highlight=False)

    def node_table(self, nodes: NodeTable) -> None:
        table = Table("Node", "Tags", "Statements")
        for name, node in nodes.items():
            table.add_row(name, " ".join(node.tags), str(len(node.body)))
        self.console.print(table)
