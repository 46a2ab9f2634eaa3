"""Steps of dialogue output produced while running a node."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

OptionChooser = Callable[[int], None]


@dataclass(frozen=True)
class Line:
    """The host should show a line of dialogue."""

    text: str


@dataclass(frozen=True)
class OptionSet:
    """The host should offer these options.

    ``choose`` must be called exactly once with the zero-based index of the
    selected option before the next result is requested.
    """

    options: tuple[str, ...]
    choose: OptionChooser = field(repr=False, compare=False)


@dataclass(frozen=True)
class Command:
    """The host should run a command. Parsing the text is up to the host."""

    text: str


@dataclass(frozen=True)
class NodeComplete:
    """End of a node. Used by the runtime only and never handed to the host."""

    next_node: str | None = None


# Everything a node can produce
Result = Line | OptionSet | Command | NodeComplete

# What the host sees
DialogueEvent = Line | OptionSet | Command
