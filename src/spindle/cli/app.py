"""Typer CLI entrypoints."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich import get_console

from spindle.cli.render import DialogueRenderer
from spindle.config.settings import load_settings
from spindle.core.errors import DialogueError
from spindle.core.results import Command, Line, OptionSet
from spindle.core.value import LiteralValue
from spindle.loader import load_script_file
from spindle.logging_utils import configure_logging
from spindle.runtime.dialogue import Dialogue, DialogueState
from spindle.runtime.variables import MemoryVariableStorage

app = typer.Typer(name="spindle", help="Branching dialogue runner", add_completion=False)

ScriptArgument = Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)]


def _parse_variables(values: list[str] | None) -> dict[str, LiteralValue]:
    variables: dict[str, LiteralValue] = {}
    for raw in values or []:
        name, sep, text = raw.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint="--var")
        try:
            value = json.loads(text)
        except json.JSONDecodeError:
            value = text
        if not isinstance(value, (str, int, float, bool)) and value is not None:
            value = text
        variables[name] = value
    return variables


def _ask_option(renderer: DialogueRenderer, count: int) -> int:
    while True:
        number = typer.prompt("Choose", type=int)
        if 1 <= number <= count:
            return number - 1
        renderer.error(f"pick a number between 1 and {count}")


@app.command()
def play(
    script: ScriptArgument,
    start: Annotated[str | None, typer.Option("--start", "-s", help="Node to start from.")] = None,
    variables: Annotated[
        list[str] | None,
        typer.Option("--var", help="Initial variable as NAME=VALUE (repeatable)."),
    ] = None,
) -> None:
    """Play a dialogue script in the terminal."""

    configure_logging(profile="play")
    settings = load_settings(start_node=start)
    renderer = DialogueRenderer(get_console())
    storage = MemoryVariableStorage(_parse_variables(variables))
    dialogue = Dialogue(storage, log_debug=logger.debug, log_error=logger.error)
    logger.debug("play.start script={} start={}", str(script), settings.start_node)

    try:
        dialogue.load_file(script, strict=settings.strict_functions)
        for event in dialogue.run(settings.start_node):
            match event:
                case Line(text):
                    renderer.line(text)
                case Command(text):
                    if settings.show_commands:
                        renderer.command(text)
                case OptionSet(options, choose):
                    renderer.options(options)
                    choose(_ask_option(renderer, len(options)))
    except DialogueError as exc:
        renderer.error(str(exc))
        raise typer.Exit(code=1) from exc

    logger.debug("play.finish state={} node={}", dialogue.state.value, dialogue.current_node)
    if dialogue.state is DialogueState.ABORTED:
        renderer.info(f"Dialogue stopped at {dialogue.current_node}.")


@app.command()
def nodes(script: ScriptArgument) -> None:
    """List the nodes of a dialogue script."""

    configure_logging()
    renderer = DialogueRenderer(get_console())
    try:
        table = load_script_file(script)
    except DialogueError as exc:
        renderer.error(str(exc))
        raise typer.Exit(code=1) from exc
    renderer.node_table(table)
