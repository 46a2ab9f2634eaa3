"""JSON script loader.

A script is a list of nodes, or an object with a ``nodes`` list::

    [
      {"title": "Start", "tags": ["intro"], "body": [
        {"line": "Hello."},
        {"set": "$met", "to": true},
        {"if": {"call": "visited", "args": ["Shop"]},
         "then": [{"line": "Back again?"}]},
        {"options": [
          {"text": "Shop", "jump": "Shop"},
          {"text": "Leave", "body": [{"command": "stop"}]}
        ]}
      ]}
    ]

Expressions are JSON scalars (literals), ``{"var": name}``,
``{"call": name, "args": [...]}`` or ``{"op": "Add", "args": [...]}``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from spindle.core.errors import ScriptLoadError
from spindle.core.operators import Operator
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
from spindle.runtime.nodes import NodeTable


class NodeDocument(BaseModel):
    """One node as it appears in a script file."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    body: list[Any] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        # Yarn editors store tags as one space separated string
        if isinstance(value, str):
            return value.split()
        return value


class ScriptDocument(BaseModel):
    nodes: list[NodeDocument]


_SCRIPT_ADAPTER = TypeAdapter(ScriptDocument | list[NodeDocument])


def load_script(text: str) -> NodeTable:
    """Parse a JSON script into a node table.

    Raises:
        ScriptLoadError: If the text is not valid JSON or not a valid script
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ScriptLoadError(f"Invalid JSON: {exc}") from exc
    try:
        document = _SCRIPT_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise ScriptLoadError(f"Invalid script: {exc}") from exc
    nodes = document.nodes if isinstance(document, ScriptDocument) else document
    table = NodeTable(_compile_node(node) for node in nodes)
    logger.debug("loader.loaded nodes={}", len(table))
    return table


def load_script_file(path: str | Path) -> NodeTable:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScriptLoadError(f"Cannot read {path}: {exc}") from exc
    return load_script(text)


def collect_calls(nodes: Iterable[Node]) -> set[str]:
    """Names of every function the given nodes call, operators included."""
    names: set[str] = set()

    def visit_expression(expression: Expression | None) -> None:
        match expression:
            case Call(function, args):
                names.add(function)
                for arg in args:
                    visit_expression(arg)

    def visit_block(statements: Iterable[Statement]) -> None:
        for statement in statements:
            match statement:
                case Evaluate(expression) | Assign(_, expression):
                    visit_expression(expression)
                case If(clauses, otherwise):
                    for clause in clauses:
                        visit_expression(clause.condition)
                        visit_block(clause.body)
                    visit_block(otherwise)
                case Choice(options):
                    for option in options:
                        visit_expression(option.condition)
                        visit_block(option.body)

    for node in nodes:
        visit_block(node.body)
    return names


def _compile_node(document: NodeDocument) -> Node:
    body = _compile_block(document.body, f"node {document.title!r}")
    return Node(name=document.title, body=body, tags=tuple(document.tags))


def _compile_block(raw: Any, where: str) -> tuple[Statement, ...]:
    if not isinstance(raw, list):
        raise ScriptLoadError(f"{where}: expected a list of statements")
    return tuple(_compile_statement(item, f"{where} [{index}]") for index, item in enumerate(raw))


def _compile_statement(raw: Any, where: str) -> Statement:
    match raw:
        case {"line": str(text)}:
            return Say(text)
        case {"command": str(text)}:
            return RunCommand(text)
        case {"call": str()}:
            return Evaluate(_compile_expression(raw, where))
        case {"set": str(variable), "to": expression}:
            return Assign(variable, _compile_expression(expression, where))
        case {"if": condition, "then": body}:
            clauses = [Clause(_compile_expression(condition, where), _compile_block(body, where))]
            extras = raw.get("elif", [])
            if not isinstance(extras, list):
                raise ScriptLoadError(f"{where}: 'elif' must be a list")
            for index, extra in enumerate(extras):
                match extra:
                    case {"if": extra_condition, "then": extra_body}:
                        clauses.append(
                            Clause(
                                _compile_expression(extra_condition, f"{where} elif[{index}]"),
                                _compile_block(extra_body, f"{where} elif[{index}]"),
                            )
                        )
                    case _:
                        raise ScriptLoadError(f"{where} elif[{index}]: expected 'if' and 'then'")
            otherwise = _compile_block(raw.get("else", []), f"{where} else")
            return If(tuple(clauses), otherwise)
        case {"options": list(options)}:
            return Choice(tuple(_compile_option(option, f"{where} option[{i}]") for i, option in enumerate(options)))
        case {"jump": str(target)}:
            return Jump(target)
        case _:
            raise ScriptLoadError(f"{where}: unknown statement {raw!r}")


def _compile_option(raw: Any, where: str) -> Option:
    match raw:
        case {"text": str(text)}:
            body = list(_compile_block(raw.get("body", []), where))
            if "jump" in raw:
                if not isinstance(raw["jump"], str):
                    raise ScriptLoadError(f"{where}: 'jump' must be a node name")
                body.append(Jump(raw["jump"]))
            condition = _compile_expression(raw["if"], where) if "if" in raw else None
            return Option(text, tuple(body), condition)
        case _:
            raise ScriptLoadError(f"{where}: options need a 'text'")


def _compile_expression(raw: Any, where: str) -> Expression:
    match raw:
        case None | bool() | int() | float() | str():
            return Literal(raw)
        case {"var": str(name)}:
            return Variable(name)
        case {"call": str(function)}:
            return Call(function, _compile_args(raw, where))
        case {"op": str(name)}:
            try:
                operator = Operator(name)
            except ValueError:
                raise ScriptLoadError(f"{where}: unknown operator {name!r}") from None
            args = _compile_args(raw, where)
            if len(args) != operator.arity:
                raise ScriptLoadError(
                    f"{where}: operator {name} takes {operator.arity} operand(s), got {len(args)}"
                )
            return Call(operator.value, args)
        case _:
            raise ScriptLoadError(f"{where}: unknown expression {raw!r}")


def _compile_args(raw: dict[str, Any], where: str) -> tuple[Expression, ...]:
    args = raw.get("args", [])
    if not isinstance(args, list):
        raise ScriptLoadError(f"{where}: 'args' must be a list")
    return tuple(_compile_expression(arg, where) for arg in args)
