"""Node body statements and expressions."""

from __future__ import annotations

from dataclasses import dataclass

from spindle.core.value import LiteralValue


class Expression:
    """Base class for expressions."""


@dataclass(frozen=True)
class Literal(Expression):
    """Constant number, string, bool or null."""

    value: LiteralValue

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class Variable(Expression):
    """Read of a named variable from the variable store."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Call(Expression):
    """Call of a library function.

    Operators are calls too; their function name is an ``Operator`` value,
    e.g. ``Call("Add", (Variable("$gold"), Literal(1)))``.
    """

    function: str
    args: tuple[Expression, ...] = ()

    def __str__(self) -> str:
        return f"{self.function}({', '.join(str(arg) for arg in self.args)})"


class Statement:
    """Base class for statements."""


@dataclass(frozen=True)
class Say(Statement):
    text: str


@dataclass(frozen=True)
class RunCommand(Statement):
    text: str


@dataclass(frozen=True)
class Evaluate(Statement):
    """Evaluate an expression for its effects and drop the result."""

    expression: Expression


@dataclass(frozen=True)
class Assign(Statement):
    variable: str
    expression: Expression


@dataclass(frozen=True)
class Clause:
    condition: Expression
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class If(Statement):
    """Runs the body of the first clause whose condition holds, else ``otherwise``."""

    clauses: tuple[Clause, ...]
    otherwise: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class Option:
    text: str
    body: tuple[Statement, ...] = ()
    condition: Expression | None = None


@dataclass(frozen=True)
class Choice(Statement):
    """Offer the available options and run the chosen one's body inline."""

    options: tuple[Option, ...]


@dataclass(frozen=True)
class Jump(Statement):
    """Leave the node and continue at ``target``."""

    target: str


@dataclass(frozen=True)
class Node:
    """Named unit of dialogue content."""

    name: str
    body: tuple[Statement, ...] = ()
    tags: tuple[str, ...] = ()
