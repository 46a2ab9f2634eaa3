"""Variable storage consulted by node body expressions."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from spindle.core.value import LiteralValue, Value


@runtime_checkable
class VariableStorage(Protocol):
    """Host-provided store of named variables."""

    def get(self, name: str) -> Value:
        """Return the variable's value, or ``Value.NULL`` when it was never set."""
        ...

    def set(self, name: str, value: Value) -> None:
        """Store a value under ``name``."""
        ...

    def clear(self) -> None:
        """Forget every variable."""
        ...


class MemoryVariableStorage:
    """Dict-backed variable storage."""

    def __init__(self, initial: dict[str, LiteralValue | Value] | None = None) -> None:
        self._values: dict[str, Value] = {}
        for name, value in (initial or {}).items():
            self.set(name, value)

    def get(self, name: str) -> Value:
        return self._values.get(name, Value.NULL)

    def set(self, name: str, value: LiteralValue | Value) -> None:
        self._values[name] = value if isinstance(value, Value) else Value(value)

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)
