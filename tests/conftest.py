"""Test configuration and shared fixtures."""

import pytest

from spindle.runtime.dialogue import Dialogue
from spindle.runtime.variables import MemoryVariableStorage


class RecordingSink:
    """Diagnostic sink that keeps every message it receives."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def debug_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def error_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def variables() -> MemoryVariableStorage:
    return MemoryVariableStorage()


@pytest.fixture
def dialogue(variables, debug_sink, error_sink) -> Dialogue:
    return Dialogue(variables, log_debug=debug_sink, log_error=error_sink)
