"""Error types for the dialogue runtime."""


class DialogueError(Exception):
    """Base class for everything that can go wrong loading or running a dialogue."""


class ConfigurationError(DialogueError):
    """The dialogue is missing something it needs before it can load or run."""


class NodeNotFound(DialogueError):
    """A node name that is not in the node table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Can't find node {name}")


class FunctionNotFound(DialogueError):
    """Function or operator not registered in the library."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Function {name} is not defined")


class ArityMismatch(DialogueError):
    """A function was invoked with the wrong number of arguments."""

    def __init__(self, name: str, expected: int, actual: int):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"Function {name} expects {expected} argument(s), got {actual}")


class OptionSelectionError(DialogueError):
    """An option set was not answered exactly once with a valid index."""


class ScriptLoadError(DialogueError):
    """A script document could not be turned into a node table."""
