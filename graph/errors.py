"""
errors.py — Error Kinds
=======================
Raised at the point of detection and left for the caller to handle.

`GraphError` subclasses are caller mistakes (bad size or option, unknown name,
empty graph) and carry the HTTP status the API layer answers with.
`ExhaustedFrontierError` is not a GraphError: it signals a broken internal
invariant and is never translated into a reply.
"""

from typing import Optional


class GraphError(Exception):
    status_code: int = 400


class InvalidSizeError(GraphError, ValueError):
    """Generator asked for fewer than one node."""

    def __init__(self, size):
        super().__init__(f"Graph size must be an integer >= 1, got {size!r}")
        self.size = size


class InvalidOptionError(GraphError, ValueError):
    """A request option has the wrong type (e.g. symmetric="maybe")."""

    def __init__(self, option: str, value):
        super().__init__(f"Invalid value for '{option}': {value!r}")
        self.option = option
        self.value = value


class NotFoundError(GraphError, LookupError):
    status_code = 404

    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__(message or f"No node named '{name}'")
        self.name = name


class EmptyGraphError(GraphError, ValueError):
    """Trace requested over a graph with zero nodes."""

    def __init__(self):
        super().__init__("Cannot trace shortest paths over an empty graph")


class ExhaustedFrontierError(RuntimeError):
    """Selection found no unsettled node at all while the run expected one."""
