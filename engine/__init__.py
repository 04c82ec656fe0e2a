"""
engine/
-------
Run & replay layer.

    from engine import TraceEngine, TraceCursor
"""

from engine.cursor import TraceCursor, CursorState
from engine.trace  import TraceEngine, TraceSummary

__all__ = [
    "TraceCursor",
    "CursorState",
    "TraceEngine",
    "TraceSummary",
]
