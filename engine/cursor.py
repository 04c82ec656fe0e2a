"""
cursor.py — Snapshot Replay Cursor
==================================
The TraceCursor is the ONLY object a consumer steps with after a run.
It never re-runs the algorithm: it only moves an integer `step` over a
precomputed snapshot sequence.

State machine (derived from `step` and N = number of snapshots):
    IDLE      step == 0          nothing revealed yet
    STEPPING  0 < step < N
    FINISHED  step == N

    advance()  : step += 1 unless step == N
    retreat()  : step -= 1 unless step < 2

Snapshot 1 is the seeding from the start node and stays visible once
revealed, which is why retreat() stops at step 1 rather than 0.

Thread safety:
  Not thread-safe.  There is exactly one mutator (the caller driving
  the cursor), so none is needed.
"""

from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms.snapshot import Snapshot


class CursorState(Enum):
    IDLE     = "idle"
    STEPPING = "stepping"
    FINISHED = "finished"


# on_step(current, hidden): `hidden` is the snapshot a retreat just took
# off screen, None on advance
StepCallback = Callable[[Optional[Snapshot], Optional[Snapshot]], None]


class TraceCursor:
    """
    Attributes:
        snapshots : The full, immutable snapshot sequence.
        step      : 0..N, how many snapshots are revealed.
        on_step   : Optional callback fired after every successful move.
    """

    def __init__(self, snapshots: Sequence[Snapshot], on_step: Optional[StepCallback] = None):
        self.snapshots: tuple                  = tuple(snapshots)
        self.on_step:   Optional[StepCallback] = on_step
        self._step:     int                    = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def step(self) -> int:
        return self._step

    @property
    def total(self) -> int:
        return len(self.snapshots)

    @property
    def state(self) -> CursorState:
        if self._step == 0:
            return CursorState.IDLE
        if self._step == self.total:
            return CursorState.FINISHED
        return CursorState.STEPPING

    def can_advance(self) -> bool:
        return self._step < self.total

    def can_retreat(self) -> bool:
        return self._step >= 2

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def advance(self) -> bool:
        """Reveal the next snapshot.  Returns False if already at the end."""
        if not self.can_advance():
            return False
        self._step += 1
        self._notify(hidden=None)
        return True

    def retreat(self) -> bool:
        """Hide the current snapshot.  Returns False at step 0 or 1."""
        if not self.can_retreat():
            return False
        hidden = self.snapshots[self._step - 1]
        self._step -= 1
        self._notify(hidden=hidden)
        return True

    def reset(self) -> None:
        """Back to IDLE without touching the snapshots."""
        self._step = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current(self) -> Optional[Snapshot]:
        if self._step == 0:
            return None
        return self.snapshots[self._step - 1]

    @property
    def newly_settled(self) -> Optional[str]:
        """Node settled at the current step: settled[step - 1]."""
        snap = self.current
        if snap is None:
            return None
        return snap.settled[self._step - 1]

    @property
    def revealed(self) -> List[Snapshot]:
        return list(self.snapshots[:self._step])

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self, hidden: Optional[Snapshot]) -> None:
        if self.on_step:
            self.on_step(self.current, hidden)

    def __repr__(self) -> str:
        return f"TraceCursor(step={self._step}/{self.total}, state={self.state.value})"
