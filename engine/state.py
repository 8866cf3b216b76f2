"""
state.py — Run State
=====================
The one mutable context shared by the controller, the pacer and every
algorithm frame of a run.  It is passed by reference, never copied per
recursive call.

Lifecycle:
    created   →  reset_counters()   (new array / reset)
    begin()   →  running=True, counters zeroed, new generation
    pause() / resume()  toggle `paused` while running
    finish()  →  running=False, clock frozen

`generation` is a run token: an algorithm task compares its own token
with the current one, so a task that was stopped and is still asleep
can never wake up inside a newer run.
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Optional

from config import DEFAULT_SPEED


@dataclass
class RunState:
    running:      bool            = False
    paused:       bool            = False
    comparisons:  int             = 0
    swaps:        int             = 0
    speed:        int             = DEFAULT_SPEED
    algorithm:    Optional[str]   = None
    generation:   int             = 0
    step_number:  int             = 0
    start_time:   Optional[float] = None     # time.monotonic() at begin()
    end_time:     Optional[float] = None
    paused_total: float           = 0.0      # seconds spent paused
    _paused_at:   Optional[float] = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset_counters(self) -> None:
        self.comparisons  = 0
        self.swaps        = 0
        self.step_number  = 0
        self.start_time   = None
        self.end_time     = None
        self.paused_total = 0.0
        self._paused_at   = None

    def begin(self, algorithm: str) -> int:
        """Enter a new run and return its generation token."""
        self.reset_counters()
        self.generation += 1
        self.algorithm   = algorithm
        self.running     = True
        self.paused      = False
        self.start_time  = time.monotonic()
        return self.generation

    def finish(self) -> None:
        self.set_paused(False)
        self.running = False
        if self.start_time is not None and self.end_time is None:
            self.end_time = time.monotonic()

    def set_paused(self, paused: bool) -> None:
        if paused == self.paused:
            return
        now = time.monotonic()
        if paused:
            self._paused_at = now
        elif self._paused_at is not None:
            self.paused_total += now - self._paused_at
            self._paused_at = None
        self.paused = paused

    # ------------------------------------------------------------------
    # Derived
    # ------------------------------------------------------------------
    @property
    def elapsed_ms(self) -> float:
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.monotonic()
        paused = self.paused_total
        if self._paused_at is not None:
            paused += end - self._paused_at
        return max(0.0, (end - self.start_time - paused) * 1000)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the analytics card renders after a run
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    size:         int   = 0
    comparisons:  int   = 0
    swaps:        int   = 0
    total_steps:  int   = 0       # visualised steps, excluding the opening / closing frames
    elapsed_ms:   float = 0.0     # excludes time spent paused
    completed:    bool  = False   # False when the run was stopped part-way

    @classmethod
    def from_state(cls, state: RunState, algo_label: str, size: int, completed: bool) -> "RunMetrics":
        return cls(
            algo_key=state.algorithm or "",
            algo_label=algo_label,
            size=size,
            comparisons=state.comparisons,
            swaps=state.swaps,
            total_steps=state.step_number,
            elapsed_ms=round(state.elapsed_ms, 2),
            completed=completed,
        )

    def to_dict(self) -> dict:
        return asdict(self)
