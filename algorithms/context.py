"""
context.py — Shared Sorting Context
====================================
Every algorithm receives exactly one SortContext and threads it through
all of its recursive calls.  The context is the only way an algorithm
touches the outside world:

    ctx.items            – the live list of Elements (mutate via swap / move)
    ctx.greater(i, j)    – counted comparison
    ctx.swap(i, j)       – counted swap
    ctx.move(src, dst)   – counted rotation (insertion / merge / placement)
    ctx.mark(tag, *idx)  – retag bars
    await ctx.step(note) – emit a Step, then pace; returns False once cancelled
    ctx.cancelled        – checkpoint guard

Usage inside an algorithm:
    if ctx.cancelled:
        return
    ctx.mark(ElementTag.COMPARING, j, j + 1)
    bigger = ctx.greater(j, j + 1)
    if not await ctx.step(f"Compare {j} & {j + 1}"):
        return
"""

from typing import TYPE_CHECKING, Callable, List, Optional

from algorithms.step import Step
from sequence import Element, ElementTag, Sequence

if TYPE_CHECKING:
    from engine.pacer import Pacer
    from engine.state import RunState


class SortContext:
    """
    Attributes:
        sequence   : The working Sequence being sorted in place.
        state      : The shared RunState (counters, running / paused flags, speed).
        generation : Run token captured at start; a mismatch means this run was superseded.
        on_step    : Optional callback(Step) fired after every visualised step.
    """

    def __init__(
        self,
        sequence: Sequence,
        state: "RunState",
        pacer: "Pacer",
        generation: int,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.sequence   = sequence
        self.state      = state
        self.generation = generation
        self.on_step    = on_step
        self._pacer     = pacer

    @property
    def items(self) -> List[Element]:
        return self.sequence.items

    @property
    def n(self) -> int:
        return len(self.sequence.items)

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------
    @property
    def cancelled(self) -> bool:
        return not self.state.running or self.state.generation != self.generation

    def alive(self) -> bool:
        return not self.cancelled

    async def step(self, explanation: str = "") -> bool:
        """
        One visualised step: publish a snapshot, then pace.

        Returns False when the run was stopped during the suspension;
        the caller must return without doing any further work.
        """
        if self.cancelled:
            return False
        self.state.step_number += 1
        if self.on_step is not None:
            self.on_step(Step.capture(self.sequence, self.state, explanation))
        await self._pacer.pace(self.state, self.alive)
        return not self.cancelled

    # ------------------------------------------------------------------
    # Counted operations
    # ------------------------------------------------------------------
    def greater(self, i: int, j: int) -> bool:
        self.state.comparisons += 1
        return self.items[i].value > self.items[j].value

    def less(self, i: int, j: int) -> bool:
        self.state.comparisons += 1
        return self.items[i].value < self.items[j].value

    def swap(self, i: int, j: int) -> None:
        if i == j:
            return
        items = self.items
        items[i], items[j] = items[j], items[i]
        self.state.swaps += 1

    def move(self, src: int, dst: int) -> None:
        """Lift the element at `src` and drop it at `dst`, shifting the bars in between by one."""
        if src == dst:
            return
        items = self.items
        items.insert(dst, items.pop(src))
        self.state.swaps += 1

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------
    def mark(self, tag: ElementTag, *indices: int) -> None:
        items = self.items
        for i in indices:
            items[i].tag = tag

    def mark_range(self, tag: ElementTag, lo: int, hi: int) -> None:
        """Tag items[lo:hi + 1]."""
        for e in self.items[lo:hi + 1]:
            e.tag = tag

    def unmark(self, *indices: int) -> None:
        """Back to DEFAULT, except bars already in their final place."""
        items = self.items
        for i in indices:
            if not items[i].is_sorted:
                items[i].tag = ElementTag.DEFAULT
