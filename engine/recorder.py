"""
recorder.py — Headless Runs & Comparison Mode
==============================================
Runs an algorithm to completion with no pacing on a private copy of the
values, then compares two such runs side by side.

Usage:
    left  = await measure("merge", values)
    right = await measure("quick", values)
    result = compare(left, right)        # → ComparisonResult

The live RunController is never touched: each measurement builds its
own controller around its own Sequence, so a visualised run can keep
going while a comparison is computed on the same loop.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from config import EngineConfig
from engine.controller import RunController
from engine.state import RunMetrics
from sequence import Number, Sequence


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_swaps:       str = ""   # which algo moved bars less
    winner_steps:       str = ""   # which algo needed fewer visualised steps

    def to_dict(self) -> dict:
        return {
            "left":               self.left.to_dict(),
            "right":              self.right.to_dict(),
            "winner_comparisons": self.winner_comparisons,
            "winner_swaps":       self.winner_swaps,
            "winner_steps":       self.winner_steps,
        }


# ---------------------------------------------------------------------------
# Headless run
# ---------------------------------------------------------------------------
async def measure(
    algo_key: str,
    values: Iterable[Number],
    config: Optional[EngineConfig] = None,
) -> RunMetrics:
    """Sort a copy of `values` with `algo_key` as fast as the loop allows."""
    controller = RunController(config or EngineConfig.instant(), sequence=Sequence(values))
    metrics = await controller.run(algo_key)
    return metrics or RunMetrics()


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunMetrics, right: RunMetrics) -> ComparisonResult:
    """Given two finished RunMetrics, produce a ComparisonResult."""

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return left.algo_label if l_val < r_val else right.algo_label

    return ComparisonResult(
        left=left,
        right=right,
        winner_comparisons=winner(left.comparisons, right.comparisons),
        winner_swaps=winner(left.swaps, right.swaps),
        winner_steps=winner(left.total_steps, right.total_steps),
    )
