"""
step.py — Visualised Step Snapshot
===================================
After every unit of observable work an algorithm emits one Step.
A Step is a frozen-in-time picture of everything a renderer needs to
draw one frame:

    • Every bar's value and display tag, in current order
    • The running comparison / swap counters
    • Elapsed time (paused time excluded)
    • Whether the run is still live, paused, or just finished
    • A short plain-English note on what just happened

Design decisions:
  - Step is a frozen dataclass built from tuples, so an observer holding
    on to it can never see it change or reach back into the engine.
  - The sequence snapshot and the run-state snapshot travel together;
    a renderer never has to reconcile two half-updated objects.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from sequence import Number, Sequence


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number : 0 for the initial frame, then 1-based count of visualised steps.
        elements    : ((value, tag_string), …) in current order.
        comparisons : Comparisons evaluated so far in this run.
        swaps       : Swaps / moves performed so far in this run.
        elapsed_ms  : Wall-clock run time, excluding time spent paused.
        running     : Whether the run is still live.
        paused      : Whether the run is paused.
        speed       : Speed setting 1..100 when the step was taken.
        algorithm   : Registry key of the running algorithm (None between runs).
        explanation : Human-readable note about this step.
        is_final    : True on the closing frame of a completed run.
    """

    step_number:  int                             = 0
    elements:     Tuple[Tuple[Number, str], ...]  = ()
    comparisons:  int                             = 0
    swaps:        int                             = 0
    elapsed_ms:   float                           = 0.0
    running:      bool                            = False
    paused:       bool                            = False
    speed:        int                             = 0
    algorithm:    Optional[str]                   = None
    explanation:  str                             = ""
    is_final:     bool                            = False

    @property
    def values(self) -> List[Number]:
        return [v for v, _ in self.elements]

    @property
    def tags(self) -> List[str]:
        return [t for _, t in self.elements]

    @classmethod
    def capture(cls, sequence: Sequence, state, explanation: str = "", is_final: bool = False) -> "Step":
        """Freeze the sequence together with the RunState it is being sorted under."""
        return cls(
            step_number=state.step_number,
            elements=sequence.snapshot(),
            comparisons=state.comparisons,
            swaps=state.swaps,
            elapsed_ms=state.elapsed_ms,
            running=state.running,
            paused=state.paused,
            speed=state.speed,
            algorithm=state.algorithm,
            explanation=explanation,
            is_final=is_final,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "elements":    [{"value": v, "tag": t} for v, t in self.elements],
            "comparisons": self.comparisons,
            "swaps":       self.swaps,
            "elapsed_ms":  round(self.elapsed_ms, 2),
            "running":     self.running,
            "paused":      self.paused,
            "speed":       self.speed,
            "algorithm":   self.algorithm,
            "explanation": self.explanation,
            "is_final":    self.is_final,
        }
