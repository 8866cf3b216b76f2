"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, tags, stable, …),
        …
    }

Every `fn` is a coroutine function taking one SortContext.  The engine
and the web layer both consume AlgoInfo, so adding an algorithm means
writing the coroutine and adding one entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc
from algorithms.counting  import counting_sort  as _counting,  PSEUDOCODE as _counting_pc
from algorithms.radix     import radix_sort     as _radix,     PSEUDOCODE as _radix_pc

from algorithms.context  import SortContext
from algorithms.counting import require_non_negative_integers
from algorithms.step     import Step
from config import MAX_COUNTING_VALUE


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "merge"
    label:             str                    # human label, e.g. "Merge Sort"
    fn:                Callable               # async def fn(ctx: SortContext) -> None
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)   # e.g. ["comparison", "divide-and-conquer"]
    stable:            bool     = False       # equal values keep their input order?
    non_negative_only: bool     = False       # counting / radix precondition
    max_value:         Optional[int] = None   # largest accepted value, None = unbounded
    complexity_time:   str      = ""          # e.g. "O(n log n)"
    complexity_space:  str      = ""          # e.g. "O(1)"
    description:       str      = ""          # one-liner for the UI card

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":               self.key,
            "label":             self.label,
            "pseudocode":        list(self.pseudocode),
            "tags":              list(self.tags),
            "stable":            self.stable,
            "non_negative_only": self.non_negative_only,
            "max_value":         self.max_value,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        tags=["comparison", "in-place", "quadratic"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs. The largest bar bubbles to the end each pass.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        tags=["comparison", "in-place", "quadratic"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted part and swaps it into place. At most n-1 swaps.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        tags=["comparison", "in-place", "quadratic", "adaptive"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Slides each bar left until it meets a smaller one. Fast on nearly sorted input.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        tags=["comparison", "divide-and-conquer"], stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits in half, sorts each half, merges. Ties always come from the left half.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        tags=["comparison", "divide-and-conquer", "in-place"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last bar, then recurse on both sides of the pivot.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap, pseudocode=_heap_pc,
        tags=["comparison", "in-place"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap, then repeatedly moves the root to the end of the array.",
    ),

    "counting": AlgoInfo(
        key="counting", label="Counting Sort", fn=_counting, pseudocode=_counting_pc,
        tags=["non-comparison", "integer"], stable=True, non_negative_only=True,
        max_value=MAX_COUNTING_VALUE,
        complexity_time="O(n + k)", complexity_space="O(n + k)",
        description="Tallies every value, then places bars by cumulative count. Non-negative integers only.",
    ),

    "radix": AlgoInfo(
        key="radix", label="Radix Sort (LSD)", fn=_radix, pseudocode=_radix_pc,
        tags=["non-comparison", "integer"], stable=True, non_negative_only=True,
        complexity_time="O(d · (n + 10))", complexity_space="O(n)",
        description="Stable counting sort on each decimal digit, least significant first.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "SortContext",
    "Step",
    "get_algorithm",
    "require_non_negative_integers",
    "list_algorithms",
    "algorithms_by_tag",
]
