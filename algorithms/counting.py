"""
counting.py — Counting Sort (stable)
=====================================
Non-negative integers up to MAX_COUNTING_VALUE only.  Three phases:

  1. Find the maximum            →  one counted comparison per bar after the first
  2. Tally every value           →  bar COMPARING while it is counted
  3. Place bars left to right    →  bar SWAPPING while it moves, then SORTED

Placement uses cumulative counts walked right to left, so equal values
keep their original relative order.  Each bar is moved into its slot by
rotation rather than written into an output array, so the frame never
shows a duplicated or missing value.

`find_max_index`, `place_in_order` and `require_non_negative_integers`
are shared with radix sort.
"""

from typing import Callable, List, Optional

from algorithms.context import SortContext
from config import MAX_COUNTING_VALUE
from errors import InvalidInputError
from sequence import Element, ElementTag, Sequence


PSEUDOCODE: List[str] = [
    "max ← maximum(a)",                            # 0
    "count ← [0] * (max + 1)",                     # 1
    "for x in a: count[x] += 1",                   # 2
    "for v in 1 .. max: count[v] += count[v-1]",   # 3
    "for x in reversed(a):",                       # 4
    "    count[x] -= 1; out[count[x]] ← x",        # 5
]


def require_non_negative_integers(
    sequence: Sequence,
    algorithm: str = "counting sort",
    max_value: Optional[int] = None,
) -> None:
    """Raise InvalidInputError unless every value is a non-negative integer no larger than `max_value`."""
    if not sequence.all_non_negative_integers():
        raise InvalidInputError(f"{algorithm} requires non-negative integers")
    if max_value is not None and len(sequence) and max(sequence.values()) > max_value:
        raise InvalidInputError(f"{algorithm} supports values up to {max_value}, got {max(sequence.values())}")


async def counting_sort(ctx: SortContext) -> None:
    require_non_negative_integers(ctx.sequence, max_value=MAX_COUNTING_VALUE)
    if ctx.n == 0:
        return

    max_idx = await find_max_index(ctx)
    if max_idx is None:
        return
    max_value = int(ctx.items[max_idx].value)

    order = await tally_and_order(ctx, max_value + 1, lambda e: int(e.value), "Count")
    if order is None:
        return
    await place_in_order(ctx, order, final=True)


# ---------------------------------------------------------------------------
# Shared phases
# ---------------------------------------------------------------------------
async def find_max_index(ctx: SortContext) -> Optional[int]:
    """Index of the largest value, or None if the run was stopped."""
    max_idx = 0
    for i in range(1, ctx.n):
        if ctx.cancelled:
            return None
        ctx.mark(ElementTag.COMPARING, i, max_idx)
        if ctx.greater(i, max_idx):
            previous, max_idx = max_idx, i
        else:
            previous = i
        if not await ctx.step(f"Find max: compare {i}"):
            return None
        ctx.unmark(previous, max_idx)
    return max_idx


async def tally_and_order(
    ctx: SortContext,
    buckets: int,
    key: Callable[[Element], int],
    label: str,
) -> Optional[List[Element]]:
    """
    Count keys, accumulate, and return the Elements in stable sorted-by-key
    order.  None if the run was stopped while tallying.
    """
    counts = [0] * buckets
    for i in range(ctx.n):
        if ctx.cancelled:
            return None
        ctx.mark(ElementTag.COMPARING, i)
        counts[key(ctx.items[i])] += 1
        if not await ctx.step(f"{label} {ctx.items[i].value}"):
            return None
        ctx.unmark(i)

    for b in range(1, buckets):
        counts[b] += counts[b - 1]

    order: List[Optional[Element]] = [None] * ctx.n
    for e in reversed(ctx.items):
        k = key(e)
        counts[k] -= 1
        order[counts[k]] = e
    return order


async def place_in_order(ctx: SortContext, order: List[Element], final: bool) -> bool:
    """
    Rotate each Element into its slot, left to right.  Bars not yet placed
    keep their relative order.  Returns False once cancelled.
    """
    items = ctx.items
    for k, target in enumerate(order):
        if ctx.cancelled:
            return False
        p = next(idx for idx in range(k, len(items)) if items[idx] is target)
        ctx.mark(ElementTag.SWAPPING, p)
        ctx.move(p, k)
        if not await ctx.step(f"Place {target.value} at {k}"):
            return False
        if final:
            ctx.mark(ElementTag.SORTED, k)
        else:
            ctx.unmark(k)
    return True
