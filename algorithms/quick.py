"""
quick.py — Quick Sort
======================
Lomuto partition with the last element as pivot.

Emits a Step at:
  1. Each comparison of a[j] against the pivot  →  a[j] COMPARING, pivot PIVOT
  2. Each swap of a smaller element leftward     (only when i ≠ j)
  3. The pivot landing at i + 1                  (only when it actually moves)

The pivot's landing index is final and is tagged SORTED immediately.
Cancellation is checked at entry to every recursive call and between
the two recursive calls.
"""

from typing import List, Optional

from algorithms.context import SortContext
from sequence import ElementTag


PSEUDOCODE: List[str] = [
    "def quick(low, high):",                       # 0
    "    if low < high:",                          # 1
    "        pi ← partition(low, high)",           # 2
    "        quick(low, pi-1); quick(pi+1, high)", # 3
    "def partition(low, high):",                   # 4
    "    pivot ← a[high]; i ← low - 1",            # 5
    "    for j in low .. high-1:",                 # 6
    "        if a[j] < pivot: i++, swap(a[i], a[j])",  # 7
    "    swap(a[i+1], a[high]); return i+1",       # 8
]


async def quick_sort(ctx: SortContext) -> None:
    await _quick(ctx, 0, ctx.n - 1)


async def _quick(ctx: SortContext, low: int, high: int) -> None:
    if ctx.cancelled or low > high:
        return
    if low == high:
        ctx.mark(ElementTag.SORTED, low)
        return

    pi = await _partition(ctx, low, high)
    if pi is None:
        return
    ctx.mark(ElementTag.SORTED, pi)

    await _quick(ctx, low, pi - 1)
    if ctx.cancelled:
        return
    await _quick(ctx, pi + 1, high)


async def _partition(ctx: SortContext, low: int, high: int) -> Optional[int]:
    """Returns the pivot's final index, or None if the run was stopped."""
    ctx.mark(ElementTag.PIVOT, high)
    i = low - 1

    for j in range(low, high):
        if ctx.cancelled:
            return None
        ctx.mark(ElementTag.COMPARING, j)
        smaller = ctx.less(j, high)
        if not await ctx.step(f"Compare {j} with pivot at {high}"):
            return None

        if smaller:
            i += 1
            if i != j:
                ctx.mark(ElementTag.SWAPPING, i, j)
                ctx.swap(i, j)
                if not await ctx.step(f"Swap {i} & {j}"):
                    return None
                ctx.unmark(i)
        ctx.unmark(j)

    pi = i + 1
    if pi != high:
        ctx.mark(ElementTag.SWAPPING, pi)
        ctx.swap(pi, high)
        if not await ctx.step(f"Place pivot at {pi}"):
            return None
        ctx.unmark(high)
    return pi
