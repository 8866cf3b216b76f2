"""
merge.py — Merge Sort
======================
Top-down merge sort, split at (lo + hi) // 2.

The merge is done in place by rotation: when the head of the right run
is strictly smaller than the head of the left run it is lifted out and
dropped in front of the left run.  Equal values never jump, so ties
resolve to the left half (stable), and every intermediate frame holds
exactly the input values.

Emits a Step at:
  1. Each head-to-head comparison   →  both heads COMPARING
  2. Each move of a right-run head  →  moved bar SWAPPING

Cancellation is checked at entry to every recursive call and between
the two halves, not only inside the merge loop.
"""

from typing import List

from algorithms.context import SortContext
from sequence import ElementTag


PSEUDOCODE: List[str] = [
    "def sort(lo, hi):",                           # 0
    "    if lo ≥ hi: return",                      # 1
    "    mid ← (lo + hi) // 2",                    # 2
    "    sort(lo, mid); sort(mid+1, hi)",          # 3
    "    merge(lo, mid, hi)",                      # 4
    "def merge(lo, mid, hi):",                     # 5
    "    while left and right runs non-empty:",    # 6
    "        if a[j] < a[i]: move a[j] before a[i]",  # 7
    "        advance i",                           # 8
]


async def merge_sort(ctx: SortContext) -> None:
    await _sort(ctx, 0, ctx.n - 1)
    if not ctx.cancelled:
        ctx.mark_range(ElementTag.SORTED, 0, ctx.n - 1)


async def _sort(ctx: SortContext, lo: int, hi: int) -> None:
    if ctx.cancelled or lo >= hi:
        return
    mid = (lo + hi) // 2
    await _sort(ctx, lo, mid)
    if ctx.cancelled:
        return
    await _sort(ctx, mid + 1, hi)
    if ctx.cancelled:
        return
    await _merge(ctx, lo, mid, hi)


async def _merge(ctx: SortContext, lo: int, mid: int, hi: int) -> None:
    i, j = lo, mid + 1      # i: head of left run, j: head of right run
    while i <= mid and j <= hi:
        if ctx.cancelled:
            return

        ctx.mark(ElementTag.COMPARING, i, j)
        right_first = ctx.less(j, i)
        if not await ctx.step(f"Merge [{lo}, {hi}]: compare {i} & {j}"):
            return

        if right_first:
            ctx.unmark(i)
            ctx.mark(ElementTag.SWAPPING, j)
            ctx.move(j, i)
            mid += 1
            j += 1
            if not await ctx.step(f"Move {j - 1} to {i}"):
                return
            ctx.unmark(i)
        else:
            ctx.unmark(i, j)
        i += 1
