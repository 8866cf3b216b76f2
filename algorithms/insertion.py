"""
insertion.py — Insertion Sort
==============================
Shift-based insertion where every shift is an adjacent swap of the key
with its left neighbour, so no value is ever duplicated on screen.

Emits a Step at:
  1. Each comparison of the key with its left neighbour
  2. Each leftward shift (counted as one swap)

The key's final resting index is wherever the first non-greater
neighbour (or the left edge) stops it.
"""

from typing import List

from algorithms.context import SortContext
from sequence import ElementTag


PSEUDOCODE: List[str] = [
    "for i in 1 .. n-1:",                          # 0
    "    j ← i",                                   # 1
    "    while j > 0 and a[j-1] > a[j]:",          # 2
    "        swap(a[j-1], a[j])",                  # 3
    "        j ← j - 1",                           # 4
]


async def insertion_sort(ctx: SortContext) -> None:
    for i in range(1, ctx.n):
        if ctx.cancelled:
            return

        j = i
        ctx.mark(ElementTag.SWAPPING, j)
        while j > 0:
            if ctx.cancelled:
                return
            ctx.mark(ElementTag.COMPARING, j - 1)
            bigger = ctx.greater(j - 1, j)
            if not await ctx.step(f"Compare key with index {j - 1}"):
                return
            if not bigger:
                ctx.unmark(j - 1)
                break

            ctx.swap(j - 1, j)
            ctx.unmark(j)
            j -= 1
            if not await ctx.step(f"Shift key to {j}"):
                return

        ctx.unmark(j)

    ctx.mark_range(ElementTag.SORTED, 0, ctx.n - 1)
