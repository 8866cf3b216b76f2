"""
selection.py — Selection Sort
==============================
Emits a Step at:
  1. Each comparison of a[j] against the running minimum
  2. The single swap that brings the minimum to position i (skipped when min == i)
  3. Position i fixed  →  SORTED
"""

from typing import List

from algorithms.context import SortContext
from sequence import ElementTag


PSEUDOCODE: List[str] = [
    "for i in 0 .. n-1:",                          # 0
    "    min ← i",                                 # 1
    "    for j in i+1 .. n-1:",                    # 2
    "        if a[j] < a[min]: min ← j",           # 3
    "    if min ≠ i: swap(a[i], a[min])",          # 4
]


async def selection_sort(ctx: SortContext) -> None:
    n = ctx.n
    for i in range(n):
        if ctx.cancelled:
            return
        min_idx = i

        for j in range(i + 1, n):
            if ctx.cancelled:
                return
            ctx.mark(ElementTag.COMPARING, j, min_idx)
            smaller = ctx.less(j, min_idx)
            if not await ctx.step(f"Compare {j} with current minimum at {min_idx}"):
                return
            ctx.unmark(j, min_idx)
            if smaller:
                min_idx = j

        if min_idx != i:
            ctx.mark(ElementTag.SWAPPING, i, min_idx)
            ctx.swap(i, min_idx)
            if not await ctx.step(f"Swap minimum into position {i}"):
                return
            ctx.unmark(min_idx)

        ctx.mark(ElementTag.SORTED, i)
        if not await ctx.step(f"Position {i} fixed"):
            return
