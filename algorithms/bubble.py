"""
bubble.py — Bubble Sort
========================
Emits a Step at:
  1. Each adjacent comparison  →  both bars COMPARING
  2. Each swap                 →  both bars SWAPPING

After pass i the bar at n-i-1 is in its final place and is tagged SORTED.
"""

from typing import List

from algorithms.context import SortContext
from sequence import ElementTag


PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",                          # 0
    "    for j in 0 .. n-i-2:",                    # 1
    "        if a[j] > a[j+1]:",                   # 2
    "            swap(a[j], a[j+1])",              # 3
    "    a[n-i-1] is in place",                    # 4
]


async def bubble_sort(ctx: SortContext) -> None:
    n = ctx.n
    for i in range(n - 1):
        for j in range(n - i - 1):
            if ctx.cancelled:
                return

            ctx.mark(ElementTag.COMPARING, j, j + 1)
            out_of_order = ctx.greater(j, j + 1)
            if not await ctx.step(f"Compare {j} & {j + 1}"):
                return

            if out_of_order:
                ctx.mark(ElementTag.SWAPPING, j, j + 1)
                ctx.swap(j, j + 1)
                if not await ctx.step(f"Swap {j} & {j + 1}"):
                    return

            ctx.unmark(j, j + 1)

        ctx.mark(ElementTag.SORTED, n - i - 1)

    if n:
        ctx.mark(ElementTag.SORTED, 0)
