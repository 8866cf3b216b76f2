"""
heap.py — Heap Sort
====================
Build a max-heap bottom-up from n//2 - 1 down to 0, then repeatedly swap
the root with the last unsorted bar and sift the new root down.

Emits a Step at:
  1. Each parent/child comparison (left and right counted separately)
  2. Each sift-down swap
  3. Each root extraction  →  extracted bar SORTED
"""

from typing import List

from algorithms.context import SortContext
from sequence import ElementTag


PSEUDOCODE: List[str] = [
    "for i in n//2-1 down to 0: heapify(n, i)",    # 0
    "for end in n-1 down to 1:",                   # 1
    "    swap(a[0], a[end])",                      # 2
    "    heapify(end, 0)",                         # 3
    "def heapify(size, root):",                    # 4
    "    largest ← max(root, left, right)",        # 5
    "    if largest ≠ root:",                      # 6
    "        swap(a[root], a[largest])",           # 7
    "        heapify(size, largest)",              # 8
]


async def heap_sort(ctx: SortContext) -> None:
    n = ctx.n
    for i in range(n // 2 - 1, -1, -1):
        if ctx.cancelled:
            return
        if not await _heapify(ctx, n, i):
            return

    for end in range(n - 1, 0, -1):
        if ctx.cancelled:
            return
        ctx.mark(ElementTag.SWAPPING, 0, end)
        ctx.swap(0, end)
        ctx.mark(ElementTag.SORTED, end)
        if not await ctx.step(f"Extract max to {end}"):
            return
        ctx.unmark(0)
        if not await _heapify(ctx, end, 0):
            return

    if n:
        ctx.mark(ElementTag.SORTED, 0)


async def _heapify(ctx: SortContext, size: int, root: int) -> bool:
    """Sift items[root] down inside items[:size].  Returns False once cancelled."""
    while True:
        if ctx.cancelled:
            return False

        largest = root
        for child in (2 * root + 1, 2 * root + 2):
            if child >= size:
                break
            ctx.mark(ElementTag.COMPARING, child, largest)
            if ctx.greater(child, largest):
                previous, largest = largest, child
            else:
                previous = child
            if not await ctx.step(f"Compare {child} with largest so far"):
                return False
            ctx.unmark(previous, largest)

        if largest == root:
            return True

        ctx.mark(ElementTag.SWAPPING, root, largest)
        ctx.swap(root, largest)
        if not await ctx.step(f"Sift down: swap {root} & {largest}"):
            return False
        ctx.unmark(root, largest)
        root = largest
