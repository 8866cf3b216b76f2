"""
radix.py — LSD Radix Sort (base 10)
====================================
Non-negative integers only.  One stable counting pass per decimal digit,
exp = 1, 10, 100, … while max // exp > 0.

Emits a Step at:
  1. Each comparison while finding the maximum
  2. Each bar tallied for the current digit
  3. Each bar rotated into its slot for the current digit

Bars are tagged SORTED only during the last (most significant) pass.
"""

from typing import List

from algorithms.context import SortContext
from algorithms.counting import (
    find_max_index,
    place_in_order,
    require_non_negative_integers,
    tally_and_order,
)


PSEUDOCODE: List[str] = [
    "max ← maximum(a); exp ← 1",                   # 0
    "while max // exp > 0:",                       # 1
    "    stable counting sort by (x // exp) % 10", # 2
    "    exp ← exp * 10",                          # 3
]


async def radix_sort(ctx: SortContext) -> None:
    require_non_negative_integers(ctx.sequence, "radix sort")
    if ctx.n == 0:
        return

    max_idx = await find_max_index(ctx)
    if max_idx is None:
        return
    max_value = int(ctx.items[max_idx].value)

    exp = 1
    while max_value // exp > 0:
        if ctx.cancelled:
            return
        order = await tally_and_order(
            ctx, 10, lambda e, exp=exp: (int(e.value) // exp) % 10, f"Digit x{exp}:"
        )
        if order is None:
            return
        last_pass = max_value // (exp * 10) == 0
        if not await place_in_order(ctx, order, final=last_pass):
            return
        exp *= 10
