"""
sequence.py — Working Sequence Container & Generator
=====================================================
Single source of truth for the array being sorted.  Algorithms mutate
`items` in place; the renderer only ever sees `snapshot()`.

Responsibilities:
  1. Hold the ordered list of Elements         (items / values)
  2. Generation factory                         (random, sorted, reversed, few-unique)
  3. Custom input parsing & validation          (text / list → Sequence)
  4. Tag helpers                                (reset between runs, mark all sorted)
  5. Read-only snapshots & serialisation        (snapshot / to_dict / from_dict)

Design decisions:
  - Elements are swapped or moved as objects, never overwritten, so the
    multiset of values is the same at every observable instant.
  - Validation happens before construction: a rejected input never
    touches an existing Sequence.
"""

import math
import numbers
import random
from collections import Counter
from typing import Iterable, Iterator, List, Optional, Sequence as SequenceT, Tuple

from errors import InvalidInputError
from sequence.element import Element, ElementTag, Number


PRESETS: Tuple[str, ...] = ("random", "sorted", "reversed", "few_unique")


class Sequence:
    """
    Attributes:
        items : [Element] – the working order; algorithms index into this list directly.
    """

    def __init__(self, values: Iterable[Number] = ()):
        self.items: List[Element] = [Element(v) for v in values]

    # ==================================================================
    # CONTAINER PROTOCOL
    # ==================================================================
    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.items)

    def __getitem__(self, idx: int) -> Element:
        return self.items[idx]

    def values(self) -> List[Number]:
        return [e.value for e in self.items]

    # ==================================================================
    # QUERIES
    # ==================================================================
    def is_sorted(self) -> bool:
        return all(self.items[i].value <= self.items[i + 1].value for i in range(len(self.items) - 1))

    def multiset(self) -> Counter:
        return Counter(self.values())

    def all_non_negative_integers(self) -> bool:
        return all(_is_integral(e.value) and e.value >= 0 for e in self.items)

    # ==================================================================
    # TAGS
    # ==================================================================
    def reset_tags(self) -> None:
        for e in self.items:
            e.reset()

    def mark_all(self, tag: ElementTag) -> None:
        for e in self.items:
            e.tag = tag

    # ==================================================================
    # SNAPSHOTS & SERIALISATION
    # ==================================================================
    def snapshot(self) -> Tuple[Tuple[Number, str], ...]:
        """Immutable (value, tag) pairs — safe to hand to any observer."""
        return tuple((e.value, e.tag.value) for e in self.items)

    def to_dict(self) -> dict:
        return {"elements": [e.to_dict() for e in self.items]}

    @classmethod
    def from_dict(cls, data: dict) -> "Sequence":
        seq = cls()
        seq.items = [Element.from_dict(d) for d in data.get("elements", [])]
        return seq

    # ==================================================================
    # GENERATORS: Factory class-methods
    # ==================================================================
    @classmethod
    def generate(
        cls,
        size: int,
        preset: str = "random",
        value_range: Tuple[int, int] = (10, 309),
        seed: Optional[int] = None,
    ) -> "Sequence":
        """
        Build `size` elements.

        Presets:
            random     – uniform integers in value_range
            sorted     – linearly spaced, ascending
            reversed   – linearly spaced, descending
            few_unique – drawn from only five distinct values
        """
        if size < 0:
            raise InvalidInputError(f"Array size must be non-negative, got {size}")
        if preset not in PRESETS:
            raise InvalidInputError(f"Unknown preset '{preset}'. Expected one of: {', '.join(PRESETS)}")

        rng = random.Random(seed)
        lo, hi = value_range

        if preset == "random":
            values = [rng.randint(lo, hi) for _ in range(size)]
        elif preset in ("sorted", "reversed"):
            if size == 1:
                values = [lo]
            else:
                values = [lo + round(i * (hi - lo) / (size - 1)) for i in range(size)]
            if preset == "reversed":
                values.reverse()
        else:
            pool = [rng.randint(lo, hi) for _ in range(5)]
            values = [rng.choice(pool) for _ in range(size)]

        return cls(values)

    # ==================================================================
    # CUSTOM INPUT
    # ==================================================================
    @classmethod
    def parse(cls, text: str, min_length: int = 5) -> "Sequence":
        """
        Parse comma-separated numbers, e.g. "5, 3, 9, 1, 2".

        The whole batch is rejected if any token is not a number or if
        there are fewer than `min_length` values.
        """
        tokens = [t.strip() for t in text.split(",")]
        if len(tokens) == 1 and not tokens[0]:
            tokens = []

        bad = [t for t in tokens if _parse_number(t) is None]
        if bad:
            raise InvalidInputError(
                f"Enter valid comma separated numbers (min {min_length}); not a number: {', '.join(repr(t) for t in bad)}"
            )
        return cls.from_values([_parse_number(t) for t in tokens], min_length=min_length)

    @classmethod
    def from_values(cls, values: SequenceT, min_length: int = 5) -> "Sequence":
        try:
            values = list(values)
        except TypeError:
            raise InvalidInputError(f"Expected a list of numbers, got {type(values).__name__}") from None
        if len(values) < min_length:
            raise InvalidInputError(
                f"Enter valid comma separated numbers (min {min_length}); got {len(values)}"
            )
        for v in values:
            if not _is_finite_number(v):
                raise InvalidInputError(f"Not a finite number: {v!r}")
        return cls(values)

    def __repr__(self) -> str:
        return f"Sequence({self.values()})"


# ---------------------------------------------------------------------------
# Number helpers
# ---------------------------------------------------------------------------
def _is_finite_number(v) -> bool:
    if isinstance(v, bool) or not isinstance(v, numbers.Real):
        return False
    return math.isfinite(v)


def _is_integral(v) -> bool:
    if isinstance(v, numbers.Integral):
        return True
    return isinstance(v, float) and v.is_integer()


def _parse_number(token: str) -> Optional[Number]:
    # int() and float() also take digit separators and non-ASCII digits
    if not token or "_" in token or not token.isascii():
        return None
    try:
        return int(token)
    except ValueError:
        pass
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
