from enum import Enum
from typing import Dict, Union

Number = Union[int, float]


# ---------------------------------------------------------------------------
# Element Tag Enum: maps 1-to-1 with the bar colour palette
# ---------------------------------------------------------------------------
class ElementTag(Enum):
    DEFAULT    = "default"     # untouched
    COMPARING  = "comparing"   # taking part in the comparison happening RIGHT NOW
    SWAPPING   = "swapping"    # about to move / just moved
    SORTED     = "sorted"      # final position reached
    PIVOT      = "pivot"       # quicksort pivot for the current partition


TAG_COLORS: Dict[str, str] = {
    "default":   "#4fc3f7",   # light blue
    "comparing": "#ffeb3b",   # yellow
    "swapping":  "#f44336",   # red
    "sorted":    "#4caf50",   # green
    "pivot":     "#ab47bc",   # purple
}


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------
class Element:
    """
    One bar: a permanent value plus a transient display tag.

    The tag travels with the value when the element is swapped or moved,
    so there is no parallel tag array to keep in sync.  Equality is
    identity: two bars holding the same value are still two bars, which
    the stable placement in counting / radix sort relies on.

    Attributes:
        value : The number being sorted.  Never changed after construction.
        tag   : Current ElementTag for visual encoding.
    """

    __slots__ = ("value", "tag")

    def __init__(self, value: Number, tag: ElementTag = ElementTag.DEFAULT):
        self.value: Number     = value
        self.tag:   ElementTag = tag

    # ------------------------------------------------------------------
    # Tag helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.tag = ElementTag.DEFAULT

    @property
    def is_sorted(self) -> bool:
        return self.tag is ElementTag.SORTED

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"value": self.value, "tag": self.tag.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Element":
        return cls(data["value"], ElementTag(data.get("tag", "default")))

    def __repr__(self) -> str:
        return f"Element(value={self.value}, tag={self.tag.value})"
