"""
sequence/
---------
Core data layer.  Public API:

    from sequence import Sequence, Element
    from sequence import ElementTag, TAG_COLORS
"""

from sequence.element  import Element, ElementTag, TAG_COLORS, Number
from sequence.sequence import Sequence, PRESETS

__all__ = [
    "Element",   "ElementTag",
    "TAG_COLORS", "Number",
    "Sequence",  "PRESETS",
]
