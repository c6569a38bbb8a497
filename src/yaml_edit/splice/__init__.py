"""Generic ordered range replacement."""

from .engine import SpliceTransformer
from .ops import Op, Replacer, with_func, with_value
from .selection import Selection, point, span

__all__ = [
    "Op",
    "Replacer",
    "Selection",
    "SpliceTransformer",
    "point",
    "span",
    "with_func",
    "with_value",
]
