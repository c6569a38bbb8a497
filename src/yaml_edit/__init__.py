"""Format-preserving in-place edits of YAML documents."""

from .errors import (
    AliasError,
    IndexNotReadyError,
    NodeNotFoundError,
    OverlapError,
    QuotingError,
    SelectionRangeError,
    ShortSourceError,
    YamlEditError,
)
from .lines import LineIndex
from .nodes import Style, compose, find, node, span_for
from .quoting import quote
from .splice import Op, Selection, point, span, with_func, with_value
from .transformer import (
    IndexProvider,
    StreamEditor,
    TransformerState,
    YamlTransformer,
    edit,
    quoted_op,
    update,
)

__all__ = [
    "AliasError",
    "IndexNotReadyError",
    "IndexProvider",
    "LineIndex",
    "NodeNotFoundError",
    "Op",
    "OverlapError",
    "QuotingError",
    "Selection",
    "SelectionRangeError",
    "ShortSourceError",
    "StreamEditor",
    "Style",
    "TransformerState",
    "YamlEditError",
    "YamlTransformer",
    "compose",
    "edit",
    "find",
    "node",
    "point",
    "quote",
    "quoted_op",
    "span",
    "span_for",
    "update",
    "with_func",
    "with_value",
]

__version__ = "0.1.0"
