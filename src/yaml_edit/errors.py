"""Exception types raised by the splice engine and the YAML transformer."""

from __future__ import annotations

from typing import Iterable, Optional


class YamlEditError(RuntimeError):
    """Base class for every error raised by ``yaml_edit`` itself."""


class ShortSourceError(YamlEditError):
    """Raised when a transform is asked to work on a non-final chunk.

    This is a "need more input" signal rather than a failure: feed the whole
    document and call again with ``at_eof=True``.
    """

    def __init__(self, message: str = "transform requires the complete source") -> None:
        super().__init__(message)


class OverlapError(YamlEditError):
    """Raised when two edit operations claim overlapping spans."""

    def __init__(self, first: object, second: object) -> None:
        super().__init__(f"Selection {second} overlaps {first}")
        self.first = first
        self.second = second


class SelectionRangeError(YamlEditError):
    """Raised when a selection points past the end of the source."""

    def __init__(self, message: str, *, selection: object | None = None) -> None:
        super().__init__(message)
        self.selection = selection


class QuotingError(YamlEditError):
    """Raised when a value cannot be represented at its target position."""

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class IndexNotReadyError(YamlEditError):
    """Raised when the line index is read before the first complete pass."""


class AliasError(YamlEditError):
    """Raised when a pointer reaches a node through an alias (``*name``)."""

    def __init__(self, pointer: str) -> None:
        super().__init__(f"Node at '{pointer}' is an alias")
        self.pointer = pointer


class NodeNotFoundError(YamlEditError, LookupError):
    """Raised when a JSON pointer does not resolve to a node."""

    def __init__(self, pointer: str, segments: Optional[Iterable[str]] = None) -> None:
        resolved = "/".join(segments or ())
        message = f"Pointer '{pointer}' does not resolve"
        if resolved:
            message = f"{message} (stopped after '/{resolved}')"
        super().__init__(message)
        self.pointer = pointer


__all__ = [
    "YamlEditError",
    "ShortSourceError",
    "OverlapError",
    "SelectionRangeError",
    "QuotingError",
    "IndexNotReadyError",
    "NodeNotFoundError",
    "AliasError",
]
