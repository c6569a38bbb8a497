"""Ordered range replacement over a complete source text."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from yaml_edit.errors import OverlapError, SelectionRangeError, ShortSourceError
from yaml_edit.runtime.telemetry import span

from .ops import Op


class SpliceTransformer:
    """Rewrites a text by substituting each op's output for its selection.

    Ops are sorted by position on construction and must not overlap. Text
    outside every selection is copied verbatim.
    """

    def __init__(self, *ops: Op, logger_name: Optional[str] = None) -> None:
        self._ops: Tuple[Op, ...] = _sorted_ops(ops)
        self._logger_name = logger_name
        self.applied = 0

    @property
    def ops(self) -> Sequence[Op]:
        return self._ops

    def transform(self, src: str, *, at_eof: bool = True) -> str:
        if not at_eof:
            raise ShortSourceError()

        with span(
            "splice::transform",
            logger_name=self._logger_name,
            metadata={"ops": len(self._ops), "length": len(src)},
        ) as handle:
            pieces: List[str] = []
            cursor = 0
            for op in self._ops:
                if op.end > len(src):
                    raise SelectionRangeError(
                        f"Selection {op.start}:{op.end} exceeds source length {len(src)}",
                        selection=op.selection,
                    )
                pieces.append(src[cursor : op.start])
                pieces.append(op.replace(op.selection.slice(src)))
                cursor = op.end
            pieces.append(src[cursor:])
            handle.add_metadata("applied", len(self._ops))

        self.applied = len(self._ops)
        return "".join(pieces)

    def reset(self) -> None:
        self.applied = 0


def _sorted_ops(ops: Sequence[Op]) -> Tuple[Op, ...]:
    ordered = tuple(sorted(ops, key=lambda op: (op.start, op.end)))
    widest: Optional[Op] = None
    for op in ordered:
        if widest is not None and widest.selection.overlaps(op.selection):
            raise OverlapError(widest.selection, op.selection)
        if widest is None or op.end > widest.end:
            widest = op
    return ordered
