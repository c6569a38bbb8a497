"""Line start and indentation index over a complete source text."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True, slots=True)
class LineIndex:
    """Codepoint offset and leading-space count of every line.

    Only ``' '`` counts as indentation; tabs are left to the quoting policy.
    """

    line_starts: Tuple[int, ...] = (0,)
    indents: Tuple[int, ...] = (0,)

    def __post_init__(self) -> None:
        if len(self.line_starts) != len(self.indents):
            raise ValueError("line_starts and indents must have the same length")

    @classmethod
    def build(cls, text: str) -> "LineIndex":
        starts: List[int] = []
        indents: List[int] = []
        pos = 0
        size = len(text)
        while True:
            starts.append(pos)
            depth = 0
            while pos < size and text[pos] == " ":
                depth += 1
                pos += 1
            indents.append(depth)
            newline = text.find("\n", pos)
            if newline < 0:
                break
            pos = newline + 1
        return cls(line_starts=tuple(starts), indents=tuple(indents))

    def __len__(self) -> int:
        return len(self.line_starts)

    def line_of(self, pos: int) -> int:
        """Index of the last line starting at or before ``pos``."""

        return max(bisect_right(self.line_starts, pos) - 1, 0)

    def indent_at(self, pos: int) -> int:
        return self.indents[self.line_of(pos)]
