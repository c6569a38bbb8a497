"""Selections: half-open codepoint ranges into a source text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Selection:
    """``[start, end)`` in codepoints, ordered by start then end."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Selection start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(
                f"Selection end ({self.end}) precedes start ({self.start})"
            )

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Selection") -> bool:
        # An insertion point sitting on another span's boundary does not overlap.
        if self.start == self.end or other.start == other.end:
            return self.start < other.start < self.end or other.start < self.start < other.end
        return self.start < other.end and other.start < self.end

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


def span(start: int, end: int) -> Selection:
    return Selection(start, end)


def point(pos: int) -> Selection:
    """Empty selection at ``pos``; replacing it inserts text."""

    return Selection(pos, pos)
