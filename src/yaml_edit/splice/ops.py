"""Edit operations consumed by the splice engine."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable

from .selection import Selection

Replacer = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class Op:
    """Replace the text under ``selection`` with ``replace(previous_text)``.

    ``replace`` may raise; the exception aborts the whole pass.
    """

    selection: Selection
    replace: Replacer

    def __post_init__(self) -> None:
        if not callable(self.replace):
            raise TypeError("replace must be callable")

    @property
    def start(self) -> int:
        return self.selection.start

    @property
    def end(self) -> int:
        return self.selection.end

    def with_replacer(self, replacer: Replacer) -> "Op":
        return dataclasses.replace(self, replace=replacer)


def with_value(selection: Selection, value: str) -> Op:
    """Op that ignores the previous text and substitutes ``value``."""

    return Op(selection, lambda _prev: value)


def with_func(selection: Selection, fn: Replacer) -> Op:
    return Op(selection, fn)
