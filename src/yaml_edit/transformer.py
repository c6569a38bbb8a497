"""YAML-aware splice transformer.

Wraps generic splice ops so every replacement is quoted for the position it
lands in. The quoting of block scalars depends on the indentation of the line
the value starts on, which is only known once the whole document is in hand,
so the transformer buffers the complete source before editing anything.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Mapping, Optional, Union, overload

import yaml

from yaml_edit import nodes
from yaml_edit.errors import IndexNotReadyError, ShortSourceError, YamlEditError
from yaml_edit.lines import LineIndex
from yaml_edit.quoting import quote
from yaml_edit.runtime import telemetry
from yaml_edit.splice import Op, SpliceTransformer, with_value

ENCODING = "utf-8"
ERRORS = "surrogateescape"


class TransformerState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class IndexProvider:
    """Deferred access to the line index of the pass in progress."""

    def __init__(self) -> None:
        self._index: Optional[LineIndex] = None

    def install(self, index: LineIndex) -> None:
        self._index = index

    def clear(self) -> None:
        self._index = None

    def __call__(self) -> LineIndex:
        if self._index is None:
            raise IndexNotReadyError("line index requested before the source was read")
        return self._index


def quoted_op(op: Op, provider: IndexProvider) -> Op:
    """Return ``op`` with its output passed through the quoting policy."""

    original = op.replace
    start = op.start

    def replace(prev: str) -> str:
        value = original(prev)
        return quote(value, prev, provider().indent_at(start))

    return op.with_replacer(replace)


class YamlTransformer:
    """Applies quoting-aware edits to a YAML document in one pass.

    ``transform`` accepts ``str`` or ``bytes`` and returns the same type. Call
    ``reset`` before reusing an instance on another document.
    """

    def __init__(self, *ops: Op, logger_name: Optional[str] = None) -> None:
        self._provider = IndexProvider()
        self._logger_name = logger_name
        self._splice = SpliceTransformer(
            *(quoted_op(op, self._provider) for op in ops), logger_name=logger_name
        )
        self.state = TransformerState.UNINITIALIZED

    @property
    def index(self) -> LineIndex:
        return self._provider()

    @overload
    def transform(self, src: str, *, at_eof: bool = True) -> str: ...

    @overload
    def transform(self, src: bytes, *, at_eof: bool = True) -> bytes: ...

    def transform(
        self, src: Union[str, bytes], *, at_eof: bool = True
    ) -> Union[str, bytes]:
        if not at_eof:
            raise ShortSourceError()

        if isinstance(src, (bytes, bytearray)):
            text = bytes(src).decode(ENCODING, ERRORS)
            return self._run(text).encode(ENCODING, ERRORS)
        return self._run(src)

    def _run(self, text: str) -> str:
        with telemetry.span(
            "transform::pass",
            logger_name=self._logger_name,
            component="transformer",
            metadata={"ops": len(self._splice.ops), "length": len(text)},
        ):
            if self.state is TransformerState.UNINITIALIZED:
                index = LineIndex.build(text)
                self._provider.install(index)
                self.state = TransformerState.READY
                telemetry.record_event(
                    "index::built",
                    data={"lines": len(index)},
                    logger_name=self._logger_name,
                )
            return self._splice.transform(text)

    def reset(self) -> None:
        self._splice.reset()
        self._provider.clear()
        self.state = TransformerState.UNINITIALIZED


class StreamEditor:
    """File-like sink that buffers writes and emits the edited text on close."""

    def __init__(self, transformer: YamlTransformer) -> None:
        self._transformer = transformer
        self._chunks: List[str] = []
        self.result: Optional[str] = None

    def write(self, chunk: str) -> int:
        if self.result is not None:
            raise ValueError("write to a closed StreamEditor")
        self._chunks.append(chunk)
        return len(chunk)

    def close(self) -> str:
        if self.result is None:
            self.result = self._transformer.transform("".join(self._chunks))
            self._chunks.clear()
        return self.result

    def __enter__(self) -> "StreamEditor":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.close()
        return False


def edit(text: str, *ops: Op) -> str:
    """Apply ``ops`` to ``text`` with a fresh transformer."""

    return YamlTransformer(*ops).transform(text)


def update(text: str, changes: Mapping[str, str]) -> str:
    """Set the scalars addressed by JSON pointers in ``changes`` to new values."""

    root = nodes.compose(text)
    ops = []
    for pointer, value in changes.items():
        target = nodes.find(root, pointer)
        if not isinstance(target, yaml.ScalarNode):
            raise YamlEditError(f"Node at '{pointer}' is not a scalar")
        selection = nodes.node(target)
        if selection.start == selection.end:
            raise YamlEditError(f"Node at '{pointer}' has no text to replace")
        ops.append(with_value(selection, value))
    return edit(text, *ops)


__all__ = [
    "IndexProvider",
    "StreamEditor",
    "TransformerState",
    "YamlTransformer",
    "edit",
    "quoted_op",
    "update",
]
