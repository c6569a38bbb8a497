"""Mapping PyYAML nodes to source selections."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple, Union

import yaml

from yaml_edit.errors import AliasError, NodeNotFoundError
from yaml_edit.splice import Selection


class Style(Enum):
    PLAIN = ""
    SINGLE_QUOTED = "'"
    DOUBLE_QUOTED = '"'
    LITERAL = "|"
    FOLDED = ">"

    @classmethod
    def of(cls, tag: Optional[str]) -> "Style":
        """Convert a PyYAML ``node.style`` (``None`` for plain) to a ``Style``."""

        try:
            return cls(tag or "")
        except ValueError:
            # Collections carry ``flow_style`` instead and have no scalar style.
            return cls.PLAIN

    @property
    def is_block(self) -> bool:
        return self in (Style.LITERAL, Style.FOLDED)


StyleLike = Union[Style, str, None]


def span_for(index: int, index_end: int, style: StyleLike) -> Selection:
    """Selection covering a node that the parser reported as ``[index, index_end)``.

    Block scalar end offsets include the scalar's trailing newline; it is
    left out of the selection so a replacement neither eats nor duplicates it.
    """

    if not isinstance(style, Style):
        style = Style.of(style)
    trailing = 1 if style.is_block else 0
    return Selection(index, index_end - trailing)


def node(n: yaml.Node) -> Selection:
    """Selection spanning ``n`` in the text it was composed from."""

    style = Style.of(getattr(n, "style", None))
    end = n.end_mark
    if style.is_block and not _ends_with_newline(end):
        # A block scalar closing the buffer without a newline has nothing to trim.
        return Selection(n.start_mark.index, end.index)
    return span_for(n.start_mark.index, end.index, style)


def _ends_with_newline(mark: yaml.Mark) -> bool:
    buffer = getattr(mark, "buffer", None)
    pointer = getattr(mark, "pointer", None)
    if buffer is None or pointer is None or pointer == 0:
        return True
    return buffer[pointer - 1] == "\n"


def compose(text: str) -> yaml.Node:
    """Compose a single YAML document into its node tree."""

    root = yaml.compose(text, Loader=yaml.SafeLoader)
    if root is None:
        raise NodeNotFoundError("", None)
    return root


def find(root: yaml.Node, pointer: str) -> yaml.Node:
    """Resolve a JSON pointer (RFC 6901) such as ``/services/0/ports/1``."""

    if pointer == "":
        return root
    if not pointer.startswith("/"):
        raise NodeNotFoundError(pointer)

    current = root
    walked: List[str] = []
    for raw in pointer[1:].split("/"):
        segment = raw.replace("~1", "/").replace("~0", "~")
        found = _child(current, segment)
        if found is None:
            raise NodeNotFoundError(pointer, walked)
        child, floor = found
        walked.append(raw)
        if child.start_mark.index < floor:
            # Aliases compose to their anchored node, which sits earlier in the text.
            raise AliasError("/" + "/".join(walked))
        current = child
    return current


def _child(parent: yaml.Node, segment: str) -> Optional[Tuple[yaml.Node, int]]:
    """Child addressed by ``segment`` and the offset it cannot start before."""

    if isinstance(parent, yaml.MappingNode):
        for key, value in parent.value:
            if isinstance(key, yaml.ScalarNode) and key.value == segment:
                return value, key.end_mark.index
        return None
    if isinstance(parent, yaml.SequenceNode):
        if not segment.isdigit() or (len(segment) > 1 and segment.startswith("0")):
            return None
        position = int(segment)
        if position >= len(parent.value):
            return None
        floor = parent.start_mark.index
        for item in parent.value[:position]:
            floor = max(floor, item.end_mark.index)
        return parent.value[position], floor
    return None


__all__ = ["Style", "compose", "find", "node", "span_for"]
