from __future__ import annotations

import pytest

from yaml_edit import (
    AliasError,
    NodeNotFoundError,
    Selection,
    Style,
    compose,
    find,
    node,
    span_for,
)

DOCUMENT = (
    "a: foo\n"
    "b: 'x y'\n"
    'c: "q"\n'
    "d: |\n"
    "  line1\n"
    "  line2\n"
    "e: >\n"
    "  folded\n"
    "items:\n"
    "  - first\n"
    "  - second\n"
    "a/b: slash\n"
)


def text_of(pointer: str, text: str = DOCUMENT) -> str:
    return node(find(compose(text), pointer)).slice(text)


def test_span_for_keeps_end_of_flow_scalars() -> None:
    for style in (None, "'", '"', Style.PLAIN, Style.DOUBLE_QUOTED):
        assert span_for(4, 10, style) == Selection(4, 10)


def test_span_for_trims_block_scalar_newline() -> None:
    assert span_for(4, 10, "|") == Selection(4, 9)
    assert span_for(4, 10, Style.FOLDED) == Selection(4, 9)


def test_style_of_parser_tags() -> None:
    assert Style.of(None) is Style.PLAIN
    assert Style.of("|") is Style.LITERAL
    assert Style.of(">").is_block
    assert not Style.of('"').is_block


def test_node_selects_plain_scalar() -> None:
    selection = node(find(compose(DOCUMENT), "/a"))

    assert selection == Selection(3, 6)
    assert selection.slice(DOCUMENT) == "foo"


def test_node_selects_quoted_scalars_with_quotes() -> None:
    assert text_of("/b") == "'x y'"
    assert text_of("/c") == '"q"'


def test_node_excludes_trailing_newline_of_block_scalars() -> None:
    assert text_of("/d") == "|\n  line1\n  line2"
    assert text_of("/e") == ">\n  folded"


def test_node_keeps_block_scalar_ending_the_buffer() -> None:
    text = "d: |\n  tail"

    assert text_of("/d", text) == "|\n  tail"


def test_find_walks_sequences_and_escapes() -> None:
    assert text_of("/items/1") == "second"
    assert text_of("/a~1b") == "slash"


@pytest.mark.parametrize("pointer", ["/missing", "/items/2", "/items/01", "/a/x", "a"])
def test_find_reports_unresolved_pointers(pointer: str) -> None:
    with pytest.raises(NodeNotFoundError):
        find(compose(DOCUMENT), pointer)


@pytest.mark.parametrize(
    ("text", "pointer"),
    [
        ("a: &x foo\nb: *x\n", "/b"),
        ("a: &x foo\nl: [*x]\n", "/l/0"),
        ("- &x foo\n- *x\n", "/1"),
        ("base: &b {k: v}\nother: *b\n", "/other/k"),
    ],
)
def test_find_rejects_aliases(text: str, pointer: str) -> None:
    with pytest.raises(AliasError):
        find(compose(text), pointer)


def test_find_accepts_the_anchored_node() -> None:
    assert text_of("/a", "a: &x foo\nb: *x\n") == "&x foo"
    assert text_of("/0", "- &x foo\n- *x\n") == "&x foo"
