"""Quoting policy: render a new scalar value in the style of the text it replaces."""

from __future__ import annotations

import io
import re
from typing import Optional, Tuple

import yaml
from yaml.emitter import Emitter, ScalarAnalysis
from yaml.resolver import Resolver

from yaml_edit.errors import QuotingError
from yaml_edit.nodes import Style
from yaml_edit.runtime import telemetry

STR_TAG = "tag:yaml.org,2002:str"
BLOCK_INDENT_STEP = 2

_HEADER = re.compile(r"^(?P<style>[|>])(?P<flags>[0-9+-]*)(?P<rest>.*)$")
_PROPERTIES = re.compile(r"^(?:[&!]\S*\s+)+")
_resolver = Resolver()


def quote(value: object, prev: str, indent: int) -> str:
    """Render ``value`` to replace ``prev``.

    ``indent`` is the indentation of the line ``prev`` starts on; block
    scalars need it when ``prev`` has no content lines to copy from.
    """

    if not isinstance(value, str):
        raise QuotingError(
            f"Cannot quote {type(value).__name__} value; expected str", value=value
        )

    # Anchors and tags precede the scalar inside its span; keep them verbatim.
    properties = _PROPERTIES.match(prev)
    prefix = properties.group(0) if properties else ""
    scalar = prev[len(prefix) :]
    if not _style_of(scalar).is_block and _represents(prev, value):
        return prev
    return prefix + _render(value, scalar, indent)


def _render(value: str, prev: str, indent: int) -> str:
    style = _style_of(prev)
    if not style.is_block and _represents(prev, value):
        return prev

    analysis = _analyze(value)
    if style is Style.DOUBLE_QUOTED:
        return double_quoted(value)
    if style is Style.SINGLE_QUOTED:
        if analysis.allow_single_quoted and not analysis.multiline:
            return "'" + value.replace("'", "''") + "'"
        return _fallback(value, style)
    if style.is_block:
        rendered = _block(value, prev, indent, style, analysis)
        return rendered if rendered is not None else _fallback(value, style)

    if _plain_allowed(analysis, prev) and _resolves_to_str(value):
        return value
    return _fallback(value, style)


def _plain_allowed(analysis: ScalarAnalysis, prev: str) -> bool:
    if analysis.empty:
        return False
    if analysis.allow_flow_plain:
        return True
    # A plain ``prev`` that is illegal in flow context proves block context.
    if not prev or "\n" in prev or not analysis.allow_block_plain:
        return False
    return not _analyze(prev).allow_flow_plain


def double_quoted(value: str) -> str:
    text = yaml.dump(
        value,
        Dumper=yaml.SafeDumper,
        default_style='"',
        width=float("inf"),
        allow_unicode=True,
    )
    return text.rstrip("\n")


def _fallback(value: str, style: Style) -> str:
    telemetry.record_event(
        "quote::fallback", data={"from": style.name, "length": len(value)}
    )
    return double_quoted(value)


def _style_of(prev: str) -> Style:
    head = prev[:1]
    if head in ('"', "'", "|", ">"):
        return Style(head)
    return Style.PLAIN


def _represents(prev: str, value: str) -> bool:
    if not prev:
        return False
    try:
        return yaml.safe_load(prev) == value
    except yaml.YAMLError:
        return False


def _analyze(value: str) -> ScalarAnalysis:
    emitter = Emitter(io.StringIO(), allow_unicode=True)
    return emitter.analyze_scalar(value)


def _resolves_to_str(value: str) -> bool:
    return _resolver.resolve(yaml.ScalarNode, value, (True, False)) == STR_TAG


def _block(
    value: str, prev: str, indent: int, style: Style, analysis: ScalarAnalysis
) -> Optional[str]:
    if "\r\n" not in prev and not prev.endswith("\r"):
        return _layout_block(value, prev, indent, style, analysis)
    # CRLF document: the span stops between the final "\r" and "\n".
    normalized = prev.replace("\r\n", "\n")
    trailing = "\r" if normalized.endswith("\r") else ""
    rendered = _layout_block(
        value, normalized.removesuffix("\r"), indent, style, analysis
    )
    if rendered is None:
        return None
    return rendered.replace("\n", "\r\n") + trailing


def _layout_block(
    value: str, prev: str, indent: int, style: Style, analysis: ScalarAnalysis
) -> Optional[str]:
    lines = prev.split("\n")
    match = _HEADER.match(lines[0])
    if match is None:
        return None
    if not analysis.allow_block:
        return None

    digits = "".join(ch for ch in match.group("flags") if ch.isdigit())
    body, tail = _split_tail(lines[1:])
    content_indent = _content_indent(body)
    if content_indent is None:
        content_indent = indent + BLOCK_INDENT_STEP

    chomp, text = _chomp(value)
    if _first_content(text).startswith(" "):
        # Auto-detected indentation would swallow the leading spaces.
        return None
    if style is Style.FOLDED and "\n" in text:
        style = Style.LITERAL
    header = f"{style.value}{digits}{chomp}{match.group('rest')}"
    if chomp == "+":
        tail = ""

    if text == "" and chomp != "+":
        return header + tail
    pad = " " * content_indent
    rendered = "\n".join(pad + line if line else "" for line in text.split("\n"))
    return f"{header}\n{rendered}{tail}"


def _chomp(value: str) -> Tuple[str, str]:
    """Chomping indicator for ``value`` and the text left to lay out as lines."""

    if not value.endswith("\n"):
        return "-", value
    if value == "\n" or value.endswith("\n\n"):
        return "+", value[:-1]
    return "", value[:-1]


def _split_tail(body: list[str]) -> Tuple[list[str], str]:
    kept = list(body)
    while kept and not kept[-1].strip():
        kept.pop()
    if len(kept) == len(body):
        return kept, ""
    return kept, "\n" + "\n".join(body[len(kept) :])


def _first_content(text: str) -> str:
    return next((line for line in text.split("\n") if line), "")


def _content_indent(body: list[str]) -> Optional[int]:
    for line in body:
        if line.strip():
            return len(line) - len(line.lstrip(" "))
    return None


__all__ = ["quote", "double_quoted"]
