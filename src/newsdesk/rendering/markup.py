"""Markup renderer — converts a rich document into markdown-flavoured markup.

Rendering is pure and total: every document produces a string, and the same
document always produces the same string. References are emitted as tokens
(``<@U123>`` for users, ``<#C123>`` for channels) and resolved later by the
pass pipeline in :mod:`newsdesk.rendering.passes`. Outside code, literal
``&``, ``<`` and ``>`` are written as entities, as the chat platform expects.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from newsdesk.models.document import (
    ChannelReference,
    Heading,
    ListBlock,
    Quote,
    RichDocument,
    Span,
    UserMention,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

BLOCK_SEPARATOR = "\n\n"
_INDENT = "  "


def render(document: RichDocument) -> str:
    """Render a rich document to markup."""
    rendered = (_render_block(block) for block in document.blocks)
    return BLOCK_SEPARATOR.join(text for text in rendered if text)


def render_spans(spans: Iterable[Span]) -> str:
    return "".join(render_span(span) for span in spans)


def render_span(span: Span) -> str:
    """Render one span.

    Style precedence is code > bold+italic > bold > italic > strike > plain;
    only the winning style is applied.
    """
    if isinstance(span.reference, UserMention):
        return f"<@{span.reference.id}>"
    if isinstance(span.reference, ChannelReference):
        return f"<#{span.reference.id}>"

    text = span.text or ""
    if not span.code:
        # Literal angle brackets must never combine with a token into a new one.
        text = html.escape(text, quote=False)
    styled = _apply_style(span, text)
    if span.link:
        return f"[{styled or span.link}]({span.link})"
    return styled


def _apply_style(span: Span, text: str) -> str:
    if not text.strip():
        return text
    if span.code:
        return f"`{text}`"

    # Markers must hug the text, so surrounding whitespace stays outside.
    stripped = text.strip()
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]
    if span.bold and span.italic:
        marker = "***"
    elif span.bold:
        marker = "**"
    elif span.italic:
        marker = "_"
    elif span.strike:
        marker = "~~"
    else:
        return text
    return f"{leading}{marker}{stripped}{marker}{trailing}"


def _render_block(block: object) -> str:
    if isinstance(block, Heading):
        text = render_spans(block.spans).strip()
        return f"{'#' * block.level} {text}" if text else ""
    if isinstance(block, Quote):
        text = render_spans(block.spans)
        if not text:
            return ""
        return "\n".join(f"> {line}" if line else ">" for line in text.split("\n"))
    if isinstance(block, ListBlock):
        return _render_list(block)
    return render_spans(getattr(block, "spans", []))


def _render_list(block: ListBlock) -> str:
    prefix = _INDENT * block.indent
    lines = []
    for number, item in enumerate(block.items, start=1):
        bullet = f"{number}." if block.ordered else "-"
        lines.append(f"{prefix}{bullet} {render_spans(item).strip()}")
    return "\n".join(lines)
