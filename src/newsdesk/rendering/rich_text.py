"""Parse the editing surface's ``rich_text`` JSON into a :class:`RichDocument`.

Parsing is lenient: unknown element types are dropped rather than rejected,
so whatever the modal submits can always be stored and rendered.
"""

from __future__ import annotations

import logging
from typing import Any

from newsdesk.models.document import (
    ChannelReference,
    ListBlock,
    Paragraph,
    Quote,
    RichDocument,
    Span,
    UserMention,
)

logger = logging.getLogger(__name__)


def parse_rich_text(payload: dict[str, Any] | None) -> RichDocument:
    """Convert a ``rich_text`` block value into a rich document."""
    if not payload:
        return RichDocument()

    blocks = []
    for element in payload.get("elements", []):
        kind = element.get("type")
        if kind == "rich_text_section":
            blocks.append(Paragraph(spans=_parse_inline(element.get("elements", []))))
        elif kind == "rich_text_quote":
            blocks.append(Quote(spans=_parse_inline(element.get("elements", []))))
        elif kind == "rich_text_preformatted":
            spans = _parse_inline(element.get("elements", []))
            for span in spans:
                span.code = True
            blocks.append(Paragraph(spans=spans))
        elif kind == "rich_text_list":
            items = [
                _parse_inline(section.get("elements", []))
                for section in element.get("elements", [])
            ]
            blocks.append(
                ListBlock(
                    ordered=element.get("style") == "ordered",
                    indent=int(element.get("indent") or 0),
                    items=items,
                )
            )
        else:
            logger.debug("Dropping unsupported rich text block type=%s", kind)
    return RichDocument(blocks=blocks)


def _parse_inline(elements: list[dict[str, Any]]) -> list[Span]:
    spans: list[Span] = []
    for element in elements:
        span = _parse_element(element)
        if span is not None:
            spans.append(span)
    return spans


def _parse_element(element: dict[str, Any]) -> Span | None:
    style = element.get("style") or {}
    flags = {
        "bold": bool(style.get("bold")),
        "italic": bool(style.get("italic")),
        "strike": bool(style.get("strike")),
        "code": bool(style.get("code")),
    }
    kind = element.get("type")
    if kind == "text":
        return Span(text=element.get("text", ""), **flags)
    if kind == "link":
        url = element.get("url", "")
        return Span(text=element.get("text") or url, link=url, **flags)
    if kind == "user" and element.get("user_id"):
        return Span(reference=UserMention(id=element["user_id"]))
    if kind == "channel" and element.get("channel_id"):
        return Span(reference=ChannelReference(id=element["channel_id"]))
    if kind == "emoji" and element.get("name"):
        return Span(text=f":{element['name']}:", **flags)
    logger.debug("Dropping unsupported rich text element type=%s", kind)
    return None
