"""Chat message payloads for the approvals notice and the announcement."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from newsdesk.models.story import Story

_HEADER_LIMIT = 150


def _header(text: str) -> dict[str, Any]:
    if len(text) > _HEADER_LIMIT:
        text = text[: _HEADER_LIMIT - 1] + "…"
    return {"type": "header", "text": {"type": "plain_text", "text": text, "emoji": True}}


def _markdown(text: str) -> dict[str, Any]:
    return {"type": "markdown", "text": text}


def _context(text: str) -> dict[str, Any]:
    return {"type": "context", "elements": [{"type": "mrkdwn", "text": text}]}


def build_stage_request(story: Story) -> dict[str, Any]:
    """Approvals-channel notice that a story is waiting for review."""
    authors = ", ".join(f"<@{slack_id}>" for slack_id in story.author_slack_ids) or "unknown"
    blocks: list[dict[str, Any]] = [_header(story.headline)]
    if story.short_description.strip():
        blocks.append(_markdown(story.short_description))
    blocks.append(_context(f"By {authors} · story `{story.id}` · {story.status}"))
    return {
        "text": f"New story awaiting review: {story.headline}",
        "blocks": blocks,
    }


def build_announcement(intro: str, conclusion: str, stories: Sequence[Story]) -> dict[str, Any]:
    """Single announcement summarising every story in the publish batch."""
    blocks: list[dict[str, Any]] = []
    if intro.strip():
        blocks.append(_markdown(intro))
    for story in stories:
        blocks.append({"type": "divider"})
        blocks.append(_header(story.headline))
        blocks.append(_context(f"Status: {story.status}"))
        if story.short_description.strip():
            blocks.append(_markdown(story.short_description))
    if conclusion.strip():
        blocks.append({"type": "divider"})
        blocks.append(_markdown(conclusion))

    headlines = "\n".join(f"• {story.headline}" for story in stories)
    fallback = "\n\n".join(part for part in (intro.strip(), headlines, conclusion.strip()) if part)
    return {
        "text": fallback,
        "blocks": blocks,
        "unfurl_links": False,
        "unfurl_media": False,
    }
