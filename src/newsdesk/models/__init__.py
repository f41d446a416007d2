"""Data models for stored documents and workflow payloads."""

from newsdesk.models.base import DocumentBase
from newsdesk.models.directory import DisplayInfo
from newsdesk.models.document import (
    ChannelReference,
    Heading,
    ListBlock,
    Paragraph,
    Quote,
    RichDocument,
    Span,
    UserMention,
)
from newsdesk.models.publish import PublishResult, PublishTarget, TargetOutcome
from newsdesk.models.reporter import Reporter
from newsdesk.models.story import Story, StoryDetails, StoryStatus

__all__ = [
    "ChannelReference",
    "DisplayInfo",
    "DocumentBase",
    "Heading",
    "ListBlock",
    "Paragraph",
    "PublishResult",
    "PublishTarget",
    "Quote",
    "Reporter",
    "RichDocument",
    "Span",
    "Story",
    "StoryDetails",
    "StoryStatus",
    "TargetOutcome",
    "UserMention",
]
