"""Story document model and its editorial status."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from newsdesk.models.base import DocumentBase
from newsdesk.models.document import RichDocument


class StoryStatus(StrEnum):
    DRAFT = "Draft"
    AWAITING_REVIEW = "Awaiting Review"
    APPROVED = "Approved"
    PUBLISHED = "Published"


class Story(DocumentBase):
    """A reporter's story moving through the editorial workflow.

    ``short_description`` and ``long_article`` are always the rendered markup
    of their ``*_rt`` rich sources.
    """

    headline: str
    short_description: str = ""
    short_description_rt: RichDocument = Field(default_factory=RichDocument)
    long_article: str = ""
    long_article_rt: RichDocument = Field(default_factory=RichDocument)
    authors: list[str] = Field(default_factory=list)
    author_slack_ids: list[str] = Field(default_factory=list)
    status: StoryStatus = StoryStatus.DRAFT
    newsletters: list[str] = Field(default_factory=list)
    announcements: list[str] = Field(default_factory=list)


class StoryDetails(BaseModel):
    """Story text as submitted from the editing surface."""

    headline: str
    short_description: RichDocument = Field(default_factory=RichDocument)
    long_article: RichDocument = Field(default_factory=RichDocument)
