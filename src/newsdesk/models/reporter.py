"""Reporter document model (read-only to the workflow)."""

from __future__ import annotations

from newsdesk.models.base import DocumentBase


class Reporter(DocumentBase):
    name: str
    slack_id: str
    has_publishing_rights: bool = False
