"""Outcome models returned by the publish orchestrator."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class PublishTarget(StrEnum):
    ANNOUNCEMENT = "announcement"
    NEWSLETTER = "newsletter"


class TargetOutcome(BaseModel):
    """Delivery outcome for one fan-out target."""

    target: PublishTarget
    ok: bool
    error: str | None = None
    detail: dict[str, Any] = Field(default_factory=dict)


class PublishResult(BaseModel):
    announcement: TargetOutcome
    newsletter: TargetOutcome
    published_count: int = 0
    committed: bool = False

    @property
    def any_delivered(self) -> bool:
        return self.announcement.ok or self.newsletter.ok
