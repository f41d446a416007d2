"""Publish route — runs the publish orchestrator for all approved stories."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from newsdesk.models.publish import PublishResult
from newsdesk.rendering.rich_text import parse_rich_text

router = APIRouter(tags=["publish"])

logger = logging.getLogger(__name__)


class PublishRequest(BaseModel):
    """Values from the publish modal."""

    requested_by: str
    subject: str
    intro: dict[str, Any] | None = None
    conclusion: dict[str, Any] | None = None


@router.post("/publish")
async def publish(request: Request, body: PublishRequest) -> PublishResult:
    """Publish the current batch of approved stories."""
    logger.debug("Processing publish request — requested_by=%s", body.requested_by)
    return await request.app.state.orchestrator.publish(
        body.requested_by,
        parse_rich_text(body.intro),
        parse_rich_text(body.conclusion),
        body.subject,
    )
