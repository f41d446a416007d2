"""Story routes — draft, edit, stage, approve and list stories."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from newsdesk.errors import NotAuthorizedError
from newsdesk.models.story import Story, StoryDetails
from newsdesk.rendering.rich_text import parse_rich_text

router = APIRouter(tags=["stories"])

logger = logging.getLogger(__name__)


class StoryPayload(BaseModel):
    """Story fields as submitted by the story modal (``rich_text`` values)."""

    headline: str
    short_description: dict[str, Any] | None = None
    long_article: dict[str, Any] | None = None

    def to_details(self) -> StoryDetails:
        return StoryDetails(
            headline=self.headline,
            short_description=parse_rich_text(self.short_description),
            long_article=parse_rich_text(self.long_article),
        )


class DraftRequest(StoryPayload):
    reporter_slack_id: str


@router.post("/stories", status_code=201)
async def draft_story(request: Request, body: DraftRequest) -> Story:
    """Create a new draft for the submitting reporter."""
    reporter = await request.app.state.reporters_repo.get_by_slack_id(body.reporter_slack_id)
    if reporter is None:
        raise NotAuthorizedError(body.reporter_slack_id, "not a reporter")
    return await request.app.state.lifecycle.draft_story(reporter, body.to_details())


@router.put("/stories/{story_id}")
async def update_story(request: Request, story_id: str, body: StoryPayload) -> Story:
    return await request.app.state.lifecycle.update_story(story_id, body.to_details())


@router.post("/stories/{story_id}/stage")
async def stage_story(request: Request, story_id: str) -> Story:
    """Submit a story for review."""
    lifecycle = request.app.state.lifecycle
    story = await lifecycle.get_story(story_id)
    return await lifecycle.stage_story(story)


@router.post("/stories/{story_id}/approve")
async def approve_story(request: Request, story_id: str) -> Story:
    lifecycle = request.app.state.lifecycle
    story = await lifecycle.get_story(story_id)
    return await lifecycle.approve_story(story)


@router.get("/reporters/{slack_id}/stories")
async def list_reporter_stories(request: Request, slack_id: str) -> list[Story]:
    return await request.app.state.lifecycle.list_stories_for_reporter(slack_id)
