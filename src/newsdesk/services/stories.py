"""Story lifecycle — the only writer of a story's editorial status.

Draft → Awaiting Review → Approved → Published. Every write of a text field
stores the rendered markup together with its rich source.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol

from newsdesk.errors import (
    CommitPreconditionError,
    InvalidTransitionError,
    StageError,
    StoryNotFoundError,
)
from newsdesk.models.story import Story, StoryStatus
from newsdesk.rendering.markup import render
from newsdesk.services.messages import build_stage_request

if TYPE_CHECKING:
    from collections.abc import Sequence

    from newsdesk.database.repositories.stories import StoryRepository
    from newsdesk.models.reporter import Reporter
    from newsdesk.models.story import StoryDetails

logger = logging.getLogger(__name__)

_STAGEABLE = {StoryStatus.DRAFT, StoryStatus.AWAITING_REVIEW}


class MessageSender(Protocol):
    async def post_message(
        self,
        channel: str,
        payload: dict[str, Any],
        *,
        username: str | None = None,
        icon_url: str | None = None,
    ) -> str: ...


def _text_fields(details: StoryDetails) -> dict[str, Any]:
    return {
        "headline": details.headline,
        "short_description": render(details.short_description),
        "short_description_rt": details.short_description,
        "long_article": render(details.long_article),
        "long_article_rt": details.long_article,
    }


class StoryLifecycle:
    """Owns story status transitions and their side effects."""

    def __init__(
        self,
        stories_repo: StoryRepository,
        messenger: MessageSender,
        *,
        approvals_channel: str,
    ) -> None:
        self._stories = stories_repo
        self._messenger = messenger
        self._approvals_channel = approvals_channel

    async def draft_story(self, reporter: Reporter, details: StoryDetails) -> Story:
        """Create a new story in Draft credited to ``reporter``."""
        story = Story(
            **_text_fields(details),
            authors=[reporter.id],
            author_slack_ids=[reporter.slack_id],
            status=StoryStatus.DRAFT,
        )
        await self._stories.create(story)
        logger.info("Story drafted — id=%s reporter=%s", story.id, reporter.slack_id)
        return story

    async def update_story(self, story_id: str, details: StoryDetails) -> Story:
        """Rewrite a story's text, keeping markup and rich source in sync."""
        story = await self._get(story_id)
        if story.status == StoryStatus.PUBLISHED:
            raise InvalidTransitionError(story.id, story.status, story.status)
        for name, value in _text_fields(details).items():
            setattr(story, name, value)
        await self._stories.update(story)
        logger.info("Story updated — id=%s", story.id)
        return story

    async def stage_story(self, story: Story) -> Story:
        """Move a story to Awaiting Review and notify the approvals channel.

        The status write and the notification run concurrently. If either
        fails, :class:`StageError` is raised once both have settled; the one
        that succeeded is kept.
        """
        if story.status not in _STAGEABLE:
            raise InvalidTransitionError(story.id, story.status, StoryStatus.AWAITING_REVIEW)

        story.status = StoryStatus.AWAITING_REVIEW
        results = await asyncio.gather(
            self._stories.patch(story.id, {"status": StoryStatus.AWAITING_REVIEW.value}),
            self._messenger.post_message(self._approvals_channel, build_stage_request(story)),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]
        if failures:
            logger.error("Staging story %s partially failed: %r", story.id, failures)
            raise StageError(story.id, failures)

        logger.info("Story staged — id=%s", story.id)
        return story

    async def approve_story(self, story: Story) -> Story:
        """Editor approval: Awaiting Review → Approved."""
        if story.status != StoryStatus.AWAITING_REVIEW:
            raise InvalidTransitionError(story.id, story.status, StoryStatus.APPROVED)
        updated = await self._stories.patch(story.id, {"status": StoryStatus.APPROVED.value})
        logger.info("Story approved — id=%s", story.id)
        return updated

    async def commit_published(self, batch: Sequence[Story]) -> list[Story]:
        """Promote a whole publish batch from Approved to Published.

        Current status is re-read for every story first. If any of them is not
        Approved any more, nothing is written and
        :class:`CommitPreconditionError` is raised. If a write fails part way,
        the stories already promoted are set back to Approved and
        :class:`BatchWriteError` is raised.
        """
        if not batch:
            return []

        current = await asyncio.gather(*(self._stories.get(story.id) for story in batch))
        offending = {
            story.id: (fresh.status if fresh else None)
            for story, fresh in zip(batch, current, strict=True)
            if fresh is None or fresh.status != StoryStatus.APPROVED
        }
        if offending:
            logger.error("Refusing to publish batch — offending=%s", offending)
            raise CommitPreconditionError(offending)

        published = await self._stories.batch_patch(
            batch,
            {"status": StoryStatus.PUBLISHED.value},
            rollback={"status": StoryStatus.APPROVED.value},
        )
        logger.info("Published %d stories", len(published))
        return published

    async def list_approved(self) -> list[Story]:
        return await self._stories.list_by_status(StoryStatus.APPROVED)

    async def list_stories_for_reporter(self, slack_id: str) -> list[Story]:
        return await self._stories.list_by_author(slack_id)

    async def get_story(self, story_id: str) -> Story:
        return await self._get(story_id)

    async def _get(self, story_id: str) -> Story:
        story = await self._stories.get(story_id)
        if story is None:
            raise StoryNotFoundError(story_id)
        return story
