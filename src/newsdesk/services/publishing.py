"""Publish orchestrator — fan approved stories out to chat and email, then commit.

Both targets run concurrently and are awaited to completion; one failing
never cancels the other. Delivery failures are reported in the result rather
than raised. The status commit happens after both have settled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from newsdesk.errors import EmptyBatchError, NotAuthorizedError
from newsdesk.models.publish import PublishResult, PublishTarget, TargetOutcome
from newsdesk.rendering.email import NewsletterStory, render_newsletter
from newsdesk.rendering.markup import render
from newsdesk.rendering.passes import run_passes
from newsdesk.services.messages import build_announcement

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    from newsdesk.config import CampaignConfig, PublishConfig, SlackConfig
    from newsdesk.database.repositories.reporters import ReporterRepository
    from newsdesk.integrations.campaigns import CampaignClient
    from newsdesk.integrations.slack import SlackClient
    from newsdesk.models.document import RichDocument
    from newsdesk.models.story import Story
    from newsdesk.services.stories import StoryLifecycle

logger = logging.getLogger(__name__)

DEFAULT_SENDER_NAME = "Newsdesk"


class PublishOrchestrator:
    """Coordinates one publish run end to end."""

    def __init__(
        self,
        reporters_repo: ReporterRepository,
        lifecycle: StoryLifecycle,
        slack: SlackClient,
        campaigns: CampaignClient,
        *,
        slack_config: SlackConfig,
        campaign_config: CampaignConfig,
        publish_config: PublishConfig,
    ) -> None:
        self._reporters = reporters_repo
        self._lifecycle = lifecycle
        self._slack = slack
        self._campaigns = campaigns
        self._slack_config = slack_config
        self._campaign_config = campaign_config
        self._publish_config = publish_config

    async def authorize(self, requested_by: str) -> None:
        """Raise :class:`NotAuthorizedError` unless ``requested_by`` may publish."""
        reporter = await self._reporters.get_by_slack_id(requested_by)
        if reporter is None:
            raise NotAuthorizedError(requested_by, "not a reporter")
        if not reporter.has_publishing_rights:
            raise NotAuthorizedError(requested_by, "no publishing rights")

    async def publish(
        self,
        requested_by: str,
        intro: RichDocument,
        conclusion: RichDocument,
        subject: str,
    ) -> PublishResult:
        """Publish every approved story to the announcement channel and the newsletter."""
        await self.authorize(requested_by)

        batch = await self._lifecycle.list_approved()
        if not batch:
            raise EmptyBatchError
        logger.info(
            "Publishing batch — requested_by=%s stories=%d", requested_by, len(batch)
        )

        intro_md = render(intro)
        conclusion_md = render(conclusion)

        announcement, newsletter = await asyncio.gather(
            self._run_target(
                PublishTarget.ANNOUNCEMENT,
                self._send_announcement(requested_by, batch, intro_md, conclusion_md),
            ),
            self._run_target(
                PublishTarget.NEWSLETTER,
                self._send_newsletter(requested_by, batch, subject, intro_md, conclusion_md),
            ),
        )
        result = PublishResult(announcement=announcement, newsletter=newsletter)

        if not result.any_delivered and not self._publish_config.commit_on_failure:
            logger.warning(
                "Both publish targets failed; leaving %d stories approved", len(batch)
            )
            return result

        published = await self._lifecycle.commit_published(batch)
        result.published_count = len(published)
        result.committed = True
        logger.info(
            "Publish finished — announcement_ok=%s newsletter_ok=%s published=%d",
            announcement.ok,
            newsletter.ok,
            result.published_count,
        )
        return result

    @staticmethod
    async def _run_target(
        target: PublishTarget, delivery: Awaitable[dict[str, Any]]
    ) -> TargetOutcome:
        try:
            detail = await delivery
        except Exception as exc:  # noqa: BLE001
            logger.exception("Publish target %s failed", target)
            return TargetOutcome(target=target, ok=False, error=str(exc) or repr(exc))
        return TargetOutcome(target=target, ok=True, detail=detail)

    async def _send_announcement(
        self,
        requested_by: str,
        stories: Sequence[Story],
        intro_md: str,
        conclusion_md: str,
    ) -> dict[str, Any]:
        intro_final, conclusion_final, sender = await asyncio.gather(
            run_passes(intro_md, self._slack),
            run_passes(conclusion_md, self._slack),
            self._slack.resolve_user(requested_by),
        )
        payload = build_announcement(intro_final, conclusion_final, stories)
        ts = await self._slack.post_message(
            self._slack_config.announcements_channel_id,
            payload,
            username=sender.label if sender else DEFAULT_SENDER_NAME,
            icon_url=sender.image_url if sender else None,
        )
        logger.debug("Sent announcement — requested_by=%s ts=%s", requested_by, ts)
        return {"channel": self._slack_config.announcements_channel_id, "ts": ts}

    async def _resolve_story(self, story: Story) -> NewsletterStory:
        headline, long_article = await asyncio.gather(
            run_passes(story.headline, self._slack),
            run_passes(story.long_article, self._slack),
        )
        return NewsletterStory(headline=headline, long_article=long_article)

    async def _send_newsletter(
        self,
        requested_by: str,
        stories: Sequence[Story],
        subject: str,
        intro_md: str,
        conclusion_md: str,
    ) -> dict[str, Any]:
        logger.debug("Newsletter: running passes — requested_by=%s", requested_by)
        intro_final = await run_passes(intro_md, self._slack)
        conclusion_final = await run_passes(conclusion_md, self._slack)
        resolved = await asyncio.gather(*(self._resolve_story(story) for story in stories))
        logger.debug("Newsletter: finished passes — requested_by=%s", requested_by)

        html = render_newsletter(subject, intro_final, conclusion_final, resolved)
        campaign_id = await self._campaigns.create_campaign(
            subject, html, self._campaign_config.recipients
        )
        await self._campaigns.send_campaign(campaign_id)
        logger.debug("Sent newsletter — requested_by=%s campaign=%s", requested_by, campaign_id)
        return {"campaign_id": campaign_id}
