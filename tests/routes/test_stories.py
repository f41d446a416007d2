"""Tests for the story and publish routes."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from newsdesk.errors import NotAuthorizedError
from newsdesk.models.story import StoryStatus
from newsdesk.routes.publish import PublishRequest, publish
from newsdesk.routes.stories import (
    DraftRequest,
    StoryPayload,
    approve_story,
    draft_story,
    list_reporter_stories,
    stage_story,
    update_story,
)

RICH_TEXT = {
    "type": "rich_text",
    "elements": [
        {
            "type": "rich_text_section",
            "elements": [
                {"type": "text", "text": "Hi "},
                {"type": "user", "user_id": "U2"},
            ],
        }
    ],
}


def _request() -> MagicMock:
    request = MagicMock()
    request.app.state.lifecycle = AsyncMock()
    request.app.state.reporters_repo = AsyncMock()
    request.app.state.orchestrator = AsyncMock()
    return request


class TestStoryPayload:
    """Test conversion of modal values into story details."""

    def test_to_details_parses_rich_text(self) -> None:
        details = StoryPayload(headline="Hello", short_description=RICH_TEXT).to_details()

        assert details.headline == "Hello"
        spans = details.short_description.blocks[0].spans
        assert spans[0].text == "Hi "
        assert spans[1].reference.id == "U2"
        assert details.long_article.blocks == []


class TestStoryRoutes:
    """Test the Story Routes."""

    async def test_draft_story(self, make_reporter, make_story) -> None:
        request = _request()
        reporter = make_reporter()
        story = make_story(status=StoryStatus.DRAFT)
        request.app.state.reporters_repo.get_by_slack_id.return_value = reporter
        request.app.state.lifecycle.draft_story.return_value = story

        body = DraftRequest(headline="Hello", reporter_slack_id="U1", long_article=RICH_TEXT)
        result = await draft_story(request, body)

        assert result is story
        args = request.app.state.lifecycle.draft_story.call_args.args
        assert args[0] is reporter
        assert args[1].headline == "Hello"

    async def test_draft_story_rejects_unknown_reporter(self) -> None:
        request = _request()
        request.app.state.reporters_repo.get_by_slack_id.return_value = None

        with pytest.raises(NotAuthorizedError):
            await draft_story(request, DraftRequest(headline="Hello", reporter_slack_id="U9"))

        request.app.state.lifecycle.draft_story.assert_not_awaited()

    async def test_update_story(self, make_story) -> None:
        request = _request()
        story = make_story()
        request.app.state.lifecycle.update_story.return_value = story

        result = await update_story(request, "s-1", StoryPayload(headline="New"))

        assert result is story
        story_id, details = request.app.state.lifecycle.update_story.call_args.args
        assert story_id == "s-1"
        assert details.headline == "New"

    async def test_stage_story_loads_then_stages(self, make_story) -> None:
        request = _request()
        story = make_story(status=StoryStatus.DRAFT)
        request.app.state.lifecycle.get_story.return_value = story

        await stage_story(request, story.id)

        request.app.state.lifecycle.get_story.assert_awaited_once_with(story.id)
        request.app.state.lifecycle.stage_story.assert_awaited_once_with(story)

    async def test_approve_story_loads_then_approves(self, make_story) -> None:
        request = _request()
        story = make_story(status=StoryStatus.AWAITING_REVIEW)
        request.app.state.lifecycle.get_story.return_value = story

        await approve_story(request, story.id)

        request.app.state.lifecycle.approve_story.assert_awaited_once_with(story)

    async def test_list_reporter_stories(self, make_story) -> None:
        request = _request()
        stories = [make_story(), make_story()]
        request.app.state.lifecycle.list_stories_for_reporter.return_value = stories

        assert await list_reporter_stories(request, "U1") == stories
        request.app.state.lifecycle.list_stories_for_reporter.assert_awaited_once_with("U1")


class TestPublishRoute:
    """Test the Publish Route."""

    async def test_publish_passes_parsed_documents(self) -> None:
        request = _request()
        body = PublishRequest(requested_by="U1", subject="Weekly", intro=RICH_TEXT)

        await publish(request, body)

        requested_by, intro, conclusion, subject = (
            request.app.state.orchestrator.publish.call_args.args
        )
        assert requested_by == "U1"
        assert subject == "Weekly"
        assert intro.blocks[0].spans[1].reference.id == "U2"
        assert conclusion.blocks == []
