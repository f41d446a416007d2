"""Shared fixtures: document factories and an in-memory directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from newsdesk.models.directory import DisplayInfo
from newsdesk.models.reporter import Reporter
from newsdesk.models.story import Story, StoryStatus

if TYPE_CHECKING:
    from collections.abc import Callable


class FakeDirectory:
    """Directory lookup backed by dicts; records every call."""

    def __init__(
        self,
        users: dict[str, str] | None = None,
        channels: dict[str, str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.users = users or {}
        self.channels = channels or {}
        self.failing = failing or set()
        self.calls: list[str] = []

    async def resolve_user(self, user_id: str) -> DisplayInfo | None:
        self.calls.append(user_id)
        if user_id in self.failing:
            raise RuntimeError(f"lookup exploded for {user_id}")
        name = self.users.get(user_id)
        return DisplayInfo(user_id=user_id, name=name) if name else None

    async def resolve_channel(self, channel_id: str) -> str | None:
        self.calls.append(channel_id)
        if channel_id in self.failing:
            raise RuntimeError(f"lookup exploded for {channel_id}")
        return self.channels.get(channel_id)


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory(users={"U1": "Alex", "U2": "Sam"}, channels={"C1": "general"})


@pytest.fixture
def make_story() -> Callable[..., Story]:
    def _make_story(**overrides: Any) -> Story:
        fields: dict[str, Any] = {
            "headline": "Robotics club wins regional",
            "short_description": "The team took first place.",
            "long_article": "The robotics club **won** the regional final.",
            "authors": ["rep-1"],
            "author_slack_ids": ["U1"],
            "status": StoryStatus.APPROVED,
        }
        fields.update(overrides)
        return Story(**fields)

    return _make_story


@pytest.fixture
def make_reporter() -> Callable[..., Reporter]:
    def _make_reporter(**overrides: Any) -> Reporter:
        fields: dict[str, Any] = {
            "id": "rep-1",
            "name": "Alex",
            "slack_id": "U1",
            "has_publishing_rights": True,
        }
        fields.update(overrides)
        return Reporter(**fields)

    return _make_reporter


@pytest.fixture
def make_directory() -> Callable[..., FakeDirectory]:
    return FakeDirectory
