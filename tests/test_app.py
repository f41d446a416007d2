"""Tests for app wiring and the HTTP error mapping."""

from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from newsdesk.app import create_app
from newsdesk.errors import (
    BatchWriteError,
    CommitPreconditionError,
    EmptyBatchError,
    InvalidTransitionError,
    StageError,
    StoryNotFoundError,
)
from newsdesk.models.publish import PublishResult, PublishTarget, TargetOutcome
from newsdesk.models.story import StoryStatus
from newsdesk.services.publishing import PublishOrchestrator
from newsdesk.services.stories import StoryLifecycle

if TYPE_CHECKING:
    from collections.abc import Iterator


def _settings() -> SimpleNamespace:
    """Create minimal settings for lifespan wiring tests."""
    return SimpleNamespace(
        app=SimpleNamespace(env="test", log_level="INFO"),
        cosmos=SimpleNamespace(endpoint="", key="", database="newsdesk"),
        slack=SimpleNamespace(
            bot_token="xoxb-test",
            approvals_channel_id="C-APPROVALS",
            announcements_channel_id="C-NEWS",
            api_url="https://slack.test/api",
        ),
        campaign=SimpleNamespace(api_key="", api_url="https://plunk.test", recipients=[]),
        publish=SimpleNamespace(commit_on_failure=True),
    )


@pytest.fixture
def clients() -> SimpleNamespace:
    cosmos = MagicMock()
    cosmos.initialize = AsyncMock()
    cosmos.close = AsyncMock()
    slack = MagicMock()
    slack.close = AsyncMock()
    campaigns = MagicMock()
    campaigns.close = AsyncMock()
    return SimpleNamespace(cosmos=cosmos, slack=slack, campaigns=campaigns)


@pytest.fixture
def client(clients: SimpleNamespace) -> Iterator[TestClient]:
    with (
        patch("newsdesk.app.load_settings", return_value=_settings()),
        patch("newsdesk.app.configure_logging"),
        patch("newsdesk.app.CosmosClient", return_value=clients.cosmos),
        patch("newsdesk.app.SlackClient", return_value=clients.slack),
        patch("newsdesk.app.CampaignClient", return_value=clients.campaigns),
        TestClient(create_app()) as test_client,
    ):
        yield test_client


@pytest.mark.unit
def test_lifespan_wires_services(client: TestClient, clients: SimpleNamespace) -> None:
    state = client.app.state
    assert isinstance(state.lifecycle, StoryLifecycle)
    assert isinstance(state.orchestrator, PublishOrchestrator)
    assert state.settings.slack.announcements_channel_id == "C-NEWS"
    clients.cosmos.initialize.assert_awaited_once()


@pytest.mark.unit
def test_lifespan_closes_clients(clients: SimpleNamespace) -> None:
    with (
        patch("newsdesk.app.load_settings", return_value=_settings()),
        patch("newsdesk.app.configure_logging"),
        patch("newsdesk.app.CosmosClient", return_value=clients.cosmos),
        patch("newsdesk.app.SlackClient", return_value=clients.slack),
        patch("newsdesk.app.CampaignClient", return_value=clients.campaigns),
        TestClient(create_app()),
    ):
        pass

    clients.cosmos.close.assert_awaited_once()
    clients.slack.close.assert_awaited_once()
    clients.campaigns.close.assert_awaited_once()


@pytest.mark.unit
def test_lifespan_closes_clients_when_startup_fails(clients: SimpleNamespace) -> None:
    clients.cosmos.initialize.side_effect = RuntimeError("cosmos unreachable")

    with (
        patch("newsdesk.app.load_settings", return_value=_settings()),
        patch("newsdesk.app.configure_logging"),
        patch("newsdesk.app.CosmosClient", return_value=clients.cosmos),
        patch("newsdesk.app.SlackClient", return_value=clients.slack),
        patch("newsdesk.app.CampaignClient", return_value=clients.campaigns),
        pytest.raises(RuntimeError, match="cosmos unreachable"),
        TestClient(create_app()),
    ):
        pass

    clients.cosmos.close.assert_awaited_once()
    clients.slack.close.assert_awaited_once()
    clients.campaigns.close.assert_awaited_once()


@pytest.mark.unit
def test_failed_batch_write_is_unavailable(client: TestClient) -> None:
    client.app.state.orchestrator = AsyncMock()
    client.app.state.orchestrator.publish.side_effect = BatchWriteError(
        {"s-2": RuntimeError("timeout")}
    )

    response = client.post("/publish", json={"requested_by": "U1", "subject": "Weekly"})

    assert response.status_code == 503
    assert response.json()["error"] == "BatchWriteError"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (StoryNotFoundError("s-1"), 404),
        (InvalidTransitionError("s-1", StoryStatus.PUBLISHED, StoryStatus.AWAITING_REVIEW), 409),
        (StageError("s-1", [RuntimeError("chat down")]), 502),
    ],
)
def test_stage_errors_map_to_status(
    client: TestClient, error: Exception, status_code: int
) -> None:
    client.app.state.lifecycle = AsyncMock()
    client.app.state.lifecycle.get_story.side_effect = error

    response = client.post("/stories/s-1/stage")

    assert response.status_code == status_code
    assert response.json() == {"error": type(error).__name__, "detail": str(error)}


@pytest.mark.unit
def test_draft_by_unknown_reporter_is_forbidden(client: TestClient) -> None:
    client.app.state.reporters_repo = AsyncMock()
    client.app.state.reporters_repo.get_by_slack_id.return_value = None

    response = client.post("/stories", json={"headline": "Hi", "reporter_slack_id": "U9"})

    assert response.status_code == 403
    assert response.json()["error"] == "NotAuthorizedError"


@pytest.mark.unit
@pytest.mark.parametrize(
    "error",
    [EmptyBatchError(), CommitPreconditionError({"s-1": StoryStatus.PUBLISHED})],
)
def test_publish_conflicts(client: TestClient, error: Exception) -> None:
    client.app.state.orchestrator = AsyncMock()
    client.app.state.orchestrator.publish.side_effect = error

    response = client.post("/publish", json={"requested_by": "U1", "subject": "Weekly"})

    assert response.status_code == 409


@pytest.mark.unit
def test_publish_returns_outcomes(client: TestClient) -> None:
    client.app.state.orchestrator = AsyncMock()
    client.app.state.orchestrator.publish.return_value = PublishResult(
        announcement=TargetOutcome(
            target=PublishTarget.ANNOUNCEMENT, ok=False, error="chat down"
        ),
        newsletter=TargetOutcome(
            target=PublishTarget.NEWSLETTER, ok=True, detail={"campaign_id": "cmp-1"}
        ),
        published_count=2,
        committed=True,
    )

    response = client.post("/publish", json={"requested_by": "U1", "subject": "Weekly"})

    assert response.status_code == 200
    body = response.json()
    assert body["announcement"] == {
        "target": "announcement",
        "ok": False,
        "error": "chat down",
        "detail": {},
    }
    assert body["newsletter"]["detail"] == {"campaign_id": "cmp-1"}
    assert body["published_count"] == 2
    assert body["committed"] is True
