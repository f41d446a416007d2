"""FastAPI application factory and process wiring."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from newsdesk.config import load_settings
from newsdesk.database.client import CosmosClient
from newsdesk.database.repositories.reporters import ReporterRepository
from newsdesk.database.repositories.stories import StoryRepository
from newsdesk.errors import (
    BatchWriteError,
    CommitPreconditionError,
    EmptyBatchError,
    InvalidTransitionError,
    NewsdeskError,
    NotAuthorizedError,
    StageError,
    StoryNotFoundError,
)
from newsdesk.integrations.campaigns import CampaignClient
from newsdesk.integrations.slack import SlackClient
from newsdesk.logging import configure_logging
from newsdesk.routes import publish_router, stories_router
from newsdesk.services.publishing import PublishOrchestrator
from newsdesk.services.stories import StoryLifecycle

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[NewsdeskError], int] = {
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    StoryNotFoundError: status.HTTP_404_NOT_FOUND,
    EmptyBatchError: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    CommitPreconditionError: status.HTTP_409_CONFLICT,
    StageError: status.HTTP_502_BAD_GATEWAY,
    BatchWriteError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def handle_newsdesk_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: ARG001
    """Translate workflow errors into JSON responses."""
    code = next(
        (code for error_type, code in _ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed: %s", exc)
    return JSONResponse(
        status_code=code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create collaborators on startup and close them on shutdown."""
    settings = load_settings()
    configure_logging(settings.app.log_level)

    cosmos = CosmosClient(settings.cosmos)
    slack = SlackClient(settings.slack)
    campaigns = CampaignClient(settings.campaign)
    try:
        await cosmos.initialize()
        reporters_repo = ReporterRepository(cosmos.database)
        lifecycle = StoryLifecycle(
            StoryRepository(cosmos.database),
            slack,
            approvals_channel=settings.slack.approvals_channel_id,
        )
        app.state.settings = settings
        app.state.cosmos = cosmos
        app.state.reporters_repo = reporters_repo
        app.state.lifecycle = lifecycle
        app.state.orchestrator = PublishOrchestrator(
            reporters_repo,
            lifecycle,
            slack,
            campaigns,
            slack_config=settings.slack,
            campaign_config=settings.campaign,
            publish_config=settings.publish,
        )
        logger.info("Newsdesk started — env=%s", settings.app.env)

        yield
    finally:
        await campaigns.close()
        await slack.close()
        await cosmos.close()
        logger.info("Newsdesk shutdown complete")


def create_app() -> FastAPI:
    """Build the API application. Run with ``uvicorn newsdesk.app:create_app --factory``."""
    app = FastAPI(title="Newsdesk", lifespan=lifespan)
    app.add_exception_handler(NewsdeskError, handle_newsdesk_error)
    app.include_router(stories_router)
    app.include_router(publish_router)
    return app
