"""Workflow services — story lifecycle and the publish orchestrator."""

from newsdesk.services.publishing import PublishOrchestrator
from newsdesk.services.stories import StoryLifecycle

__all__ = ["PublishOrchestrator", "StoryLifecycle"]
