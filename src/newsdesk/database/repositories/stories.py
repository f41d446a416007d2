"""Repository for the stories container (partitioned by /id)."""

from __future__ import annotations

from newsdesk.database.repositories.base import BaseRepository
from newsdesk.models.story import Story, StoryStatus


class StoryRepository(BaseRepository[Story]):
    container_name = "stories"
    model_class = Story

    async def list_by_status(self, status: StoryStatus) -> list[Story]:
        """Fetch all active stories in a given status, oldest first."""
        return await self.query(
            "SELECT * FROM c WHERE c.status = @status"
            " AND NOT IS_DEFINED(c.deleted_at)"
            " ORDER BY c.created_at ASC",
            [{"name": "@status", "value": status.value}],
        )

    async def list_by_author(self, slack_id: str) -> list[Story]:
        """Fetch all active stories a reporter is credited on, newest first."""
        return await self.query(
            "SELECT * FROM c WHERE ARRAY_CONTAINS(c.author_slack_ids, @slack_id)"
            " AND NOT IS_DEFINED(c.deleted_at)"
            " ORDER BY c.created_at DESC",
            [{"name": "@slack_id", "value": slack_id}],
        )
