"""Repository for the reporters container (partitioned by /id)."""

from __future__ import annotations

from newsdesk.database.repositories.base import BaseRepository
from newsdesk.models.reporter import Reporter


class ReporterRepository(BaseRepository[Reporter]):
    container_name = "reporters"
    model_class = Reporter

    async def get_by_slack_id(self, slack_id: str) -> Reporter | None:
        """Find the reporter linked to a Slack user, if any."""
        reporters = await self.query(
            "SELECT * FROM c WHERE c.slack_id = @slack_id AND NOT IS_DEFINED(c.deleted_at)",
            [{"name": "@slack_id", "value": slack_id}],
        )
        return reporters[0] if reporters else None
