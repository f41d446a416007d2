"""Repository modules for each Cosmos DB container."""

from newsdesk.database.repositories.reporters import ReporterRepository
from newsdesk.database.repositories.stories import StoryRepository

__all__ = ["ReporterRepository", "StoryRepository"]
