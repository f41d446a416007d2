"""Async Cosmos DB connection for the newsdesk database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient as AzureCosmosClient

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

    from newsdesk.config import CosmosConfig

logger = logging.getLogger(__name__)

# Every container is partitioned by document id.
CONTAINERS = ("stories", "reporters")


class CosmosClient:
    """Owns the account connection and makes sure the database layout exists."""

    def __init__(self, config: CosmosConfig) -> None:
        self._config = config
        self._client: AzureCosmosClient | None = None
        self._database: DatabaseProxy | None = None

    async def initialize(self, *, ensure_containers: bool = True) -> None:
        """Connect and, unless told otherwise, create missing containers."""
        self._client = AzureCosmosClient(self._config.endpoint, credential=self._config.key)
        if not ensure_containers:
            self._database = self._client.get_database_client(self._config.database)
            return

        self._database = await self._client.create_database_if_not_exists(self._config.database)
        for name in CONTAINERS:
            await self._database.create_container_if_not_exists(
                id=name, partition_key=PartitionKey(path="/id")
            )
        logger.info(
            "Cosmos DB ready — database=%s containers=%s",
            self._config.database,
            ",".join(CONTAINERS),
        )

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.close()
        self._client = None
        self._database = None

    @property
    def database(self) -> DatabaseProxy:
        if self._database is None:
            raise RuntimeError("Cosmos DB is not connected; call initialize() first")
        return self._database
