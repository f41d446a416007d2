"""Generic repository over a single Cosmos DB container."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, cast

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from newsdesk.errors import BatchWriteError
from newsdesk.models.base import DocumentBase

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from azure.cosmos.aio import DatabaseProxy

T = TypeVar("T", bound=DocumentBase)

logger = logging.getLogger(__name__)

BATCH_SIZE = 10


class BaseRepository(Generic[T]):
    """CRUD helpers shared by all repositories. Soft-deleted documents are hidden."""

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy) -> None:
        self._container = database.get_container_client(self.container_name)

    async def get(self, item_id: str, partition_key: str | None = None) -> T | None:
        """Fetch a document by id, or None when missing or soft-deleted."""
        try:
            data = await self._container.read_item(
                item=item_id, partition_key=partition_key or item_id
            )
        except CosmosResourceNotFoundError:
            return None
        item = self.model_class.model_validate(data)
        return None if item.deleted_at else item

    async def create(self, item: T) -> T:
        await self._container.create_item(
            body=item.model_dump(mode="json", exclude_none=True)
        )
        logger.debug("Document created — container=%s id=%s", self.container_name, item.id)
        return item

    async def update(self, item: T, partition_key: str | None = None) -> T:
        """Replace the whole document."""
        item.updated_at = datetime.now(UTC)
        await self._container.replace_item(
            item=item.id,
            body=item.model_dump(mode="json", exclude_none=True),
            partition_key=partition_key or item.id,
        )
        return item

    async def patch(
        self, item_id: str, fields: Mapping[str, Any], partition_key: str | None = None
    ) -> T:
        """Set individual fields on a document without rewriting it."""
        operations = [
            {"op": "set", "path": f"/{name}", "value": value} for name, value in fields.items()
        ]
        operations.append(
            {"op": "set", "path": "/updated_at", "value": datetime.now(UTC).isoformat()}
        )
        data = await self._container.patch_item(
            item=item_id,
            partition_key=partition_key or item_id,
            patch_operations=operations,
        )
        return self.model_class.model_validate(data)

    async def batch_patch(
        self,
        items: Sequence[T],
        fields: Mapping[str, Any],
        *,
        rollback: Mapping[str, Any] | None = None,
    ) -> list[T]:
        """Apply the same field update to many documents, ``BATCH_SIZE`` at a time.

        Every write in a chunk is awaited before the next chunk starts. When any
        write fails, no further chunks are sent, the documents already written
        get ``rollback`` applied (when given) and :class:`BatchWriteError` is
        raised.
        """
        patched: list[T] = []
        for start in range(0, len(items), BATCH_SIZE):
            chunk = items[start : start + BATCH_SIZE]
            results = await asyncio.gather(
                *(self.patch(item.id, fields) for item in chunk), return_exceptions=True
            )
            failed: dict[str, BaseException] = {}
            for item, result in zip(chunk, results, strict=True):
                if isinstance(result, BaseException):
                    failed[item.id] = result
                else:
                    patched.append(result)
            if failed:
                logger.error(
                    "Batch update failed — container=%s failed=%s written=%d",
                    self.container_name,
                    ",".join(failed),
                    len(patched),
                )
                unreverted = await self._revert(patched, rollback) if rollback else []
                raise BatchWriteError(failed, unreverted)
        return patched

    async def _revert(self, items: Sequence[T], fields: Mapping[str, Any]) -> list[str]:
        results = await asyncio.gather(
            *(self.patch(item.id, fields) for item in items), return_exceptions=True
        )
        unreverted = [
            item.id
            for item, result in zip(items, results, strict=True)
            if isinstance(result, BaseException)
        ]
        if unreverted:
            logger.error(
                "Batch rollback incomplete — container=%s ids=%s",
                self.container_name,
                ",".join(unreverted),
            )
        return unreverted

    async def query(
        self, sql: str, parameters: list[dict[str, Any]] | None = None
    ) -> list[T]:
        """Run a SQL query and validate every row into the model class."""
        items: list[T] = []
        async for row in self._container.query_items(query=sql, parameters=parameters or []):
            items.append(self.model_class.model_validate(cast("dict[str, Any]", row)))
        return items

    async def soft_delete(self, item: T, partition_key: str | None = None) -> T:
        item.deleted_at = datetime.now(UTC)
        return await self.update(item, partition_key)
