"""Cosmos DB persistence for stories and reporters."""

from newsdesk.database.client import CosmosClient

__all__ = ["CosmosClient"]
