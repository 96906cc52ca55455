from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from svc_resource.exceptions import MongoNotInitializedError

from .settings import MongoSettings, get_mongo_settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db_name: Optional[str] = None


def init_mongo(settings: MongoSettings | None = None) -> AsyncIOMotorClient:
    """
    Create the process-wide Mongo client.

    Motor connects lazily, so this never touches the network; the first
    operation (or the startup ping in add_mongo) does.
    """
    global _client, _db_name
    settings = settings or get_mongo_settings()
    if _client is not None:
        return _client
    _client = AsyncIOMotorClient(settings.url, **settings.client_kwargs())
    _db_name = settings.db
    logger.debug("Mongo client created for database '%s'", settings.db)
    return _client


def get_mongo_client() -> AsyncIOMotorClient:
    if _client is None:
        raise MongoNotInitializedError()
    return _client


def get_mongo_db(name: str | None = None) -> AsyncIOMotorDatabase:
    client = get_mongo_client()
    return client[name or _db_name]


def close_mongo() -> None:
    global _client, _db_name
    if _client is None:
        return
    _client.close()
    _client = None
    _db_name = None
    logger.info("Mongo client closed")
