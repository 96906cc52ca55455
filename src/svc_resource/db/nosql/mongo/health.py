from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


async def mongo_healthcheck(db: AsyncIOMotorDatabase) -> bool:
    try:
        await db.command("ping")
        return True
    except PyMongoError as exc:
        logger.warning("Mongo ping failed: %s", exc)
        return False
