from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from svc_resource.db.nosql.mongo import (
    MongoSettings,
    close_mongo,
    get_mongo_db,
    init_mongo,
    mongo_healthcheck,
)
from svc_resource.exceptions import MongoClientClosedError

logger = logging.getLogger(__name__)


def add_mongo_db(
    app: FastAPI,
    *,
    settings: MongoSettings | None = None,
    ping: bool = True,
) -> AsyncIOMotorDatabase:
    """
    Create the Mongo client and tie its lifetime to the app.

    Returns the database handle right away so resources can be built before
    the app starts. On startup the server is pinged (a failure aborts
    startup); on shutdown the client is closed.

    The app is single-use: resources keep the handle returned here, and that
    handle dies with the client, so a second startup raises
    MongoClientClosedError. Build a fresh app with create_app() instead.
    """
    init_mongo(settings)
    db = get_mongo_db()
    closed = False

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        nonlocal closed
        if closed:
            raise MongoClientClosedError()
        try:
            if ping:
                await db.command("ping")
                logger.info("Connected to Mongo database '%s'", db.name)
            yield
        finally:
            closed = True
            close_mongo()

    app.router.lifespan_context = lifespan
    app.state.mongo_db = db
    return db


def add_mongo_health(
    app: FastAPI,
    db: AsyncIOMotorDatabase,
    *,
    path: str = "/_mongo/health",
) -> None:
    router = APIRouter(tags=["internal"])

    @router.get(path, include_in_schema=False)
    async def mongo_health():
        ok = await mongo_healthcheck(db)
        return Response(
            status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE
        )

    app.include_router(router)
