from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from svc_resource.api.fastapi import (
    CatchAllExceptionMiddleware,
    add_mongo_db,
    add_mongo_health,
    create_resource,
)
from svc_resource.app import CURRENT_ENVIRONMENT
from svc_resource.app.core.logging import setup_logging
from svc_resource.app.settings import AppSettings, get_app_settings
from svc_resource.db.nosql.mongo import MongoSettings
from svc_resource.schemas import Post

logger = logging.getLogger(__name__)


def create_app(
    app_settings: AppSettings | None = None,
    mongo_settings: MongoSettings | None = None,
    *,
    ping: bool = True,
) -> FastAPI:
    """Build the service: one Mongo database, one ``Post`` resource mounted at ``/<resource_name>``."""
    settings = app_settings or get_app_settings()

    app = FastAPI(title=settings.name, version=settings.version)
    app.add_middleware(CatchAllExceptionMiddleware)

    db = add_mongo_db(app, settings=mongo_settings, ping=ping)
    add_mongo_health(app, db)

    resource = create_resource(Post, db, settings.resource_name)
    app.include_router(resource.router, prefix=f"/{resource.name}")
    app.state.resources = {resource.name: resource}

    mongo_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        async with mongo_lifespan(_app):
            logger.info("Listening on port %d", settings.port)
            yield

    app.router.lifespan_context = lifespan

    logger.info(
        "%s version of %s initialized [env: %s]",
        settings.version,
        settings.name,
        CURRENT_ENVIRONMENT,
    )
    return app


def serve_app() -> FastAPI:
    """uvicorn factory: runs in every server process (reload workers included), so logging is set up here."""
    setup_logging()
    return create_app()
