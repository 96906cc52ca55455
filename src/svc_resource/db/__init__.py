# Public DB API exports
from .nosql.mongo import (
    MongoSettings,
    close_mongo,
    get_mongo_client,
    get_mongo_db,
    get_mongo_settings,
    init_mongo,
    mongo_healthcheck,
)

__all__ = [
    "MongoSettings",
    "get_mongo_settings",
    "init_mongo",
    "get_mongo_client",
    "get_mongo_db",
    "close_mongo",
    "mongo_healthcheck",
]
