from .client import close_mongo, get_mongo_client, get_mongo_db, init_mongo
from .health import mongo_healthcheck
from .settings import MongoSettings, get_mongo_settings

__all__ = [
    "MongoSettings",
    "get_mongo_settings",
    "init_mongo",
    "get_mongo_client",
    "get_mongo_db",
    "close_mongo",
    "mongo_healthcheck",
]
