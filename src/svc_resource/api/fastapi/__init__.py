from .db import add_mongo_db, add_mongo_health
from .middleware.errors import CatchAllExceptionMiddleware
from .resource import Resource, create_resource

__all__ = [
    "Resource",
    "create_resource",
    "add_mongo_db",
    "add_mongo_health",
    "CatchAllExceptionMiddleware",
]
