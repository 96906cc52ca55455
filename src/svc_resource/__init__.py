from . import api, app

from .api.fastapi import Resource, create_resource
from .exceptions import MongoClientClosedError, MongoNotInitializedError, SvcResourceError

__all__ = [
    # Modules
    "app",
    "api",
    # Resource factory
    "Resource",
    "create_resource",
    # Errors
    "SvcResourceError",
    "MongoNotInitializedError",
    "MongoClientClosedError",
]
