from __future__ import annotations


class SvcResourceError(Exception):
    """Base class for errors raised by svc-resource itself."""


class MongoNotInitializedError(SvcResourceError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("Mongo client is not initialized; call init_mongo() first")


class MongoClientClosedError(SvcResourceError, RuntimeError):
    def __init__(self) -> None:
        super().__init__(
            "Mongo client for this app was closed at shutdown; build a new app to start again"
        )
