from .mongo import add_mongo_db, add_mongo_health

__all__ = [
    # MongoDB
    "add_mongo_db",
    "add_mongo_health",
]
