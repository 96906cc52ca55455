from .nosql import add_mongo_db, add_mongo_health

__all__ = ["add_mongo_db", "add_mongo_health"]
