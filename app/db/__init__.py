"""
Database module - MongoDB connection.
"""
from app.db.mongodb import get_collection, get_mongo_db, ping_mongo, COLLECTIONS

__all__ = [
    "get_collection",
    "get_mongo_db",
    "ping_mongo",
    "COLLECTIONS"
]
