"""
MongoDB Connection Utility

MongoDB stores:
- Employment form submissions (formSubmissions)
- Education form submissions (applySubmissions)
- Testimonials (testimonials)

WHY MongoDB for these?
- Schema-flexible: form payloads carry arbitrary optional fields
- Document-oriented: every submission is self-contained
- No joins needed
"""
import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: AsyncMongoClient = None
_db: AsyncDatabase = None


def get_mongo_client() -> AsyncMongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = AsyncMongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> AsyncDatabase:
    """Get the application database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> AsyncCollection:
    """Get a specific collection. Use the COLLECTIONS constants for names."""
    db = get_mongo_db()
    return db[name]


async def ping_mongo() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        await client.admin.command("ping")
        return True
    except Exception:
        logger.exception("MongoDB connection failed")
        return False


async def close_mongo_client() -> None:
    global _client, _db
    if _client is not None:
        await _client.close()
    _client = None
    _db = None


# Collection name constants (avoid typos)
COLLECTIONS = {
    "employment_forms": "formSubmissions",
    "education_forms": "applySubmissions",
    "testimonials": "testimonials"
}
