"""
Database connection management for MongoDB.
"""
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from confide_mongo.config import get_settings

# Global connection instance
_mongo_client: Optional[MongoClient] = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client."""
    global _mongo_client
    if _mongo_client is None:
        settings = get_settings()
        _mongo_client = MongoClient(settings.mongo_uri)
    return _mongo_client


def close_connections() -> None:
    """Close the MongoDB connection."""
    global _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None


def get_database(db_name: Optional[str] = None) -> Database:
    """Get a specific MongoDB database by name (defaults to the configured one)."""
    client = get_mongo_client()
    return client[db_name or get_settings().database_name]
