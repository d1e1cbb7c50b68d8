"""
Database module - MongoDB connection, collection definitions and indexes.
"""
from confide_mongo.database.connections import (
    close_connections,
    get_database,
    get_mongo_client,
)
from confide_mongo.database.databases import auth_db
from confide_mongo.database.indexes import create_indexes

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "create_indexes",
    "auth_db",
]
