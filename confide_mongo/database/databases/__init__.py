"""
Database definitions and collection constants.
"""
from confide_mongo.database.databases import auth_db

__all__ = ["auth_db"]
