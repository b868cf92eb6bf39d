"""
Database module - database definitions.

Client lifecycle lives in mongo_bootstrap.database.connections.
"""
from mongo_bootstrap.database.databases import admin_db, test_db

__all__ = ["admin_db", "test_db"]
