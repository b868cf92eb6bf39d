"""
Database definitions and collection constants.
"""
from mongo_bootstrap.database.databases import admin_db, test_db

__all__ = ["admin_db", "test_db"]
