"""SQLite database engine and schema via SQLAlchemy Core."""

from browdi.infrastructure.database.engine import create_db_engine, init_database
from browdi.infrastructure.database.schema import metadata, preferences

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "preferences",
]
