"""Core app configuration, database, security and errors."""

from starterpack.core.config import Settings, get_settings
from starterpack.core.database import Database, get_db

__all__ = ["Settings", "get_settings", "Database", "get_db"]
