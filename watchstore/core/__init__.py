"""
Core package containing configuration, database, security, logging and errors.
"""
from watchstore.core.config import settings
from watchstore.core.database import Base, Database, DbSession, get_db_session
from watchstore.core.logging import configure_logging, get_logger
from watchstore.core.security import create_access_token, decode_access_token

__all__ = [
    "settings",
    "Base",
    "Database",
    "DbSession",
    "get_db_session",
    "configure_logging",
    "get_logger",
    "create_access_token",
    "decode_access_token",
]
