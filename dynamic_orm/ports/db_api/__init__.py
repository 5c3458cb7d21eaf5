"""DB-API adapter, dialect, and connection target exports."""

from .connection import ConnectionMode, ConnectionStringTarget, SharedConnectionTarget
from .dialects import (
    Dialect,
    MSSQLDialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    get_dialect,
)
from .drivers import enable_autocommit, load_connect

__all__ = [
    "ConnectionMode",
    "ConnectionStringTarget",
    "SharedConnectionTarget",
    "Dialect",
    "MSSQLDialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "get_dialect",
    "enable_autocommit",
    "load_connect",
]
