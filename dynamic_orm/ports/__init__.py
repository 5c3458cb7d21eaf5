"""Public port exports for concrete adapter implementations."""

from .db_api import (
    ConnectionMode,
    ConnectionStringTarget,
    Dialect,
    MSSQLDialect,
    MySQLDialect,
    PostgresDialect,
    SharedConnectionTarget,
    SQLiteDialect,
)

__all__ = [
    "ConnectionMode",
    "ConnectionStringTarget",
    "SharedConnectionTarget",
    "Dialect",
    "MSSQLDialect",
    "PostgresDialect",
    "MySQLDialect",
    "SQLiteDialect",
]
