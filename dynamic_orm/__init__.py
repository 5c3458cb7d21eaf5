"""Dynamic ORM: run SQL and stored procedures, get rows back as dicts."""

import logging

from .core import (
    ConfigurationError,
    CursorStateError,
    DynamicORMError,
    ExecutionError,
    MissingDriverError,
    NamedParameter,
    ParameterBuilder,
    ParameterCache,
    Record,
    ResultSet,
    UnsupportedOperation,
    bind_parameters,
    default_parameter_cache,
)
from .facade import DynamicORM
from .ports import (
    ConnectionMode,
    Dialect,
    MSSQLDialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DynamicORM",
    "ResultSet",
    "Record",
    "NamedParameter",
    "ParameterBuilder",
    "ParameterCache",
    "bind_parameters",
    "default_parameter_cache",
    "ConnectionMode",
    "Dialect",
    "MSSQLDialect",
    "PostgresDialect",
    "MySQLDialect",
    "SQLiteDialect",
    "DynamicORMError",
    "ConfigurationError",
    "MissingDriverError",
    "ExecutionError",
    "UnsupportedOperation",
    "CursorStateError",
]
