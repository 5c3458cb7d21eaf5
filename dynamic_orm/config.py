"""Environment-variable-based configuration."""

from __future__ import annotations

import os
from typing import Optional

from .core.errors import ConfigurationError


def get_connection_string() -> str:
    """Return the default connection string from DYNAMIC_ORM_CONNECTION_STRING."""
    return os.environ.get("DYNAMIC_ORM_CONNECTION_STRING", "")


def get_dialect_name() -> str:
    """Return the SQL dialect name from DYNAMIC_ORM_DIALECT."""
    return os.environ.get("DYNAMIC_ORM_DIALECT", "mssql").strip().lower()


def get_driver() -> Optional[str]:
    """Return the DB-API driver module from DYNAMIC_ORM_DRIVER, if set."""
    return os.environ.get("DYNAMIC_ORM_DRIVER", "").strip() or None


def get_parameter_cache_size() -> Optional[int]:
    """Return the parameter cache bound from DYNAMIC_ORM_PARAMETER_CACHE_SIZE.

    `0` means unbounded.
    """
    raw = os.environ.get("DYNAMIC_ORM_PARAMETER_CACHE_SIZE", "1024")
    try:
        size = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"DYNAMIC_ORM_PARAMETER_CACHE_SIZE must be an integer, got {raw!r}."
        ) from None
    if size < 0:
        raise ConfigurationError("DYNAMIC_ORM_PARAMETER_CACHE_SIZE must be >= 0.")
    return size or None


def is_autocommit() -> bool:
    """Return False only if DYNAMIC_ORM_AUTOCOMMIT is set to FALSE."""
    return os.environ.get("DYNAMIC_ORM_AUTOCOMMIT", "TRUE").upper() != "FALSE"
