"""DB-API driver discovery and per-connection session helpers."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from typing import Any, Optional

from ...core.errors import ConfigurationError, MissingDriverError
from .dialects import Dialect

logger = logging.getLogger(__name__)


def load_connect(dialect: Dialect, driver: Optional[str] = None) -> Callable[..., Any]:
    """Return the `connect` callable of the requested or first installed driver.

    Args:
        dialect: Dialect whose `driver_modules` are tried in order.
        driver: Explicit module name (e.g. `"pyodbc"`); overrides discovery.

    Raises:
        MissingDriverError: No candidate module can be imported.
        ConfigurationError: The module has no callable `connect`.
    """

    candidates = (driver,) if driver else dialect.driver_modules
    for module_name in candidates:
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            logger.debug("DB-API driver %s is not installed", module_name)
            continue
        connect = getattr(module, "connect", None)
        if not callable(connect):
            raise ConfigurationError(f"Module {module_name!r} has no DB-API connect().")
        logger.debug("Using DB-API driver %s for dialect %s", module_name, dialect.name)
        return connect
    raise MissingDriverError(dialect.name, tuple(candidates))


def enable_autocommit(conn: Any) -> None:
    """Switch an owned connection to autocommit so each call commits on its own."""

    module_name = type(conn).__module__.lower()
    if "sqlite3" in module_name:
        # Legacy transaction control; autocommit when isolation_level is None.
        conn.isolation_level = None
        return
    if hasattr(conn, "autocommit"):
        autocommit = getattr(conn, "autocommit")
        if callable(autocommit):
            # MySQLdb/pymysql expose autocommit(bool) as a method.
            autocommit(True)
        else:
            conn.autocommit = True
