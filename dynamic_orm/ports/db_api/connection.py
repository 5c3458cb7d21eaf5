"""Connection targets: per-call connections or one shared connection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Optional, Tuple

from ...core.errors import ConfigurationError
from .dialects import Dialect
from .drivers import enable_autocommit, load_connect

logger = logging.getLogger(__name__)


class ConnectionMode(str, Enum):
    """How a facade obtains connections."""

    PER_CALL = "per_call"
    SHARED = "shared"


class ConnectionStringTarget:
    """Open a fresh connection from a connection string for every operation.

    Connections are owned by the caller of `acquire()` and must be closed by it.
    """

    mode = ConnectionMode.PER_CALL

    def __init__(
        self,
        connection_string: Optional[str],
        connect: Optional[Callable[[str], Any]] = None,
        *,
        dialect: Optional[Dialect] = None,
        driver: Optional[str] = None,
        autocommit: bool = True,
    ):
        """Create per-call target.

        Args:
            connection_string: Opaque driver connection string.
            connect: DB-API `connect`. When omitted it is resolved from `driver`
                or the dialect's installed drivers on first `acquire()`.
            dialect: Dialect used for driver discovery.
            driver: Explicit DB-API module name.
            autocommit: Switch each opened connection to autocommit.
        """

        if connect is None and dialect is None:
            raise ConfigurationError("Either connect or dialect is required.")
        self.connection_string = connection_string
        self._connect = connect
        self._dialect = dialect
        self._driver = driver
        self.autocommit = autocommit

    def with_connection_string(self, connection_string: Optional[str]) -> ConnectionStringTarget:
        """Return a target with the same driver settings and another connection string."""

        return ConnectionStringTarget(
            connection_string,
            self._connect,
            dialect=self._dialect,
            driver=self._driver,
            autocommit=self.autocommit,
        )

    def _resolve_connect(self) -> Callable[[str], Any]:
        if self._connect is None:
            self._connect = load_connect(self._dialect, self._driver)  # type: ignore[arg-type]
        return self._connect

    def acquire(self) -> Tuple[Any, bool]:
        if not self.connection_string or not self.connection_string.strip():
            raise ConfigurationError(
                "The connection string is empty. A valid connection string is "
                "necessary to execute a command."
            )
        connect = self._resolve_connect()
        try:
            conn = connect(self.connection_string)
        except Exception as exc:
            raise ConfigurationError(f"Failed to open connection: {exc}") from exc
        if self.autocommit:
            try:
                enable_autocommit(conn)
            except Exception:
                conn.close()
                raise
        logger.debug("Opened per-call connection %s", type(conn).__name__)
        return conn, True


class SharedConnectionTarget:
    """Reuse one long-lived connection across operations.

    The connection is not safe for concurrent commands from several threads.
    """

    mode = ConnectionMode.SHARED

    def __init__(self, conn: Any, *, owns_connection: bool = False):
        if conn is None:
            raise ConfigurationError("A shared connection target requires a connection.")
        self.conn: Any | None = conn
        self.owns_connection = owns_connection

    def acquire(self) -> Tuple[Any, bool]:
        if self.conn is None:
            raise ConfigurationError("The shared connection is closed.")
        return self.conn, False

    def close(self) -> None:
        """Close the connection when this target owns it; idempotent."""

        conn = self.conn
        self.conn = None
        if conn is None or not self.owns_connection:
            return
        close = getattr(conn, "close", None)
        if callable(close):
            close()
        logger.debug("Closed shared connection %s", type(conn).__name__)
