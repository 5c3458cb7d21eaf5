"""Public entry point: run SQL text and stored procedures as record sequences."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Optional

from .config import get_connection_string, get_dialect_name, get_driver, is_autocommit
from .core.contracts import ConnectionTargetPort
from .core.errors import ConfigurationError
from .core.parameter_cache import ParameterCache, default_parameter_cache
from .core.result_set import ResultSet
from .ports.db_api.connection import (
    ConnectionMode,
    ConnectionStringTarget,
    SharedConnectionTarget,
)
from .ports.db_api.dialects import Dialect, MSSQLDialect, ensure_dialect

logger = logging.getLogger(__name__)


class DynamicORM:
    """Database facade returning lazy `ResultSet` sequences of `dict` records.

    Two explicit connection modes are supported:

    - per-call (default): `DynamicORM(connection_string)` opens a fresh
      connection for every `run()`/`call()` and the result set closes it.
    - shared: `DynamicORM(connection=conn)` or `DynamicORM.open_shared(...)`
      reuses one long-lived connection. A shared connection must not run
      commands from several threads at once.

    A `connection_string=` override on `run()`/`call()` always opens a fresh
    connection for that one call.

    Args:
        connection_string: Default connection string for per-call mode.
        connection: Caller-owned DB-API connection for shared mode; the facade
            never closes it.
        dialect: Dialect instance or name; defaults to SQL Server.
        connect: DB-API `connect` callable; discovered from installed drivers
            when omitted.
        driver: DB-API module name to use for discovery (e.g. `"pyodbc"`).
        parameter_cache: Cache for reflected procedure parameters; the
            process-wide cache when omitted.
        autocommit: Switch per-call connections to autocommit.
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        *,
        connection: Any = None,
        dialect: Dialect | str | None = None,
        connect: Optional[Callable[..., Any]] = None,
        driver: Optional[str] = None,
        parameter_cache: Optional[ParameterCache] = None,
        autocommit: bool = True,
    ):
        if connection_string is not None and connection is not None:
            raise ConfigurationError(
                "Pass either connection_string (per-call mode) or connection "
                "(shared mode), not both."
            )
        self.dialect: Dialect = ensure_dialect(dialect) if dialect is not None else MSSQLDialect()
        self._parameter_cache = parameter_cache
        self._per_call = ConnectionStringTarget(
            connection_string,
            connect,
            dialect=self.dialect,
            driver=driver,
            autocommit=autocommit,
        )
        self._shared: Optional[SharedConnectionTarget] = None
        if connection is not None:
            self._shared = SharedConnectionTarget(connection, owns_connection=False)

    @classmethod
    def open_shared(
        cls,
        connection_string: str,
        *,
        dialect: Dialect | str | None = None,
        connect: Optional[Callable[..., Any]] = None,
        driver: Optional[str] = None,
        parameter_cache: Optional[ParameterCache] = None,
        autocommit: bool = True,
    ) -> DynamicORM:
        """Open one long-lived connection owned (and closed) by the facade."""

        resolved = ensure_dialect(dialect) if dialect is not None else MSSQLDialect()
        target = ConnectionStringTarget(
            connection_string,
            connect,
            dialect=resolved,
            driver=driver,
            autocommit=autocommit,
        )
        conn, _ = target.acquire()
        db = cls(
            connection=conn,
            dialect=resolved,
            connect=connect,
            driver=driver,
            parameter_cache=parameter_cache,
            autocommit=autocommit,
        )
        db._shared = SharedConnectionTarget(conn, owns_connection=True)
        return db

    @classmethod
    def from_env(cls, **kwargs: Any) -> DynamicORM:
        """Build a per-call facade from `DYNAMIC_ORM_*` environment variables."""

        kwargs.setdefault("dialect", get_dialect_name())
        kwargs.setdefault("driver", get_driver())
        kwargs.setdefault("autocommit", is_autocommit())
        return cls(get_connection_string() or None, **kwargs)

    @property
    def mode(self) -> ConnectionMode:
        return ConnectionMode.SHARED if self._shared is not None else ConnectionMode.PER_CALL

    @property
    def connection_string(self) -> Optional[str]:
        """Default connection string used in per-call mode."""

        return self._per_call.connection_string

    @connection_string.setter
    def connection_string(self, value: Optional[str]) -> None:
        self._per_call.connection_string = value

    @property
    def parameter_cache(self) -> ParameterCache:
        if self._parameter_cache is None:
            self._parameter_cache = default_parameter_cache()
        return self._parameter_cache

    def run(self, sql_text: str, *, connection_string: Optional[str] = None) -> ResultSet:
        """Execute SQL text without parameters.

        Args:
            sql_text: Statement executed as-is.
            connection_string: Open a fresh connection from this string instead
                of the facade's default target.

        Returns:
            Result set positioned before the first row.
        """

        return ResultSet(self._target(connection_string), sql_text)

    def call(
        self,
        procedure_name: str,
        parameters: Any = None,
        *,
        connection_string: Optional[str] = None,
    ) -> ResultSet:
        """Execute a stored procedure.

        Args:
            procedure_name: Procedure name, optionally schema-qualified.
            parameters: Object, dataclass, mapping, or `ParameterBuilder.build()`
                output whose public attributes become named parameters.
            connection_string: Open a fresh connection from this string instead
                of the facade's default target.

        Raises:
            UnsupportedOperation: The dialect has no stored procedures.
        """

        bound = self.parameter_cache.get_or_compute(parameters)
        sql = self.dialect.procedure_sql(procedure_name, [p.name for p in bound])
        logger.debug("Calling procedure %s with %d parameters", procedure_name, len(bound))
        target = self._target(connection_string)
        return ResultSet(target, sql, self.dialect.bind(bound))

    def _target(self, connection_string: Optional[str]) -> ConnectionTargetPort:
        if connection_string is not None:
            return self._per_call.with_connection_string(connection_string)
        if self._shared is not None:
            return self._shared
        return self._per_call

    def close(self) -> None:
        """Close a shared connection owned by this facade; idempotent."""

        if self._shared is not None:
            self._shared.close()

    def __enter__(self) -> DynamicORM:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
