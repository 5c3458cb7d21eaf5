"""Concrete SQL dialect implementations for DB-API adapters."""

from __future__ import annotations

import re
from typing import Any, Dict, Sequence, Tuple, Type

from ...core.errors import ConfigurationError, UnsupportedOperation
from ...core.parameters import NamedParameter
from ...core.types import QueryParams

_IDENTIFIER = re.compile(r"^[A-Za-z_@#][A-Za-z0-9_@#$]*$")


class Dialect:
    """Base dialect that defines quoting, placeholders, and procedure calls."""

    name: str = "generic"
    paramstyle: str = "named"
    quote_char: str = '"'
    close_quote_char: str = '"'
    supports_procedures: bool = False
    driver_modules: Tuple[str, ...] = ()

    def q(self, ident: str) -> str:
        """Quote SQL identifier."""

        escaped = ident.replace(self.close_quote_char, self.close_quote_char * 2)
        return f"{self.quote_char}{escaped}{self.close_quote_char}"

    def q_name(self, name: str) -> str:
        """Quote a possibly schema-qualified object name (`dbo.INS_Person`)."""

        parts = name.split(".")
        if not name or any(not part for part in parts):
            raise ValueError(f"Invalid object name {name!r}.")
        return ".".join(self.q(part) for part in parts)

    def placeholder(self, key: str) -> str:
        """Return parameter placeholder for current param style."""

        if self.paramstyle == "named":
            return f":{key}"
        if self.paramstyle == "pyformat":
            return f"%({key})s"
        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def bind(self, parameters: Sequence[NamedParameter]) -> QueryParams:
        """Pack named parameters the way the driver's paramstyle expects."""

        if not parameters:
            return None
        if self.paramstyle in ("named", "pyformat"):
            return {p.name: p.value for p in parameters}
        return [p.value for p in parameters]

    def procedure_sql(self, procedure_name: str, names: Sequence[str]) -> str:
        """Render the statement that invokes a stored procedure."""

        raise UnsupportedOperation(
            f"Dialect {self.name!r} does not support stored procedure calls."
        )

    def _check_parameter_name(self, name: str) -> str:
        if not _IDENTIFIER.match(name):
            raise ValueError(f"Invalid stored procedure parameter name {name!r}.")
        return name


class MSSQLDialect(Dialect):
    """SQL Server dialect (`?` parameters, `EXEC [proc] @Name = ?`)."""

    name = "mssql"
    paramstyle = "qmark"
    quote_char = "["
    close_quote_char = "]"
    supports_procedures = True
    driver_modules = ("pyodbc", "mssql_python")

    def procedure_sql(self, procedure_name: str, names: Sequence[str]) -> str:
        sql = f"EXEC {self.q_name(procedure_name)}"
        if names:
            assignments = ", ".join(
                f"@{self._check_parameter_name(name).lstrip('@')} = {self.placeholder(name)}"
                for name in names
            )
            sql += f" {assignments}"
        return sql


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` parameters, set-returning function calls)."""

    name = "postgres"
    paramstyle = "format"
    supports_procedures = True
    driver_modules = ("psycopg", "psycopg2")

    def procedure_sql(self, procedure_name: str, names: Sequence[str]) -> str:
        arguments = ", ".join(
            f"{self.q(self._check_parameter_name(name))} => {self.placeholder(name)}"
            for name in names
        )
        return f"SELECT * FROM {self.q_name(procedure_name)}({arguments})"


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` parameters, positional `CALL`).

    MySQL has no named procedure arguments, so parameters are passed in
    reflection order.
    """

    name = "mysql"
    paramstyle = "format"
    quote_char = "`"
    close_quote_char = "`"
    supports_procedures = True

    def procedure_sql(self, procedure_name: str, names: Sequence[str]) -> str:
        placeholders = ", ".join(
            self.placeholder(self._check_parameter_name(name)) for name in names
        )
        return f"CALL {self.q_name(procedure_name)}({placeholders})"


class SQLiteDialect(Dialect):
    """SQLite dialect (`:name` parameters, no stored procedures)."""

    name = "sqlite"
    paramstyle = "named"
    driver_modules = ("sqlite3",)


_DIALECTS: Dict[str, Type[Dialect]] = {
    "generic": Dialect,
    "mssql": MSSQLDialect,
    "sqlserver": MSSQLDialect,
    "postgres": PostgresDialect,
    "postgresql": PostgresDialect,
    "mysql": MySQLDialect,
    "sqlite": SQLiteDialect,
}


def get_dialect(name: str) -> Dialect:
    """Return a dialect instance by name (`mssql`, `postgres`, `mysql`, `sqlite`)."""

    try:
        return _DIALECTS[name.strip().lower()]()
    except KeyError:
        known = ", ".join(sorted(_DIALECTS))
        raise ConfigurationError(f"Unknown dialect {name!r}. Known dialects: {known}.") from None


def ensure_dialect(dialect: Any) -> Dialect:
    """Accept a dialect instance or a dialect name."""

    if isinstance(dialect, str):
        return get_dialect(dialect)
    return dialect
