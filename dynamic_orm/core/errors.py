"""Exception hierarchy raised by the dynamic ORM layer."""

from __future__ import annotations

from typing import Optional


class DynamicORMError(Exception):
    """Base class for all errors raised by `dynamic_orm`."""


class ConfigurationError(DynamicORMError):
    """Connection target is missing, empty, conflicting, or cannot be opened."""


class MissingDriverError(ConfigurationError, ImportError):
    """No DB-API driver module is installed for the requested dialect."""

    def __init__(self, dialect: str, candidates: tuple[str, ...]) -> None:
        if candidates:
            hint = " or ".join(f"'pip install {name}'" for name in candidates)
            message = (
                f"No DB-API driver is installed for dialect {dialect!r}. "
                f"Install one with {hint}, or pass connect= explicitly."
            )
        else:
            message = (
                f"Dialect {dialect!r} has no connection-string driver. "
                "Pass connect= explicitly."
            )
        super().__init__(message)
        self.dialect = dialect
        self.candidates = candidates


class ExecutionError(DynamicORMError):
    """The driver failed while executing a command or fetching its rows.

    The message is the driver's message verbatim; the driver exception is
    chained as `__cause__`.
    """

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        super().__init__(message)
        self.sql = sql


class UnsupportedOperation(DynamicORMError, NotImplementedError):
    """Operation is not supported, e.g. rewinding a single-pass result set."""


class CursorStateError(DynamicORMError, RuntimeError):
    """Result set has no current record to return."""
