"""Core port contracts used by adapters, result sets, and the facade."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Tuple


class CursorPort(Protocol):
    """Subset of the DB-API 2.0 cursor used by `ResultSet`."""

    description: Optional[Sequence[Sequence[Any]]]
    rowcount: int

    def execute(self, operation: str, *args: Any) -> Any: ...

    def fetchone(self) -> Any: ...

    def close(self) -> None: ...


class ConnectionPort(Protocol):
    """Subset of the DB-API 2.0 connection used by `ResultSet`."""

    def cursor(self) -> CursorPort: ...

    def close(self) -> None: ...


class ConnectionTargetPort(Protocol):
    """Source of connections for one operation.

    `acquire()` returns the connection and whether the caller owns it, i.e.
    must close it once the operation is finished.
    """

    def acquire(self) -> Tuple[ConnectionPort, bool]: ...

