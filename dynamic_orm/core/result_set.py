"""Lazy, single-pass sequence of records backed by an open DB-API cursor."""

from __future__ import annotations

import logging
from typing import Any, Iterator, List

from .contracts import ConnectionPort, ConnectionTargetPort, CursorPort
from .errors import CursorStateError, ExecutionError, UnsupportedOperation
from .rows import RowMaterializer
from .types import MaybeRecord, QueryParams, Record

logger = logging.getLogger(__name__)


class ResultSet:
    """Forward-only iterator over the rows of one executed command.

    The command runs eagerly when the result set is constructed. The result
    set owns the cursor and, for per-call targets, the connection; both are
    released when the rows are exhausted, when `close()` is called, or when a
    `with` block exits, whichever comes first.

    Usage:
        with db.run("SELECT * FROM People") as people:
            for person in people:
                print(person["Name"])
    """

    def __init__(self, target: ConnectionTargetPort, sql: str, params: QueryParams = None):
        """Open a connection, execute `sql`, and position before the first row.

        Args:
            target: Source of the connection for this command.
            sql: SQL text or rendered stored-procedure invocation.
            params: Driver parameters matching the dialect paramstyle.

        Raises:
            ConfigurationError: Connection target is empty or cannot be opened.
            ExecutionError: The driver rejected the command.
        """

        self.sql = sql
        self._conn: ConnectionPort | None = None
        self._cursor: CursorPort | None = None
        self._materializer = RowMaterializer([])
        self._owns_connection = False
        self._current: MaybeRecord = None
        self._has_current = False
        self._exhausted = False
        self._closed = False
        self.rowcount = -1

        self._conn, self._owns_connection = target.acquire()
        try:
            self._cursor = self._conn.cursor()
            if params is None:
                self._cursor.execute(sql)
            else:
                self._cursor.execute(sql, params)
        except Exception as exc:
            self._release()
            raise ExecutionError(str(exc), sql=sql) from exc

        self.rowcount = getattr(self._cursor, "rowcount", -1)
        try:
            self._skip_results_without_columns()
        except Exception as exc:
            self._release()
            raise ExecutionError(str(exc), sql=sql) from exc

        self._materializer = RowMaterializer.from_cursor(self._cursor)
        logger.debug("Executed command (%d columns): %s", len(self.columns), sql)

        if getattr(self._cursor, "description", None) is None:
            # Statement produced no result set; nothing left to stream.
            self._exhausted = True
            self._release()

    @property
    def columns(self) -> List[str]:
        """Column names of the result set, in cursor order."""

        return list(self._materializer.columns)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current(self) -> Record:
        """Record produced by the last successful `advance()`.

        Raises:
            CursorStateError: Before the first successful `advance()` or after
                `advance()` returned False.
        """

        if not self._has_current:
            raise CursorStateError("No current record; call advance() and check it returned True.")
        return self._current  # type: ignore[return-value]

    def advance(self) -> bool:
        """Move to the next row.

        Returns:
            True when a row was read into `current`, False once the rows are
            exhausted or the result set was closed; False is returned forever
            after.

        Raises:
            ExecutionError: The driver failed while fetching or returned a row
                that does not match the cursor description. Resources are
                released first; records already returned stay valid.
        """

        if self._exhausted or self._closed:
            self._has_current = False
            return False

        try:
            row = self._cursor.fetchone()  # type: ignore[union-attr]
            record = None if row is None else self._materializer.materialize(row)
        except Exception as exc:
            self._has_current = False
            self._exhausted = True
            self._release()
            raise ExecutionError(str(exc), sql=self.sql) from exc

        if row is None:
            self._has_current = False
            self._exhausted = True
            self._release()
            return False

        self._current = record
        self._has_current = True
        return True

    def reset(self) -> None:
        """Always fails: the underlying cursor cannot be rewound."""

        raise UnsupportedOperation("ResultSet is single-pass and cannot be reset.")

    def first(self) -> MaybeRecord:
        """Return the next record (or None) and close the result set."""

        try:
            if self.advance():
                return self.current
            return None
        finally:
            self.close()

    def close(self) -> None:
        """Cancel pending work and release cursor and owned connection; idempotent."""

        if self._closed:
            return
        if not self._exhausted:
            self._cancel_pending()
        self._has_current = False
        self._release()

    def _skip_results_without_columns(self) -> None:
        # Row counts of statements run without NOCOUNT arrive before the rows.
        nextset = getattr(self._cursor, "nextset", None)
        if not callable(nextset):
            return
        while getattr(self._cursor, "description", None) is None:
            try:
                more = nextset()
            except Exception as exc:
                if type(exc).__name__ != "NotSupportedError":
                    raise
                return
            if not more:
                return

    def _cancel_pending(self) -> None:
        # Cancelling first skips draining remaining rows and output statistics.
        cancel = getattr(self._cursor, "cancel", None)
        if not callable(cancel) and self._owns_connection:
            cancel = getattr(self._conn, "cancel", None) or getattr(self._conn, "interrupt", None)
        if not callable(cancel):
            return
        try:
            cancel()
            logger.debug("Cancelled pending work for: %s", self.sql)
        except Exception:
            logger.debug("Ignoring cancel failure during close", exc_info=True)

    def _release(self) -> None:
        if self._closed:
            return
        self._closed = True
        cursor, self._cursor = self._cursor, None
        conn, self._conn = self._conn, None

        if cursor is not None:
            self._close_quietly(cursor, "cursor")
        if conn is not None and self._owns_connection:
            self._close_quietly(conn, "connection")
        logger.debug("Released result set resources for: %s", self.sql)

    def _close_quietly(self, resource: Any, kind: str) -> None:
        close = getattr(resource, "close", None)
        if not callable(close):
            return
        try:
            close()
        except Exception:
            logger.debug("Ignoring %s close failure", kind, exc_info=True)

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        if self.advance():
            return self.current
        raise StopIteration

    def __enter__(self) -> ResultSet:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
