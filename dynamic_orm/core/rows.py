"""Conversion of driver rows into dynamically keyed records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

from .types import Record


def column_names(description: Optional[Sequence[Sequence[Any]]]) -> List[str]:
    """Extract column names from a DB-API `cursor.description`."""

    if not description:
        return []
    return ["" if d[0] is None else str(d[0]) for d in description]


class RowMaterializer:
    """Normalize one driver row into a `Record`.

    Supports mapping rows directly and sequence-like rows (tuple, list,
    `sqlite3.Row`, `pyodbc.Row`) via column names from `cursor.description`.
    When a result has duplicate column names the later column wins.
    """

    def __init__(self, columns: Sequence[str]):
        self.columns = list(columns)

    @classmethod
    def from_cursor(cls, cursor: Any) -> RowMaterializer:
        return cls(column_names(getattr(cursor, "description", None)))

    def materialize(self, row: Any) -> Record:
        if isinstance(row, Mapping):
            return dict(row)

        if isinstance(row, (str, bytes)):
            raise TypeError(f"Unsupported row type: {type(row)}")

        try:
            values = tuple(row)
        except TypeError:
            raise TypeError(f"Unsupported row type: {type(row)}") from None

        if not self.columns:
            raise TypeError("Cursor has no description; cannot map sequence rows to dict.")
        if len(values) != len(self.columns):
            raise TypeError(
                f"Row has {len(values)} values but cursor describes "
                f"{len(self.columns)} columns."
            )

        record: Record = {}
        for name, value in zip(self.columns, values):
            record[name] = value
        return record
