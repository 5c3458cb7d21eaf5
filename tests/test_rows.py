from __future__ import annotations

import sqlite3
import unittest

from dynamic_orm.core.rows import RowMaterializer, column_names


class _DummyCursor:
    def __init__(self, description=None):
        self.description = description


class RowMaterializerTests(unittest.TestCase):
    def test_tuple_row_is_mapped_by_description(self) -> None:
        materializer = RowMaterializer.from_cursor(
            _DummyCursor(description=[("PersonID",), ("Name",)])
        )
        self.assertEqual(materializer.materialize((1, "Dave")), {"PersonID": 1, "Name": "Dave"})

    def test_duplicate_column_names_keep_last_value(self) -> None:
        materializer = RowMaterializer(["X", "Y", "X"])
        record = materializer.materialize((1, "y", 2))
        self.assertEqual(record, {"X": 2, "Y": "y"})
        self.assertEqual(list(record), ["X", "Y"])

    def test_mapping_row_is_copied(self) -> None:
        row = {"Name": "Dave"}
        record = RowMaterializer([]).materialize(row)
        self.assertEqual(record, row)
        self.assertIsNot(record, row)

    def test_sqlite_row_objects_are_supported(self) -> None:
        conn = sqlite3.connect(":memory:")
        self.addCleanup(conn.close)
        conn.row_factory = sqlite3.Row
        cur = conn.execute("SELECT 1 AS X, 2 AS X, 'a' AS Name;")
        record = RowMaterializer.from_cursor(cur).materialize(cur.fetchone())
        self.assertEqual(record, {"X": 2, "Name": "a"})

    def test_values_are_not_converted(self) -> None:
        blob = b"\x00\x01"
        record = RowMaterializer(["A", "B", "C", "D"]).materialize((None, 1.5, blob, True))
        self.assertIsNone(record["A"])
        self.assertIs(record["C"], blob)
        self.assertIs(record["D"], True)

    def test_sequence_row_without_description_raises(self) -> None:
        with self.assertRaises(TypeError):
            RowMaterializer.from_cursor(_DummyCursor()).materialize((1, 2))

    def test_column_count_mismatch_raises(self) -> None:
        with self.assertRaises(TypeError):
            RowMaterializer(["A"]).materialize((1, 2))

    def test_unsupported_row_type_raises(self) -> None:
        with self.assertRaises(TypeError):
            RowMaterializer(["A"]).materialize(42)
        with self.assertRaises(TypeError):
            RowMaterializer(["A"]).materialize("A")

    def test_column_names_handles_missing_names(self) -> None:
        self.assertEqual(column_names(None), [])
        self.assertEqual(column_names([("A", None), (None, None)]), ["A", ""])


if __name__ == "__main__":
    unittest.main()
