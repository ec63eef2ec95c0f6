"""Unit tests for app.core.store: whole-table JSON load/save."""

import json
import tempfile
import unittest
from pathlib import Path

from app.core.errors import StoreError
from app.core.store import JsonRecordStore


class StoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        self.store = JsonRecordStore(self.data_dir)

    def tearDown(self) -> None:
        self._tmp.cleanup()


class TestLoad(StoreTestCase):
    """load returns [] instead of failing when the table is absent or unreadable."""

    def test_missing_table_is_empty(self) -> None:
        self.assertEqual(self.store.load("users"), [])

    def test_malformed_json_is_empty(self) -> None:
        (self.data_dir / "users.json").write_text("{not json", encoding="utf-8")
        self.assertEqual(self.store.load("users"), [])

    def test_non_array_content_is_empty(self) -> None:
        (self.data_dir / "users.json").write_text('{"id": 1}', encoding="utf-8")
        self.assertEqual(self.store.load("users"), [])

    def test_non_object_entries_are_skipped(self) -> None:
        (self.data_dir / "users.json").write_text('[1, "x", {"id": 1}]', encoding="utf-8")
        self.assertEqual(self.store.load("users"), [{"id": 1}])


class TestSave(StoreTestCase):
    def test_round_trip_preserves_order(self) -> None:
        records = [{"id": 3, "name": "c"}, {"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
        self.store.save("reviews", records)
        self.assertEqual(self.store.load("reviews"), records)

    def test_save_overwrites_previous_content(self) -> None:
        self.store.save("reviews", [{"id": 1}, {"id": 2}])
        self.store.save("reviews", [{"id": 9}])
        self.assertEqual(self.store.load("reviews"), [{"id": 9}])

    def test_tables_are_independent(self) -> None:
        self.store.save("users", [{"id": 1}])
        self.store.save("reviews", [{"id": 2}])
        self.assertEqual(self.store.load("users"), [{"id": 1}])
        self.assertEqual(self.store.load("reviews"), [{"id": 2}])

    def test_writes_pretty_printed_json_file(self) -> None:
        self.store.save("users", [{"id": 1}])
        text = (self.data_dir / "users.json").read_text(encoding="utf-8")
        self.assertEqual(json.loads(text), [{"id": 1}])
        self.assertIn("\n  ", text)

    def test_creates_missing_data_dir(self) -> None:
        store = JsonRecordStore(self.data_dir / "nested" / "data")
        store.save("users", [])
        self.assertTrue((self.data_dir / "nested" / "data" / "users.json").exists())

    def test_write_failure_raises_store_error(self) -> None:
        blocker = self.data_dir / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonRecordStore(blocker)
        with self.assertRaises(StoreError) as ctx:
            store.save("users", [{"id": 1}])
        self.assertEqual(ctx.exception.status_code, 500)


class TestIsAvailable(StoreTestCase):
    def test_writable_dir_is_available(self) -> None:
        self.assertTrue(self.store.is_available())

    def test_file_in_place_of_dir_is_unavailable(self) -> None:
        blocker = self.data_dir / "blocker"
        blocker.write_text("", encoding="utf-8")
        self.assertFalse(JsonRecordStore(blocker).is_available())


if __name__ == "__main__":
    unittest.main()
