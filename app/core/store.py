"""Flat JSON record store: one file per table, read and written whole."""

import json
import logging
import os
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any

from app.core.config import settings
from app.core.errors import StoreError

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class JsonRecordStore:
    """
    Load/save whole collections of records to <data_dir>/<table>.json.

    There is no partial update and no cross-process locking: two processes
    saving the same table race and the later write wins. Within one process,
    callers hold `lock` around a load-modify-save cycle.
    """

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        self.data_dir = Path(data_dir)
        self.lock = threading.RLock()

    def _path(self, table: str) -> Path:
        return self.data_dir / f"{table}.json"

    def load(self, table: str) -> list[Record]:
        """Return the table's records in stored order; [] if missing or unreadable."""
        path = self._path(table)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Error reading table %s: %s", table, e)
            return []
        if not isinstance(data, list):
            logger.error(
                "Table %s does not hold a JSON array; treating as empty",
                table,
                extra={"table": table, "content_type": type(data).__name__},
            )
            return []
        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            logger.warning(
                "Table %s holds non-object entries; skipping them",
                table,
                extra={"table": table, "skipped": len(data) - len(records)},
            )
        return records

    def save(self, table: str, records: list[Record]) -> None:
        """Overwrite the table with `records`. Raises StoreError on failure."""
        path = self._path(table)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error writing table %s: %s", table, e)
            raise StoreError(f"Could not save table '{table}'.") from e

    def is_available(self) -> bool:
        """True if the data directory exists (or can be created) and is writable."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.data_dir, os.W_OK)


@lru_cache
def get_record_store() -> JsonRecordStore:
    """Dependency returning the process-wide store for DATA_DIR."""
    return JsonRecordStore(settings.DATA_DIR)
