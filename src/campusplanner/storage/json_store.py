"""JSON file document store.

Persists the ``groups``, ``activities`` and ``dailySchedule`` collections in
one JSON file. Commits write a temporary file next to the target and
replace it, so a failed write leaves the previous file untouched.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Union

from campusplanner.errors import StorageError
from campusplanner.logging import get_logger
from campusplanner.storage.memory import InMemoryStore, empty_collections

log = get_logger(__name__)


class JsonFileStore(InMemoryStore):
    """Schedule store persisted to a JSON file.

    Example:
        >>> store = JsonFileStore("data/planner.json")
        >>> groups = store.fetch_groups("UCD")
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict[str, dict[str, dict]]:
        if not self.path.exists():
            log.info("store_file_missing", path=str(self.path))
            return empty_collections()

        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read store {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"Store {self.path} does not hold a JSON object")
        return data

    def save(self) -> None:
        """Write the current collections to disk."""
        self._persist(self.collections)

    def _persist(self, collections: dict[str, dict[str, dict]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(collections, fh, indent=2, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write store {self.path}: {exc}") from exc
