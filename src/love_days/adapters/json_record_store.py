"""File-backed record store keeping one JSON document per collection."""

import copy
import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path

from love_days.errors import StoreCorruption
from love_days.services.catalog import (
    Collection,
    Document,
    RecordStore,
    default_document,
)

logger = logging.getLogger(__name__)

_FILENAMES: dict[Collection, str] = {
    Collection.SETTINGS: "settings.json",
    Collection.PHOTOS: "photos.json",
    Collection.SONGS: "music.json",
}


@dataclass
class JsonFileRecordStore(RecordStore):
    """Whole-collection JSON persistence under ``data_dir``.

    Each collection is read lazily on first access and cached. A missing file
    is created from the collection default; a file that fails to parse raises
    ``StoreCorruption`` instead of being replaced.

    The per-collection lock only guards individual reads and writes. A
    caller's read-modify-write is not atomic, so concurrent writers to the
    same collection are last-write-wins.
    """

    data_dir: Path
    _cache: dict[Collection, Document] = field(default_factory=dict, init=False)
    _locks: dict[Collection, threading.Lock] = field(
        default_factory=lambda: {c: threading.Lock() for c in Collection},
        init=False,
    )

    def initialize(self) -> None:
        """Load every collection, creating missing files with defaults."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for collection in Collection:
            self.get(collection)

    def get(self, collection: Collection) -> Document:
        """Return a private copy of the collection document."""
        with self._locks[collection]:
            if collection not in self._cache:
                self._cache[collection] = self._load(collection)
            return copy.deepcopy(self._cache[collection])

    def put(self, collection: Collection, value: Document) -> None:
        """Overwrite the whole collection document."""
        _check_shape(collection, value)
        with self._locks[collection]:
            self._write(collection, value)
            self._cache[collection] = copy.deepcopy(value)

    def path_for(self, collection: Collection) -> Path:
        return self.data_dir / _FILENAMES[collection]

    def _load(self, collection: Collection) -> Document:
        path = self.path_for(collection)
        if not path.exists():
            logger.info(
                "Initializing collection with defaults",
                extra={"collection": collection.value, "path": str(path)},
            )
            value = default_document(collection)
            self._write(collection, value)
            return value
        try:
            value = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StoreCorruption(collection.value, str(exc)) from exc
        _check_shape(collection, value)
        return value

    def _write(self, collection: Collection, value: Document) -> None:
        path = self.path_for(collection)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(value, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _check_shape(collection: Collection, value: object) -> None:
    expected = dict if collection is Collection.SETTINGS else list
    if not isinstance(value, expected):
        raise StoreCorruption(
            collection.value,
            f"expected a JSON {'object' if expected is dict else 'array'}",
        )
