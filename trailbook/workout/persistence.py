"""Local persistence for the workout log."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from trailbook.workout.codec import decode_store, encode_store
from trailbook.workout.store import WorkoutStore

logger = logging.getLogger(__name__)


def _default_workouts_path() -> Path:
    return Path.home() / ".trailbook" / "workouts.json"


class BlobStorage(Protocol):
    def read_blob(self) -> str | None: ...

    def write_blob(self, blob: str) -> None: ...

    def delete_blob(self) -> None: ...


class FileBlobStorage:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _default_workouts_path()

    def read_blob(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write_blob(self, blob: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(blob, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def delete_blob(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryBlobStorage:
    def __init__(self, blob: str | None = None) -> None:
        self.blob = blob

    def read_blob(self) -> str | None:
        return self.blob

    def write_blob(self, blob: str) -> None:
        self.blob = blob

    def delete_blob(self) -> None:
        self.blob = None


class WorkoutPersistence:
    def __init__(self, storage: BlobStorage | None = None) -> None:
        self.storage: BlobStorage = storage or FileBlobStorage()

    def save(self, store: WorkoutStore) -> str:
        blob = encode_store(store)
        self.storage.write_blob(blob)
        logger.debug("[STORE] saved %d workouts", len(store))
        return blob

    def load(self) -> WorkoutStore:
        store = decode_store(self.storage.read_blob())
        logger.debug("[STORE] loaded %d workouts", len(store))
        return store

    def clear(self) -> None:
        self.storage.delete_blob()
        logger.info("[STORE] workout log cleared")
