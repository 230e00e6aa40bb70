"""In-memory workout log."""

from __future__ import annotations

from typing import Iterable, Iterator

from trailbook.workout.model import WorkoutRecord


class DuplicateIdError(ValueError):
    """Raised when a record id is already present in the store."""


class WorkoutNotFoundError(KeyError):
    """Raised when no record matches the requested id."""


class WorkoutStore:
    def __init__(self, records: Iterable[WorkoutRecord] = ()) -> None:
        self._records: list[WorkoutRecord] = []
        self._by_id: dict[str, WorkoutRecord] = {}
        for record in records:
            self.append(record)

    def append(self, record: WorkoutRecord) -> None:
        if record.id in self._by_id:
            raise DuplicateIdError(f"Workout id '{record.id}' already in store")
        self._records.append(record)
        self._by_id[record.id] = record

    def all(self) -> tuple[WorkoutRecord, ...]:
        return tuple(self._records)

    def find_by_id(self, workout_id: str) -> WorkoutRecord:
        try:
            return self._by_id[workout_id]
        except KeyError:
            raise WorkoutNotFoundError(workout_id) from None

    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WorkoutRecord]:
        return iter(self.all())
