"""JSON encoding of the workout log.

Every entry stores its ``kind`` so decoding can rebuild the right variant.
Derived metrics (pace, speed) are written for readability but recomputed on
load. Entries saved by the browser version of the app (``type``, ``coords``,
``distance``...) are read through a key alias table.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from trailbook.workout.model import (
    WORKOUT_KINDS,
    CyclingMetrics,
    RunningMetrics,
    ValidationError,
    WorkoutRecord,
    restore_record,
)
from trailbook.workout.store import DuplicateIdError, WorkoutStore


class CorruptDataError(ValueError):
    """Raised when a persisted payload cannot be parsed."""


class InvalidWorkoutError(CorruptDataError):
    """Raised when a parsed entry breaks workout invariants."""


_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "createdAt": ("createdAt", "date"),
    "coordinates": ("coordinates", "coords"),
    "distanceKm": ("distanceKm", "distance"),
    "durationMin": ("durationMin", "duration"),
    "kind": ("kind", "type"),
    "description": ("description",),
    "cadenceSpm": ("cadenceSpm", "cadence"),
    "elevationGainM": ("elevationGainM", "elevationGain"),
}


def encode_store(store: WorkoutStore) -> str:
    return json.dumps([encode_record(record) for record in store.all()], ensure_ascii=True)


def encode_record(record: WorkoutRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": record.id,
        "createdAt": record.created_at.isoformat(),
        "coordinates": [record.coordinates[0], record.coordinates[1]],
        "distanceKm": record.distance_km,
        "durationMin": record.duration_min,
        "kind": record.kind,
        "description": record.description,
    }
    if isinstance(record.metrics, RunningMetrics):
        payload["cadenceSpm"] = record.metrics.cadence_spm
        payload["paceMinPerKm"] = record.metrics.pace_min_per_km
    elif isinstance(record.metrics, CyclingMetrics):
        payload["elevationGainM"] = record.metrics.elevation_gain_m
        payload["speedKmh"] = record.metrics.speed_kmh
    return payload


def decode_store(blob: str | bytes | None) -> WorkoutStore:
    if blob is None:
        return WorkoutStore()
    if isinstance(blob, bytes):
        try:
            blob = blob.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptDataError(f"Workout log is not UTF-8: {exc}") from exc
    if not blob.strip():
        return WorkoutStore()

    try:
        data = json.loads(blob)
    except json.JSONDecodeError as exc:
        raise CorruptDataError(f"Invalid JSON: {exc}") from exc

    if data is None:
        return WorkoutStore()
    if not isinstance(data, list):
        raise CorruptDataError("Workout log must be a JSON array")

    store = WorkoutStore()
    for i, raw in enumerate(data):
        record = decode_record(raw, index=i)
        try:
            store.append(record)
        except DuplicateIdError as exc:
            raise CorruptDataError(f"Entry {i + 1}: {exc}") from exc
    return store


def decode_record(raw: object, *, index: int = 0) -> WorkoutRecord:
    if not isinstance(raw, dict):
        raise CorruptDataError(f"Entry {index + 1}: must be an object")

    kind = _field(raw, "kind", index)
    if not isinstance(kind, str):
        raise CorruptDataError(f"Entry {index + 1}: kind must be a string")
    if kind not in WORKOUT_KINDS:
        raise InvalidWorkoutError(f"Entry {index + 1}: unknown workout kind '{kind}'")

    workout_id = _field(raw, "id", index)
    if isinstance(workout_id, bool) or not isinstance(workout_id, (str, int)):
        raise CorruptDataError(f"Entry {index + 1}: id must be a string")

    description = _field(raw, "description", index)
    if not isinstance(description, str):
        raise CorruptDataError(f"Entry {index + 1}: description must be a string")

    extra_key = "cadenceSpm" if kind == "running" else "elevationGainM"
    try:
        return restore_record(
            workout_id=str(workout_id),
            created_at=_parse_timestamp(_field(raw, "createdAt", index), index),
            kind=kind,
            coordinates=_parse_coordinates(_field(raw, "coordinates", index), index),
            distance_km=_parse_number(_field(raw, "distanceKm", index), "distanceKm", index),
            duration_min=_parse_number(_field(raw, "durationMin", index), "durationMin", index),
            extra=_parse_number(_field(raw, extra_key, index), extra_key, index),
            description=description,
        )
    except ValidationError as exc:
        raise InvalidWorkoutError(f"Entry {index + 1}: {exc}") from exc


def _field(raw: dict[str, Any], name: str, index: int) -> Any:
    for key in _ALIASES[name]:
        if key in raw:
            return raw[key]
    raise CorruptDataError(f"Entry {index + 1}: missing field '{name}'")


def _parse_number(raw: object, field_name: str, index: int) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise CorruptDataError(f"Entry {index + 1}: {field_name} must be a number")
    try:
        return float(raw)
    except OverflowError as exc:
        raise CorruptDataError(f"Entry {index + 1}: {field_name} is out of range") from exc


def _parse_coordinates(raw: object, index: int) -> tuple[float, float]:
    if not isinstance(raw, list) or len(raw) != 2:
        raise CorruptDataError(f"Entry {index + 1}: coordinates must be a [lat, lng] pair")
    return (
        _parse_number(raw[0], "latitude", index),
        _parse_number(raw[1], "longitude", index),
    )


def _parse_timestamp(raw: object, index: int) -> datetime:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise CorruptDataError(f"Entry {index + 1}: invalid createdAt") from exc
    if not isinstance(raw, str):
        raise CorruptDataError(f"Entry {index + 1}: createdAt must be a timestamp")
    text = raw.strip()
    # Browser Date.toJSON() ends with 'Z', which fromisoformat rejects before 3.11.
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise CorruptDataError(f"Entry {index + 1}: invalid createdAt '{raw}'") from exc
