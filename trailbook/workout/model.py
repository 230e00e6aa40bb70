"""Workout domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

WorkoutKind = Literal["running", "cycling"]
Coordinates = tuple[float, float]

WORKOUT_KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ICONS: dict[str, str] = {
    "running": "\U0001F3C3",
    "cycling": "\U0001F6B4",
}


class ValidationError(ValueError):
    """Raised when workout input cannot form a valid record."""


@dataclass(frozen=True)
class RunningMetrics:
    cadence_spm: float
    pace_min_per_km: float


@dataclass(frozen=True)
class CyclingMetrics:
    elevation_gain_m: float
    speed_kmh: float


@dataclass(frozen=True)
class WorkoutRecord:
    id: str
    created_at: datetime
    coordinates: Coordinates
    distance_km: float
    duration_min: float
    kind: WorkoutKind
    description: str
    metrics: RunningMetrics | CyclingMetrics

    @property
    def icon(self) -> str:
        return describe_icon(self.kind)

    @property
    def pace_min_per_km(self) -> float | None:
        if isinstance(self.metrics, RunningMetrics):
            return self.metrics.pace_min_per_km
        return None

    @property
    def speed_kmh(self) -> float | None:
        if isinstance(self.metrics, CyclingMetrics):
            return self.metrics.speed_kmh
        return None


def describe_icon(kind: str) -> str:
    try:
        return _ICONS[kind]
    except KeyError as exc:
        raise ValidationError(f"Unknown workout kind '{kind}'") from exc


def describe(kind: str, created_at: datetime) -> str:
    return f"{kind.capitalize()} on {_MONTHS[created_at.month - 1]} {created_at.day}"


def derive_metrics(
    kind: str, distance_km: float, duration_min: float, extra: float
) -> RunningMetrics | CyclingMetrics:
    """Build the variant payload for ``kind``.

    ``extra`` is cadence (steps/min) for running and elevation gain (m) for
    cycling. Inputs must already be validated.
    """
    if kind == "running":
        return RunningMetrics(
            cadence_spm=extra,
            pace_min_per_km=duration_min / distance_km,
        )
    if kind == "cycling":
        return CyclingMetrics(
            elevation_gain_m=extra,
            speed_kmh=distance_km / (duration_min / 60),
        )
    raise ValidationError(f"Unknown workout kind '{kind}'")


def create_running(
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    cadence_spm: float,
) -> WorkoutRecord:
    return _create("running", coordinates, distance_km, duration_min, cadence_spm)


def create_cycling(
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    elevation_gain_m: float,
) -> WorkoutRecord:
    return _create("cycling", coordinates, distance_km, duration_min, elevation_gain_m)


def create_workout(
    kind: str,
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    extra: float,
) -> WorkoutRecord:
    if kind not in WORKOUT_KINDS:
        raise ValidationError(f"Unknown workout kind '{kind}'")
    return _create(kind, coordinates, distance_km, duration_min, extra)


def restore_record(
    *,
    workout_id: str,
    created_at: datetime,
    kind: str,
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    extra: float,
    description: str,
) -> WorkoutRecord:
    """Rebuild a stored record.

    Derived metrics are recomputed; id, timestamp and description are kept as
    stored since they describe the moment the workout was logged.
    """
    if not workout_id:
        raise ValidationError("Workout id must not be empty")
    return _build(
        workout_id=workout_id,
        created_at=created_at,
        kind=kind,
        coordinates=coordinates,
        distance_km=distance_km,
        duration_min=duration_min,
        extra=extra,
        description=description,
    )


def _create(
    kind: str,
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    extra: float,
) -> WorkoutRecord:
    created_at = datetime.now(tz=timezone.utc).astimezone()
    return _build(
        workout_id=uuid4().hex,
        created_at=created_at,
        kind=kind,
        coordinates=coordinates,
        distance_km=distance_km,
        duration_min=duration_min,
        extra=extra,
        description=None,
    )


def _build(
    *,
    workout_id: str,
    created_at: datetime,
    kind: str,
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    extra: float,
    description: str | None,
) -> WorkoutRecord:
    if kind not in WORKOUT_KINDS:
        raise ValidationError(f"Unknown workout kind '{kind}'")
    lat, lng = _validate_coordinates(coordinates)
    distance_km = _positive("distance_km", distance_km)
    duration_min = _positive("duration_min", duration_min)
    if kind == "running":
        extra = _positive("cadence_spm", extra)
    else:
        extra = _finite("elevation_gain_m", extra)
        if extra < 0:
            raise ValidationError("elevation_gain_m must be >= 0")

    return WorkoutRecord(
        id=workout_id,
        created_at=created_at,
        coordinates=(lat, lng),
        distance_km=distance_km,
        duration_min=duration_min,
        kind=kind,  # type: ignore[arg-type]
        description=description if description is not None else describe(kind, created_at),
        metrics=derive_metrics(kind, distance_km, duration_min, extra),
    )


def _finite(field_name: str, value: float) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be finite")
    return number


def _positive(field_name: str, value: float) -> float:
    number = _finite(field_name, value)
    if number <= 0:
        raise ValidationError(f"{field_name} must be > 0")
    return number


def _validate_coordinates(coordinates: Coordinates) -> Coordinates:
    try:
        lat_obj, lng_obj = coordinates
    except (TypeError, ValueError) as exc:
        raise ValidationError("coordinates must be a (latitude, longitude) pair") from exc
    # Longitudes are kept unwrapped, as the map reports them.
    return _finite("latitude", lat_obj), _finite("longitude", lng_obj)
