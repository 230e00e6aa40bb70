"""Parsing of raw form/CLI text into workout inputs."""

from __future__ import annotations

from trailbook.workout.model import WORKOUT_KINDS, Coordinates, ValidationError, WorkoutKind


def parse_kind(raw: object) -> WorkoutKind:
    kind = str(raw or "").strip().lower()
    if kind not in WORKOUT_KINDS:
        raise ValidationError(f"Unknown workout kind '{raw}'. Use running or cycling")
    return kind  # type: ignore[return-value]


def parse_number(raw: object, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise ValidationError(f"invalid {field_name}")
    if isinstance(raw, str) and raw.strip() == "":
        raise ValidationError(f"{field_name} is required")
    try:
        return float(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"invalid {field_name}") from exc


def parse_coordinates(raw: str) -> Coordinates:
    """Parse ``"lat,lng"`` into a coordinate pair."""
    parts = [part.strip() for part in str(raw).split(",")]
    if len(parts) != 2:
        raise ValidationError(f"Coordinates must look like 'lat,lng', got '{raw}'")
    return parse_number(parts[0], "latitude"), parse_number(parts[1], "longitude")
