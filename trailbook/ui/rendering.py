"""Presentation helpers shared by the map and list views."""

from __future__ import annotations

from typing import Iterable, Protocol

from trailbook.workout.model import Coordinates, CyclingMetrics, RunningMetrics, WorkoutRecord


class MapRenderer(Protocol):
    def place_marker(self, coordinates: Coordinates, popup_text: str, style_tag: str) -> None: ...

    def focus(self, coordinates: Coordinates) -> None: ...


def popup_text(record: WorkoutRecord) -> str:
    return f"{record.icon} {record.description}"


def style_tag(record: WorkoutRecord) -> str:
    return f"{record.kind}-popup"


def _fmt_number(value: float, digits: int = 1) -> str:
    text = f"{value:.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def summary_row(record: WorkoutRecord) -> dict[str, str]:
    row = {
        "id": record.id,
        "kind": record.kind,
        "icon": record.icon,
        "description": record.description,
        "distance": f"{_fmt_number(record.distance_km, 2)} km",
        "duration": f"{_fmt_number(record.duration_min, 1)} min",
    }
    if isinstance(record.metrics, RunningMetrics):
        row["rate"] = f"{record.metrics.pace_min_per_km:.1f} min/km"
        row["effort"] = f"{_fmt_number(record.metrics.cadence_spm, 0)} spm"
    elif isinstance(record.metrics, CyclingMetrics):
        row["rate"] = f"{record.metrics.speed_kmh:.1f} km/h"
        row["effort"] = f"{_fmt_number(record.metrics.elevation_gain_m, 0)} m"
    return row


def summary_rows(records: Iterable[WorkoutRecord]) -> list[dict[str, str]]:
    """Rows for the workout list, most recent first."""
    return [summary_row(record) for record in reversed(list(records))]
