from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from trailbook.workout.model import (
    CyclingMetrics,
    RunningMetrics,
    ValidationError,
    create_cycling,
    create_running,
    create_workout,
    describe,
    describe_icon,
    restore_record,
)


def test_create_running_derives_pace() -> None:
    record = create_running((51.52, -0.13), 5.2, 24, 178)

    assert record.kind == "running"
    assert isinstance(record.metrics, RunningMetrics)
    assert record.metrics.pace_min_per_km == 24 / 5.2
    assert record.pace_min_per_km == pytest.approx(4.615, abs=1e-3)
    assert record.speed_kmh is None
    assert record.metrics.cadence_spm == 178
    assert record.coordinates == (51.52, -0.13)


def test_create_cycling_derives_speed() -> None:
    record = create_cycling((51.52, -0.13), 27, 95, 456)

    assert record.kind == "cycling"
    assert isinstance(record.metrics, CyclingMetrics)
    assert record.metrics.speed_kmh == 27 / (95 / 60)
    assert record.speed_kmh == pytest.approx(17.05, abs=1e-2)
    assert record.pace_min_per_km is None


def test_cycling_allows_zero_elevation() -> None:
    record = create_cycling((10.0, 20.0), 10, 30, 0)

    assert isinstance(record.metrics, CyclingMetrics)
    assert record.metrics.elevation_gain_m == 0


def test_description_uses_kind_and_creation_date() -> None:
    record = create_running((51.52, -0.13), 5, 25, 170)

    months = ("January", "February", "March", "April", "May", "June", "July",
              "August", "September", "October", "November", "December")
    expected = f"Running on {months[record.created_at.month - 1]} {record.created_at.day}"
    assert record.description == expected
    assert describe("cycling", datetime(2024, 4, 14, 9, 0)) == "Cycling on April 14"


def test_ids_are_unique() -> None:
    ids = {create_running((0.0, 0.0), 1, 5, 160).id for _ in range(200)}
    assert len(ids) == 200


def test_record_is_immutable() -> None:
    record = create_running((0.0, 0.0), 1, 5, 160)

    with pytest.raises(AttributeError):
        record.distance_km = 3  # type: ignore[misc]


@pytest.mark.parametrize(
    ("distance", "duration", "cadence"),
    [
        (0, 24, 178),
        (-1, 24, 178),
        (5.2, math.inf, 178),
        (5.2, math.nan, 178),
        (5.2, 0, 178),
        (5.2, 24, 0),
    ],
)
def test_create_running_rejects_invalid_input(
    distance: float, duration: float, cadence: float
) -> None:
    with pytest.raises(ValidationError):
        create_running((51.52, -0.13), distance, duration, cadence)


@pytest.mark.parametrize(
    ("distance", "duration", "elevation"),
    [
        (0, 95, 456),
        (-1, 95, 456),
        (27, math.inf, 456),
        (27, 95, -1),
        (27, 95, math.nan),
    ],
)
def test_create_cycling_rejects_invalid_input(
    distance: float, duration: float, elevation: float
) -> None:
    with pytest.raises(ValidationError):
        create_cycling((51.52, -0.13), distance, duration, elevation)


def test_invalid_coordinates_are_rejected() -> None:
    with pytest.raises(ValidationError):
        create_running((math.inf, 0.0), 5, 25, 170)
    with pytest.raises(ValidationError):
        create_running((0.0, math.nan), 5, 25, 170)
    with pytest.raises(ValidationError):
        create_running((1.0,), 5, 25, 170)  # type: ignore[arg-type]


def test_unwrapped_longitude_is_accepted() -> None:
    record = create_running((51.52, -360.13), 5, 25, 170)

    assert record.coordinates == (51.52, -360.13)


def test_integer_too_large_for_float_is_rejected() -> None:
    with pytest.raises(ValidationError):
        create_running((51.52, -0.13), 10**400, 25, 170)


def test_create_workout_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError):
        create_workout("swimming", (0.0, 0.0), 1, 30, 0)


def test_icon_depends_only_on_kind() -> None:
    run = create_running((0.0, 0.0), 1, 5, 160)
    ride = create_cycling((0.0, 0.0), 1, 5, 0)

    assert run.icon == describe_icon("running")
    assert ride.icon == describe_icon("cycling")
    assert run.icon != ride.icon


def test_restore_record_keeps_history_and_rederives_metrics() -> None:
    created = datetime(2023, 6, 2, 7, 30, tzinfo=timezone.utc)
    record = restore_record(
        workout_id="abc",
        created_at=created,
        kind="running",
        coordinates=(1.0, 2.0),
        distance_km=10,
        duration_min=50,
        extra=170,
        description="Running on June 1",
    )

    assert record.id == "abc"
    assert record.created_at == created
    assert record.description == "Running on June 1"
    assert record.pace_min_per_km == 5.0


def test_restore_record_requires_id() -> None:
    with pytest.raises(ValidationError):
        restore_record(
            workout_id="",
            created_at=datetime(2023, 6, 2, tzinfo=timezone.utc),
            kind="cycling",
            coordinates=(1.0, 2.0),
            distance_km=10,
            duration_min=50,
            extra=0,
            description="Cycling on June 2",
        )
