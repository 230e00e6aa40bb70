from __future__ import annotations

import json

import pytest

from trailbook.workout.codec import (
    CorruptDataError,
    InvalidWorkoutError,
    decode_store,
    encode_store,
)
from trailbook.workout.model import CyclingMetrics, RunningMetrics, create_cycling, create_running
from trailbook.workout.store import WorkoutStore


def _entry(**overrides: object) -> dict[str, object]:
    entry: dict[str, object] = {
        "id": "1713081600000",
        "createdAt": "2024-04-14T08:00:00+00:00",
        "coordinates": [51.52, -0.13],
        "distanceKm": 5.2,
        "durationMin": 24,
        "kind": "running",
        "description": "Running on April 14",
        "cadenceSpm": 178,
    }
    entry.update(overrides)
    return entry


def test_round_trip_keeps_order_history_and_metrics() -> None:
    run = create_running((51.52, -0.13), 5.2, 24, 178)
    ride = create_cycling((48.85, 2.35), 27, 95, 456)
    store = WorkoutStore([run, ride])

    loaded = decode_store(encode_store(store))

    assert len(loaded) == 2
    for original, restored in zip(store.all(), loaded.all()):
        assert restored.id == original.id
        assert restored.created_at == original.created_at
        assert restored.description == original.description
        assert restored.kind == original.kind
        assert restored.coordinates == original.coordinates
    assert isinstance(loaded.all()[0].metrics, RunningMetrics)
    assert isinstance(loaded.all()[1].metrics, CyclingMetrics)
    assert loaded.all()[0].pace_min_per_km == pytest.approx(run.pace_min_per_km)
    assert loaded.all()[1].speed_kmh == pytest.approx(ride.speed_kmh)
    assert loaded.find_by_id(ride.id).icon == ride.icon


def test_encode_writes_flat_entries_with_kind() -> None:
    ride = create_cycling((48.85, 2.35), 27, 95, 456)

    payload = json.loads(encode_store(WorkoutStore([ride])))

    assert payload[0]["kind"] == "cycling"
    assert payload[0]["coordinates"] == [48.85, 2.35]
    assert payload[0]["elevationGainM"] == 456
    assert "cadenceSpm" not in payload[0]


@pytest.mark.parametrize("blob", [None, "", "   \n", "null", "[]"])
def test_empty_blob_gives_empty_store(blob: str | None) -> None:
    assert decode_store(blob).is_empty()


def test_stored_derived_values_are_ignored() -> None:
    blob = json.dumps([_entry(paceMinPerKm=999.0)])

    record = decode_store(blob).all()[0]

    assert record.pace_min_per_km == 24 / 5.2


def test_description_and_timestamp_restored_verbatim() -> None:
    blob = json.dumps([_entry(description="Running on April 13")])

    record = decode_store(blob).all()[0]

    assert record.description == "Running on April 13"
    assert record.created_at.isoformat() == "2024-04-14T08:00:00+00:00"
    assert record.id == "1713081600000"


def test_unknown_fields_are_ignored() -> None:
    blob = json.dumps([_entry(weather="rain", heartRate=150)])

    assert len(decode_store(blob)) == 1


def test_unknown_kind_is_invalid_workout() -> None:
    blob = json.dumps([_entry(kind="swimming")])

    with pytest.raises(InvalidWorkoutError):
        decode_store(blob)


def test_invariant_violation_is_invalid_workout() -> None:
    blob = json.dumps([_entry(distanceKm=0)])

    with pytest.raises(InvalidWorkoutError):
        decode_store(blob)


@pytest.mark.parametrize(
    "blob",
    [
        "not json",
        '{"id": "x"}',
        "[1, 2]",
        json.dumps([_entry(distanceKm="5.2")]),
        json.dumps([_entry(coordinates=[51.52])]),
        json.dumps([_entry(createdAt="yesterday")]),
        json.dumps([_entry()]).replace("5.2", "1" + "0" * 400),
        json.dumps([_entry()]).replace("-0.13", "-1" + "0" * 400),
        json.dumps([{k: v for k, v in _entry().items() if k != "cadenceSpm"}]),
        json.dumps([{k: v for k, v in _entry().items() if k != "kind"}]),
    ],
)
def test_malformed_payload_is_corrupt(blob: str) -> None:
    with pytest.raises(CorruptDataError):
        decode_store(blob)


def test_one_bad_entry_fails_whole_load() -> None:
    blob = json.dumps([_entry(), _entry(id="2", kind="swimming")])

    with pytest.raises(CorruptDataError):
        decode_store(blob)


def test_duplicate_ids_are_corrupt() -> None:
    blob = json.dumps([_entry(), _entry()])

    with pytest.raises(CorruptDataError):
        decode_store(blob)


def test_reads_browser_layout() -> None:
    blob = json.dumps(
        [
            {
                "date": "2021-04-14T09:12:45.123Z",
                "id": "1618391565123",
                "coords": [51.5, -0.12],
                "distance": 27,
                "duration": 95,
                "type": "cycling",
                "elevationGain": 523,
                "speed": 17.05,
                "description": "Cycling on April 14 ",
            }
        ]
    )

    record = decode_store(blob).all()[0]

    assert record.kind == "cycling"
    assert record.id == "1618391565123"
    assert record.description == "Cycling on April 14 "
    assert record.created_at.year == 2021
    assert record.speed_kmh == 27 / (95 / 60)


def test_epoch_millis_timestamp() -> None:
    blob = json.dumps([_entry(createdAt=1713081600000)])

    record = decode_store(blob).all()[0]

    assert record.created_at.isoformat() == "2024-04-14T08:00:00+00:00"


def test_unwrapped_longitude_round_trips() -> None:
    blob = json.dumps([_entry(coordinates=[51.52, -360.13])])

    loaded = decode_store(encode_store(decode_store(blob)))

    assert loaded.all()[0].coordinates == (51.52, -360.13)
