"""Session controller: owns the workout log and its save point."""

from __future__ import annotations

import logging

from trailbook.ui.geolocation import GeolocationProvider, PositionUnavailableError
from trailbook.ui.rendering import MapRenderer, popup_text, style_tag
from trailbook.workout.codec import CorruptDataError
from trailbook.workout.model import Coordinates, WorkoutRecord, create_workout
from trailbook.workout.parser import parse_kind, parse_number
from trailbook.workout.persistence import WorkoutPersistence
from trailbook.workout.store import WorkoutStore

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(
        self,
        persistence: WorkoutPersistence | None = None,
        geolocation: GeolocationProvider | None = None,
    ) -> None:
        self._persistence = persistence or WorkoutPersistence()
        self._geolocation = geolocation
        self._store = WorkoutStore()
        self.load_error: CorruptDataError | None = None

    def start(self) -> WorkoutStore:
        """Load the persisted log; a corrupt log leaves an empty store."""
        try:
            self._store = self._persistence.load()
            self.load_error = None
        except CorruptDataError as exc:
            logger.warning("[STORE] could not load workout log: %s", exc)
            self._store = WorkoutStore()
            self.load_error = exc
        return self._store

    def add_workout(
        self,
        kind: object,
        coordinates: Coordinates,
        distance: object,
        duration: object,
        extra: object,
    ) -> WorkoutRecord:
        """Validate raw input, append the new workout and save the log.

        ``extra`` is cadence for running and elevation gain for cycling.
        """
        parsed_kind = parse_kind(kind)
        extra_name = "cadence" if parsed_kind == "running" else "elevation"
        record = create_workout(
            parsed_kind,
            coordinates,
            parse_number(distance, "distance"),
            parse_number(duration, "duration"),
            parse_number(extra, extra_name),
        )
        candidate = WorkoutStore((*self._store.all(), record))
        self._persistence.save(candidate)
        self._store = candidate
        self.load_error = None
        logger.info("[STORE] added %s (%s)", record.description, record.id)
        return record

    def workouts(self) -> tuple[WorkoutRecord, ...]:
        return self._store.all()

    def find(self, workout_id: str) -> WorkoutRecord:
        return self._store.find_by_id(workout_id)

    def reset(self) -> None:
        self._persistence.clear()
        self._store = WorkoutStore()
        self.load_error = None

    async def locate(self) -> Coordinates:
        if self._geolocation is None:
            raise PositionUnavailableError("No geolocation provider configured")
        try:
            position = await self._geolocation.request_position()
        except PositionUnavailableError:
            logger.warning("[GEO] location not found")
            raise
        logger.debug("[GEO] position %.5f,%.5f", position[0], position[1])
        return position

    def render_markers(self, renderer: MapRenderer) -> None:
        for record in self._store.all():
            self.render_marker(renderer, record)

    @staticmethod
    def render_marker(renderer: MapRenderer, record: WorkoutRecord) -> None:
        renderer.place_marker(record.coordinates, popup_text(record), style_tag(record))

    def focus(self, renderer: MapRenderer, workout_id: str) -> WorkoutRecord:
        record = self.find(workout_id)
        renderer.focus(record.coordinates)
        return record

    @property
    def store(self) -> WorkoutStore:
        return self._store
