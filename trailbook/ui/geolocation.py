"""Position providers used to centre the map."""

from __future__ import annotations

from typing import Protocol

from trailbook.workout.model import Coordinates


class PositionUnavailableError(RuntimeError):
    """Raised when the current position cannot be resolved."""


class GeolocationProvider(Protocol):
    async def request_position(self) -> Coordinates: ...


class StaticGeolocation:
    """Always reports the same position (debug mode, CLI)."""

    def __init__(self, coordinates: Coordinates) -> None:
        self._coordinates = coordinates

    async def request_position(self) -> Coordinates:
        return self._coordinates


class BrowserGeolocation:
    """Asks the connected browser via ``navigator.geolocation``."""

    _SCRIPT = """
        return new Promise((resolve) => {
          if (!navigator.geolocation) { resolve(null); return; }
          navigator.geolocation.getCurrentPosition(
            (pos) => resolve([pos.coords.latitude, pos.coords.longitude]),
            () => resolve(null),
          );
        });
    """

    def __init__(self, timeout: float = 20.0) -> None:
        self._timeout = timeout

    async def request_position(self) -> Coordinates:
        from nicegui import ui

        try:
            result = await ui.run_javascript(self._SCRIPT, timeout=self._timeout)
        except TimeoutError as exc:
            raise PositionUnavailableError("Location request timed out") from exc
        if not isinstance(result, list) or len(result) != 2:
            raise PositionUnavailableError("Location not found")
        return float(result[0]), float(result[1])
