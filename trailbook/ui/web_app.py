"""NiceGUI web UI for Trailbook."""

from __future__ import annotations

from typing import Any, cast

from nicegui import ui

from trailbook.ui.controller import SessionController
from trailbook.ui.geolocation import (
    BrowserGeolocation,
    GeolocationProvider,
    PositionUnavailableError,
)
from trailbook.ui.rendering import summary_rows
from trailbook.workout.model import Coordinates, ValidationError
from trailbook.workout.persistence import WorkoutPersistence

MAP_ZOOM_LEVEL = 16
FALLBACK_CENTER: Coordinates = (51.505, -0.09)

_HEAD_HTML = """
<style>
  .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid #00c46a; }
  .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid #ffb545; }
  .tb-item { cursor: pointer; border-radius: 10px; }
  .tb-item--running { border-left: 5px solid #00c46a; }
  .tb-item--cycling { border-left: 5px solid #ffb545; }
  .tb-muted { color: #6b7280; }
</style>
"""


class LeafletRenderer:
    def __init__(self, leaflet: Any) -> None:
        self._map = leaflet

    def place_marker(self, coordinates: Coordinates, popup_text: str, style_tag: str) -> None:
        marker = self._map.marker(latlng=coordinates)
        marker.run_method(
            "bindPopup",
            popup_text,
            {
                "maxWidth": 250,
                "minWidth": 100,
                "autoClose": False,
                "closeOnClick": False,
                "className": style_tag,
            },
        )
        marker.run_method("openPopup")

    def focus(self, coordinates: Coordinates) -> None:
        self._map.run_map_method(
            "setView",
            list(coordinates),
            MAP_ZOOM_LEVEL,
            {"animate": True, "pan": {"duration": 1}},
        )


def run_web_ui(
    *,
    persistence: WorkoutPersistence | None = None,
    geolocation: GeolocationProvider | None = None,
    host: str = "127.0.0.1",
    port: int = 8089,
) -> int:
    @ui.page("/")
    async def index() -> None:
        controller = SessionController(
            persistence=persistence,
            geolocation=geolocation or BrowserGeolocation(),
        )
        controller.start()
        ui.add_head_html(_HEAD_HTML)

        clicked: dict[str, Coordinates | None] = {"at": None}

        with ui.row().classes("w-full no-wrap gap-4"):
            with ui.column().classes("w-1/3 min-w-[320px] gap-2"):
                ui.label("TRAILBOOK").classes("text-xl font-semibold tracking-wide")
                status_label = ui.label("Locating...").classes("text-sm tb-muted")
                workout_list = ui.column().classes("w-full gap-2")
                reset_btn = ui.button("Reset log").props("outline color=negative")
            leaflet = ui.leaflet(center=FALLBACK_CENTER, zoom=MAP_ZOOM_LEVEL).classes(
                "w-2/3 h-[85vh]"
            )
        renderer = LeafletRenderer(leaflet)

        with ui.dialog() as form_dialog, ui.card().classes("w-[420px]"):
            ui.label("New workout").classes("text-lg font-semibold")
            kind_select = ui.select(
                {"running": "Running", "cycling": "Cycling"},
                value="running",
                label="Type",
            ).classes("w-full")
            distance_input = ui.input("Distance (km)", placeholder="km").classes("w-full")
            duration_input = ui.input("Duration (min)", placeholder="min").classes("w-full")
            cadence_input = ui.input("Cadence (spm)", placeholder="step/min").classes("w-full")
            elevation_input = ui.input("Elevation gain (m)", placeholder="meters").classes(
                "w-full"
            )
            elevation_input.set_visibility(False)
            with ui.row().classes("w-full justify-end gap-2"):
                cancel_btn = ui.button("Cancel").props("outline")
                submit_btn = ui.button("OK").props("color=primary")

        def refresh_list() -> None:
            workout_list.clear()
            with workout_list:
                rows = summary_rows(controller.workouts())
                if not rows:
                    ui.label("Click on the map to log a workout").classes("tb-muted")
                for row in rows:
                    with ui.card().classes(f"w-full tb-item tb-item--{row['kind']}") as card:
                        ui.label(row["description"]).classes("text-base font-semibold")
                        with ui.row().classes("gap-4"):
                            ui.label(f"{row['icon']} {row['distance']}")
                            ui.label(f"⏱ {row['duration']}")
                            ui.label(f"⚡ {row['rate']}")
                            ui.label(row["effort"])
                    card.on("click", lambda _, wid=row["id"]: controller.focus(renderer, wid))

        def hide_form() -> None:
            for field in (distance_input, duration_input, cadence_input, elevation_input):
                field.value = ""
            form_dialog.close()

        def on_kind_change() -> None:
            running = kind_select.value == "running"
            cadence_input.set_visibility(running)
            elevation_input.set_visibility(not running)

        def on_map_click(event: Any) -> None:
            latlng = cast(dict[str, float], event.args["latlng"])
            clicked["at"] = (float(latlng["lat"]), float(latlng["lng"]))
            form_dialog.open()

        def on_submit() -> None:
            at = clicked["at"]
            if at is None:
                ui.notify("Click on the map first", color="negative")
                return
            kind = str(kind_select.value)
            extra = cadence_input.value if kind == "running" else elevation_input.value
            try:
                record = controller.add_workout(
                    kind, at, distance_input.value, duration_input.value, extra
                )
            except ValidationError as exc:
                ui.notify(f"Input is not valid: {exc}", color="negative")
                return
            controller.render_marker(renderer, record)
            hide_form()
            refresh_list()

        def on_reset() -> None:
            controller.reset()
            leaflet.clear_layers()
            leaflet.tile_layer(
                url_template="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
                options={"attribution": "&copy; OpenStreetMap contributors"},
            )
            refresh_list()
            ui.notify("Workout log cleared", color="positive")

        kind_select.on_value_change(lambda _: on_kind_change())
        leaflet.on("map-click", on_map_click)
        cancel_btn.on_click(hide_form)
        submit_btn.on_click(on_submit)
        reset_btn.on_click(on_reset)

        if controller.load_error is not None:
            ui.notify(f"Saved workouts could not be read: {controller.load_error}", color="negative")
        refresh_list()

        await ui.context.client.connected()
        await leaflet.initialized()
        try:
            position = await controller.locate()
            leaflet.set_center(position)
            status_label.text = f"Position: {position[0]:.4f}, {position[1]:.4f}"
        except PositionUnavailableError as exc:
            status_label.text = f"Location not found ({exc})"
        controller.render_markers(renderer)

    ui.run(host=host, port=port, reload=False, title="Trailbook")
    return 0
