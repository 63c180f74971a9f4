#!/usr/bin/env python3
"""
Dear PyGui control panel: add a planet, remove the selected planet, show status.

The panel is pumped one frame at a time from the main loop (render_frame), so it
shares the single frame-loop thread with the pygame viewport and needs no locking.
"""
import logging
from typing import Sequence

import dearpygui.dearpygui as dpg

from .data_models import PlanetRecord
from .presets_loader import DataSourceError
from .scene import EmptySceneError, Scene
from .utils import coerce_color, try_float

logger = logging.getLogger(__name__)


def parse_planet_form(name: str, orbit_text: str, speed_text: str, radius_text: str,
                      color_rgba: Sequence[float]) -> PlanetRecord:
    """Turn raw form values into a validated record; ValueError carries the message to show."""
    name = (name or "").strip()
    orbit = try_float(orbit_text)
    speed = try_float(speed_text)
    radius = try_float(radius_text)
    if None in (orbit, speed, radius):
        raise ValueError("Invalid numeric input. Please correct the fields.")
    record = PlanetRecord(name, orbit, speed, radius, coerce_color(color_rgba))
    record.validate()
    return record


class ControlPanel:
    def __init__(self, scene: Scene, width: int = 420, height: int = 520):
        self.scene = scene
        self.running = True
        self._last_items = None

        self.name_id = None
        self.orbit_id = None
        self.speed_id = None
        self.radius_id = None
        self.color_id = None
        self.planet_list_id = None
        self.status_msg_id = None

        self._build_ui(width, height)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self, width: int, height: int) -> None:
        dpg.create_context()
        dpg.create_viewport(title="Orrery Simulator - Controls", width=width, height=height)

        with dpg.window(label="Controls", tag="main_window"):
            dpg.add_text("Add Planet")
            self.name_id = dpg.add_input_text(label="Name", default_value="Xen", width=200)
            self.orbit_id = dpg.add_input_text(label="Orbit radius", default_value="500.0", width=150)
            self.speed_id = dpg.add_input_text(label="Angular speed (rad/tick)", default_value="0.01", width=150)
            self.radius_id = dpg.add_input_text(label="Radius", default_value="12.0", width=150)
            self.color_id = dpg.add_color_edit(default_value=(200, 200, 255, 255), label="Color",
                                               no_alpha=True, width=220)
            dpg.add_button(label="Add Planet", callback=self._on_add_planet_clicked)

            dpg.add_separator()
            dpg.add_text("Planets")
            self.planet_list_id = dpg.add_listbox(items=[], width=380, num_items=8,
                                                  callback=self._on_select_planet)
            dpg.add_button(label="Remove Selected", callback=self._on_remove_selected_clicked)

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)
        self._refresh_planet_list()

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _items(self):
        return [f"{i}: {p.name}" for i, p in enumerate(self.scene.state.planets)]

    def _refresh_planet_list(self):
        items = self._items()
        if items != self._last_items:
            dpg.configure_item(self.planet_list_id, items=items)
            self._last_items = items
        sel = self.scene.state.selected
        if sel is not None and 0 <= sel < len(items):
            dpg.set_value(self.planet_list_id, items[sel])

    def _on_select_planet(self, sender, app_data, user_data=None):
        items = self._items()
        if app_data in items:
            self.scene.state.selected = items.index(app_data)

    def _on_add_planet_clicked(self):
        try:
            record = parse_planet_form(
                dpg.get_value(self.name_id),
                dpg.get_value(self.orbit_id),
                dpg.get_value(self.speed_id),
                dpg.get_value(self.radius_id),
                dpg.get_value(self.color_id),
            )
        except ValueError as exc:
            self._set_error(str(exc))
            return
        try:
            self.scene.add_planet(record)
        except (DataSourceError, EmptySceneError) as exc:
            logger.error("Add planet failed: %s", exc)
            self._set_error(f"Add failed: {exc}")
            return
        self._refresh_planet_list()
        self._set_status(f"Added planet '{record.name}'.")

    def _on_remove_selected_clicked(self):
        sel = self.scene.state.selected
        if sel is None:
            self._set_error("No planet selected.")
            return
        name = self.scene.state.planets[sel].name
        try:
            self.scene.remove_planet(sel)
        except (IndexError, ValueError, DataSourceError, EmptySceneError) as exc:
            logger.error("Remove planet failed: %s", exc)
            self._set_error(f"Remove failed: {exc}")
            return
        self._refresh_planet_list()
        self._set_status(f"Removed planet '{name}'.")

    # -----------------------
    # Frame pumping
    # -----------------------

    def render_frame(self) -> bool:
        """Draw one panel frame; False once the panel window has been closed."""
        if not self.running:
            return False
        if not dpg.is_dearpygui_running():
            self.running = False
            return False
        self._refresh_planet_list()
        dpg.render_dearpygui_frame()
        return True

    def close(self) -> None:
        self.running = False
        dpg.destroy_context()
