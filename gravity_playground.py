#!/usr/bin/env python3
"""
Gravity Playground application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame viewport thread and the Dear PyGui controls
  (running on the main thread).
- Both talk to one SimulationController, which owns the World and guards it with a
  re-entrant lock.
- The viewport does the hit-testing: a left click on a body picks it up, moving the
  mouse retargets it, releasing throws it with the velocity of the unclosed gap.

Threading model
- PygameRenderer runs in a background thread and performs: input handling, stepping
  the world from frame time, and drawing.
- The UI class runs in the main thread via Dear PyGui. It refreshes the speed readouts
  from the most recent telemetry snapshot on a frame callback.

Units and conventions
- World units are meters, y-up. Speeds are in m/s, masses in kg.

Running
1) Install: `pip install -e .`
2) Run: `gravity-playground` (or `python gravity_playground.py`)
"""

import logging
import math
import time
import threading
from collections import deque
from typing import Deque, Dict, Optional, Tuple

import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from gravity_core.camera import Camera2D
from gravity_core.collisions import COLLISION_MODES, CollisionSettings
from gravity_core.config import DRAG_MODES, WorldConfig
from gravity_core.constants import (
    BACKGROUND_COLOR,
    GRID_COLOR,
    HELD_COLOR,
    MAX_METERS_PER_PIXEL,
    MIN_METERS_PER_PIXEL,
    PLANET_COLOR,
    SAFE_COORD_LIMIT,
    SATELLITE_COLOR,
    TRAIL_LENGTH,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from gravity_core.controller import SimulationController
from gravity_core.data_models import PLANET, WorldSnapshot
from gravity_core.errors import GravityPlaygroundError
from gravity_core.presets_loader import (
    Scene,
    default_scene,
    list_templates,
    load_template,
)
from gravity_core.utils import try_float
from gravity_core.vector_utils import clamp

logger = logging.getLogger("gravity_playground")


# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: draws planets, satellites, trails and speed labels.
    Handles picking up and throwing bodies, camera panning and zoom.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.running = True
        # Presentation state keyed by body id
        self.trails: Dict[int, Deque[Tuple[float, float]]] = {}
        self.telemetry: Optional[WorldSnapshot] = None
        sim.on_telemetry_tick(self._on_telemetry)

    def _on_telemetry(self, snap: WorldSnapshot) -> None:
        self.telemetry = snap

    def reset_presentation(self):
        self.trails.clear()
        self.telemetry = None

    def auto_frame_camera(self):
        """
        Adjust camera to fit all bodies into view with margin.
        """
        snap = self.sim.snapshot()
        if not snap.bodies:
            self.camera.center = [0.0, 0.0]
            return
        xs = [b.position[0] for b in snap.bodies]
        ys = [b.position[1] for b in snap.bodies]
        minx, maxx = min(xs), max(xs)
        miny, maxy = min(ys), max(ys)
        width_m = (maxx - minx) * 1.6 + 200.0
        height_m = (maxy - miny) * 1.6 + 200.0
        mpp_x = width_m / max(self.camera.viewport_size[0], 1)
        mpp_y = height_m / max(self.camera.viewport_size[1], 1)
        self.camera.center = [(minx + maxx) / 2, (miny + maxy) / 2]
        self.camera.mpp = clamp(max(mpp_x, mpp_y), MIN_METERS_PER_PIXEL, MAX_METERS_PER_PIXEL)

    def run(self):
        pygame.init()
        pygame.display.set_caption("Gravity Playground - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.auto_frame_camera()

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()
            self.sim.step_frame(real_dt)
            self.draw()

            self.clock.tick(60)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.WINDOWFOCUSLOST:
                if self.sim.pointer_cancelled() is not None:
                    logger.debug("drag cancelled: viewport lost focus")

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    world = self.camera.screen_to_world(event.pos)
                    body_id = self.sim.body_at(world, pick_radius=self.camera.mpp * 10)
                    if body_id is None:
                        self.dragging_background = True
                        self.drag_start_screen = event.pos
                    else:
                        self.sim.pointer_down(body_id, world)
                elif event.button in (2, 3):
                    self.dragging_background = True
                    self.drag_start_screen = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    self.sim.pointer_up(self.camera.screen_to_world(event.pos))
                if event.button in (1, 2, 3):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION:
                if self.dragging_background:
                    dx = event.pos[0] - self.drag_start_screen[0]
                    dy = event.pos[1] - self.drag_start_screen[1]
                    self.camera.pan_pixels(dx, dy)
                    self.drag_start_screen = event.pos
                else:
                    self.sim.pointer_moved(self.camera.screen_to_world(event.pos))

    def draw_grid(self, surf):
        w, h = self.camera.viewport_size
        # Grid lines roughly 100 pixels apart, rounded to a 1-2-5 sequence
        spacing_m = self.camera.mpp * 100
        pow10 = 10 ** math.floor(math.log10(spacing_m))
        mant = spacing_m / pow10
        spacing = (1 if mant < 2 else 2 if mant < 5 else 5) * pow10

        left, top = self.camera.screen_to_world((0, 0))
        right, bottom = self.camera.screen_to_world((w, h))
        x = math.floor(left / spacing) * spacing
        while x <= right:
            sx, _ = self.camera.world_to_screen((x, 0))
            pygame.draw.line(surf, GRID_COLOR, (sx, 0), (sx, h), 1)
            x += spacing
        y = math.floor(bottom / spacing) * spacing
        while y <= top:
            _, sy = self.camera.world_to_screen((0, y))
            pygame.draw.line(surf, GRID_COLOR, (0, sy), (w, sy), 1)
            y += spacing

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        self.draw_grid(surf)

        snap = self.sim.snapshot()
        with self.sim.lock:
            held = self.sim.world.drag.held
            target = held.drag.target_position if held is not None else None
            held_pos = held.position if held is not None else None

        for b in snap.satellites:
            trail = self.trails.setdefault(b.id, deque(maxlen=TRAIL_LENGTH))
            trail.append(b.position)
            pts = [p for p in (_safe_point(self.camera.world_to_screen(q)) for q in trail) if p]
            if len(pts) > 1:
                pygame.draw.aalines(surf, (120, 110, 40), False, pts)

        for b in snap.bodies:
            pos = _safe_point(self.camera.world_to_screen(b.position))
            if pos is None:
                continue
            vis_r = max(2, min(self.camera.length_to_pixels(b.radius), 400))
            color = PLANET_COLOR if b.kind == PLANET else SATELLITE_COLOR
            gfxdraw.filled_circle(surf, pos[0], pos[1], vis_r, color)
            gfxdraw.aacircle(surf, pos[0], pos[1], vis_r, HELD_COLOR if b.held else (0, 0, 0))

        if target is not None:
            start = _safe_point(self.camera.world_to_screen(held_pos))
            end = _safe_point(self.camera.world_to_screen(target))
            if start and end:
                pygame.draw.line(surf, HELD_COLOR, start, end, 1)

        # Speed labels refresh at the telemetry rate, not every frame
        telemetry = self.telemetry
        if telemetry is not None:
            for b in telemetry.satellites:
                current = snap.body(b.id)
                if current is None:
                    continue
                pos = _safe_point(self.camera.world_to_screen(current.position))
                if pos:
                    draw_text(surf, f"{b.speed:.1f} m/s", pos[0] + 12, pos[1] - 24, (220, 220, 220))

        draw_text(surf, "Left-drag: throw body | Right-drag: pan | Wheel: zoom | Space: pause", 10, 10, (200, 200, 200))
        draw_text(surf, f"t = {snap.time:.1f} s  [{'Playing' if self.sim.playing else 'Paused'}]", 10, 30, (200, 200, 200))

        pygame.display.flip()


_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if _cached_font is None:
        if not pygame.font.get_init():
            pygame.font.init()
        _cached_font = pygame.font.Font(None, 20)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    x, y = int(pt[0]), int(pt[1])
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: scenes, add planet/satellite forms, engine options, speed readouts.
    """
    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer
        self.current_scene: Scene = default_scene()
        self._scene_map: Dict[str, str] = {}
        self._telemetry: Optional[WorldSnapshot] = None
        sim.on_telemetry_tick(self._on_telemetry)

        self._build_ui()
        dpg.set_frame_callback(1, self._post_setup)
        self._schedule_sync()

    def _on_telemetry(self, snap: WorldSnapshot) -> None:
        self._telemetry = snap

    def _post_setup(self):
        self.load_scene(self.current_scene)

    def _schedule_sync(self):
        """Reschedule the periodic sync callback (~every 6 frames)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="Gravity Playground - Controls", width=440, height=720)

        with dpg.window(label="Controls", width=420, height=700, pos=(10, 10), tag="main_window"):
            for fn, display in list_templates():
                self._scene_map[display] = fn
            items = list(self._scene_map) or [self.current_scene.name]
            with dpg.group(horizontal=True):
                dpg.add_text("Scene:")
                dpg.add_combo(items, default_value=items[0], width=200, tag="scene_combo")
                dpg.add_button(label="Load", callback=lambda: self._on_load_scene(dpg.get_value("scene_combo")))
                dpg.add_button(label="Fit", callback=self.renderer.auto_frame_camera)

            dpg.add_separator()
            dpg.add_text("Engine")
            dpg.add_combo(list(DRAG_MODES), default_value=self.sim.config.drag_mode, label="Drag mode", tag="drag_mode")
            dpg.add_combo(list(COLLISION_MODES), default_value=self.sim.config.collisions.mode, label="Collisions", tag="collision_mode")
            dpg.add_input_text(label="Drag speed", default_value=str(self.sim.config.drag_speed), tag="drag_speed")
            dpg.add_button(label="Apply and restart scene", callback=self._apply_engine_options)
            dpg.add_button(label="Play / Pause", callback=self._toggle_play)

            dpg.add_separator()
            dpg.add_text("Add planet")
            dpg.add_input_text(label="x, y (m)", default_value="0, 0", tag="planet_pos")
            dpg.add_input_text(label="Mass (kg)", default_value="1.49835181e16", tag="planet_mass")
            dpg.add_button(label="Add planet", callback=self._on_add_planet)

            dpg.add_separator()
            dpg.add_text("Add satellite")
            dpg.add_input_text(label="x, y (m)", default_value="0, 300", tag="sat_pos")
            dpg.add_input_text(label="vx, vy (m/s)", default_value="57.7, 0", tag="sat_vel")
            dpg.add_button(label="Add satellite", callback=self._on_add_satellite)

            dpg.add_separator()
            dpg.add_text("Satellite speeds")
            dpg.add_text("", tag="speed_readout")
            dpg.add_separator()
            dpg.add_text("", tag="status_msg")

        dpg.setup_dearpygui()
        dpg.show_viewport()

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value("status_msg", msg)
        dpg.configure_item("status_msg", color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    @staticmethod
    def _read_pair(tag: str) -> Optional[Tuple[float, float]]:
        parts = dpg.get_value(tag).split(",")
        if len(parts) != 2:
            return None
        x, y = try_float(parts[0]), try_float(parts[1])
        if x is None or y is None:
            return None
        return (x, y)

    def _on_add_planet(self):
        pos = self._read_pair("planet_pos")
        mass = try_float(dpg.get_value("planet_mass"))
        if pos is None or mass is None:
            self._set_error("Invalid numeric input.")
            return
        try:
            body_id = self.sim.create_planet(pos[0], pos[1], mass)
        except GravityPlaygroundError as exc:
            self._set_error(str(exc))
            return
        self._set_status(f"Added planet {body_id}.")

    def _on_add_satellite(self):
        pos = self._read_pair("sat_pos")
        vel = self._read_pair("sat_vel")
        if pos is None or vel is None:
            self._set_error("Invalid numeric input.")
            return
        try:
            body_id = self.sim.create_satellite(pos[0], pos[1], vel[0], vel[1])
        except GravityPlaygroundError as exc:
            self._set_error(str(exc))
            return
        self._set_status(f"Added satellite {body_id}.")

    def _toggle_play(self):
        playing = self.sim.toggle_play()
        self._set_status("Playing" if playing else "Paused")

    def _apply_engine_options(self):
        drag_speed = try_float(dpg.get_value("drag_speed"))
        if drag_speed is None:
            self._set_error("Invalid drag speed.")
            return
        try:
            config = WorldConfig(
                drag_mode=dpg.get_value("drag_mode"),
                drag_speed=drag_speed,
                collisions=CollisionSettings(mode=dpg.get_value("collision_mode")),
            )
        except ValueError as exc:
            self._set_error(str(exc))
            return
        self.sim.new_world(config)
        self.load_scene(self.current_scene)

    def _on_load_scene(self, display: str):
        fn = self._scene_map.get(display)
        scene = load_template(fn) if fn else None
        if scene is None:
            scene = default_scene()
        self.load_scene(scene)

    def load_scene(self, scene: Scene):
        try:
            self.sim.load_scene(scene)
        except GravityPlaygroundError as exc:
            self._set_error(f"Scene {scene.name!r}: {exc}")
            return
        self.current_scene = scene
        self._telemetry = None
        self.renderer.reset_presentation()
        self.renderer.auto_frame_camera()
        self._set_status(f"Loaded scene: {scene.name}")

    def _sync_ui_with_sim(self):
        """
        Periodic UI update: speed readouts from the latest telemetry snapshot and collision notices.
        """
        snap = self._telemetry
        if snap is not None:
            lines = [
                f"#{b.id}: {b.speed:7.2f} m/s" + ("  (held)" if b.held else "")
                for b in snap.satellites
            ]
            dpg.set_value("speed_readout", "\n".join(lines))
        msg = self.sim.last_collision_message()
        if msg:
            self._set_status(msg)
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sim = SimulationController()
    renderer = PygameRenderer(sim)
    renderer.start()

    ui = UI(sim, renderer)

    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
