#!/usr/bin/env python3
"""
Thread-safe simulation controller.

The host runs the pygame viewport (input, stepping, drawing) on a background
thread and the Dear PyGui controls on the main thread. Both reach the World
only through this controller, which holds a re-entrant lock around every
mutation and read so the World keeps its single-writer semantics.
"""
import logging
import threading
from typing import List, Optional

from .config import WorldConfig
from .constants import BASE_DT
from .data_models import BodySnapshot, WorldSnapshot
from .presets_loader import Scene
from .vector_utils import Vector2, clamp, vec_distance
from .world import TelemetryCallback, World

logger = logging.getLogger(__name__)

MAX_TICKS_PER_FRAME = 8


class SimulationController:
    """
    Shared state between the UI thread and the viewport thread.
    """

    def __init__(self, config: Optional[WorldConfig] = None):
        self.lock = threading.RLock()
        self.config = config or WorldConfig()
        self.world = World(self.config)
        self.running = True  # app running
        self.playing = True  # simulation running
        self.base_dt = BASE_DT
        self._accumulator = 0.0
        self._telemetry: List[TelemetryCallback] = []

    def new_world(self, config: Optional[WorldConfig] = None) -> World:
        """Replace the world, keeping registered telemetry callbacks."""
        with self.lock:
            if config is not None:
                self.config = config
            self.world = World(self.config)
            for callback in self._telemetry:
                self.world.on_telemetry_tick(callback)
            self._accumulator = 0.0
            return self.world

    def load_scene(self, scene: Scene) -> List[int]:
        with self.lock:
            self.new_world()
            return scene.populate(self.world)

    def on_telemetry_tick(self, callback: TelemetryCallback) -> None:
        with self.lock:
            self._telemetry.append(callback)
            self.world.on_telemetry_tick(callback)

    def toggle_play(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def create_planet(self, x: float, y: float, mass: float, radius: Optional[float] = None) -> int:
        with self.lock:
            return self.world.create_planet(x, y, mass, radius)

    def create_satellite(self, x: float, y: float, dx: float, dy: float, radius: Optional[float] = None) -> int:
        with self.lock:
            return self.world.create_satellite(x, y, dx, dy, radius)

    def current_speed(self, body_id: int) -> float:
        with self.lock:
            return self.world.current_speed(body_id)

    def snapshot(self) -> WorldSnapshot:
        with self.lock:
            return self.world.snapshot()

    def body_at(self, world_pos: Vector2, pick_radius: float = 0.0) -> Optional[int]:
        """
        Hit-test helper for hosts: nearest body whose radius (or pick_radius,
        whichever is larger) covers world_pos.
        """
        with self.lock:
            idx = None
            min_d = float("inf")
            for b in self.world.bodies:
                d = vec_distance(b.position, world_pos)
                if d < max(b.radius, pick_radius) and d < min_d:
                    min_d = d
                    idx = b.id
            return idx

    def pointer_down(self, body_id: Optional[int], position: Vector2) -> bool:
        with self.lock:
            return self.world.pointer_down(body_id, position)

    def pointer_moved(self, position: Vector2) -> None:
        with self.lock:
            self.world.pointer_moved(position)

    def pointer_up(self, position: Optional[Vector2] = None) -> Optional[int]:
        with self.lock:
            return self.world.pointer_up(position)

    def pointer_cancelled(self) -> Optional[int]:
        with self.lock:
            return self.world.pointer_cancelled()

    def step_frame(self, dt_real_seconds: float) -> int:
        """
        Advance the world by whole ticks of base_dt covering the frame time.

        Leftover time carries into the next frame; a long stall is capped at
        MAX_TICKS_PER_FRAME so the viewport stays responsive. Returns the
        number of ticks run.
        """
        with self.lock:
            if not self.playing or dt_real_seconds <= 0:
                return 0
            self._accumulator += dt_real_seconds
            steps = int(self._accumulator / self.base_dt)
            if steps > MAX_TICKS_PER_FRAME:
                logger.debug("frame of %.3fs needs %d ticks; capping", dt_real_seconds, steps)
                steps = MAX_TICKS_PER_FRAME
                self._accumulator = 0.0
            else:
                self._accumulator -= steps * self.base_dt
            self._accumulator = clamp(self._accumulator, 0.0, self.base_dt)
            for _ in range(steps):
                self.world.tick(self.base_dt)
            return steps

    def last_collision_message(self) -> Optional[str]:
        """Pop the most recent collision message, if any."""
        with self.lock:
            msg = self.world.last_collision_msg
            self.world.last_collision_msg = None
            return msg

    def list_satellites(self) -> List[BodySnapshot]:
        with self.lock:
            return self.world.list_satellites()
