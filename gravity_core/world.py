#!/usr/bin/env python3
"""
World registry and simulation clock for Gravity Playground.

A World owns every Body (insertion ordered, referenced by integer id), the
configuration it was built with, and the three per-tick subsystems:

    tick(dt):
      1. drag controller moves the held body toward its target
      2. gravity field engine integrates every dynamic, non-held satellite
      3. collision resolver zeroes the velocity of satellites in contact
      4. tick counter and simulated time advance
      5. every telemetry_interval ticks, telemetry callbacks get a WorldSnapshot

Pointer handlers are the only other entry points that mutate state. The World is
not thread-safe on its own: hosts that drive input and ticks from different
threads go through SimulationController.

Units: positions in meters, velocities in m/s, masses in kg, dt in seconds.
"""
import logging
import math
import random
from typing import Callable, List, Optional, Tuple

from .collisions import handle_collisions
from .config import WorldConfig
from .data_models import PLANET, SATELLITE, Body, BodySnapshot, WorldSnapshot
from .drag import DragController
from .errors import InvalidBodyParameters, InvalidBodyReference
from .physics import GravityFieldEngine, field_strength_for_mass
from .vector_utils import ZERO, Vector2, vec_is_finite

logger = logging.getLogger(__name__)

TelemetryCallback = Callable[[WorldSnapshot], None]


class World:
    """
    Planets, satellites and the fixed-order tick that advances them.
    """

    def __init__(self, config: Optional[WorldConfig] = None):
        self.config = config or WorldConfig()
        self.bodies: List[Body] = []
        self.observed: List[int] = []
        self.tick_count = 0
        self.time = 0.0
        self.last_collision_msg: Optional[str] = None

        self.engine = GravityFieldEngine(self.config.unit_scale, self.config.min_distance)
        self.drag = DragController(
            mode=self.config.drag_mode,
            drag_speed=self.config.drag_speed,
            release_factor=self.config.release_factor,
        )
        self._rng = random.Random(self.config.seed)
        self._telemetry: List[TelemetryCallback] = []

    # -----------------------
    # Body factory
    # -----------------------

    def create_planet(self, x: float, y: float, mass: float, radius: Optional[float] = None) -> int:
        """
        Add a kinematic planet whose field pulls every satellite.

        Args:
            x, y: Position in meters
            mass: Mass in kg (>= 0)
            radius: Collision radius in meters; random within planet_radius_range if omitted

        Returns:
            The new body's id
        """
        position = self._check_vector((x, y), "position")
        if not math.isfinite(mass) or mass < 0:
            raise InvalidBodyParameters(f"planet mass must be a finite non-negative number, got {mass!r}")
        radius = self._resolve_radius(radius, self.config.planet_radius_range)
        body = Body(
            id=len(self.bodies),
            kind=PLANET,
            position=position,
            velocity=ZERO,
            radius=radius,
            mass=float(mass),
            field_strength=field_strength_for_mass(mass, self.config.gravitational_constant, self.config.unit_scale),
            is_dynamic=False,
        )
        self.bodies.append(body)
        logger.debug("created planet %d at %s (mass %.4g kg, radius %.1f)", body.id, position, mass, radius)
        return body.id

    def create_satellite(self, x: float, y: float, dx: float, dy: float, radius: Optional[float] = None) -> int:
        """
        Add a dynamic satellite with an initial velocity in m/s.

        The satellite is also recorded as an observed body for telemetry.
        """
        position = self._check_vector((x, y), "position")
        velocity = self._check_vector((dx, dy), "velocity")
        radius = self._resolve_radius(radius, self.config.satellite_radius_range)
        body = Body(
            id=len(self.bodies),
            kind=SATELLITE,
            position=position,
            velocity=velocity,
            radius=radius,
            is_dynamic=True,
        )
        self.bodies.append(body)
        self.observed.append(body.id)
        logger.debug("created satellite %d at %s moving %s", body.id, position, velocity)
        return body.id

    def _resolve_radius(self, radius: Optional[float], default_range: Tuple[float, float]) -> float:
        if radius is None:
            return self._rng.uniform(*default_range)
        if not math.isfinite(radius) or radius <= 0:
            raise InvalidBodyParameters(f"radius must be a finite positive number, got {radius!r}")
        return float(radius)

    @staticmethod
    def _check_vector(v, what: str) -> Vector2:
        try:
            vec = (float(v[0]), float(v[1]))
        except (TypeError, ValueError):
            raise InvalidBodyParameters(f"{what} must be a pair of numbers, got {v!r}") from None
        if not vec_is_finite(vec):
            raise InvalidBodyParameters(f"{what} must be finite, got {vec!r}")
        return vec

    # -----------------------
    # Queries
    # -----------------------

    def get_body(self, body_id: int) -> Body:
        if not isinstance(body_id, int) or isinstance(body_id, bool) or not 0 <= body_id < len(self.bodies):
            raise InvalidBodyReference(body_id)
        return self.bodies[body_id]

    def list_planets(self) -> List[BodySnapshot]:
        return [b.snapshot() for b in self.bodies if b.is_planet]

    def list_satellites(self) -> List[BodySnapshot]:
        return [b.snapshot() for b in self.bodies if b.is_satellite]

    def observed_satellites(self) -> List[BodySnapshot]:
        return [self.bodies[i].snapshot() for i in self.observed]

    def current_speed(self, body_id: int) -> float:
        """Speed of a body in m/s; planets always report 0."""
        body = self.get_body(body_id)
        return body.speed if body.is_satellite else 0.0

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            tick=self.tick_count,
            time=self.time,
            bodies=tuple(b.snapshot() for b in self.bodies),
        )

    @property
    def held_body(self) -> Optional[int]:
        return self.drag.held.id if self.drag.held is not None else None

    # -----------------------
    # Pointer input
    # -----------------------

    def pointer_down(self, body_id: Optional[int], position: Vector2) -> bool:
        """
        Start holding the body the host found under the pointer.

        Returns True if a drag started. A pointer-down on empty space, at a
        non-finite position, or while another body is already held, does nothing.
        """
        if body_id is None:
            return False
        body = self.get_body(body_id)
        position = self._pointer_position(position)
        if position is None:
            return False
        return self.drag.grab(body, position)

    def pointer_moved(self, position: Vector2) -> None:
        position = self._pointer_position(position)
        if position is not None:
            self.drag.retarget(position)

    def pointer_up(self, position: Optional[Vector2] = None) -> Optional[int]:
        """
        Release the held body. A final pointer position, when given, becomes
        the last target before the release velocity is computed; a non-finite
        one is ignored and the body is released toward its current target.
        """
        if position is not None:
            position = self._pointer_position(position)
            if position is not None:
                self.drag.retarget(position)
        body = self.drag.release()
        return body.id if body is not None else None

    def pointer_cancelled(self) -> Optional[int]:
        body = self.drag.release()
        return body.id if body is not None else None

    @staticmethod
    def _pointer_position(position) -> Optional[Vector2]:
        try:
            vec = (float(position[0]), float(position[1]))
        except (TypeError, ValueError, IndexError):
            vec = None
        if vec is None or not vec_is_finite(vec):
            logger.debug("dropping pointer event at %r", position)
            return None
        return vec

    # -----------------------
    # Telemetry
    # -----------------------

    def on_telemetry_tick(self, callback: TelemetryCallback) -> None:
        """Register a callback invoked every telemetry_interval ticks."""
        self._telemetry.append(callback)

    # -----------------------
    # Simulation clock
    # -----------------------

    def tick(self, dt: float) -> None:
        """
        Advance the simulation by one fixed step of dt seconds.
        """
        if dt <= 0:
            return

        self.drag.apply()
        self.engine.step(self.bodies, dt)
        msg = handle_collisions(self.bodies, self.config.collisions)
        if msg:
            self.last_collision_msg = msg

        self.tick_count += 1
        self.time += dt

        if self._telemetry and self.tick_count % self.config.telemetry_interval == 0:
            snap = self.snapshot()
            for callback in self._telemetry:
                callback(snap)

    def run(self, ticks: int, dt: float) -> None:
        for _ in range(ticks):
            self.tick(dt)
