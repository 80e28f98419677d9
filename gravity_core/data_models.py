#!/usr/bin/env python3
"""
Data models for Gravity Playground.

This module defines the Body record shared between the field engine, the
collision resolver, the drag controller and the host shell, plus the frozen
snapshot types handed to telemetry observers.

Units and usage
- position is in world units (meters), velocity in meters per second, radius in meters.
- field_strength is expressed in the engine's internal units (see physics.field_strength_for_mass).
- Bodies are flat records owned by a World and referenced by their integer id.
  Presentation state (shapes, trails, labels) is keyed by the same id in the host.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .vector_utils import Vector2, ZERO, vec_len

PLANET = "planet"
SATELLITE = "satellite"
BODY_KINDS = (PLANET, SATELLITE)


@dataclass
class DragState:
    """
    Pointer-hold state attached to a body while it is held.

    Fields:
    - target_position: point the body is tracking (last pointer position)
    - was_dynamic_before_drag: is_dynamic value restored on release
    - last_pointer: last pointer position seen, used by the manual drag mode
    """
    target_position: Vector2
    was_dynamic_before_drag: bool
    last_pointer: Vector2


@dataclass
class Body:
    """
    Represents a planet or a satellite.

    Fields:
    - id: stable identifier assigned by the World (insertion index)
    - kind: PLANET (kinematic, emits a field) or SATELLITE (dynamic, feels the field)
    - position: 2D position (x, y) in meters
    - velocity: 2D velocity (vx, vy) in meters/second; always zero for planets
    - radius: collision radius in meters
    - mass: mass in kilograms (satellites carry unit mass)
    - field_strength: scaled attraction strength; zero for satellites
    - is_dynamic: True when the body is moved by force integration
    - drag: present only while the body is held by the pointer
    """
    id: int
    kind: str
    position: Vector2
    velocity: Vector2
    radius: float
    mass: float = 1.0
    field_strength: float = 0.0
    is_dynamic: bool = False
    drag: Optional[DragState] = None

    @property
    def is_planet(self) -> bool:
        return self.kind == PLANET

    @property
    def is_satellite(self) -> bool:
        return self.kind == SATELLITE

    @property
    def is_held(self) -> bool:
        return self.drag is not None

    @property
    def speed(self) -> float:
        return vec_len(self.velocity)

    def snapshot(self) -> "BodySnapshot":
        return BodySnapshot(
            id=self.id,
            kind=self.kind,
            position=self.position,
            velocity=self.velocity if self.is_satellite else ZERO,
            speed=self.speed if self.is_satellite else 0.0,
            radius=self.radius,
            mass=self.mass,
            held=self.is_held,
        )


@dataclass(frozen=True)
class BodySnapshot:
    """Read-only copy of one body's state."""
    id: int
    kind: str
    position: Vector2
    velocity: Vector2
    speed: float
    radius: float
    mass: float
    held: bool


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only copy of the whole world, in insertion order."""
    tick: int
    time: float
    bodies: Tuple[BodySnapshot, ...]

    @property
    def planets(self) -> Tuple[BodySnapshot, ...]:
        return tuple(b for b in self.bodies if b.kind == PLANET)

    @property
    def satellites(self) -> Tuple[BodySnapshot, ...]:
        return tuple(b for b in self.bodies if b.kind == SATELLITE)

    def body(self, body_id: int) -> Optional[BodySnapshot]:
        for b in self.bodies:
            if b.id == body_id:
                return b
        return None
