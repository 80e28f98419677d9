#!/usr/bin/env python3
"""
World configuration.

Every tunable the engine uses lives on WorldConfig and is supplied when a
World is built, so independent worlds (and tests) can run with different
constants side by side.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from . import constants
from .collisions import COLLISION_MODES, CollisionSettings

DRAG_MODES = ("target", "manual")


@dataclass
class WorldConfig:
    """
    Fields:
    - gravitational_constant: G in m^3 kg^-1 s^-2
    - unit_scale: real meters per internal field unit
    - min_distance: lower clamp on planet-satellite distance, internal units
    - drag_mode: "target" (smoothed tracking, throw on release) or "manual" (raw pointer delta)
    - drag_speed: fraction of the remaining gap a held body closes each tick
    - release_scale: release_factor = release_scale * drag_speed
    - telemetry_interval: ticks between telemetry callbacks
    - collisions: collision response settings
    - satellite_radius_range / planet_radius_range: default radius ranges in meters
    - seed: seed for the radius generator; None draws from system entropy
    """
    gravitational_constant: float = constants.G
    unit_scale: float = constants.UNIT_SCALE
    min_distance: float = constants.MIN_FIELD_DISTANCE
    drag_mode: str = "target"
    drag_speed: float = constants.DRAG_SPEED
    release_scale: float = constants.RELEASE_SCALE
    telemetry_interval: int = constants.TELEMETRY_INTERVAL
    collisions: CollisionSettings = field(default_factory=CollisionSettings)
    satellite_radius_range: Tuple[float, float] = constants.SATELLITE_RADIUS_RANGE
    planet_radius_range: Tuple[float, float] = constants.PLANET_RADIUS_RANGE
    seed: Optional[int] = None

    def __post_init__(self):
        if self.unit_scale <= 0:
            raise ValueError("unit_scale must be positive")
        if self.min_distance <= 0:
            raise ValueError("min_distance must be positive")
        if self.drag_mode not in DRAG_MODES:
            raise ValueError(f"drag_mode must be one of {DRAG_MODES}, got {self.drag_mode!r}")
        if not 0.0 < self.drag_speed <= 1.0:
            raise ValueError("drag_speed must be in (0, 1]")
        if self.telemetry_interval < 1:
            raise ValueError("telemetry_interval must be at least 1")
        if self.collisions.mode not in COLLISION_MODES:
            raise ValueError(f"collision mode must be one of {COLLISION_MODES}")

    @property
    def release_factor(self) -> float:
        return self.release_scale * self.drag_speed
