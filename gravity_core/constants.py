#!/usr/bin/env python3
"""
Shared constants for Gravity Playground.

Keeping defaults in one place helps ensure values are consistent across the
codebase and makes tuning easier. A World never reads these directly; they
seed WorldConfig, which is passed explicitly at construction.
"""

# Physical constants
G = 6.674e-11  # m^3 kg^-1 s^-2
UNIT_SCALE = 150.0  # real meters per internal field unit

# Physics controls
MIN_FIELD_DISTANCE = 1e-3  # internal units; clamps d -> 0 in the inverse-square law
BASE_DT = 1 / 60.0  # seconds per tick at the host refresh rate

# Drag interaction
DRAG_SPEED = 0.05  # fraction of the remaining gap closed per tick
RELEASE_SCALE = 40.0  # release_factor = RELEASE_SCALE * drag_speed

# Telemetry
TELEMETRY_INTERVAL = 6  # ticks between telemetry callbacks

# Default radii (meters) when the caller does not supply one
SATELLITE_RADIUS_RANGE = (13.0, 22.0)
PLANET_RADIUS_RANGE = (36.0, 52.0)

# Rendering (viewport)
VIEW_WIDTH = 960
VIEW_HEIGHT = 720
BACKGROUND_COLOR = (8, 10, 24)
GRID_COLOR = (30, 34, 56)
PLANET_COLOR = (80, 200, 120)
SATELLITE_COLOR = (240, 220, 70)
HELD_COLOR = (255, 255, 255)
TRAIL_LENGTH = 240

# Camera zoom bounds (meters-per-pixel)
DEFAULT_METERS_PER_PIXEL = 1.0
MIN_METERS_PER_PIXEL = 0.05
MAX_METERS_PER_PIXEL = 50.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
