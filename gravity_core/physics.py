#!/usr/bin/env python3
"""
Gravity Field Engine for Gravity Playground

Responsibilities
- Compute the radial inverse-square field every planet exerts on every dynamic satellite.
- Advance satellite states with semi-implicit (symplectic) Euler.
- Provide small helpers for common orbital computations (circular and escape velocity).

Units and conventions
- Body positions are in meters [m], velocities in meters per second [m/s].
- Planet field strength lives in internal units: field_strength = mass * G / unit_scale^3,
  where unit_scale is the number of real meters per internal distance unit.
- The engine converts distances to internal units, evaluates
      a_int = field_strength / d_int^2
  and scales the result back by unit_scale, so the boundary physics is exactly G * m / r^2.

Numerical notes
- Degenerate distances: d_int is clamped below by min_distance, so a satellite sitting on
  top of a planet never produces NaN or unbounded accelerations. A perfectly coincident
  satellite has no defined direction and receives no pull from that planet.
- Integration: velocity is updated first, then position with the new velocity. Unlike
  explicit Euler this keeps circular orbits closed over many ticks.
- Planets are kinematic: they exert fields but never attract each other.
"""

import logging
import math
from typing import Dict, Iterable, List

from .data_models import Body
from .vector_utils import Vector2, vec_add, vec_scale

logger = logging.getLogger(__name__)


def field_strength_for_mass(mass: float, gravitational_constant: float, unit_scale: float) -> float:
    """
    Convert a physical mass [kg] into the engine's internal field strength.

    Args:
        mass: Mass in kg
        gravitational_constant: G in m^3 kg^-1 s^-2
        unit_scale: Real meters per internal distance unit

    Returns:
        mass * G / unit_scale^3
    """
    return mass * gravitational_constant / unit_scale ** 3


class GravityFieldEngine:
    """
    Radial gravity field engine with a clamped inverse-square falloff.

    The acceleration on a satellite from one planet is directed toward the
    planet with magnitude field_strength / max(d, min_distance)^2 (internal
    units). Contributions from several planets add (superposition).
    """

    def __init__(self, unit_scale: float, min_distance: float):
        """
        Args:
            unit_scale: Real meters per internal distance unit (> 0)
            min_distance: Lower clamp on distance, internal units (> 0)
        """
        self.unit_scale = float(unit_scale)
        self.min_distance = float(min_distance)

    def field_acceleration(self, position: Vector2, planets: Iterable[Body]) -> Vector2:
        """
        Acceleration [m/s^2] the planets' fields produce at a world position.
        """
        s = self.unit_scale
        ax_total, ay_total = 0.0, 0.0
        for planet in planets:
            # Vector from the point toward the planet, in internal units
            dx = (planet.position[0] - position[0]) / s
            dy = (planet.position[1] - position[1]) / s
            d = math.hypot(dx, dy)
            if d == 0.0:
                logger.debug("satellite coincides with planet %d; no field direction", planet.id)
                continue
            d_clamped = d
            if d < self.min_distance:
                logger.debug("clamping distance %.3g to %.3g for planet %d", d, self.min_distance, planet.id)
                d_clamped = self.min_distance
            magnitude = planet.field_strength / (d_clamped * d_clamped)
            ax_total += magnitude * dx / d
            ay_total += magnitude * dy / d
        return (ax_total * s, ay_total * s)

    def compute_accelerations(self, bodies: List[Body]) -> Dict[int, Vector2]:
        """
        Accelerations for every dynamic body, keyed by body id.

        Held bodies are not dynamic while held and are therefore skipped.
        """
        planets = [b for b in bodies if b.is_planet]
        return {
            b.id: self.field_acceleration(b.position, planets)
            for b in bodies
            if b.is_satellite and b.is_dynamic
        }

    def step(self, bodies: List[Body], timestep: float) -> None:
        """
        Perform one semi-implicit Euler step over the dynamic bodies.

        All accelerations are evaluated from the positions at the start of the
        step, then each body does v += a * dt followed by x += v * dt.

        Args:
            bodies: Bodies to integrate (modified in place)
            timestep: Time step size in seconds (>= 0)
        """
        accelerations = self.compute_accelerations(bodies)
        for body in bodies:
            acc = accelerations.get(body.id)
            if acc is None:
                continue
            body.velocity = vec_add(body.velocity, vec_scale(acc, timestep))
            body.position = vec_add(body.position, vec_scale(body.velocity, timestep))


def circular_orbit_velocity(central_mass: float, orbital_radius: float, gravitational_constant: float) -> float:
    """
    Speed [m/s] for a circular orbit: v = sqrt(G * M / r).
    """
    if orbital_radius <= 0:
        return 0.0
    return math.sqrt(gravitational_constant * central_mass / orbital_radius)


def escape_velocity(total_mass: float, separation: float, gravitational_constant: float) -> float:
    """
    Escape speed [m/s] at a given separation: v = sqrt(2 * G * M / r).
    """
    if separation <= 0 or total_mass <= 0:
        return 0.0
    return math.sqrt(2.0 * gravitational_constant * total_mass / separation)


def orbital_period(central_mass: float, orbital_radius: float, gravitational_constant: float) -> float:
    """Period [s] of a circular orbit of the given radius."""
    v = circular_orbit_velocity(central_mass, orbital_radius, gravitational_constant)
    if v == 0.0:
        return math.inf
    return 2.0 * math.pi * orbital_radius / v
