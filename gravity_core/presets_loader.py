#!/usr/bin/env python3
"""
Scene JSON loading utilities.

Scenes are stored in templates/*.json and describe the planets and satellites
to spawn into a fresh World.

Schema
======
{
  "name": "Human-friendly scene name",
  "description": "Optional description",
  "planets": [
    {"position": [0.0, 0.0], "mass": 1.49835181e16, "radius": 44.0}   # radius optional
  ],
  "satellites": [
    {"position": [0.0, 200.0], "velocity": [70.71, 0.0]},
    {"polar": {"radius": 150.0, "theta": 3.14159}, "circular": true}
  ]
}

A satellite may give "polar" instead of "position": the point at that distance
and angle (radians) from the first planet. With "circular": true its velocity is
the counter-clockwise circular orbit speed around that planet instead of
"velocity".

Malformed entries are skipped with a warning so one bad body does not discard a
whole scene.
"""
import json
import logging
import math
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import G
from .errors import InvalidBodyParameters
from .physics import circular_orbit_velocity
from .vector_utils import Vector2, polar_to_rect, vec_add

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")


@dataclass
class PlanetSpec:
  position: Vector2
  mass: float
  radius: Optional[float] = None


@dataclass
class SatelliteSpec:
  position: Vector2
  velocity: Vector2
  radius: Optional[float] = None


@dataclass
class Scene:
  name: str
  description: str = ""
  planets: List[PlanetSpec] = field(default_factory=list)
  satellites: List[SatelliteSpec] = field(default_factory=list)

  def populate(self, world) -> List[int]:
    """
    Create every body of the scene in world; returns the new ids in order.

    Entries the world rejects (negative mass, non-positive radius, ...) are
    skipped with a warning, like malformed JSON entries.
    """
    ids = []
    for p in self.planets:
      try:
        ids.append(world.create_planet(p.position[0], p.position[1], p.mass, p.radius))
      except InvalidBodyParameters as exc:
        logger.warning("skipping planet %r in scene %r: %s", p, self.name, exc)
    for s in self.satellites:
      try:
        ids.append(world.create_satellite(s.position[0], s.position[1], s.velocity[0], s.velocity[1], s.radius))
      except InvalidBodyParameters as exc:
        logger.warning("skipping satellite %r in scene %r: %s", s, self.name, exc)
    return ids


def default_scene() -> Scene:
  """The playground's opening scene: one planet, one circular and one elliptical satellite."""
  return Scene(
    name="Playground",
    description="Tune the satellites' start positions and velocities to find circular orbits.",
    planets=[PlanetSpec(position=(0.0, 0.0), mass=1.49835181e16)],
    satellites=[
      SatelliteSpec(position=(0.0, 200.0), velocity=(100 / math.sqrt(2), 0.0)),
      SatelliteSpec(position=(-150.0, 0.0), velocity=(0.0, 100.0)),
    ],
  )


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("could not read scene %s: %s", path, exc)
    return None
  if not isinstance(data, dict):
    logger.warning("scene %s is not a JSON object", path)
    return None
  return data


def _pair(v) -> Tuple[float, float]:
  return (float(v[0]), float(v[1]))


def _optional_float(v) -> Optional[float]:
  return None if v is None else float(v)


def parse_scene(data: dict, fallback_name: str = "Scene", gravitational_constant: float = G) -> Scene:
  """Build a Scene from already-decoded JSON."""
  scene = Scene(name=data.get("name") or fallback_name, description=data.get("description", ""))
  for p in data.get("planets", []):
    try:
      scene.planets.append(PlanetSpec(
        position=_pair(p["position"]),
        mass=float(p["mass"]),
        radius=_optional_float(p.get("radius")),
      ))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
      logger.warning("skipping planet %r in scene %r: %s", p, scene.name, exc)

  for s in data.get("satellites", []):
    try:
      scene.satellites.append(_parse_satellite(s, scene.planets, gravitational_constant))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
      logger.warning("skipping satellite %r in scene %r: %s", s, scene.name, exc)
  return scene


def _parse_satellite(s: dict, planets: List[PlanetSpec], gravitational_constant: float) -> SatelliteSpec:
  if "polar" in s:
    if not planets:
      raise ValueError("polar placement needs a planet")
    center = planets[0]
    r = float(s["polar"]["radius"])
    theta = float(s["polar"].get("theta", 0.0))
    position = vec_add(center.position, polar_to_rect(r, theta))
  else:
    position = _pair(s["position"])

  if s.get("circular"):
    if not planets:
      raise ValueError("circular velocity needs a planet")
    center = planets[0]
    r = math.hypot(position[0] - center.position[0], position[1] - center.position[1])
    speed = circular_orbit_velocity(center.mass, r, gravitational_constant)
    # Tangent, counter-clockwise around the planet
    theta = math.atan2(position[1] - center.position[1], position[0] - center.position[0])
    velocity = polar_to_rect(speed, theta + math.pi / 2)
  else:
    velocity = _pair(s.get("velocity", (0.0, 0.0)))
  return SatelliteSpec(position=position, velocity=velocity, radius=_optional_float(s.get("radius")))


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available scenes."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(templates_dir):
    return items
  for fn in sorted(os.listdir(templates_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(templates_dir, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_template(file_name: str, templates_dir: str = TEMPLATES_DIR, gravitational_constant: float = G) -> Optional[Scene]:
  """
  Load a scene JSON by file name. Returns None if the file cannot be read.
  """
  data = _read_json(os.path.join(templates_dir, file_name))
  if data is None:
    return None
  return parse_scene(data, os.path.splitext(file_name)[0], gravitational_constant)
