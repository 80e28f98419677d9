"""gravity_core: orbital physics and drag interaction engine for Gravity Playground."""

from .collisions import CollisionSettings
from .config import WorldConfig
from .controller import SimulationController
from .data_models import PLANET, SATELLITE, Body, BodySnapshot, DragState, WorldSnapshot
from .errors import GravityPlaygroundError, InvalidBodyParameters, InvalidBodyReference
from .world import World

__all__ = [
    "World",
    "WorldConfig",
    "CollisionSettings",
    "SimulationController",
    "Body",
    "BodySnapshot",
    "DragState",
    "WorldSnapshot",
    "PLANET",
    "SATELLITE",
    "GravityPlaygroundError",
    "InvalidBodyParameters",
    "InvalidBodyReference",
]
__version__ = "0.1.0"
