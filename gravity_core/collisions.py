#!/usr/bin/env python3
"""
Collision handling for Gravity Playground.

Supports two modes:
- Satellite: a satellite overlapping a planet has its velocity zeroed
- AnyDynamic: any dynamic body overlapping any other body has its velocity zeroed

The response is a safety clamp, not a physical bounce: it stops a satellite from
tunnelling through or orbiting inside a planet after a bad trajectory. Held bodies
are not dynamic, so they never respond, but they still count as obstacles.

Contacts are processed in ascending body id order and zeroing is idempotent, so a
body touching several others in one tick ends up in the same state.
"""
import logging
from typing import List, Optional, Tuple

from .data_models import Body
from .vector_utils import ZERO, vec_distance

logger = logging.getLogger(__name__)

COLLISION_MODES = ("Satellite", "AnyDynamic")


class CollisionSettings:
    """Container for collision-related settings."""
    def __init__(self, enable: bool = True, mode: str = "Satellite"):
        self.enable = enable
        self.mode = mode  # "Satellite" | "AnyDynamic"

    def __repr__(self) -> str:
        return f"CollisionSettings(enable={self.enable!r}, mode={self.mode!r})"


def in_contact(a: Body, b: Body) -> bool:
    """True when the two bodies' circles overlap (touching edges do not count)."""
    return vec_distance(a.position, b.position) < a.radius + b.radius


def _responds(body: Body) -> bool:
    return body.is_dynamic and body.is_satellite


def find_contacts(bodies: List[Body], settings: CollisionSettings) -> List[Tuple[int, int]]:
    """
    Return overlapping (id, id) pairs that trigger a response, lower id first.
    """
    ordered = sorted(bodies, key=lambda b: b.id)
    contacts: List[Tuple[int, int]] = []
    n = len(ordered)
    for i in range(n):
        bi = ordered[i]
        for j in range(i + 1, n):
            bj = ordered[j]
            if settings.mode == "Satellite":
                # Only planet/satellite pairs, and the satellite must be free to respond
                if bi.kind == bj.kind:
                    continue
                satellite = bi if bi.is_satellite else bj
                if not _responds(satellite):
                    continue
            elif not (_responds(bi) or _responds(bj)):
                continue
            if in_contact(bi, bj):
                contacts.append((bi.id, bj.id))
    return contacts


def handle_collisions(bodies: List[Body], settings: CollisionSettings) -> Optional[str]:
    """
    Detect contacts and zero the velocity of every responding body.

    Returns a human-readable message if a collision occurred.
    """
    if not settings.enable or len(bodies) < 2:
        return None

    by_id = {b.id: b for b in bodies}
    last_msg: Optional[str] = None
    for a_id, b_id in find_contacts(bodies, settings):
        for body_id in (a_id, b_id):
            body = by_id[body_id]
            if not _responds(body):
                continue
            if body.velocity != ZERO:
                logger.debug("contact %d/%d: stopping body %d", a_id, b_id, body_id)
            body.velocity = ZERO
        last_msg = f"Contact: body {a_id} / body {b_id}"
    return last_msg
