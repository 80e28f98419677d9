#!/usr/bin/env python3
"""
Drag interaction for Gravity Playground.

A body picked up by the pointer leaves physics control until it is released.
Two drag models are available:

- "target": the pointer only moves a target point; every tick the body closes a
  fixed fraction (drag_speed) of the gap to it. On release the unclosed gap is
  turned into a throw velocity: (target - position) * release_factor.
- "manual": the body follows the raw pointer delta on each move event and keeps
  the velocity it had before the drag.

Only one body can be held at a time. A second pointer-down while a body is held
is ignored.
"""
import logging
from typing import Optional

from .data_models import Body, DragState
from .vector_utils import Vector2, vec_add, vec_scale, vec_sub

logger = logging.getLogger(__name__)


class DragController:
    """
    Idle/Held state machine for the single pointer.

    The controller only remembers which body is held; the per-body hold state
    lives on Body.drag so snapshots can report it.
    """

    def __init__(self, mode: str = "target", drag_speed: float = 0.05, release_factor: float = 2.0):
        self.mode = mode
        self.drag_speed = float(drag_speed)
        self.release_factor = float(release_factor)
        self.held: Optional[Body] = None

    @property
    def is_holding(self) -> bool:
        return self.held is not None

    def grab(self, body: Body, pointer: Vector2) -> bool:
        """
        Idle -> Held. Returns False when another body is already held.
        """
        if self.held is not None:
            logger.debug("ignoring grab of body %d; body %d is already held", body.id, self.held.id)
            return False
        body.drag = DragState(
            target_position=body.position,
            was_dynamic_before_drag=body.is_dynamic,
            last_pointer=pointer,
        )
        body.is_dynamic = False
        self.held = body
        logger.debug("grabbed body %d at %s", body.id, body.position)
        return True

    def retarget(self, pointer: Vector2) -> None:
        """Held -> Held. No-op while idle."""
        body = self.held
        if body is None:
            return
        state = body.drag
        if self.mode == "manual":
            body.position = vec_add(body.position, vec_sub(pointer, state.last_pointer))
        state.target_position = pointer
        state.last_pointer = pointer

    def apply(self) -> None:
        """Per-tick effect while Held: move the body toward its target."""
        body = self.held
        if body is None or self.mode != "target":
            return
        gap = vec_sub(body.drag.target_position, body.position)
        body.position = vec_add(body.position, vec_scale(gap, self.drag_speed))

    def release(self) -> Optional[Body]:
        """
        Held -> Idle. Restores is_dynamic and, in target mode, assigns the
        throw velocity. Returns the released body, or None while idle.
        """
        body = self.held
        if body is None:
            return None
        state = body.drag
        body.is_dynamic = state.was_dynamic_before_drag
        if self.mode == "target" and body.is_satellite:
            gap = vec_sub(state.target_position, body.position)
            body.velocity = vec_scale(gap, self.release_factor)
        body.drag = None
        self.held = None
        logger.debug("released body %d with velocity %s", body.id, body.velocity)
        return body
