#!/usr/bin/env python3
"""
Exceptions raised by the Gravity Playground core.

Degenerate planet-satellite distances are not represented here: the field
engine clamps them locally and never surfaces them to the caller.
"""


class GravityPlaygroundError(Exception):
    """Base class for errors raised by gravity_core."""


class InvalidBodyReference(GravityPlaygroundError, KeyError):
    """A body id that was never issued by the World."""

    def __init__(self, body_id):
        super().__init__(body_id)
        self.body_id = body_id

    def __str__(self) -> str:
        return f"no body with id {self.body_id!r}"


class InvalidBodyParameters(GravityPlaygroundError, ValueError):
    """Malformed construction input such as a negative mass or radius."""
