#!/usr/bin/env python3
"""
General utilities for Gravity Playground.
"""
from typing import Optional


def try_float(val) -> Optional[float]:
    """Parse user input as a float; None when it is not a number."""
    try:
        return float(val)
    except (TypeError, ValueError):
        return None
