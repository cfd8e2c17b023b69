#!/usr/bin/env python3
"""
Collision detection for Kick Orbit Simulator.

The model does not resolve collisions. A pair that is too close (or exactly
coincident) is reported so the caller can halt the simulation before any
further mutation.
"""
from typing import Optional

from .data_models import Body

COLLISION = "collision"
DEGENERATE = "degenerate"


def detect_contact(primary: Body, secondary: Body, slack: float) -> Optional[str]:
    """
    Check the pair for a halting condition.

    Returns DEGENERATE when the bodies coincide, COLLISION when the separation
    is below (r1 + r2) * sqrt(slack), and None when stepping may proceed.
    """
    r = primary.position.sub(secondary.position)
    dist_sq = r.magnitude_squared()
    if dist_sq == 0:
        return DEGENERATE
    radius_sum = primary.radius + secondary.radius
    # slack scales the squared radius sum, not the radius sum
    if dist_sq < radius_sum * radius_sum * slack:
        return COLLISION
    return None
