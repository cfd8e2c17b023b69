#!/usr/bin/env python3
"""
Fading kick-arrow cue.

Pure view state: it records the direction of the last kick and when the cue
expires. Physics never reads it.
"""
import time
from typing import Callable, Optional

from .vector_utils import Vector2


class KickIndicator:
    def __init__(self, duration: float, clock: Callable[[], float] = time.monotonic):
        self.duration = float(duration)
        self.clock = clock
        self.direction: Optional[Vector2] = None
        self.end_time = 0.0

    def arm(self, direction: Vector2) -> None:
        self.direction = direction
        self.end_time = self.clock() + self.duration

    def clear(self) -> None:
        self.direction = None
        self.end_time = 0.0

    def is_active(self) -> bool:
        return self.direction is not None and self.clock() < self.end_time
