#!/usr/bin/env python3
"""
Bounded position history of the secondary body, kept for rendering only.
"""
from collections import deque
from typing import Deque, Iterator, Optional, Tuple

from .errors import ConfigurationError
from .vector_utils import Vector2


class TrailBuffer:
    """
    FIFO of recent positions, at most ``capacity`` long.

    When full, pushing evicts the oldest point.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(f"trail capacity must be a positive integer, got {capacity!r}")
        self._points: Deque[Vector2] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def push(self, point: Vector2) -> None:
        self._points.append(point)

    def clear(self) -> None:
        self._points.clear()

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Vector2]:
        return iter(self._points)

    def points(self) -> Tuple[Vector2, ...]:
        """Snapshot of the trail, oldest first."""
        return tuple(self._points)

    @property
    def latest(self) -> Optional[Vector2]:
        return self._points[-1] if self._points else None
