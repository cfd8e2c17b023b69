#!/usr/bin/env python3
"""
Vector helpers for 2D operations.

Vector2 is an immutable value type; every operation returns a new vector.
"""
import math
from dataclasses import dataclass
from typing import Iterator


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


@dataclass(frozen=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y)[index]

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, s: float) -> "Vector2":
        return Vector2(self.x * s, self.y * s)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> "Vector2":
        """Unit vector in the same direction; the zero vector maps to itself."""
        l = self.magnitude()
        if l == 0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / l, self.y / l)

    @staticmethod
    def from_angle(angle_rad: float, magnitude: float) -> "Vector2":
        return Vector2(magnitude * math.cos(angle_rad), magnitude * math.sin(angle_rad))

    __add__ = add
    __sub__ = sub

    def __mul__(self, s: float) -> "Vector2":
        return self.scale(s)

    __rmul__ = __mul__
