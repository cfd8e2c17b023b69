#!/usr/bin/env python3
"""
Data models for Kick Orbit Simulator.

This module defines the Body dataclass shared between physics, rendering, and
UI, and the SimulationConfig that fixes every session-wide constant.

Units and usage
- Positions are in canvas pixels, velocities in pixels per second, radius in pixels.
- Radius is a collision threshold only; the renderer uses it for disc size.
- Masses, radii, G and the timestep are fixed for the lifetime of a session.
"""
import dataclasses
import math
from dataclasses import dataclass, field
from typing import Tuple

from . import constants
from .errors import ConfigurationError
from .vector_utils import Vector2


@dataclass
class Body:
    """
    Represents one of the two bodies in the simulation.

    Fields:
    - name: Identifier for the body
    - mass: Mass in simulation units (positive)
    - radius: Collision radius in pixels (positive)
    - position: 2D position in pixels
    - velocity: 2D velocity in pixels/second
    - color: RGB tuple used for rendering
    """
    name: str
    mass: float
    radius: float
    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)
    color: Tuple[int, int, int] = (200, 200, 255)

    def copy(self) -> "Body":
        return dataclasses.replace(self)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Session-wide constants. Validated on construction.

    initial_separation is deliberately not validated here: a zero separation
    is reported as DegenerateConfiguration when the session initializes.
    """
    gravitational_constant: float = constants.SIM_G
    primary_mass: float = constants.PRIMARY_MASS
    secondary_mass: float = constants.SECONDARY_MASS
    primary_radius: float = constants.PRIMARY_RADIUS
    secondary_radius: float = constants.SECONDARY_RADIUS
    initial_separation: float = constants.INITIAL_SEPARATION
    timestep: float = constants.DT
    trail_capacity: int = constants.MAX_TRAIL_LENGTH
    collision_slack: float = constants.COLLISION_SLACK
    origin: Vector2 = Vector2(constants.VIEW_WIDTH / 2, constants.VIEW_HEIGHT / 2)
    kick_indicator_duration: float = constants.KICK_ARROW_DURATION

    def __post_init__(self):
        positive = (
            "gravitational_constant",
            "primary_mass",
            "secondary_mass",
            "primary_radius",
            "secondary_radius",
            "timestep",
        )
        for name in positive:
            value = getattr(self, name)
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive, got {value!r}")
        if isinstance(self.trail_capacity, bool) or not isinstance(self.trail_capacity, int) or self.trail_capacity <= 0:
            raise ConfigurationError(f"trail_capacity must be a positive integer, got {self.trail_capacity!r}")
        if not 0 < self.collision_slack <= 1:
            raise ConfigurationError(f"collision_slack must be in (0, 1], got {self.collision_slack!r}")
        if self.kick_indicator_duration < 0:
            raise ConfigurationError("kick_indicator_duration must not be negative")

    @property
    def collision_distance(self) -> float:
        """Separation below which stepping halts: (r1 + r2) * sqrt(k)."""
        return (self.primary_radius + self.secondary_radius) * math.sqrt(self.collision_slack)

    def replace(self, **overrides) -> "SimulationConfig":
        return dataclasses.replace(self, **overrides)
