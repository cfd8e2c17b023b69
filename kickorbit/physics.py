#!/usr/bin/env python3
"""
Core Physics Engine for Kick Orbit Simulator

Responsibilities
- Hold the primary and secondary bodies and place them on a circular orbit.
- Advance the secondary by one fixed timestep with semi-implicit (symplectic) Euler.
- Detect near-collision and coincident bodies and report them as a halt.
- Apply a polar velocity kick to the secondary.

Model
- The primary is a fixed attractor: it never moves, even though its mass is finite.
  This is a simplification of two-body motion, not center-of-mass mechanics.
- Gravity on the secondary: F = G * m1 * m2 / |r|^2 directed toward the primary.

Numerical notes
- Velocity is updated before position, and the new velocity is used for the
  position update. Unlike explicit Euler this keeps orbital energy bounded over
  long runs instead of letting it drift outward.
- All arithmetic is double precision; angles are taken in degrees.

Threading
- The model is not synchronized. SimulationSession owns it and guards it with a lock.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import collisions
from .data_models import Body, SimulationConfig
from .errors import DegenerateConfiguration
from .vector_utils import Vector2

logger = logging.getLogger(__name__)


class StepStatus(Enum):
    CONTINUE = "continue"
    HALT = "halt"


@dataclass(frozen=True)
class StepOutcome:
    """Result of one integration step: the new position, or a halt with its reason."""
    status: StepStatus
    position: Optional[Vector2] = None
    reason: Optional[str] = None

    @classmethod
    def proceed(cls, position: Vector2) -> "StepOutcome":
        return cls(StepStatus.CONTINUE, position=position)

    @classmethod
    def halt(cls, reason: str) -> "StepOutcome":
        return cls(StepStatus.HALT, reason=reason)

    @property
    def halted(self) -> bool:
        return self.status is StepStatus.HALT


class OrbitalStateModel:
    """
    Two-body gravitational model with a fixed primary.

    The gravitational acceleration on the secondary is:
    a = G * m1 / |r|^2 * r_hat

    where r points from the secondary to the primary.
    """

    def __init__(self, gravitational_constant: float, primary: Body, secondary: Body,
                 collision_slack: float = 0.8):
        self.G = float(gravitational_constant)
        self.primary = primary
        self.secondary = secondary
        self.collision_slack = float(collision_slack)

    @classmethod
    def initialize(cls, gravitational_constant: float, primary_mass: float, secondary_mass: float,
                   primary_radius: float, secondary_radius: float, initial_separation: float,
                   origin: Vector2 = Vector2(0.0, 0.0), collision_slack: float = 0.8) -> "OrbitalStateModel":
        """
        Place the bodies on a circular orbit.

        The primary sits at origin with zero velocity; the secondary sits at
        origin + (D, 0) and moves at the circular speed sqrt(G * m1 / |D|),
        perpendicular to the separation and always in the same rotational sense.

        Args:
            gravitational_constant: G in simulation units
            primary_mass: Mass of the fixed attractor
            secondary_mass: Mass of the orbiting body
            primary_radius: Collision radius of the primary
            secondary_radius: Collision radius of the secondary
            initial_separation: Distance D along the x axis
            origin: Position of the primary
            collision_slack: Fraction k of (r1 + r2)^2 below which the squared separation halts stepping

        Raises:
            DegenerateConfiguration: if the separation is zero
        """
        primary = Body("Primary", float(primary_mass), float(primary_radius), position=origin)
        secondary = Body("Secondary", float(secondary_mass), float(secondary_radius),
                         position=origin.add(Vector2(float(initial_separation), 0.0)))
        model = cls(gravitational_constant, primary, secondary, collision_slack)

        r_vec = secondary.position.sub(primary.position)
        r_mag = r_vec.magnitude()
        if r_mag == 0:
            raise DegenerateConfiguration("Initial distance between primary and secondary is zero")

        speed = circular_orbit_velocity(model.G, primary.mass, r_mag)
        u = r_vec.normalize()
        secondary.velocity = Vector2(u.y, -u.x).scale(speed)
        logger.info(
            "Secondary initialized: pos=(%.2f, %.2f), vel=(%.2f, %.2f)",
            secondary.position.x, secondary.position.y, secondary.velocity.x, secondary.velocity.y,
        )
        return model

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "OrbitalStateModel":
        return cls.initialize(
            config.gravitational_constant,
            config.primary_mass,
            config.secondary_mass,
            config.primary_radius,
            config.secondary_radius,
            config.initial_separation,
            origin=config.origin,
            collision_slack=config.collision_slack,
        )

    def separation(self) -> Vector2:
        """Vector from the secondary to the primary."""
        return self.primary.position.sub(self.secondary.position)

    def acceleration(self) -> Vector2:
        """Gravitational acceleration of the secondary at its current position."""
        r = self.separation()
        dist_sq = r.magnitude_squared()
        if dist_sq == 0:
            return Vector2(0.0, 0.0)
        force_mag = self.G * self.primary.mass * self.secondary.mass / dist_sq
        return r.normalize().scale(force_mag / self.secondary.mass)

    def step(self, dt: float) -> StepOutcome:
        """
        Advance the secondary by one semi-implicit Euler step.

        Args:
            dt: Time step size in seconds

        Returns:
            StepOutcome.proceed(new_position), or StepOutcome.halt(reason) when the
            bodies are coincident or closer than the collision threshold. A halt
            leaves position and velocity untouched.
        """
        contact = collisions.detect_contact(self.primary, self.secondary, self.collision_slack)
        if contact is not None:
            return StepOutcome.halt(contact)

        a = self.acceleration()
        self.secondary.velocity = self.secondary.velocity.add(a.scale(dt))
        self.secondary.position = self.secondary.position.add(self.secondary.velocity.scale(dt))
        return StepOutcome.proceed(self.secondary.position)

    def apply_kick(self, angle_degrees: float, magnitude: float) -> Vector2:
        """
        Add a polar delta-velocity to the secondary. No clamping is applied.

        Returns:
            The delta-velocity that was added.
        """
        delta_v = Vector2.from_angle(math.radians(angle_degrees), magnitude)
        self.secondary.velocity = self.secondary.velocity.add(delta_v)
        return delta_v

    def specific_orbital_energy(self) -> float:
        """
        Energy per unit mass of the secondary: v^2 / 2 - G * m1 / |r|.

        Negative for bound orbits. Returns -inf when the bodies coincide.
        """
        r = self.separation().magnitude()
        v = self.secondary.velocity.magnitude()
        if r == 0:
            return float("-inf")
        return 0.5 * v * v - self.G * self.primary.mass / r

    def escape_speed(self) -> float:
        """Escape speed from the primary at the current separation."""
        return escape_velocity(self.G, self.primary.mass, self.separation().magnitude())


def circular_orbit_velocity(G: float, central_mass: float, orbital_radius: float) -> float:
    """
    Calculate the speed needed for a circular orbit.

    For a circular orbit, the gravitational force provides exactly the
    centripetal force needed. This gives us:
    G * M / r = v^2 / r
    Therefore: v = sqrt(G * M / r)
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(G * central_mass / orbital_radius)


def escape_velocity(G: float, central_mass: float, separation: float) -> float:
    """
    Calculate the escape speed at a given separation: sqrt(2 * G * M / r).
    """
    if separation <= 0 or central_mass <= 0:
        return 0.0

    return math.sqrt(2.0 * G * central_mass / separation)
