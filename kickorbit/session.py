#!/usr/bin/env python3
"""
Simulation session: the state machine driven by the viewport and controls.

States
- Running: step() advances physics and records the trail.
- Paused: step() does nothing; kicks are rejected with InvalidState.

Transitions
- toggle_pause() flips Running/Paused with no guard.
- A halting step (near-collision or coincident bodies) pauses the session.
  Resuming is allowed but the next step halts again since the geometry has not
  changed; only reset() recovers.
- reset() re-initializes bodies, trail and kick cue from the config. A zero
  separation leaves the session paused with configuration_error set.

Threading
- The viewport thread steps the session while the UI thread kicks, resets and
  toggles it. All access goes through ``lock`` (re-entrant).
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

from .collisions import DEGENERATE
from .data_models import Body, SimulationConfig
from .errors import DegenerateConfiguration, InvalidState
from .indicator import KickIndicator
from .physics import OrbitalStateModel, StepOutcome
from .trail import TrailBuffer
from .vector_utils import Vector2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KickApplied:
    delta_v: Vector2
    velocity: Vector2


class SimulationSession:
    def __init__(self, config: Optional[SimulationConfig] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.lock = threading.RLock()
        self.config = config if config is not None else SimulationConfig()
        self.trail = TrailBuffer(self.config.trail_capacity)
        self.kick_indicator = KickIndicator(self.config.kick_indicator_duration, clock)
        self.model: Optional[OrbitalStateModel] = None
        self.paused = False
        self.halt_reason: Optional[str] = None
        self.configuration_error: Optional[DegenerateConfiguration] = None
        self.reset()

    def reset(self, config: Optional[SimulationConfig] = None) -> Optional[DegenerateConfiguration]:
        """
        Re-initialize the session, optionally with a new config.

        Returns the DegenerateConfiguration error when the separation is zero,
        in which case the session starts paused; otherwise None.
        """
        with self.lock:
            logger.info("Setting up initial conditions...")
            if config is not None:
                self.config = config
                self.trail = TrailBuffer(config.trail_capacity)
                self.kick_indicator = KickIndicator(config.kick_indicator_duration, self.kick_indicator.clock)
            self.trail.clear()
            self.kick_indicator.clear()
            self.halt_reason = None
            self.configuration_error = None
            self.paused = False
            try:
                self.model = OrbitalStateModel.from_config(self.config)
            except DegenerateConfiguration as exc:
                logger.error("%s", exc)
                self.model = _coincident_model(self.config)
                self.configuration_error = exc
                self.paused = True
            return self.configuration_error

    def step(self) -> Optional[StepOutcome]:
        """
        Advance one timestep when running.

        Returns None while paused (nothing advanced), otherwise the StepOutcome.
        """
        with self.lock:
            if self.paused:
                return None
            outcome = self.model.step(self.config.timestep)
            if outcome.halted:
                if outcome.reason == DEGENERATE:
                    logger.error("Distance between bodies is zero, stopping physics update.")
                else:
                    logger.warning("Collision detected or bodies too close!")
                self.paused = True
                self.halt_reason = outcome.reason
            else:
                self.trail.push(outcome.position)
            return outcome

    def apply_kick(self, angle_degrees: float, magnitude: float) -> KickApplied:
        """
        Kick the secondary, clear its trail and arm the kick cue.

        Raises:
            InvalidState: if the session is paused
        """
        with self.lock:
            if self.paused:
                raise InvalidState("Cannot apply a kick while paused. Resume first.")
            delta_v = self.model.apply_kick(angle_degrees, magnitude)
            self.trail.clear()
            self.kick_indicator.arm(delta_v.normalize())
            velocity = self.model.secondary.velocity
            logger.info(
                "Kick applied: angle=%s deg, mag=%s, new vel=(%.2f, %.2f)",
                angle_degrees, magnitude, velocity.x, velocity.y,
            )
            return KickApplied(delta_v, velocity)

    def toggle_pause(self) -> bool:
        with self.lock:
            self.paused = not self.paused
            logger.info("Simulation %s", "Paused" if self.paused else "Resumed")
            return self.paused

    @property
    def primary(self) -> Body:
        with self.lock:
            return self.model.primary.copy()

    @property
    def secondary(self) -> Body:
        with self.lock:
            return self.model.secondary.copy()

    @property
    def trail_length(self) -> int:
        with self.lock:
            return len(self.trail)

    def trail_points(self) -> Iterator[Vector2]:
        """Iterate over a snapshot of the trail, oldest first."""
        with self.lock:
            points = self.trail.points()
        return iter(points)

    def kick_indicator_state(self) -> Tuple[Optional[Vector2], bool]:
        """(direction of last kick, whether the cue is still showing)."""
        with self.lock:
            return self.kick_indicator.direction, self.kick_indicator.is_active()

    def specific_orbital_energy(self) -> float:
        with self.lock:
            return self.model.specific_orbital_energy()

    def escape_speed(self) -> float:
        with self.lock:
            return self.model.escape_speed()


def _coincident_model(config: SimulationConfig) -> OrbitalStateModel:
    # Bodies stay where the zero separation put them, secondary at rest.
    primary = Body("Primary", config.primary_mass, config.primary_radius, position=config.origin)
    secondary = Body("Secondary", config.secondary_mass, config.secondary_radius, position=config.origin)
    return OrbitalStateModel(config.gravitational_constant, primary, secondary, config.collision_slack)


def create_session(config: Optional[SimulationConfig] = None,
                   clock: Callable[[], float] = time.monotonic) -> SimulationSession:
    return SimulationSession(config, clock)
