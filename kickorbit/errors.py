#!/usr/bin/env python3
"""
Error types raised by the simulation core.

None of these are fatal: the session turns them into state transitions and
the UI turns them into status messages.
"""


class OrbitSimError(Exception):
    """Base class for simulation errors."""


class DegenerateConfiguration(OrbitSimError):
    """The initial separation between the bodies is zero."""


class InvalidState(OrbitSimError):
    """An operation was attempted in a state that does not allow it."""


class ConfigurationError(OrbitSimError, ValueError):
    """A configuration value or preset file is invalid."""
