#!/usr/bin/env python3
"""
Shared constants for Kick Orbit Simulator.

Values are tuned for a pleasing fixed-timestep animation in canvas pixels,
not for physical accuracy. Keeping them in one place keeps the defaults of
SimulationConfig, the presets and the UI consistent.
"""

# Physics (simulation units: pixels, seconds, arbitrary mass)
SIM_G = 3700.0
DT = 0.01
PRIMARY_MASS = 1000.0
SECONDARY_MASS = 1.0
PRIMARY_RADIUS = 20.0
SECONDARY_RADIUS = 5.0
INITIAL_SEPARATION = 150.0
COLLISION_SLACK = 0.8  # fraction of (r1 + r2)^2 below which squared separation halts

# Trail
MAX_TRAIL_LENGTH = 1000

# Kick controls
KICK_ANGLE_MIN = 0.0
KICK_ANGLE_MAX = 360.0
KICK_ANGLE_DEFAULT = 0.0
KICK_MAGNITUDE_MIN = 0.0
KICK_MAGNITUDE_MAX = 50.0
KICK_MAGNITUDE_STEP = 0.5
KICK_MAGNITUDE_DEFAULT = 5.0

# Kick arrow cue
KICK_ARROW_DURATION = 1.0  # seconds
KICK_ARROW_LENGTH = 40  # pixels

# Rendering (viewport)
VIEW_WIDTH = 800
VIEW_HEIGHT = 600
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
PRIMARY_COLOR = (255, 255, 0)
SECONDARY_COLOR = (0, 191, 255)
INITIAL_ORBIT_COLOR = (128, 128, 128)
TRAIL_COLOR = (0, 191, 255)
KICK_ARROW_COLOR = (255, 165, 0)
HUD_COLOR = (200, 200, 200)
