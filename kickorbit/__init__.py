"""
Kick Orbit Simulator core package.

Physics, trail bookkeeping and session state for a two-body orbit with a
user-applied velocity kick. Rendering and controls live in ``orbit_sim.py``.
"""
