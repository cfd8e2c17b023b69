#!/usr/bin/env python3
"""
Kick Orbit Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Holds one SimulationSession that owns both bodies, the trail and the kick cue;
  the session serializes access with its re-entrant lock.
- Provides a Dear PyGui control window to pick a preset, set the kick angle and
  magnitude, apply a kick, pause/resume and reset.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  stepping physics once per frame, and drawing.
- The UI class runs in the main thread via Dear PyGui. It kicks, resets and toggles
  the session and shows status messages on a periodic frame callback.

Units and conventions
- Simulation units are canvas pixels and seconds; the primary sits at the canvas center.
- Colors are RGB tuples in 0..255.

Running
1) Install the project: `pip install -e .`
2) Run this module: `python orbit_sim.py [--preset wide_orbit.json] [--log-level DEBUG]`

Controls
- Space (either window) toggles pause. Kicks are rejected while paused.
- Closing either window shuts down the application.
"""

import argparse
import logging
import math
import os
import threading
from typing import List, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from kickorbit import constants
from kickorbit.errors import ConfigurationError, InvalidState
from kickorbit.presets_loader import list_templates, load_config_file, load_template
from kickorbit.session import SimulationSession
from kickorbit.vector_utils import clamp

logger = logging.getLogger("orbit_sim")

SAFE_COORD_LIMIT = 30000


# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: steps the session once per frame and draws the orbit guide,
    both bodies, the trail, the kick arrow and a HUD line.
    """
    def __init__(self, session: SimulationSession):
        super().__init__(daemon=True)
        self.session = session
        self.surface = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Kick Orbit Simulator - Viewport")
        self.surface = pygame.display.set_mode((constants.VIEW_WIDTH, constants.VIEW_HEIGHT))
        self.clock = pygame.time.Clock()

        while self.running:
            self.handle_events()
            self.session.step()
            self.draw()
            self.clock.tick(constants.FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                self.session.toggle_pause()

    def draw(self):
        surf = self.surface
        surf.fill(constants.BACKGROUND_COLOR)

        # Copy a snapshot for consistency during draw
        with self.session.lock:
            config = self.session.config
            primary = self.session.primary
            secondary = self.session.secondary
            trail = list(self.session.trail_points())
            arrow_dir, arrow_active = self.session.kick_indicator_state()
            paused = self.session.paused
            halt_reason = self.session.halt_reason
            energy = self.session.specific_orbital_energy()
            v_esc = self.session.escape_speed()

        draw_dashed_circle(surf, primary.position, abs(config.initial_separation),
                           constants.INITIAL_ORBIT_COLOR)

        for body, color in ((primary, constants.PRIMARY_COLOR), (secondary, constants.SECONDARY_COLOR)):
            center = _safe_point(body.position)
            if center:
                r = max(1, int(body.radius))
                gfxdraw.filled_circle(surf, center[0], center[1], r, color)
                gfxdraw.aacircle(surf, center[0], center[1], r, color)

        if len(trail) > 1:
            pts = [p for p in (_safe_point(t) for t in trail) if p]
            if len(pts) > 1:
                pygame.draw.aalines(surf, constants.TRAIL_COLOR, False, pts)

        if arrow_active and arrow_dir is not None:
            draw_arrow(surf, secondary.position, arrow_dir, constants.KICK_ARROW_LENGTH,
                       constants.KICK_ARROW_COLOR, 3)

        if halt_reason:
            state = f"Halted ({halt_reason}) - press Reset"
        else:
            state = "Paused" if paused else "Running"
        speed = secondary.velocity.magnitude()
        draw_text(surf, "Space: Pause/Resume | Kick and Reset in the Controls window", 10, 10, constants.HUD_COLOR)
        draw_text(surf, f"[{state}]  |v|={speed:.2f}  v_esc={v_esc:.2f}  E={energy:.1f}  trail={len(trail)}",
                  10, 30, constants.HUD_COLOR)

        pygame.display.flip()


_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    if not all(math.isfinite(c) for c in pt):
        return None
    x, y = int(pt[0]), int(pt[1])
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def draw_dashed_circle(surface, center, radius: float, color, dash_px: float = 4.0):
    if radius <= 0:
        return
    # Equal dash and gap lengths along the circumference
    n = max(2, int(2 * math.pi * radius / (2 * dash_px)))
    step = 2 * math.pi / n
    for i in range(n):
        a0 = i * step
        a1 = a0 + step / 2
        p0 = _safe_point((center[0] + radius * math.cos(a0), center[1] + radius * math.sin(a0)))
        p1 = _safe_point((center[0] + radius * math.cos(a1), center[1] + radius * math.sin(a1)))
        if p0 and p1:
            pygame.draw.line(surface, color, p0, p1, 1)


def arrow_points(origin, direction, length: float) -> List[Tuple[float, float]]:
    """Tail, tip and the two barb ends of an arrow of the given length."""
    to_x = origin[0] + direction[0] * length
    to_y = origin[1] + direction[1] * length
    head = min(length * 0.3, 10)
    ang = math.atan2(to_y - origin[1], to_x - origin[0])
    left = (to_x - head * math.cos(ang - math.pi / 6), to_y - head * math.sin(ang - math.pi / 6))
    right = (to_x - head * math.cos(ang + math.pi / 6), to_y - head * math.sin(ang + math.pi / 6))
    return [(origin[0], origin[1]), (to_x, to_y), left, right]


def draw_arrow(surface, origin, direction, length, color, width=2):
    tail, tip, left, right = (_safe_point(p) for p in arrow_points(origin, direction, length))
    if tail is None or tip is None:
        return
    pygame.draw.line(surface, color, tail, tip, width)
    if left and right:
        pygame.draw.line(surface, color, tip, left, width)
        pygame.draw.line(surface, color, tip, right, width)


# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: preset picker, kick controls, pause and reset.
    """
    def __init__(self, session: SimulationSession, renderer: PygameRenderer):
        self.session = session
        self.renderer = renderer

        self.angle_id = None
        self.magnitude_id = None
        self.pause_button_id = None
        self.status_msg_id = None
        self._template_map = {}
        self._last_halt_reason = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_session)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Kick Orbit Simulator - Controls', width=420, height=300)

        with dpg.window(label="Controls", width=400, height=280, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                for fn, display in list_templates():
                    self._template_map[display] = fn
                items = list(self._template_map.keys())
                dpg.add_combo(items, default_value=items[0] if items else "", width=200, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_template(dpg.get_value("preset_combo")))

            dpg.add_separator()
            self.angle_id = dpg.add_slider_float(
                label="Kick angle (deg)",
                default_value=constants.KICK_ANGLE_DEFAULT,
                min_value=constants.KICK_ANGLE_MIN,
                max_value=constants.KICK_ANGLE_MAX,
                format="%.0f",
            )
            self.magnitude_id = dpg.add_slider_float(
                label="Kick magnitude",
                default_value=constants.KICK_MAGNITUDE_DEFAULT,
                min_value=constants.KICK_MAGNITUDE_MIN,
                max_value=constants.KICK_MAGNITUDE_MAX,
                format="%.1f",
            )
            with dpg.group(horizontal=True):
                dpg.add_button(label="Apply Kick", callback=self._apply_kick)
                self.pause_button_id = dpg.add_button(label="Pause", callback=self._toggle_pause)
                dpg.add_button(label="Reset", callback=lambda: self._reset())

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("", wrap=380)

        with dpg.handler_registry():
            dpg.add_key_press_handler(dpg.mvKey_Spacebar, callback=lambda s, a: self._toggle_pause())

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _kick_values(self) -> Tuple[float, float]:
        angle = clamp(dpg.get_value(self.angle_id), constants.KICK_ANGLE_MIN, constants.KICK_ANGLE_MAX)
        magnitude = clamp(dpg.get_value(self.magnitude_id), constants.KICK_MAGNITUDE_MIN,
                          constants.KICK_MAGNITUDE_MAX)
        # Snap to the slider step
        magnitude = round(magnitude / constants.KICK_MAGNITUDE_STEP) * constants.KICK_MAGNITUDE_STEP
        return angle, magnitude

    def _apply_kick(self):
        angle, magnitude = self._kick_values()
        try:
            result = self.session.apply_kick(angle, magnitude)
        except InvalidState as exc:
            self._set_error(str(exc))
            return
        v = result.velocity
        self._set_status(f"Kick {magnitude:.1f} at {angle:.0f} deg: v=({v.x:.2f}, {v.y:.2f})")

    def _toggle_pause(self):
        paused = self.session.toggle_pause()
        dpg.configure_item(self.pause_button_id, label="Resume" if paused else "Pause")
        self._set_status(f"Simulation {'Paused' if paused else 'Resumed'}.")

    def _reset(self, config=None):
        error = self.session.reset(config)
        self._last_halt_reason = None
        dpg.configure_item(self.pause_button_id, label="Resume" if self.session.paused else "Pause")
        if error is not None:
            self._set_error(f"{error}. Simulation paused; load a preset with a non-zero separation.")
        else:
            self._set_status("Simulation reset.")

    def load_template(self, name: str):
        fn = self._template_map.get(name)
        if fn is None:
            self._set_error(f"Unknown preset: {name}")
            return
        try:
            config, display = load_template(fn)
        except ConfigurationError as exc:
            self._set_error(str(exc))
            return
        self._reset(config)
        if self.session.configuration_error is None:
            self._set_status(f"Loaded preset: {display}")

    def _sync_ui_with_session(self):
        """Periodic update: report halts, mirror pause state, stop when the viewport closes."""
        if not self.renderer.is_alive():
            dpg.stop_dearpygui()
            return
        with self.session.lock:
            halt_reason = self.session.halt_reason
            paused = self.session.paused
        if halt_reason and halt_reason != self._last_halt_reason:
            self._set_error(f"Simulation halted: {halt_reason}. Press Reset to start over.")
        self._last_halt_reason = halt_reason
        dpg.configure_item(self.pause_button_id, label="Resume" if paused else "Pause")
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================

def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Kick Orbit Simulator - two-body orbit with velocity kicks')
    parser.add_argument(
        '--preset',
        '-p',
        type=str,
        metavar='FILE',
        help='Preset JSON: a bundled preset file name or a path',
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)',
    )
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = None
    if args.preset:
        try:
            if os.path.exists(args.preset):
                config, display = load_config_file(args.preset)
            else:
                config, display = load_template(args.preset)
        except ConfigurationError as exc:
            raise SystemExit(f"Error: {exc}")
        logger.info("Using preset: %s", display)

    session = SimulationSession(config)

    renderer = PygameRenderer(session)
    renderer.start()

    UI(session, renderer)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
