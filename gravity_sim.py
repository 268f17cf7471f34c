#!/usr/bin/env python3
"""
Gravity Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Both talk to a shared SimulationController that owns the cluster of bodies and the
  simulation settings; all access is guarded by its re-entrant lock.
- Offers a headless mode that runs the integrator without any window.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  stepping physics, and drawing. Stepping happens under the controller lock, and drawing works
  from a snapshot taken under the same lock.
- The UI class runs in the main thread via Dear PyGui. Its callbacks call controller methods,
  which are lock-protected.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python gravity_sim.py` (or `gravity-sim`), optionally with
   `--scenario "Binary Stars"`; `--headless --steps 20000` runs without windows.
"""

import argparse
import logging
import sys
import threading
import time
from typing import List, Optional, Sequence

# GUI and Rendering libs
import pygame
import dearpygui.dearpygui as dpg

from gravity_core.camera import Camera2D, safe_point
from gravity_core.constants import (
    BACKGROUND_COLOR,
    BODY_BORDER_COLOR,
    DEFAULT_SPEED_LEVEL,
    HUD_TEXT_COLOR,
    MAX_SPEED_LEVEL,
    MIN_SPEED_LEVEL,
    STEPS_PER_FRAME,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from gravity_core.controller import SimulationController
from gravity_core.scenario_loader import SCENARIOS_DIR, ScenarioError, list_scenarios

logger = logging.getLogger("gravity_sim")

# ============================================================
# Pygame Renderer Thread
# ============================================================


class PygameRenderer(threading.Thread):
    """
    Pygame loop: steps the simulation and draws bodies and their paths.
    Handles camera panning and zoom.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.font = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.running = True
        self._frame_requested = threading.Event()

    def request_auto_frame(self, *_args):
        """Ask the render loop to fit all bodies into view on its next frame.
        Safe to call from the UI thread; the camera itself is only touched by run()."""
        self._frame_requested.set()

    def apply_pending_requests(self):
        if self._frame_requested.is_set():
            self._frame_requested.clear()
            self.auto_frame_camera()

    def auto_frame_camera(self):
        """Adjust camera to fit all bodies into view with margin."""
        self.camera.frame(b.position for b in self.sim.snapshot())

    def run(self):
        pygame.init()
        pygame.display.set_caption("Gravity Simulator - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)

        while self.running and self.sim.running:
            self.handle_events()
            self.apply_pending_requests()

            with self.sim.lock:
                playing = self.sim.playing
            if playing:
                self.sim.step_physics(STEPS_PER_FRAME)

            self.draw()
            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 2, 3):
                self.dragging_background = True
                self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 2, 3):
                self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION and self.dragging_background:
                mouse = pygame.mouse.get_pos()
                self.camera.pan_pixels(mouse[0] - self.drag_start_screen[0],
                                       mouse[1] - self.drag_start_screen[1])
                self.drag_start_screen = mouse

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        bodies = self.sim.snapshot()

        # Paths first so the discs are drawn over them
        for b in bodies:
            pts = [p for p in (safe_point(self.camera.world_to_screen(t)) for t in b.trail) if p]
            if len(pts) > 1:
                pygame.draw.aalines(surf, b.color, False, pts)

        for b in bodies:
            center = safe_point(self.camera.world_to_screen(b.position))
            if center is None:
                continue
            radius = max(1, int(self.camera.scale_length(b.diameter) / 2))
            pygame.draw.circle(surf, b.color, center, radius)
            pygame.draw.circle(surf, BODY_BORDER_COLOR, center, radius, 1)

        with self.sim.lock:
            playing = self.sim.playing
            dt = self.sim.time_step
            t = self.sim.elapsed_time
        hud = f"t = {t:.3f}   dt = {dt:.4f}   [{'Playing' if playing else 'Paused'}]   Wheel: zoom | Drag: pan"
        surf.blit(self.font.render(hud, True, HUD_TEXT_COLOR), (10, 10))

        pygame.display.flip()

# ============================================================
# Dear PyGui UI
# ============================================================


class UI:
    """
    Dear PyGui interface: scenario selection, start/pause, reset, speed, paths.
    """
    def __init__(self, sim: SimulationController, renderer: PygameRenderer,
                 initial_scenario: Optional[str] = None, initial_speed: Optional[int] = None):
        self.sim = sim
        self.renderer = renderer
        self.status_msg_id = None
        self.start_button_id = None
        self.diagnostics_id = None
        self._scenario_names: List[str] = []
        self._initial_scenario = initial_scenario
        self._initial_speed = initial_speed

        self._build_ui()

        dpg.set_frame_callback(1, self._post_setup)
        self._schedule_sync()

    def _post_setup(self):
        if self._initial_scenario:
            self.load_scenario(self._initial_scenario)
        if self._initial_speed is not None:
            dpg.set_value("speed_slider", self._initial_speed)
            self._set_speed(self._initial_speed)

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Gravity Simulator - Controls', width=460, height=260)

        self._scenario_names = [display for _, display in list_scenarios(self.sim.scenarios_dir)]
        default_item = self._initial_scenario or (self._scenario_names[0] if self._scenario_names else "")

        with dpg.window(label="Controls", width=440, height=240, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Scenario:")
                dpg.add_combo(self._scenario_names,
                              default_value=default_item,
                              width=260,
                              callback=lambda s, a, u: self.load_scenario(a),
                              tag="scenario_combo")

            with dpg.group(horizontal=True):
                self.start_button_id = dpg.add_button(label="Start", width=80, callback=self._toggle_play)
                dpg.add_button(label="Reset", width=80, callback=self._reset)
                dpg.add_button(label="Auto-fit Camera", callback=self.renderer.request_auto_frame)

            with dpg.group(horizontal=True):
                dpg.add_text("Speed:")
                dpg.add_slider_int(min_value=MIN_SPEED_LEVEL, max_value=MAX_SPEED_LEVEL,
                                   default_value=DEFAULT_SPEED_LEVEL, width=200,
                                   callback=lambda s, a, u: self._set_speed(a), tag="speed_slider")
            dpg.add_checkbox(label="Show paths", default_value=True,
                             callback=lambda s, a, u: self.sim.set_show_paths(a))

            dpg.add_separator()
            self.diagnostics_id = dpg.add_text("")
            self.status_msg_id = dpg.add_text("")

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
        self._set_status(msg, color=(255, 120, 120))

    def _refresh_start_button(self):
        with self.sim.lock:
            playing = self.sim.playing
        dpg.configure_item(self.start_button_id, label="Pause" if playing else "Start")

    def _toggle_play(self):
        playing = self.sim.toggle_play()
        self._refresh_start_button()
        self._set_status("Simulation running." if playing else "Simulation paused.")

    def _reset(self):
        try:
            self.sim.reset()
        except ScenarioError as e:
            self._set_error(str(e))
            return
        with self.sim.lock:
            level = self.sim.speed_level
        dpg.set_value("speed_slider", level)
        self._refresh_start_button()
        self.renderer.request_auto_frame()
        self._set_status("Simulation reset.")

    def _set_speed(self, level):
        dt = self.sim.set_speed(level)
        self._set_status(f"Time step set to {dt:.4f}.")

    def load_scenario(self, name: str):
        try:
            scenario = self.sim.load_scenario(name)
        except ScenarioError as e:
            self._set_error(f"Failed to load scenario: {e}")
            return
        with self.sim.lock:
            level = self.sim.speed_level
        dpg.set_value("speed_slider", level)
        dpg.set_value("scenario_combo", scenario.name)
        self._refresh_start_button()
        self.renderer.request_auto_frame()
        self._set_status(f"Loaded scenario: {scenario.name}")

    def _sync_ui_with_sim(self):
        """Periodic UI update of the energy and momentum readout."""
        info = self.sim.diagnostics()
        if info:
            dpg.set_value(
                self.diagnostics_id,
                f"E = {info['energy']:.4e}  (drift {info['energy_drift']:+.2e})\n"
                f"|P| = {info['momentum']:.3e}   steps = {info['steps']}",
            )
        self._schedule_sync()

# ============================================================
# Headless run and application entry
# ============================================================


def run_headless(sim: SimulationController, steps: int) -> None:
    """Advance the loaded scenario `steps` times without any window and log the result."""
    start = time.perf_counter()
    sim.step_physics(steps)
    elapsed = time.perf_counter() - start
    info = sim.diagnostics()
    logger.info("Ran %d steps (t = %.4f) in %.2fs; energy drift %+.3e",
                info["steps"], info["time"], elapsed, info["energy_drift"])
    for b in sim.snapshot():
        logger.info("  %-12s position = (%.3f, %.3f)", b.name, b.position[0], b.position[1])


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="2D gravitational N-body simulator.")
    parser.add_argument("--scenario", help="scenario display name or file name to load")
    parser.add_argument("--scenarios-dir", default=SCENARIOS_DIR, help="directory of scenario JSON files")
    parser.add_argument("--speed", type=int, choices=range(MIN_SPEED_LEVEL, MAX_SPEED_LEVEL + 1),
                        help="speed level; time step = level / 10000")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--headless", action="store_true", help="run without windows")
    parser.add_argument("--steps", type=int, default=10000, help="steps to run in headless mode")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sim = SimulationController(scenarios_dir=args.scenarios_dir)
    scenario_name = args.scenario
    if scenario_name is None:
        available = list_scenarios(args.scenarios_dir)
        scenario_name = available[0][1] if available else None

    if args.headless:
        if scenario_name is None:
            logger.error("No scenarios found in %s", args.scenarios_dir)
            return 2
        try:
            sim.load_scenario(scenario_name)
        except ScenarioError as e:
            logger.error("%s", e)
            return 2
        if args.speed is not None:
            sim.set_speed(args.speed)
        run_headless(sim, args.steps)
        return 0

    renderer = PygameRenderer(sim)
    renderer.start()

    ui = UI(sim, renderer, scenario_name, args.speed)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
    return 0


if __name__ == "__main__":
    sys.exit(main())
