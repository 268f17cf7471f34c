#!/usr/bin/env python3
"""
Simulation controller shared by the renderer thread and the UI thread.

The controller owns the current Cluster and the presentation settings. Every
read or write of that shared state happens under one re-entrant lock, and each
integrator step runs entirely while the lock is held, so a renderer snapshot
never observes a half-advanced cluster.
"""
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_SPEED_LEVEL,
    DEFAULT_TIME_STEP,
    MAX_SPEED_LEVEL,
    MAX_TIME_STEP,
    MIN_SPEED_LEVEL,
    MIN_TIME_STEP,
    TIME_STEP_SCALE,
    VIEW_UPDATE_RATE,
)
from .physics import Cluster
from .scenario_loader import SCENARIOS_DIR, Scenario, build_cluster, find_scenario
from .vector import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyView:
    """Copy of the render-relevant state of one body."""
    name: str
    position: Tuple[float, ...]
    diameter: float
    color: Tuple[int, int, int]
    trail: Tuple[Tuple[float, ...], ...]


class SimulationController:
    """
    Shared state between UI thread (Dear PyGui) and rendering thread (pygame).
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, scenarios_dir: str = SCENARIOS_DIR):
        self.lock = threading.RLock()
        self.scenarios_dir = scenarios_dir
        self.cluster: Optional[Cluster] = None
        self.scenario: Optional[Scenario] = None
        self.running = True  # app running
        self.playing = False  # simulation running; starts paused
        self.time_step = DEFAULT_TIME_STEP
        self.speed_level = DEFAULT_SPEED_LEVEL
        self.show_paths = True
        self.steps_taken = 0
        self.elapsed_time = 0.0
        self._initial_energy: Optional[float] = None

    # -----------------------
    # Scenario lifecycle
    # -----------------------

    def load_scenario(self, name: str, keep_time_step: bool = False) -> Scenario:
        """
        Load a scenario by name, build and initialize its cluster, and pause.
        The scenario's own time_step replaces the current one unless
        keep_time_step is set. Raises ScenarioError if the scenario cannot be
        loaded; the current cluster is kept in that case.
        """
        scenario = find_scenario(name, self.scenarios_dir)
        cluster = build_cluster(scenario)
        cluster.initialize()
        if scenario.time_step is not None and not keep_time_step:
            self.set_time_step(scenario.time_step)
        with self.lock:
            self.scenario = scenario
            self.cluster = cluster
            self.playing = False
            self.steps_taken = 0
            self.elapsed_time = 0.0
            self._initial_energy = cluster.total_energy()
        logger.info("Loaded scenario %r (%d bodies, G=%g)", scenario.name, len(cluster), cluster.G)
        return scenario

    def reset(self) -> None:
        """Reload the current scenario from disk, discarding trails and progress.
        The current time step survives the reload."""
        with self.lock:
            if self.scenario is None:
                return
            name = self.scenario.file_name
        self.load_scenario(name, keep_time_step=True)
        logger.info("Reset scenario %r", self.scenario.name)

    # -----------------------
    # Play state and settings
    # -----------------------

    def start(self) -> None:
        with self.lock:
            self.playing = self.cluster is not None
        logger.debug("Simulation started")

    def pause(self) -> None:
        with self.lock:
            self.playing = False
        logger.debug("Simulation paused")

    def toggle_play(self) -> bool:
        with self.lock:
            if self.playing:
                self.pause()
            else:
                self.start()
            return self.playing

    def set_speed(self, level: int) -> float:
        """Map a speed slider level (1..9) to a time step of level / 10000."""
        level = int(clamp(int(level), MIN_SPEED_LEVEL, MAX_SPEED_LEVEL))
        return self.set_time_step(level / TIME_STEP_SCALE)

    def set_time_step(self, dt: float) -> float:
        dt = float(dt)
        if not MIN_TIME_STEP <= dt <= MAX_TIME_STEP:
            raise ValueError(f"time step {dt!r} outside [{MIN_TIME_STEP}, {MAX_TIME_STEP}]")
        with self.lock:
            self.time_step = dt
            self.speed_level = int(round(dt * TIME_STEP_SCALE))
        logger.debug("Time step set to %g", dt)
        return dt

    def set_show_paths(self, show: bool) -> None:
        with self.lock:
            self.show_paths = bool(show)

    def clear_trails(self) -> None:
        with self.lock:
            if self.cluster is None:
                return
            for b in self.cluster.bodies:
                b.trail.clear()

    # -----------------------
    # Stepping and reading
    # -----------------------

    def step_physics(self, steps: int = 1) -> None:
        """
        Advance the cluster by `steps` integrator steps of the current time step.
        A trail point is sampled for every body each VIEW_UPDATE_RATE steps.
        """
        with self.lock:
            if self.cluster is None:
                return
            for _ in range(steps):
                self.cluster.step(self.time_step)
                self.steps_taken += 1
                self.elapsed_time += self.time_step
                if self.steps_taken % VIEW_UPDATE_RATE == 0:
                    for b in self.cluster.bodies:
                        b.add_trail_point()

    def snapshot(self) -> List[BodyView]:
        """Copy body render data under the lock for consistency during draw."""
        with self.lock:
            if self.cluster is None:
                return []
            return [
                BodyView(
                    name=b.name,
                    position=b.position.as_tuple(),
                    diameter=b.diameter,
                    color=b.color,
                    trail=tuple(b.trail) if self.show_paths else (),
                )
                for b in self.cluster.bodies
            ]

    def diagnostics(self) -> dict:
        """Energy, relative energy drift and momentum of the current cluster."""
        with self.lock:
            if self.cluster is None:
                return {}
            energy = self.cluster.total_energy()
            drift = 0.0
            if self._initial_energy:
                drift = (energy - self._initial_energy) / abs(self._initial_energy)
            info = {
                "time": self.elapsed_time,
                "steps": self.steps_taken,
                "energy": energy,
                "energy_drift": drift,
                "momentum": self.cluster.total_momentum().norm(),
            }
        logger.debug("Diagnostics: %s", info)
        return info

