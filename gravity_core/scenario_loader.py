#!/usr/bin/env python3
"""
Scenario JSON loading utilities.

A scenario is a named starting configuration of bodies, one JSON file per
scenario in the scenarios/ directory.

Schema
======
Scenario JSON (scenarios/*.json):
{
  "name": "Human-friendly scenario name",
  "description": "Optional description",
  "time_step": 0.0005,               # optional, default None (keep current)
  "gravitational_constant": 10000.0, # optional, default DEFAULT_G
  "softening": 0.0,                  # optional, default DEFAULT_SOFTENING
  "bodies": [
    {
      "name": "Sun",                 # optional
      "diameter": 30.0,
      "mass": 1000.0,
      "position": [0.0, 0.0],
      "velocity": [0.0, 0.0],
      "color": [255, 204, 0]         # or "255-204-0"; optional
    }
  ]
}

Users can drop their own JSON files into that folder and they'll be picked up by the loader.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, DEFAULT_G, DEFAULT_SOFTENING, MAX_TIME_STEP, MIN_TIME_STEP
from .data_models import Body
from .physics import Cluster
from .vector import Vector

logger = logging.getLogger(__name__)

SCENARIOS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scenarios")


class ScenarioError(ValueError):
  """A scenario file is missing, unreadable or malformed."""


@dataclass
class Scenario:
  name: str
  file_name: str
  bodies: List[Body]
  description: str = ""
  time_step: Optional[float] = None
  gravitational_constant: float = DEFAULT_G
  softening: float = DEFAULT_SOFTENING


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as e:
    raise ScenarioError(f"{os.path.basename(path)}: {e}") from e
  if not isinstance(data, dict):
    raise ScenarioError(f"{os.path.basename(path)}: top level must be a JSON object")
  return data


def _coerce_color(c) -> Tuple[int, int, int]:
  """Accept [r, g, b] or "r-g-b"; clamp each channel to 0..255."""
  if c is None:
    return DEFAULT_BODY_COLOR
  if isinstance(c, str):
    c = c.split("-")
  r, g, b = int(c[0]), int(c[1]), int(c[2])
  r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
  return (r, g, b)


def _vector(value) -> Vector:
  """Positions and velocities are planar: exactly two components."""
  if len(value) != 2:
    raise ValueError(f"expected [x, y], got {len(value)} component(s)")
  return Vector(float(value[0]), float(value[1]))


def parse_body(data: dict, default_name: str = "Body") -> Body:
  """Build a Body from one JSON body entry. Raises KeyError/TypeError/ValueError on bad input."""
  return Body(
    name=str(data.get("name", default_name)),
    diameter=float(data["diameter"]),
    mass=float(data["mass"]),
    position=_vector(data["position"]),
    velocity=_vector(data["velocity"]),
    color=_coerce_color(data.get("color")),
  )


def parse_scenario(data: dict, file_name: str = "<memory>") -> Scenario:
  """Build a Scenario from already decoded JSON data."""
  display_name = data.get("name") or os.path.splitext(file_name)[0]
  raw_bodies = data.get("bodies")
  if not isinstance(raw_bodies, list) or not raw_bodies:
    raise ScenarioError(f"{file_name}: 'bodies' must be a non-empty list")
  bodies: List[Body] = []
  for i, b in enumerate(raw_bodies):
    try:
      bodies.append(parse_body(b, default_name=f"Body {i + 1}"))
    except (KeyError, TypeError, ValueError, IndexError) as e:
      raise ScenarioError(f"{file_name}: body {i}: {e!s}") from e
  try:
    time_step = data.get("time_step")
    time_step = float(time_step) if time_step is not None else None
    softening = float(data.get("softening", DEFAULT_SOFTENING))
    scenario = Scenario(
      name=display_name,
      file_name=file_name,
      bodies=bodies,
      description=data.get("description", ""),
      time_step=time_step,
      gravitational_constant=float(data.get("gravitational_constant", DEFAULT_G)),
      softening=softening,
    )
  except (TypeError, ValueError) as e:
    raise ScenarioError(f"{file_name}: {e!s}") from e
  if time_step is not None and not MIN_TIME_STEP <= time_step <= MAX_TIME_STEP:
    raise ScenarioError(f"{file_name}: time_step {time_step!r} outside [{MIN_TIME_STEP}, {MAX_TIME_STEP}]")
  if softening < 0:
    raise ScenarioError(f"{file_name}: softening must be >= 0, got {softening!r}")
  return scenario


def list_scenarios(directory: str = SCENARIOS_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available scenarios."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(directory):
    return items
  for fn in sorted(os.listdir(directory)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      data = _read_json(os.path.join(directory, fn))
    except ScenarioError as e:
      logger.warning("Unreadable scenario file: %s", e)
      data = {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_scenario(file_name: str, directory: str = SCENARIOS_DIR) -> Scenario:
  """Load a scenario JSON by file name."""
  path = os.path.join(directory, file_name)
  if not os.path.isfile(path):
    raise ScenarioError(f"no scenario file named {file_name!r} in {directory}")
  scenario = parse_scenario(_read_json(path), file_name)
  logger.debug("Parsed scenario %r with %d bodies", scenario.name, len(scenario.bodies))
  return scenario


def find_scenario(name: str, directory: str = SCENARIOS_DIR) -> Scenario:
  """Load a scenario by display name, file name, or file stem."""
  name = name.strip()
  for fn, display in list_scenarios(directory):
    if name in (display, fn, os.path.splitext(fn)[0]):
      return load_scenario(fn, directory)
  raise ScenarioError(f"unknown scenario {name!r}")


def build_cluster(scenario: Scenario) -> Cluster:
  """Create an uninitialized Cluster from the scenario's bodies and physics settings."""
  return Cluster(
    scenario.bodies,
    gravitational_constant=scenario.gravitational_constant,
    softening=scenario.softening,
  )
