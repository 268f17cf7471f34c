#!/usr/bin/env python3
"""
Data models for Gravity Simulator.

This module defines the Body dataclass shared between physics, rendering, and UI.

Units and usage
- position, velocity and acceleration are Vectors in artificial simulation units.
- diameter is display-only; the physics treats every body as a point mass.
- acceleration stays None until the owning Cluster is initialized.
- trail stores sampled past positions for drawing paths; it is mutated by the
  SimulationController, never by the integrator.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, MAX_TRACE_POINTS
from .vector import Vector


@dataclass
class Body:
    """
    Represents one simulated point/disc mass.

    Fields:
    - diameter: Rendering diameter (> 0)
    - mass: Mass (> 0), divisor of the acceleration
    - position: Position vector
    - velocity: Velocity vector, same dimension as position
    - color: RGB tuple used for rendering
    - name: Display label
    - acceleration: Cached force-law acceleration at the current position
    - trail: Deque of past positions for drawing motion paths
    """
    diameter: float
    mass: float
    position: Vector
    velocity: Vector
    color: Tuple[int, int, int] = DEFAULT_BODY_COLOR
    name: str = "Body"
    acceleration: Optional[Vector] = None
    trail: Deque[Tuple[float, ...]] = field(default_factory=lambda: deque(maxlen=MAX_TRACE_POINTS),
                                            repr=False, compare=False)

    def __post_init__(self):
        if not self.mass > 0:
            raise ValueError(f"{self.name}: mass must be positive, got {self.mass!r}")
        if not self.diameter > 0:
            raise ValueError(f"{self.name}: diameter must be positive, got {self.diameter!r}")
        if self.position.dimension != self.velocity.dimension:
            raise ValueError(
                f"{self.name}: position and velocity dimensions differ "
                f"({self.position.dimension} vs {self.velocity.dimension})"
            )

    @property
    def dimension(self) -> int:
        return self.position.dimension

    def add_trail_point(self) -> None:
        """Append the current position to the trail."""
        self.trail.append(self.position.as_tuple())
