#!/usr/bin/env python3
"""
Core Physics Engine for Gravity Simulator

Responsibilities
- Remove the net momentum of a cluster once at startup so it does not drift off screen.
- Compute pairwise Newtonian gravitational accelerations, optionally softened.
- Advance body states with velocity-Verlet integration.
- Report energy and momentum diagnostics.

Units and conventions
- Artificial units throughout. G is a tunable scale constant (default 1e4), not the
  SI value, because distances are of the order of screen pixels.

Numerical notes
- Velocity Verlet is second order, time-symmetric and conserves momentum in exact
  arithmetic, because the pairwise force law is antisymmetric.
- Each step runs two passes: every position is advanced from the old accelerations
  before any new acceleration is evaluated, since the new acceleration of one body
  depends on the updated positions of all the others.
- Without softening, two bodies at the same position produce a NaN acceleration.
  It is not masked; the NaN flows into positions and velocities so the modeling
  error stays visible.
- Complexity: O(N^2) per step (direct summation), fine for tens of bodies.

Threading
- This module is pure compute. A step builds the new state in buffers and commits
  it at the end, so a failure mid-step leaves every body untouched. Callers that
  share a Cluster across threads serialize access with their own lock
  (see SimulationController).
"""

import logging
import math
from typing import List, Sequence, Tuple

from .constants import DEFAULT_G, DEFAULT_SOFTENING
from .data_models import Body
from .vector import Vector

logger = logging.getLogger(__name__)


class Cluster:
    """
    A fixed group of bodies moving under their mutual gravity.

    The Newtonian force on body i from body j is:
    F_ij = G * m_i * m_j / |p_j - p_i|^2 * normalize(p_j - p_i)

    With a softening length eps > 0 the Plummer form is used instead:
    F_ij = G * m_i * m_j * (p_j - p_i) / (|p_j - p_i|^2 + eps^2)^(3/2)

    Lifecycle: construct, call initialize() once, then step(dt) repeatedly.
    """

    def __init__(self, bodies: Sequence[Body],
                 gravitational_constant: float = DEFAULT_G,
                 softening: float = DEFAULT_SOFTENING):
        """
        Args:
            bodies: Bodies of the cluster; the collection is fixed from here on.
            gravitational_constant: Scale constant G of the force law.
            softening: Plummer softening length (>= 0); 0 disables softening.
        """
        bodies = tuple(bodies)
        if not bodies:
            raise ValueError("a Cluster needs at least one body")
        dim = bodies[0].dimension
        for i, b in enumerate(bodies):
            if b.dimension != dim:
                raise ValueError(f"body {i} has dimension {b.dimension}, expected {dim}")
        if softening < 0:
            raise ValueError(f"softening must be >= 0, got {softening!r}")
        self._bodies: Tuple[Body, ...] = bodies
        self.G = float(gravitational_constant)
        self.softening = float(softening)
        self._initialized = False

    @property
    def bodies(self) -> Tuple[Body, ...]:
        """Read-only view of the bodies, in construction order."""
        return self._bodies

    @property
    def initialized(self) -> bool:
        return self._initialized

    def __len__(self) -> int:
        return len(self._bodies)

    # -----------------------
    # Initialization
    # -----------------------

    def initialize(self) -> None:
        """Zero the net momentum, then compute the starting accelerations."""
        if self._initialized:
            raise RuntimeError("Cluster.initialize() must be called exactly once")
        self.adjust_for_center_of_mass_velocity()
        self.compute_initial_accelerations()
        self._initialized = True

    def adjust_for_center_of_mass_velocity(self) -> None:
        """
        Subtract the center-of-mass velocity v_com = sum(m_i * v_i) / sum(m_i)
        from every body, leaving the cluster with zero net momentum.
        """
        v_com = self.total_momentum().scalar_product(1.0 / self.total_mass())
        for b in self._bodies:
            b.velocity = b.velocity - v_com
        logger.debug("Removed center-of-mass velocity %r", v_com)

    def compute_initial_accelerations(self) -> None:
        """Store the force-law acceleration of every body at its current position."""
        positions = [b.position for b in self._bodies]
        for i, acc in enumerate(self._accelerations_at(positions)):
            self._bodies[i].acceleration = acc

    # -----------------------
    # Force law
    # -----------------------

    def newtonian_force(self, mass: float, other_mass: float,
                        position: Vector, other_position: Vector) -> Vector:
        """Gravitational force exerted on a mass at position by other_mass at other_position."""
        r = other_position - position
        if self.softening > 0.0:
            r2 = r.norm() ** 2 + self.softening * self.softening
            return r.scalar_product(self.G * mass * other_mass / (r2 * math.sqrt(r2)))
        r2 = r.norm() ** 2
        magnitude = self.G * mass * other_mass / r2 if r2 else math.inf
        return r.normalized().scalar_product(magnitude)

    def net_acceleration_of(self, index: int) -> Vector:
        """Acceleration of body `index` due to every other body at their current positions."""
        return self._acceleration_of(index, [b.position for b in self._bodies])

    def _acceleration_of(self, index: int, positions: Sequence[Vector]) -> Vector:
        body = self._bodies[index]
        if len(self._bodies) == 1:
            return Vector(*([0.0] * body.dimension))
        net_force = Vector.sum(
            self.newtonian_force(body.mass, self._bodies[j].mass, positions[index], positions[j])
            for j in range(len(self._bodies))
            if j != index  # no self-interaction
        )
        # a = F / m
        return net_force.scalar_product(1.0 / body.mass)

    def _accelerations_at(self, positions: Sequence[Vector]) -> List[Vector]:
        return [self._acceleration_of(i, positions) for i in range(len(self._bodies))]

    # -----------------------
    # Integration
    # -----------------------

    def step(self, dt: float) -> None:
        """
        Advance every body by one velocity-Verlet step of length dt.

        Pass 1: s(t+dt) = s(t) + dt*v(t) + 0.5*dt^2*a(t) for every body.
        Pass 2: a(t+dt) from the updated positions of all bodies, then
                v(t+dt) = v(t) + 0.5*dt*[a(t) + a(t+dt)].
        """
        if not self._initialized:
            raise RuntimeError("Cluster.initialize() must be called before step()")
        if not dt > 0:
            raise ValueError(f"time step must be positive, got {dt!r}")

        bodies = self._bodies
        half_dt_sq = 0.5 * dt * dt

        # Pass 1: positions from the old velocities and accelerations
        new_positions = [
            Vector.add(b.position, b.velocity.scalar_product(dt), b.acceleration.scalar_product(half_dt_sq))
            for b in bodies
        ]

        # Pass 2: accelerations need every updated position
        new_accelerations = self._accelerations_at(new_positions)
        new_velocities = [
            b.velocity + (b.acceleration + new_acc).scalar_product(0.5 * dt)
            for b, new_acc in zip(bodies, new_accelerations)
        ]

        for b, s, v, a in zip(bodies, new_positions, new_velocities, new_accelerations):
            b.position = s
            b.velocity = v
            b.acceleration = a

    # -----------------------
    # Diagnostics
    # -----------------------

    def total_mass(self) -> float:
        return sum(b.mass for b in self._bodies)

    def total_momentum(self) -> Vector:
        """sum(m_i * v_i)"""
        return Vector.sum(b.velocity.scalar_product(b.mass) for b in self._bodies)

    def center_of_mass(self) -> Vector:
        return Vector.sum(b.position.scalar_product(b.mass) for b in self._bodies).scalar_product(
            1.0 / self.total_mass())

    def kinetic_energy(self) -> float:
        return sum(0.5 * b.mass * b.velocity.norm() ** 2 for b in self._bodies)

    def potential_energy(self) -> float:
        """
        Pairwise gravitational potential energy, -G*m_i*m_j/r per pair
        (Plummer form -G*m_i*m_j/sqrt(r^2 + eps^2) when softened).
        """
        eps2 = self.softening * self.softening
        total = 0.0
        n = len(self._bodies)
        for i in range(n):
            bi = self._bodies[i]
            for j in range(i + 1, n):
                bj = self._bodies[j]
                r = math.sqrt((bj.position - bi.position).norm() ** 2 + eps2)
                total -= self.G * bi.mass * bj.mass / r if r else math.inf
        return total

    def total_energy(self) -> float:
        return self.kinetic_energy() + self.potential_energy()


def circular_orbit_velocity(gravitational_constant: float, central_mass: float, orbital_radius: float) -> float:
    """
    Speed of a circular orbit of radius orbital_radius around central_mass.

    Gravity provides the centripetal force, G * M / r^2 = v^2 / r, so
    v = sqrt(G * M / r).
    """
    if orbital_radius <= 0:
        return 0.0
    return math.sqrt(gravitational_constant * central_mass / orbital_radius)
