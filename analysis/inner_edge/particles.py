"""
Plain-float body representation used by the force evaluation.

Units are whatever the caller uses consistently (the AMUSE coupling uses AU,
yr and MSun).
"""

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from .config import MigrationTimescales


@dataclass
class Body:
    """Cartesian state of one body plus its migration timescales."""

    mass: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    timescales: MigrationTimescales = field(default_factory=MigrationTimescales)

    # Reference body for particle-relative coordinates
    primary: bool = False

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.vx, self.vy, self.vz])


def center_of_mass(bodies: Sequence[Body]) -> Body:
    """
    Synthetic body at the centre of mass of the given bodies.

    A set without mass gets the plain average of positions and velocities.
    """
    masses = np.array([b.mass for b in bodies], dtype=float)
    pos = np.array([b.position for b in bodies])
    vel = np.array([b.velocity for b in bodies])

    total = masses.sum()
    weights = masses / total if total > 0 else np.full(len(bodies), 1.0 / len(bodies))
    x, y, z = weights @ pos
    vx, vy, vz = weights @ vel
    return Body(mass=total, x=x, y=y, z=z, vx=vx, vy=vy, vz=vz)


def com_of_pair(com: Body, p: Body) -> Body:
    """Add body p to an accumulated centre of mass."""
    return center_of_mass([com, p])


def bodies_from_arrays(mass, pos, vel, timescales=None) -> List[Body]:
    """Build bodies from (N,), (N, 3), (N, 3) arrays."""
    n = len(mass)
    if timescales is None:
        timescales = [MigrationTimescales() for _ in range(n)]
    return [Body(float(mass[i]),
                 float(pos[i][0]), float(pos[i][1]), float(pos[i][2]),
                 float(vel[i][0]), float(vel[i][1]), float(vel[i][2]),
                 timescales=timescales[i])
            for i in range(n)]
