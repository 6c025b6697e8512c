"""
Inner disc edge migration force.

Applies physical forces that orbit-average to exponential growth/decay of the
semimajor axis, eccentricity and inclination (Papaloizou & Larwood 2000,
Kostov et al. 2016). The eccentricity damping keeps the angular momentum
constant, so it induces some semimajor axis evolution, and e/inc damping
induce pericenter/nodal precession.

On top of that the semimajor axis channel is scaled by the planet trap of
trap.py, which reverses inward migration near the inner disc edge.

Force parameters (DiscEdgeConfig):
- coordinates: Jacobi (default), barycentric or particle
- inner_disc_edge: radius of the edge, needed for the trap
- disc_edge_width: fractional half-width of the edge, needed for the trap

Particle parameters (Body.timescales), each optional:
- tau_a: semimajor axis e-folding timescale
- tau_e: eccentricity e-folding timescale
- tau_inc: inclination e-folding timescale
"""

from dataclasses import dataclass
from typing import Callable, Dict, Sequence

import numpy as np

from .config import Coordinates, DiscEdgeConfig
from .orbits import InvalidOrbitError, particle_to_orbit
from .particles import Body, center_of_mass, com_of_pair
from .trap import planet_trap


def disc_edge_acceleration(G: float, edge: DiscEdgeConfig, p, source) -> np.ndarray:
    """
    Acceleration on p from migration and damping relative to source.

    Args:
        G: Gravitational constant in the units of the bodies.
        edge: Disc edge parameters.
        p: The body, with a `timescales` attribute.
        source: The reference body.

    Returns:
        np.ndarray: (ax, ay, az)
    """
    timescales = p.timescales
    invtau_a = 0.0
    tau_e = timescales.tau_e if timescales.tau_e is not None else np.inf
    tau_inc = timescales.tau_inc if timescales.tau_inc is not None else np.inf

    dvx = p.vx - source.vx
    dvy = p.vy - source.vy
    dvz = p.vz - source.vz
    dx = p.x - source.x
    dy = p.y - source.y
    dz = p.z - source.z
    r2 = dx*dx + dy*dy + dz*dz

    # Migration, scaled by the trap
    if timescales.tau_a is not None and edge.trap_enabled:
        try:
            a0 = particle_to_orbit(G, p, source).a
        except InvalidOrbitError:
            a0 = None
        if a0 is not None:
            red = planet_trap(a0, edge.disc_edge_width, edge.inner_disc_edge)
            invtau_a = red / timescales.tau_a

    ax = dvx * invtau_a / 2.
    ay = dvy * invtau_a / 2.
    az = dvz * invtau_a / 2.

    # Eccentricity and inclination damping
    if tau_e < np.inf or tau_inc < np.inf:
        vdotr = dx*dvx + dy*dvy + dz*dvz
        # Coincident bodies have no radial direction
        prefac = 2 * vdotr / r2 / tau_e if r2 > 0 else 0.0
        ax += prefac * dx
        ay += prefac * dy
        az += prefac * dz + 2. * dvz / tau_inc

    return np.array([ax, ay, az])


Evaluator = Callable[[float, DiscEdgeConfig, Body, Body], np.ndarray]


def _reference_index(bodies: Sequence[Body], reference_name: str) -> int:
    for i, b in enumerate(bodies):
        if getattr(b, reference_name, False):
            return i
    return 0


def com_force(G: float, edge: DiscEdgeConfig, bodies: Sequence[Body],
              coordinates: Coordinates, back_reactions_inclusive: bool,
              reference_name: str, evaluate: Evaluator) -> np.ndarray:
    """
    Evaluate a pairwise force for every body against its reference body.

    Jacobi: body i orbits the centre of mass of bodies 0..i-1.
    Barycentric: every body orbits the centre of mass of all bodies.
    Particle: every body orbits the first body flagged with reference_name
    (body 0 when none is flagged).

    With back_reactions_inclusive the reference bodies receive the opposite
    momentum change, weighted by mass.

    Returns:
        np.ndarray: (N, 3) accelerations to add to the bodies.
    """
    n = len(bodies)
    acc = np.zeros((n, 3))
    if n == 0:
        return acc

    if coordinates is Coordinates.JACOBI:
        com = bodies[0]
        for i in range(1, n):
            p = bodies[i]
            a = evaluate(G, edge, p, com)
            acc[i] += a
            if back_reactions_inclusive and com.mass > 0:
                acc[:i] -= p.mass / com.mass * a
            com = com_of_pair(com, p)

    elif coordinates is Coordinates.BARYCENTRIC:
        com = center_of_mass(bodies)
        for i, p in enumerate(bodies):
            a = evaluate(G, edge, p, com)
            acc[i] += a
            if back_reactions_inclusive and com.mass > 0:
                acc -= p.mass / com.mass * a

    elif coordinates is Coordinates.PARTICLE:
        ref = _reference_index(bodies, reference_name)
        source = bodies[ref]
        for i, p in enumerate(bodies):
            if i == ref:
                continue
            a = evaluate(G, edge, p, source)
            acc[i] += a
            if back_reactions_inclusive and source.mass > 0:
                acc[ref] -= p.mass / source.mass * a

    else:
        raise ValueError(f"Unknown coordinates: {coordinates}")

    return acc


def inner_disc_edge(G: float, force: 'Force', bodies: Sequence[Body]) -> np.ndarray:
    """Disc edge migration for all bodies, in the frame the force asks for."""
    back_reactions_inclusive = True
    reference_name = "primary"
    return com_force(G, force.config, bodies, force.config.coordinates,
                     back_reactions_inclusive, reference_name,
                     disc_edge_acceleration)


# Name -> entry point; all entries take (G, force, bodies)
EFFECTS: Dict[str, Callable] = {
    'inner_disc_edge': inner_disc_edge,
}


@dataclass
class Force:
    """A named effect installed in a simulation."""

    name: str
    config: DiscEdgeConfig

    # Velocity-dependent forces must be re-evaluated after every kick
    force_type: str = 'vel'

    def update_accelerations(self, G: float, bodies: Sequence[Body]) -> np.ndarray:
        return EFFECTS[self.name](G, self, bodies)


def load_force(name: str, config: DiscEdgeConfig = None) -> Force:
    """Look up a registered effect by name."""
    if name not in EFFECTS:
        raise ValueError(f"Force '{name}' not found. Available: {sorted(EFFECTS)}")
    if config is None:
        config = DiscEdgeConfig()
    return Force(name=name, config=config)
