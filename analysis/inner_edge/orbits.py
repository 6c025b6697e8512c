"""
Cartesian state to Keplerian elements.
"""

from dataclasses import dataclass

import numpy as np


TINY = 1.e-308


class InvalidOrbitError(ValueError):
    """The pair of bodies does not define an orbit."""


@dataclass
class Orbit:
    a: float
    e: float
    inc: float  # radians


def particle_to_orbit(G, p, primary) -> Orbit:
    """
    Compute the orbit of p around primary.

    Args:
        G (float): Gravitational constant in the units of the bodies.
        p: The orbiting body (x, y, z, vx, vy, vz, mass).
        primary: The central body, same attributes.

    Returns:
        Orbit with semimajor axis, eccentricity and inclination.

    Raises:
        InvalidOrbitError: if the primary has no mass or p sits on the primary.
    """
    if primary.mass <= TINY:
        raise InvalidOrbitError("Primary has no mass.")

    r_vec = np.array([p.x - primary.x, p.y - primary.y, p.z - primary.z])
    v_vec = np.array([p.vx - primary.vx, p.vy - primary.vy, p.vz - primary.vz])

    r = np.sqrt(r_vec @ r_vec)
    if r <= TINY:
        raise InvalidOrbitError("Particle and primary positions are the same.")

    mu = G * (primary.mass + p.mass)
    if mu <= TINY:
        raise InvalidOrbitError("Gravitational parameter is not positive.")
    v2 = v_vec @ v_vec

    # Semi-major axis from vis-viva (infinite for a parabola)
    inv_a = 2.0 / r - v2 / mu
    a = 1.0 / inv_a if inv_a != 0 else np.inf

    # Eccentricity vector
    vdotr = r_vec @ v_vec
    e_vec = ((v2 - mu / r) * r_vec - vdotr * v_vec) / mu
    e = np.sqrt(e_vec @ e_vec)

    # Inclination (radial orbits have no plane)
    h_vec = np.cross(r_vec, v_vec)
    h = np.sqrt(h_vec @ h_vec)
    inc = np.arccos(np.clip(h_vec[2] / h, -1.0, 1.0)) if h > TINY else 0.0

    return Orbit(a=float(a), e=float(e), inc=float(inc))
