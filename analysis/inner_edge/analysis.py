"""
Analysis functions for inner disc edge migration runs.

- Orbital elements of AMUSE particles
- Migration summaries (stalling at the trap, final positions)
"""

from typing import Dict, List, Optional

import numpy as np

from .config import DiscEdgeConfig
from .orbits import particle_to_orbit
from .trap import trap_equilibrium_radius


def compute_orbital_elements(body, star) -> Dict:
    """
    Compute orbital elements for a body relative to its star.

    Args:
        body: The orbiting body (AMUSE particle)
        star: The central body (AMUSE particle)

    Returns:
        Dictionary with orbital elements:
        - a: semi-major axis (AU)
        - e: eccentricity
        - i: inclination (degrees)
    """
    from .integrators import G_VAL, particles_to_bodies

    p, primary = particles_to_bodies(body + star)
    orbit = particle_to_orbit(G_VAL, p, primary)

    return {
        'a': orbit.a,
        'e': orbit.e,
        'i': np.degrees(orbit.inc),
    }


def summarize_migration(times: List[float],
                        sma: np.ndarray,
                        names: List[str],
                        edge: Optional[DiscEdgeConfig] = None) -> Dict:
    """
    Compute summary statistics for the semimajor axis evolution.

    Args:
        times: Snapshot times (years)
        sma: Semimajor axes, shape (n_snapshots, n_planets), in AU
        names: Planet names, one per column of sma
        edge: Disc edge used in the run

    Returns:
        Dictionary keyed by planet name with initial/final/minimum semimajor
        axis, the relative change, and (when an edge is configured) whether the
        planet ended inside the edge window
    """
    sma = np.atleast_2d(np.asarray(sma, dtype=float))
    if sma.shape[0] != len(times):
        raise ValueError("sma needs one row per snapshot time")

    summary = {}
    for k, name in enumerate(names):
        track = sma[:, k]
        entry = {
            'initial_a': track[0],
            'final_a': track[-1],
            'min_a': np.nanmin(track),
            'relative_change': (track[-1] - track[0]) / track[0],
        }
        if edge is not None and edge.trap_enabled:
            inner, outer = edge.window
            entry['trapped'] = bool(inner < track[-1] <= outer)
            entry['distance_to_equilibrium'] = track[-1] - trap_equilibrium_radius(
                edge.disc_edge_width, edge.inner_disc_edge)
        summary[name] = entry

    summary['time_span'] = times[-1] - times[0]
    return summary
