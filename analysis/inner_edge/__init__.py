"""
Inner Disc Edge Migration Module

Disc-driven migration with a planet trap at the inner edge of the disc:
- Trap: migration-rate multiplier that reverses inward migration at the edge
- Forces: semimajor axis, eccentricity and inclination damping per body
- Frames: Jacobi, barycentric or particle-relative reference bodies

The AMUSE coupling (integrators, bodies, runner) is imported from its own
modules so the numerical core works without AMUSE installed.

Usage:
    from inner_edge import DiscEdgeConfig, load_force
    from inner_edge.runner import run_simulation
"""

from .config import (Coordinates, DiscEdgeConfig, MigrationTimescales,
                     SimulationConfig, tau_for_migration_duration)
from .trap import planet_trap, trap_equilibrium_radius
from .orbits import Orbit, InvalidOrbitError, particle_to_orbit
from .particles import Body, center_of_mass
from .forces import (disc_edge_acceleration, com_force, inner_disc_edge,
                     Force, EFFECTS, load_force)
from .analysis import summarize_migration

__all__ = [
    # Config
    'Coordinates',
    'DiscEdgeConfig',
    'MigrationTimescales',
    'SimulationConfig',
    'tau_for_migration_duration',
    # Trap
    'planet_trap',
    'trap_equilibrium_radius',
    # Orbits
    'Orbit',
    'InvalidOrbitError',
    'particle_to_orbit',
    # Bodies
    'Body',
    'center_of_mass',
    # Forces
    'disc_edge_acceleration',
    'com_force',
    'inner_disc_edge',
    'Force',
    'EFFECTS',
    'load_force',
    # Analysis
    'summarize_migration',
]
