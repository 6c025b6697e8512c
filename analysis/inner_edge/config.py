"""
Configuration classes for inner disc edge migration simulations.

Defines all parameters for:
- Per-body migration timescales (tau_a, tau_e, tau_inc)
- The inner disc edge force (edge radius, width, reference frame)
- Planetary system setup and simulation runtime
"""

import enum
from dataclasses import dataclass, field
from typing import Optional, Dict

import numpy as np


class Coordinates(enum.Enum):
    """Reference frame in which relative orbits are measured."""

    JACOBI = 'jacobi'
    BARYCENTRIC = 'barycentric'
    PARTICLE = 'particle'


# Default planets (mass in Earth masses, a in AU, e dimensionless, i in degrees,
# timescales in years, negative for damping; a missing timescale leaves that
# channel untouched)
DEFAULT_PLANET_DATA = {
    'b': {'mass': 5.0, 'a': 0.30, 'e': 0.02, 'i': 0.5,
          'tau_a': -2.0e4, 'tau_e': -2.0e2},
    'c': {'mass': 8.0, 'a': 0.45, 'e': 0.02, 'i': 0.5,
          'tau_a': -2.0e4, 'tau_e': -2.0e2},
}


def tau_for_migration_duration(a_initial: float, a_final: float,
                               duration: float) -> float:
    """
    Convert a desired point-to-point migration duration into the e-folding
    time tau_a, outside the disc edge where the trap multiplier is 1.

    The force follows d(ln a)/dt = 1/tau_a, so a(t) = a_initial * exp(t / tau_a)
    and

        tau_a = duration / ln(a_final / a_initial)

    Sign convention:
    - Inward migration (a_final < a_initial) -> tau_a < 0
    - Outward migration (a_final > a_initial) -> tau_a > 0
    """
    if a_initial <= 0 or a_final <= 0:
        raise ValueError("Semi-major axes must be positive.")
    log_ratio = np.log(a_final / a_initial)
    if np.isclose(log_ratio, 0.0):
        raise ValueError("Initial and final semi-major axes are too close; tau_a would diverge.")
    return duration / log_ratio


def _check_timescale(name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if np.isnan(value) or value == 0:
        raise ValueError(f"{name} must be a non-zero timescale, got {value}")


@dataclass
class MigrationTimescales:
    """Per-body e-folding timescales.

    Sign convention:
    - Negative tau: damping (decay of a, e or inc)
    - Positive tau: growth
    - None: channel not configured (infinite timescale)
    """

    tau_a: Optional[float] = None
    tau_e: Optional[float] = None
    tau_inc: Optional[float] = None

    def __post_init__(self):
        _check_timescale('tau_a', self.tau_a)
        _check_timescale('tau_e', self.tau_e)
        _check_timescale('tau_inc', self.tau_inc)

    @property
    def is_empty(self) -> bool:
        return self.tau_a is None and self.tau_e is None and self.tau_inc is None


@dataclass
class DiscEdgeConfig:
    """Parameters of the inner disc edge force.

    The trap only switches on when both inner_disc_edge and disc_edge_width
    are given. Values that are given must be strictly positive.
    """

    # Radius of the inner disc edge (same length unit as the bodies)
    inner_disc_edge: Optional[float] = None

    # Fractional half-width of the transition zone around the edge
    disc_edge_width: Optional[float] = None

    # Frame used to pick the reference body of each particle
    coordinates: Coordinates = Coordinates.JACOBI

    def __post_init__(self):
        if isinstance(self.coordinates, str):
            self.coordinates = Coordinates(self.coordinates.lower())
        for name in ('inner_disc_edge', 'disc_edge_width'):
            value = getattr(self, name)
            if value is not None and not value > 0:
                raise ValueError(f"{name} must be strictly positive, got {value}")

    @property
    def trap_enabled(self) -> bool:
        return self.inner_disc_edge is not None and self.disc_edge_width is not None

    @property
    def window(self):
        """Inner and outer radius of the edge transition zone."""
        if not self.trap_enabled:
            return None
        h = self.disc_edge_width
        return self.inner_disc_edge * (1.0 - h), self.inner_disc_edge * (1.0 + h)


@dataclass
class SimulationConfig:
    """Main configuration for inner disc edge migration runs."""

    # Simulation name (used for output files)
    name: str = "inner_edge_migration"

    # Star mass
    star_mass: float = 1.0  # Solar masses

    # Planet data (can override defaults)
    planet_data: Dict = field(default_factory=lambda: {
        name: dict(data) for name, data in DEFAULT_PLANET_DATA.items()})

    # Disc edge, in AU
    edge: DiscEdgeConfig = field(default_factory=lambda: DiscEdgeConfig(
        inner_disc_edge=0.1, disc_edge_width=0.2))

    # Simulation runtime
    end_time: float = 5.0e4  # years
    n_snapshots: int = 500

    # Migration kick timestep as a fraction of the innermost orbital period
    kick_fraction: float = 0.1

    # Internal integrator timestep parameter (ph4)
    timestep_parameter: float = 0.01

    # Input/Output
    output_file: Optional[str] = None  # Auto-generated if None

    # Random seed for the orbital angles
    random_seed: int = 42

    def __post_init__(self):
        """Generate output filename if not provided."""
        if self.output_file is None:
            self.output_file = f"results/pkl/{self.name}.pkl"
        if self.n_snapshots < 1:
            raise ValueError("n_snapshots must be at least 1")

    def timescales(self, planet: str) -> MigrationTimescales:
        """Migration timescales (years) configured for one planet."""
        data = self.planet_data[planet]
        return MigrationTimescales(
            tau_a=data.get('tau_a'),
            tau_e=data.get('tau_e'),
            tau_inc=data.get('tau_inc'),
        )

    @classmethod
    def single_planet(cls, a: float = 0.3, mass: float = 10.0,
                      tau_a: float = -1.0e4, tau_e: Optional[float] = None,
                      inner_disc_edge: float = 0.1, disc_edge_width: float = 0.2,
                      **kwargs) -> 'SimulationConfig':
        """Create configuration for one planet migrating onto the edge."""
        name = f"inner_edge_single_{a}au_tau{int(tau_a)}yr"
        planet = {'mass': mass, 'a': a, 'e': 0.01, 'i': 0.0, 'tau_a': tau_a}
        if tau_e is not None:
            planet['tau_e'] = tau_e
        return cls(
            name=name,
            planet_data={'b': planet},
            edge=DiscEdgeConfig(inner_disc_edge=inner_disc_edge,
                                disc_edge_width=disc_edge_width),
            **kwargs
        )

    @classmethod
    def resonant_pair(cls, a_inner: float = 0.3, period_ratio: float = 1.6,
                      tau_a: float = -2.0e4, K: float = 100.0,
                      inner_disc_edge: float = 0.1, disc_edge_width: float = 0.2,
                      **kwargs) -> 'SimulationConfig':
        """
        Create configuration for two planets converging at the edge.

        Only the outer planet migrates; the inner one is pushed onto the trap
        once the pair locks into resonance. K = tau_a / tau_e > 0, so tau_e
        has the sign of tau_a.
        """
        name = f"inner_edge_pair_{a_inner}au_K{int(K)}"
        a_outer = a_inner * period_ratio ** (2.0 / 3.0)
        planets = {
            'b': {'mass': 5.0, 'a': a_inner, 'e': 0.01, 'i': 0.5,
                  'tau_e': tau_a / K},
            'c': {'mass': 5.0, 'a': a_outer, 'e': 0.01, 'i': 0.5,
                  'tau_a': tau_a, 'tau_e': tau_a / K},
        }
        return cls(
            name=name,
            planet_data=planets,
            edge=DiscEdgeConfig(inner_disc_edge=inner_disc_edge,
                                disc_edge_width=disc_edge_width),
            **kwargs
        )
