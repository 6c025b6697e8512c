"""
Functions for creating the star + planets system with migration timescales.
"""

import numpy as np
from amuse.units import units, constants
from amuse.datamodel import Particles
from amuse.ext.orbital_elements import new_binary_from_orbital_elements

from .config import MigrationTimescales, SimulationConfig


def semi_to_orbital_period(a, Mtot):
    """
    Get orbital period from semi-major axis and total mass.
    Args:
        a (units.length): Semi-major axis of the orbit.
        Mtot (units.mass): Total mass of the system (star + planet).
    Returns:
        P (units.time): Orbital period of the system.
    """
    return 2*np.pi * (a**3/(constants.G*Mtot)).sqrt()


def set_timescales(particle, timescales):
    """
    Attach migration timescales (years) to an AMUSE particle.

    Unset channels get an infinite timescale, which the force treats as
    absent.
    """
    for name in ('tau_a', 'tau_e', 'tau_inc'):
        value = getattr(timescales, name)
        setattr(particle, name, (np.inf if value is None else value) | units.yr)


def create_planetary_system(config: SimulationConfig) -> Particles:
    """
    Create the star and its planets, innermost planet first.

    Args:
        config: Simulation configuration

    Returns:
        Particles set containing the star followed by the planets, in the
        centre of mass frame
    """
    star_mass = config.star_mass | units.MSun

    star = Particles(1)
    star.mass = star_mass
    star.position = [0, 0, 0] | units.AU
    star.velocity = [0, 0, 0] | units.km / units.s
    star.name = 'star'
    star.type = 'star'
    star.primary = True
    set_timescales(star[0], MigrationTimescales())

    planets = Particles()
    np.random.seed(config.random_seed)

    # Jacobi coordinates need the planets ordered outward
    ordered = sorted(config.planet_data.items(), key=lambda item: item[1]['a'])
    for name, data in ordered:
        mass = data['mass'] | units.MEarth
        a = data['a'] | units.AU
        e = data['e']
        inc = data['i'] | units.deg

        # Random orbital angles
        true_anomaly = np.random.uniform(0, 360) | units.deg
        arg_periapsis = np.random.uniform(0, 360) | units.deg
        long_asc_node = np.random.uniform(0, 360) | units.deg

        binary = new_binary_from_orbital_elements(
            star_mass,
            mass,
            a,
            e,
            true_anomaly=true_anomaly,
            inclination=inc,
            longitude_of_the_ascending_node=long_asc_node,
            argument_of_periapsis=arg_periapsis,
            G=constants.G
        )

        # Relative to the star, which sits at the origin
        planet = binary[1]
        planet.position -= binary[0].position
        planet.velocity -= binary[0].velocity
        planet.name = name
        planet.type = 'planet'
        planet.primary = False
        set_timescales(planet, config.timescales(name))
        planets.add_particle(planet)

    bodies = Particles()
    bodies.add_particles(star)
    bodies.add_particles(planets)

    bodies.move_to_center()

    return bodies
