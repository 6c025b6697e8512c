"""
AMUSE coupling for the inner disc edge force.

- CodeWithDiscEdgeMigration: bridge code that kicks a gravity code's
  particles with migration, damping and the planet trap
- particles_to_bodies: AMUSE particle set -> plain-float bodies
"""

from typing import List

import numpy as np
from amuse.units import units, constants, quantities

from .config import DiscEdgeConfig, MigrationTimescales
from .forces import load_force
from .particles import Body, bodies_from_arrays


# Unit system of the force evaluation
LENGTH = units.AU
TIME = units.yr
MASS = units.MSun
G_VAL = constants.G.value_in(LENGTH ** 3 / (MASS * TIME ** 2))

TIMESCALE_ATTRIBUTES = ('tau_a', 'tau_e', 'tau_inc')


def _timescale_values(particles, name):
    """Timescale attribute in years; missing or non-finite entries are None."""
    if not hasattr(particles, name):
        return [None] * len(particles)
    values = getattr(particles, name).value_in(TIME)
    return [float(v) if np.isfinite(v) else None for v in values]


def particles_to_bodies(particles) -> List[Body]:
    """
    Convert an AMUSE particle set to bodies in AU, yr and MSun.

    Args:
        particles (Particles): Needs mass, position and velocity. The optional
            attributes tau_a, tau_e, tau_inc (time quantities) and primary
            (bool) are carried over.

    Returns:
        List[Body]: One body per particle, in the same order.
    """
    mass = particles.mass.value_in(MASS)
    pos = particles.position.value_in(LENGTH)
    vel = particles.velocity.value_in(LENGTH / TIME)

    tau = {name: _timescale_values(particles, name) for name in TIMESCALE_ATTRIBUTES}
    timescales = [MigrationTimescales(tau_a=tau['tau_a'][i],
                                      tau_e=tau['tau_e'][i],
                                      tau_inc=tau['tau_inc'][i])
                  for i in range(len(particles))]

    bodies = bodies_from_arrays(mass, pos, vel, timescales)
    if hasattr(particles, 'primary'):
        for body, flag in zip(bodies, particles.primary):
            body.primary = bool(flag)
    return bodies


class CodeWithDiscEdgeMigration():
    """
    Apply migration with an inner disc edge to the particles of a gravity code.

    Sign convention:
    - Negative tau_a: INWARD migration outside the edge, reversed inside it
    - Positive tau_a: OUTWARD migration outside the edge
    - Negative tau_e, tau_inc: damping
    """

    def __init__(self, code, particles, edge: DiscEdgeConfig,
                 do_sync=True, verbose=False):
        """
        Initialize migration code.

        Args:
            code: AMUSE gravity integrator (e.g., ph4)
            particles: Framework particle set mirrored by the code, with
                tau_a/tau_e/tau_inc attributes on the migrating bodies
            edge: Disc edge parameters, lengths in AU
            do_sync: Copy the kicked velocities back to the gravity code
            verbose: Print diagnostics
        """
        self.code = code
        if hasattr(self.code, 'model_time'):
            self.time = self.code.model_time
        else:
            self.time = quantities.zero
        self.do_sync = do_sync
        self.verbose = verbose
        self.timestep = None
        self.force = load_force('inner_disc_edge', edge)
        required_attributes = [
            'mass', 'x', 'y', 'z',
            'vx', 'vy', 'vz',
            'tau_a', 'tau_e', 'tau_inc', 'primary'
            ]
        self.required_attributes = lambda p, x: x in required_attributes
        self.particles = particles
        self.grav_to_framework = self.code.particles.new_channel_to(self.particles)

        if self.verbose:
            if edge.trap_enabled:
                inner, outer = edge.window
                print(f"Inner disc edge at {edge.inner_disc_edge} AU "
                      f"(window {inner:.3f}-{outer:.3f} AU), "
                      f"{edge.coordinates.value} coordinates")
            elif hasattr(particles, 'tau_a'):
                print("No inner disc edge configured, semimajor axis damping is disabled")

    def kick_with_field_code(self, particles, dt):
        """
        Apply the kick to the particles using the field code.
        Args:
            particles (Particles): The particles to update.
            dt (units.time): The time step for the kick.
        """
        bodies = particles_to_bodies(particles)
        acc = self.force.update_accelerations(G_VAL, bodies)

        acc_unit = LENGTH / TIME ** 2
        ax = acc[:, 0] | acc_unit
        ay = acc[:, 1] | acc_unit
        az = acc[:, 2] | acc_unit

        self.update_velocities(particles, dt, ax, ay, az)

    def update_velocities(self, particle, dt, ax, ay, az):
        """
        Update the velocities of the particles.
        Args:
            particle (Particles): The particles to update.
            dt (units.time): The time step for the update.
            ax (units.length/units.time**2): Acceleration in x direction.
            ay (units.length/units.time**2): Acceleration in y direction.
            az (units.length/units.time**2): Acceleration in z direction.
        """
        particle.vx += dt * ax
        particle.vy += dt * ay
        particle.vz += dt * az

    def evolve_model(self, tend):
        """
        Evolve the model to a specified end time.
        Args:
            tend (units.time): The end time to evolve the model to.
        """
        timestep = self.timestep
        if timestep is None:
            timestep = tend - self.time
        while self.time < tend:
            dt = min(timestep, tend-self.time)
            self.grav_to_framework.copy()
            parts = self.particles.copy(filter_attributes=self.required_attributes)
            self.kick_with_field_code(parts, dt)
            copytopart = parts.new_channel_to(
                            self.particles,
                            attributes=["vx", "vy", "vz"],
                            target_names=["vx", "vy", "vz"]
                            )
            copytopart.copy()
            if self.do_sync:
                copytocode = parts.new_channel_to(
                                self.code.particles,
                                attributes=["vx", "vy", "vz"],
                                target_names=["vx", "vy", "vz"]
                                )
                copytocode.copy()
            self.time += dt
        self.time = tend

    def get_particles(self):
        """Return particles (required by Bridge)."""
        return self.particles
