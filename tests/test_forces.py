import copy

import numpy as np
import pytest

from inner_edge.config import DiscEdgeConfig, MigrationTimescales
from inner_edge.forces import disc_edge_acceleration
from inner_edge.orbits import particle_to_orbit
from inner_edge.particles import Body
from inner_edge.trap import planet_trap


G = 1.0
EDGE = DiscEdgeConfig(inner_disc_edge=0.1, disc_edge_width=0.2)


def planet(x=1.0, y=0.0, z=0.0, vx=0.0, vy=1.0, vz=0.0, **tau):
    return Body(mass=1e-5, x=x, y=y, z=z, vx=vx, vy=vy, vz=vz,
                timescales=MigrationTimescales(**tau))


def test_migration_outside_edge_is_plain_drag():
    p = planet(tau_a=1000.)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=1.0))
    np.testing.assert_allclose(acc, [0.0, 1.0 / 2000., 0.0])


def test_migration_parallel_to_relative_velocity():
    p = planet(x=1.0, y=0.2, z=0.1, vx=0.1, vy=0.9, vz=0.05, tau_a=500.)
    star = Body(mass=1.0, vx=0.02, vy=-0.01)
    acc = disc_edge_acceleration(G, EDGE, p, star)

    dv = p.velocity - star.velocity
    k = acc @ dv / (dv @ dv)
    np.testing.assert_allclose(acc, k * dv, atol=1e-15)
    assert k == pytest.approx(1.0 / (2 * 500.))


def test_migration_reversed_inside_edge():
    edge = DiscEdgeConfig(inner_disc_edge=1.0, disc_edge_width=0.1)
    p = planet(x=0.5, vy=np.sqrt(1.00001 / 0.5), tau_a=100.)
    acc = disc_edge_acceleration(G, edge, p, Body(mass=1.0))
    np.testing.assert_allclose(acc, -10.0 / 200. * p.velocity)


def test_migration_uses_semimajor_axis_in_window():
    edge = DiscEdgeConfig(inner_disc_edge=1.0, disc_edge_width=0.1)
    star = Body(mass=1.0)
    p = planet(vy=np.sqrt(1.00001), tau_a=100.)  # circular, a = 1
    acc = disc_edge_acceleration(G, edge, p, star)
    expected = planet_trap(1.0, 0.1, 1.0) / 100. / 2. * p.velocity
    np.testing.assert_allclose(acc, expected, rtol=1e-6)


def test_no_tau_a_means_no_drag():
    p = planet(vx=0.3)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=1.0))
    assert np.array_equal(acc, np.zeros(3))


def test_tau_a_without_edge_is_disabled():
    p = planet(tau_a=1000.)
    for edge in (DiscEdgeConfig(), DiscEdgeConfig(inner_disc_edge=0.1),
                 DiscEdgeConfig(disc_edge_width=0.2)):
        acc = disc_edge_acceleration(G, edge, p, Body(mass=1.0))
        assert np.array_equal(acc, np.zeros(3))


def test_body_at_rest_gets_no_drag():
    p = planet(vy=0.0, tau_a=1000.)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=1.0))
    assert np.array_equal(acc, np.zeros(3))


def test_circular_orbit_with_eccentricity_damping_only():
    p = planet(tau_e=100.)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=1.0))
    assert acc[0] == 0.0
    assert acc[1] == 0.0
    assert acc[2] == 0.0


def test_eccentricity_damping_is_radial():
    # vdotr = 0.3, r2 = 1 -> prefac = 2 * 0.3 / 100
    p = planet(vx=0.3, tau_e=100.)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=1.0))
    np.testing.assert_allclose(acc, [0.006, 0.0, 0.0])


def test_inclination_damping_alone():
    p = planet(vz=0.2, tau_inc=50.)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=1.0))
    np.testing.assert_allclose(acc, [0.0, 0.0, 2 * 0.2 / 50.])


def test_all_channels_superpose():
    p = planet(vx=0.3, vz=0.2, tau_a=1000., tau_e=100., tau_inc=50.)
    star = Body(mass=1.0)
    total = disc_edge_acceleration(G, EDGE, p, star)
    parts = sum(disc_edge_acceleration(G, EDGE, planet(vx=0.3, vz=0.2, **{k: v}), star)
                for k, v in (('tau_a', 1000.), ('tau_e', 100.), ('tau_inc', 50.)))
    np.testing.assert_allclose(total, parts)


def test_invalid_orbit_skips_migration_only():
    p = planet(vx=0.3, tau_a=10., tau_e=100.)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=0.0))
    np.testing.assert_allclose(acc, [0.006, 0.0, 0.0])


def test_coincident_bodies_do_not_raise():
    p = planet(x=0.0, tau_a=10., tau_e=100.)
    acc = disc_edge_acceleration(G, EDGE, p, Body(mass=1.0))
    assert np.array_equal(acc, np.zeros(3))


def test_bodies_are_not_modified():
    p = planet(vx=0.3, tau_a=10., tau_e=100., tau_inc=20.)
    star = Body(mass=1.0, vx=0.1)
    before = (copy.deepcopy(p), copy.deepcopy(star))
    disc_edge_acceleration(G, EDGE, p, star)
    assert (p, star) == before


def kick(p, star, edge, dt=0.1):
    """Orbit of p before and after one velocity kick."""
    acc = disc_edge_acceleration(G, edge, p, star)
    kicked = copy.deepcopy(p)
    kicked.vx += dt * acc[0]
    kicked.vy += dt * acc[1]
    kicked.vz += dt * acc[2]
    return particle_to_orbit(G, p, star), particle_to_orbit(G, kicked, star)


def test_negative_tau_a_migrates_inward_outside_edge():
    p = planet(vy=np.sqrt(1.00001), tau_a=-100.)  # circular, a = 1
    before, after = kick(p, Body(mass=1.0), EDGE)
    assert after.a < before.a


def test_negative_tau_a_pushes_outward_inside_edge():
    edge = DiscEdgeConfig(inner_disc_edge=1.0, disc_edge_width=0.1)
    star = Body(mass=1.0)
    for r in (0.5, 0.95):
        p = planet(x=r, vy=np.sqrt(1.00001 / r), tau_a=-100.)
        before, after = kick(p, star, edge)
        assert after.a > before.a


def test_negative_tau_e_damps_eccentricity():
    p = planet(vx=0.3, tau_e=-100.)
    before, after = kick(p, Body(mass=1.0), EDGE)
    assert before.e > 0.1
    assert after.e < before.e


def test_positive_tau_e_excites_eccentricity():
    p = planet(vx=0.3, tau_e=100.)
    before, after = kick(p, Body(mass=1.0), EDGE)
    assert after.e > before.e


def test_negative_tau_inc_damps_inclination():
    p = planet(vz=0.2, tau_inc=-50.)
    before, after = kick(p, Body(mass=1.0), EDGE)
    assert before.inc > 0.1
    assert after.inc < before.inc
