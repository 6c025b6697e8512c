import numpy as np
import pytest

amuse = pytest.importorskip("amuse")

from amuse.units import units

from inner_edge.bodies import create_planetary_system
from inner_edge.config import SimulationConfig, tau_for_migration_duration
from inner_edge.runner import load_results, run_simulation, setup_simulation


class FrozenGravity:
    """Gravity code whose particles only move when kicked."""

    def __init__(self, bodies):
        self.particles = bodies.copy()
        self.model_time = 0 | units.yr
        self.stopped = False

    def evolve_model(self, tend):
        self.model_time = tend

    def stop(self):
        self.stopped = True


def pair_config(tmp_path, **kwargs):
    return SimulationConfig.resonant_pair(end_time=0.2, n_snapshots=4,
                                          output_file=str(tmp_path / "pair.pkl"),
                                          **kwargs)


def test_setup_simulation_uses_given_code(tmp_path):
    config = pair_config(tmp_path)
    bodies = create_planetary_system(config)
    gravity = FrozenGravity(bodies)

    bodies_out, gravity_out, migration, system = setup_simulation(config, bodies, gravity)

    assert bodies_out is bodies
    assert gravity_out is gravity
    assert migration.code is gravity
    assert system.timestep == migration.timestep
    # A tenth of the inner orbital period at 0.3 AU
    period = migration.timestep.value_in(units.yr) / config.kick_fraction
    assert period == pytest.approx(0.3 ** 1.5, rel=1e-2)


def test_run_simulation_result_shapes(tmp_path):
    config = pair_config(tmp_path)
    bodies = create_planetary_system(config)
    gravity = FrozenGravity(bodies)

    results = run_simulation(config, bodies, gravity, verbose=False)

    shape = (config.n_snapshots + 1, 2)
    assert results['names'] == ['b', 'c']
    assert results['sma'].shape == shape
    assert results['ecc'].shape == shape
    assert results['inc'].shape == shape
    np.testing.assert_allclose(results['times'], np.linspace(0, 0.2, 5))
    assert np.all(np.isfinite(results['sma']))
    assert results['sma'][0] == pytest.approx(np.array([0.3, 0.3 * 1.6 ** (2 / 3)]), rel=1e-3)
    assert set(results['summary']) == {'b', 'c', 'time_span'}
    assert gravity.stopped
    assert gravity.model_time > 0 | units.yr

    saved = load_results(config.output_file)
    assert saved['names'] == ['b', 'c']
    np.testing.assert_array_equal(saved['sma'], results['sma'])


def test_run_simulation_moves_migrating_planet_inward(tmp_path):
    config = pair_config(tmp_path, tau_a=-1.0, K=1.)
    bodies = create_planetary_system(config)

    results = run_simulation(config, bodies, FrozenGravity(bodies), verbose=False)

    outer = results['sma'][:, 1]
    assert outer[-1] < outer[0]


class TestCommandLine:

    @pytest.fixture
    def cli(self, monkeypatch):
        import migrate_to_disc_edge
        monkeypatch.setattr(migrate_to_disc_edge, 'run_simulation', lambda config: config)
        return migrate_to_disc_edge

    def parse(self, cli, *args):
        o, arguments = cli.new_option_parser().parse_args(list(args))
        return o

    def test_defaults_build_single_inward_planet(self, cli):
        config = cli.migrate_to_disc_edge(self.parse(cli))
        planet = config.planet_data['b']
        assert list(config.planet_data) == ['b']
        assert planet['a'] == pytest.approx(0.3)
        assert planet['mass'] == pytest.approx(10.)
        assert planet['tau_a'] == pytest.approx(-1.e4)
        assert planet['tau_e'] == pytest.approx(-1.e2)
        assert config.edge.inner_disc_edge == pytest.approx(0.1)
        assert config.edge.disc_edge_width == pytest.approx(0.2)
        assert config.star_mass == pytest.approx(1.)
        assert config.n_snapshots == 500

    def test_migration_time_sets_tau_a(self, cli):
        config = cli.migrate_to_disc_edge(self.parse(cli, "--t_mig", "1000"))
        expected = tau_for_migration_duration(0.3, 0.12, 1000.)
        assert expected < 0
        assert config.planet_data['b']['tau_a'] == pytest.approx(expected)
        assert config.planet_data['b']['tau_e'] == pytest.approx(expected / 100.)

    def test_pair_and_frame(self, cli):
        config = cli.migrate_to_disc_edge(
            self.parse(cli, "--pair", "-K", "50", "--coordinates", "particle",
                       "--dedge", "0.05", "--width", "0.1"))
        assert config.timescales('b').tau_a is None
        assert config.timescales('c').tau_a == pytest.approx(-1.e4)
        assert config.timescales('c').tau_e == pytest.approx(-200.)
        assert config.edge.coordinates.value == 'particle'
        assert config.edge.window == pytest.approx((0.045, 0.055))
