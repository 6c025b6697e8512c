"""
Simulation runner for inner disc edge migration.

Handles:
- Setting up the gravity code and the migration bridge
- Running the simulation loop
- Saving and loading results
"""

import os
import pickle
from datetime import datetime
from typing import Dict

import numpy as np
from tqdm import tqdm
from amuse.units import units, nbody_system
from amuse.couple import bridge

from .config import SimulationConfig
from .bodies import create_planetary_system, semi_to_orbital_period
from .integrators import CodeWithDiscEdgeMigration
from .analysis import compute_orbital_elements, summarize_migration


def load_results(filename: str) -> Dict:
    """
    Load simulation results from a pickle file.

    Args:
        filename: Path to pickle file

    Returns:
        Dictionary containing simulation results
    """
    print(f"Loading results from {filename}...")
    with open(filename, 'rb') as f:
        data = pickle.load(f)
    print(f"  Time range: {data['times'][0]:.1f} - {data['times'][-1]:.1f} yr")
    print(f"  Snapshots: {len(data['times'])}")
    return data


def save_results(filename: str, results: Dict) -> None:
    """
    Save simulation results to a pickle file.

    Args:
        filename: Output path
        results: Dictionary produced by run_simulation
    """
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, 'wb') as f:
        pickle.dump(results, f)
    print(f"Results saved to {filename}")


def setup_simulation(config: SimulationConfig, bodies=None, gravity=None):
    """
    Set up the gravity code and the migration bridge.

    Args:
        config: Simulation configuration
        bodies: Pre-existing star + planets (created from config if None)
        gravity: Gravity code holding the bodies (ph4 if None)

    Returns:
        Tuple of (bodies, gravity, migration_code, system)
    """
    if bodies is None:
        bodies = create_planetary_system(config)

    star = bodies[bodies.type == 'star'][0]
    planets = bodies[bodies.type == 'planet']
    inner_orbit = compute_orbital_elements(planets[0], star)
    P_inner = semi_to_orbital_period(inner_orbit['a'] | units.AU,
                                     star.mass + planets[0].mass)

    if gravity is None:
        from amuse.community.ph4.interface import ph4
        converter = nbody_system.nbody_to_si(bodies.mass.sum(), P_inner)
        gravity = ph4(convert_nbody=converter)
        gravity.parameters.timestep_parameter = config.timestep_parameter
        gravity.particles.add_particles(bodies)

    migration_code = CodeWithDiscEdgeMigration(
                        gravity,
                        bodies,
                        config.edge,
                        do_sync=True,
                        verbose=False
                        )
    migration_code.timestep = config.kick_fraction * P_inner

    system = bridge.Bridge(use_threading=False)
    system.add_system(gravity)
    system.add_code(migration_code)
    system.timestep = migration_code.timestep

    return bodies, gravity, migration_code, system


def run_simulation(config: SimulationConfig,
                   bodies=None,
                   gravity=None,
                   verbose: bool = True) -> Dict:
    """
    Run a migration simulation and record the planets' orbits.

    Args:
        config: Simulation configuration
        bodies: Pre-existing star + planets (created from config if None)
        gravity: Gravity code holding the bodies (ph4 if None)
        verbose: Print progress updates

    Returns:
        Dictionary containing simulation results
    """
    bodies, gravity, migration_code, system = setup_simulation(config, bodies, gravity)

    star = bodies[bodies.type == 'star'][0]
    planets = bodies[bodies.type == 'planet']
    names = list(planets.name)

    end_time = config.end_time | units.yr
    times = np.linspace(0, config.end_time, config.n_snapshots + 1)
    sma = np.zeros((len(times), len(planets)))
    ecc = np.zeros((len(times), len(planets)))
    inc = np.zeros((len(times), len(planets)))

    if verbose:
        print("=" * 60)
        print(f"Running inner disc edge migration: {config.name}")
        print("=" * 60)
        print(f"Duration: {config.end_time:.0f} years")
        print(f"Snapshots: {config.n_snapshots}")
        print(f"Planets: {', '.join(names)}")
        if config.edge.trap_enabled:
            print(f"Inner disc edge: {config.edge.inner_disc_edge} AU, "
                  f"width {config.edge.disc_edge_width}")
        print(f"Kick timestep: {migration_code.timestep.in_(units.yr)}")
        print("=" * 60)

    start_time = datetime.now()
    channel_from_gravity = gravity.particles.new_channel_to(bodies)

    for k, t in enumerate(tqdm(times, disable=not verbose)):
        if k > 0:
            system.evolve_model(min(t | units.yr, end_time))
            channel_from_gravity.copy()
        for j, planet in enumerate(planets):
            orbit = compute_orbital_elements(planet, star)
            sma[k, j] = orbit['a']
            ecc[k, j] = orbit['e']
            inc[k, j] = orbit['i']

    gravity.stop()

    elapsed = (datetime.now() - start_time).total_seconds()
    summary = summarize_migration(times, sma, names, config.edge)

    results = {
        'times': times,
        'names': names,
        'sma': sma,
        'ecc': ecc,
        'inc': inc,
        'bodies': bodies.copy(),
        'summary': summary,
        'config': config,
        'elapsed_seconds': elapsed,
    }
    save_results(config.output_file, results)

    if verbose:
        print("=" * 60)
        print("Simulation Complete!")
        print(f"  Time: {elapsed:.1f} seconds")
        for name in names:
            entry = summary[name]
            line = f"  {name}: a = {entry['initial_a']:.4f} -> {entry['final_a']:.4f} AU"
            if 'trapped' in entry:
                line += " (trapped)" if entry['trapped'] else ""
            print(line)
        print(f"  Output: {config.output_file}")
        print("=" * 60)

    return results
