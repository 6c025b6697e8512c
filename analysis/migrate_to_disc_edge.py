#!/usr/bin/env python


from amuse.io import write_set_to_file
from amuse.units import units

from inner_edge.config import (DiscEdgeConfig, SimulationConfig,
                               tau_for_migration_duration)
from inner_edge.runner import run_simulation
from inner_edge.visualization import plot_semimajor_axis_evolution


def migrate_to_disc_edge(o):
    """
    Let planets migrate onto the inner disc edge.
    Args:
        o: Parsed command line options.
    Returns:
        dict: Simulation results.
    """
    edge = DiscEdgeConfig(inner_disc_edge=o.dedge.value_in(units.au),
                          disc_edge_width=o.h,
                          coordinates=o.coordinates)
    if o.t_mig > 0|units.yr:
        # Reach the outer rim of the edge window in t_mig
        o.tau_a = tau_for_migration_duration(
                    o.semimajor_axis.value_in(units.au),
                    edge.window[1],
                    o.t_mig.value_in(units.yr)) | units.yr
        print(f"tau_a = {o.tau_a.in_(units.yr)}")
    if o.pair:
        config = SimulationConfig.resonant_pair(
                    a_inner=o.semimajor_axis.value_in(units.au),
                    tau_a=o.tau_a.value_in(units.yr),
                    K=o.K,
                    end_time=o.t_end.value_in(units.yr),
                    n_snapshots=o.n_steps)
    else:
        config = SimulationConfig.single_planet(
                    a=o.semimajor_axis.value_in(units.au),
                    mass=o.mplanet.value_in(units.MEarth),
                    tau_a=o.tau_a.value_in(units.yr),
                    tau_e=o.tau_a.value_in(units.yr)/o.K,
                    end_time=o.t_end.value_in(units.yr),
                    n_snapshots=o.n_steps)
    config.edge = edge
    config.star_mass = o.Mstar.value_in(units.MSun)
    return run_simulation(config)


def new_option_parser():
    from amuse.units.optparse import OptionParser
    result = OptionParser()
    result.add_option("-a", dest="semimajor_axis", type="float", unit=units.au,
                      default = 0.3|units.au,
                      help="semi-major axis of the (inner) planet [%default]")
    result.add_option("-m", dest="mplanet", type="float", unit=units.MEarth,
                      default = 10|units.MEarth,
                      help="mass of the planet [%default]")
    result.add_option("-M", dest="Mstar", type="float", unit=units.MSun,
                      default = 1|units.MSun,
                      help="mass of the star [%default]")
    result.add_option("--dedge", dest="dedge", type="float", unit=units.au,
                      default = 0.1|units.au,
                      help="radius of the inner disc edge [%default]")
    result.add_option("--width", dest="h", type="float",
                      default = 0.2,
                      help="fractional half-width of the disc edge [%default]")
    result.add_option("--tau", dest="tau_a", type="float", unit=units.yr,
                      default = -1.e4|units.yr,
                      help="semi-major axis migration timescale, negative for inward [%default]")
    result.add_option("--t_mig", dest="t_mig", type="float", unit=units.yr,
                      default = 0|units.yr,
                      help="time to reach the disc edge, overrides --tau [%default]")
    result.add_option("-K", dest="K", type="float",
                      default = 100.,
                      help="ratio tau_a/tau_e [%default]")
    result.add_option("--coordinates", dest="coordinates",
                      default = "jacobi",
                      help="jacobi, barycentric or particle [%default]")
    result.add_option("--pair", dest="pair", action="store_true",
                      default = False,
                      help="migrate a pair of planets into resonance [%default]")
    result.add_option("-t", dest="t_end", type="float", unit=units.yr,
                      default = 5.e4|units.yr,
                      help="end time [%default]")
    result.add_option("-n", dest="n_steps", type="int",
                      default = 500,
                      help="number of snapshots [%default]")
    result.add_option("-F", dest="outfilename",
                      default = "inner_edge_migration.amuse",
                      help="output filename [%default]")
    result.add_option("--plot", dest="plot", default = "",
                      help="save the semi-major axis plot to this file [%default]")
    return result

if __name__ in ('__main__', '__plot__'):
    o, arguments  = new_option_parser().parse_args()

    results = migrate_to_disc_edge(o)

    if o.plot:
        plot_semimajor_axis_evolution(results['times'], results['sma'],
                                      results['names'], results['config'].edge,
                                      save_path=o.plot)

    write_set_to_file(results['bodies'],
                      o.outfilename,
                      "hdf5",
                      overwrite_file=True,
                      append_to_file=False)
