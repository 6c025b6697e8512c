"""
Visualization functions for inner disc edge migration runs.

- Trap profile (migration-rate multiplier vs radius)
- Semimajor axis evolution with the edge window
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import List, Optional

from .config import DiscEdgeConfig
from .trap import planet_trap, trap_equilibrium_radius


PLANET_COLORS = ['tab:blue', 'tab:orange', 'tab:green', 'tab:red',
                 'tab:purple', 'tab:brown']


def _draw_edge_window(ax, edge: DiscEdgeConfig, horizontal: bool = False):
    """Shade the edge transition zone and mark the stalling radius."""
    inner, outer = edge.window
    r_eq = trap_equilibrium_radius(edge.disc_edge_width, edge.inner_disc_edge)
    if horizontal:
        ax.axhspan(inner, outer, color='gray', alpha=0.2, label='Disc edge')
        ax.axhline(r_eq, color='k', linestyle='--', linewidth=1, label='Trap')
    else:
        ax.axvspan(inner, outer, color='gray', alpha=0.2, label='Disc edge')
        ax.axvline(r_eq, color='k', linestyle='--', linewidth=1, label='Trap')


def plot_trap_profile(edge: DiscEdgeConfig,
                      r_max: Optional[float] = None,
                      n_points: int = 500,
                      ax: Optional[plt.Axes] = None) -> plt.Figure:
    """
    Plot the migration-rate multiplier against orbital radius.

    Args:
        edge: Disc edge parameters (trap must be enabled)
        r_max: Largest radius shown (defaults to twice the outer window edge)
        n_points: Number of sample radii
        ax: Matplotlib axes (creates new figure if None)

    Returns:
        Matplotlib figure
    """
    if not edge.trap_enabled:
        raise ValueError("Trap profile needs inner_disc_edge and disc_edge_width")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    else:
        fig = ax.figure

    if r_max is None:
        r_max = 2 * edge.window[1]
    r = np.linspace(0, r_max, n_points)
    factor = planet_trap(r, edge.disc_edge_width, edge.inner_disc_edge)

    ax.plot(r, factor, 'b-', linewidth=2)
    ax.axhline(0, color='gray', linewidth=0.5)
    _draw_edge_window(ax, edge)

    ax.set_xlabel('r (AU)', fontsize=12)
    ax.set_ylabel('Migration rate multiplier', fontsize=12)
    ax.set_title(f'Planet trap (edge = {edge.inner_disc_edge} AU, '
                 f'h = {edge.disc_edge_width})', fontsize=14)
    ax.legend(loc='lower right')
    ax.grid(True, alpha=0.3)

    return fig


def plot_semimajor_axis_evolution(times: List[float],
                                  sma: np.ndarray,
                                  names: List[str],
                                  edge: Optional[DiscEdgeConfig] = None,
                                  save_path: Optional[str] = None,
                                  ax: Optional[plt.Axes] = None) -> plt.Figure:
    """
    Plot semimajor axes of all planets over time.

    Args:
        times: Snapshot times (years)
        sma: Semimajor axes, shape (n_snapshots, n_planets), in AU
        names: Planet names
        edge: Disc edge, shaded if the trap is enabled
        save_path: Path to save figure (optional)
        ax: Matplotlib axes (creates new figure if None)

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))
    else:
        fig = ax.figure

    sma = np.atleast_2d(np.asarray(sma, dtype=float))
    times_kyr = np.array(times) / 1000

    for k, name in enumerate(names):
        color = PLANET_COLORS[k % len(PLANET_COLORS)]
        ax.plot(times_kyr, sma[:, k], color=color, linewidth=2, label=name)

    if edge is not None and edge.trap_enabled:
        _draw_edge_window(ax, edge, horizontal=True)

    ax.set_xlabel('Time (kyr)', fontsize=12)
    ax.set_ylabel('a (AU)', fontsize=12)
    ax.set_title('Semimajor axis evolution', fontsize=14)
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved: {save_path}")

    return fig
