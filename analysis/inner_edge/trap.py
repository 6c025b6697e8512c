"""
Planet trap at the inner edge of a protoplanetary disc.

The migration rate of a body is multiplied by a factor that depends on its
semimajor axis relative to the disc edge. Far outside the edge the factor is
1 (unperturbed inward migration); across the edge it falls along half a
cosine period to -10, reversing the migration so bodies cannot drift onto the
star (Pichierri et al. 2018).
"""

import numpy as np


TRAP_OUTSIDE = 1.0
TRAP_FLOOR = -10.0


def planet_trap(r, h, dedge):
    """
    Migration-rate multiplier for a body at orbital radius r.

    Args:
        r (float or array): Orbital radius (usually the semimajor axis).
        h (float): Fractional half-width of the edge transition zone, > 0.
        dedge (float): Radius of the inner disc edge, > 0.

    Returns:
        float or array: Multiplier in [-10, 1], same shape as r.
    """
    r = np.asarray(r, dtype=float)
    outer = dedge * (1.0 + h)
    inner = dedge * (1.0 - h)

    # Only radii inside the window reach the cosine
    r_window = np.clip(r, inner, outer)
    phase = ((outer - r_window) * 2 * np.pi) / (4 * h * dedge)
    transition = 5.5 * np.cos(phase) - 4.5

    factor = np.where(r > outer, TRAP_OUTSIDE,
                      np.where(r > inner, transition, TRAP_FLOOR))

    if factor.ndim == 0:
        return float(factor)
    return factor


def trap_equilibrium_radius(h, dedge):
    """
    Radius inside the edge window where the multiplier vanishes.

    A body migrating inward stalls here: outside it migrates in, inside it is
    pushed back out.
    """
    phase = np.arccos(4.5 / 5.5)
    return dedge * (1.0 + h - 2.0 * h * phase / np.pi)
