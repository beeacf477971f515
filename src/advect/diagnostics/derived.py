"""Derived diagnostic quantities for comparing schemes.

Functions are pure numpy — no Numba needed since these are called once
per step or per snapshot, not per node.
"""

from __future__ import annotations

import numpy as np


def total_mass(u: np.ndarray, dx: float, interior: int = 0) -> float:
    """Discrete integral sum(u) * dx, optionally dropping ``interior`` nodes at each end.

    Args:
        u: Field values, shape (n,).
        dx: Grid spacing.
        interior: Number of boundary nodes excluded on each side.

    Returns:
        Scalar mass.
    """
    if interior > 0:
        u = u[interior:-interior]
    return float(np.sum(u) * dx)


def total_variation(u: np.ndarray) -> float:
    """Total variation sum |u[i+1] - u[i]|."""
    if u.size < 2:
        return 0.0
    return float(np.sum(np.abs(np.diff(u))))


def overshoot(u: np.ndarray, low: float = 0.0, high: float = 1.0) -> float:
    """Largest excursion outside [low, high] (0 for a bounded field).

    Useful for spotting the dispersive ringing of Central, Lax-Wendroff
    and CIP around the pulse edges.
    """
    if u.size == 0:
        return 0.0
    above = float(np.max(u)) - high
    below = low - float(np.min(u))
    return max(above, below, 0.0)


def summarize(u: np.ndarray, dx: float) -> dict[str, float]:
    """Scalar summary used by step results and HDF5 time series."""
    if u.size == 0:
        return dict.fromkeys(("mass", "total_variation", "u_min", "u_max", "overshoot"), 0.0)
    return {
        "mass": total_mass(u, dx),
        "total_variation": total_variation(u),
        "u_min": float(np.min(u)),
        "u_max": float(np.max(u)),
        "overshoot": overshoot(u),
    }
