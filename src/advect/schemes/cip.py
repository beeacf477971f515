"""Cubic-Interpolated Propagation (CIP).

CIP evolves the value ``u`` together with its slope ``g ≈ ∂u/∂x``. On the
interval [i-1, i] a cubic profile

    F(X) = a X^3 + b X^2 + g[i] X + u[i],   X = x - x_i,

is fitted to u and g at both ends, then evaluated (with its derivative) at
the departure point X = p = -v * dt. The update is its own time integrator,
so CIP never goes through the Runge-Kutta table.
"""

from __future__ import annotations

import numpy as np
from numba import njit

from advect.config import Descriptor


@njit(cache=True)
def _cip_kernel(
    u: np.ndarray, g: np.ndarray, dx: float, p: float,
) -> tuple[np.ndarray, np.ndarray]:
    """One CIP step on nodes 1..n-1; node 0 is copied unchanged.

    Args:
        u: Field values, shape (n,).
        g: Field slopes, shape (n,).
        dx: Grid spacing.
        p: Shift -v * dt.

    Returns:
        (u_next, g_next), each shape (n,).
    """
    n = len(u)
    u_next = u.copy()
    g_next = g.copy()
    d = -dx
    d2 = d * d
    d3 = d2 * d
    for i in range(1, n):
        du = u[i - 1] - u[i]
        a = (g[i] + g[i - 1]) / d2 - 2.0 * du / d3
        b = 3.0 * du / d2 - (2.0 * g[i] + g[i - 1]) / d
        c = g[i]
        u_next[i] = a * p * p * p + b * p * p + c * p + u[i]
        g_next[i] = 3.0 * a * p * p + 2.0 * b * p + c
    return u_next, g_next


def cip_step(u: np.ndarray, g: np.ndarray, desc: Descriptor) -> tuple[np.ndarray, np.ndarray]:
    """Advance (u, g) by one step of size ``desc.delta_t``.

    Inputs are not modified; fresh arrays are returned.
    """
    u = np.ascontiguousarray(u, dtype=np.float64)
    g = np.ascontiguousarray(g, dtype=np.float64)
    return _cip_kernel(u, g, desc.delta_x, -desc.vel * desc.delta_t)
