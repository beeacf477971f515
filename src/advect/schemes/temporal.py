"""Multi-stage temporal integrators.

Each integrator has the signature ``advance(u, diff, desc) -> u_next`` where
``diff(u, desc)`` is a spatial operator returning the increment of one
Forward-Euler sub-step (the time step is already folded into it). Stages
read frozen snapshots: ``u`` is never modified and every stage state is a
new array. Each ``diff`` evaluation is computed once and reused wherever the
formula references it.

Formulas (d = diff):
    Forward Euler  u1 = u + d(u)
    RK2            u1 = u + d(u);  u_next = (2u + d(u) + d(u1)) / 2
    RK3            u1 = u + d(u);  u2 = (4u + d(u) + d(u1)) / 4
                   u_next = (6u + d(u) + d(u1) + 4 d(u2)) / 6
    RK4            classical midpoint form, see ``rk4``
    TVD-RK2        u1 = u + d(u);  u_next = (u + u1 + d(u1)) / 2
    TVD-RK3        u1 = u + d(u);  u2 = (3u + u1 + d(u1)) / 4
                   u_next = (u + 2 u2 + 2 d(u2)) / 3
    TVD-RK4        see ``tvd_rk4``
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from advect.config import Descriptor

SpatialOperator = Callable[[np.ndarray, Descriptor], np.ndarray]


def forward_euler(u: np.ndarray, diff: SpatialOperator, desc: Descriptor) -> np.ndarray:
    """Single stage: u + d(u)."""
    return u + diff(u, desc)


def rk2(u: np.ndarray, diff: SpatialOperator, desc: Descriptor) -> np.ndarray:
    """Two-stage Runge-Kutta (Heun form)."""
    d0 = diff(u, desc)
    u1 = u + d0
    d1 = diff(u1, desc)
    return (2.0 * u + d0 + d1) / 2.0


def rk3(u: np.ndarray, diff: SpatialOperator, desc: Descriptor) -> np.ndarray:
    """Three-stage Runge-Kutta."""
    d0 = diff(u, desc)
    u1 = u + d0
    d1 = diff(u1, desc)
    u2 = (4.0 * u + d0 + d1) / 4.0
    d2 = diff(u2, desc)
    return (6.0 * u + d0 + d1 + 4.0 * d2) / 6.0


def rk4(u: np.ndarray, diff: SpatialOperator, desc: Descriptor) -> np.ndarray:
    """Classical four-stage Runge-Kutta in midpoint form.

    u1 = u + d(u)
    u2 = u + d((u + u1) / 2)
    u3 = u + d((u + u2) / 2)
    u4 = u + d(u3)
    u_next = (u1 + 2 u2 + 2 u3 + u4) / 6
    """
    u1 = u + diff(u, desc)
    u01 = (u + u1) / 2.0
    u2 = u + diff(u01, desc)
    u02 = (u + u2) / 2.0
    u3 = u + diff(u02, desc)
    u4 = u + diff(u3, desc)
    return (u1 + 2.0 * u2 + 2.0 * u3 + u4) / 6.0


def tvd_rk2(u: np.ndarray, diff: SpatialOperator, desc: Descriptor) -> np.ndarray:
    """Second-order TVD (SSP) Runge-Kutta."""
    u1 = u + diff(u, desc)
    return (u + u1 + diff(u1, desc)) / 2.0


def tvd_rk3(u: np.ndarray, diff: SpatialOperator, desc: Descriptor) -> np.ndarray:
    """Third-order TVD (SSP) Runge-Kutta, Shu-Osher form."""
    u1 = u + diff(u, desc)
    u2 = (3.0 * u + u1 + diff(u1, desc)) / 4.0
    return (u + 2.0 * u2 + 2.0 * diff(u2, desc)) / 3.0


def tvd_rk4(u: np.ndarray, diff: SpatialOperator, desc: Descriptor) -> np.ndarray:
    """Fourth-order TVD Runge-Kutta.

    u1 = (2u + d(u)) / 2
    u2 = (2u - d(u) + 2 u1 + 2 d(u1)) / 4
    u3 = (u - d(u) + 2 u1 - 3 d(u1) + 6 u2 + 9 d(u2)) / 9
    u_next = (2 u1 + d(u1) + 2 u2 + 2 u3 + d(u3)) / 6
    """
    d0 = diff(u, desc)
    u1 = (2.0 * u + d0) / 2.0
    d1 = diff(u1, desc)
    u2 = (2.0 * u - d0 + 2.0 * u1 + 2.0 * d1) / 4.0
    d2 = diff(u2, desc)
    u3 = (u - d0 + 2.0 * u1 - 3.0 * d1 + 6.0 * u2 + 9.0 * d2) / 9.0
    d3 = diff(u3, desc)
    return (2.0 * u1 + d1 + 2.0 * u2 + 2.0 * u3 + d3) / 6.0
