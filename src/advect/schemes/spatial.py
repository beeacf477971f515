"""Spatial difference operators for 1D linear advection.

Every operator has the signature ``diff(u, desc) -> increment`` and returns
a fresh array approximating ``-v * dt * du/dx`` at each node, i.e. one
explicit Forward-Euler sub-step of advection. Nodes without a full stencil
receive an exact zero increment, which freezes the boundaries.

Valid ranges (n = len(u)):
    central, lax_wendroff   1 <= i < n-1
    upwind (v >= 0)         1 <= i
    upwind (v < 0)          i < n-1
    eno, weno               3 <= i < n-3

The first three operators are vectorized slices. ENO and WENO branch per
node and run as Numba kernels.
"""

from __future__ import annotations

import numpy as np
from numba import njit

from advect.config import Descriptor
from advect.constants import ENO_MARGIN, WENO_C1, WENO_C2, WENO_C3, WENO_EPS, WENO_MARGIN

# ============================================================
# Low-order operators (vectorized)
# ============================================================


def _shift(desc: Descriptor) -> float:
    """Upwind shift p = -v * dt."""
    return -desc.vel * desc.delta_t


def central(u: np.ndarray, desc: Descriptor) -> np.ndarray:
    """Second-order central difference ``p * (u[i+1] - u[i-1]) / (2 dx)``."""
    p = _shift(desc)
    u = np.ascontiguousarray(u, dtype=np.float64)
    inc = np.zeros_like(u)
    inc[1:-1] = p * (u[2:] - u[:-2]) / (2.0 * desc.delta_x)
    return inc


def upwind(u: np.ndarray, desc: Descriptor) -> np.ndarray:
    """First-order upwind difference, backward for v >= 0, forward for v < 0."""
    p = _shift(desc)
    u = np.ascontiguousarray(u, dtype=np.float64)
    inc = np.zeros_like(u)
    grad = (u[1:] - u[:-1]) / desc.delta_x
    if desc.vel >= 0:
        inc[1:] = p * grad
    else:
        inc[:-1] = p * grad
    return inc


def lax_wendroff(u: np.ndarray, desc: Descriptor) -> np.ndarray:
    """Central first derivative plus the Lax-Wendroff second-derivative correction.

    increment = p * grad1 + p^2 * grad2, with
    grad1 = (u[i+1] - u[i-1]) / (2 dx) and
    grad2 = (u[i+1] - 2 u[i] + u[i-1]) / (2 dx^2).
    """
    p = _shift(desc)
    dx = desc.delta_x
    u = np.ascontiguousarray(u, dtype=np.float64)
    inc = np.zeros_like(u)
    grad1 = (u[2:] - u[:-2]) / (2.0 * dx)
    grad2 = (u[2:] - 2.0 * u[1:-1] + u[:-2]) / (2.0 * dx * dx)
    inc[1:-1] = p * grad1 + p * p * grad2
    return inc


# ============================================================
# ENO (adaptive stencil, up to third-order correction)
# ============================================================

@njit(cache=True)
def _d1h(u: np.ndarray, i: int, dx: float) -> float:
    return (u[i + 1] - u[i]) / dx


@njit(cache=True)
def _d2m(u: np.ndarray, i: int, dx: float) -> float:
    return (_d1h(u, i, dx) - _d1h(u, i - 1, dx)) / (2.0 * dx)


@njit(cache=True)
def _d3h(u: np.ndarray, i: int, dx: float) -> float:
    return (_d2m(u, i + 1, dx) - _d2m(u, i, dx)) / (3.0 * dx)


@njit(cache=True)
def _eno_kernel(u: np.ndarray, dx: float, p: float, left_biased: bool) -> np.ndarray:
    """ENO derivative times p at every node with a full stencil.

    The base stencil starts at k = i-1 (left-biased, v >= 0) or k = i.
    It grows toward the side with the smaller divided difference; exact
    ties keep the left stencil.

    Args:
        u: Field values, shape (n,).
        dx: Grid spacing.
        p: Shift -v * dt.
        left_biased: True when v >= 0.

    Returns:
        Increment array, shape (n,).
    """
    n = len(u)
    inc = np.zeros(n)
    for i in range(ENO_MARGIN, n - ENO_MARGIN):
        k = i - 1 if left_biased else i

        q1 = _d1h(u, k, dx)

        d2_left = _d2m(u, k, dx)
        d2_right = _d2m(u, k + 1, dx)
        if abs(d2_right) >= abs(d2_left):
            c2 = d2_left
            l = k - 1
        else:
            c2 = d2_right
            l = k
        q2 = c2 * (2.0 * (i - k) - 1.0) * dx

        d3_left = _d3h(u, l, dx)
        d3_right = _d3h(u, l + 1, dx)
        if abs(d3_right) >= abs(d3_left):
            c3 = d3_left
        else:
            c3 = d3_right
        m = i - l
        q3 = c3 * (3.0 * m * m - 6.0 * m + 2.0) * dx * dx

        inc[i] = p * (q1 + q2 + q3)
    return inc


def eno(u: np.ndarray, desc: Descriptor) -> np.ndarray:
    """Essentially non-oscillatory difference on nodes 3 <= i < n-3."""
    u = np.ascontiguousarray(u, dtype=np.float64)
    return _eno_kernel(u, desc.delta_x, _shift(desc), desc.vel >= 0)


# ============================================================
# WENO (Jiang-Shu weighted blend of three 3rd-order stencils)
# ============================================================

@njit(cache=True)
def _weno_blend(
    v1: float, v2: float, v3: float, v4: float, v5: float,
) -> tuple[float, float, float, float]:
    """Blend five one-sided differences; returns (derivative, w1, w2, w3)."""
    u1 = v1 / 3.0 - 7.0 * v2 / 6.0 + 11.0 * v3 / 6.0
    u2 = -v2 / 6.0 + 5.0 * v3 / 6.0 + v4 / 3.0
    u3 = v3 / 3.0 + 5.0 * v4 / 6.0 - v5 / 6.0

    s1 = (13.0 / 12.0) * (v1 - 2.0 * v2 + v3) ** 2 + 0.25 * (v1 - 4.0 * v2 + 3.0 * v3) ** 2
    s2 = (13.0 / 12.0) * (v2 - 2.0 * v3 + v4) ** 2 + 0.25 * (v2 - v4) ** 2
    s3 = (13.0 / 12.0) * (v3 - 2.0 * v4 + v5) ** 2 + 0.25 * (3.0 * v3 - 4.0 * v4 + v5) ** 2

    a1 = WENO_C1 / (s1 + WENO_EPS) ** 2
    a2 = WENO_C2 / (s2 + WENO_EPS) ** 2
    a3 = WENO_C3 / (s3 + WENO_EPS) ** 2
    a_sum = a1 + a2 + a3

    w1 = a1 / a_sum
    w2 = a2 / a_sum
    w3 = a3 / a_sum
    return w1 * u1 + w2 * u2 + w3 * u3, w1, w2, w3


@njit(cache=True)
def _weno_kernel(
    u: np.ndarray, dx: float, p: float, left_biased: bool,
) -> tuple[np.ndarray, np.ndarray]:
    """WENO increment and nonlinear weights at every node with a full stencil.

    With d1l(j) = (u[j] - u[j-1]) / dx, the left-biased stencil (v >= 0)
    reads d1l(i-2) .. d1l(i+2). For v < 0 the kernel uses the upwind
    mirror of that stencil, d1l(i+3) .. d1l(i-1), fed through the same
    blend; it is not a separate formula.

    Returns:
        (increment, weights) with shapes (n,) and (n, 3).
    """
    n = len(u)
    inc = np.zeros(n)
    weights = np.zeros((n, 3))
    for i in range(WENO_MARGIN, n - WENO_MARGIN):
        if left_biased:
            v1 = (u[i - 2] - u[i - 3]) / dx
            v2 = (u[i - 1] - u[i - 2]) / dx
            v3 = (u[i] - u[i - 1]) / dx
            v4 = (u[i + 1] - u[i]) / dx
            v5 = (u[i + 2] - u[i + 1]) / dx
        else:
            v1 = (u[i + 3] - u[i + 2]) / dx
            v2 = (u[i + 2] - u[i + 1]) / dx
            v3 = (u[i + 1] - u[i]) / dx
            v4 = (u[i] - u[i - 1]) / dx
            v5 = (u[i - 1] - u[i - 2]) / dx

        deriv, w1, w2, w3 = _weno_blend(v1, v2, v3, v4, v5)
        inc[i] = p * deriv
        weights[i, 0] = w1
        weights[i, 1] = w2
        weights[i, 2] = w3
    return inc, weights


def weno(u: np.ndarray, desc: Descriptor) -> np.ndarray:
    """Weighted essentially non-oscillatory difference on nodes 3 <= i < n-3."""
    u = np.ascontiguousarray(u, dtype=np.float64)
    inc, _ = _weno_kernel(u, desc.delta_x, _shift(desc), desc.vel >= 0)
    return inc


def weno_weights(u: np.ndarray, desc: Descriptor) -> np.ndarray:
    """Nonlinear WENO weights (w1, w2, w3) per node; zero rows outside 3 <= i < n-3."""
    u = np.ascontiguousarray(u, dtype=np.float64)
    _, weights = _weno_kernel(u, desc.delta_x, _shift(desc), desc.vel >= 0)
    return weights
