"""Grid buffers and the square-pulse initial condition.

A scenario owns exactly one buffer for its lifetime:

- ``FieldBuffer`` — the single field ``u`` used by every scheme except CIP.
- ``CIPBuffer``   — the field ``u`` plus its slope ``g ≈ ∂u/∂x`` evolved by CIP.

The variant is chosen once from the descriptor by ``make_buffer``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from advect.config import Descriptor, round_half_away
from advect.constants import PULSE_HIGH, PULSE_LOW

logger = logging.getLogger(__name__)


def discretize(x: float, delta_x: float, n: int) -> int:
    """Map a coordinate to a node index, clipped to ``[0, n]``."""
    return min(max(round_half_away(x / delta_x), 0), n)


def init_square_wave(n: int, x_1: float, x_2: float, delta_x: float) -> np.ndarray:
    """Square pulse: 1.0 on nodes ``[discretize(x_1), discretize(x_2))``, else 0.0.

    Args:
        n: Node count.
        x_1: Left edge of the pulse.
        x_2: Right edge of the pulse (exclusive).
        delta_x: Grid spacing.

    Returns:
        Float64 array of shape (n,).
    """
    u = np.full(n, PULSE_LOW, dtype=np.float64)
    lower = discretize(x_1, delta_x, n)
    upper = discretize(x_2, delta_x, n)
    u[lower:upper] = PULSE_HIGH
    return u


@dataclass
class FieldBuffer:
    """Single-field buffer for the finite-difference schemes."""

    u: np.ndarray


@dataclass
class CIPBuffer:
    """Value + slope buffer for the CIP scheme."""

    u: np.ndarray
    g: np.ndarray


Buffer = FieldBuffer | CIPBuffer


def make_buffer(desc: Descriptor) -> Buffer:
    """Allocate and initialise the buffer variant matching ``desc.spatial_scheme``.

    The CIP slope starts at zero everywhere; no attempt is made to
    reconstruct the slope of the discontinuous pulse.
    """
    n = desc.num_nodes
    u = init_square_wave(n, desc.x_1, desc.x_2, desc.delta_x)
    if desc.is_cip:
        logger.debug("Allocated CIP buffer with %d nodes", n)
        return CIPBuffer(u=u, g=np.zeros(n, dtype=np.float64))
    logger.debug("Allocated field buffer with %d nodes", n)
    return FieldBuffer(u=u)
