"""Spatial operators, temporal integrators, and their dispatch tables.

Any spatial operator in ``SPATIAL_SCHEMES`` can be driven by any integrator
in ``TEMPORAL_SCHEMES``. CIP is absent from the spatial table: it advances
its own two-field state through ``cip_step``.
"""

from __future__ import annotations

from advect.config import SpatialScheme, TemporalScheme
from advect.schemes.cip import cip_step
from advect.schemes.spatial import central, eno, lax_wendroff, upwind, weno, weno_weights
from advect.schemes.temporal import (
    SpatialOperator,
    forward_euler,
    rk2,
    rk3,
    rk4,
    tvd_rk2,
    tvd_rk3,
    tvd_rk4,
)

SPATIAL_SCHEMES = {
    SpatialScheme.central: central,
    SpatialScheme.upwind: upwind,
    SpatialScheme.lax_wendroff: lax_wendroff,
    SpatialScheme.eno: eno,
    SpatialScheme.weno: weno,
}

TEMPORAL_SCHEMES = {
    TemporalScheme.forward_euler: forward_euler,
    TemporalScheme.rk2: rk2,
    TemporalScheme.rk3: rk3,
    TemporalScheme.rk4: rk4,
    TemporalScheme.tvd_rk2: tvd_rk2,
    TemporalScheme.tvd_rk3: tvd_rk3,
    TemporalScheme.tvd_rk4: tvd_rk4,
}


def get_spatial_scheme(name: SpatialScheme | str) -> SpatialOperator:
    """Look up a spatial operator by enum member or value.

    Raises:
        KeyError: For CIP, which is not a composable operator.
        ValueError: For a name that is not a SpatialScheme value.
    """
    scheme = SpatialScheme(name) if not isinstance(name, SpatialScheme) else name
    if scheme is SpatialScheme.cip:
        raise KeyError("CIP is self-integrating and has no composable spatial operator")
    return SPATIAL_SCHEMES[scheme]


def get_temporal_scheme(name: TemporalScheme | str):
    """Look up a temporal integrator by enum member or value."""
    scheme = TemporalScheme(name) if not isinstance(name, TemporalScheme) else name
    return TEMPORAL_SCHEMES[scheme]


__all__ = [
    "SPATIAL_SCHEMES",
    "TEMPORAL_SCHEMES",
    "SpatialOperator",
    "central",
    "cip_step",
    "eno",
    "forward_euler",
    "get_spatial_scheme",
    "get_temporal_scheme",
    "lax_wendroff",
    "rk2",
    "rk3",
    "rk4",
    "tvd_rk2",
    "tvd_rk3",
    "tvd_rk4",
    "upwind",
    "weno",
    "weno_weights",
]
