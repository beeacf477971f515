"""Pydantic v2 configuration for advection scenarios.

``Descriptor`` is the parameter record that both buffer construction and
every scheme kernel consult. ``RunConfig`` wraps it with batch-run settings
(step count, diagnostics output) and supports JSON I/O.
"""

from __future__ import annotations

import enum
import json
import math
from pathlib import Path

import numpy as np
from pydantic import BaseModel, Field, model_validator


class SpatialScheme(str, enum.Enum):
    """Spatial difference operator."""

    central = "central"
    upwind = "upwind"
    lax_wendroff = "lax_wendroff"
    eno = "eno"
    weno = "weno"
    cip = "cip"


class TemporalScheme(str, enum.Enum):
    """Multi-stage time advance formula (ignored by CIP)."""

    forward_euler = "forward_euler"
    rk2 = "rk2"
    rk3 = "rk3"
    rk4 = "rk4"
    tvd_rk2 = "tvd_rk2"
    tvd_rk3 = "tvd_rk3"
    tvd_rk4 = "tvd_rk4"


def round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


class Descriptor(BaseModel):
    """Grid, pulse, velocity and scheme selection for one scenario."""

    time_scale: float = Field(1.0, gt=0, description="Wall-clock speed multiplier (driver only)")
    delta_t: float = Field(0.01666, ge=0, description="Time step size")
    delta_x: float = Field(0.05, gt=0, description="Grid spacing")
    bound: float = Field(10.0, ge=0, description="Domain length")
    x_1: float = Field(2.0, ge=0, description="Left edge of the initial pulse")
    x_2: float = Field(4.0, ge=0, description="Right edge of the initial pulse")
    vel: float = Field(1.0, description="Advection velocity (signed)")
    spatial_scheme: SpatialScheme = Field(SpatialScheme.weno, description="Spatial scheme")
    temporal_scheme: TemporalScheme = Field(
        TemporalScheme.forward_euler,
        description="Temporal integrator (not used by CIP)",
    )

    @model_validator(mode="after")
    def check_pulse(self) -> Descriptor:
        if self.x_1 >= self.x_2:
            raise ValueError(f"x_1 must be less than x_2, got x_1={self.x_1}, x_2={self.x_2}")
        return self

    # --- Derived quantities ---

    @property
    def num_nodes(self) -> int:
        """Grid node count n = round(bound / delta_x)."""
        return max(round_half_away(self.bound / self.delta_x), 0)

    @property
    def cfl(self) -> float:
        """Courant number |v| dt / dx."""
        return abs(self.vel) * self.delta_t / self.delta_x

    @property
    def is_cip(self) -> bool:
        return self.spatial_scheme is SpatialScheme.cip

    def positions(self) -> np.ndarray:
        """Node coordinates i * delta_x."""
        return np.arange(self.num_nodes) * self.delta_x


class DiagnosticsConfig(BaseModel):
    """Diagnostics output parameters."""

    hdf5_filename: str = Field("advect.h5", description="Output HDF5 file")
    output_interval: int = Field(1, gt=0, description="Steps between scalar records")
    field_output_interval: int = Field(
        0, ge=0,
        description="Records between field snapshots in HDF5 (0 = off)",
    )


class RunConfig(BaseModel):
    """Top-level batch-run configuration."""

    descriptor: Descriptor = Field(default_factory=Descriptor)
    steps: int = Field(100, ge=1, description="Number of forward() calls")
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)

    # --- I/O helpers ---

    @classmethod
    def from_file(cls, path: str | Path) -> RunConfig:
        """Load configuration from a JSON file."""
        path = Path(path)
        with path.open() as f:
            data = json.load(f)
        return cls(**data)

    def to_json(self, path: str | Path | None = None) -> str:
        """Serialize to JSON string, optionally writing to file."""
        out = self.model_dump_json(indent=2)
        if path is not None:
            Path(path).write_text(out)
        return out
