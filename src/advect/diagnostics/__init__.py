"""Diagnostics: derived scalar quantities and HDF5 output."""

from advect.diagnostics.derived import overshoot, summarize, total_mass, total_variation
from advect.diagnostics.hdf5_writer import HDF5Writer

__all__ = [
    "HDF5Writer",
    "overshoot",
    "summarize",
    "total_mass",
    "total_variation",
]
