"""HDF5 time-series diagnostics writer.

Records scalar summaries (mass, total variation, extrema) at each output
step and optional field snapshots into an HDF5 file for post-processing.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from advect.core.bases import DiagnosticsBase
from advect.diagnostics.derived import summarize

logger = logging.getLogger(__name__)

try:
    import h5py

    HAS_H5PY = True
except ImportError:
    HAS_H5PY = False
    logger.warning("h5py not available; HDF5 diagnostics disabled")

# Field names to include in snapshots
_SNAPSHOT_FIELDS = ("u", "g")


class HDF5Writer(DiagnosticsBase):
    """Write scenario diagnostics to an HDF5 file.

    Creates datasets for:
    - Scalar time series: time, mass, total_variation, u_min, u_max, overshoot
    - Field snapshots (optional): u and, for CIP, g

    Args:
        filename: Output HDF5 file path.
        dx: Grid spacing, used for the mass integral.
        field_output_interval: Write full field data every N record calls (0 = never).
        attrs: Extra file attributes (e.g. the descriptor as JSON).
    """

    def __init__(
        self,
        filename: str = "advect.h5",
        dx: float = 1.0,
        field_output_interval: int = 0,
        attrs: dict[str, Any] | None = None,
    ) -> None:
        self.filename = filename
        self.dx = dx
        self.field_output_interval = field_output_interval
        self.attrs = dict(attrs or {})
        self._call_count = 0
        self._scalars: dict[str, list] = {
            "time": [],
            "mass": [],
            "total_variation": [],
            "u_min": [],
            "u_max": [],
            "overshoot": [],
        }
        self._field_snapshots: list[dict[str, Any]] = []

    @property
    def num_records(self) -> int:
        return self._call_count

    @property
    def num_snapshots(self) -> int:
        return len(self._field_snapshots)

    def record(self, state: dict[str, Any], time: float) -> None:
        """Record diagnostics from the current scenario state.

        Args:
            state: Dictionary with key 'u' and, for CIP, 'g'.
            time: Current simulated time.
        """
        self._call_count += 1

        u = np.asarray(state["u"])
        self._scalars["time"].append(time)
        for key, val in summarize(u, self.dx).items():
            self._scalars[key].append(val)

        # === Field snapshots ===
        if (
            self.field_output_interval > 0
            and self._call_count % self.field_output_interval == 0
        ):
            snapshot: dict[str, Any] = {"time": time}
            for field_name in _SNAPSHOT_FIELDS:
                arr = state.get(field_name)
                if arr is not None and isinstance(arr, np.ndarray):
                    snapshot[field_name] = arr.copy()
            self._field_snapshots.append(snapshot)
            logger.debug(
                "Captured field snapshot %d at t=%.4e",
                len(self._field_snapshots), time,
            )

    def finalize(self) -> None:
        """Write all accumulated data to the HDF5 file."""
        if not HAS_H5PY:
            logger.warning("Cannot write HDF5: h5py not installed")
            return

        logger.info("Writing diagnostics to %s", self.filename)
        with h5py.File(self.filename, "w") as f:
            grp = f.create_group("scalars")
            for key, values in self._scalars.items():
                grp.create_dataset(key, data=np.array(values, dtype=np.float64))

            if self._field_snapshots:
                fields_grp = f.create_group("fields")
                for idx, snap in enumerate(self._field_snapshots):
                    snap_grp = fields_grp.create_group(f"snapshot_{idx:04d}")
                    snap_grp.attrs["time"] = snap["time"]
                    for key, val in snap.items():
                        if key != "time" and isinstance(val, np.ndarray):
                            snap_grp.create_dataset(key, data=val)
                fields_grp.attrs["num_snapshots"] = len(self._field_snapshots)
                logger.info(
                    "Wrote %d field snapshots", len(self._field_snapshots),
                )

            f.attrs["num_records"] = self._call_count
            for key, val in self.attrs.items():
                f.attrs[key] = val

        logger.info("Wrote %d diagnostic records to %s", self._call_count, self.filename)
