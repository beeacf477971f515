"""Scenario — a steppable pairing of descriptor, buffer and schemes.

A scenario clones the descriptor it is built from, allocates the buffer
variant its spatial scheme needs, and resolves its advance strategy once:

- composed: any finite-difference operator driven by any RK integrator
  on a ``FieldBuffer``;
- CIP: the self-integrating two-field update on a ``CIPBuffer``.

``forward()`` computes a full next state and swaps it in, so no node ever
reads a value already updated in the same step.
"""

from __future__ import annotations

import logging

import numpy as np

from advect.config import Descriptor
from advect.core.bases import SchemeMismatchError, StepResult
from advect.diagnostics.derived import summarize
from advect.grid import Buffer, CIPBuffer, FieldBuffer, make_buffer
from advect.schemes import cip_step, get_spatial_scheme, get_temporal_scheme

logger = logging.getLogger(__name__)


class Scenario:
    """One advection run on a fixed grid.

    The driver owns the scenario exclusively and must not call
    ``forward()`` concurrently; the scenario itself does no locking.

    Args:
        desc: Parameter snapshot; a deep copy is kept.
    """

    def __init__(self, desc: Descriptor) -> None:
        self.desc = desc.model_copy(deep=True)
        self.time = 0.0
        self.step_count = 0
        self._buffer: Buffer = make_buffer(self.desc)

        if self.desc.is_cip:
            self._diff = None
            self._integrator = None
            self._advance = self._forward_cip
            pairing = "cip"
        else:
            self._diff = get_spatial_scheme(self.desc.spatial_scheme)
            self._integrator = get_temporal_scheme(self.desc.temporal_scheme)
            self._advance = self._forward_composed
            pairing = f"{self.desc.spatial_scheme.value}+{self.desc.temporal_scheme.value}"

        logger.info(
            "Scenario initialized: n=%d, dx=%.3e, dt=%.3e, vel=%.3f, CFL=%.3f, schemes=%s",
            self.desc.num_nodes, self.desc.delta_x, self.desc.delta_t,
            self.desc.vel, self.desc.cfl, pairing,
        )

    # ── Stepping ─────────────────────────────────────────────────

    def forward(self) -> None:
        """Advance exactly one time step of size ``desc.delta_t``."""
        self._advance()
        self.time += self.desc.delta_t
        self.step_count += 1
        logger.debug("Step %d, t=%.4e", self.step_count, self.time)

    def step(self, finished: bool = False) -> StepResult:
        """``forward()`` and return a summary of the new state."""
        self.forward()
        return StepResult(
            time=self.time,
            step=self.step_count,
            dt=self.desc.delta_t,
            finished=finished,
            **summarize(self._buffer.u, self.desc.delta_x),
        )

    def _forward_composed(self) -> None:
        buf = self._buffer
        if not isinstance(buf, FieldBuffer):
            raise SchemeMismatchError(
                f"{self.desc.spatial_scheme.value} requires a field buffer, "
                f"got {type(buf).__name__}"
            )
        buf.u = self._integrator(buf.u, self._diff, self.desc)

    def _forward_cip(self) -> None:
        buf = self._buffer
        if not isinstance(buf, CIPBuffer):
            raise SchemeMismatchError(f"cip requires a CIP buffer, got {type(buf).__name__}")
        buf.u, buf.g = cip_step(buf.u, buf.g, self.desc)

    # ── Read-only views ──────────────────────────────────────────

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def u(self) -> np.ndarray:
        """Copy of the current field."""
        return self._buffer.u.copy()

    @property
    def g(self) -> np.ndarray | None:
        """Copy of the CIP slope field, or None for other schemes."""
        if isinstance(self._buffer, CIPBuffer):
            return self._buffer.g.copy()
        return None

    def values(self) -> list[tuple[float, float]]:
        """(position, value) pairs for plotting, position = i * delta_x."""
        return [
            (float(x), float(val))
            for x, val in zip(self.desc.positions(), self._buffer.u)
        ]

    def state(self) -> dict[str, np.ndarray]:
        """Field arrays keyed by name, for diagnostics recorders."""
        snap = {"u": self.u}
        g = self.g
        if g is not None:
            snap["g"] = g
        return snap
