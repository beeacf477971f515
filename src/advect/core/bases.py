"""Core shared data structures and interface contracts.

- ``StepResult``       — summary of one scenario step
- ``DiagnosticsBase``  — ABC for diagnostics recorders
- ``SchemeMismatchError`` — buffer variant does not match the scheme
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class SchemeMismatchError(RuntimeError):
    """Raised when a scenario's buffer variant does not match its scheme.

    The buffer variant is fixed at construction, so this signals a broken
    invariant and is never recovered from.
    """


@dataclass
class StepResult:
    """Result of a single scenario step.

    Attributes:
        time: Simulated time after this step.
        step: Step number after this step.
        dt: Time step used.
        mass: Discrete sum of u times dx.
        total_variation: Sum of |u[i+1] - u[i]|.
        u_min: Smallest field value.
        u_max: Largest field value.
        overshoot: Largest excursion outside the initial range [0, 1].
        finished: True when the driver's step limit has been reached.
    """

    time: float = 0.0
    step: int = 0
    dt: float = 0.0
    mass: float = 0.0
    total_variation: float = 0.0
    u_min: float = 0.0
    u_max: float = 0.0
    overshoot: float = 0.0
    finished: bool = False


class DiagnosticsBase(ABC):
    """Abstract base for diagnostics recorders."""

    @abstractmethod
    def record(
        self,
        state: dict[str, Any],
        time: float,
    ) -> None:
        """Record diagnostic quantities at the current step.

        Args:
            state: Scenario state dictionary (``u`` and optionally ``g``).
            time: Current simulated time.
        """

    def finalize(self) -> None:
        """Clean up resources (close files, flush buffers)."""
