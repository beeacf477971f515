"""1D linear advection with interchangeable spatial and temporal schemes.

Solves du/dt + v du/dx = 0 for a square pulse, pairing any of Central,
Upwind, Lax-Wendroff, ENO or WENO with any of seven Runge-Kutta
integrators, or running the self-integrating CIP scheme.

Example
-------
>>> from advect import Descriptor, Scenario
>>> scenario = Scenario(Descriptor(spatial_scheme="weno", temporal_scheme="tvd_rk3"))
>>> scenario.forward()
>>> x, u = scenario.values()[60]
"""

from advect.config import Descriptor, RunConfig, SpatialScheme, TemporalScheme
from advect.core.bases import SchemeMismatchError, StepResult
from advect.grid import CIPBuffer, FieldBuffer, discretize, init_square_wave
from advect.runner import RunnerStatus, ScenarioRunner
from advect.scenario import Scenario

__all__ = [
    "CIPBuffer",
    "Descriptor",
    "FieldBuffer",
    "RunConfig",
    "RunnerStatus",
    "Scenario",
    "ScenarioRunner",
    "SchemeMismatchError",
    "SpatialScheme",
    "StepResult",
    "TemporalScheme",
    "discretize",
    "init_square_wave",
]
