"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from advect.config import Descriptor


@pytest.fixture
def rng():
    """Seeded generator for reproducible random fields."""
    return np.random.default_rng(1234)


@pytest.fixture
def unit_desc():
    """dx = 1, dt = 1, v = 1: increments equal -du/dx directly."""
    return Descriptor(delta_x=1.0, delta_t=1.0, vel=1.0, bound=10.0, x_1=0.0, x_2=1.0)


@pytest.fixture
def still_desc_dict():
    """Ten-node grid with a pulse on nodes 2..4 and zero velocity."""
    return {
        "delta_x": 0.1,
        "bound": 1.0,
        "x_1": 0.2,
        "x_2": 0.5,
        "vel": 0.0,
        "delta_t": 0.01,
        "spatial_scheme": "central",
        "temporal_scheme": "forward_euler",
    }


@pytest.fixture
def still_desc(still_desc_dict):
    return Descriptor(**still_desc_dict)


def make_desc(**overrides) -> Descriptor:
    """Descriptor on a 200-node grid with a stable step unless overridden."""
    defaults = {"delta_t": 0.02, "delta_x": 0.05, "bound": 10.0, "x_1": 2.0, "x_2": 4.0}
    defaults.update(overrides)
    return Descriptor(**defaults)


@pytest.fixture
def desc_factory():
    return make_desc
