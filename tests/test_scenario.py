"""Tests for Scenario stepping, buffers and read-only views."""

from __future__ import annotations

import numpy as np
import pytest

from advect.config import Descriptor, SpatialScheme, TemporalScheme
from advect.core.bases import SchemeMismatchError, StepResult
from advect.grid import CIPBuffer, FieldBuffer
from advect.scenario import Scenario


class TestConstruction:
    def test_initial_state(self):
        scenario = Scenario(Descriptor())
        assert scenario.time == 0.0
        assert scenario.step_count == 0
        u = scenario.u
        assert u.shape == (200,)
        assert u.sum() == 40.0
        assert isinstance(scenario.buffer, FieldBuffer)
        assert scenario.g is None

    def test_descriptor_is_snapshotted(self):
        desc = Descriptor()
        scenario = Scenario(desc)
        desc.vel = -5.0
        desc.spatial_scheme = SpatialScheme.central
        assert scenario.desc.vel == 1.0
        assert scenario.desc.spatial_scheme is SpatialScheme.weno

    def test_cip_allocates_slope(self):
        scenario = Scenario(Descriptor(spatial_scheme="cip"))
        assert isinstance(scenario.buffer, CIPBuffer)
        np.testing.assert_array_equal(scenario.g, 0.0)
        assert set(scenario.state()) == {"u", "g"}

    def test_views_are_copies(self):
        scenario = Scenario(Descriptor(spatial_scheme="cip"))
        scenario.u[:] = 7.0
        scenario.g[:] = 7.0
        assert scenario.u.max() == 1.0
        assert scenario.g.max() == 0.0


class TestStepping:
    def test_forward_advances_clock(self, desc_factory):
        scenario = Scenario(desc_factory())
        for _ in range(3):
            assert scenario.forward() is None
        assert scenario.step_count == 3
        assert scenario.time == pytest.approx(0.06)

    def test_zero_velocity_is_stationary(self, still_desc):
        scenario = Scenario(still_desc)
        before = scenario.u
        for _ in range(5):
            scenario.forward()
        np.testing.assert_array_equal(scenario.u, before)

    def test_zero_time_step_freezes_field(self, desc_factory):
        scenario = Scenario(desc_factory(delta_t=0.0, temporal_scheme="rk4"))
        before = scenario.u
        scenario.forward()
        np.testing.assert_array_equal(scenario.u, before)
        assert scenario.time == 0.0
        assert scenario.step_count == 1

    def test_upwind_cfl_one_translates_pulse(self, desc_factory):
        scenario = Scenario(desc_factory(delta_t=0.05, spatial_scheme="upwind"))
        expected = np.zeros(200)
        expected[50:90] = 1.0
        for _ in range(10):
            scenario.forward()
        np.testing.assert_allclose(scenario.u, expected, atol=1e-12)

    def test_cip_cfl_one_translates_pulse(self, desc_factory):
        scenario = Scenario(desc_factory(delta_t=0.05, spatial_scheme="cip"))
        expected = np.zeros(200)
        expected[45:85] = 1.0
        for _ in range(5):
            scenario.forward()
        np.testing.assert_allclose(scenario.u, expected, atol=1e-12)
        np.testing.assert_allclose(scenario.g, 0.0, atol=1e-9)

    def test_cip_zero_time_step_freezes_value_and_slope(self, desc_factory):
        scenario = Scenario(desc_factory(delta_t=0.0, spatial_scheme="cip"))
        before = scenario.u
        for _ in range(3):
            scenario.forward()
        np.testing.assert_array_equal(scenario.u, before)
        np.testing.assert_array_equal(scenario.g, 0.0)

    def test_cip_slope_becomes_nonzero(self, desc_factory):
        scenario = Scenario(desc_factory(spatial_scheme="cip"))
        scenario.forward()
        assert np.any(scenario.g != 0.0)

    def test_negative_velocity_moves_left(self, desc_factory):
        scenario = Scenario(desc_factory(vel=-1.0, spatial_scheme="upwind"))
        for _ in range(20):
            scenario.forward()
        u = scenario.u
        centroid = np.sum(np.arange(200) * u) / np.sum(u)
        assert centroid < 59.5

    @pytest.mark.parametrize("spatial", [s for s in SpatialScheme if s is not SpatialScheme.cip])
    @pytest.mark.parametrize("temporal", list(TemporalScheme))
    def test_every_pairing_runs(self, spatial, temporal, desc_factory):
        scenario = Scenario(desc_factory(spatial_scheme=spatial, temporal_scheme=temporal))
        for _ in range(5):
            scenario.forward()
        u = scenario.u
        assert np.all(np.isfinite(u))
        np.testing.assert_array_equal(u[:1], 0.0)
        np.testing.assert_array_equal(u[-1:], 0.0)

    def test_step_returns_summary(self):
        scenario = Scenario(Descriptor(spatial_scheme="upwind"))
        result = scenario.step()
        assert isinstance(result, StepResult)
        assert result.step == 1
        assert result.time == pytest.approx(0.01666)
        assert result.dt == 0.01666
        assert result.mass == pytest.approx(2.0)
        assert result.u_max <= 1.0
        assert result.finished is False

    def test_step_reports_dispersive_overshoot(self, desc_factory):
        scenario = Scenario(desc_factory(spatial_scheme="lax_wendroff"))
        result = scenario.step()
        assert result.overshoot > 0.0
        assert result.overshoot == pytest.approx(max(result.u_max - 1.0, -result.u_min))

    def test_empty_grid(self):
        scenario = Scenario(Descriptor(bound=0.0, x_1=0.0, x_2=1.0))
        result = scenario.step()
        assert scenario.values() == []
        assert result.mass == 0.0

    def test_buffer_mismatch_raises(self):
        scenario = Scenario(Descriptor(spatial_scheme="cip"))
        scenario._buffer = FieldBuffer(u=scenario.u)
        with pytest.raises(SchemeMismatchError, match="CIP buffer"):
            scenario.forward()


class TestViews:
    def test_values_pairs(self, still_desc):
        pairs = Scenario(still_desc).values()
        assert len(pairs) == 10
        assert pairs[0] == (0.0, 0.0)
        x, u = pairs[3]
        assert x == pytest.approx(0.3)
        assert u == 1.0
        assert all(isinstance(v, float) for _, v in pairs)

    def test_values_follow_descriptor_positions(self, still_desc):
        xs = [x for x, _ in Scenario(still_desc).values()]
        np.testing.assert_array_equal(xs, still_desc.positions())

    def test_state_for_field_buffer(self, still_desc):
        state = Scenario(still_desc).state()
        assert set(state) == {"u"}
