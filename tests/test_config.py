"""Tests for Descriptor validation, RunConfig I/O and presets."""

from __future__ import annotations

import json

import numpy as np
import pytest
from pydantic import ValidationError

from advect.config import (
    Descriptor,
    RunConfig,
    SpatialScheme,
    TemporalScheme,
    round_half_away,
)
from advect.presets import (
    descriptor_from_preset,
    get_preset,
    get_preset_names,
    list_presets,
)


class TestDescriptor:
    def test_defaults(self):
        desc = Descriptor()
        assert desc.time_scale == 1.0
        assert desc.delta_t == 0.01666
        assert desc.delta_x == 0.05
        assert desc.bound == 10.0
        assert (desc.x_1, desc.x_2) == (2.0, 4.0)
        assert desc.vel == 1.0
        assert desc.spatial_scheme is SpatialScheme.weno
        assert desc.temporal_scheme is TemporalScheme.forward_euler

    def test_derived_quantities(self):
        desc = Descriptor()
        assert desc.num_nodes == 200
        assert desc.cfl == pytest.approx(0.3332)
        assert not desc.is_cip
        assert Descriptor(spatial_scheme="cip").is_cip

    def test_positions(self, still_desc):
        np.testing.assert_allclose(still_desc.positions(), np.arange(10) * 0.1)

    def test_schemes_from_strings(self):
        desc = Descriptor(spatial_scheme="lax_wendroff", temporal_scheme="tvd_rk4")
        assert desc.spatial_scheme is SpatialScheme.lax_wendroff
        assert desc.temporal_scheme is TemporalScheme.tvd_rk4

    @pytest.mark.parametrize(
        "field, value",
        [
            ("time_scale", 0.0),
            ("delta_t", -0.01),
            ("delta_x", 0.0),
            ("bound", -1.0),
            ("x_1", -0.5),
            ("spatial_scheme", "spectral"),
            ("temporal_scheme", "rk5"),
        ],
    )
    def test_rejects_invalid(self, field, value):
        with pytest.raises(ValidationError):
            Descriptor(**{field: value})

    def test_pulse_must_be_ordered(self):
        with pytest.raises(ValidationError, match="x_1 must be less than x_2"):
            Descriptor(x_1=4.0, x_2=2.0)
        with pytest.raises(ValidationError):
            Descriptor(x_1=3.0, x_2=3.0)

    def test_zero_time_step_allowed(self):
        assert Descriptor(delta_t=0.0).cfl == 0.0

    def test_negative_velocity_allowed(self):
        assert Descriptor(vel=-2.0).cfl == pytest.approx(2.0 * 0.01666 / 0.05)


def test_round_half_away():
    assert round_half_away(2.5) == 3
    assert round_half_away(-2.5) == -3
    assert round_half_away(2.4999) == 2
    assert round_half_away(0.0) == 0


class TestRunConfig:
    def test_defaults(self):
        config = RunConfig()
        assert config.steps == 100
        assert config.diagnostics.output_interval == 1
        assert config.diagnostics.field_output_interval == 0

    def test_json_file_roundtrip(self, tmp_path, still_desc_dict):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"descriptor": still_desc_dict, "steps": 7}))
        config = RunConfig.from_file(path)
        assert config.steps == 7
        assert config.descriptor.num_nodes == 10
        assert config.descriptor.spatial_scheme is SpatialScheme.central

        out = tmp_path / "out.json"
        text = config.to_json(out)
        assert json.loads(out.read_text()) == json.loads(text)
        assert RunConfig.from_file(out) == config

    def test_rejects_zero_steps(self):
        with pytest.raises(ValidationError):
            RunConfig(steps=0)


class TestPresets:
    def test_list_presets(self):
        presets = list_presets()
        names = [p["name"] for p in presets]
        assert names == get_preset_names()
        assert "default" in names
        assert all(p["description"] for p in presets)

    @pytest.mark.parametrize("name", get_preset_names())
    def test_every_preset_builds(self, name):
        desc = descriptor_from_preset(name)
        assert desc.num_nodes == 200

    def test_get_preset_strips_meta(self):
        preset = get_preset("weno_tvd_rk3")
        assert "_meta" not in preset
        assert preset["temporal_scheme"] == "tvd_rk3"

    def test_get_preset_returns_copy(self):
        get_preset("upwind")["delta_t"] = 99.0
        assert get_preset("upwind")["delta_t"] == 0.025

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Unknown preset"):
            get_preset("nope")

    def test_overrides(self):
        desc = descriptor_from_preset("cip", vel=-1.0)
        assert desc.is_cip
        assert desc.vel == -1.0
