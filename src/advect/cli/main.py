"""Command-line interface for the advection scheme laboratory.

Usage:
    advect run --spatial weno --temporal tvd_rk3 --steps 200
    advect run config.json --output run.h5
    advect run config.json --diagnostics
    advect verify config.json
    advect schemes
    advect presets
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import click
from pydantic import ValidationError

from advect.config import SpatialScheme, TemporalScheme


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """advect — 1D linear advection with interchangeable schemes."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_run_config(
    config_file: str | None,
    preset: str | None,
    overrides: dict[str, Any],
):
    from advect.config import Descriptor, RunConfig
    from advect.presets import get_preset

    config = RunConfig.from_file(config_file) if config_file else RunConfig()
    data = config.descriptor.model_dump()
    if preset:
        data = {**Descriptor().model_dump(), **get_preset(preset)}
    data.update({k: v for k, v in overrides.items() if v is not None})
    config.descriptor = Descriptor(**data)
    return config


@cli.command()
@click.argument("config_file", type=click.Path(exists=True), required=False)
@click.option("--preset", type=str, default=None, help="Named descriptor preset.")
@click.option(
    "--spatial",
    type=click.Choice([s.value for s in SpatialScheme], case_sensitive=False),
    default=None,
    help="Spatial scheme. Overrides config/preset.",
)
@click.option(
    "--temporal",
    type=click.Choice([t.value for t in TemporalScheme], case_sensitive=False),
    default=None,
    help="Temporal integrator (ignored by cip). Overrides config/preset.",
)
@click.option("--steps", type=int, default=None, help="Number of steps (default: from config).")
@click.option("--vel", type=float, default=None, help="Advection velocity.")
@click.option("--dt", "delta_t", type=float, default=None, help="Time step.")
@click.option("--dx", "delta_x", type=float, default=None, help="Grid spacing.")
@click.option("--output", "-o", type=str, default=None, help="Write HDF5 diagnostics to this file.")
@click.option(
    "--diagnostics", "write_diagnostics", is_flag=True,
    help="Write HDF5 diagnostics to the configured hdf5_filename.",
)
@click.option("--values", "show_values", is_flag=True, help="Print final (x, u) pairs.")
def run(
    config_file: str | None,
    preset: str | None,
    spatial: str | None,
    temporal: str | None,
    steps: int | None,
    vel: float | None,
    delta_t: float | None,
    delta_x: float | None,
    output: str | None,
    write_diagnostics: bool,
    show_values: bool,
) -> None:
    """Run a scenario for a fixed number of steps and print a summary."""
    from advect.diagnostics import HDF5Writer, summarize
    from advect.scenario import Scenario

    overrides = {
        "spatial_scheme": spatial.lower() if spatial else None,
        "temporal_scheme": temporal.lower() if temporal else None,
        "vel": vel,
        "delta_t": delta_t,
        "delta_x": delta_x,
    }
    try:
        config = _build_run_config(config_file, preset, overrides)
        if steps is not None:
            config.steps = steps
        if config.steps < 1:
            raise ValueError("steps must be at least 1")
    except (ValidationError, KeyError, ValueError) as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    if output is None and write_diagnostics:
        output = config.diagnostics.hdf5_filename

    desc = config.descriptor
    scenario = Scenario(desc)
    click.echo(
        f"Scheme: {desc.spatial_scheme.value}"
        + ("" if desc.is_cip else f" + {desc.temporal_scheme.value}")
        + f", n={desc.num_nodes}, CFL={desc.cfl:.3f}"
    )

    writer = None
    if output:
        writer = HDF5Writer(
            filename=output,
            dx=desc.delta_x,
            field_output_interval=config.diagnostics.field_output_interval,
            attrs={"descriptor_json": desc.model_dump_json()},
        )
        writer.record(scenario.state(), scenario.time)

    initial = summarize(scenario.u, desc.delta_x)
    for _ in range(config.steps):
        scenario.forward()
        if writer is not None and scenario.step_count % config.diagnostics.output_interval == 0:
            writer.record(scenario.state(), scenario.time)
    final = summarize(scenario.u, desc.delta_x)

    if writer is not None:
        writer.finalize()
        click.echo(f"Diagnostics written to {output}")

    click.echo("\n--- Run Summary ---")
    click.echo(f"  steps: {scenario.step_count}")
    click.echo(f"  time: {scenario.time:.6e}")
    for key in final:
        click.echo(f"  {key}: {initial[key]:.6e} -> {final[key]:.6e}")

    if show_values:
        for x, val in scenario.values():
            click.echo(f"{x:.6f} {val:.10e}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def verify(config_file: str) -> None:
    """Verify a run configuration file is valid."""
    from advect.config import RunConfig

    try:
        config = RunConfig.from_file(config_file)
    except (ValidationError, ValueError) as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    desc = config.descriptor
    click.echo("Configuration is valid:")
    click.echo(f"  Nodes: {desc.num_nodes} (dx={desc.delta_x:.3e}, bound={desc.bound})")
    click.echo(f"  Pulse: [{desc.x_1}, {desc.x_2})")
    click.echo(f"  dt: {desc.delta_t:.3e}, vel: {desc.vel}, CFL: {desc.cfl:.3f}")
    click.echo(f"  Schemes: {desc.spatial_scheme.value} + {desc.temporal_scheme.value}")
    click.echo(f"  Steps: {config.steps}")


@cli.command()
def schemes() -> None:
    """List spatial schemes and temporal integrators."""
    click.echo("Spatial schemes:")
    for s in SpatialScheme:
        note = "  (self-integrating, temporal scheme ignored)" if s is SpatialScheme.cip else ""
        click.echo(f"  {s.value}{note}")
    click.echo("Temporal integrators:")
    for t in TemporalScheme:
        click.echo(f"  {t.value}")


@cli.command()
def presets() -> None:
    """List named descriptor presets."""
    from advect.presets import list_presets

    for p in list_presets():
        click.echo(f"  {p['name']:<18} {p['description']}")


if __name__ == "__main__":
    cli()
