from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import typer
from pydantic import ValidationError

from ..config import ScenarioConfig, load_config
from ..runtime.builders import build_grid
from ..sdk.run import scan_from_config

app = typer.Typer(help="Planar-scene LIDAR range simulator")


def _configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric, format="[%(levelname)s] %(message)s")
    logging.getLogger("rangesim").setLevel(numeric)


def _load(config: Path) -> ScenarioConfig:
    try:
        return load_config(config)
    except (ValidationError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="CONFIG") from exc


@app.command("scan")
def scan(
    config: Path = typer.Argument(..., exists=True, readable=True, help="Path to YAML configuration file."),
    frames: Optional[int] = typer.Option(None, "--frames", "-n", help="Override number of frames sampled along the trajectory."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (e.g. INFO, DEBUG)."),
) -> None:
    """Cast every beam for each configured pose and print a per-frame summary."""

    _configure_logging(log_level)
    if frames is not None and frames <= 0:
        raise typer.BadParameter("frames must be positive.", param_hint="--frames")
    cfg = _load(config)
    try:
        result = scan_from_config(cfg, num_frames=frames)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="CONFIG") from exc

    for idx, frame in enumerate(result.frames):
        x, y, z = frame.pose.t
        extent = frame.range_extent()
        if extent is None:
            span = "no returns"
        else:
            span = f"range {extent[0]:.3f}..{extent[1]:.3f} m"
        typer.echo(
            f"frame {idx} t={frame.time_s:.3f}s pos=({x:.3f}, {y:.3f}, {z:.3f}) "
            f"hits {frame.hits}/{frame.ranges.size} {span}"
        )
    typer.echo(f"Completed {result.stats['hits']} hits from {result.stats['rays']} rays")


@app.command("grid")
def grid(
    config: Path = typer.Argument(..., exists=True, readable=True, help="Path to YAML configuration file."),
) -> None:
    """Print the beam grid shape and angular extents."""

    cfg = _load(config)
    try:
        latitudes, longitudes = build_grid(cfg)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="CONFIG") from exc
    lat_deg = np.rad2deg(latitudes)
    lon_deg = np.rad2deg(longitudes)
    typer.echo(f"grid {len(latitudes)} x {len(longitudes)}")
    typer.echo(f"latitude  {lat_deg.min():.3f}..{lat_deg.max():.3f} deg")
    typer.echo(f"longitude {lon_deg.min():.3f}..{lon_deg.max():.3f} deg")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
