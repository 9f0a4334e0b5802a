from __future__ import annotations

from pathlib import Path

import yaml
from typer.testing import CliRunner

from rangesim.cli.main import app


def _write_room_config(path: Path, **overrides) -> None:
    config = {
        "grid": {
            "kind": "uniform",
            "lat_range_deg": [-30.0, 30.0],
            "lon_range_deg": [-180.0, 170.0],
            "n_lat": 3,
            "n_lon": 36,
        },
        "scene": {"preset": "room", "size_m": 6.0},
        "trajectory": {"kind": "static", "xyz": [0.0, 0.0, 0.0]},
    }
    config.update(overrides)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f)


def test_cli_scan_room(tmp_path: Path) -> None:
    cfg_path = tmp_path / "room.yaml"
    _write_room_config(cfg_path)

    runner = CliRunner()
    result = runner.invoke(app, ["scan", str(cfg_path)])

    assert result.exit_code == 0, result.stdout
    assert "frame 0" in result.stdout
    assert "hits 108/108" in result.stdout
    assert "Completed 108 hits from 108 rays" in result.stdout


def test_cli_scan_frames_override(tmp_path: Path) -> None:
    cfg_path = tmp_path / "corridor.yaml"
    _write_room_config(
        cfg_path,
        scene={"preset": "corridor", "size_m": 10.0},
        trajectory={"kind": "polyline", "waypoints": [[0.0, 0.0, 0.0], [4.0, 0.0, 0.0]], "speed_mps": 2.0},
    )

    runner = CliRunner()
    result = runner.invoke(app, ["scan", str(cfg_path), "--frames", "3"])

    assert result.exit_code == 0, result.stdout
    assert "frame 2" in result.stdout
    assert "pos=(4.000, 0.000, 0.000)" in result.stdout


def test_cli_scan_empty_scene_reports_no_returns(tmp_path: Path) -> None:
    cfg_path = tmp_path / "empty.yaml"
    _write_room_config(cfg_path, scene={"planes": []})

    runner = CliRunner()
    result = runner.invoke(app, ["scan", str(cfg_path)])

    assert result.exit_code == 0, result.stdout
    assert "no returns" in result.stdout


def test_cli_grid(tmp_path: Path) -> None:
    cfg_path = tmp_path / "planar.yaml"
    _write_room_config(cfg_path, grid={"kind": "planar", "fov_deg": 90.0, "n_beams": 3})

    runner = CliRunner()
    result = runner.invoke(app, ["grid", str(cfg_path)])

    assert result.exit_code == 0, result.stdout
    assert "grid 1 x 3" in result.stdout
    assert "longitude -45.000..45.000 deg" in result.stdout


def test_cli_rejects_invalid_config(tmp_path: Path) -> None:
    cfg_path = tmp_path / "bad.yaml"
    _write_room_config(cfg_path, grid={"kind": "explicit", "latitudes_deg": [120.0], "longitudes_deg": [0.0]})

    runner = CliRunner()
    result = runner.invoke(app, ["scan", str(cfg_path)])

    assert result.exit_code != 0
