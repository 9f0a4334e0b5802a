from __future__ import annotations

import numpy as np

from ..config import ScenarioConfig
from ..core.scene import Plane, PlaneScene
from ..core.utils import get_logger
from ..examples.synthetic import generate_scene
from ..motion.pose import Pose
from ..motion.trajectory import PolylineTrajectory, StaticTrajectory, Trajectory
from ..sensors.lidar import RayCaster
from ..sensors.patterns import AngleGrid, planar_grid, spinning_grid, uniform_grid

_log = get_logger()


def build_grid(cfg: ScenarioConfig) -> AngleGrid:
    grid_cfg = cfg.grid
    if grid_cfg.kind == "explicit":
        return (
            np.deg2rad(np.asarray(grid_cfg.latitudes_deg, dtype=np.float64)),
            np.deg2rad(np.asarray(grid_cfg.longitudes_deg, dtype=np.float64)),
        )
    if grid_cfg.kind == "uniform":
        return uniform_grid(
            lat_range_deg=grid_cfg.lat_range_deg,
            lon_range_deg=grid_cfg.lon_range_deg,
            n_lat=grid_cfg.n_lat,
            n_lon=grid_cfg.n_lon,
        )
    if grid_cfg.kind == "spinning":
        return spinning_grid(
            vertical_angles_deg=grid_cfg.vertical_angles_deg,
            azimuth_step_deg=grid_cfg.azimuth_step_deg,
        )
    if grid_cfg.kind == "planar":
        return planar_grid(fov_deg=grid_cfg.fov_deg, n_beams=grid_cfg.n_beams)
    raise ValueError(f"Unsupported grid kind: {grid_cfg.kind}")


def build_caster(cfg: ScenarioConfig) -> RayCaster:
    latitudes, longitudes = build_grid(cfg)
    return RayCaster(latitudes, longitudes)


def build_scene(cfg: ScenarioConfig) -> PlaneScene:
    scene_cfg = cfg.scene
    scene = PlaneScene()
    if scene_cfg.preset is not None:
        scene = generate_scene(scene_cfg.preset, size=scene_cfg.size_m)
    for plane_cfg in scene_cfg.planes:
        if plane_cfg.point is not None:
            scene.add(Plane.from_point_normal(plane_cfg.point, plane_cfg.normal))
        else:
            scene.add(Plane(normal=np.asarray(plane_cfg.normal, dtype=np.float64), offset=plane_cfg.offset))
    if len(scene) == 0:
        _log.warning("Scene has no planes; every beam will report no return.")
    return scene


def build_trajectory(cfg: ScenarioConfig) -> Trajectory:
    traj_cfg = cfg.trajectory
    if traj_cfg.kind == "static":
        pose = Pose.from_xyz_rpy(traj_cfg.xyz, traj_cfg.rpy_deg)
        return StaticTrajectory(pose, start_time_s=traj_cfg.start_time_s)
    if traj_cfg.kind == "polyline":
        return PolylineTrajectory(
            traj_cfg.waypoints,
            speed_mps=traj_cfg.speed_mps,
            start_time_s=traj_cfg.start_time_s,
        )
    raise ValueError(f"Unsupported trajectory kind: {traj_cfg.kind}")
