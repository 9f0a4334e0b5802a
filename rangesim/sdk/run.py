from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from ..config import ScenarioConfig, load_config
from ..core.intersector import NO_HIT
from ..core.pointcloud import StructuredPointCloud
from ..core.utils import get_logger
from ..motion.pose import Pose
from ..runtime.builders import build_caster, build_scene, build_trajectory

_log = get_logger()


@dataclass(frozen=True)
class ScanFrame:
    """Ranges (and optionally the point cloud) for one sensor pose."""

    time_s: float
    pose: Pose
    ranges: np.ndarray
    cloud: Optional[StructuredPointCloud] = None

    @property
    def hits(self) -> int:
        return int(np.count_nonzero(self.ranges < NO_HIT))

    def range_extent(self) -> Optional[tuple[float, float]]:
        valid = self.ranges[self.ranges < NO_HIT]
        if valid.size == 0:
            return None
        return float(valid.min()), float(valid.max())


@dataclass(frozen=True)
class ScanRunResult:
    """Summary of a scan run driven by a configuration file."""

    frames: List[ScanFrame]
    stats: Dict[str, int]
    config: ScenarioConfig


def scan_from_config(
    config: Union[str, Path, ScenarioConfig],
    *,
    num_frames: Optional[int] = None,
    with_cloud: Optional[bool] = None,
) -> ScanRunResult:
    """Run the ray caster along the configured trajectory.

    Parameters
    ----------
    config:
        Path to a YAML file or a pre-loaded :class:`~rangesim.config.schema.ScenarioConfig`.
    num_frames:
        Optional override for how many poses are sampled along the trajectory.
    with_cloud:
        Optional override for whether each frame also carries its
        sensor-frame point cloud.

    Returns
    -------
    ScanRunResult
        Per-frame ranges, basic statistics (frames, rays, hits) and the
        resolved configuration object used for the run.
    """

    cfg = load_config(config) if not isinstance(config, ScenarioConfig) else config.model_copy(deep=True)
    if num_frames is not None:
        if num_frames <= 0:
            raise ValueError("num_frames must be positive.")
        cfg.num_frames = int(num_frames)
    if with_cloud is not None:
        cfg.with_cloud = bool(with_cloud)

    caster = build_caster(cfg)
    scene = build_scene(cfg)
    trajectory = build_trajectory(cfg)

    frames: List[ScanFrame] = []
    total_hits = 0
    for time_s, pose in trajectory.frames(cfg.num_frames):
        cloud = StructuredPointCloud() if cfg.with_cloud else None
        ranges = caster.compute_ranges(scene, pose, cloud)
        frame = ScanFrame(time_s=time_s, pose=pose, ranges=ranges, cloud=cloud)
        total_hits += frame.hits
        frames.append(frame)

    stats = {
        "frames": len(frames),
        "rays": len(frames) * caster.height * caster.width,
        "hits": total_hits,
    }
    _log.info("Scan finished: %d frames, %d rays -> %d hits", stats["frames"], stats["rays"], stats["hits"])
    return ScanRunResult(frames=frames, stats=stats, config=cfg)
