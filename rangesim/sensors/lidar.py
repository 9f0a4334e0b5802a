from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from ..core.intersector import NO_HIT, PlaneIntersector, RayBundle, SceneLike
from ..core.pointcloud import StructuredPointCloud
from ..core.utils import get_logger
from ..motion.pose import Pose

_log = get_logger()

# Slack allowed on the angle bounds to absorb floating-point rounding.
ANGLE_TOLERANCE = 1e-3

PoseLike = Union[Pose, np.ndarray]


def _angle_vector(values: Sequence[float], name: str, bound: float) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}.")
    if arr.size < 1:
        raise ValueError(f"{name} must contain at least one angle.")
    # NaN fails this comparison as well.
    if not np.all(np.abs(arr) <= bound + ANGLE_TOLERANCE):
        bad = arr[~(np.abs(arr) <= bound + ANGLE_TOLERANCE)]
        raise ValueError(f"{name} must lie within [-{bound:.6f}, {bound:.6f}] rad; offending values: {bad.tolist()}")
    arr.setflags(write=False)
    return arr


def _as_pose(pose: PoseLike) -> Pose:
    if isinstance(pose, Pose):
        return pose
    return Pose.from_matrix(np.asarray(pose))


@dataclass
class ScanResult:
    """Ranges plus the matching sensor-frame point cloud for one pose."""

    ranges: np.ndarray                 # (height, width)
    cloud: StructuredPointCloud

    @property
    def hit_mask(self) -> np.ndarray:
        return self.ranges < NO_HIT


class RayCaster:
    """Simulated 3D laser range finder over a fixed latitude/longitude grid.

    One beam is cast per (latitude, longitude) pair. Row ``i`` of the output
    corresponds to ``latitudes[i]`` and column ``j`` to ``longitudes[j]``.
    Latitudes must lie in [-pi/2, pi/2] and longitudes in [-pi, pi]; values
    outside those bounds are rejected, never clamped or wrapped.

    For a 2D scanner use a single latitude of 0.0 (see :meth:`planar`); for a
    regular range of angles use ``np.linspace``.
    """

    def __init__(self, latitudes: Sequence[float], longitudes: Sequence[float]) -> None:
        self._latitudes = _angle_vector(latitudes, "latitudes", np.pi / 2.0)
        self._longitudes = _angle_vector(longitudes, "longitudes", np.pi)

        sin_lat = np.sin(self._latitudes)[:, None]
        cos_lat = np.cos(self._latitudes)[:, None]
        cos_lon = np.cos(self._longitudes)[None, :]
        sin_lon = np.sin(self._longitudes)[None, :]
        dirs = np.stack(
            np.broadcast_arrays(cos_lat * cos_lon, cos_lat * sin_lon, sin_lat),
            axis=-1,
        )
        dirs = np.ascontiguousarray(dirs, dtype=np.float64)
        dirs.setflags(write=False)
        self._directions = dirs
        _log.debug("RayCaster: %d x %d beam grid", self.height, self.width)

    @classmethod
    def planar(cls, longitudes: Sequence[float]) -> "RayCaster":
        return cls([0.0], longitudes)

    @property
    def latitudes(self) -> np.ndarray:
        return self._latitudes

    @property
    def longitudes(self) -> np.ndarray:
        return self._longitudes

    @property
    def height(self) -> int:
        return int(self._latitudes.shape[0])

    @property
    def width(self) -> int:
        return int(self._longitudes.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def directions(self) -> np.ndarray:
        """Unit beam directions in the sensor frame, shape ``(height, width, 3)``."""
        return self._directions

    def compute_ranges_into(
        self,
        ranges: np.ndarray,
        scene: SceneLike,
        pose: PoseLike,
        cloud: Optional[StructuredPointCloud] = None,
    ) -> None:
        """Fill a caller-allocated ``(height, width)`` array with ranges.

        Each cell receives the distance to the nearest plane hit strictly
        ahead of the sensor, or ``NO_HIT``. When ``cloud`` is given it is
        resized to ``height x width`` and each point set to
        ``direction * range`` in the sensor frame.
        """
        if not isinstance(ranges, np.ndarray):
            raise TypeError("ranges must be a numpy array.")
        if ranges.shape != self.shape:
            raise ValueError(f"ranges buffer has shape {ranges.shape}, expected {self.shape}.")
        # Integer or narrow float buffers cannot hold NO_HIT.
        if not np.issubdtype(ranges.dtype, np.floating) or np.finfo(ranges.dtype).max < NO_HIT:
            raise ValueError(f"ranges buffer must be float64 or wider, got {ranges.dtype}.")
        pose = _as_pose(pose)

        dirs_sensor = self._directions.reshape(-1, 3)
        dirs_world = pose.rotate(dirs_sensor)
        origins = np.broadcast_to(pose.t, dirs_world.shape)
        bundle = RayBundle(origins=origins, directions=dirs_world)

        hits = PlaneIntersector().intersect(scene, bundle)
        dist = hits.distances.reshape(self.shape)

        ranges[...] = dist
        if cloud is not None:
            cloud.resize(self.height, self.width)
            cloud.xyz[...] = self._directions * dist[..., None]

    def compute_ranges(
        self,
        scene: SceneLike,
        pose: PoseLike,
        cloud: Optional[StructuredPointCloud] = None,
    ) -> np.ndarray:
        """Allocate a new ``(height, width)`` range grid and fill it."""
        ranges = np.empty(self.shape, dtype=np.float64)
        self.compute_ranges_into(ranges, scene, pose, cloud)
        return ranges

    def scan(self, scene: SceneLike, pose: PoseLike) -> ScanResult:
        cloud = StructuredPointCloud()
        ranges = self.compute_ranges(scene, pose, cloud)
        return ScanResult(ranges=ranges, cloud=cloud)
