from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from .pose import Pose


class Trajectory:
    """Base interface for sensor motion."""

    def sample(self, t: float) -> Pose:
        raise NotImplementedError

    def timeline(self) -> Iterable[tuple[float, Pose]]:
        raise NotImplementedError

    def frames(self, count: int) -> List[tuple[float, Pose]]:
        """``count`` poses spread evenly over the timeline (inclusive)."""
        if count <= 0:
            raise ValueError("count must be positive.")
        times = [t for t, _ in self.timeline()]
        start, end = times[0], times[-1]
        if count == 1 or np.isclose(start, end):
            return [(float(start), self.sample(start))] * count
        return [(float(t), self.sample(float(t))) for t in np.linspace(start, end, count)]


@dataclass
class StaticTrajectory(Trajectory):
    """A trajectory with a single, fixed pose."""

    pose: Pose
    start_time_s: float = 0.0

    def sample(self, t: float) -> Pose:
        return self.pose

    def timeline(self) -> Iterable[tuple[float, Pose]]:
        yield (self.start_time_s, self.pose)


class PolylineTrajectory(Trajectory):
    """Piecewise-linear path through waypoints at constant speed.

    The sensor yaws to face along each segment; roll and pitch stay zero.
    """

    def __init__(
        self,
        waypoints: Sequence[Sequence[float]],
        speed_mps: float,
        start_time_s: float = 0.0,
    ) -> None:
        if len(waypoints) < 2:
            raise ValueError("PolylineTrajectory requires at least two waypoints.")
        if speed_mps <= 0.0:
            raise ValueError("speed_mps must be positive.")

        self._points = np.asarray(waypoints, dtype=np.float64)
        if self._points.ndim != 2 or self._points.shape[1] != 3:
            raise ValueError("Waypoints must be (x, y, z) triples.")
        self._start_time = float(start_time_s)

        self._segments = np.diff(self._points, axis=0)
        lengths = np.linalg.norm(self._segments, axis=1)
        if np.any(lengths == 0):
            raise ValueError("Consecutive waypoints must be distinct.")
        self._times = self._start_time + np.concatenate([[0.0], np.cumsum(lengths / float(speed_mps))])

    @staticmethod
    def _facing(position: np.ndarray, segment: np.ndarray) -> Pose:
        yaw = np.degrees(np.arctan2(segment[1], segment[0]))
        return Pose.from_xyz_rpy(tuple(position), (0.0, 0.0, yaw))

    @property
    def duration_s(self) -> float:
        return float(self._times[-1] - self._times[0])

    def sample(self, t: float) -> Pose:
        if t <= self._times[0]:
            return self._facing(self._points[0], self._segments[0])
        if t >= self._times[-1]:
            return self._facing(self._points[-1], self._segments[-1])

        idx = int(np.searchsorted(self._times, t, side="right")) - 1
        t0, t1 = self._times[idx], self._times[idx + 1]
        alpha = (t - t0) / max(t1 - t0, 1e-9)
        pos = (1.0 - alpha) * self._points[idx] + alpha * self._points[idx + 1]
        return self._facing(pos, self._segments[idx])

    def timeline(self) -> Iterable[tuple[float, Pose]]:
        for t in self._times:
            yield (float(t), self.sample(float(t)))
