from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, TYPE_CHECKING
import numpy as np
from .utils import as_vector3

if TYPE_CHECKING:  # pragma: no cover
    from ..motion.pose import Pose


@dataclass(frozen=True, eq=False)
class Plane:
    """Infinite oriented plane ``normal . x + offset = 0`` with a unit normal.

    A non-unit normal is normalised on construction and the offset scaled by
    the same factor, so the plane described stays the same.
    """
    normal: np.ndarray   # (3,) unit
    offset: float

    def __post_init__(self) -> None:
        n = as_vector3(self.normal, "normal")
        length = float(np.linalg.norm(n))
        if not np.isfinite(length) or length <= 0.0:
            raise ValueError("Plane normal must be a finite, non-zero vector.")
        n = n / length
        n.setflags(write=False)
        object.__setattr__(self, "normal", n)
        object.__setattr__(self, "offset", float(self.offset) / length)

    @staticmethod
    def from_point_normal(point: Sequence[float], normal: Sequence[float]) -> "Plane":
        n = as_vector3(normal, "normal")
        p = as_vector3(point, "point")
        return Plane(normal=n, offset=-float(np.dot(n, p)))

    @staticmethod
    def through(p0: Sequence[float], p1: Sequence[float], p2: Sequence[float]) -> "Plane":
        """Plane through three points; the normal follows (p1 - p0) x (p2 - p0)."""
        a, b, c = as_vector3(p0, "p0"), as_vector3(p1, "p1"), as_vector3(p2, "p2")
        n = np.cross(b - a, c - a)
        if np.linalg.norm(n) <= 1e-12:
            raise ValueError("Points are collinear; they do not define a plane.")
        return Plane.from_point_normal(a, n)

    def signed_distance(self, xyz: np.ndarray) -> np.ndarray | float:
        pts = np.asarray(xyz, dtype=np.float64)
        d = pts @ self.normal + self.offset
        return float(d) if np.ndim(d) == 0 else d

    def transformed(self, pose: "Pose") -> "Plane":
        """Return this plane moved by ``pose`` (local -> world)."""
        n = pose.R @ self.normal
        return Plane(normal=n, offset=self.offset - float(np.dot(n, pose.t)))


class PlaneScene:
    """Unordered collection of infinite planes.

    Planes carry no identity; duplicates and overlaps are allowed. The scene
    also exposes its planes as stacked arrays for vectorised intersection.
    """
    def __init__(self, planes: Iterable[Plane] = ()) -> None:
        self._planes: List[Plane] = []
        for plane in planes:
            self.add(plane)

    def add(self, plane: Plane) -> None:
        if not isinstance(plane, Plane):
            raise TypeError(f"Expected Plane, got {type(plane).__name__}.")
        self._planes.append(plane)

    def __len__(self) -> int:
        return len(self._planes)

    def __iter__(self) -> Iterator[Plane]:
        return iter(self._planes)

    def plane_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(normals (P, 3), offsets (P,))``."""
        return plane_arrays(self._planes)

    def transformed(self, pose: "Pose") -> "PlaneScene":
        return PlaneScene(p.transformed(pose) for p in self._planes)


def plane_arrays(planes: Iterable[Plane]) -> tuple[np.ndarray, np.ndarray]:
    planes = list(planes)
    if not planes:
        return np.zeros((0, 3), dtype=np.float64), np.zeros((0,), dtype=np.float64)
    normals = np.vstack([p.normal for p in planes]).astype(np.float64, copy=False)
    offsets = np.asarray([p.offset for p in planes], dtype=np.float64)
    return normals, offsets
