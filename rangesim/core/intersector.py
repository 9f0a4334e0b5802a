from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Union
import numpy as np
from .scene import Plane, PlaneScene, plane_arrays
from .utils import get_logger, ensure_unit_vectors

_log = get_logger()

# Range reported for rays that strike no plane ahead of the sensor.
NO_HIT: float = 1e99

SceneLike = Union[PlaneScene, Iterable[Plane]]


def hit_mask(ranges: np.ndarray) -> np.ndarray:
    """Boolean mask of cells holding a real return (anything below ``NO_HIT``)."""
    return np.asarray(ranges) < NO_HIT


@dataclass
class RayBundle:
    origins: np.ndarray          # (M, 3)
    directions: np.ndarray       # (M, 3) unit

    def __post_init__(self) -> None:
        self.origins = np.asarray(self.origins, dtype=np.float64)
        self.directions = np.asarray(self.directions, dtype=np.float64)
        if self.origins.shape != self.directions.shape or self.origins.ndim != 2 or self.origins.shape[1] != 3:
            raise ValueError(
                f"origins {self.origins.shape} and directions {self.directions.shape} must both be (M, 3)."
            )
        self.directions = ensure_unit_vectors(self.directions)

    def __len__(self) -> int:
        return self.origins.shape[0]


@dataclass
class RayHits:
    distances: np.ndarray              # (M,) nearest accepted parameter or NO_HIT
    plane_index: np.ndarray            # (M,) index of the struck plane, -1 if none

    @property
    def hit(self) -> np.ndarray:
        return self.plane_index >= 0

    @staticmethod
    def empty(n_rays: int) -> "RayHits":
        return RayHits(
            distances=np.full((n_rays,), NO_HIT, dtype=np.float64),
            plane_index=np.full((n_rays,), -1, dtype=np.int64),
        )


def intersection_parameters(
    origins: np.ndarray,
    directions: np.ndarray,
    normals: np.ndarray,
    offsets: np.ndarray,
) -> np.ndarray:
    """Signed ray parameter at which each ray meets each infinite plane.

    Returns an ``(M, P)`` array ``t`` with ``origin + t * direction`` on the
    plane. Rays parallel to a plane give a non-finite entry (``+-inf`` or
    ``nan``); callers must filter those out.
    """
    numer = -(offsets[None, :] + origins @ normals.T)
    denom = directions @ normals.T
    with np.errstate(divide="ignore", invalid="ignore"):
        return numer / denom


class PlaneIntersector:
    """Brute-force NumPy intersector over a set of infinite planes.

    Every ray is tested against every plane; a candidate is accepted only if
    its parameter is finite and strictly positive, and the smallest accepted
    candidate wins.
    """

    def intersect(self, scene: SceneLike, bundle: RayBundle) -> RayHits:
        if isinstance(scene, PlaneScene):
            normals, offsets = scene.plane_arrays()
        else:
            normals, offsets = plane_arrays(scene)

        n_rays = len(bundle)
        if normals.shape[0] == 0 or n_rays == 0:
            return RayHits.empty(n_rays)

        t = intersection_parameters(bundle.origins, bundle.directions, normals, offsets)
        with np.errstate(invalid="ignore"):
            accepted = np.isfinite(t) & (t > 0.0) & (t < NO_HIT)
        candidates = np.where(accepted, t, NO_HIT)

        plane_index = np.argmin(candidates, axis=1)
        distances = candidates[np.arange(n_rays), plane_index]
        plane_index = np.where(distances < NO_HIT, plane_index, -1).astype(np.int64, copy=False)
        _log.debug("PlaneIntersector: %d rays x %d planes -> %d hits",
                   n_rays, normals.shape[0], int(np.count_nonzero(plane_index >= 0)))
        return RayHits(distances=distances, plane_index=plane_index)
