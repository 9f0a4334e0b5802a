from __future__ import annotations

from typing import List

import numpy as np

from ..core.scene import Plane, PlaneScene


def _floor(z: float = 0.0) -> Plane:
    return Plane.from_point_normal((0.0, 0.0, z), (0.0, 0.0, 1.0))


def _box_walls(half_extent: tuple[float, float, float]) -> List[Plane]:
    hx, hy, hz = half_extent
    # Normals point inward so a sensor at the centre sees positive offsets.
    return [
        Plane.from_point_normal((hx, 0.0, 0.0), (-1.0, 0.0, 0.0)),
        Plane.from_point_normal((-hx, 0.0, 0.0), (1.0, 0.0, 0.0)),
        Plane.from_point_normal((0.0, hy, 0.0), (0.0, -1.0, 0.0)),
        Plane.from_point_normal((0.0, -hy, 0.0), (0.0, 1.0, 0.0)),
        Plane.from_point_normal((0.0, 0.0, hz), (0.0, 0.0, -1.0)),
        Plane.from_point_normal((0.0, 0.0, -hz), (0.0, 0.0, 1.0)),
    ]


def _ramp(size: float, slope_deg: float) -> Plane:
    slope = np.deg2rad(slope_deg)
    normal = (-np.sin(slope), 0.0, np.cos(slope))
    return Plane.from_point_normal((size * 0.25, 0.0, 0.0), normal)


def generate_scene(preset: str, size: float = 10.0) -> PlaneScene:
    """Build one of the synthetic plane scenes around the origin.

    ``floor``: ground plane at ``z = -size / 4``.
    ``room``: closed box of side ``size`` centred on the origin.
    ``corridor``: floor, ceiling and two side walls running along +X.
    ``ramp``: floor plus a 20 degree slope rising along +X.
    """
    if size <= 0.0:
        raise ValueError("size must be positive.")
    preset = preset.lower()
    if preset == "floor":
        return PlaneScene([_floor(-size * 0.25)])

    if preset == "room":
        half = size / 2.0
        return PlaneScene(_box_walls((half, half, half)))

    if preset == "corridor":
        walls = _box_walls((size, size * 0.25, size * 0.15))
        # Drop the end walls; the corridor is open along X.
        return PlaneScene(walls[2:])

    if preset == "ramp":
        return PlaneScene([_floor(-size * 0.25), _ramp(size, 20.0)])

    raise ValueError(f"Unknown synthetic scene preset '{preset}'.")
