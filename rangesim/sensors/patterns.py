from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

AngleGrid = Tuple[np.ndarray, np.ndarray]


def _check_count(n: int, name: str) -> int:
    if int(n) <= 0:
        raise ValueError(f"{name} must be positive.")
    return int(n)


def uniform_grid(
    lat_range_deg: tuple[float, float],
    lon_range_deg: tuple[float, float],
    n_lat: int,
    n_lon: int,
) -> AngleGrid:
    """Evenly spaced latitudes and longitudes (both ends inclusive), in radians."""
    n_lat = _check_count(n_lat, "n_lat")
    n_lon = _check_count(n_lon, "n_lon")
    lat_min, lat_max = map(float, lat_range_deg)
    lon_min, lon_max = map(float, lon_range_deg)
    if lat_max < lat_min or lon_max < lon_min:
        raise ValueError("Angle ranges must be given as (min, max).")
    latitudes = np.deg2rad(np.linspace(lat_min, lat_max, n_lat, dtype=np.float64))
    longitudes = np.deg2rad(np.linspace(lon_min, lon_max, n_lon, dtype=np.float64))
    return latitudes, longitudes


def planar_grid(fov_deg: float, n_beams: int) -> AngleGrid:
    """Single scan line at latitude 0 spanning ``fov_deg`` centred on +X."""
    if fov_deg <= 0.0 or fov_deg > 360.0:
        raise ValueError("fov_deg must be in (0, 360].")
    n_beams = _check_count(n_beams, "n_beams")
    half = 0.5 * float(fov_deg)
    if np.isclose(fov_deg, 360.0):
        # Full turn: drop the duplicated +180 beam.
        longitudes = np.linspace(-half, half, n_beams, endpoint=False, dtype=np.float64)
    else:
        longitudes = np.linspace(-half, half, n_beams, dtype=np.float64)
    return np.zeros(1, dtype=np.float64), np.deg2rad(longitudes)


def spinning_grid(vertical_angles_deg: Sequence[float], azimuth_step_deg: float) -> AngleGrid:
    """360 degree spinning LIDAR with discrete vertical channels.

    Azimuths start at -180 and advance by ``azimuth_step_deg`` up to (but not
    including) +180.
    """
    if len(vertical_angles_deg) == 0:
        raise ValueError("Provide at least one vertical angle.")
    if azimuth_step_deg <= 0.0:
        raise ValueError("azimuth_step_deg must be positive.")
    channels = np.asarray(vertical_angles_deg, dtype=np.float64)
    if np.any(np.abs(channels) > 90.0):
        raise ValueError("vertical angles must lie within [-90, 90] degrees.")
    n_az = max(1, int(round(360.0 / float(azimuth_step_deg))))
    azimuths = -180.0 + np.arange(n_az, dtype=np.float64) * (360.0 / n_az)
    return np.deg2rad(channels), np.deg2rad(azimuths)
